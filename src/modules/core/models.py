"""Base abstract models shared by the catalog modules.

Provides:
- ``BaseModel``: UUIDv7 primary key + ``created_at`` / ``updated_at``.
- ``AuditModel``: adds ``created_by`` / ``updated_by``.
- ``SoftDeleteModel``: adds ``is_deleted`` + ``deleted_at``.

Design decisions:
- ``updated_at`` is NULL until the first domain mutation; every mutating
  domain method calls ``touch()`` instead of relying on ``auto_now``.
- Domain state transitions (``delete()`` / ``restore()``) only change the
  in-memory instance.  Persisting them is the repository's job.
- ``objects`` returns ALL records (unfiltered).  Repositories read through
  ``.alive()`` so the soft-delete predicate is explicit.
"""

from __future__ import annotations

from typing import Optional

import uuid6
from django.db import models
from django.utils import timezone

# ---------------------------------------------------------------------------
# BaseModel
# ---------------------------------------------------------------------------


class BaseModel(models.Model):
    """Abstract base with UUIDv7 PK and timestamp bookkeeping."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(null=True, blank=True, default=None)

    class Meta:
        abstract = True

    def touch(self) -> None:
        """Stamp ``updated_at`` with the current time."""
        self.updated_at = timezone.now()


class AuditModel(BaseModel):
    """Abstract base that also records who created / last changed a row."""

    created_by = models.CharField(max_length=150, null=True, blank=True)  # noqa: DJ01
    updated_by = models.CharField(max_length=150, null=True, blank=True)  # noqa: DJ01

    class Meta:
        abstract = True


# ---------------------------------------------------------------------------
# Soft Delete infrastructure
# ---------------------------------------------------------------------------


class SoftDeleteQuerySet(models.QuerySet):
    """QuerySet with soft-delete helpers."""

    def alive(self) -> SoftDeleteQuerySet:
        """Return only non-deleted records."""
        return self.filter(is_deleted=False)


class SoftDeleteManager(models.Manager):
    """Manager that exposes ``.alive()`` on the queryset."""

    def get_queryset(self) -> SoftDeleteQuerySet:
        return SoftDeleteQuerySet(self.model, using=self._db)

    def alive(self) -> SoftDeleteQuerySet:
        return self.get_queryset().alive()


class SoftDeleteModel(AuditModel):
    """Abstract audited model with a reversible soft delete."""

    is_deleted = models.BooleanField(default=False, db_index=True)
    deleted_at = models.DateTimeField(null=True, blank=True, default=None)

    objects = SoftDeleteManager()

    class Meta:
        abstract = True

    def delete(
        self, deleted_by: Optional[str] = None, using=None, keep_parents=False
    ) -> None:
        """Mark this instance as deleted.  Call the repository to persist."""
        now = timezone.now()
        self.is_deleted = True
        self.deleted_at = now
        self.updated_at = now
        self.updated_by = deleted_by

    def restore(self) -> None:
        """Clear the soft-delete marker.  Call the repository to persist."""
        self.is_deleted = False
        self.deleted_at = None
        self.touch()
