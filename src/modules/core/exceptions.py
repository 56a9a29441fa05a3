"""DRF exception handler for the catalog API.

Maps the domain error taxonomy to HTTP status codes and renders every
error, domain or framework, with the same body::

    {"type": "client_error",
     "errors": [{"code": "...", "detail": "...", "attr": null}]}

Unhandled exceptions are logged and left to Django, which answers 500.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from shared.domain.exceptions import (
    AlreadyExists,
    DomainError,
    InsufficientStock,
    InvalidArgument,
    InvalidOperation,
    NotFound,
)

logger = structlog.get_logger(__name__)

DOMAIN_STATUS_CODES = (
    (InvalidArgument, status.HTTP_400_BAD_REQUEST),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (AlreadyExists, status.HTTP_409_CONFLICT),
    (InsufficientStock, status.HTTP_409_CONFLICT),
    (InvalidOperation, status.HTTP_409_CONFLICT),
)


def _status_for(exc: DomainError) -> int:
    for exc_class, status_code in DOMAIN_STATUS_CODES:
        if isinstance(exc, exc_class):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _body(errors: List[Dict[str, Any]], status_code: int) -> Dict[str, Any]:
    error_type = "client_error" if status_code < 500 else "server_error"
    return {"type": error_type, "errors": errors}


def _domain_response(exc: DomainError) -> Response:
    error: Dict[str, Any] = {"code": exc.code, "detail": str(exc), "attr": None}
    if isinstance(exc, InsufficientStock):
        error["requested"] = exc.requested
        error["available"] = exc.available
    status_code = _status_for(exc)
    logger.warning("api.domain_error", code=exc.code, detail=str(exc), status_code=status_code)
    return Response(_body([error], status_code), status=status_code)


def _pydantic_response(exc: PydanticValidationError) -> Response:
    errors = [
        {
            "code": err["type"],
            "detail": err["msg"],
            "attr": ".".join(str(part) for part in err["loc"]) or None,
        }
        for err in exc.errors()
    ]
    return Response(
        _body(errors, status.HTTP_400_BAD_REQUEST),
        status=status.HTTP_400_BAD_REQUEST,
    )


def _flatten_drf_errors(data: Any, attr: Optional[str] = None) -> List[Dict[str, Any]]:
    if isinstance(data, dict):
        if "detail" in data and attr is None:
            detail = data["detail"]
            return [
                {"code": getattr(detail, "code", "error"), "detail": str(detail), "attr": None}
            ]
        errors: List[Dict[str, Any]] = []
        for key, value in data.items():
            errors.extend(_flatten_drf_errors(value, key))
        return errors
    if isinstance(data, list):
        errors = []
        for item in data:
            errors.extend(_flatten_drf_errors(item, attr))
        return errors
    return [{"code": getattr(data, "code", "invalid"), "detail": str(data), "attr": attr}]


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    if isinstance(exc, DomainError):
        return _domain_response(exc)
    if isinstance(exc, PydanticValidationError):
        return _pydantic_response(exc)

    response = drf_exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.error(
            "api.unhandled_exception",
            view=type(view).__name__ if view else None,
            exc_info=exc,
        )
        return None

    response.data = _body(_flatten_drf_errors(response.data), response.status_code)
    return response
