"""Money value object.

Immutable amount + currency pair.  Amounts are ``Decimal`` rounded to two
places using round-half-away-from-zero (``ROUND_HALF_UP`` in the ``decimal``
module).  Arithmetic and ordering are only defined between instances that
share a currency.  Amounts stay below ``MAX_AMOUNT`` so they fit the
``decimal(18, 2)`` columns they are stored in.
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from shared.domain.exceptions import InvalidArgument, InvalidOperation

ALLOWED_CURRENCIES = frozenset({"USD", "EUR", "GBP", "ETB"})

_CENT = Decimal("0.01")

# Amounts must fit a decimal(18, 2) column.
MAX_AMOUNT = Decimal("1e16")

Number = Union[Decimal, int, str, float]


def to_decimal(value: Number) -> Decimal:
    """Coerce *value* to a finite ``Decimal`` going through ``str`` for floats."""
    if isinstance(value, bool):
        raise InvalidArgument(f"Invalid numeric value: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (decimal.InvalidOperation, ValueError, TypeError) as exc:
            raise InvalidArgument(f"Invalid numeric value: {value!r}") from exc
    if not result.is_finite():
        raise InvalidArgument(f"Invalid numeric value: {value!r}")
    return result


def round_money(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Money:
    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        amount = to_decimal(self.amount)
        if amount < 0:
            raise InvalidArgument("Amount cannot be negative.")
        if not isinstance(self.currency, str) or not self.currency.strip():
            raise InvalidArgument("Currency is required.")
        currency = self.currency.strip().upper()
        if currency not in ALLOWED_CURRENCIES:
            raise InvalidArgument(f"Invalid currency: {self.currency}")

        try:
            rounded = round_money(amount)
        except decimal.InvalidOperation as exc:
            raise InvalidArgument(f"Invalid amount: {self.amount!r}") from exc
        if rounded >= MAX_AMOUNT:
            raise InvalidArgument(f"Amount must be less than {MAX_AMOUNT:,.0f}.")
        object.__setattr__(self, "amount", rounded)
        object.__setattr__(self, "currency", currency)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def from_usd(cls, amount: Number) -> Money:
        return cls(amount, "USD")

    @classmethod
    def from_etb(cls, amount: Number) -> Money:
        return cls(amount, "ETB")

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, other: Money) -> Money:
        self._assert_same_currency(other, "add")
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: Money) -> Money:
        """Subtract *other*; a negative result fails with ``InvalidArgument``."""
        self._assert_same_currency(other, "subtract")
        return Money(self.amount - other.amount, self.currency)

    def multiply(self, factor: Number) -> Money:
        return Money(self.amount * to_decimal(factor), self.currency)

    def apply_percentage(self, percentage: Number) -> Money:
        """Return *percentage* percent of this amount (``multiply(pct / 100)``)."""
        return self.multiply(to_decimal(percentage) / 100)

    def __add__(self, other: Money) -> Money:
        return self.add(other)

    def __sub__(self, other: Money) -> Money:
        return self.subtract(other)

    # ------------------------------------------------------------------
    # Ordering (same currency only)
    # ------------------------------------------------------------------

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other, "compare")
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other, "compare")
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other, "compare")
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other, "compare")
        return self.amount >= other.amount

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:,.2f}"

    def _assert_same_currency(self, other: Money, verb: str) -> None:
        if not isinstance(other, Money):
            raise InvalidOperation(f"Cannot {verb} Money and {type(other).__name__}")
        if self.currency != other.currency:
            raise InvalidOperation(
                f"Cannot {verb} {self.currency} and {other.currency}"
            )
