"""Money value object."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from transfer_scheduler.exceptions import ConstructionError

CENT = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """Parse a number, numeric string or Decimal into a finite Decimal.

    Floats go through ``str()`` so that ``0.1`` becomes ``Decimal("0.1")``
    instead of its binary expansion.

    Raises
    ------
    ConstructionError
        If the value is None, a bool, non-numeric or not finite.
    """
    if value is None:
        raise ConstructionError("Monetary amount cannot be None")
    if isinstance(value, bool):
        raise ConstructionError("Monetary amount must be a number, got bool")

    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float)):
        number = Decimal(str(value))
    elif isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation as exc:
            raise ConstructionError(f"Monetary amount must be a valid number, got {value!r}") from exc
    else:
        raise ConstructionError(f"Monetary amount must be a number, got {type(value).__name__}")

    if not number.is_finite():
        raise ConstructionError(f"Monetary amount must be finite, got {value!r}")
    return number


def round_to_cents(value: Decimal) -> Decimal:
    """Round half away from zero to two decimal places.

    Raises
    ------
    ConstructionError
        If the amount has more digits in cents than the decimal context
        can hold (28 significant digits).
    """
    try:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ConstructionError(f"Monetary amount is too large to represent in cents: {value}") from exc


@dataclass(frozen=True)
class Money:
    """Positive monetary amount in BRL, rounded to cents.

    Construction validates and rounds the amount, so an instance can never be
    zero, negative, NaN or infinite. Equality compares the rounded amount.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        number = to_decimal(self.amount)
        rounded = round_to_cents(number)
        if rounded <= 0:
            raise ConstructionError(f"Monetary amount must be positive, got {self.amount!r}")
        object.__setattr__(self, "amount", rounded)

    @classmethod
    def of(cls, value: Any) -> "Money":
        """Create Money from an int, float, Decimal or numeric string."""
        if isinstance(value, Money):
            return value
        return cls(value)

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.amount + other.amount)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    def to_formatted_string(self) -> str:
        """Format as Brazilian currency, e.g. ``R$ 1.000,50``."""
        grouped = f"{self.amount:,.2f}"
        # swap US separators for pt-BR ones
        localized = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
        return f"R$ {localized}"
