"""Calendar date helpers shared by the fee engine and the domain model."""

from datetime import date, datetime
from typing import Any

from transfer_scheduler.exceptions import ConstructionError


def to_date(value: Any) -> date:
    """Coerce a date, datetime or ISO-8601 string to a calendar date.

    Time of day is dropped, so ``2024-06-15T23:59`` and ``2024-06-15`` are the
    same day.

    Raises
    ------
    ConstructionError
        If the value is missing or cannot be read as a date.
    """
    if value is None or value == "":
        raise ConstructionError("Date is required")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError as exc:
            raise ConstructionError(f"Invalid date: {value!r}") from exc
    raise ConstructionError(f"Invalid date type: {type(value).__name__}")


def days_between(start: Any, end: Any) -> int:
    """Whole calendar days from start to end (negative when end is earlier)."""
    return (to_date(end) - to_date(start)).days
