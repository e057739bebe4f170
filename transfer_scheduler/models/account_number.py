"""Account number value object."""

import re
from dataclasses import dataclass
from typing import Any

from transfer_scheduler.exceptions import ConstructionError

# ASCII only; ``\d`` would also accept other Unicode digits
ACCOUNT_NUMBER_PATTERN = re.compile(r"[0-9]{10}")


def is_valid_account_number(value: Any) -> bool:
    """Return True if value is a string of exactly 10 ASCII digits."""
    return isinstance(value, str) and ACCOUNT_NUMBER_PATTERN.fullmatch(value) is not None


@dataclass(frozen=True)
class AccountNumber:
    """Ten-digit bank account number.

    The canonical value is kept as given; ``to_formatted_string`` only
    produces a display form (``DDDD-DDD-DDD``).
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or not isinstance(self.value, str):
            raise ConstructionError("Account number must be a non-empty string")
        if not is_valid_account_number(self.value):
            raise ConstructionError(f"Account number must be exactly 10 digits, got {self.value!r}")

    @classmethod
    def of(cls, value: Any) -> "AccountNumber":
        """Create an AccountNumber, passing existing instances through."""
        if isinstance(value, AccountNumber):
            return value
        return cls(value)

    def __str__(self) -> str:
        return self.value

    def to_formatted_string(self) -> str:
        """Format as ``DDDD-DDD-DDD``."""
        return f"{self.value[:4]}-{self.value[4:7]}-{self.value[7:]}"
