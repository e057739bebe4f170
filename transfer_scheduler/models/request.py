"""Raw transfer request as submitted by a caller."""

from dataclasses import dataclass
from typing import Any, Mapping

# Wire (camelCase) names accepted by ``from_dict`` next to the attribute names
_FIELD_ALIASES = {
    "id": "id",
    "sourceAccount": "source_account",
    "targetAccount": "target_account",
    "amount": "amount",
    "transferDate": "transfer_date",
}


@dataclass(frozen=True)
class TransferRequest:
    """Unvalidated field bag for scheduling or updating a transfer.

    Values are kept exactly as received (strings from a form, numbers,
    ``date`` objects...); ``TransferValidationRules`` decides whether they
    are acceptable.
    """

    source_account: Any = None
    target_account: Any = None
    amount: Any = None
    transfer_date: Any = None
    id: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TransferRequest":
        """Build a request from snake_case or camelCase keys."""
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _FIELD_ALIASES.get(key, key)
            if name in cls.__dataclass_fields__:
                values[name] = value
        return cls(**values)

    def with_id(self, transfer_id: str) -> "TransferRequest":
        """Return a copy of this request targeting an existing transfer."""
        return TransferRequest(
            source_account=self.source_account,
            target_account=self.target_account,
            amount=self.amount,
            transfer_date=self.transfer_date,
            id=transfer_id,
        )
