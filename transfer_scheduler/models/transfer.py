"""Transfer entity."""

import dataclasses
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping

from transfer_scheduler.dates import to_date
from transfer_scheduler.exceptions import ConstructionError
from transfer_scheduler.models.account_number import AccountNumber
from transfer_scheduler.models.money import Money
from transfer_scheduler.models.request import TransferRequest

# Attribute name -> wire name used by the transfer API
RESPONSE_FIELDS = {
    "id": "id",
    "source_account": "sourceAccount",
    "target_account": "targetAccount",
    "amount": "amount",
    "fee": "fee",
    "schedule_date": "scheduleDate",
    "transfer_date": "transferDate",
}


@dataclass(frozen=True)
class Transfer:
    """Scheduled transfer between two accounts.

    Instances are immutable: an update produces a new Transfer through
    ``replace``. ``id`` is None until the transfer API assigns one.
    ``schedule_date`` is the day the transfer was requested and
    ``transfer_date`` the day the funds move.
    """

    source_account: AccountNumber
    target_account: AccountNumber
    amount: Money
    fee: Money
    schedule_date: date
    transfer_date: date
    id: str | None = None

    def __post_init__(self) -> None:
        for name, expected in (
            ("source_account", AccountNumber),
            ("target_account", AccountNumber),
            ("amount", Money),
            ("fee", Money),
            ("schedule_date", date),
            ("transfer_date", date),
        ):
            value = getattr(self, name)
            if value is None:
                raise ConstructionError(f"Transfer {name} is required")
            if not isinstance(value, expected):
                raise ConstructionError(
                    f"Transfer {name} must be {expected.__name__}, got {type(value).__name__}"
                )
            if isinstance(value, datetime):
                object.__setattr__(self, name, value.date())

        if self.source_account == self.target_account:
            raise ConstructionError("Source and target accounts must be different")

        if self.id is not None and (not isinstance(self.id, str) or not self.id):
            raise ConstructionError("Transfer id must be a non-empty string when set")

    @classmethod
    def create(cls, request: TransferRequest, fee: Any, today: date) -> "Transfer":
        """Build a not-yet-persisted transfer from a validated request."""
        return cls(
            source_account=AccountNumber.of(request.source_account),
            target_account=AccountNumber.of(request.target_account),
            amount=Money.of(request.amount),
            fee=Money.of(fee),
            schedule_date=to_date(today),
            transfer_date=to_date(request.transfer_date),
            id=request.id,
        )

    @classmethod
    def from_response(cls, data: Mapping[str, Any]) -> "Transfer":
        """Rehydrate a transfer returned by the transfer API.

        Accepts the API's camelCase keys or the attribute names. Every field,
        including ``id``, must be present.

        Raises
        ------
        ConstructionError
            If a field is missing or malformed.
        """
        if not isinstance(data, Mapping):
            raise ConstructionError(f"Transfer data must be a mapping, got {type(data).__name__}")

        values: dict[str, Any] = {}
        for name, wire_name in RESPONSE_FIELDS.items():
            value = data.get(wire_name, data.get(name))
            if value is None or value == "":
                raise ConstructionError(f"Transfer response is missing {wire_name!r}")
            values[name] = value

        return cls(
            source_account=AccountNumber.of(values["source_account"]),
            target_account=AccountNumber.of(values["target_account"]),
            amount=Money.of(values["amount"]),
            fee=Money.of(values["fee"]),
            schedule_date=to_date(values["schedule_date"]),
            transfer_date=to_date(values["transfer_date"]),
            id=str(values["id"]),
        )

    def replace(self, **changes: Any) -> "Transfer":
        """Return a new Transfer with the given attributes changed."""
        return dataclasses.replace(self, **changes)

    @property
    def total_amount(self) -> Money:
        return self.amount + self.fee

    def days_until_transfer(self, today: date | None = None) -> int:
        """Whole days from today until the transfer date.

        Counting calendar dates equals rounding the exact remaining time up
        to the next whole day, so same-day transfers give 0 at any hour.
        """
        reference = to_date(today) if today is not None else date.today()
        return (self.transfer_date - reference).days

    def to_formatted_summary(self, today: date | None = None) -> dict[str, Any]:
        """Display-ready representation for listings."""
        return {
            "id": self.id,
            "from": self.source_account.to_formatted_string(),
            "to": self.target_account.to_formatted_string(),
            "amount": self.amount.to_formatted_string(),
            "fee": self.fee.to_formatted_string(),
            "total": self.total_amount.to_formatted_string(),
            "schedule_date": self.schedule_date.strftime("%d/%m/%Y"),
            "transfer_date": self.transfer_date.strftime("%d/%m/%Y"),
            "days_until_transfer": self.days_until_transfer(today),
        }
