"""Serialization helpers for the transfer API and for report output."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from transfer_scheduler.dates import to_date
from transfer_scheduler.exceptions import TransferSchedulerError
from transfer_scheduler.fees import FeeQuote
from transfer_scheduler.models.money import to_decimal
from transfer_scheduler.models.request import TransferRequest
from transfer_scheduler.models.transfer import RESPONSE_FIELDS, Transfer


def request_to_payload(request: TransferRequest) -> dict[str, Any]:
    """Build the JSON body the transfer API expects.

    The request must already be validated; ``id`` travels in the URL.
    """
    return {
        "sourceAccount": request.source_account,
        "targetAccount": request.target_account,
        "amount": float(to_decimal(request.amount)),
        "transferDate": to_date(request.transfer_date).isoformat(),
    }


def transfer_to_response(transfer: Transfer) -> dict[str, Any]:
    """Convert a Transfer to the API's camelCase representation."""
    return {wire: serialize_value(getattr(transfer, name)) for name, wire in RESPONSE_FIELDS.items()}


def schedule_report(transfer: Transfer, quote: FeeQuote, today: date | None = None) -> dict[str, Any]:
    """Report entry for a scheduled transfer and the fee quoted beforehand."""
    return {
        "status": "scheduled",
        "transfer": serialize_value(transfer.to_formatted_summary(today)),
        "quote": to_dict(quote),
    }


def rejection_report(request: TransferRequest, error: TransferSchedulerError) -> dict[str, Any]:
    """Report entry for a request the use cases refused."""
    return serialize_value(
        {
            "status": "rejected",
            "request": to_dict(request),
            "kind": error.kind,
            "error": str(error),
            "errors": getattr(error, "errors", {}),
        }
    )


def to_dict(obj: Any) -> dict[str, Any]:
    """Convert a dataclass instance to a JSON-ready dict without deep copying."""
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, (date, datetime)):
        return value.isoformat()
    elif is_dataclass(value) and not isinstance(value, type):
        value_fields = fields(value)
        # single-field value objects (Money, AccountNumber) collapse to their value
        if len(value_fields) == 1:
            return serialize_value(getattr(value, value_fields[0].name))
        return to_dict(value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    return value
