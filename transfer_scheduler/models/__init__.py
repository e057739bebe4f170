"""Domain model for scheduled transfers."""

from transfer_scheduler.models.account_number import AccountNumber, is_valid_account_number
from transfer_scheduler.models.money import Money
from transfer_scheduler.models.request import TransferRequest
from transfer_scheduler.models.transfer import Transfer

__all__ = [
    "AccountNumber",
    "Money",
    "Transfer",
    "TransferRequest",
    "is_valid_account_number",
]
