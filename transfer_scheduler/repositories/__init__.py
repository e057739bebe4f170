"""Transfer repository contract and implementations."""

from transfer_scheduler.repositories.base import TransferRepository, TransferResponse
from transfer_scheduler.repositories.http import HttpTransferRepository
from transfer_scheduler.repositories.memory import InMemoryTransferRepository

__all__ = [
    "HttpTransferRepository",
    "InMemoryTransferRepository",
    "TransferRepository",
    "TransferResponse",
]
