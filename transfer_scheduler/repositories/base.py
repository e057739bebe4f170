"""Transfer repository contract."""

from abc import ABC, abstractmethod
from typing import Any

from transfer_scheduler.models.request import TransferRequest

TransferResponse = dict[str, Any]


class TransferRepository(ABC):
    """Remote store of scheduled transfers.

    Responses are plain dictionaries with ``id``, ``sourceAccount``,
    ``targetAccount``, ``amount``, ``fee``, ``scheduleDate`` and
    ``transferDate``. Implementations raise ``RepositoryError`` (or
    ``TransferNotFoundError``) when the remote side rejects a call or cannot
    be reached.
    """

    @abstractmethod
    async def schedule_transfer(self, request: TransferRequest) -> TransferResponse:
        """Create a transfer and return it with its id and fee."""

    @abstractmethod
    async def get_all_transfers(self) -> list[TransferResponse]:
        """Return every scheduled transfer."""

    @abstractmethod
    async def get_transfer_by_id(self, transfer_id: str) -> TransferResponse:
        """Return one transfer."""

    @abstractmethod
    async def update_transfer(self, request: TransferRequest) -> TransferResponse:
        """Replace the transfer identified by ``request.id``."""

    @abstractmethod
    async def delete_transfer(self, transfer_id: str) -> None:
        """Delete one transfer."""

    @abstractmethod
    async def clear_all_transfers(self) -> None:
        """Delete every transfer."""
