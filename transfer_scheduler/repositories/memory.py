"""In-memory transfer repository mirroring the transfer API's rules."""

import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Callable

from transfer_scheduler.exceptions import (
    ConstructionError,
    FeeTierError,
    RepositoryError,
    TransferNotFoundError,
)
from transfer_scheduler.fees import FeeCalculator
from transfer_scheduler.models.request import TransferRequest
from transfer_scheduler.models.transfer import Transfer
from transfer_scheduler.repositories.base import TransferRepository, TransferResponse
from transfer_scheduler.serialization import transfer_to_response


@dataclass
class InMemoryTransferRepository(TransferRepository):
    """Store transfers in a dict, computing fees the way the server does.

    New transfers get a UUID id and ``scheduleDate`` set to the clock's
    date. Requests the server would refuse (equal accounts, past dates,
    dates beyond the last fee tier, malformed fields) raise
    ``RepositoryError`` with status 400; unknown ids raise
    ``TransferNotFoundError``.
    """

    clock: Callable[[], date] = date.today
    calculator: FeeCalculator = field(default_factory=FeeCalculator)
    transfers: dict[str, Transfer] = field(default_factory=dict)

    async def schedule_transfer(self, request: TransferRequest) -> TransferResponse:
        transfer = self._build(request, uuid.uuid4().hex, self.clock())
        self.transfers[transfer.id] = transfer
        return transfer_to_response(transfer)

    async def get_all_transfers(self) -> list[TransferResponse]:
        return [transfer_to_response(t) for t in self.transfers.values()]

    async def get_transfer_by_id(self, transfer_id: str) -> TransferResponse:
        return transfer_to_response(self._get(transfer_id))

    async def update_transfer(self, request: TransferRequest) -> TransferResponse:
        existing = self._get(request.id)
        transfer = self._build(request, existing.id, existing.schedule_date)
        self.transfers[transfer.id] = transfer
        return transfer_to_response(transfer)

    async def delete_transfer(self, transfer_id: str) -> None:
        self._get(transfer_id)
        del self.transfers[transfer_id]

    async def clear_all_transfers(self) -> None:
        self.transfers.clear()

    def _get(self, transfer_id: str | None) -> Transfer:
        if transfer_id is None or transfer_id not in self.transfers:
            raise TransferNotFoundError(f"Transfer {transfer_id} not found")
        return self.transfers[transfer_id]

    def _build(self, request: TransferRequest, transfer_id: str, schedule_date: date) -> Transfer:
        try:
            quote = self.calculator.compute_fee(request.amount, request.transfer_date, self.clock())
            return Transfer.create(request.with_id(transfer_id), quote.fee, schedule_date)
        except (ConstructionError, FeeTierError) as exc:
            raise RepositoryError(str(exc), status_code=400) from exc
