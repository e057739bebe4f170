"""Transfer scheduling use cases."""

from datetime import date
from typing import Any, Callable

from transfer_scheduler.exceptions import BusinessRuleError, RepositoryError, ValidationError
from transfer_scheduler.fees import FeeCalculator, FeeQuote
from transfer_scheduler.logging import get_logger
from transfer_scheduler.models.request import TransferRequest
from transfer_scheduler.models.transfer import Transfer
from transfer_scheduler.repositories.base import TransferRepository
from transfer_scheduler.validation import TransferValidationRules, ValidationResult

logger = get_logger(__name__)


class TransferSchedulerService:
    """Validate requests, call the repository and rebuild Transfers.

    Validation problems raise ``ValidationError`` before any remote call.
    Rejections by the repository are translated to ``BusinessRuleError``
    where the caller can act on them; other repository failures propagate
    unchanged. Existing Transfer instances are never modified.

    Parameters
    ----------
    repository : TransferRepository
        Remote store of transfers.
    rules : TransferValidationRules | None
        Request validation; shares ``clock`` when omitted.
    calculator : FeeCalculator | None
        Fee tiers used by ``preview_fee``.
    clock : Callable[[], date]
        Returns today's date.
    """

    def __init__(
        self,
        repository: TransferRepository,
        rules: TransferValidationRules | None = None,
        calculator: FeeCalculator | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.repository = repository
        self.clock = clock
        self.rules = rules or TransferValidationRules(clock=clock)
        self.calculator = calculator or FeeCalculator()

    async def schedule_transfer(self, request: TransferRequest) -> Transfer:
        """Schedule a new transfer."""
        self._ensure_valid(self.rules.validate(request))

        try:
            response = await self.repository.schedule_transfer(request)
        except RepositoryError as exc:
            if exc.status_code == 400:
                raise _business_rule_error(exc, exc.message or "Invalid transfer request") from exc
            raise

        transfer = Transfer.from_response(response)
        logger.info(
            "Scheduled transfer %s for %s",
            transfer.id,
            transfer.transfer_date,
            extra={"transfer_id": transfer.id},
        )
        return transfer

    async def list_transfers(self) -> list[Transfer]:
        """Return every scheduled transfer."""
        try:
            responses = await self.repository.get_all_transfers()
        except RepositoryError as exc:
            raise _business_rule_error(exc, f"Failed to retrieve transfers: {exc.message}") from exc
        return [Transfer.from_response(response) for response in responses]

    async def get_transfer(self, transfer_id: str) -> Transfer:
        """Return one transfer by id."""
        self._ensure_id(transfer_id)
        try:
            response = await self.repository.get_transfer_by_id(transfer_id)
        except RepositoryError as exc:
            if exc.status_code == 404:
                raise _business_rule_error(exc, "Transfer not found") from exc
            raise
        return Transfer.from_response(response)

    async def update_transfer(self, request: TransferRequest) -> Transfer:
        """Replace an existing transfer; the result is a new instance."""
        self._ensure_valid(self.rules.validate_for_update(request))

        try:
            response = await self.repository.update_transfer(request)
        except RepositoryError as exc:
            if exc.status_code == 400:
                raise _business_rule_error(exc, exc.message or "Invalid transfer update request") from exc
            if exc.status_code == 404:
                raise _business_rule_error(exc, "Transfer not found") from exc
            raise

        transfer = Transfer.from_response(response)
        logger.info("Updated transfer %s", transfer.id, extra={"transfer_id": transfer.id})
        return transfer

    async def delete_transfer(self, transfer_id: str) -> None:
        """Delete a transfer. Any in-memory instance of it becomes stale."""
        self._ensure_id(transfer_id)
        try:
            await self.repository.delete_transfer(transfer_id)
        except RepositoryError as exc:
            if exc.status_code == 404:
                raise _business_rule_error(exc, "Transfer not found") from exc
            raise
        logger.info("Deleted transfer %s", transfer_id, extra={"transfer_id": transfer_id})

    async def clear_all_transfers(self) -> None:
        """Delete every transfer."""
        try:
            await self.repository.clear_all_transfers()
        except RepositoryError as exc:
            raise _business_rule_error(exc, f"Failed to clear transfers: {exc.message}") from exc
        logger.info("Cleared all transfers")

    def preview_fee(self, amount: Any, transfer_date: Any) -> FeeQuote:
        """Fee the server is expected to charge, counted from today."""
        return self.calculator.compute_fee(amount, transfer_date, self.clock())

    @staticmethod
    def _ensure_valid(result: ValidationResult) -> None:
        if not result.is_valid:
            fields = sorted(result.errors)
            logger.info("Rejected transfer request, invalid fields: %s", ", ".join(fields), extra={"fields": fields})
            result.raise_if_invalid()

    @staticmethod
    def _ensure_id(transfer_id: Any) -> None:
        if transfer_id is None or not str(transfer_id).strip():
            raise ValidationError({"id": "Transfer id is required"})


def _business_rule_error(exc: RepositoryError, message: str) -> BusinessRuleError:
    logger.warning(
        "Transfer service rejected request: %s",
        exc.message,
        extra={"status_code": exc.status_code},
    )
    return BusinessRuleError(message, status_code=exc.status_code, category=type(exc).__name__)
