"""Tests for the transfer scheduling use cases."""

import logging
from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from transfer_scheduler.exceptions import (
    BusinessRuleError,
    ConstructionError,
    ErrorKind,
    NoApplicableTierError,
    RepositoryError,
    TransferNotFoundError,
    ValidationError,
)
from transfer_scheduler.models import Money, Transfer, TransferRequest
from transfer_scheduler.repositories import InMemoryTransferRepository
from transfer_scheduler.repositories.base import TransferRepository
from transfer_scheduler.service import TransferSchedulerService


def _mock_service(today: date, **methods: AsyncMock) -> tuple[TransferSchedulerService, AsyncMock]:
    repository = AsyncMock(spec=TransferRepository)
    for name, mock in methods.items():
        setattr(repository, name, mock)
    return TransferSchedulerService(repository, clock=lambda: today), repository


def _response(today: date, **overrides: object) -> dict:
    data = {
        "id": "t-1",
        "sourceAccount": "1111111111",
        "targetAccount": "2222222222",
        "amount": 100,
        "fee": 8.2,
        "scheduleDate": today.isoformat(),
        "transferDate": (today + timedelta(days=15)).isoformat(),
    }
    data.update(overrides)
    return data


class TestScheduleTransfer:
    """Tests for schedule_transfer."""

    @pytest.mark.asyncio
    async def test_end_to_end(
        self, service: TransferSchedulerService, valid_request: TransferRequest, today: date
    ) -> None:
        transfer = await service.schedule_transfer(valid_request)

        assert transfer.id
        assert transfer.fee.amount == Decimal("8.20")
        assert transfer.total_amount.amount == Decimal("108.20")
        assert transfer.schedule_date == today
        assert transfer.days_until_transfer(today) == 15

    @pytest.mark.asyncio
    async def test_validation_error_before_remote_call(self, today: date) -> None:
        service, repository = _mock_service(today)
        request = TransferRequest(
            source_account="1111111111",
            target_account="1111111111",
            amount=0,
            transfer_date=today - timedelta(days=1),
        )

        with pytest.raises(ValidationError) as exc_info:
            await service.schedule_transfer(request)

        assert set(exc_info.value.errors) == {"target_account", "amount", "transfer_date"}
        assert exc_info.value.kind == ErrorKind.VALIDATION
        repository.schedule_transfer.assert_not_called()

    @pytest.mark.asyncio
    async def test_logs_invalid_field_names(self, today: date, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="transfer_scheduler")
        service, _ = _mock_service(today)
        request = TransferRequest("1111111111", "2222222222", None, None)

        with pytest.raises(ValidationError):
            await service.schedule_transfer(request)

        [record] = caplog.records
        assert record.fields == ["amount", "transfer_date"]

    @pytest.mark.asyncio
    async def test_logs_transfer_id(
        self, service: TransferSchedulerService, valid_request: TransferRequest, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.INFO, logger="transfer_scheduler.service")

        transfer = await service.schedule_transfer(valid_request)

        assert [r.transfer_id for r in caplog.records if r.name == "transfer_scheduler.service"] == [transfer.id]

    @pytest.mark.asyncio
    async def test_bad_request_becomes_business_rule_error(
        self, today: date, valid_request: TransferRequest
    ) -> None:
        service, _ = _mock_service(
            today,
            schedule_transfer=AsyncMock(side_effect=RepositoryError("Limit exceeded", status_code=400)),
        )

        with pytest.raises(BusinessRuleError) as exc_info:
            await service.schedule_transfer(valid_request)

        assert str(exc_info.value) == "Limit exceeded"
        assert exc_info.value.status_code == 400
        assert isinstance(exc_info.value.__cause__, RepositoryError)

    @pytest.mark.asyncio
    async def test_rejection_logged_with_status_code(
        self, today: date, valid_request: TransferRequest, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.WARNING, logger="transfer_scheduler")
        service, _ = _mock_service(
            today,
            schedule_transfer=AsyncMock(side_effect=RepositoryError("Limit exceeded", status_code=400)),
        )

        with pytest.raises(BusinessRuleError):
            await service.schedule_transfer(valid_request)

        [record] = caplog.records
        assert record.status_code == 400
        assert record.getMessage() == "Transfer service rejected request: Limit exceeded"

    @pytest.mark.asyncio
    async def test_other_failures_propagate(self, today: date, valid_request: TransferRequest) -> None:
        error = RepositoryError("Transfer service error", status_code=503)
        service, _ = _mock_service(today, schedule_transfer=AsyncMock(side_effect=error))

        with pytest.raises(RepositoryError) as exc_info:
            await service.schedule_transfer(valid_request)

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_malformed_response_is_construction_error(
        self, today: date, valid_request: TransferRequest
    ) -> None:
        response = _response(today)
        del response["fee"]
        service, _ = _mock_service(today, schedule_transfer=AsyncMock(return_value=response))

        with pytest.raises(ConstructionError):
            await service.schedule_transfer(valid_request)

    @pytest.mark.asyncio
    async def test_beyond_horizon_rejected_by_repository(
        self, service: TransferSchedulerService, valid_request: TransferRequest, today: date
    ) -> None:
        request = TransferRequest(
            source_account=valid_request.source_account,
            target_account=valid_request.target_account,
            amount=100,
            transfer_date=today + timedelta(days=51),
        )

        with pytest.raises(BusinessRuleError) as exc_info:
            await service.schedule_transfer(request)

        assert exc_info.value.status_code == 400


class TestListTransfers:
    """Tests for list_transfers."""

    @pytest.mark.asyncio
    async def test_lists_scheduled(
        self, service: TransferSchedulerService, valid_request: TransferRequest
    ) -> None:
        scheduled = await service.schedule_transfer(valid_request)

        transfers = await service.list_transfers()

        assert transfers == [scheduled]

    @pytest.mark.asyncio
    async def test_empty(self, service: TransferSchedulerService) -> None:
        assert await service.list_transfers() == []

    @pytest.mark.asyncio
    async def test_failure_wrapped(self, today: date) -> None:
        service, _ = _mock_service(
            today,
            get_all_transfers=AsyncMock(side_effect=RepositoryError("Connection refused")),
        )

        with pytest.raises(BusinessRuleError, match="Failed to retrieve transfers: Connection refused"):
            await service.list_transfers()


class TestGetTransfer:
    """Tests for get_transfer."""

    @pytest.mark.asyncio
    async def test_found(self, service: TransferSchedulerService, valid_request: TransferRequest) -> None:
        scheduled = await service.schedule_transfer(valid_request)

        assert await service.get_transfer(scheduled.id) == scheduled

    @pytest.mark.asyncio
    async def test_not_found(self, service: TransferSchedulerService) -> None:
        with pytest.raises(BusinessRuleError, match="Transfer not found"):
            await service.get_transfer("missing")

    @pytest.mark.asyncio
    async def test_requires_id(self, service: TransferSchedulerService) -> None:
        with pytest.raises(ValidationError):
            await service.get_transfer("")


class TestUpdateTransfer:
    """Tests for update_transfer."""

    @pytest.mark.asyncio
    async def test_update_returns_new_instance(
        self, service: TransferSchedulerService, valid_request: TransferRequest, today: date
    ) -> None:
        original = await service.schedule_transfer(valid_request)
        request = TransferRequest(
            id=original.id,
            source_account=valid_request.source_account,
            target_account=valid_request.target_account,
            amount=200,
            transfer_date=today + timedelta(days=5),
        )

        updated = await service.update_transfer(request)

        assert updated is not original
        assert updated.id == original.id
        assert updated.amount == Money.of(200)
        assert updated.fee == Money.of(12)
        assert original.amount == Money.of(100)

    @pytest.mark.asyncio
    async def test_requires_id(self, service: TransferSchedulerService, valid_request: TransferRequest) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await service.update_transfer(valid_request)

        assert "id" in exc_info.value.errors

    @pytest.mark.asyncio
    async def test_validates_fields(self, service: TransferSchedulerService, valid_request: TransferRequest) -> None:
        request = TransferRequest(
            id="t-1",
            source_account=valid_request.source_account,
            target_account="bad",
            amount=valid_request.amount,
            transfer_date=valid_request.transfer_date,
        )

        with pytest.raises(ValidationError) as exc_info:
            await service.update_transfer(request)

        assert set(exc_info.value.errors) == {"target_account"}

    @pytest.mark.asyncio
    async def test_not_found(self, service: TransferSchedulerService, valid_request: TransferRequest) -> None:
        with pytest.raises(BusinessRuleError, match="Transfer not found") as exc_info:
            await service.update_transfer(valid_request.with_id("missing"))

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_bad_request(self, today: date, valid_request: TransferRequest) -> None:
        service, _ = _mock_service(
            today,
            update_transfer=AsyncMock(side_effect=RepositoryError("", status_code=400)),
        )

        with pytest.raises(BusinessRuleError, match="Invalid transfer update request"):
            await service.update_transfer(valid_request.with_id("t-1"))

    @pytest.mark.asyncio
    async def test_server_error_propagates(self, today: date, valid_request: TransferRequest) -> None:
        service, _ = _mock_service(
            today,
            update_transfer=AsyncMock(side_effect=RepositoryError("boom", status_code=500)),
        )

        with pytest.raises(RepositoryError):
            await service.update_transfer(valid_request.with_id("t-1"))


class TestDeleteTransfer:
    """Tests for delete_transfer."""

    @pytest.mark.asyncio
    async def test_delete(
        self,
        service: TransferSchedulerService,
        repository: InMemoryTransferRepository,
        valid_request: TransferRequest,
    ) -> None:
        transfer = await service.schedule_transfer(valid_request)

        await service.delete_transfer(transfer.id)

        assert repository.transfers == {}
        with pytest.raises(BusinessRuleError):
            await service.get_transfer(transfer.id)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("transfer_id", ["", None, "  "])
    async def test_requires_id(self, today: date, transfer_id: object) -> None:
        service, repository = _mock_service(today)

        with pytest.raises(ValidationError) as exc_info:
            await service.delete_transfer(transfer_id)  # type: ignore[arg-type]

        assert exc_info.value.errors == {"id": "Transfer id is required"}
        repository.delete_transfer.assert_not_called()

    @pytest.mark.asyncio
    async def test_not_found(self, today: date) -> None:
        service, _ = _mock_service(
            today,
            delete_transfer=AsyncMock(side_effect=TransferNotFoundError()),
        )

        with pytest.raises(BusinessRuleError, match="Transfer not found") as exc_info:
            await service.delete_transfer("t-1")

        assert exc_info.value.category == "TransferNotFoundError"


class TestClearAllTransfers:
    """Tests for clear_all_transfers."""

    @pytest.mark.asyncio
    async def test_clear(
        self,
        service: TransferSchedulerService,
        repository: InMemoryTransferRepository,
        valid_request: TransferRequest,
    ) -> None:
        await service.schedule_transfer(valid_request)

        await service.clear_all_transfers()

        assert await service.list_transfers() == []

    @pytest.mark.asyncio
    async def test_failure_wrapped(self, today: date) -> None:
        service, _ = _mock_service(
            today,
            clear_all_transfers=AsyncMock(side_effect=RepositoryError("boom", status_code=500)),
        )

        with pytest.raises(BusinessRuleError, match="Failed to clear transfers: boom"):
            await service.clear_all_transfers()


class TestPreviewFee:
    """Tests for preview_fee."""

    def test_preview_matches_scheduled_fee(self, service: TransferSchedulerService, today: date) -> None:
        quote = service.preview_fee(100, today + timedelta(days=15))

        assert quote.days == 15
        assert quote.fee == Decimal("8.20")

    def test_preview_beyond_horizon(self, service: TransferSchedulerService, today: date) -> None:
        with pytest.raises(NoApplicableTierError):
            service.preview_fee(100, today + timedelta(days=60))

    def test_preview_amount_beyond_decimal_precision(self, service: TransferSchedulerService, today: date) -> None:
        with pytest.raises(ConstructionError):
            service.preview_fee(Decimal("1e30"), today + timedelta(days=15))


class TestTransferIsNeverMutated:
    @pytest.mark.asyncio
    async def test_list_returns_fresh_instances(
        self, service: TransferSchedulerService, valid_request: TransferRequest
    ) -> None:
        scheduled = await service.schedule_transfer(valid_request)
        listed = (await service.list_transfers())[0]

        assert listed == scheduled
        assert isinstance(listed, Transfer)
