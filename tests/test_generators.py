"""Tests for sample data generators."""

from datetime import date, timedelta

from transfer_scheduler.generators import TransferRequestGenerator
from transfer_scheduler.validation import TransferValidationRules

TODAY = date(2024, 6, 10)


class TestTransferRequestGenerator:
    """Tests for TransferRequestGenerator."""

    def test_generate_valid_request(self, seed: int) -> None:
        request = TransferRequestGenerator(seed=seed).generate(TODAY)

        assert TransferValidationRules(clock=lambda: TODAY).validate(request).is_valid
        assert request.id is None

    def test_batch_stays_within_fee_horizon(self, seed: int) -> None:
        requests = list(TransferRequestGenerator(seed=seed).generate_batch(200, TODAY))
        rules = TransferValidationRules(clock=lambda: TODAY)

        assert len(requests) == 200
        for request in requests:
            assert rules.validate(request).is_valid
            assert TODAY <= request.transfer_date <= TODAY + timedelta(days=50)
            assert request.source_account != request.target_account
            assert 50 <= request.amount <= 50000

    def test_reproducible_with_seed(self, seed: int) -> None:
        first = list(TransferRequestGenerator(seed=seed).generate_batch(5, TODAY))
        second = list(TransferRequestGenerator(seed=seed).generate_batch(5, TODAY))

        assert first == second

    def test_max_amount(self, seed: int) -> None:
        generator = TransferRequestGenerator(seed=seed, max_amount=60)

        for request in generator.generate_batch(50, TODAY):
            assert request.amount <= 60

    def test_account_number_format(self, seed: int) -> None:
        account = TransferRequestGenerator(seed=seed).account_number()

        assert len(account) == 10
        assert account.isdigit()
