"""Transfer request generator."""

from datetime import date, timedelta
from decimal import Decimal
from typing import Iterator

from transfer_scheduler.fees import DEFAULT_FEE_TIERS
from transfer_scheduler.generators.base import BaseGenerator
from transfer_scheduler.models.request import TransferRequest


class TransferRequestGenerator(BaseGenerator):
    """Generate valid transfer requests for demos and tests.

    Lead times are spread over the fee tiers, weighted towards short
    schedules the way customers usually book them.
    """

    TIER_WEIGHTS = [0.20, 0.35, 0.20, 0.12, 0.08, 0.05]

    def __init__(self, seed: int | None = None, max_amount: int = 50000) -> None:
        super().__init__(seed)
        self.max_amount = max_amount

    def account_number(self) -> str:
        """Random 10-digit account number."""
        return self.fake.numerify("##########")

    def generate(self, today: date | None = None) -> TransferRequest:
        """Generate a single request scheduled from today.

        Parameters
        ----------
        today : date | None
            Reference date; defaults to ``date.today()``.

        Returns
        -------
        TransferRequest
            Request that passes validation on ``today``.
        """
        reference = today or date.today()

        source = self.account_number()
        target = self.account_number()
        while target == source:
            target = self.account_number()

        # Pareto-shaped amounts: many small transfers, a few large ones
        amount = min(self.random.paretovariate(1.5) * 50, self.max_amount)

        tier = self.random.choices(DEFAULT_FEE_TIERS, weights=self.TIER_WEIGHTS, k=1)[0]
        days = self.random.randint(tier.min_days, tier.max_days)

        return TransferRequest(
            source_account=source,
            target_account=target,
            amount=Decimal(str(round(amount, 2))),
            transfer_date=reference + timedelta(days=days),
        )

    def generate_batch(self, count: int, today: date | None = None) -> Iterator[TransferRequest]:
        """Generate multiple requests."""
        for _ in range(count):
            yield self.generate(today)
