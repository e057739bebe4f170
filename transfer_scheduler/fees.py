"""Tiered transfer fee calculation.

The fee depends on the lead time, the number of whole calendar days between
"today" and the transfer date:

====== ========= ==========
days   fixed fee percentage
====== ========= ==========
0      3.00      2.5%
1-10   12.00     0%
11-20  0.00      8.2%
21-30  0.00      6.9%
31-40  0.00      4.7%
41-50  0.00      1.7%
====== ========= ==========

Everything here is a pure function of its inputs; callers pass ``today``.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable

from transfer_scheduler.dates import days_between
from transfer_scheduler.exceptions import ConfigurationError, NoApplicableTierError, PastDateError
from transfer_scheduler.models.money import Money, round_to_cents


@dataclass(frozen=True)
class FeeTier:
    """Closed day range with a fixed fee and a percentage of the amount."""

    min_days: int
    max_days: int
    fixed_fee: Decimal
    percentage: Decimal

    def applies_to(self, days: int) -> bool:
        return self.min_days <= days <= self.max_days

    def fee_for(self, amount: Decimal) -> Decimal:
        return round_to_cents(self.fixed_fee + amount * self.percentage)

    def describe(self) -> str:
        """Human-readable label, e.g. ``11-20 days: 8.2%``."""
        if self.min_days == self.max_days == 0:
            label = "Same day"
        elif self.min_days == self.max_days:
            label = f"{self.min_days} days"
        else:
            label = f"{self.min_days}-{self.max_days} days"

        parts = []
        if self.fixed_fee:
            parts.append(f"R$ {self.fixed_fee:.2f}")
        if self.percentage:
            parts.append(f"{(self.percentage * 100).normalize():f}%")
        if not parts:
            return f"{label}: free"
        if len(parts) == 1 and not self.percentage:
            return f"{label}: {parts[0]} fixed"
        return f"{label}: {' + '.join(parts)}"


DEFAULT_FEE_TIERS: tuple[FeeTier, ...] = (
    FeeTier(0, 0, Decimal("3.00"), Decimal("0.025")),
    FeeTier(1, 10, Decimal("12.00"), Decimal("0")),
    FeeTier(11, 20, Decimal("0.00"), Decimal("0.082")),
    FeeTier(21, 30, Decimal("0.00"), Decimal("0.069")),
    FeeTier(31, 40, Decimal("0.00"), Decimal("0.047")),
    FeeTier(41, 50, Decimal("0.00"), Decimal("0.017")),
)


@dataclass(frozen=True)
class FeeQuote:
    """Result of a fee calculation."""

    amount: Money
    days: int
    tier: FeeTier
    fee: Decimal

    @property
    def total(self) -> Decimal:
        return self.amount.amount + self.fee


class FeeCalculator:
    """Apply a tier table to (amount, transfer date, today).

    Parameters
    ----------
    tiers : Iterable[FeeTier]
        Tiers in ascending order. They must start at day 0 and cover a
        contiguous range without gaps or overlaps.
    """

    def __init__(self, tiers: Iterable[FeeTier] = DEFAULT_FEE_TIERS) -> None:
        self.tiers = tuple(tiers)
        _check_contiguous(self.tiers)

    @property
    def max_days(self) -> int:
        return self.tiers[-1].max_days

    def find_tier(self, days: int) -> FeeTier:
        """Return the tier for a lead time.

        Raises
        ------
        PastDateError
            If days is negative.
        NoApplicableTierError
            If days is beyond the last tier.
        """
        if days < 0:
            raise PastDateError("Transfer date is in the past; pick today or a later date", days)
        for tier in self.tiers:
            if tier.applies_to(days):
                return tier
        raise NoApplicableTierError(
            f"No fee applies to a transfer {days} days ahead; the limit is {self.max_days} days",
            days,
        )

    def compute_fee(self, amount: Any, scheduled_date: Any, today: Any) -> FeeQuote:
        """Compute the fee for transferring amount on scheduled_date.

        Parameters
        ----------
        amount : Any
            Positive amount (Money, Decimal, int, float or numeric string).
        scheduled_date : Any
            Date the funds move (date, datetime or ISO string).
        today : Any
            Reference date the lead time is counted from.

        Returns
        -------
        FeeQuote
            Lead time, tier and fee rounded to cents.
        """
        money = Money.of(amount)
        days = days_between(today, scheduled_date)
        tier = self.find_tier(days)
        return FeeQuote(amount=money, days=days, tier=tier, fee=tier.fee_for(money.amount))

    def describe(self, days: int) -> str:
        """Describe the tier for a lead time, or why none applies."""
        if days < 0:
            return "Not applicable (past date)"
        if days > self.max_days:
            return f"Not applicable (>{self.max_days} days)"
        return self.find_tier(days).describe()


def _check_contiguous(tiers: tuple[FeeTier, ...]) -> None:
    if not tiers:
        raise ConfigurationError("Fee tier table cannot be empty")

    expected_start = 0
    for tier in tiers:
        if tier.min_days > tier.max_days:
            raise ConfigurationError(f"Fee tier {tier.min_days}-{tier.max_days} has an inverted range")
        if tier.min_days != expected_start:
            raise ConfigurationError(
                f"Fee tiers must be contiguous: expected a tier starting at day "
                f"{expected_start}, got {tier.min_days}"
            )
        if tier.fixed_fee < 0 or tier.percentage < 0:
            raise ConfigurationError(f"Fee tier {tier.min_days}-{tier.max_days} has a negative fee")
        expected_start = tier.max_days + 1


_default_calculator = FeeCalculator()


def compute_fee(amount: Any, scheduled_date: Any, today: Any) -> FeeQuote:
    """Compute a fee with the default tier table."""
    return _default_calculator.compute_fee(amount, scheduled_date, today)


def describe_fee_tier(days: int) -> str:
    """Describe the default tier for a lead time."""
    return _default_calculator.describe(days)
