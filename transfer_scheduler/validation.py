"""Validation rules for transfer requests.

Every field is checked independently and every violation is reported, so a
caller can show all problems of a form at once.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Callable

from transfer_scheduler.dates import to_date
from transfer_scheduler.exceptions import ConstructionError, ValidationError
from transfer_scheduler.models.account_number import is_valid_account_number
from transfer_scheduler.models.money import to_decimal
from transfer_scheduler.models.request import TransferRequest

MIN_AMOUNT = Decimal("0.01")
MAX_AMOUNT = Decimal("999999999.99")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a request: field name mapped to reason."""

    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def raise_if_invalid(self) -> None:
        """Raise ValidationError carrying every field error."""
        if self.errors:
            raise ValidationError(self.errors)


class TransferValidationRules:
    """Stateless rule set gating every schedule and update.

    Parameters
    ----------
    clock : Callable[[], date]
        Returns today's date. Defaults to ``date.today``.
    """

    def __init__(self, clock: Callable[[], date] = date.today) -> None:
        self.clock = clock

    def validate(self, request: TransferRequest, today: date | None = None) -> ValidationResult:
        """Check all fields of a request.

        Parameters
        ----------
        request : TransferRequest
            Raw request to check.
        today : date | None
            Reference date for the transfer date rule; the clock is used
            when omitted.

        Returns
        -------
        ValidationResult
            Empty errors when the request is valid.
        """
        reference = today if today is not None else self.clock()
        errors: dict[str, str] = {}

        for name, reason in (
            ("source_account", self._check_source_account(request.source_account)),
            ("target_account", self._check_target_account(request.target_account, request.source_account)),
            ("amount", self._check_amount(request.amount)),
            ("transfer_date", self._check_transfer_date(request.transfer_date, reference)),
        ):
            if reason:
                errors[name] = reason

        return ValidationResult(errors)

    def validate_for_update(self, request: TransferRequest, today: date | None = None) -> ValidationResult:
        """Like ``validate`` but the request must also carry an id."""
        errors = dict(self.validate(request, today).errors)
        if request.id is None or not str(request.id).strip():
            errors["id"] = "Transfer id is required for update"
        return ValidationResult(errors)

    @staticmethod
    def validate_account_number(value: Any) -> bool:
        """Return True if value is exactly 10 ASCII digits."""
        return is_valid_account_number(value)

    @staticmethod
    def _check_source_account(value: Any) -> str | None:
        if _is_blank(value):
            return "Source account is required"
        if not is_valid_account_number(value):
            return "Source account must be exactly 10 digits"
        return None

    @staticmethod
    def _check_target_account(value: Any, source_account: Any) -> str | None:
        if _is_blank(value):
            return "Target account is required"
        if not is_valid_account_number(value):
            return "Target account must be exactly 10 digits"
        if value == source_account:
            return "Source and target accounts must be different"
        return None

    @staticmethod
    def _check_amount(value: Any) -> str | None:
        if _is_blank(value):
            return "Amount is required"
        try:
            number = to_decimal(value)
        except ConstructionError:
            return "Amount must be a valid finite number"
        if number <= 0:
            return "Amount must be greater than zero"
        if number < MIN_AMOUNT:
            return "Amount must be at least R$ 0,01"
        if number > MAX_AMOUNT:
            return "Amount cannot exceed R$ 999.999.999,99"
        return None

    @staticmethod
    def _check_transfer_date(value: Any, today: date) -> str | None:
        if _is_blank(value):
            return "Transfer date is required"
        try:
            transfer_date = to_date(value)
        except ConstructionError:
            return "Transfer date must be a valid date"
        if transfer_date < today:
            return "Transfer date cannot be in the past"
        return None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


_default_rules = TransferValidationRules()


def validate(request: TransferRequest, today: date | None = None) -> ValidationResult:
    """Validate a request with the system clock."""
    return _default_rules.validate(request, today)


def validate_account_number(value: Any) -> bool:
    """Return True if value is a well-formed account number."""
    return is_valid_account_number(value)
