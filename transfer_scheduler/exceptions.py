"""Custom exception hierarchy for transfer-scheduler."""

from enum import Enum


class ErrorKind(str, Enum):
    CONSTRUCTION = "CONSTRUCTION"
    VALIDATION = "VALIDATION"
    BUSINESS_RULE = "BUSINESS_RULE"


class TransferSchedulerError(Exception):
    """Base exception for all transfer-scheduler errors."""

    kind: ErrorKind | None = None


class ConstructionError(TransferSchedulerError, ValueError):
    """Raised when a value object or entity invariant is violated."""

    kind = ErrorKind.CONSTRUCTION


class ValidationError(TransferSchedulerError):
    """Raised when a transfer request fails validation.

    Parameters
    ----------
    errors : dict[str, str]
        Field name mapped to a human-readable reason.
    """

    kind = ErrorKind.VALIDATION

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Invalid transfer request: {fields}")


class BusinessRuleError(TransferSchedulerError):
    """Raised when a semantically valid request is rejected.

    ``status_code`` and ``category`` keep the context of the collaborator
    failure that was translated, for logging only.
    """

    kind = ErrorKind.BUSINESS_RULE

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        category: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.category = category


class FeeTierError(BusinessRuleError):
    """Raised when no fee tier can be applied to a lead time."""

    def __init__(self, message: str, days: int) -> None:
        super().__init__(message, category="fee_tier")
        self.days = days


class PastDateError(FeeTierError):
    """Raised when the transfer date is before today."""


class NoApplicableTierError(FeeTierError):
    """Raised when the transfer date is beyond the last fee tier."""


class RepositoryError(TransferSchedulerError):
    """Raised by a transfer repository when the remote call fails.

    ``status_code`` is None when no response was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TransferNotFoundError(RepositoryError):
    """Raised when a referenced transfer does not exist."""

    def __init__(self, message: str = "Transfer not found") -> None:
        super().__init__(message, status_code=404)


class ConfigurationError(TransferSchedulerError):
    """Raised when configuration is invalid or missing."""
