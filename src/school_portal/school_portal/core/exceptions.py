from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    ``title`` is the short headline of the notification shown to the user and
    the exception message is its detail line.
    """

    title = "Error"

    def __init__(self, message: str = "Some error occurred", *, title: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if title is not None:
            self.title = title


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    title = "Invalid Data"


class InvalidDateError(ValidationError):
    title = "Invalid Date"


class MissingFieldsError(ValidationError):
    title = "Missing Fields"


class InvalidAmountError(ValidationError):
    title = "Invalid Amount"


class ExceedsPendingError(ValidationError):
    title = "Invalid Amount"


class MissingTransactionIdError(ValidationError):
    title = "Transaction ID Required"


class PaymentGatedError(ValidationError):
    """Raised when a payment is started while a submission awaits verification."""

    title = "Payment Pending"


class AuthenticationError(DomainError):
    """Raised when login credentials are rejected."""

    title = "Login Error"


class NotAuthenticatedError(AuthenticationError):
    """Raised when no identity is stored in the session."""


class ScopeMissingError(DomainError):
    """Raised when the attendance screen is reached without a confirmed scope."""


class GatewayError(DomainError):
    """Remote call failed; the user may retry the action."""

    retryable = True


class TransportError(GatewayError):
    """Network failure, HTTP error status or malformed response body."""


class ApplicationError(GatewayError):
    """The backend answered with ``error: true``."""

    def __init__(self, message: str = "Some error occurred", *, title: Optional[str] = None, endpoint: str = ""):
        super().__init__(message, title=title)
        self.endpoint = endpoint


class PaymentAppUnavailableError(DomainError):
    """No installed app accepted the UPI deep link."""

    title = "UPI App not found"


class WorkflowCancelled(DomainError):
    """A response arrived after its workflow was closed and was discarded."""

    title = "Cancelled"
