"""Custom exception hierarchy for chari-stub.

Every class carries the HTTP status the API layer answers with, so
handlers only raise and never build error responses themselves.
"""


class ChariStubError(Exception):
    """Base exception for all chari-stub errors."""

    status_code = 500


class ValidationError(ChariStubError):
    """Raised when a required parameter or body field is missing or invalid."""

    status_code = 400


class PaginationError(ValidationError):
    """Raised when pagination parameters cannot produce a page."""


class InvalidConfirmationCodeError(ValidationError):
    """Raised when a registration confirmation code does not match."""


class InsufficientBalanceError(ValidationError):
    """Raised when a sender cannot cover a transfer amount."""


class InvalidEntityStateError(ChariStubError):
    """Raised when a customer is in an invalid state for the operation."""

    status_code = 400


class EntityNotFoundError(ChariStubError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class NoContentError(EntityNotFoundError):
    """Raised when a customer status lookup finds no customer at all."""

    status_code = 204


class AuthenticationError(ChariStubError):
    """Raised when the API key is missing or not allowed."""

    status_code = 401


class ConfigurationError(ChariStubError):
    """Raised when configuration is invalid or missing."""
