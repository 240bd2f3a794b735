"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Every error carries the HTTP status it maps to and whether it is
operational (expected, safe to show) or a programming error.
The API layer renders them through a single exception handler.
"""

from enum import Enum


class ErrorCategory(str, Enum):
    OPERATIONAL = 'operational'
    PROGRAMMING = 'programming'


class DomainError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500
    category: ErrorCategory = ErrorCategory.OPERATIONAL
    default_message: str = 'Something went wrong!'

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def is_operational(self) -> bool:
        return self.category is ErrorCategory.OPERATIONAL


class ValidationError(DomainError):
    """Input violates a business validation rule."""
    status_code = 400
    default_message = 'Invalid input.'


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""
    status_code = 400
    default_message = 'Resource already exists.'


class InvalidCredentialsError(DomainError):
    """Email/password pair does not match a user.

    Raised for both unknown emails and wrong passwords so callers
    cannot tell which one failed.
    """
    status_code = 401
    default_message = 'Invalid credentials.'


class UnauthorizedError(DomainError):
    """Request is not authenticated."""
    status_code = 401
    default_message = 'Not authorized.'


class TokenExpiredError(UnauthorizedError):
    default_message = 'Not authorized, token expired.'


class BadSignatureError(UnauthorizedError):
    default_message = 'Not authorized, token failed verification.'


class MalformedTokenError(UnauthorizedError):
    default_message = 'Not authorized, token is malformed.'


class NotFoundError(DomainError):
    """Requested entity does not exist."""
    status_code = 404
    default_message = 'Resource not found.'


class ServerError(DomainError):
    """Unexpected failure. The message is generic; the cause is only logged."""
    status_code = 500
    category = ErrorCategory.PROGRAMMING
    default_message = 'Server error.'


class PersistenceError(Exception):
    """Raised by storage adapters when the backing store fails.

    Not a DomainError: services must reclassify it as ServerError.
    """


class ConfigurationError(Exception):
    """Required process configuration is missing or invalid."""
