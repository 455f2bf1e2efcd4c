class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class ConflictError(DomainError):
    """Raised when a record with the same identity already exists."""


class InternalError(DomainError):
    """Raised when the store or the hashing primitive fails.

    The message is meant for logs only; callers surface a generic error.
    """
