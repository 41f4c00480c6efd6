class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class NotFoundError(DomainError):
    """Raised when a subject or record is not in the current user's data."""


class RemoteStoreError(DomainError):
    """Raised when the backing store rejects or fails an operation."""
