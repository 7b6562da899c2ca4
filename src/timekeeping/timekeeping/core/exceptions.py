class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced event, worker or code does not exist."""


class ConflictError(DomainError):
    """Raised when a clock action is not allowed in the worker's current state."""


class StoreError(DomainError):
    """Raised when a backing store rejects a read or write."""
