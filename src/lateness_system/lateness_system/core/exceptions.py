class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced employee or row does not exist."""


class AllowanceConflictError(DomainError):
    """Raised when an allowance decrement no longer fits the stored balance."""
