from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a single requested document does not exist."""


class StoreUnavailableError(DomainError):
    """Raised when the document store is not configured or not reachable."""


class ConflictError(DomainError):
    """Raised when a conditional write finds a different document version."""

    def __init__(self, message: str, *, expected: int | None = None, actual: int | None = None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual
