from __future__ import annotations


class DomainError(Exception):
    pass


class ValidationError(DomainError):
    pass


class InvalidIdentityError(ValidationError):
    pass


class DuplicateIdentityError(ValidationError):
    pass


class InvalidStateError(DomainError):
    """Raised when a Result is built or read in a way that breaks its contract."""
