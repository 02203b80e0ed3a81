from __future__ import annotations


class DomainError(Exception):
    """Base class for errors raised by taskmind's domain and storage layers."""


class NotFoundError(DomainError):
    """Referenced record does not exist. Message always contains 'not found'."""


class ConflictError(DomainError):
    """Write would violate a uniqueness rule (e.g. duplicate category name)."""


class ValidationError(DomainError):
    """Input failed a domain rule."""


class AIServiceError(DomainError):
    """The AI completion service failed or is not configured."""
