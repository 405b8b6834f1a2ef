# core/exceptions.py

class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str,*, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when caller-supplied data cannot be used at all."""


class NotFoundError(DomainError):
    """Raised when an activity (or another looked-up entity) is not found."""
