from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigurationError(DomainError):
    """Raised when a required setting (recipient, API key) is missing."""


class ReportGenerationError(DomainError):
    """Raised when a generation run is aborted by a store failure."""

    def __init__(self, message: str, *, staff_id: Optional[int] = None):
        super().__init__(message)
        self.staff_id = staff_id
