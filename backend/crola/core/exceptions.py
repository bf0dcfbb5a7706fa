"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class CrolaError(Exception):
    """Base exception for crola."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(CrolaError):
    """Resource not found (or not owned by the caller)."""

    pass


class DuplicateError(CrolaError):
    """Duplicate resource detected."""

    pass


class ValidationError(CrolaError):
    """Validation error."""

    pass


class LLMError(CrolaError):
    """Completion API call failed or returned nothing usable."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, details={"status_code": status_code} if status_code else None)
        self.status_code = status_code
