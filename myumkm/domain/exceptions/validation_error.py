"""
DomainValidationError - Raised when input is missing or malformed.
Maps to: HTTP 400 Bad Request
"""

from myumkm.domain.exceptions.domain_error import DomainError


class DomainValidationError(DomainError):
    """Exception raised for domain validation errors."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
