"""
EntityNotFoundError - Raised when a requested entity does not exist
(or is not visible to the caller).
Maps to: HTTP 404 Not Found
"""

from myumkm.domain.exceptions.domain_error import DomainError


class EntityNotFoundError(DomainError):
    """Exception raised when a requested entity is not found."""

    status_code = 404

    def __init__(self, message: str = "The requested entity was not found."):
        super().__init__(message)
