"""
ConflictError - Raised when creating a resource that already exists.
Maps to: HTTP 409 Conflict
"""

from myumkm.domain.exceptions.domain_error import DomainError


class ConflictError(DomainError):
    status_code = 409

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message)
