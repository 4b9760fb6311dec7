"""
AccessDeniedError - Raised when a verified identity lacks permission to access a resource.
Maps to: HTTP 403 Forbidden
"""

from myumkm.domain.exceptions.domain_error import DomainError


class AccessDeniedError(DomainError):
    """Raised when user lacks permission to access a resource"""

    status_code = 403

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)
