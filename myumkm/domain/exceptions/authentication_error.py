"""
AuthenticationError - Raised when a credential is missing, invalid or expired,
or when a login attempt fails.
Maps to: HTTP 401 Unauthorized
"""

from myumkm.domain.exceptions.domain_error import DomainError


class AuthenticationError(DomainError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)
