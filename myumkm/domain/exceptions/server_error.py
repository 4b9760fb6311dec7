"""
ServerError - Raised when a collaborator (usually storage) fails unexpectedly.
Maps to: HTTP 500 Internal Server Error
"""

from myumkm.domain.exceptions.domain_error import DomainError


class ServerError(DomainError):
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
