"""
DOMAIN EXCEPTIONS - Business rule violations

These exceptions are raised by domain and application logic and caught by the
presentation layer, which maps each one to its HTTP status code.
"""

from myumkm.domain.exceptions.domain_error import DomainError
from myumkm.domain.exceptions.validation_error import DomainValidationError
from myumkm.domain.exceptions.authentication_error import AuthenticationError
from myumkm.domain.exceptions.access_denied import AccessDeniedError
from myumkm.domain.exceptions.entity_not_found import EntityNotFoundError
from myumkm.domain.exceptions.conflict_error import ConflictError
from myumkm.domain.exceptions.server_error import ServerError

__all__ = [
    "DomainError",
    "DomainValidationError",
    "AuthenticationError",
    "AccessDeniedError",
    "EntityNotFoundError",
    "ConflictError",
    "ServerError",
]
