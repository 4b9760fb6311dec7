"""Security primitives: credential signing and password verifiers."""

from myumkm.infrastructure.security.credential_codec import (
    ConfigurationError,
    CredentialClaims,
    CredentialCodec,
    InvalidCredentialError,
)
from myumkm.infrastructure.security.password_hasher import PasswordHasher

__all__ = [
    "ConfigurationError",
    "CredentialClaims",
    "CredentialCodec",
    "InvalidCredentialError",
    "PasswordHasher",
]
