"""
Credential Codec - issues and verifies the signed bearer credential (JWT, HS256).

Claims:
    {
        "subjectId": "user_...",
        "email": "a@x.com",
        "name": "Optional display name",
        "iss": "my-umkm",
        "aud": "user",
        "iat": <epoch seconds>,
        "exp": iat + 30 days
    }

The credential is stateless: nothing is stored server-side, so it can only be
invalidated by client-side deletion or natural expiry.

Every verification failure (bad signature, wrong issuer/audience, expired,
malformed, missing claims) surfaces as one InvalidCredentialError so callers
cannot be used as an oracle. The underlying reason is only logged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_ISSUER = "my-umkm"
DEFAULT_AUDIENCE = "user"
DEFAULT_TTL = timedelta(days=30)
REQUIRED_CLAIMS = ["exp", "iat", "aud", "iss", "subjectId", "email"]


class ConfigurationError(RuntimeError):
    """Raised when the signing secret is not configured."""


class InvalidCredentialError(Exception):
    """Raised for any credential that fails verification."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


@dataclass(frozen=True)
class CredentialClaims:
    subject_id: str
    email: str
    issuer: str
    audience: str
    issued_at: datetime
    expires_at: datetime
    name: Optional[str] = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CredentialCodec:
    def __init__(
        self,
        secret: str,
        issuer: str = DEFAULT_ISSUER,
        audience: str = DEFAULT_AUDIENCE,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ):
        if not secret:
            raise ConfigurationError(
                "JWT_SECRET is not configured; credentials cannot be signed"
            )
        self._secret = secret
        self._issuer = issuer
        self._audience = audience
        self._ttl = ttl
        self._clock = clock

    @classmethod
    def from_config(cls, config) -> CredentialCodec:
        return cls(
            secret=config.JWT_SECRET,
            issuer=config.JWT_ISSUER,
            audience=config.JWT_AUDIENCE,
            ttl=timedelta(days=config.TOKEN_TTL_DAYS),
        )

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, subject_id: str, email: str, name: Optional[str] = None) -> str:
        """Sign a new credential for an identity."""
        issued_at = int(self._clock().timestamp())
        payload = {
            "subjectId": subject_id,
            "email": email,
            "iss": self._issuer,
            "aud": self._audience,
            "iat": issued_at,
            "exp": issued_at + int(self._ttl.total_seconds()),
        }
        if name:
            payload["name"] = name
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> CredentialClaims:
        """
        Verify signature, issuer, audience and expiry.

        Raises:
            InvalidCredentialError: for any failure, whatever the reason
        """
        if not token:
            raise InvalidCredentialError()
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.InvalidTokenError as e:
            logger.debug(f"Credential rejected: {type(e).__name__}: {e}")
            raise InvalidCredentialError() from None

        subject_id = claims.get("subjectId")
        email = claims.get("email")
        if not isinstance(subject_id, str) or not subject_id or not isinstance(email, str):
            logger.debug("Credential rejected: malformed identity claims")
            raise InvalidCredentialError()

        return CredentialClaims(
            subject_id=subject_id,
            email=email,
            name=claims.get("name"),
            issuer=claims["iss"],
            audience=claims["aud"],
            issued_at=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
        )
