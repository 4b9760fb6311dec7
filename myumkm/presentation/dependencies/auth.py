"""
Authentication dependencies for FastAPI.

- get_current_user: identity the access guard attached to the request
  (request.state.identity). Used by every protected API route.
- get_bearer_user: verifies the `Authorization: Bearer` header itself. Used by
  GET /api/auth/me, which sits under the public /api/auth prefix and must
  only ever trust an explicit header, never the cookie.
"""

from dataclasses import dataclass
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from myumkm.domain.exceptions import AuthenticationError
from myumkm.domain.value_objects.user_id import UserId
from myumkm.infrastructure.security.credential_codec import (
    CredentialClaims,
    CredentialCodec,
    InvalidCredentialError,
)


@dataclass
class AuthUser:
    id: UserId
    email: str
    name: Optional[str] = None

    def __post_init__(self):
        if not self.id or not self.email:
            raise ValueError("AuthUser must have both id and email defined.")

    @classmethod
    def from_claims(cls, claims: CredentialClaims) -> "AuthUser":
        return cls(id=UserId(claims.subject_id), email=claims.email, name=claims.name)


security = HTTPBearer(auto_error=False)


async def get_current_user(request: Request) -> AuthUser:
    claims = getattr(request.state, "identity", None)
    if claims is None:
        raise AuthenticationError()
    return AuthUser.from_claims(claims)


async def get_bearer_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthUser:
    """
    Raises:
        AuthenticationError: header missing, or the credential fails verification
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    codec: CredentialCodec = request.app.state.credential_codec
    try:
        claims = codec.verify(credentials.credentials)
    except InvalidCredentialError as e:
        raise AuthenticationError(str(e)) from None
    return AuthUser.from_claims(claims)
