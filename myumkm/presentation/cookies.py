"""
Session cookie contract.

`token`: HttpOnly, Secure in production, SameSite=Lax, Path=/, Max-Age equal
to the credential lifetime. Cleared with Max-Age=0 and an expiry in the past.
"""

from typing import Optional

from starlette.responses import Response

from myumkm.config.settings import Config


def set_auth_cookie(response: Response, token: str, config=Config, max_age: Optional[int] = None):
    if max_age is None:
        max_age = config.TOKEN_TTL_DAYS * 24 * 60 * 60
    response.set_cookie(
        key=config.AUTH_COOKIE_NAME,
        value=token,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=config.is_production(),
        samesite="lax",
    )


def clear_auth_cookie(response: Response, config=Config):
    response.delete_cookie(
        key=config.AUTH_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=config.is_production(),
        samesite="lax",
    )
