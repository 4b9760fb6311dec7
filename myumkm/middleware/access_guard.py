"""
Access Guard - gate between the network and every protected route.

Per request:
1. Path classification: public prefixes bypass authentication. A prefix
   matches itself and any sub-path ("/forum" covers "/forum/123" but not
   "/forum-x"); "/" matches only the root.
2. Extraction: `Authorization: Bearer <token>` first, else the session cookie.
3. Verification through the CredentialCodec.
4. Outcome:
   - allowed: claims attached as request.state.identity
   - rejected: API route (under the API prefix) → 401 {"error": ...}
   - redirected: page route → 303 to the login page with
     ?callbackUrl=<original URL>; an invalid cookie is cleared

Each request is evaluated on its own. There is no retry.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from myumkm.config.settings import Config
from myumkm.infrastructure.security.credential_codec import (
    CredentialClaims,
    CredentialCodec,
    InvalidCredentialError,
)
from myumkm.presentation.cookies import clear_auth_cookie

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


class GuardOutcome(str, enum.Enum):
    ALLOWED = "allowed"
    REDIRECTED = "redirected"
    REJECTED = "rejected"


@dataclass(frozen=True)
class GuardDecision:
    outcome: GuardOutcome
    claims: Optional[CredentialClaims] = None
    # The credential came from the cookie and failed verification
    clear_cookie: bool = False
    reason: str = ""


class AccessGuard:
    def __init__(self, codec: CredentialCodec, config=Config):
        self._codec = codec
        self._config = config
        self._public_paths = tuple(config.PUBLIC_PATHS)
        self._api_prefix = config.API_PREFIX.rstrip("/")

    def is_public(self, path: str) -> bool:
        for prefix in self._public_paths:
            if prefix == "/":
                if path == "/":
                    return True
            elif path == prefix or path.startswith(prefix + "/"):
                return True
        return False

    def is_api(self, path: str) -> bool:
        return path == self._api_prefix or path.startswith(self._api_prefix + "/")

    def extract(self, request: Request) -> tuple[Optional[str], bool]:
        """Return (token, from_cookie). The header wins over the cookie."""
        header = request.headers.get("Authorization", "")
        if header[: len(BEARER_PREFIX)].lower() == BEARER_PREFIX:
            token = header[len(BEARER_PREFIX):].strip()
            if token:
                return token, False
        token = request.cookies.get(self._config.AUTH_COOKIE_NAME)
        if token:
            return token, True
        return None, False

    def evaluate(self, request: Request) -> GuardDecision:
        path = request.url.path
        if self.is_public(path):
            return GuardDecision(GuardOutcome.ALLOWED)

        denied = GuardOutcome.REJECTED if self.is_api(path) else GuardOutcome.REDIRECTED

        token, from_cookie = self.extract(request)
        if not token:
            return GuardDecision(denied, reason="Unauthorized")

        try:
            claims = self._codec.verify(token)
        except InvalidCredentialError as e:
            return GuardDecision(denied, clear_cookie=from_cookie, reason=str(e))

        return GuardDecision(GuardOutcome.ALLOWED, claims=claims)

    def login_redirect_url(self, request: Request) -> str:
        return f"{self._config.LOGIN_PATH}?{urlencode({'callbackUrl': str(request.url)})}"


class AccessGuardMiddleware(BaseHTTPMiddleware):
    """Applies AccessGuard decisions before any route runs."""

    def __init__(self, app, codec: CredentialCodec, config=Config):
        super().__init__(app)
        self.guard = AccessGuard(codec, config)
        self._config = config

    async def dispatch(self, request: Request, call_next):
        decision = self.guard.evaluate(request)

        if decision.outcome is GuardOutcome.ALLOWED:
            if decision.claims is not None:
                request.state.identity = decision.claims
            return await call_next(request)

        logger.info(
            f"[AccessGuard] {decision.outcome.value} {request.method} {request.url.path}"
        )

        if decision.outcome is GuardOutcome.REJECTED:
            response = JSONResponse(status_code=401, content={"error": decision.reason})
        else:
            response = RedirectResponse(
                url=self.guard.login_redirect_url(request), status_code=303
            )

        if decision.clear_cookie:
            clear_auth_cookie(response, config=self._config)
        return response
