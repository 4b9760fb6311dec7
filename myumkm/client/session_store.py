"""
Client-side session store.

Keeps the current credential in two channels:
- a durable JSON record on disk (the source of truth)
- the cookie jar shared with the HTTP client (what responses write into)

Reads reconcile in a fixed order: durable record first; if it holds nothing,
a cookie-only credential is migrated into it. Writes go durable first, then
cookie. The dual write is best-effort; a crash in between is repaired by the
next read.

Several stores attached to one file stay eventually consistent: every write
bumps a version stamp in the record and notifies the other in-process stores
on the same path. sync() re-reads the record for writers in other processes.
"""

from __future__ import annotations

import json
import logging
import os
import time
import weakref
from http.cookiejar import Cookie, CookieJar
from pathlib import Path
from typing import Awaitable, Callable, Dict, Optional

import jwt

from myumkm.client.errors import AuthenticationApiError

logger = logging.getLogger(__name__)

DEFAULT_SESSION_PATH = Path.home() / ".myumkm" / "session.json"
DEFAULT_COOKIE_NAME = "token"
DEFAULT_COOKIE_DOMAIN = "localhost"

Listener = Callable[[Optional[str]], None]

# resolved path -> stores attached to it
_peers: Dict[str, "weakref.WeakSet[SessionStore]"] = {}


def _atomic_write_json(path: Path, payload: Dict[str, object]) -> None:
    path = path.expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    content = json.dumps(payload, indent=2, sort_keys=True)

    fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write(content)
        handle.flush()
        os.fsync(handle.fileno())
    os.replace(tmp_path, path)


def _load_record(path: Path) -> Dict[str, object]:
    try:
        data = json.loads(path.expanduser().read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (json.JSONDecodeError, ValueError):
        logger.warning(f"Ignoring unreadable session file {path}")
        return {}
    return data if isinstance(data, dict) else {}


def read_expiry(token: str) -> Optional[int]:
    """exp claim of a credential, read without verifying it (the client never holds the secret)."""
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError:
        return None
    exp = claims.get("exp")
    return int(exp) if isinstance(exp, (int, float)) else None


class SessionStore:
    def __init__(
        self,
        path: Path = DEFAULT_SESSION_PATH,
        cookie_jar: Optional[CookieJar] = None,
        cookie_name: str = DEFAULT_COOKIE_NAME,
        cookie_domain: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.path = Path(path).expanduser()
        self.cookie_jar = cookie_jar if cookie_jar is not None else CookieJar()
        self.cookie_name = cookie_name
        self.cookie_domain = cookie_domain
        self._clock = clock
        self._listeners: list[Listener] = []
        # Identity snapshot from the last successful check_auth()
        self.identity: Optional[dict] = None

        record = _load_record(self.path)
        self._version = int(record.get("version") or 0)
        self._token: Optional[str] = record.get("token") or None

        _peers.setdefault(str(self.path.resolve()), weakref.WeakSet()).add(self)

    @property
    def version(self) -> int:
        return self._version

    # ==================== LISTENERS ====================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback fired when another store changes the credential."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._token)

    def _apply_record(self, record: Dict[str, object]) -> bool:
        version = int(record.get("version") or 0)
        if version == self._version:
            return False
        self._version = version
        token = record.get("token") or None
        if token != self._token:
            self._token = token
            self.identity = None
        # Cookie channel tracks the durable record
        if token is None:
            self._clear_cookie()
        elif self._cookie_token() != token:
            self._write_cookie(token)
        self._notify()
        return True

    def sync(self) -> bool:
        """Re-read the durable record; True (and listeners fired) when it changed."""
        return self._apply_record(_load_record(self.path))

    # ==================== DURABLE CHANNEL ====================

    def _write_durable(self, token: Optional[str]) -> None:
        current = _load_record(self.path)
        version = max(int(current.get("version") or 0), self._version) + 1
        record = {"token": token, "version": version, "updated_at": self._clock()}
        _atomic_write_json(self.path, record)
        self._version = version
        self._token = token

        for peer in list(_peers.get(str(self.path.resolve()), ())):
            if peer is not self:
                peer._apply_record(record)

    # ==================== COOKIE CHANNEL ====================

    def _cookie_token(self) -> Optional[str]:
        now = self._clock()
        for cookie in self.cookie_jar:
            if cookie.name == self.cookie_name and cookie.value:
                if not cookie.is_expired(now):
                    return cookie.value
        return None

    def _clear_cookie(self) -> None:
        stale = [c for c in self.cookie_jar if c.name == self.cookie_name]
        for cookie in stale:
            self.cookie_jar.clear(cookie.domain, cookie.path, cookie.name)

    def _write_cookie(self, token: str) -> None:
        self._clear_cookie()
        domain = self.cookie_domain or DEFAULT_COOKIE_DOMAIN
        self.cookie_jar.set_cookie(
            Cookie(
                version=0,
                name=self.cookie_name,
                value=token,
                port=None,
                port_specified=False,
                domain=domain,
                domain_specified=False,
                domain_initial_dot=False,
                path="/",
                path_specified=True,
                secure=False,
                expires=read_expiry(token),
                discard=False,
                comment=None,
                comment_url=None,
                rest={"HttpOnly": None},
            )
        )

    # ==================== PUBLIC API ====================

    def set_credential(self, token: Optional[str]) -> None:
        """Durable record first, then the cookie. None clears both."""
        self._write_durable(token)
        if token:
            self._write_cookie(token)
        else:
            self._clear_cookie()
            self.identity = None

    def get_credential(self) -> Optional[str]:
        record = _load_record(self.path)
        self._apply_record(record)
        token = record.get("token") or None
        if token:
            return token

        cookie_token = self._cookie_token()
        if cookie_token:
            logger.debug("Migrating cookie credential into the durable store")
            self._write_durable(cookie_token)
        return cookie_token

    def clear(self) -> None:
        self.set_credential(None)

    async def check_auth(
        self, fetch_identity: Callable[[str], Awaitable[dict]]
    ) -> Optional[dict]:
        """
        Confirm the stored credential with the server.

        An already expired credential is discarded without a round trip. A
        401 from fetch_identity clears the session; any other failure is
        raised and leaves the session as it was.
        """
        token = self.get_credential()
        if not token:
            self.identity = None
            return None

        exp = read_expiry(token)
        if exp is not None and exp <= self._clock():
            logger.info("Stored credential has expired; clearing session")
            self.clear()
            return None

        try:
            identity = await fetch_identity(token)
        except AuthenticationApiError:
            logger.info("Server rejected stored credential; clearing session")
            self.clear()
            return None

        self.identity = identity
        return identity
