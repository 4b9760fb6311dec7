"""
Async client for the MyUMKM API.

Every request carries `Authorization: Bearer <credential>` from the session
store. The underlying httpx client shares the session store's cookie jar, so
a `token` cookie set by any response lands directly in the store's cookie
channel.
"""

import logging
from typing import Any, Optional

import httpx

from myumkm.client.errors import ApiError
from myumkm.client.session_store import SessionStore
from myumkm.client.timeline import ConversationTimeline

logger = logging.getLogger(__name__)

DEFAULT_API_PREFIX = "/api"
DEFAULT_TIMEOUT = 30.0


class MyUmkmClient:
    def __init__(
        self,
        base_url: str,
        session_store: SessionStore,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        api_prefix: str = DEFAULT_API_PREFIX,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.session = session_store
        if self.session.cookie_domain is None:
            self.session.cookie_domain = httpx.URL(base_url).host
        self._api_prefix = api_prefix.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            cookies=session_store.cookie_jar,
            timeout=timeout,
        )

    async def __aenter__(self) -> "MyUmkmClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[dict] = None,
        params: Optional[dict] = None,
        token: Optional[str] = None,
    ) -> Any:
        """
        Raises:
            ApiError: subclass matching the response status, for any status >= 400
        """
        headers = {}
        token = token or self.session.get_credential()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        response = await self._http.request(
            method,
            f"{self._api_prefix}{path}",
            json=json,
            params=params,
            headers=headers,
        )
        if response.status_code >= 400:
            error = ApiError.from_response(response)
            logger.debug(f"{method} {path} failed: {error}")
            raise error
        return response.json()

    # ==================== AUTH ====================

    async def register(self, name: str, email: str, password: str) -> dict:
        data = await self._request(
            "POST",
            "/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        return data["user"]

    async def login(self, email: str, password: str) -> dict:
        """Log in and persist the returned credential in the session store."""
        data = await self._request(
            "POST", "/auth/login", json={"email": email, "password": password}
        )
        self.session.set_credential(data["token"])
        self.session.identity = data["user"]
        return data["user"]

    async def logout(self) -> None:
        """Drop the session locally even when the server call fails."""
        try:
            await self._request("POST", "/auth/logout")
        finally:
            self.session.clear()

    async def me(self, token: Optional[str] = None) -> dict:
        return await self._request("GET", "/auth/me", token=token)

    async def check_auth(self) -> Optional[dict]:
        """Identity confirmed by the server for the stored credential, or None."""
        return await self.session.check_auth(lambda token: self.me(token=token))

    # ==================== USERS ====================

    async def list_users(self) -> list[dict]:
        data = await self._request("GET", "/users")
        return data["users"]

    # ==================== CONVERSATIONS ====================

    async def list_conversations(self) -> list[dict]:
        data = await self._request("GET", "/conversations")
        return data["conversations"]

    async def open_conversation(self, other_id: str) -> dict:
        """The one conversation with other_id, created on first contact."""
        data = await self._request(
            "GET", "/conversations", params={"userId": other_id}
        )
        return data["conversations"][0]

    async def start_conversation(self, other_id: str, content: Optional[str] = None) -> dict:
        payload = {"recipientId": other_id}
        if content:
            payload["content"] = content
        return await self._request("POST", "/conversations", json=payload)

    # ==================== MESSAGES ====================

    async def list_messages(self, conversation_id: str) -> list[dict]:
        data = await self._request("GET", f"/conversations/{conversation_id}/messages")
        return data["messages"]

    async def send_message(self, conversation_id: str, content: str) -> dict:
        return await self._request(
            "POST",
            f"/conversations/{conversation_id}/messages",
            json={"content": content},
        )

    def timeline(self, conversation_id: str, author_id: str) -> ConversationTimeline:
        """Optimistic timeline whose submissions go through send_message."""
        return ConversationTimeline(
            conversation_id=conversation_id,
            author_id=author_id,
            send=lambda content: self.send_message(conversation_id, content),
        )

    async def refresh_timeline(self, timeline: ConversationTimeline) -> ConversationTimeline:
        timeline.merge_server_history(await self.list_messages(timeline.conversation_id))
        return timeline
