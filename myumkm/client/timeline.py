"""
Optimistic message timeline for one conversation.

A submitted message is shown at once as a PendingMessage under a
client-generated temp id, then:
- on success, replaced in place by the server's ConfirmedMessage
- on failure, removed, and the error re-raised to the caller

Matching is by temp id only, never by content, so identical texts sent in a
row reconcile correctly even when responses arrive out of order. There is no
automatic retry.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, Iterator, Optional, Union

TEMP_ID_PREFIX = "temp-"

Sender = Callable[[str], Awaitable[dict]]


def new_temp_id() -> str:
    return f"{TEMP_ID_PREFIX}{uuid.uuid4().hex}"


def _parse_timestamp(value) -> datetime:
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


@dataclass(frozen=True)
class PendingMessage:
    temp_id: str
    conversation_id: str
    author_id: str
    content: str
    created_at: datetime


@dataclass(frozen=True)
class ConfirmedMessage:
    id: str
    conversation_id: str
    author_id: str
    content: str
    created_at: datetime

    @classmethod
    def from_payload(cls, data: dict) -> ConfirmedMessage:
        return cls(
            id=data["id"],
            conversation_id=data["conversation_id"],
            author_id=data["author_id"],
            content=data["content"],
            created_at=_parse_timestamp(data["created_at"]),
        )


TimelineEntry = Union[PendingMessage, ConfirmedMessage]


class ConversationTimeline:
    def __init__(
        self,
        conversation_id: str,
        author_id: str,
        send: Optional[Sender] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.conversation_id = conversation_id
        self.author_id = author_id
        self._send = send
        self._clock = clock
        self._entries: list[TimelineEntry] = []

    def __iter__(self) -> Iterator[TimelineEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[TimelineEntry]:
        return list(self._entries)

    @property
    def pending(self) -> list[PendingMessage]:
        return [e for e in self._entries if isinstance(e, PendingMessage)]

    def _index_of_temp(self, temp_id: str) -> Optional[int]:
        for i, entry in enumerate(self._entries):
            if isinstance(entry, PendingMessage) and entry.temp_id == temp_id:
                return i
        return None

    def _has_confirmed(self, message_id: str) -> bool:
        return any(
            isinstance(e, ConfirmedMessage) and e.id == message_id for e in self._entries
        )

    def add_pending(self, content: str) -> PendingMessage:
        content = (content or "").strip()
        if not content:
            raise ValueError("Message content cannot be empty")
        entry = PendingMessage(
            temp_id=new_temp_id(),
            conversation_id=self.conversation_id,
            author_id=self.author_id,
            content=content,
            created_at=self._clock(),
        )
        self._entries.append(entry)
        return entry

    def confirm(self, temp_id: str, message: Union[ConfirmedMessage, dict]) -> ConfirmedMessage:
        """Replace the pending entry in place with the server's record."""
        if isinstance(message, dict):
            message = ConfirmedMessage.from_payload(message)

        index = self._index_of_temp(temp_id)
        if self._has_confirmed(message.id):
            # A history merge already delivered it
            if index is not None:
                del self._entries[index]
        elif index is not None:
            self._entries[index] = message
        else:
            self._entries.append(message)
        return message

    def discard(self, temp_id: str) -> bool:
        index = self._index_of_temp(temp_id)
        if index is None:
            return False
        del self._entries[index]
        return True

    async def submit(self, content: str, send: Optional[Sender] = None) -> ConfirmedMessage:
        send = send or self._send
        if send is None:
            raise RuntimeError("No sender configured for this timeline")

        pending = self.add_pending(content)
        try:
            payload = await send(pending.content)
        except BaseException:
            # Includes cancellation of the send
            self.discard(pending.temp_id)
            raise
        return self.confirm(pending.temp_id, payload)

    def merge_server_history(self, messages: list) -> None:
        """Take the server's ordered history, keeping still-pending entries after it."""
        confirmed = [
            m if isinstance(m, ConfirmedMessage) else ConfirmedMessage.from_payload(m)
            for m in messages
        ]
        self._entries = confirmed + self.pending
