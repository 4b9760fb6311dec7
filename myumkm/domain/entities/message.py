"""
Message Entity - A single, immutable message in a conversation.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from myumkm.domain.exceptions import DomainValidationError
from myumkm.domain.value_objects.conversation_id import ConversationId
from myumkm.domain.value_objects.message_id import MessageId
from myumkm.domain.value_objects.user_id import UserId

# Smallest step the server clock is advanced by to keep a channel strictly ordered
TIMESTAMP_STEP = timedelta(microseconds=1)


@dataclass(frozen=True)
class Message:
    id: MessageId
    conversation_id: ConversationId
    author_id: UserId
    content: str
    created_at: datetime

    def __post_init__(self):
        if not self.content or not self.content.strip():
            raise DomainValidationError("Message content cannot be empty")

    @classmethod
    def create(
        cls,
        conversation_id: ConversationId,
        author_id: UserId,
        content: str,
        previous: Optional[Message] = None,
        now: Optional[datetime] = None,
    ) -> Message:
        """
        Factory method to create a new Message with a generated ID and a
        server timestamp strictly after `previous` (the channel's latest
        message), even when the wall clock has not advanced.
        """
        content = (content or "").strip()
        if not content:
            raise DomainValidationError("Message content cannot be empty")

        created_at = now or datetime.now(timezone.utc)
        if previous is not None and created_at <= previous.created_at:
            created_at = previous.created_at + TIMESTAMP_STEP

        return cls(
            id=MessageId.generate(),
            conversation_id=conversation_id,
            author_id=author_id,
            content=content,
            created_at=created_at,
        )
