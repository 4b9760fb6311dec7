"""Chat DTOs for API request/response."""

from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from myumkm.domain.entities.message import Message
from myumkm.domain.entities.user import User


class ParticipantDTO(BaseModel):
    id: str
    name: str

    @classmethod
    def from_entity(cls, user: User) -> ParticipantDTO:
        return cls(id=user.id.value, name=user.name)


class MessageDTO(BaseModel):
    """DTO for message data returned to the client."""

    id: str
    conversation_id: str
    author_id: str
    content: str
    created_at: datetime
    author: Optional[ParticipantDTO] = None

    @classmethod
    def from_entity(
        cls, message: Message, author: Optional[User] = None
    ) -> MessageDTO:
        return cls(
            id=message.id.value,
            conversation_id=message.conversation_id.value,
            author_id=message.author_id.value,
            content=message.content,
            created_at=message.created_at,
            author=ParticipantDTO.from_entity(author) if author else None,
        )
