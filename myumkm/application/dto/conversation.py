"""Conversation DTOs for API request/response."""

from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from myumkm.application.dto.chat import MessageDTO, ParticipantDTO
from myumkm.domain.entities.conversation import Conversation
from myumkm.domain.entities.user import User
from myumkm.domain.value_objects.user_id import UserId


class ConversationDTO(BaseModel):
    id: str
    participants: list[ParticipantDTO]
    created_at: datetime
    updated_at: datetime
    last_message: Optional[MessageDTO] = None

    @classmethod
    def from_entity(
        cls, conversation: Conversation, users: dict[UserId, User]
    ) -> ConversationDTO:
        participants = [
            ParticipantDTO.from_entity(users[user_id])
            if user_id in users
            else ParticipantDTO(id=user_id.value, name="")
            for user_id in conversation.participant_ids
        ]
        last = conversation.last_message
        return cls(
            id=conversation.id.value,
            participants=participants,
            created_at=conversation.created_at,
            updated_at=conversation.updated_at,
            last_message=MessageDTO.from_entity(last, users.get(last.author_id))
            if last
            else None,
        )
