"""
Conversation Entity - The shared direct-message channel between two identities.

Participants are stored in canonical (sorted) order so that the unordered
pair {A, B} always yields the same pair_key, which the storage layer keeps
unique.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from myumkm.domain.exceptions import DomainValidationError
from myumkm.domain.value_objects.conversation_id import ConversationId
from myumkm.domain.value_objects.user_id import UserId

if TYPE_CHECKING:
    from myumkm.domain.entities.message import Message

PAIR_KEY_SEPARATOR = ":"


@dataclass
class Conversation:
    id: ConversationId
    participant_ids: tuple[UserId, UserId]
    created_at: datetime
    updated_at: datetime
    # Populated by list queries only
    last_message: Optional[Message] = None

    def __post_init__(self):
        if len(self.participant_ids) != 2:
            raise ValueError("A conversation has exactly two participants")
        self.participant_ids = tuple(sorted(self.participant_ids))

    @staticmethod
    def pair_key_for(first: UserId, second: UserId) -> str:
        low, high = sorted((first, second))
        return f"{low.value}{PAIR_KEY_SEPARATOR}{high.value}"

    @classmethod
    def between(cls, self_id: UserId, other_id: UserId) -> Conversation:
        """Factory for a new channel between two distinct identities."""
        if self_id == other_id:
            raise DomainValidationError("Cannot start a conversation with yourself")
        now = datetime.now(timezone.utc)
        return cls(
            id=ConversationId.generate(),
            participant_ids=(self_id, other_id),
            created_at=now,
            updated_at=now,
        )

    @property
    def pair_key(self) -> str:
        return self.pair_key_for(*self.participant_ids)

    def has_participant(self, user_id: UserId) -> bool:
        return user_id in self.participant_ids

    def touch(self, at: datetime) -> None:
        if at > self.updated_at:
            self.updated_at = at
