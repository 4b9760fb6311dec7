"""
In-memory ConversationRepository.

get_or_create performs its lookup and insert under the database write lock,
which makes it the atomic insert-if-absent keyed by pair_key that the
resolver relies on: two concurrent resolutions of one pair always end up
with the same channel.
"""

import copy
from datetime import datetime
from typing import Optional

from myumkm.domain.entities.conversation import Conversation
from myumkm.domain.ports.repositories import ConversationRepository
from myumkm.domain.value_objects.conversation_id import ConversationId
from myumkm.domain.value_objects.user_id import UserId
from myumkm.infrastructure.persistence.in_memory_database import InMemoryDatabase


class InMemoryConversationRepository(ConversationRepository):
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    def _copy(self, conversation: Conversation) -> Conversation:
        result = copy.copy(conversation)
        result.last_message = None
        return result

    async def get_by_id(
        self, conversation_id: ConversationId
    ) -> Optional[Conversation]:
        conversation = self._db.conversations.get(conversation_id.value)
        return self._copy(conversation) if conversation else None

    async def get_for_participant(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Optional[Conversation]:
        conversation = self._db.conversations.get(conversation_id.value)
        if conversation is None or not conversation.has_participant(user_id):
            return None
        return self._copy(conversation)

    async def get_or_create(
        self, candidate: Conversation
    ) -> tuple[Conversation, bool]:
        async with self._db.write_lock:
            existing_id = self._db.conversations_by_pair.get(candidate.pair_key)
            if existing_id is not None:
                return self._copy(self._db.conversations[existing_id]), False

            stored = self._copy(candidate)
            self._db.conversations[stored.id.value] = stored
            self._db.conversations_by_pair[stored.pair_key] = stored.id.value
            self._db.messages.setdefault(stored.id.value, [])
            return self._copy(stored), True

    async def list_for_user(self, user_id: UserId, limit: int) -> list[Conversation]:
        owned = [
            c for c in self._db.conversations.values() if c.has_participant(user_id)
        ]
        owned.sort(key=lambda c: c.updated_at, reverse=True)

        result = []
        for conversation in owned[:limit]:
            item = self._copy(conversation)
            messages = self._db.messages.get(conversation.id.value) or []
            item.last_message = messages[-1] if messages else None
            result.append(item)
        return result

    async def touch(
        self, conversation_id: ConversationId, updated_at: datetime
    ) -> None:
        conversation = self._db.conversations.get(conversation_id.value)
        if conversation is not None:
            conversation.touch(updated_at)
