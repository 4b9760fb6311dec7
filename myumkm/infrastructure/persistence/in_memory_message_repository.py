"""In-memory MessageRepository. Messages are kept per channel in append order."""

from typing import Optional

from myumkm.domain.entities.message import Message
from myumkm.domain.ports.repositories import MessageRepository
from myumkm.domain.value_objects.conversation_id import ConversationId
from myumkm.infrastructure.persistence.in_memory_database import InMemoryDatabase


class InMemoryMessageRepository(MessageRepository):
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    async def add(self, message: Message) -> None:
        self._db.messages.setdefault(message.conversation_id.value, []).append(
            message
        )

    async def get_by_conversation(
        self, conversation_id: ConversationId
    ) -> list[Message]:
        messages = self._db.messages.get(conversation_id.value, [])
        # Stable sort keeps append order for equal timestamps
        return sorted(messages, key=lambda m: m.created_at)

    async def get_latest(self, conversation_id: ConversationId) -> Optional[Message]:
        messages = self._db.messages.get(conversation_id.value)
        return messages[-1] if messages else None
