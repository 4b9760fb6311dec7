"""
Message Repository Port - Interface for message persistence.
Implementations: myumkm/infrastructure/persistence/{in_memory,prisma}_message_repository.py
"""

from abc import ABC, abstractmethod
from typing import Optional

from myumkm.domain.entities.message import Message
from myumkm.domain.value_objects.conversation_id import ConversationId


class MessageRepository(ABC):
    @abstractmethod
    async def add(self, message: Message) -> None: ...

    @abstractmethod
    async def get_by_conversation(
        self, conversation_id: ConversationId
    ) -> list[Message]:
        """All messages of a channel in ascending creation order."""
        ...

    @abstractmethod
    async def get_latest(
        self, conversation_id: ConversationId
    ) -> Optional[Message]: ...
