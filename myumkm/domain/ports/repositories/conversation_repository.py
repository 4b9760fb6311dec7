"""
Conversation Repository Port - Interface for channel persistence.
Implementations: myumkm/infrastructure/persistence/{in_memory,prisma}_conversation_repository.py
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from myumkm.domain.entities.conversation import Conversation
from myumkm.domain.value_objects.conversation_id import ConversationId
from myumkm.domain.value_objects.user_id import UserId


class ConversationRepository(ABC):
    @abstractmethod
    async def get_by_id(
        self, conversation_id: ConversationId
    ) -> Optional[Conversation]: ...

    @abstractmethod
    async def get_for_participant(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Optional[Conversation]:
        """Lookup scoped to a participant: None when missing or not a member."""
        ...

    @abstractmethod
    async def get_or_create(
        self, candidate: Conversation
    ) -> tuple[Conversation, bool]:
        """
        Atomically return the channel stored under candidate.pair_key, inserting
        `candidate` when none exists. The flag is True when it was inserted.
        """
        ...

    @abstractmethod
    async def list_for_user(
        self, user_id: UserId, limit: int
    ) -> list[Conversation]:
        """Channels of a user, most recently updated first, with last_message."""
        ...

    @abstractmethod
    async def touch(
        self, conversation_id: ConversationId, updated_at: datetime
    ) -> None: ...
