"""
Prisma Conversation Repository Implementation.

Prisma model fields: id, participant_a_id, participant_b_id, pair_key
(@unique), created_at, updated_at. participant_a_id/participant_b_id hold the
canonical (sorted) order.

get_or_create closes the lookup-then-create race with the unique constraint
on pair_key: it tries the insert and, when another request won the race
(UniqueViolationError), re-reads the row that request stored.
"""

import logging
from datetime import datetime
from typing import Optional
from prisma import Prisma
from prisma.errors import PrismaError, UniqueViolationError
from prisma.models import Conversation as PrismaConversation
from myumkm.domain.entities.conversation import Conversation
from myumkm.domain.exceptions import ServerError
from myumkm.domain.ports.repositories import ConversationRepository
from myumkm.domain.value_objects.conversation_id import ConversationId
from myumkm.domain.value_objects.user_id import UserId
from myumkm.infrastructure.persistence.prisma_message_repository import (
    PrismaMessageRepository,
)

logger = logging.getLogger(__name__)


class PrismaConversationRepository(ConversationRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaConversation) -> Conversation:
        """Map Prisma record to domain entity."""
        conversation = Conversation(
            id=ConversationId(record.id),
            participant_ids=(
                UserId(record.participant_a_id),
                UserId(record.participant_b_id),
            ),
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
        if record.messages:
            conversation.last_message = PrismaMessageRepository.to_entity(
                record.messages[0]
            )
        return conversation

    async def get_by_id(
        self, conversation_id: ConversationId
    ) -> Optional[Conversation]:
        record = await self._prisma.conversation.find_unique(
            where={"id": conversation_id.value}
        )
        return self._to_entity(record) if record else None

    async def get_for_participant(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Optional[Conversation]:
        record = await self._prisma.conversation.find_first(
            where={
                "id": conversation_id.value,
                "OR": [
                    {"participant_a_id": user_id.value},
                    {"participant_b_id": user_id.value},
                ],
            }
        )
        return self._to_entity(record) if record else None

    async def get_or_create(
        self, candidate: Conversation
    ) -> tuple[Conversation, bool]:
        existing = await self._prisma.conversation.find_unique(
            where={"pair_key": candidate.pair_key}
        )
        if existing:
            return self._to_entity(existing), False

        first, second = candidate.participant_ids
        try:
            record = await self._prisma.conversation.create(
                data={
                    "id": candidate.id.value,
                    "participant_a_id": first.value,
                    "participant_b_id": second.value,
                    "pair_key": candidate.pair_key,
                    "created_at": candidate.created_at,
                    "updated_at": candidate.updated_at,
                }
            )
            return self._to_entity(record), True
        except UniqueViolationError:
            logger.info(
                f"[Conversation] Concurrent create for pair {candidate.pair_key}, re-reading"
            )

        record = await self._prisma.conversation.find_unique(
            where={"pair_key": candidate.pair_key}
        )
        if record is None:
            raise ServerError("Conversation vanished after a unique violation")
        return self._to_entity(record), False

    async def list_for_user(self, user_id: UserId, limit: int) -> list[Conversation]:
        """Get conversations for user, ordered by updated_at desc."""
        try:
            records = await self._prisma.conversation.find_many(
                where={
                    "OR": [
                        {"participant_a_id": user_id.value},
                        {"participant_b_id": user_id.value},
                    ]
                },
                order={"updated_at": "desc"},
                take=limit,
                include={
                    "messages": {
                        "order_by": {"created_at": "desc"},
                        "take": 1,
                    }
                },
            )
        except PrismaError as e:
            raise ServerError("Failed to load conversations") from e
        return [self._to_entity(record) for record in records]

    async def touch(
        self, conversation_id: ConversationId, updated_at: datetime
    ) -> None:
        await self._prisma.conversation.update(
            where={"id": conversation_id.value},
            data={"updated_at": updated_at},
        )
