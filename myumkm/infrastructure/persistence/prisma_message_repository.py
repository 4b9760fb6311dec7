"""
Prisma Message Repository Implementation.

Prisma Message Model (from schema.prisma):
    model Message {
        id              String       @id @default(uuid())
        conversation_id String
        author_id       String
        content         String
        created_at      DateTime     @default(now())
    }
"""

from typing import Optional
from prisma import Prisma
from prisma.models import Message as PrismaMessage
from myumkm.domain.entities.message import Message
from myumkm.domain.ports.repositories import MessageRepository
from myumkm.domain.value_objects.conversation_id import ConversationId
from myumkm.domain.value_objects.message_id import MessageId
from myumkm.domain.value_objects.user_id import UserId


class PrismaMessageRepository(MessageRepository):
    """Handles persistence of Message entities to PostgreSQL via Prisma."""

    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    @staticmethod
    def to_entity(record: PrismaMessage) -> Message:
        return Message(
            id=MessageId(record.id),
            conversation_id=ConversationId(record.conversation_id),
            author_id=UserId(record.author_id),
            content=record.content,
            created_at=record.created_at,
        )

    async def add(self, message: Message) -> None:
        await self._prisma.message.create(
            data={
                "id": message.id.value,
                "conversation_id": message.conversation_id.value,
                "author_id": message.author_id.value,
                "content": message.content,
                "created_at": message.created_at,
            }
        )

    async def get_by_conversation(
        self, conversation_id: ConversationId
    ) -> list[Message]:
        """Messages oldest first, the order the chat window displays them in."""
        records = await self._prisma.message.find_many(
            where={"conversation_id": conversation_id.value},
            order={"created_at": "asc"},
        )
        return [self.to_entity(record) for record in records]

    async def get_latest(self, conversation_id: ConversationId) -> Optional[Message]:
        record = await self._prisma.message.find_first(
            where={"conversation_id": conversation_id.value},
            order={"created_at": "desc"},
        )
        return self.to_entity(record) if record else None
