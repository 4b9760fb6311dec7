"""
Prisma storage provider (STORAGE_BACKEND=prisma).

Requires `prisma generate` against schema.prisma and DATABASE_URL.
"""

from typing import AsyncIterable
from dishka import Provider, Scope, provide
from prisma import Prisma

from myumkm.domain.ports.repositories import (
    ConversationRepository,
    MessageRepository,
    UserRepository,
)
from myumkm.infrastructure.persistence.prisma_conversation_repository import (
    PrismaConversationRepository,
)
from myumkm.infrastructure.persistence.prisma_message_repository import (
    PrismaMessageRepository,
)
from myumkm.infrastructure.persistence.prisma_user_repository import (
    PrismaUserRepository,
)


class PrismaStorageProvider(Provider):
    @provide(scope=Scope.APP)
    async def get_prisma(self) -> AsyncIterable[Prisma]:
        """
        Provide Prisma client (singleton, app-scoped).

        - Scope.APP = connected ONCE, shared across all requests
        - disconnected when the container closes
        """
        prisma = Prisma()
        await prisma.connect()
        yield prisma
        await prisma.disconnect()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, prisma: Prisma) -> UserRepository:
        return PrismaUserRepository(prisma)

    @provide(scope=Scope.REQUEST)
    def get_conversation_repository(self, prisma: Prisma) -> ConversationRepository:
        return PrismaConversationRepository(prisma)

    @provide(scope=Scope.REQUEST)
    def get_message_repository(self, prisma: Prisma) -> MessageRepository:
        return PrismaMessageRepository(prisma)
