"""
Persistence Layer - Repository implementations.

In-memory repositories are the default backend (and what the tests use).
Prisma repositories live in prisma_*_repository.py and are imported only by
the Prisma DI provider, because the Prisma client must be generated first.
"""

from myumkm.infrastructure.persistence.in_memory_database import InMemoryDatabase
from myumkm.infrastructure.persistence.in_memory_user_repository import (
    InMemoryUserRepository,
)
from myumkm.infrastructure.persistence.in_memory_conversation_repository import (
    InMemoryConversationRepository,
)
from myumkm.infrastructure.persistence.in_memory_message_repository import (
    InMemoryMessageRepository,
)

__all__ = [
    "InMemoryDatabase",
    "InMemoryUserRepository",
    "InMemoryConversationRepository",
    "InMemoryMessageRepository",
]
