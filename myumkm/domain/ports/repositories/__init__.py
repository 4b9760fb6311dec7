"""
REPOSITORY PORTS - Data persistence interfaces

Each repository port:
- Is an abstract base class (ABC)
- Defines methods the application layer needs
- Does NOT specify implementation (Prisma, in-memory, etc.)
"""

from myumkm.domain.ports.repositories.user_repository import UserRepository
from myumkm.domain.ports.repositories.conversation_repository import ConversationRepository
from myumkm.domain.ports.repositories.message_repository import MessageRepository

__all__ = [
    "UserRepository",
    "ConversationRepository",
    "MessageRepository",
]
