"""
ENTITIES - Business objects with identity

Each entity:
- Has a unique identifier
- Has behavior (methods)
- Pure Python dataclasses (no ORM, no Pydantic)
"""

from myumkm.domain.entities.user import User
from myumkm.domain.entities.conversation import Conversation
from myumkm.domain.entities.message import Message

__all__ = [
    "User",
    "Conversation",
    "Message",
]
