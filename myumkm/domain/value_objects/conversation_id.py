"""
ConversationId Value Object - UUID wrapper for conversation identity.
"""

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ConversationId:
    value: str  # conversation_id, presented as UUID string

    def __post_init__(self):
        if not self.value:
            raise ValueError("Conversation ID cannot be empty")
        try:
            UUID(self.value)
        except ValueError:
            raise ValueError(f"Invalid conversation ID (UUID): {self.value}") from None

    @classmethod
    def generate(cls) -> "ConversationId":
        return cls(str(uuid4()))

    def __str__(self) -> str:
        return self.value
