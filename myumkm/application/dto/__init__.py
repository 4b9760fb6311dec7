"""
DTOs - Data Transfer Objects

DTOs for transferring data between layers:
- auth.py → UserDTO
- chat.py → MessageDTO, ParticipantDTO
- conversation.py → ConversationDTO

Note: These are different from domain entities.
DTOs are for API input/output, entities are for business logic.
"""

from myumkm.application.dto.auth import UserDTO
from myumkm.application.dto.chat import MessageDTO, ParticipantDTO
from myumkm.application.dto.conversation import ConversationDTO

__all__ = [
    "UserDTO",
    "MessageDTO",
    "ParticipantDTO",
    "ConversationDTO",
]
