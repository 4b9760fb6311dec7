"""
SendMessage Command - append a message to a conversation.

Handler:
1. Reject empty/whitespace-only content
2. Load the conversation scoped to the author (non-participants get "not found")
3. Stamp the message strictly after the channel's latest message
4. Persist it and bump the conversation's updated_at
5. Return the persisted message (with its server id) for client reconciliation
"""

import logging
from dataclasses import dataclass
from myumkm.application.common.interfaces import Command, CommandHandler
from myumkm.domain.entities.message import Message
from myumkm.domain.exceptions import DomainValidationError, EntityNotFoundError
from myumkm.domain.ports.repositories import ConversationRepository, MessageRepository
from myumkm.domain.value_objects.conversation_id import ConversationId
from myumkm.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendMessageCommand(Command[Message]):
    conversation_id: ConversationId
    author_id: UserId
    content: str


class SendMessageHandler(CommandHandler[Message]):
    def __init__(
        self,
        conv_repo: ConversationRepository,
        msg_repo: MessageRepository,
    ):
        self.conv_repo = conv_repo
        self.msg_repo = msg_repo

    async def execute(self, command: SendMessageCommand) -> Message:
        if not command.content or not command.content.strip():
            raise DomainValidationError("Content is required")

        conversation = await self.conv_repo.get_for_participant(
            command.conversation_id, command.author_id
        )
        if not conversation:
            raise EntityNotFoundError("Conversation not found")

        previous = await self.msg_repo.get_latest(conversation.id)
        message = Message.create(
            conversation_id=conversation.id,
            author_id=command.author_id,
            content=command.content,
            previous=previous,
        )
        await self.msg_repo.add(message)
        await self.conv_repo.touch(conversation.id, message.created_at)

        logger.debug(
            f"[SendMessage] {message.id.value} appended to {conversation.id.value}"
        )
        return message
