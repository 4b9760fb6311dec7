"""
Open Conversation Command - resolve or look up a conversation and optionally
send a first message into it.

Either conversation_id (an existing channel the caller belongs to) or
other_id (the other party; resolved or created) must be given. The result
carries the channel with its latest message and the participants' identities
so callers can render it without further lookups.
"""

from dataclasses import dataclass, field
from typing import Optional
from myumkm.application.common.interfaces import Command, CommandHandler
from myumkm.application.commands.chat.send_message import (
    SendMessageCommand,
    SendMessageHandler,
)
from myumkm.application.commands.conversations.resolve_conversation import (
    ResolveConversationCommand,
    ResolveConversationHandler,
)
from myumkm.domain.entities.conversation import Conversation
from myumkm.domain.entities.message import Message
from myumkm.domain.entities.user import User
from myumkm.domain.exceptions import DomainValidationError, EntityNotFoundError
from myumkm.domain.ports.repositories import (
    ConversationRepository,
    MessageRepository,
    UserRepository,
)
from myumkm.domain.value_objects.conversation_id import ConversationId
from myumkm.domain.value_objects.user_id import UserId


@dataclass
class OpenConversationResult:
    conversation: Conversation
    created: bool
    message: Optional[Message] = None
    users: dict[UserId, User] = field(default_factory=dict)


@dataclass(frozen=True)
class OpenConversationCommand(Command[OpenConversationResult]):
    user_id: UserId
    conversation_id: Optional[ConversationId] = None
    other_id: Optional[UserId] = None
    content: Optional[str] = None


class OpenConversationHandler(CommandHandler[OpenConversationResult]):
    def __init__(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
        user_repository: UserRepository,
        resolve_handler: ResolveConversationHandler,
        send_handler: SendMessageHandler,
    ):
        self._conversation_repository = conversation_repository
        self._message_repository = message_repository
        self._user_repository = user_repository
        self._resolve_handler = resolve_handler
        self._send_handler = send_handler

    async def execute(self, command: OpenConversationCommand) -> OpenConversationResult:
        if command.conversation_id:
            conversation = await self._conversation_repository.get_for_participant(
                command.conversation_id, command.user_id
            )
            if not conversation:
                raise EntityNotFoundError("Conversation not found")
            created = False
        elif command.other_id:
            resolved = await self._resolve_handler.execute(
                ResolveConversationCommand(
                    self_id=command.user_id, other_id=command.other_id
                )
            )
            conversation, created = resolved.conversation, resolved.created
        else:
            raise DomainValidationError("conversationId or recipientId is required")

        message = None
        if command.content and command.content.strip():
            message = await self._send_handler.execute(
                SendMessageCommand(
                    conversation_id=conversation.id,
                    author_id=command.user_id,
                    content=command.content,
                )
            )
            conversation.touch(message.created_at)
            conversation.last_message = message
        else:
            conversation.last_message = await self._message_repository.get_latest(
                conversation.id
            )

        users = await self._user_repository.get_many(conversation.participant_ids)
        return OpenConversationResult(
            conversation=conversation, created=created, message=message, users=users
        )
