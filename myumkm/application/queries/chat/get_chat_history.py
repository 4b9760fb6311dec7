"""
GetChatHistory Query - Get a conversation with its ordered messages.

Used by the chat window to load the channel on open and when polling.
"""

from dataclasses import dataclass, field

from myumkm.application.common.interfaces import Query, QueryHandler
from myumkm.domain.entities.conversation import Conversation
from myumkm.domain.entities.message import Message
from myumkm.domain.entities.user import User
from myumkm.domain.exceptions import EntityNotFoundError
from myumkm.domain.ports.repositories import (
    ConversationRepository,
    MessageRepository,
    UserRepository,
)
from myumkm.domain.value_objects.conversation_id import ConversationId
from myumkm.domain.value_objects.user_id import UserId


@dataclass
class GetChatHistoryResult:
    """Result containing conversation metadata, messages and their authors."""

    conversation: Conversation
    messages: list[Message]
    authors: dict[UserId, User] = field(default_factory=dict)


@dataclass(frozen=True)
class GetChatHistoryQuery(Query[GetChatHistoryResult]):
    conversation_id: ConversationId
    user_id: UserId


class GetChatHistoryHandler(QueryHandler[GetChatHistoryResult]):
    def __init__(
        self,
        conv_repo: ConversationRepository,
        msg_repo: MessageRepository,
        user_repo: UserRepository,
    ):
        self._conv_repo = conv_repo
        self._msg_repo = msg_repo
        self._user_repo = user_repo

    async def execute(self, query: GetChatHistoryQuery) -> GetChatHistoryResult:
        """
        Steps:
        1. Load the conversation scoped to the caller
        2. Load messages, oldest first
        3. Resolve author display data

        Raises:
            EntityNotFoundError: If the conversation doesn't exist or the
                caller is not one of its participants
        """
        conversation = await self._conv_repo.get_for_participant(
            query.conversation_id, query.user_id
        )
        if not conversation:
            raise EntityNotFoundError("Conversation not found")

        messages = await self._msg_repo.get_by_conversation(conversation.id)
        authors = await self._user_repo.get_many(conversation.participant_ids)

        return GetChatHistoryResult(
            conversation=conversation,
            messages=messages,
            authors=authors,
        )
