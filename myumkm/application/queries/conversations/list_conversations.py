"""List Conversations Query."""

from dataclasses import dataclass
from myumkm.application.common.interfaces import Query, QueryHandler
from myumkm.domain.entities.conversation import Conversation
from myumkm.domain.entities.user import User
from myumkm.domain.ports.repositories import ConversationRepository, UserRepository
from myumkm.domain.value_objects.user_id import UserId


@dataclass
class ListConversationsResult:
    conversations: list[Conversation]
    users: dict[UserId, User]


@dataclass(frozen=True)
class ListConversationsQuery(Query[ListConversationsResult]):
    user_id: UserId
    limit: int = 50


class ListConversationsHandler(QueryHandler[ListConversationsResult]):
    def __init__(
        self,
        conversation_repository: ConversationRepository,
        user_repository: UserRepository,
    ):
        self._conversation_repository = conversation_repository
        self._user_repository = user_repository

    async def execute(self, query: ListConversationsQuery) -> ListConversationsResult:
        conversations = await self._conversation_repository.list_for_user(
            query.user_id, query.limit
        )
        participant_ids = {
            user_id for conv in conversations for user_id in conv.participant_ids
        }
        users = await self._user_repository.get_many(participant_ids)
        return ListConversationsResult(conversations=conversations, users=users)
