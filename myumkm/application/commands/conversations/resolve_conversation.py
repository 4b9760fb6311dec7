"""
Resolve Conversation Command - map a pair of identities to their one channel.

resolve(A, B) and resolve(B, A) return the same channel. The lookup and the
create are a single atomic repository call keyed by the canonical pair key,
so concurrent resolutions of one pair cannot produce two channels.
"""

import logging
from dataclasses import dataclass
from myumkm.application.common.interfaces import Command, CommandHandler
from myumkm.domain.entities.conversation import Conversation
from myumkm.domain.exceptions import EntityNotFoundError
from myumkm.domain.ports.repositories import ConversationRepository, UserRepository
from myumkm.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass
class ResolveConversationResult:
    conversation: Conversation
    created: bool


@dataclass(frozen=True)
class ResolveConversationCommand(Command[ResolveConversationResult]):
    self_id: UserId
    other_id: UserId


class ResolveConversationHandler(CommandHandler[ResolveConversationResult]):
    def __init__(
        self,
        user_repository: UserRepository,
        conversation_repository: ConversationRepository,
    ):
        self._user_repository = user_repository
        self._conversation_repository = conversation_repository

    async def execute(
        self, command: ResolveConversationCommand
    ) -> ResolveConversationResult:
        # Rejects self-conversations before touching storage
        candidate = Conversation.between(command.self_id, command.other_id)

        other = await self._user_repository.get_by_id(command.other_id)
        if not other:
            raise EntityNotFoundError("Recipient not found")

        conversation, created = await self._conversation_repository.get_or_create(
            candidate
        )
        if created:
            logger.info(
                f"[Conversation] Created {conversation.id.value} for {conversation.pair_key}"
            )
        return ResolveConversationResult(conversation=conversation, created=created)
