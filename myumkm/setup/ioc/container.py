"""
Dishka DI Container Setup.

- AppProvider: configuration, credential codec and password hasher
  (APP scope), command/query handlers (REQUEST scope)
- InMemoryStorageProvider: the process-local store (APP scope) and the
  repositories over it (REQUEST scope). Default backend, used by tests.
- PrismaStorageProvider (prisma_provider.py): PostgreSQL via Prisma. Imported
  lazily because the Prisma client has to be generated first.

Dishka concepts:
- Provider: Class that defines how to create dependencies
- @provide: Decorator to mark factory methods
- Scope: Lifecycle of dependency (APP = singleton, REQUEST = per-request)

Flow:
  Container → provides → InMemoryConversationRepository → to → ResolveConversationHandler
                                    ↓
                            uses ConversationRepository interface
"""

from typing import Optional
from dishka import AsyncContainer, Provider, Scope, make_async_container, provide

from myumkm.application.commands.auth import LoginHandler, RegisterUserHandler
from myumkm.application.commands.chat import SendMessageHandler
from myumkm.application.commands.conversations import (
    OpenConversationHandler,
    ResolveConversationHandler,
)
from myumkm.application.queries.chat import GetChatHistoryHandler
from myumkm.application.queries.conversations import ListConversationsHandler
from myumkm.application.queries.users import GetIdentityHandler, ListUsersHandler
from myumkm.config.settings import Config
from myumkm.domain.ports.repositories import (
    ConversationRepository,
    MessageRepository,
    UserRepository,
)
from myumkm.infrastructure.persistence import (
    InMemoryConversationRepository,
    InMemoryDatabase,
    InMemoryMessageRepository,
    InMemoryUserRepository,
)
from myumkm.infrastructure.security import CredentialCodec, PasswordHasher


class AppProvider(Provider):
    """
    Application dependency provider.

    Registers security services and all command/query handlers. Repositories
    come from a storage provider.
    """

    def __init__(self, config=Config, credential_codec: Optional[CredentialCodec] = None):
        super().__init__()
        self._config = config
        self._credential_codec = credential_codec or CredentialCodec.from_config(config)

    # ==================== SECURITY ====================

    @provide(scope=Scope.APP)
    def get_credential_codec(self) -> CredentialCodec:
        return self._credential_codec

    @provide(scope=Scope.APP)
    def get_password_hasher(self) -> PasswordHasher:
        return PasswordHasher(iterations=self._config.PASSWORD_PBKDF2_ITERATIONS)

    # ==================== AUTH HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_register_user_handler(
        self, user_repository: UserRepository, password_hasher: PasswordHasher
    ) -> RegisterUserHandler:
        return RegisterUserHandler(user_repository, password_hasher)

    @provide(scope=Scope.REQUEST)
    def get_login_handler(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        credential_codec: CredentialCodec,
    ) -> LoginHandler:
        return LoginHandler(user_repository, password_hasher, credential_codec)

    @provide(scope=Scope.REQUEST)
    def get_identity_handler(self, user_repository: UserRepository) -> GetIdentityHandler:
        return GetIdentityHandler(user_repository)

    @provide(scope=Scope.REQUEST)
    def get_list_users_handler(self, user_repository: UserRepository) -> ListUsersHandler:
        return ListUsersHandler(user_repository)

    # ==================== CONVERSATION HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_resolve_conversation_handler(
        self,
        user_repository: UserRepository,
        conversation_repository: ConversationRepository,
    ) -> ResolveConversationHandler:
        return ResolveConversationHandler(user_repository, conversation_repository)

    @provide(scope=Scope.REQUEST)
    def get_open_conversation_handler(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
        user_repository: UserRepository,
        resolve_handler: ResolveConversationHandler,
        send_handler: SendMessageHandler,
    ) -> OpenConversationHandler:
        return OpenConversationHandler(
            conversation_repository=conversation_repository,
            message_repository=message_repository,
            user_repository=user_repository,
            resolve_handler=resolve_handler,
            send_handler=send_handler,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_conversations_handler(
        self,
        conversation_repository: ConversationRepository,
        user_repository: UserRepository,
    ) -> ListConversationsHandler:
        return ListConversationsHandler(conversation_repository, user_repository)

    # ==================== CHAT HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_send_message_handler(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
    ) -> SendMessageHandler:
        return SendMessageHandler(
            conv_repo=conversation_repository,
            msg_repo=message_repository,
        )

    @provide(scope=Scope.REQUEST)
    def get_chat_history_handler(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
        user_repository: UserRepository,
    ) -> GetChatHistoryHandler:
        return GetChatHistoryHandler(
            conv_repo=conversation_repository,
            msg_repo=message_repository,
            user_repo=user_repository,
        )


class InMemoryStorageProvider(Provider):
    """Process-local storage. Everything is lost when the process exits."""

    @provide(scope=Scope.APP)
    def get_database(self) -> InMemoryDatabase:
        return InMemoryDatabase()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, db: InMemoryDatabase) -> UserRepository:
        return InMemoryUserRepository(db)

    @provide(scope=Scope.REQUEST)
    def get_conversation_repository(self, db: InMemoryDatabase) -> ConversationRepository:
        return InMemoryConversationRepository(db)

    @provide(scope=Scope.REQUEST)
    def get_message_repository(self, db: InMemoryDatabase) -> MessageRepository:
        return InMemoryMessageRepository(db)


def create_storage_provider(config=Config) -> Provider:
    if config.STORAGE_BACKEND == "prisma":
        from myumkm.setup.ioc.prisma_provider import PrismaStorageProvider

        return PrismaStorageProvider()
    return InMemoryStorageProvider()


def create_container(
    config=Config,
    credential_codec: Optional[CredentialCodec] = None,
    storage_provider: Optional[Provider] = None,
) -> AsyncContainer:
    """
    Create and configure the DI container.

    Call this ONCE per application instance.
    """
    return make_async_container(
        AppProvider(config, credential_codec),
        storage_provider or create_storage_provider(config),
    )
