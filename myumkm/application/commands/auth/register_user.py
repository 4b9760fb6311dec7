"""Register User Command."""

import logging
from dataclasses import dataclass
from myumkm.application.common.interfaces import Command, CommandHandler
from myumkm.domain.entities.user import User
from myumkm.domain.exceptions import ConflictError, DomainValidationError
from myumkm.domain.ports.repositories import UserRepository
from myumkm.domain.value_objects.user_email import UserEmail
from myumkm.infrastructure.security.password_hasher import PasswordHasher

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 6


@dataclass(frozen=True)
class RegisterUserCommand(Command[User]):
    name: str
    email: str
    password: str


class RegisterUserHandler(CommandHandler[User]):
    def __init__(self, user_repository: UserRepository, password_hasher: PasswordHasher):
        self._user_repository = user_repository
        self._password_hasher = password_hasher

    async def execute(self, command: RegisterUserCommand) -> User:
        try:
            email = UserEmail.normalized(command.email)
        except ValueError:
            raise DomainValidationError("Invalid email format") from None

        if len(command.password or "") < PASSWORD_MIN_LENGTH:
            raise DomainValidationError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
            )

        # Checked up front for a clean 409; add() re-checks under the unique index
        if await self._user_repository.get_by_email(email):
            raise ConflictError("Email is already registered")

        user = User.register(
            name=command.name,
            email=email,
            password_hash=self._password_hasher.hash(command.password),
        )
        await self._user_repository.add(user)

        logger.info(f"[Register] New identity {user.id.value}")
        return user
