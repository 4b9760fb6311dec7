"""
Login Command - the credential-issuance boundary.

Exchanges an email/password pair for a signed credential. Unknown email and
wrong password produce the same error so the endpoint does not reveal which
accounts exist.
"""

import logging
from dataclasses import dataclass
from myumkm.application.common.interfaces import Command, CommandHandler
from myumkm.domain.entities.user import User
from myumkm.domain.exceptions import AuthenticationError, DomainValidationError
from myumkm.domain.ports.repositories import UserRepository
from myumkm.domain.value_objects.user_email import UserEmail
from myumkm.infrastructure.security.credential_codec import CredentialCodec
from myumkm.infrastructure.security.password_hasher import PasswordHasher

logger = logging.getLogger(__name__)

INVALID_LOGIN_MESSAGE = "Invalid email or password"


@dataclass
class LoginResult:
    token: str
    user: User


@dataclass(frozen=True)
class LoginCommand(Command[LoginResult]):
    email: str
    password: str


class LoginHandler(CommandHandler[LoginResult]):
    def __init__(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        credential_codec: CredentialCodec,
    ):
        self._user_repository = user_repository
        self._password_hasher = password_hasher
        self._credential_codec = credential_codec

    async def execute(self, command: LoginCommand) -> LoginResult:
        if not command.email or not command.password:
            raise DomainValidationError("Email and password are required")

        try:
            email = UserEmail.normalized(command.email)
        except ValueError:
            raise AuthenticationError(INVALID_LOGIN_MESSAGE) from None

        user = await self._user_repository.get_by_email(email)
        if not user or not self._password_hasher.verify(
            command.password, user.password_hash
        ):
            logger.info("[Login] Rejected login attempt")
            raise AuthenticationError(INVALID_LOGIN_MESSAGE)

        token = self._credential_codec.issue(
            subject_id=user.id.value,
            email=user.email.value,
            name=user.name,
        )
        logger.info(f"[Login] Issued credential for {user.id.value}")
        return LoginResult(token=token, user=user)
