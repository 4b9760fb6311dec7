"""Get Identity Query - the identity behind a verified credential."""

from dataclasses import dataclass
from myumkm.application.common.interfaces import Query, QueryHandler
from myumkm.domain.entities.user import User
from myumkm.domain.exceptions import AuthenticationError
from myumkm.domain.ports.repositories import UserRepository
from myumkm.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class GetIdentityQuery(Query[User]):
    user_id: UserId


class GetIdentityHandler(QueryHandler[User]):
    def __init__(self, user_repository: UserRepository):
        self._user_repository = user_repository

    async def execute(self, query: GetIdentityQuery) -> User:
        user = await self._user_repository.get_by_id(query.user_id)
        # A valid signature for a deleted identity is still not a session
        if not user:
            raise AuthenticationError("User not found")
        return user
