"""List Users Query - other identities a caller can start a chat with."""

from dataclasses import dataclass
from typing import Optional
from myumkm.application.common.interfaces import Query, QueryHandler
from myumkm.domain.entities.user import User
from myumkm.domain.ports.repositories import UserRepository
from myumkm.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class ListUsersQuery(Query[list[User]]):
    exclude: Optional[UserId] = None
    limit: int = 100


class ListUsersHandler(QueryHandler[list[User]]):
    def __init__(self, user_repository: UserRepository):
        self._user_repository = user_repository

    async def execute(self, query: ListUsersQuery) -> list[User]:
        return await self._user_repository.list_all(
            exclude=query.exclude, limit=query.limit
        )
