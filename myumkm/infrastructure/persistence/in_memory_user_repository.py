"""In-memory UserRepository."""

import copy
from typing import Iterable, Optional

from myumkm.domain.entities.user import User
from myumkm.domain.exceptions import ConflictError
from myumkm.domain.ports.repositories import UserRepository
from myumkm.domain.value_objects.user_email import UserEmail
from myumkm.domain.value_objects.user_id import UserId
from myumkm.infrastructure.persistence.in_memory_database import InMemoryDatabase


class InMemoryUserRepository(UserRepository):
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        user = self._db.users.get(user_id.value)
        return copy.copy(user) if user else None

    async def get_by_email(self, email: UserEmail) -> Optional[User]:
        user_id = self._db.users_by_email.get(email.value)
        return await self.get_by_id(UserId(user_id)) if user_id else None

    async def get_many(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        found = {}
        for user_id in user_ids:
            user = self._db.users.get(user_id.value)
            if user:
                found[user_id] = copy.copy(user)
        return found

    async def list_all(
        self, exclude: Optional[UserId] = None, limit: int = 100
    ) -> list[User]:
        users = [u for u in self._db.users.values() if u.id != exclude]
        users.sort(key=lambda u: u.created_at, reverse=True)
        return [copy.copy(u) for u in users[:limit]]

    async def add(self, user: User) -> None:
        async with self._db.write_lock:
            if user.email.value in self._db.users_by_email:
                raise ConflictError("Email is already registered")
            if user.id.value in self._db.users:
                raise ConflictError(f"User {user.id.value} already exists")
            self._db.users[user.id.value] = copy.copy(user)
            self._db.users_by_email[user.email.value] = user.id.value
