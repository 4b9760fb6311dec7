"""
User Repository Port - Interface for identity persistence.
Implementations: myumkm/infrastructure/persistence/{in_memory,prisma}_user_repository.py
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional
from myumkm.domain.entities.user import User
from myumkm.domain.value_objects.user_email import UserEmail
from myumkm.domain.value_objects.user_id import UserId


class UserRepository(ABC):
    @abstractmethod
    async def get_by_id(self, user_id: UserId) -> Optional[User]: ...

    @abstractmethod
    async def get_by_email(self, email: UserEmail) -> Optional[User]: ...

    @abstractmethod
    async def get_many(self, user_ids: Iterable[UserId]) -> dict[UserId, User]: ...

    @abstractmethod
    async def list_all(
        self, exclude: Optional[UserId] = None, limit: int = 100
    ) -> list[User]: ...

    @abstractmethod
    async def add(self, user: User) -> None:
        """Insert a new identity. Raises ConflictError if the email is taken."""
        ...
