"""
Prisma User Repository Implementation.

Prisma model fields: id, name, email, password_hash, created_at, updated_at
(see schema.prisma). Emails are stored normalised, so the unique index on
`email` is also the case-insensitive uniqueness check.
"""

from typing import Iterable, Optional
from prisma import Prisma
from prisma.errors import UniqueViolationError
from prisma.models import User as PrismaUser
from myumkm.domain.entities.user import User
from myumkm.domain.exceptions import ConflictError
from myumkm.domain.ports.repositories import UserRepository
from myumkm.domain.value_objects.user_email import UserEmail
from myumkm.domain.value_objects.user_id import UserId


class PrismaUserRepository(UserRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaUser) -> User:
        """Map Prisma record to domain entity."""
        return User(
            id=UserId(record.id),
            email=UserEmail(record.email),
            password_hash=record.password_hash,
            name=record.name,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        record = await self._prisma.user.find_unique(where={"id": user_id.value})
        return self._to_entity(record) if record else None

    async def get_by_email(self, email: UserEmail) -> Optional[User]:
        record = await self._prisma.user.find_unique(where={"email": email.value})
        return self._to_entity(record) if record else None

    async def get_many(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        ids = [user_id.value for user_id in user_ids]
        if not ids:
            return {}
        records = await self._prisma.user.find_many(where={"id": {"in": ids}})
        users = [self._to_entity(record) for record in records]
        return {user.id: user for user in users}

    async def list_all(
        self, exclude: Optional[UserId] = None, limit: int = 100
    ) -> list[User]:
        where = {"NOT": {"id": exclude.value}} if exclude else {}
        records = await self._prisma.user.find_many(
            where=where,
            order={"created_at": "desc"},
            take=limit,
        )
        return [self._to_entity(record) for record in records]

    async def add(self, user: User) -> None:
        try:
            await self._prisma.user.create(
                data={
                    "id": user.id.value,
                    "name": user.name,
                    "email": user.email.value,
                    "password_hash": user.password_hash,
                    "created_at": user.created_at,
                    "updated_at": user.updated_at,
                }
            )
        except UniqueViolationError as e:
            raise ConflictError("Email is already registered") from e
