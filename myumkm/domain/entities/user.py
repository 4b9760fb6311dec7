"""
User Entity - A registered identity.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone

from myumkm.domain.exceptions import DomainValidationError
from myumkm.domain.value_objects.user_email import UserEmail
from myumkm.domain.value_objects.user_id import UserId

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100


@dataclass
class User:
    id: UserId
    email: UserEmail
    # Never leaves the credential-issuance boundary
    password_hash: str
    name: str
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        if not self.password_hash:
            raise ValueError("User must have a password hash")

    @classmethod
    def register(cls, name: str, email: UserEmail, password_hash: str) -> User:
        """Factory for a newly registered identity with a generated id."""
        name = (name or "").strip()
        if len(name) < NAME_MIN_LENGTH:
            raise DomainValidationError(
                f"Name must be at least {NAME_MIN_LENGTH} characters"
            )
        if len(name) > NAME_MAX_LENGTH:
            raise DomainValidationError(
                f"Name must be at most {NAME_MAX_LENGTH} characters"
            )

        now = datetime.now(timezone.utc)
        return cls(
            id=UserId.generate(),
            email=email,
            password_hash=password_hash,
            name=name,
            created_at=now,
            updated_at=now,
        )
