"""Identity DTOs for API responses. The password verifier is never included."""

from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from myumkm.domain.entities.user import User


class UserDTO(BaseModel):
    id: str
    name: str
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user: User, with_timestamps: bool = True) -> UserDTO:
        return cls(
            id=user.id.value,
            name=user.name,
            email=user.email.value,
            created_at=user.created_at if with_timestamps else None,
            updated_at=user.updated_at if with_timestamps else None,
        )
