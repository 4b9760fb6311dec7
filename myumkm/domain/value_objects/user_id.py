"""
UserId Value Object - opaque, stable identity id (e.g. "user_3f9a0c1b2d4e").
"""

import secrets
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class UserId:
    value: str

    def __post_init__(self):
        if not self.value or not self.value.strip():
            raise ValueError("UserId cannot be empty")

    @classmethod
    def generate(cls) -> "UserId":
        return cls(f"user_{secrets.token_hex(6)}")

    def __str__(self) -> str:
        return self.value
