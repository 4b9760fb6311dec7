"""
UserEmail Value Object - Wraps user email with validation.

Emails are unique case-insensitively, so the stored form is always trimmed
and lower-cased.
"""

import re
from dataclasses import dataclass

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class UserEmail:
    value: str  # user_email, normalised

    def __post_init__(self):
        if not self.value or not _EMAIL_RE.match(self.value):
            raise ValueError(f"Invalid user email: {self.value}")
        if self.value != self.value.strip().lower():
            raise ValueError(f"User email must be normalised: {self.value}")

    @classmethod
    def normalized(cls, raw: str) -> "UserEmail":
        return cls((raw or "").strip().lower())

    def __str__(self) -> str:
        return self.value
