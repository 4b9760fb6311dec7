"""
Process-local data store shared by the in-memory repositories.

One instance lives for the whole application (APP scope in the DI container);
repositories are thin per-request views over it.
"""

import asyncio
from dataclasses import dataclass, field

from myumkm.domain.entities.conversation import Conversation
from myumkm.domain.entities.message import Message
from myumkm.domain.entities.user import User


@dataclass
class InMemoryDatabase:
    users: dict[str, User] = field(default_factory=dict)
    # email -> user id; the unique, case-insensitive email index
    users_by_email: dict[str, str] = field(default_factory=dict)
    conversations: dict[str, Conversation] = field(default_factory=dict)
    # pair_key -> conversation id; the unique pair index
    conversations_by_pair: dict[str, str] = field(default_factory=dict)
    messages: dict[str, list[Message]] = field(default_factory=dict)
    # Serialises check-then-insert sequences (unique indexes)
    write_lock: asyncio.Lock = field(default_factory=asyncio.Lock)
