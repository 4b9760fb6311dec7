"""Conversation commands."""

from .resolve_conversation import (
    ResolveConversationCommand,
    ResolveConversationHandler,
    ResolveConversationResult,
)
from .open_conversation import (
    OpenConversationCommand,
    OpenConversationHandler,
    OpenConversationResult,
)

__all__ = [
    "ResolveConversationCommand",
    "ResolveConversationHandler",
    "ResolveConversationResult",
    "OpenConversationCommand",
    "OpenConversationHandler",
    "OpenConversationResult",
]
