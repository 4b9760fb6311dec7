"""
Client side of MyUMKM: session persistence, the HTTP API client and the
optimistic message timeline.
"""

from myumkm.client.errors import (
    ApiError,
    AuthenticationApiError,
    AuthorizationApiError,
    ConflictApiError,
    NotFoundApiError,
    ServerApiError,
    ValidationApiError,
)
from myumkm.client.session_store import SessionStore
from myumkm.client.timeline import (
    ConfirmedMessage,
    ConversationTimeline,
    PendingMessage,
)
from myumkm.client.api_client import MyUmkmClient

__all__ = [
    "ApiError",
    "AuthenticationApiError",
    "AuthorizationApiError",
    "ConflictApiError",
    "NotFoundApiError",
    "ServerApiError",
    "ValidationApiError",
    "SessionStore",
    "ConfirmedMessage",
    "ConversationTimeline",
    "PendingMessage",
    "MyUmkmClient",
]
