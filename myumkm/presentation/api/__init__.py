"""
API Routers - FastAPI endpoint definitions, mounted under Config.API_PREFIX.
"""

from myumkm.presentation.api.auth import router as auth_router
from myumkm.presentation.api.users import router as users_router
from myumkm.presentation.api.conversations import router as conversations_router

__all__ = [
    "auth_router",
    "users_router",
    "conversations_router",
]
