from myumkm.presentation.dependencies.auth import (
    AuthUser,
    get_bearer_user,
    get_current_user,
)

__all__ = ["AuthUser", "get_bearer_user", "get_current_user"]
