"""Identity queries."""

from myumkm.application.queries.users.get_identity import (
    GetIdentityQuery,
    GetIdentityHandler,
)
from myumkm.application.queries.users.list_users import (
    ListUsersQuery,
    ListUsersHandler,
)

__all__ = [
    "GetIdentityQuery",
    "GetIdentityHandler",
    "ListUsersQuery",
    "ListUsersHandler",
]
