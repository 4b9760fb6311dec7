"""Identity commands."""

from .register_user import RegisterUserCommand, RegisterUserHandler
from .login import LoginCommand, LoginHandler, LoginResult

__all__ = [
    "RegisterUserCommand",
    "RegisterUserHandler",
    "LoginCommand",
    "LoginHandler",
    "LoginResult",
]
