"""
Auth API Router - the credential-issuance boundary over HTTP.

Endpoints (under /api):
- POST /auth/register → 201 {"success": true, "user": {...}}
- POST /auth/login    → {"success": true, "token": "...", "user": {...}} + cookie
- POST /auth/logout   → {"success": true, "message": "..."} + cleared cookie
- GET  /auth/me       → {"id", "email", "name", "created_at", "updated_at"}

The whole /api/auth prefix is public to the access guard; /me authenticates
through its own Bearer dependency.
"""

from logging import getLogger
from fastapi import APIRouter, Depends, Request, Response, status
from dishka.integrations.fastapi import FromDishka, inject
from pydantic import BaseModel

from myumkm.application.commands.auth import (
    LoginCommand,
    LoginHandler,
    RegisterUserCommand,
    RegisterUserHandler,
)
from myumkm.application.dto.auth import UserDTO
from myumkm.application.queries.users import GetIdentityHandler, GetIdentityQuery
from myumkm.presentation.cookies import clear_auth_cookie, set_auth_cookie
from myumkm.presentation.dependencies.auth import AuthUser, get_bearer_user

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class RegisterRequest(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""


class RegisterResponse(BaseModel):
    success: bool
    user: UserDTO


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    success: bool
    token: str
    user: UserDTO


class LogoutResponse(BaseModel):
    success: bool
    message: str


# ==================== ROUTER ====================

router = APIRouter(prefix="/auth", tags=["auth"])


# ==================== ENDPOINTS ====================


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def register(
    request: RegisterRequest,
    handler: FromDishka[RegisterUserHandler],
):
    user = await handler.execute(
        RegisterUserCommand(
            name=request.name,
            email=request.email,
            password=request.password,
        )
    )
    return RegisterResponse(success=True, user=UserDTO.from_entity(user))


@router.post("/login", response_model=LoginResponse)
@inject
async def login(
    request: LoginRequest,
    http_request: Request,
    response: Response,
    handler: FromDishka[LoginHandler],
):
    """Exchange email/password for a credential; also sets the session cookie."""
    result = await handler.execute(
        LoginCommand(email=request.email, password=request.password)
    )

    config = http_request.app.state.config
    # Cookie lives exactly as long as the credential it carries
    codec = http_request.app.state.credential_codec
    set_auth_cookie(
        response, result.token, config=config, max_age=int(codec.ttl.total_seconds())
    )
    response.headers["Cache-Control"] = "no-store"

    return LoginResponse(
        success=True,
        token=result.token,
        user=UserDTO.from_entity(result.user, with_timestamps=False),
    )


@router.post("/logout", response_model=LogoutResponse)
async def logout(http_request: Request, response: Response):
    # Credentials are stateless: logging out only drops the cookie
    clear_auth_cookie(response, config=http_request.app.state.config)
    return LogoutResponse(success=True, message="Logged out successfully")


@router.get("/me", response_model=UserDTO)
@inject
async def me(
    handler: FromDishka[GetIdentityHandler],
    current_user: AuthUser = Depends(get_bearer_user),
):
    user = await handler.execute(GetIdentityQuery(user_id=current_user.id))
    return UserDTO.from_entity(user)
