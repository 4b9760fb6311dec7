"""Users API Router - the contact picker for starting a chat."""

from fastapi import APIRouter, Depends, Request
from dishka.integrations.fastapi import FromDishka, inject
from pydantic import BaseModel

from myumkm.application.dto.auth import UserDTO
from myumkm.application.queries.users import ListUsersHandler, ListUsersQuery
from myumkm.presentation.dependencies.auth import AuthUser, get_current_user


class ListUsersResponse(BaseModel):
    users: list[UserDTO]


router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=ListUsersResponse)
@inject
async def list_users(
    http_request: Request,
    handler: FromDishka[ListUsersHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    """Every identity except the caller, newest first."""
    users = await handler.execute(
        ListUsersQuery(
            exclude=current_user.id,
            limit=http_request.app.state.config.USER_LIST_LIMIT,
        )
    )
    return ListUsersResponse(
        users=[UserDTO.from_entity(u, with_timestamps=False) for u in users]
    )
