"""
Conversations API Router - channel resolution and message exchange.

Endpoints (under /api):
- GET  /conversations[?userId=|recipientId=]  list, or resolve one channel
- POST /conversations                         resolve/open (+ optional first message)
- GET  /conversations/{id}/messages           ordered history
- POST /conversations/{id}/messages           append

Flow:
  HTTP Request → Router → Command/Query → Handler → Repository
                                 ↓
  HTTP Response ← Router ← DTO ←

A conversation the caller does not belong to answers 404, exactly like one
that does not exist.
"""

from logging import getLogger
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, status
from dishka.integrations.fastapi import FromDishka, inject
from pydantic import BaseModel, ConfigDict, Field

from myumkm.application.commands.chat import SendMessageCommand, SendMessageHandler
from myumkm.application.commands.conversations import (
    OpenConversationCommand,
    OpenConversationHandler,
    OpenConversationResult,
)
from myumkm.application.dto.chat import MessageDTO, ParticipantDTO
from myumkm.application.dto.conversation import ConversationDTO
from myumkm.application.queries.chat import GetChatHistoryHandler, GetChatHistoryQuery
from myumkm.application.queries.conversations import (
    ListConversationsHandler,
    ListConversationsQuery,
)
from myumkm.domain.exceptions import DomainValidationError, EntityNotFoundError
from myumkm.domain.value_objects.conversation_id import ConversationId
from myumkm.domain.value_objects.user_id import UserId
from myumkm.presentation.dependencies.auth import AuthUser, get_current_user

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class OpenConversationRequest(BaseModel):
    """
    {"conversationId": "uuid"} or {"recipientId": "user_..."} (alias
    "userId"), with optional first-message "content".
    """

    model_config = ConfigDict(populate_by_name=True)

    conversation_id: Optional[str] = Field(default=None, alias="conversationId")
    recipient_id: Optional[str] = Field(default=None, alias="recipientId")
    user_id: Optional[str] = Field(default=None, alias="userId")
    content: Optional[str] = None


class OpenConversationResponse(BaseModel):
    success: bool
    created: bool
    conversation: ConversationDTO
    message: Optional[MessageDTO] = None


class ListConversationsResponse(BaseModel):
    conversations: list[ConversationDTO]


class SendMessageRequest(BaseModel):
    content: str = ""


class ListMessagesResponse(BaseModel):
    messages: list[MessageDTO]


# ==================== HELPERS ====================


def _parse_conversation_id(raw: str) -> ConversationId:
    try:
        return ConversationId(raw)
    except ValueError:
        # A malformed id cannot name any conversation
        raise EntityNotFoundError("Conversation not found") from None


def _parse_user_id(raw: Optional[str]) -> Optional[UserId]:
    if raw is None or not raw.strip():
        return None
    return UserId(raw.strip())


def _to_conversation_dto(result: OpenConversationResult) -> ConversationDTO:
    return ConversationDTO.from_entity(result.conversation, result.users)


# ==================== ROUTER ====================

router = APIRouter(prefix="/conversations", tags=["conversations"])


# ==================== ENDPOINTS ====================


@router.get("", response_model=ListConversationsResponse)
@inject
async def list_conversations(
    http_request: Request,
    list_handler: FromDishka[ListConversationsHandler],
    open_handler: FromDishka[OpenConversationHandler],
    current_user: AuthUser = Depends(get_current_user),
    user_id: Optional[str] = Query(default=None, alias="userId"),
    recipient_id: Optional[str] = Query(default=None, alias="recipientId"),
):
    """
    Without parameters: the caller's channels, most recently updated first.
    With userId/recipientId: that one channel, created on first contact.
    """
    other_id = _parse_user_id(user_id) or _parse_user_id(recipient_id)
    if other_id:
        result = await open_handler.execute(
            OpenConversationCommand(user_id=current_user.id, other_id=other_id)
        )
        return ListConversationsResponse(conversations=[_to_conversation_dto(result)])

    listed = await list_handler.execute(
        ListConversationsQuery(
            user_id=current_user.id,
            limit=http_request.app.state.config.CONVERSATION_USER_LIMIT,
        )
    )
    return ListConversationsResponse(
        conversations=[
            ConversationDTO.from_entity(conv, listed.users)
            for conv in listed.conversations
        ]
    )


@router.post(
    "",
    response_model=OpenConversationResponse,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def open_conversation(
    request: OpenConversationRequest,
    handler: FromDishka[OpenConversationHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    conversation_id = (
        _parse_conversation_id(request.conversation_id)
        if request.conversation_id
        else None
    )
    other_id = _parse_user_id(request.recipient_id) or _parse_user_id(request.user_id)
    if conversation_id is None and other_id is None:
        raise DomainValidationError("conversationId or recipientId is required")

    result = await handler.execute(
        OpenConversationCommand(
            user_id=current_user.id,
            conversation_id=conversation_id,
            other_id=other_id,
            content=request.content,
        )
    )

    message_dto = None
    if result.message:
        message_dto = MessageDTO.from_entity(
            result.message, result.users.get(result.message.author_id)
        )
    return OpenConversationResponse(
        success=True,
        created=result.created,
        conversation=_to_conversation_dto(result),
        message=message_dto,
    )


@router.get("/{conversation_id}/messages", response_model=ListMessagesResponse)
@inject
async def list_messages(
    conversation_id: str,
    handler: FromDishka[GetChatHistoryHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    """All messages of the channel, oldest first."""
    result = await handler.execute(
        GetChatHistoryQuery(
            conversation_id=_parse_conversation_id(conversation_id),
            user_id=current_user.id,
        )
    )
    return ListMessagesResponse(
        messages=[
            MessageDTO.from_entity(msg, result.authors.get(msg.author_id))
            for msg in result.messages
        ]
    )


@router.post(
    "/{conversation_id}/messages",
    response_model=MessageDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def send_message(
    conversation_id: str,
    request: SendMessageRequest,
    handler: FromDishka[SendMessageHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    """
    Append a message. The response carries the server id and timestamp the
    client uses to replace its optimistic entry.
    """
    message = await handler.execute(
        SendMessageCommand(
            conversation_id=_parse_conversation_id(conversation_id),
            author_id=current_user.id,
            content=request.content,
        )
    )
    dto = MessageDTO.from_entity(message)
    if current_user.name:
        dto.author = ParticipantDTO(id=current_user.id.value, name=current_user.name)
    return dto
