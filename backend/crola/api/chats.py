"""
Chat API endpoints.

List, create and delete chats, read a chat's history, and send messages that
are answered by the completion gateway.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from crola.api.deps import ChatRepo, CurrentUser, LLMProvider
from crola.core.exceptions import NotFoundError, ValidationError
from crola.models.chat import (
    Chat,
    ChatCreate,
    ChatMessage,
    SendMessageRequest,
    SendMessageResponse,
)
from crola.services.chat_service import ChatService

router = APIRouter()


class ChatListResponse(BaseModel):
    chats: list[Chat]


class ChatResponse(BaseModel):
    chat: Chat


class HistoryResponse(BaseModel):
    history: list[ChatMessage]


class DeleteResponse(BaseModel):
    success: bool = True


def _parse_chat_id(raw: Optional[str], name: str) -> UUID:
    if not raw or not raw.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Query parameter '{name}' is required",
        )
    try:
        return UUID(raw.strip())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Query parameter '{name}' must be a valid chat ID",
        )


@router.get("", response_model=ChatListResponse)
async def list_chats(
    user: CurrentUser,
    repo: ChatRepo,
):
    """List the caller's chats, most recently updated first."""
    chats = await repo.list_chats(UUID(user.id))
    return ChatListResponse(chats=chats)


@router.post("", response_model=ChatResponse, status_code=status.HTTP_201_CREATED)
async def create_chat(
    user: CurrentUser,
    repo: ChatRepo,
    data: Optional[ChatCreate] = None,
):
    """Create an empty chat."""
    title = data.title if data else None
    chat = await repo.create_chat(UUID(user.id), title)
    return ChatResponse(chat=chat)


@router.delete("", response_model=DeleteResponse)
async def delete_chat(
    user: CurrentUser,
    repo: ChatRepo,
    chat_id: Optional[str] = Query(None, alias="id", description="Chat ID"),
):
    """Delete an owned chat and its messages."""
    parsed_id = _parse_chat_id(chat_id, "id")
    try:
        await repo.delete_chat(UUID(user.id), parsed_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message,
        )
    return DeleteResponse(success=True)


@router.get("/history", response_model=HistoryResponse)
async def get_history(
    user: CurrentUser,
    repo: ChatRepo,
    chat_id: Optional[str] = Query(None, alias="chatId", description="Chat ID"),
):
    """Get the ordered messages of an owned chat."""
    parsed_id = _parse_chat_id(chat_id, "chatId")
    try:
        history = await repo.get_history(UUID(user.id), parsed_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message,
        )
    return HistoryResponse(history=history)


@router.post("/messages", response_model=SendMessageResponse)
async def send_message(
    request: SendMessageRequest,
    user: CurrentUser,
    repo: ChatRepo,
    llm_provider: LLMProvider,
):
    """
    Send a message in a chat and return the updated thread.

    Starts a new chat when chatId is omitted. A gateway failure still returns
    200; the stored assistant reply explains the failure and `failed` is true.
    """
    service = ChatService(chat_repo=repo, llm_provider=llm_provider)
    try:
        result = await service.send_message(
            user_id=UUID(user.id),
            message=request.message,
            chat_id=request.chat_id,
            model_id=request.model_id,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message,
        )
    return SendMessageResponse(chat=result.chat, reply=result.reply, failed=result.failed)
