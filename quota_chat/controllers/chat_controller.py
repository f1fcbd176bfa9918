"""Controllers for chat, prompt and quota endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger

from ..models.api import (
    AppendMessageRequest,
    AskResponse,
    ConsumeResponse,
    CreateChatRequest,
    DeleteChatResponse,
    PromptRequest,
    PromptResponse,
    RenameChatRequest,
    RenameChatResponse,
)
from ..models.chat import ChatMeta, ChatRecord
from ..models.quota import QuotaStatus
from ..services.container import AppContainer
from ..utils.error_handler import ChatError
from .dependencies import get_container, get_user_key

router = APIRouter(prefix="", tags=["Chat"])


@router.post("/prompt", response_model=PromptResponse)
async def prompt_endpoint(
    request: PromptRequest,
    user: str = Depends(get_user_key),
    container: AppContainer = Depends(get_container),
) -> PromptResponse:
    """Forward a prompt to the model and return the answer text.

    This does not touch the quota gate or any chat.  Provider failures are
    returned as a readable message in ``answer`` rather than as an HTTP
    error.
    """
    answer = await container.conversation_service.submit_prompt(user, request.prompt)
    return PromptResponse(answer=answer)


@router.post("/quota/consume", response_model=ConsumeResponse)
async def consume_quota_endpoint(
    user: str = Depends(get_user_key),
    container: AppContainer = Depends(get_container),
) -> ConsumeResponse:
    """Count one prompt against the caller's quota."""
    return ConsumeResponse(allowed=container.quota_gate.try_consume(user))


@router.get("/quota", response_model=QuotaStatus)
async def quota_status_endpoint(
    user: str = Depends(get_user_key),
    container: AppContainer = Depends(get_container),
) -> QuotaStatus:
    return container.quota_gate.status(user)


@router.post("/chats", status_code=status.HTTP_204_NO_CONTENT)
async def create_chat_endpoint(
    request: CreateChatRequest,
    user: str = Depends(get_user_key),
    container: AppContainer = Depends(get_container),
) -> None:
    """Create a chat; an existing chat with the same id is left as is."""
    container.chat_store.create_chat(user, request.chat_id, request.name)
    return None


@router.get("/chats", response_model=list[ChatMeta])
async def list_chats_endpoint(
    user: str = Depends(get_user_key),
    container: AppContainer = Depends(get_container),
) -> list[ChatMeta]:
    """List the caller's chats.  An unknown user gets an empty list."""
    try:
        return container.chat_store.list_chats(user)
    except Exception as exc:
        logger.exception("Failed to list chats")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list chats",
        ) from exc


@router.get("/chats/{chat_id}", response_model=ChatRecord)
async def get_chat_endpoint(
    chat_id: str,
    user: str = Depends(get_user_key),
    container: AppContainer = Depends(get_container),
) -> ChatRecord:
    """Return a chat's name and messages, or 404 if it does not exist."""
    try:
        return container.chat_store.get_chat_history(user, chat_id)
    except ChatError:
        raise
    except Exception as exc:
        logger.exception("Failed to get chat history")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get chat history",
        ) from exc


@router.post("/chats/{chat_id}/messages", status_code=status.HTTP_204_NO_CONTENT)
async def append_message_endpoint(
    chat_id: str,
    request: AppendMessageRequest,
    user: str = Depends(get_user_key),
    container: AppContainer = Depends(get_container),
) -> None:
    """Append a question/answer turn.  Unknown chats are silently ignored."""
    container.chat_store.append_message(user, chat_id, request.question, request.answer)
    return None


@router.patch("/chats/{chat_id}", response_model=RenameChatResponse)
async def rename_chat_endpoint(
    chat_id: str,
    request: RenameChatRequest,
    user: str = Depends(get_user_key),
    container: AppContainer = Depends(get_container),
) -> RenameChatResponse:
    return RenameChatResponse(renamed=container.chat_store.rename_chat(user, chat_id, request.name))


@router.delete("/chats/{chat_id}", response_model=DeleteChatResponse)
async def delete_chat_endpoint(
    chat_id: str,
    user: str = Depends(get_user_key),
    container: AppContainer = Depends(get_container),
) -> DeleteChatResponse:
    return DeleteChatResponse(deleted=container.chat_store.delete_chat(user, chat_id))


@router.post("/chats/{chat_id}/ask", response_model=AskResponse)
async def ask_endpoint(
    chat_id: str,
    request: PromptRequest,
    user: str = Depends(get_user_key),
    container: AppContainer = Depends(get_container),
) -> AskResponse:
    """Run the full prompt flow for one chat.

    The chat must exist.  The quota gate is checked first; a refused
    prompt returns 429 without calling the model.  The answer is appended
    to the chat only when the model actually answered, so provider error
    messages never end up in a history.
    """
    # Raises ChatNotFoundError -> 404 before any quota is consumed
    container.chat_store.get_chat_history(user, chat_id)

    if not container.quota_gate.try_consume(user):
        quota = container.quota_gate.status(user)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail={"message": "Prompt limit reached", "unblocks_at": quota.unblocks_at},
        )

    result = await container.conversation_service.submit_prompt_result(user, request.prompt)
    recorded = False
    if result.ok:
        # The chat may have been deleted while the model was answering
        recorded = container.chat_store.record_turn(user, chat_id, request.prompt, result.render())
        if not recorded:
            logger.info("Chat {} disappeared before the answer could be recorded", chat_id)
    else:
        logger.info("Not recording failed completion in chat {} for user={}", chat_id, user)
    return AskResponse(
        allowed=True,
        answer=result.render(),
        recorded=recorded,
        status=result.status.value,
    )
