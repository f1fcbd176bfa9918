"""Error handling utilities and custom exceptions."""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger


class ChatError(Exception):
    """Exception raised when a chat operation fails."""

    pass


class ChatNotFoundError(ChatError):
    """Raised when a chat history is requested for a missing user or chat.

    History retrieval is the only store operation with a hard failure;
    every other operation on a missing target is a silent no-op.
    """

    def __init__(self, user: str, chat_id: str) -> None:
        super().__init__(f"Chat {chat_id!r} not found")
        self.user = user
        self.chat_id = chat_id


async def http_exception_handler(request: Request, exc: ChatError) -> JSONResponse:
    """Convert a ChatError into an HTTP 500 response."""
    logger.error("ChatError occurred: {}", exc)
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc)},
    )


async def not_found_exception_handler(request: Request, exc: ChatNotFoundError) -> JSONResponse:
    """Convert a ChatNotFoundError into an HTTP 404 response."""
    logger.info("Chat not found: chat={} path={}", exc.chat_id, request.url.path)
    return JSONResponse(
        status_code=404,
        content={"detail": str(exc)},
    )
