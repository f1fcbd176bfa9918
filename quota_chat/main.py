"""FastAPI application entry point.

This module builds the application container, configures logging and
registers API routes.  The `uvicorn` ASGI server can point to
``quota_chat.main:app`` to serve the application.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .config.app_config import AppConfig, get_app_config
from .config.llm_config import LlmConfig, get_llm_config
from .controllers.admin_controller import router as admin_router
from .controllers.chat_controller import router as chat_router
from .controllers.profile_controller import router as profile_router
from .services.checkpoint import load_checkpoint, save_checkpoint
from .services.container import build_container
from .utils.error_handler import (
    ChatError,
    ChatNotFoundError,
    http_exception_handler,
    not_found_exception_handler,
)
from .utils.logger import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Restore the checkpoint on startup and write it on shutdown."""
    container = app.state.container
    checkpoint_file = container.app_config.checkpoint_file
    if checkpoint_file:
        load_checkpoint(container, checkpoint_file)
    yield
    if checkpoint_file:
        try:
            save_checkpoint(container, checkpoint_file)
        except OSError:
            logger.exception("Failed to write checkpoint to {}", checkpoint_file)


def create_app(
    app_config: AppConfig | None = None,
    llm_config: LlmConfig | None = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    clock: Optional[Callable[[], float]] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Each call builds its own stores, so two applications never share
    state.  ``transport`` and ``clock`` are passed through to the
    completion client and the quota gate.
    """
    app_config = app_config or get_app_config()
    llm_config = llm_config or get_llm_config()
    setup_logging(app_config)

    app = FastAPI(title="Quota Chat", version="0.1.0", lifespan=lifespan)
    app.state.container = build_container(
        app_config,
        llm_config,
        transport=transport,
        clock=clock,
    )

    # Enable CORS for all origins; adjust in production as needed
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ChatNotFoundError, not_found_exception_handler)
    app.add_exception_handler(ChatError, http_exception_handler)

    app.include_router(chat_router)
    app.include_router(profile_router)
    app.include_router(admin_router)

    @app.get("/health", tags=["Health"])
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        logger.debug("Health check invoked")
        return {"status": "ok"}

    return app


# Create an application instance for ASGI servers
app = create_app()
