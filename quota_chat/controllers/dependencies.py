"""FastAPI dependencies shared by the routers."""

from typing import Optional

from fastapi import Header, HTTPException, Request, status

from ..services.container import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the container built by ``create_app`` for this application."""
    return request.app.state.container


def get_user_key(x_user_key: Optional[str] = Header(default=None)) -> str:
    """Return the caller's user key.

    Authentication happens in front of this service; the key arrives
    already verified in the ``X-User-Key`` header and is treated as an
    opaque identifier.
    """
    if not x_user_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Key header",
        )
    return x_user_key
