"""Controllers for the caller's display name."""

from fastapi import APIRouter, Depends, status

from ..models.api import UserNameRequest, UserNameResponse
from ..services.container import AppContainer
from .dependencies import get_container, get_user_key

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("/name", response_model=UserNameResponse)
async def get_name_endpoint(
    user: str = Depends(get_user_key),
    container: AppContainer = Depends(get_container),
) -> UserNameResponse:
    """Return the caller's display name, ``"user"`` if none was set."""
    return UserNameResponse(name=container.profile_store.get_name(user))


@router.put("/name", status_code=status.HTTP_204_NO_CONTENT)
async def set_name_endpoint(
    request: UserNameRequest,
    user: str = Depends(get_user_key),
    container: AppContainer = Depends(get_container),
) -> None:
    container.profile_store.set_name(user, request.name)
    return None
