"""Admin endpoints for operational analytics and store maintenance."""

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger

from ..models.api import EvictResponse
from ..models.dashboard import DashboardData
from ..models.snapshot import StoreSnapshot
from ..services.container import AppContainer
from .dependencies import get_container

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/dashboard", response_model=DashboardData)
async def dashboard_endpoint(
    container: AppContainer = Depends(get_container),
) -> DashboardData:
    """Return counters across every user held in memory."""
    try:
        return container.dashboard()
    except Exception as exc:  # pragma: no cover - defensive logging
        logger.exception("Failed to build dashboard data")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to build dashboard data",
        ) from exc


@router.post("/quota/evict", response_model=EvictResponse)
async def evict_quota_endpoint(
    container: AppContainer = Depends(get_container),
) -> EvictResponse:
    """Forget users whose prompt lockout has already expired."""
    return EvictResponse(evicted=container.quota_gate.evict_expired())


@router.get("/snapshot", response_model=StoreSnapshot)
async def snapshot_endpoint(
    container: AppContainer = Depends(get_container),
) -> StoreSnapshot:
    """Return a consistent copy of every store."""
    try:
        return container.snapshot()
    except Exception as exc:  # pragma: no cover - defensive logging
        logger.exception("Failed to snapshot stores")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to snapshot stores",
        ) from exc
