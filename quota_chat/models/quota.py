"""Models describing a user's prompt quota."""

from typing import Optional

from pydantic import BaseModel, Field


class QuotaState(BaseModel):
    """Per-user prompt counter and optional lockout start.

    ``blocked_since`` is a wall-clock timestamp in seconds.  It is set only
    when ``count`` reached the configured limit during the current window,
    and while it is set ``count`` does not move.
    """

    count: int = Field(default=0, ge=0)
    blocked_since: Optional[float] = None


class QuotaStatus(BaseModel):
    """Read-only view of a user's quota returned by the API."""

    count: int
    limit: int
    remaining: int
    blocked_since: Optional[float] = None
    unblocks_at: Optional[float] = Field(
        default=None,
        description="Timestamp at which the next prompt will be accepted again, if locked.",
    )
