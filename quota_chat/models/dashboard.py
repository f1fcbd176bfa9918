"""Pydantic models for admin dashboard analytics."""

from __future__ import annotations

from pydantic import BaseModel


class DashboardData(BaseModel):
    """Top-level counters across every user held in memory."""

    total_users: int
    total_chats: int
    total_messages: int
    named_users: int
    tracked_quota_users: int
    locked_users: int
