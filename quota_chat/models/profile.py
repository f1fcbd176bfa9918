"""Data structure holding a user's display name."""

from pydantic import BaseModel

DEFAULT_DISPLAY_NAME = "user"


class ProfileEntry(BaseModel):
    display_name: str = DEFAULT_DISPLAY_NAME
