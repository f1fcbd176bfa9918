"""In-memory stores holding per-user chats, profiles and prompt quotas."""

from .chat_store import ChatStore  # noqa: F401
from .profile_store import ProfileStore  # noqa: F401
from .quota_gate import QuotaGate  # noqa: F401
