"""Expose commonly used model classes at the package level.

Importing these classes here allows consumers to write concise imports like::

    from quota_chat.models import ChatRecord, MessageTurn, QuotaState

These names refer to the underlying Pydantic models defined in their
respective modules.
"""

from .chat import ChatMeta, ChatRecord, MessageTurn  # noqa: F401
from .completion import CompletionResult  # noqa: F401
from .enums import CompletionStatus, MessageRole  # noqa: F401
from .profile import DEFAULT_DISPLAY_NAME, ProfileEntry  # noqa: F401
from .quota import QuotaState, QuotaStatus  # noqa: F401
from .snapshot import StoreSnapshot  # noqa: F401
