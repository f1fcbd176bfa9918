"""Enumerations used across models."""

from enum import Enum


class MessageRole(str, Enum):
    """Role attached to messages sent to the completion provider.

    Each prompt is forwarded on its own, without earlier turns of the
    chat, so only the user role is sent.
    """

    USER = "user"


class CompletionStatus(str, Enum):
    """Outcome of a single call to the completion provider."""

    SUCCESS = "success"
    NO_CHOICES = "no_choices"
    TRANSPORT_ERROR = "transport_error"
    STATUS_ERROR = "status_error"
    PARSE_ERROR = "parse_error"
