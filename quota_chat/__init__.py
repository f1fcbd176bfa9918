"""Per-user chat history and prompt quota service in front of an LLM API."""

__version__ = "0.1.0"
