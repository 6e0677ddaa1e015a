"""Enumerations used across models."""

from enum import Enum


class MessageRole(str, Enum):
    """Enum for message roles in a conversation.

    Clients may only send ``USER`` and ``ASSISTANT`` turns as conversation
    history; the persona instruction is added by the prompt builder.
    """

    USER = "user"
    ASSISTANT = "assistant"


class ValidationFailure(str, Enum):
    """Reasons a commune request payload can be rejected.

    The values are the human-readable messages returned to clients.
    """

    MISSING_MESSAGE = "Message is required"
    MESSAGE_TOO_LONG = "Message too long"
    INVALID_HISTORY = "Invalid conversation history"
    HISTORY_TOO_LONG = "Conversation history too long"
