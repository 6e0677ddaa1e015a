"""Assemble the message sequence sent to the chat model."""

from __future__ import annotations

from typing import Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from ..models.chat_message import HistoryEntry
from ..models.enums import MessageRole
from ..prompts import LOCATION_HINT, SEANCE_AUDIO_HINT, SPIRIT_SYSTEM_PROMPT


def build_context_annotation(
    location: str | None = None,
    seance_audio_recorded: bool = False,
) -> str | None:
    """Return the bracketed hint prepended to the user turn, if any.

    The annotation only steers generation; it is never shown to the user.
    """
    hints: list[str] = []
    if location:
        hints.append(LOCATION_HINT.format(location=location))
    if seance_audio_recorded:
        hints.append(SEANCE_AUDIO_HINT)
    if not hints:
        return None
    return "[" + " ".join(hints) + "]"


def build_messages(
    history: Sequence[HistoryEntry],
    message: str,
    *,
    location: str | None = None,
    seance_audio_recorded: bool = False,
    system_prompt: str = SPIRIT_SYSTEM_PROMPT,
) -> list[BaseMessage]:
    """Build ``[system, *history, user]`` for a generation call.

    ``history`` must already be sanitized; no truncation happens here.
    """
    messages: list[BaseMessage] = [SystemMessage(content=system_prompt)]
    for entry in history:
        if entry.role == MessageRole.ASSISTANT.value:
            messages.append(AIMessage(content=entry.content))
        else:
            messages.append(HumanMessage(content=entry.content))

    annotation = build_context_annotation(location, seance_audio_recorded)
    user_turn = f"{annotation} {message}" if annotation else message
    messages.append(HumanMessage(content=user_turn))
    return messages
