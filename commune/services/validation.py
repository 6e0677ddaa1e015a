"""Payload validation and history sanitization.

``validate`` turns the loosely typed JSON body into a
:class:`~commune.models.commune_request.CommuneRequest`, raising a
:class:`~commune.utils.error_handler.ValidationError` tagged with the
first failed check.  Checks run in a fixed order and short-circuit.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Iterable

from ..models.chat_message import HistoryEntry
from ..models.commune_request import CommuneRequest
from ..models.enums import MessageRole, ValidationFailure
from ..utils.error_handler import ValidationError

MAX_MESSAGE_CHARS = 400
MAX_HISTORY_MESSAGES = 12
MAX_HISTORY_MESSAGE_CHARS = 300
MAX_LOCATION_CHARS = 100

_HISTORY_ROLES = (MessageRole.USER.value, MessageRole.ASSISTANT.value)


def validate(raw_body: Any) -> CommuneRequest:
    """Validate a decoded request body.

    A body that is not a JSON object is treated as one without a
    message.  Missing or null ``conversation_history`` defaults to an
    empty history.
    """
    body: Mapping[str, Any] = raw_body if isinstance(raw_body, Mapping) else {}

    message = body.get("message")
    if _is_blank(message):
        raise ValidationError(ValidationFailure.MISSING_MESSAGE)
    if not isinstance(message, str) or len(message) > MAX_MESSAGE_CHARS:
        raise ValidationError(ValidationFailure.MESSAGE_TOO_LONG)

    history = body.get("conversation_history")
    if history is None:
        history = []
    if not isinstance(history, list):
        raise ValidationError(ValidationFailure.INVALID_HISTORY)
    if len(history) > MAX_HISTORY_MESSAGES:
        raise ValidationError(ValidationFailure.HISTORY_TOO_LONG)

    return CommuneRequest(
        message=message,
        conversation_history=sanitize_history(history),
        seance_audio_recorded=bool(body.get("seance_audio_recorded")),
        location=_clean_location(body.get("location")),
    )


def sanitize_history(raw_history: Iterable[Any]) -> list[HistoryEntry]:
    """Drop entries with unknown roles and bound the rest.

    Order is preserved.  Content is coerced to text with
    :func:`_content_text` and truncated.  Already sanitized entries pass through
    unchanged, so the function is idempotent.
    """
    sanitized: list[HistoryEntry] = []
    for entry in raw_history:
        if isinstance(entry, HistoryEntry):
            entry = entry.model_dump()
        if not isinstance(entry, Mapping):
            continue
        role = entry.get("role")
        if not isinstance(role, str) or role not in _HISTORY_ROLES:
            continue
        text = _content_text(entry.get("content"))
        sanitized.append(HistoryEntry(role=role, content=text[:MAX_HISTORY_MESSAGE_CHARS]))
    return sanitized


def _clean_location(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    location = value.strip()[:MAX_LOCATION_CHARS]
    return location or None


def _is_blank(message: Any) -> bool:
    """True for the values a client sends to mean "no message".

    Only null, ``false``, the empty string and zero count as blank; an
    empty object or array is a (malformed) message, not a missing one.
    """
    if message is None or message is False:
        return True
    return isinstance(message, (str, int, float)) and not message


def _content_text(content: Any) -> str:
    """Coerce a JSON history value to prompt text.

    Booleans render as ``true``/``false``, whole-number floats as
    integers, objects and arrays as compact JSON.  The model sees the
    value as the client sent it rather than a Python repr.
    """
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, bool):
        return "true" if content else "false"
    if isinstance(content, float) and content.is_integer():
        return str(int(content))
    if isinstance(content, (dict, list)):
        return json.dumps(content, ensure_ascii=False, separators=(",", ":"))
    return str(content)
