"""Models representing conversation history turns."""

from typing import Literal

from pydantic import BaseModel, Field


class HistoryEntry(BaseModel):
    """A single sanitized turn of prior conversation.

    History arrives from the client and is untrusted.  Entries are only
    built by the history sanitizer, which guarantees the role is one of
    ``user``/``assistant`` and that the content has been coerced to text
    and truncated.
    """

    role: Literal["user", "assistant"]
    content: str = Field(default="")
