"""Request model for the commune endpoint."""

from pydantic import BaseModel, Field

from .chat_message import HistoryEntry


class CommuneRequest(BaseModel):
    """A validated commune request.

    Instances are produced by :func:`commune.services.validation.validate`
    rather than by FastAPI's body parsing, so that each rejection can be
    reported with its own fixed message instead of a generic 422.  The
    ``conversation_history`` held here is already sanitized.
    """

    message: str = Field(..., min_length=1, description="The user's message to the spirit.")
    conversation_history: list[HistoryEntry] = Field(
        default_factory=list,
        description="Prior user/assistant turns in chronological order.",
    )
    seance_audio_recorded: bool = Field(
        default=False,
        description="Whether the user just recorded ambient audio during a séance.",
    )
    location: str | None = Field(
        default=None,
        description="Optional free-form description of where the user is.",
    )
