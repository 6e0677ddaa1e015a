"""Response models for the commune endpoint."""

from pydantic import BaseModel, Field


class CommuneResponse(BaseModel):
    """The spirit's reply to a commune request."""

    response: str
    session_id: str = Field(
        ...,
        description="Opaque identifier generated for this exchange.",
    )


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    error: str
