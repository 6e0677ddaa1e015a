"""Prompt text used to build generation requests."""

from .spirit import LOCATION_HINT, SEANCE_AUDIO_HINT, SPIRIT_SYSTEM_PROMPT  # noqa: F401
