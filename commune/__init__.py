"""Commune: relays chat messages to a spirit persona served by an LLM."""

__version__ = "0.1.0"
