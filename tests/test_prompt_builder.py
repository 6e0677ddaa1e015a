from __future__ import annotations

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from commune.chains.prompt_builder import build_context_annotation, build_messages
from commune.models.chat_message import HistoryEntry
from commune.prompts import SEANCE_AUDIO_HINT, SPIRIT_SYSTEM_PROMPT


def test_messages_are_system_then_history_then_user() -> None:
    history = [
        HistoryEntry(role="user", content="Is anyone there?"),
        HistoryEntry(role="assistant", content="...cold... so cold..."),
    ]

    messages = build_messages(history, "Who are you?")

    assert [type(m) for m in messages] == [SystemMessage, HumanMessage, AIMessage, HumanMessage]
    assert messages[0].content == SPIRIT_SYSTEM_PROMPT
    assert messages[1].content == "Is anyone there?"
    assert messages[2].content == "...cold... so cold..."
    assert messages[3].content == "Who are you?"


def test_user_turn_is_unchanged_without_context() -> None:
    messages = build_messages([], "Who is here?")

    assert len(messages) == 2
    assert messages[-1].content == "Who is here?"


def test_seance_audio_annotation_prefixes_message() -> None:
    messages = build_messages([], "Did you hear that?", seance_audio_recorded=True)

    assert messages[-1].content == f"[{SEANCE_AUDIO_HINT}] Did you hear that?"


def test_location_and_seance_hints_share_one_annotation() -> None:
    annotation = build_context_annotation("the old lighthouse", seance_audio_recorded=True)

    assert annotation is not None
    assert annotation.startswith("[")
    assert annotation.endswith("]")
    assert "the old lighthouse" in annotation
    assert annotation.index("the old lighthouse") < annotation.index(SEANCE_AUDIO_HINT)
    assert annotation.count("[") == 1


def test_no_annotation_without_hints() -> None:
    assert build_context_annotation(None, False) is None
    assert build_context_annotation("", False) is None


def test_history_is_not_modified() -> None:
    history = [HistoryEntry(role="user", content="z" * 300)]

    messages = build_messages(history, "again", location="attic")

    assert messages[1].content == "z" * 300
    assert messages[-1].content.endswith(" again")
    assert "attic" in messages[-1].content
