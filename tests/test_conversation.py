from __future__ import annotations

import pytest

from wasteland.data.errors import DataDecodeError
from wasteland.domain.conversation import Conversation, Speaker


def _conversation() -> Conversation:
    conversation = Conversation()
    conversation.add_player_turn("I open the vault door.")
    conversation.add_dm_turn("Sunlight floods the cave.")
    conversation.add_player_turn("I walk outside.")
    return conversation


def test_turns_are_numbered_in_order() -> None:
    conversation = _conversation()
    assert len(conversation) == 3
    assert [turn.turn_number for turn in conversation.turns] == [0, 1, 2]
    assert [turn.speaker for turn in conversation.turns] == [Speaker.PLAYER, Speaker.DM, Speaker.PLAYER]


@pytest.mark.parametrize(("count", "expected"), [(0, 0), (-1, 0), (2, 2), (10, 3)])
def test_recent_returns_at_most_count(count: int, expected: int) -> None:
    recent = _conversation().recent(count)
    assert len(recent) == expected
    if recent:
        assert recent[-1].text == "I walk outside."


def test_prompt_section_marks_speakers() -> None:
    section = _conversation().build_prompt_section(2)
    assert section.startswith("=== CONVERSATION HISTORY ===\n")
    assert ">>> DM (YOU): Sunlight floods the cave.\n>>> PLAYER: I walk outside.\n" in section
    assert "I open the vault door." not in section
    assert section.endswith("=== END HISTORY ===\n\n")


def test_prompt_section_is_empty_without_turns() -> None:
    assert Conversation().build_prompt_section(5) == ""


def test_legacy_story_conversion() -> None:
    story = ["Player: Hello", "DM: Welcome, stranger.", "The wind howls."]
    conversation = Conversation.from_legacy_story(story)
    assert [turn.speaker for turn in conversation.turns] == [Speaker.PLAYER, Speaker.DM, Speaker.DM]
    assert conversation.turns[2].text == "The wind howls."
    assert conversation.to_legacy_story() == ["Player: Hello", "DM: Welcome, stranger.", "DM: The wind howls."]


def test_dict_round_trip() -> None:
    conversation = _conversation()
    assert Conversation.from_dict(conversation.to_dict()) == conversation


def test_from_dict_rejects_out_of_order_turns() -> None:
    payload = _conversation().to_dict()
    payload["turns"][1]["turn_number"] = 5
    with pytest.raises(DataDecodeError) as excinfo:
        Conversation.from_dict(payload)
    assert excinfo.value.location == "conversation.turns[1].turn_number"


def test_from_dict_rejects_unknown_speaker() -> None:
    payload = _conversation().to_dict()
    payload["turns"][0]["speaker"] = "narrator"
    with pytest.raises(DataDecodeError, match="narrator"):
        Conversation.from_dict(payload)
