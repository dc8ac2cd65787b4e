from __future__ import annotations

import pytest

from wasteland.domain.conversation import Speaker
from wasteland.domain.entities import Special
from wasteland.domain.errors import RuleError
from wasteland.domain.state import STARTING_QUEST, GameState
from wasteland.domain.worldbook import Worldbook
from wasteland.services.factories import create_character


def _state() -> GameState:
    return GameState.new(create_character("Vault Dweller", Special.from_values([6, 5, 5, 6, 7, 5, 6])))


def test_new_state_starts_in_vault() -> None:
    state = _state()
    assert state.location == "vault_13"
    assert state.day == 1
    assert state.quest_log == [STARTING_QUEST]
    assert not state.combat.active
    assert "vault_13" in state.worldbook.locations
    assert state.check_invariants() == []


def test_new_state_seeds_default_world_and_leaves_the_rest_empty() -> None:
    state = _state()
    assert state.worldbook == Worldbook.with_defaults()
    assert state.conversation.is_empty()
    assert state.story == []
    assert state.combat.enemies == []


def test_history_is_written_to_both_logs() -> None:
    state = _state()
    state.record_player_action("I look around.")
    state.record_dm_response("Rusted lockers line the wall.")
    assert state.story == ["Player: I look around.", "DM: Rusted lockers line the wall."]
    assert [turn.speaker for turn in state.display_turns()] == [Speaker.PLAYER, Speaker.DM]


def test_display_falls_back_to_legacy_story() -> None:
    state = _state()
    state.story = ["Player: Hi", "DM: Hello"]
    turns = state.display_turns()
    assert [turn.text for turn in turns] == ["Hi", "Hello"]


def test_advance_day() -> None:
    state = _state()
    assert state.advance_day(3) == 4
    with pytest.raises(RuleError):
        state.advance_day(-1)


def test_quest_log() -> None:
    state = _state()
    assert state.add_quest("Rescue Tandi")
    assert not state.add_quest("Rescue Tandi")
    assert state.complete_quest(STARTING_QUEST)
    assert not state.complete_quest(STARTING_QUEST)
    assert state.quest_log == ["Rescue Tandi"]


def test_travel_requires_known_location() -> None:
    state = _state()
    state.travel_to("shady_sands")
    assert state.location == "shady_sands"
    with pytest.raises(RuleError):
        state.travel_to("mariposa")
    assert state.location == "shady_sands"


def test_travel_counts_visits() -> None:
    state = _state()
    state.travel_to("shady_sands")
    state.travel_to("vault_13")
    state.travel_to("shady_sands")
    assert state.worldbook.locations["shady_sands"].visit_count == 2
    assert state.worldbook.locations["vault_13"].visit_count == 1
    assert state.worldbook.locations["the_hub"].visit_count == 0


def test_check_invariants_collects_nested_problems() -> None:
    state = _state()
    state.character.current_hp = -1
    state.day = 0
    problems = state.check_invariants()
    assert any(problem.startswith("character:") for problem in problems)
    assert any("day" in problem for problem in problems)


def test_prompt_context_combines_world_and_history() -> None:
    state = _state()
    for index in range(4):
        state.record_player_action(f"action {index}")
    context = state.prompt_context(history_turns=2)
    assert context.startswith("## Known Locations\n")
    assert "=== CONVERSATION HISTORY ===" in context
    assert ">>> PLAYER: action 3" in context
    assert "action 1" not in context
