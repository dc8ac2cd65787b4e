"""Root aggregate for a play session."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from wasteland.domain.combat import CombatEncounter
from wasteland.domain.conversation import DM_PREFIX, PLAYER_PREFIX, Conversation, ConversationTurn
from wasteland.domain.entities import Character
from wasteland.domain.errors import RuleError
from wasteland.domain.worldbook import DEFAULT_LOCATION_ID, Worldbook

STARTING_QUEST = "Find the Water Chip"
DEFAULT_PROMPT_HISTORY_TURNS = 10


@dataclass
class GameState:
    """Owns the character, encounter, world knowledge and both history logs."""

    character: Character
    combat: CombatEncounter = field(default_factory=CombatEncounter)
    worldbook: Worldbook = field(default_factory=Worldbook)
    conversation: Conversation = field(default_factory=Conversation)
    story: List[str] = field(default_factory=list)
    location: str = DEFAULT_LOCATION_ID
    day: int = 1
    quest_log: List[str] = field(default_factory=list)

    @classmethod
    def new(cls, character: Character) -> "GameState":
        return cls(
            character=character,
            worldbook=Worldbook.with_defaults(),
            location=DEFAULT_LOCATION_ID,
            day=1,
            quest_log=[STARTING_QUEST],
        )

    # ---- History ----

    def record_player_action(self, text: str) -> None:
        """Append to the conversation and mirror the line into the legacy story log."""
        self.conversation.add_player_turn(text)
        self.story.append(f"{PLAYER_PREFIX}{text}")

    def record_dm_response(self, text: str) -> None:
        self.conversation.add_dm_turn(text)
        self.story.append(f"{DM_PREFIX}{text}")

    def display_turns(self) -> List[ConversationTurn]:
        """Turns for display: the conversation when present, else the legacy story."""
        if not self.conversation.is_empty():
            return list(self.conversation.turns)
        return list(Conversation.from_legacy_story(self.story).turns)

    def prompt_context(self, history_turns: int = DEFAULT_PROMPT_HISTORY_TURNS) -> str:
        """World knowledge followed by the recent conversation, for the DM prompt."""
        return self.worldbook.build_context() + "\n" + self.conversation.build_prompt_section(history_turns)

    # ---- Progression ----

    def advance_day(self, days: int = 1) -> int:
        if days < 0:
            raise RuleError("Days cannot go backwards.")
        self.day += days
        return self.day

    def add_quest(self, quest: str) -> bool:
        if quest in self.quest_log:
            return False
        self.quest_log.append(quest)
        return True

    def complete_quest(self, quest: str) -> bool:
        if quest not in self.quest_log:
            return False
        self.quest_log.remove(quest)
        return True

    def travel_to(self, location_id: str) -> None:
        """Move to a known location and count the visit in the worldbook."""
        self.worldbook.visit_location(location_id)
        self.location = location_id

    def check_invariants(self) -> List[str]:
        problems = [f"character: {problem}" for problem in self.character.check_invariants()]
        problems.extend(f"combat: {problem}" for problem in self.combat.check_invariants())
        problems.extend(f"worldbook: {problem}" for problem in self.worldbook.check_invariants())
        if self.day < 1:
            problems.append(f"day {self.day} must be 1 or later")
        return problems
