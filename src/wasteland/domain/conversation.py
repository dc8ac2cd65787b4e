"""Structured, append-only conversation history between player and DM."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List

from wasteland.data.errors import DataDecodeError
from wasteland.data.schema import require_exact_keys, require_int, require_list, require_mapping, require_str

PLAYER_PREFIX = "Player: "
DM_PREFIX = "DM: "


class Speaker(Enum):
    PLAYER = "player"
    DM = "dm"


@dataclass(frozen=True, slots=True)
class ConversationTurn:
    speaker: Speaker
    text: str
    turn_number: int

    def format(self) -> str:
        prefix = PLAYER_PREFIX if self.speaker is Speaker.PLAYER else DM_PREFIX
        return f"{prefix}{self.text}"

    def format_for_prompt(self) -> str:
        if self.speaker is Speaker.PLAYER:
            return f">>> PLAYER: {self.text}"
        return f">>> DM (YOU): {self.text}"


@dataclass(slots=True)
class Conversation:
    turns: List[ConversationTurn] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.turns)

    def is_empty(self) -> bool:
        return not self.turns

    def add_player_turn(self, text: str) -> ConversationTurn:
        return self._append(Speaker.PLAYER, text)

    def add_dm_turn(self, text: str) -> ConversationTurn:
        return self._append(Speaker.DM, text)

    def recent(self, count: int) -> List[ConversationTurn]:
        """Return the last ``count`` turns, or all of them when fewer exist."""
        if count <= 0:
            return []
        return list(self.turns[-count:])

    def build_prompt_section(self, count: int) -> str:
        """Render the last ``count`` turns as the history block of a DM prompt."""
        recent = self.recent(count)
        if not recent:
            return ""
        body = "\n".join(turn.format_for_prompt() for turn in recent)
        return (
            "=== CONVERSATION HISTORY ===\n"
            "(You are the DM. The player is the other speaker.)\n"
            "(>>> marks turn boundaries for clarity)\n\n"
            f"{body}\n"
            "=== END HISTORY ===\n\n"
        )

    # ---- Legacy story log ----

    @classmethod
    def from_legacy_story(cls, entries: Iterable[str]) -> "Conversation":
        """Rebuild turns from ``Player: ...`` / ``DM: ...`` lines; untagged lines are DM text."""
        conversation = cls()
        for entry in entries:
            if entry.startswith(PLAYER_PREFIX):
                conversation.add_player_turn(entry[len(PLAYER_PREFIX):])
            elif entry.startswith(DM_PREFIX):
                conversation.add_dm_turn(entry[len(DM_PREFIX):])
            else:
                conversation.add_dm_turn(entry)
        return conversation

    def to_legacy_story(self) -> List[str]:
        return [turn.format() for turn in self.turns]

    # ---- Serialization ----

    def to_dict(self) -> Dict[str, Any]:
        return {
            "turns": [
                {"speaker": turn.speaker.value, "text": turn.text, "turn_number": turn.turn_number}
                for turn in self.turns
            ]
        }

    @classmethod
    def from_dict(cls, value: Any, location: str = "conversation") -> "Conversation":
        payload = require_mapping(value, location)
        require_exact_keys(payload, {"turns"}, location)
        conversation = cls()
        for index, raw in enumerate(require_list(payload["turns"], f"{location}.turns")):
            where = f"{location}.turns[{index}]"
            data = require_mapping(raw, where)
            require_exact_keys(data, {"speaker", "text", "turn_number"}, where)
            speaker_raw = require_str(data["speaker"], f"{where}.speaker")
            try:
                speaker = Speaker(speaker_raw)
            except ValueError as exc:
                raise DataDecodeError(f"{where}.speaker", f"unknown speaker '{speaker_raw}'") from exc
            turn_number = require_int(data["turn_number"], f"{where}.turn_number")
            if turn_number != index:
                raise DataDecodeError(f"{where}.turn_number", f"expected {index}, found {turn_number}")
            conversation.turns.append(
                ConversationTurn(speaker=speaker, text=require_str(data["text"], f"{where}.text"), turn_number=turn_number)
            )
        return conversation

    def _append(self, speaker: Speaker, text: str) -> ConversationTurn:
        turn = ConversationTurn(speaker=speaker, text=text, turn_number=len(self.turns))
        self.turns.append(turn)
        return turn
