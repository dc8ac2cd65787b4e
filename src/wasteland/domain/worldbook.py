"""Persistent world knowledge: locations, NPCs and events.

The worldbook feeds the DM prompt through :meth:`Worldbook.build_context`.
That text must be byte-stable for identical contents, so every section is
ordered by id (events by day, then id) and never by insertion order.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from wasteland.data.errors import DataDecodeError, DataNotFoundError
from wasteland.data.json_loader import load_json, write_json_atomic
from wasteland.data.schema import (
    require_exact_keys,
    require_int,
    optional_str,
    require_mapping,
    require_str,
    require_str_list,
)
from wasteland.domain.errors import RuleError

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = "unknown"
RECENT_EVENT_LIMIT = 10
LOCATION_EVENT_LIMIT = 3
DEFAULT_LOCATION_ID = "vault_13"


@dataclass(slots=True)
class Location:
    id: str
    name: str
    description: str
    region: str = ""
    notable_features: List[str] = field(default_factory=list)
    connected_locations: List[str] = field(default_factory=list)
    visit_count: int = 0


@dataclass(slots=True)
class NPC:
    id: str
    name: str
    role: str
    location_id: str = UNKNOWN_LOCATION
    disposition: int = 0
    dialogue_hooks: List[str] = field(default_factory=list)


@dataclass(slots=True)
class WorldEvent:
    id: str
    day: int
    summary: str
    participants: List[str] = field(default_factory=list)
    location_id: str | None = None


def generate_id(name: str) -> str:
    """Lowercase, spaces to underscores, keep only ASCII letters, digits and '_'."""
    lowered = name.strip().lower().replace(" ", "_")
    return "".join(ch for ch in lowered if (ch.isascii() and ch.isalnum()) or ch == "_")


@dataclass(slots=True)
class Worldbook:
    locations: Dict[str, Location] = field(default_factory=dict)
    npcs: Dict[str, NPC] = field(default_factory=dict)
    events: Dict[str, WorldEvent] = field(default_factory=dict)

    @classmethod
    def with_defaults(cls) -> "Worldbook":
        """Seed the canonical starting world around Vault 13."""
        book = cls()
        book.add_location(
            Location(
                id="vault_13",
                name="Vault 13",
                description=(
                    "One of the great underground Vaults built before the Great War. "
                    "Vault 13 was designed to remain sealed for 200 years as a test of "
                    "prolonged isolation. The massive gear-shaped door stands as a "
                    "testament to pre-war engineering."
                ),
                region="Southern California",
                notable_features=["Gear-shaped vault door", "Overseer's office", "Water purification chamber"],
                connected_locations=["shady_sands"],
            )
        )
        book.add_location(
            Location(
                id="shady_sands",
                name="Shady Sands",
                description=(
                    "A small farming settlement of adobe and salvaged wood, "
                    "protected by a low wall and wary guards."
                ),
                region="Southern California",
                notable_features=["Brahmin pens", "Adobe walls"],
                connected_locations=["the_hub", "vault_13"],
            )
        )
        book.add_location(
            Location(
                id="the_hub",
                name="The Hub",
                description=(
                    "A sprawling trade city where caravans gather and water "
                    "merchants jostle with gangs for power."
                ),
                region="Southern California",
                notable_features=["Water merchants", "Caravan depot", "Old Town"],
                connected_locations=["shady_sands"],
            )
        )
        book.add_npc(
            NPC(
                id="overseer",
                name="The Overseer",
                role="Vault 13 Overseer",
                location_id="vault_13",
                disposition=20,
                dialogue_hooks=["The water chip has failed.", "We have 150 days of water left."],
            )
        )
        book.add_npc(
            NPC(
                id="aradesh",
                name="Aradesh",
                role="Leader of Shady Sands",
                location_id="shady_sands",
                disposition=0,
                dialogue_hooks=["Strangers are not trusted here."],
            )
        )
        book.record_event(
            1,
            "The Vault 13 water chip failed and the Overseer sent a dweller into the wasteland.",
            ["overseer"],
            location_id="vault_13",
        )
        return book

    # ---- Mutation ----

    def add_location(self, location: Location) -> None:
        self.locations[location.id] = location

    def add_npc(self, npc: NPC) -> None:
        """Add or replace an NPC; its location must be known or ``unknown``."""
        if npc.location_id != UNKNOWN_LOCATION and npc.location_id not in self.locations:
            raise RuleError(f"NPC '{npc.id}' refers to unknown location '{npc.location_id}'.")
        self.npcs[npc.id] = npc

    def add_event(self, event: WorldEvent) -> None:
        if event.day < 1:
            raise RuleError(f"Event '{event.id}' must happen on day 1 or later.")
        if event.location_id is not None and event.location_id not in self.locations:
            raise RuleError(f"Event '{event.id}' refers to unknown location '{event.location_id}'.")
        self.events[event.id] = event

    def record_event(
        self,
        day: int,
        summary: str,
        participants: List[str] | None = None,
        location_id: str | None = None,
    ) -> WorldEvent:
        """Add an event under the next free ``event_NNNN`` id."""
        number = len(self.events) + 1
        while f"event_{number:04d}" in self.events:
            number += 1
        event = WorldEvent(
            id=f"event_{number:04d}",
            day=day,
            summary=summary,
            participants=list(participants or []),
            location_id=location_id,
        )
        self.add_event(event)
        return event

    def visit_location(self, location_id: str) -> int:
        """Count a visit to a known location and return the new total."""
        location = self.locations.get(location_id)
        if location is None:
            raise RuleError(f"Unknown location '{location_id}'.")
        location.visit_count += 1
        return location.visit_count

    # ---- Queries ----

    def get_location(self, location_id: str) -> Location | None:
        return self.locations.get(location_id)

    def get_npc(self, npc_id: str) -> NPC | None:
        return self.npcs.get(npc_id)

    def npcs_at(self, location_id: str) -> List[NPC]:
        return [self.npcs[key] for key in sorted(self.npcs) if self.npcs[key].location_id == location_id]

    def recent_events(self, limit: int = RECENT_EVENT_LIMIT) -> List[WorldEvent]:
        ordered = sorted(self.events.values(), key=lambda event: (event.day, event.id))
        return ordered[-limit:] if limit > 0 else []

    def location_events(self, location_id: str, limit: int = LOCATION_EVENT_LIMIT) -> List[WorldEvent]:
        """Events that happened at ``location_id``, newest first."""
        matching = [event for event in self.events.values() if event.location_id == location_id]
        matching.sort(key=lambda event: (event.day, event.id), reverse=True)
        return matching[:limit] if limit > 0 else []

    def check_invariants(self) -> List[str]:
        problems: List[str] = []
        for npc_id in sorted(self.npcs):
            location_id = self.npcs[npc_id].location_id
            if location_id != UNKNOWN_LOCATION and location_id not in self.locations:
                problems.append(f"NPC '{npc_id}' refers to unknown location '{location_id}'")
        for location_id in sorted(self.locations):
            if self.locations[location_id].visit_count < 0:
                problems.append(f"location '{location_id}' has a negative visit count")
        for event_id in sorted(self.events):
            event = self.events[event_id]
            if event.day < 1:
                problems.append(f"event '{event_id}' has day {event.day}")
            if event.location_id is not None and event.location_id not in self.locations:
                problems.append(f"event '{event_id}' refers to unknown location '{event.location_id}'")
        return problems

    # ---- Prompt context ----

    def build_context(self) -> str:
        lines: List[str] = ["## Known Locations"]
        for location_id in sorted(self.locations):
            location = self.locations[location_id]
            lines.append(f"- {location_id}: {location.name} — {location.description}")
            lines.append(f"  Region: {location.region}; Features: {', '.join(location.notable_features)}")
        lines.append("")
        lines.append("## Known NPCs")
        for npc_id in sorted(self.npcs):
            npc = self.npcs[npc_id]
            lines.append(
                f"- {npc_id}: {npc.name} ({npc.role}) at {npc.location_id}, disposition {npc.disposition}"
            )
        lines.append("")
        lines.append(f"## Recent Events (last {RECENT_EVENT_LIMIT}, chronological)")
        for event in self.recent_events():
            lines.append(f"- Day {event.day}: {event.summary}")
        return "\n".join(lines) + "\n"

    # ---- Serialization ----

    def to_dict(self) -> Dict[str, Any]:
        return {
            "locations": {
                key: {
                    "name": loc.name,
                    "description": loc.description,
                    "region": loc.region,
                    "notable_features": list(loc.notable_features),
                    "connected_locations": list(loc.connected_locations),
                    "visit_count": loc.visit_count,
                }
                for key, loc in self.locations.items()
            },
            "npcs": {
                key: {
                    "name": npc.name,
                    "role": npc.role,
                    "location_id": npc.location_id,
                    "disposition": npc.disposition,
                    "dialogue_hooks": list(npc.dialogue_hooks),
                }
                for key, npc in self.npcs.items()
            },
            "events": {
                key: {
                    "day": event.day,
                    "summary": event.summary,
                    "participants": list(event.participants),
                    "location_id": event.location_id,
                }
                for key, event in self.events.items()
            },
        }

    @classmethod
    def from_dict(cls, value: Any, location: str = "worldbook") -> "Worldbook":
        payload = require_mapping(value, location)
        require_exact_keys(payload, {"locations", "npcs", "events"}, location)
        book = cls()
        for key, raw in require_mapping(payload["locations"], f"{location}.locations").items():
            where = f"{location}.locations.{key}"
            data = require_mapping(raw, where)
            require_exact_keys(
                data,
                {"name", "description", "region", "notable_features", "connected_locations"},
                where,
                optional={"visit_count"},
            )
            book.locations[key] = Location(
                id=key,
                name=require_str(data["name"], f"{where}.name"),
                description=require_str(data["description"], f"{where}.description"),
                region=require_str(data["region"], f"{where}.region"),
                notable_features=require_str_list(data["notable_features"], f"{where}.notable_features"),
                connected_locations=require_str_list(data["connected_locations"], f"{where}.connected_locations"),
                visit_count=require_int(data.get("visit_count", 0), f"{where}.visit_count", minimum=0),
            )
        for key, raw in require_mapping(payload["npcs"], f"{location}.npcs").items():
            where = f"{location}.npcs.{key}"
            data = require_mapping(raw, where)
            require_exact_keys(data, {"name", "role", "location_id", "disposition", "dialogue_hooks"}, where)
            book.npcs[key] = NPC(
                id=key,
                name=require_str(data["name"], f"{where}.name"),
                role=require_str(data["role"], f"{where}.role"),
                location_id=require_str(data["location_id"], f"{where}.location_id"),
                disposition=require_int(data["disposition"], f"{where}.disposition"),
                dialogue_hooks=require_str_list(data["dialogue_hooks"], f"{where}.dialogue_hooks"),
            )
        for key, raw in require_mapping(payload["events"], f"{location}.events").items():
            where = f"{location}.events.{key}"
            data = require_mapping(raw, where)
            require_exact_keys(data, {"day", "summary", "participants"}, where, optional={"location_id"})
            book.events[key] = WorldEvent(
                id=key,
                day=require_int(data["day"], f"{where}.day", minimum=1),
                summary=require_str(data["summary"], f"{where}.summary"),
                participants=require_str_list(data["participants"], f"{where}.participants"),
                location_id=optional_str(data.get("location_id"), f"{where}.location_id"),
            )
        problems = book.check_invariants()
        if problems:
            raise DataDecodeError(location, problems[0])
        return book

    # ---- Files ----

    @classmethod
    def load_from_file(cls, path: Path | str) -> "Worldbook":
        """Load a worldbook; a missing file yields an empty one."""
        try:
            raw = load_json(Path(path))
        except DataNotFoundError:
            logger.debug("No worldbook at %s, starting empty", path)
            return cls()
        return cls.from_dict(raw)

    def save_to_file(self, path: Path | str) -> None:
        write_json_atomic(Path(path), self.to_dict())
