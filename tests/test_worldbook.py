from __future__ import annotations

import json
from pathlib import Path

import pytest

from wasteland.data.errors import DataDecodeError
from wasteland.domain.errors import RuleError
from wasteland.domain.worldbook import NPC, Location, Worldbook, WorldEvent, generate_id


def _small_book() -> Worldbook:
    book = Worldbook()
    book.add_location(Location(id="junktown", name="Junktown", description="A walled scrap town.", region="Core"))
    book.add_location(
        Location(id="necropolis", name="Necropolis", description="City of ghouls.", notable_features=["Sewers", "Vats"])
    )
    book.add_npc(NPC(id="killian", name="Killian Darkwater", role="Mayor", location_id="junktown", disposition=10))
    book.add_npc(NPC(id="set", name="Set", role="Ghoul leader", location_id="necropolis", disposition=-20))
    return book


def test_generate_id() -> None:
    assert generate_id("Shady Sands") == "shady_sands"
    assert generate_id("  The Hub! ") == "the_hub"
    assert generate_id("Vault 13") == "vault_13"


def test_defaults_seed_starting_world() -> None:
    book = Worldbook.with_defaults()
    assert sorted(book.locations) == ["shady_sands", "the_hub", "vault_13"]
    assert book.get_npc("overseer").location_id == "vault_13"  # type: ignore[union-attr]
    assert [npc.id for npc in book.npcs_at("shady_sands")] == ["aradesh"]
    assert len(book.events) == 1
    assert book.check_invariants() == []


def test_npc_must_reference_known_location() -> None:
    book = Worldbook()
    with pytest.raises(RuleError):
        book.add_npc(NPC(id="harold", name="Harold", role="Ghoul", location_id="the_hub"))
    book.add_npc(NPC(id="harold", name="Harold", role="Ghoul"))
    assert book.get_npc("harold").location_id == "unknown"  # type: ignore[union-attr]


def test_events_require_positive_day() -> None:
    with pytest.raises(RuleError):
        Worldbook().add_event(WorldEvent(id="e", day=0, summary="Before time"))


def test_record_event_assigns_sequential_ids() -> None:
    book = Worldbook()
    first = book.record_event(1, "Left the vault")
    second = book.record_event(2, "Reached Shady Sands", ["aradesh"])
    assert (first.id, second.id) == ("event_0001", "event_0002")
    assert second.participants == ["aradesh"]


def test_build_context_format() -> None:
    book = _small_book()
    book.record_event(3, "Met Killian.")
    assert book.build_context() == (
        "## Known Locations\n"
        "- junktown: Junktown — A walled scrap town.\n"
        "  Region: Core; Features: \n"
        "- necropolis: Necropolis — City of ghouls.\n"
        "  Region: ; Features: Sewers, Vats\n"
        "\n"
        "## Known NPCs\n"
        "- killian: Killian Darkwater (Mayor) at junktown, disposition 10\n"
        "- set: Set (Ghoul leader) at necropolis, disposition -20\n"
        "\n"
        "## Recent Events (last 10, chronological)\n"
        "- Day 3: Met Killian.\n"
    )


def test_build_context_is_independent_of_insertion_order() -> None:
    forward = _small_book()
    backward = Worldbook()
    for key in reversed(list(forward.locations)):
        backward.add_location(forward.locations[key])
    for key in reversed(list(forward.npcs)):
        backward.add_npc(forward.npcs[key])
    assert backward.build_context().encode("utf-8") == forward.build_context().encode("utf-8")


def test_empty_worldbook_still_has_section_headers() -> None:
    context = Worldbook().build_context()
    assert "## Known Locations" in context
    assert "## Known NPCs" in context
    assert "## Recent Events" in context


def test_context_keeps_last_ten_events_in_order() -> None:
    book = Worldbook()
    for day in range(12, 0, -1):
        book.record_event(day, f"Day {day} happened")
    lines = [line for line in book.build_context().splitlines() if line.startswith("- Day")]
    assert lines == [f"- Day {day}: Day {day} happened" for day in range(3, 13)]


def test_dict_round_trip() -> None:
    book = Worldbook.with_defaults()
    assert Worldbook.from_dict(book.to_dict()) == book


def test_from_dict_rejects_dangling_npc_location() -> None:
    payload = _small_book().to_dict()
    payload["npcs"]["set"]["location_id"] = "the_glow"
    with pytest.raises(DataDecodeError, match="the_glow"):
        Worldbook.from_dict(payload)


def test_from_dict_rejects_unknown_keys() -> None:
    payload = _small_book().to_dict()
    payload["factions"] = {}
    with pytest.raises(DataDecodeError) as excinfo:
        Worldbook.from_dict(payload)
    assert excinfo.value.location == "worldbook"


def test_load_missing_file_returns_empty(tmp_path: Path) -> None:
    assert Worldbook.load_from_file(tmp_path / "worldbook.json") == Worldbook()


def test_load_malformed_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "worldbook.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(DataDecodeError):
        Worldbook.load_from_file(path)


def test_save_then_load(tmp_path: Path) -> None:
    path = tmp_path / "world" / "worldbook.json"
    book = _small_book()
    book.save_to_file(path)
    assert Worldbook.load_from_file(path) == book
    assert json.loads(path.read_text(encoding="utf-8"))["npcs"]["killian"]["disposition"] == 10
    assert [entry.name for entry in path.parent.iterdir()] == ["worldbook.json"]


def test_visit_location_counts_and_rejects_unknown_ids() -> None:
    book = _small_book()
    assert book.visit_location("junktown") == 1
    assert book.visit_location("junktown") == 2
    assert book.locations["necropolis"].visit_count == 0
    with pytest.raises(RuleError):
        book.visit_location("the_glow")


def test_location_events_are_newest_first() -> None:
    book = _small_book()
    book.record_event(1, "Arrived in Junktown", location_id="junktown")
    book.record_event(2, "Met Set", ["set"], location_id="necropolis")
    book.record_event(3, "Helped Killian", ["killian"], location_id="junktown")
    book.record_event(3, "Gizmo's casino closed", location_id="junktown")
    book.record_event(4, "Wandered the desert")
    summaries = [event.summary for event in book.location_events("junktown")]
    assert summaries == ["Gizmo's casino closed", "Helped Killian", "Arrived in Junktown"]
    assert [event.summary for event in book.location_events("junktown", limit=1)] == ["Gizmo's casino closed"]
    assert book.location_events("junktown", limit=0) == []
    assert book.location_events("the_hub") == []


def test_events_must_reference_known_location() -> None:
    book = _small_book()
    with pytest.raises(RuleError):
        book.record_event(1, "Lost in the Glow", location_id="the_glow")
    payload = book.to_dict()
    payload["events"]["event_0001"] = {"day": 1, "summary": "x", "participants": [], "location_id": "the_glow"}
    with pytest.raises(DataDecodeError, match="the_glow"):
        Worldbook.from_dict(payload)


def test_default_event_happens_in_the_vault() -> None:
    book = Worldbook.with_defaults()
    assert [event.id for event in book.location_events("vault_13")] == ["event_0001"]


def test_visit_counts_and_event_locations_survive_round_trip() -> None:
    book = _small_book()
    book.visit_location("necropolis")
    book.record_event(2, "Met Set", ["set"], location_id="necropolis")
    assert Worldbook.from_dict(book.to_dict()) == book


def test_records_without_visit_count_or_event_location_still_load() -> None:
    payload = _small_book().to_dict()
    del payload["locations"]["junktown"]["visit_count"]
    payload["events"]["event_0001"] = {"day": 1, "summary": "Left the vault", "participants": []}
    book = Worldbook.from_dict(payload)
    assert book.locations["junktown"].visit_count == 0
    assert book.events["event_0001"].location_id is None
