import json

import pytest

from fatelock.data.catalog import EQUIPMENT_SLOTS, SKILLS_LIST
from fatelock.models.progression import LogKind, LogOutcome
from fatelock.services.snapshot import (
    SnapshotImportError,
    apply_snapshot,
    default_snapshot,
    export_snapshot,
)


def test_default_snapshot_seeds_baseline_skill():
    snapshot = default_snapshot()

    assert snapshot.keys == 3
    assert snapshot.special_keys == 0
    assert snapshot.fate_points == 0
    assert snapshot.unlocks.equipment == {slot: 0 for slot in EQUIPMENT_SLOTS}
    assert snapshot.unlocks.skills == {"Hitpoints": 1}
    assert set(snapshot.unlocks.levels) == set(SKILLS_LIST)
    assert snapshot.unlocks.levels["Hitpoints"] == 10
    assert snapshot.unlocks.levels["Attack"] == 1


def test_legacy_content_is_split_into_bosses_and_minigames():
    snapshot = apply_snapshot(
        {"keys": 2, "unlocks": {"content": ["Inferno", "Tithe Farm", "Not A Thing"]}}
    )

    assert snapshot.unlocks.bosses == ["Inferno"]
    assert snapshot.unlocks.minigames == ["Tithe Farm"]
    assert snapshot.keys == 2


def test_legacy_content_merges_with_existing_lists():
    snapshot = apply_snapshot(
        {
            "unlocks": {
                "bosses": ["Wintertodt"],
                "content": ["Wintertodt", "Tempoross", "Mess"],
            }
        }
    )

    assert snapshot.unlocks.bosses == ["Wintertodt", "Tempoross"]
    assert snapshot.unlocks.minigames == ["Mess"]


def test_maps_are_merged_over_current_defaults():
    snapshot = apply_snapshot(
        {
            "unlocks": {
                "skills": {"Attack": 4},
                "levels": {"Attack": 37},
                "equipment": {"Head": 2},
            }
        }
    )

    assert snapshot.unlocks.skills == {"Hitpoints": 1, "Attack": 4}
    assert snapshot.unlocks.levels["Attack"] == 37
    assert snapshot.unlocks.levels["Sailing"] == 1
    assert snapshot.unlocks.equipment["Head"] == 2
    assert snapshot.unlocks.equipment["Ring"] == 0


def test_duplicate_set_entries_are_collapsed():
    snapshot = apply_snapshot({"unlocks": {"regions": ["Falador", "Falador", "Catherby"]}})

    assert snapshot.unlocks.regions == ["Falador", "Catherby"]


def test_unknown_fields_are_ignored():
    snapshot = apply_snapshot(
        {"keys": 1, "theme": "dark", "unlocks": {"pets": ["Rocky"]}, "version": 7}
    )

    assert snapshot.keys == 1
    assert not hasattr(snapshot.unlocks, "pets")


def test_missing_currencies_default_to_zero():
    snapshot = apply_snapshot({})

    assert snapshot.keys == 0
    assert snapshot.special_keys == 0
    assert snapshot.fate_points == 0
    assert snapshot.history == []


def test_json_text_is_accepted():
    raw = json.dumps({"keys": 5, "specialKeys": 1, "fatePoints": 12})

    snapshot = apply_snapshot(raw)

    assert (snapshot.keys, snapshot.special_keys, snapshot.fate_points) == (5, 1, 12)


def test_history_in_saved_shape_is_loaded():
    snapshot = apply_snapshot(
        {
            "history": [
                {
                    "id": "k3j9x0a1b",
                    "timestamp": 1712345678901,
                    "type": "ROLL",
                    "source": "Slayer Task",
                    "result": "FAIL",
                    "rollValue": 64,
                    "threshold": 10,
                    "message": "No Key. Rolled 64 (needed ≤ 10)",
                    "details": "Fate Points: 3/50",
                },
                {"id": "p1", "timestamp": 1712345679000, "type": "PITY", "message": "pity"},
            ]
        }
    )

    first, second = snapshot.history
    assert first.kind is LogKind.ROLL
    assert first.outcome is LogOutcome.FAIL
    assert first.roll_value == 64
    assert second.kind is LogKind.PITY
    assert second.outcome is None


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        b"not json either",
        "[1, 2, 3]",
        [1, 2, 3],
        42,
        None,
        {"unlocks": ["regions"]},
        {"unlocks": {"skills": ["Attack"]}},
        {"unlocks": {"regions": "Falador"}},
        {"unlocks": {"content": [{"name": "Inferno"}]}},
        {"keys": -1},
        {"fatePoints": 51},
        {"keys": "many"},
        {"history": [{"message": "no id"}]},
        {"unlocks": {"equipment": {"Head": 42}}},
        {"unlocks": {"skills": {"Attack": -3}}},
        {"unlocks": {"skills": {"Attack": 11}}},
        {"unlocks": {"levels": {"Attack": 500}}},
        {"unlocks": {"skills": {"Attack": 2}, "levels": {"Attack": 21}}},
        {"unlocks": {"levels": {"Mining": 0}}},
    ],
)
def test_malformed_saves_are_reported(raw):
    with pytest.raises(SnapshotImportError):
        apply_snapshot(raw)


def test_export_uses_saved_field_names():
    snapshot = default_snapshot()
    snapshot.special_keys = 2
    snapshot.fate_points = 8
    snapshot.history.append(
        apply_snapshot(
            {"history": [{"id": "a", "timestamp": 1, "type": "UNLOCK", "message": "Upgraded: Attack"}]}
        ).history[0]
    )

    exported = export_snapshot(snapshot)

    assert set(exported) == {"keys", "specialKeys", "fatePoints", "unlocks", "history"}
    assert exported["specialKeys"] == 2
    assert exported["fatePoints"] == 8
    assert set(exported["unlocks"]) == {
        "equipment", "skills", "levels", "regions", "mobility", "power", "minigames", "bosses",
    }
    assert exported["history"] == [
        {"id": "a", "timestamp": 1, "type": "UNLOCK", "message": "Upgraded: Attack"}
    ]
    json.dumps(exported)


def test_levels_up_to_the_tier_cap_are_accepted():
    snapshot = apply_snapshot(
        {"unlocks": {"skills": {"Attack": 10, "Magic": 2}, "levels": {"Attack": 99, "Magic": 20}}}
    )

    assert snapshot.unlocks.levels["Attack"] == 99
    assert snapshot.unlocks.levels["Magic"] == 20
