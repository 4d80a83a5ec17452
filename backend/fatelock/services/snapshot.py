from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping

from pydantic import ValidationError

from ..data.catalog import (
    BASELINE_SKILL,
    BASELINE_SKILL_LEVEL,
    BASELINE_SKILL_TIER,
    BOSSES_LIST,
    EQUIPMENT_SLOTS,
    MINIGAMES_LIST,
    SKILLS_LIST,
)
from ..models.category import Category
from ..models.progression import ProgressionSnapshot, UnlockRecord, level_cap

logger = logging.getLogger(__name__)

DEFAULT_STARTING_KEYS = 3

_MAP_FIELDS = ("equipment", "skills", "levels")
_SET_FIELDS = tuple(category.value for category in Category if not category.is_tiered)


class SnapshotImportError(ValueError):
    """Raised when a saved snapshot cannot be loaded."""


def default_unlocks() -> UnlockRecord:
    return UnlockRecord(
        equipment={slot: 0 for slot in EQUIPMENT_SLOTS},
        skills={BASELINE_SKILL: BASELINE_SKILL_TIER},
        levels={
            skill: BASELINE_SKILL_LEVEL if skill == BASELINE_SKILL else 1
            for skill in SKILLS_LIST
        },
    )


def default_snapshot(starting_keys: int = DEFAULT_STARTING_KEYS) -> ProgressionSnapshot:
    """Return the state of a brand-new game."""

    return ProgressionSnapshot(keys=starting_keys, unlocks=default_unlocks())


def _unique(items: List[str]) -> List[str]:
    return list(dict.fromkeys(items))


def _as_list(value: Any, field: str) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise SnapshotImportError(f"'unlocks.{field}' must be a list of names")
    return value


def _merge_unlocks(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Overlay saved unlocks on the current defaults.

    Map tables are merged key by key so catalog additions show up with
    their default tier/level; list tables are taken from the save.
    """

    merged: Dict[str, Any] = default_unlocks().model_dump()

    for field in _MAP_FIELDS:
        saved = raw.get(field)
        if saved is None:
            continue
        if not isinstance(saved, Mapping):
            raise SnapshotImportError(f"'unlocks.{field}' must be an object")
        merged[field].update(saved)

    for field in _SET_FIELDS:
        if field in raw and raw[field] is not None:
            merged[field] = _unique(_as_list(raw[field], field))

    legacy = raw.get("content")
    if legacy is not None:
        # Older saves kept bosses and minigames in one "content" list.
        bosses = list(merged["bosses"])
        minigames = list(merged["minigames"])
        for item in _as_list(legacy, "content"):
            if item in BOSSES_LIST:
                bosses.append(item)
            elif item in MINIGAMES_LIST:
                minigames.append(item)
        merged["bosses"] = _unique(bosses)
        merged["minigames"] = _unique(minigames)

    return merged


def _check_ranges(unlocks: UnlockRecord) -> None:
    """Reject tiers outside their table and levels above the tier cap."""

    problems: List[str] = []
    for category in (Category.EQUIPMENT, Category.SKILLS):
        for item, tier in unlocks.tiers(category).items():
            if not 0 <= tier <= category.tier_max:
                problems.append(f"{category.value}.{item} tier {tier}")
    for skill, level in unlocks.levels.items():
        cap = level_cap(unlocks.tier_of(Category.SKILLS, skill))
        if not 1 <= level <= cap:
            problems.append(f"levels.{skill} {level} (cap {cap})")
    if problems:
        raise SnapshotImportError("Out-of-range unlocks: " + ", ".join(problems))


def apply_snapshot(raw: Any) -> ProgressionSnapshot:
    """Build a snapshot from saved data, migrating older shapes.

    ``raw`` may be a mapping or a JSON document. Unknown fields are ignored;
    anything that is not a JSON object, or fails validation, raises
    :class:`SnapshotImportError`.
    """

    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            raise SnapshotImportError("Failed to parse save file.") from exc

    if not isinstance(raw, Mapping):
        raise SnapshotImportError("Invalid save file format.")

    unlocks = raw.get("unlocks") or {}
    if not isinstance(unlocks, Mapping):
        raise SnapshotImportError("'unlocks' must be an object")

    payload = {
        "keys": raw.get("keys") or 0,
        "specialKeys": raw.get("specialKeys") or 0,
        "fatePoints": raw.get("fatePoints") or 0,
        "unlocks": _merge_unlocks(unlocks),
        "history": raw.get("history") or [],
    }
    try:
        snapshot = ProgressionSnapshot.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Rejected snapshot import: %s", exc)
        raise SnapshotImportError(f"Invalid save file: {exc.error_count()} problem(s)") from exc

    _check_ranges(snapshot.unlocks)
    return snapshot


def export_snapshot(snapshot: ProgressionSnapshot) -> Dict[str, Any]:
    """Return a JSON-ready dict using the persisted field names."""

    return snapshot.model_dump(mode="json", by_alias=True, exclude_none=True)
