"""Progression services: rolls, gacha pulls, unlocks and snapshots."""

from .gacha import GachaDraw, resolve_gacha
from .history import EventLog
from .progression import ProgressionEngine, PullOutcome
from .rolls import RollOutcome, resolve_roll
from .snapshot import (
    SnapshotImportError,
    apply_snapshot,
    default_snapshot,
    export_snapshot,
)
from .unlocks import FinalizedUnlock, UnlockStateMachine

__all__ = [
    "EventLog",
    "FinalizedUnlock",
    "GachaDraw",
    "ProgressionEngine",
    "PullOutcome",
    "RollOutcome",
    "SnapshotImportError",
    "UnlockStateMachine",
    "apply_snapshot",
    "default_snapshot",
    "export_snapshot",
    "resolve_gacha",
    "resolve_roll",
]
