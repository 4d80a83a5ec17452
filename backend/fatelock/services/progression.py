from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..data.catalog import BASELINE_SKILL, DROP_RATES, SKILLS_LIST, DropSource
from ..models.category import Category
from ..models.progression import (
    PITY_LIMIT,
    CostKind,
    LogKind,
    LogOutcome,
    PendingUnlock,
    ProgressionSnapshot,
    level_cap,
)
from .dice import RandomSource, make_rng
from .gacha import GachaDraw, resolve_gacha
from .history import EventLog
from .rolls import RollOutcome, resolve_roll
from .snapshot import DEFAULT_STARTING_KEYS, apply_snapshot, default_snapshot, export_snapshot
from .unlocks import FinalizedUnlock, UnlockStateMachine
from .wiki import unlock_image_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PullOutcome:
    category: Category
    draw: GachaDraw
    pending: Optional[PendingUnlock] = None

    @property
    def accepted(self) -> bool:
        return self.draw.accepted


class ProgressionEngine:
    """Single owner of a player's progression snapshot.

    Every mutation goes through this object. Operations whose
    preconditions do not hold return ``None`` and leave state untouched.
    """

    def __init__(
        self,
        snapshot: Optional[ProgressionSnapshot] = None,
        rng: Optional[RandomSource] = None,
        *,
        starting_keys: int = DEFAULT_STARTING_KEYS,
        pity_limit: int = PITY_LIMIT,
    ) -> None:
        self._starting_keys = starting_keys
        self._pity_limit = pity_limit
        self._rng: RandomSource = rng if rng is not None else make_rng()
        self._bind(snapshot if snapshot is not None else default_snapshot(starting_keys))

    def _bind(self, snapshot: ProgressionSnapshot) -> None:
        self._snapshot = snapshot
        self._log = EventLog(snapshot.history)
        self._unlocks = UnlockStateMachine(snapshot, self._log)

    @property
    def snapshot(self) -> ProgressionSnapshot:
        return self._snapshot

    @property
    def unlocks(self) -> UnlockStateMachine:
        return self._unlocks

    @property
    def pending(self) -> Optional[PendingUnlock]:
        return self._unlocks.pending

    # --- Queries ---

    def can_unlock(self, category: Category) -> bool:
        """``True`` while at least one item in ``category`` is still eligible."""

        return self._snapshot.unlocks.progress(category) < category.capacity

    def unlock_availability(self) -> Dict[Category, bool]:
        return {category: self.can_unlock(category) for category in Category}

    def special_unlock_options(self, category: Category) -> List[str]:
        record = self._snapshot.unlocks
        return [item for item in category.items if record.is_eligible(category, item)]

    # --- Earning ---

    def roll(self, source: str, threshold: int) -> RollOutcome:
        return resolve_roll(
            self._snapshot,
            source,
            threshold,
            self._rng,
            log=self._log,
            pity_limit=self._pity_limit,
        )

    def record_task(self, source: DropSource) -> RollOutcome:
        """Roll for a completed task at its catalog drop rate."""

        try:
            threshold = DROP_RATES[source]
        except KeyError:
            raise ValueError(f"No drop rate configured for {source.value}") from None
        return self.roll(source.value, threshold)

    def level_up(self, skill: str) -> Optional[RollOutcome]:
        """Raise ``skill`` by one level and roll with the new level as threshold."""

        if skill not in SKILLS_LIST:
            logger.debug("Level up refused: unknown skill %r", skill)
            return None

        record = self._snapshot.unlocks
        tier = record.tier_of(Category.SKILLS, skill)
        level = int(record.levels.get(skill, 1))
        if tier == 0 and skill != BASELINE_SKILL:
            logger.debug("Level up refused: %s is locked", skill)
            return None
        if level >= level_cap(tier):
            logger.debug("Level up refused: %s is at its tier %d cap", skill, tier)
            return None

        new_level = level + 1
        record.levels[skill] = new_level
        return self.roll(f"{skill} Level {new_level}", new_level)

    # --- Spending ---

    def pull(self, category: Category) -> Optional[PullOutcome]:
        """Spend a key on a random unlock from ``category``.

        On acceptance a pending unlock is created and the key is charged at
        finalize; after two duplicates the key is charged immediately.
        """

        snapshot = self._snapshot
        if snapshot.keys <= 0:
            logger.debug("Pull refused: no keys")
            return None
        if not self._unlocks.is_idle:
            logger.debug("Pull refused: an unlock is awaiting finalize")
            return None
        if not self.can_unlock(category):
            logger.debug("Pull refused: %s is complete", category.label)
            return None

        record = snapshot.unlocks
        draw = resolve_gacha(
            category.items,
            lambda item: record.is_eligible(category, item),
            self._rng,
            self._log,
        )

        if not draw.accepted:
            snapshot.keys -= 1
            details = "The key crumbles to dust."
            if not category.is_tiered:
                details += " No unlock."
            self._log.append(
                LogKind.ROLL,
                draw.message,
                outcome=LogOutcome.FAIL,
                details=details,
            )
            return PullOutcome(category, draw)

        pending = self._unlocks.begin_pending(
            category,
            draw.item,
            CostKind.STANDARD,
            item_image=unlock_image_url(category, draw.item),
        )
        return PullOutcome(category, draw, pending)

    def special_unlock(self, category: Category, item: str) -> Optional[PendingUnlock]:
        """Spend an omni-key on a chosen item, skipping the draw."""

        if self._snapshot.special_keys <= 0:
            logger.debug("Special unlock refused: no omni-keys")
            return None
        if item not in category.items:
            logger.debug("Special unlock refused: %r is not in %s", item, category.label)
            return None
        if not self._snapshot.unlocks.is_eligible(category, item):
            logger.debug("Special unlock refused: %s is already maxed", item)
            return None

        return self._unlocks.begin_pending(
            category,
            item,
            CostKind.RARE,
            item_image=unlock_image_url(category, item),
        )

    def finalize(self) -> Optional[FinalizedUnlock]:
        return self._unlocks.finalize()

    def abandon_pending(self) -> Optional[PendingUnlock]:
        """Drop the pending unlock, still paying for it."""

        return self._unlocks.abandon()

    # --- Lifecycle ---

    def new_game(self) -> ProgressionSnapshot:
        self._unlocks.discard()
        self._bind(default_snapshot(self._starting_keys))
        logger.info("Started a new game with %d keys", self._starting_keys)
        return self._snapshot

    def apply_snapshot(self, raw: Any) -> ProgressionSnapshot:
        """Replace the current state with imported data.

        Raises :class:`~fatelock.services.snapshot.SnapshotImportError`
        without touching the current state when ``raw`` is unusable.
        """

        snapshot = apply_snapshot(raw)
        self._unlocks.discard()
        self._bind(snapshot)
        logger.info(
            "Imported snapshot: %d keys, %d omni-keys, %d log entries",
            snapshot.keys,
            snapshot.special_keys,
            len(snapshot.history),
        )
        return snapshot

    def export_snapshot(self) -> Dict[str, Any]:
        return export_snapshot(self._snapshot)
