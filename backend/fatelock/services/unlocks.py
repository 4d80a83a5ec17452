"""Two-phase unlock lifecycle: a pull creates a pending unlock, the reveal
confirmation finalizes it into the snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..data.catalog import parent_region
from ..models.category import Category
from ..models.progression import (
    CostKind,
    LogEntry,
    LogKind,
    LogOutcome,
    PendingUnlock,
    ProgressionSnapshot,
    level_cap,
)
from .history import EventLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FinalizedUnlock:
    category: Category
    item: str
    cost_kind: CostKind
    tier: Optional[int]
    entry: LogEntry


class UnlockStateMachine:
    """Holds at most one pending unlock for a snapshot."""

    def __init__(self, snapshot: ProgressionSnapshot, log: EventLog) -> None:
        self._snapshot = snapshot
        self._log = log
        self._pending: Optional[PendingUnlock] = None

    @property
    def pending(self) -> Optional[PendingUnlock]:
        return self._pending

    @property
    def is_idle(self) -> bool:
        return self._pending is None

    def begin_pending(
        self,
        category: Category,
        item: str,
        cost_kind: CostKind,
        *,
        item_image: Optional[str] = None,
    ) -> Optional[PendingUnlock]:
        """Move to Pending; refused while another unlock awaits its reveal."""

        if self._pending is not None:
            logger.debug(
                "Refusing pending %s/%s: %s is still awaiting finalize",
                category.value,
                item,
                self._pending.item,
            )
            return None

        self._pending = PendingUnlock(
            category=category,
            item=item,
            cost_kind=cost_kind,
            display_type=category.label,
            item_image=item_image,
        )
        return self._pending

    def apply_display_image(self, pending: PendingUnlock, image_url: str) -> bool:
        """Attach a late-loaded image, unless ``pending`` is no longer current."""

        if self._pending is not pending:
            logger.debug("Discarding stale image for %s", pending.item)
            return False
        pending.item_image = image_url
        return True

    def abandon(self) -> Optional[PendingUnlock]:
        """Give up on the pending unlock; its key is still spent."""

        pending, self._pending = self._pending, None
        if pending is None:
            return None
        self._debit(pending.cost_kind)
        currency = "Omni-Key" if pending.cost_kind is CostKind.RARE else "key"
        self._log.append(
            LogKind.ROLL,
            f"Abandoned: {pending.item}",
            outcome=LogOutcome.FAIL,
            details=f"The {currency} crumbles to dust.",
        )
        return pending

    def discard(self) -> None:
        """Forget the pending unlock of a snapshot that is being replaced."""

        self._pending = None

    def _debit(self, cost_kind: CostKind) -> None:
        match cost_kind:
            case CostKind.STANDARD:
                self._snapshot.keys -= 1
            case CostKind.RARE:
                self._snapshot.special_keys -= 1

    def finalize(self) -> Optional[FinalizedUnlock]:
        """Commit the pending unlock; a no-op when nothing is pending."""

        pending = self._pending
        if pending is None:
            return None

        snapshot = self._snapshot
        self._debit(pending.cost_kind)

        category, item = pending.category, pending.item
        tier: Optional[int] = None
        maxed = False
        if category.is_tiered:
            tiers = snapshot.unlocks.tiers(category)
            previous = int(tiers.get(item, 0))
            maxed = previous >= category.tier_max
            tier = min(previous + 1, category.tier_max)
            tiers[item] = tier
        else:
            unlocked = snapshot.unlocks.unlocked(category)
            if item not in unlocked:
                unlocked.append(item)

        if maxed:
            entry = self._log.append(
                LogKind.UNLOCK,
                f"Already Maxed: {item}",
                details=f"Tier {tier} is the highest tier",
            )
        else:
            entry = self._log_unlock(category, item, tier)
        self._pending = None
        return FinalizedUnlock(category, item, pending.cost_kind, tier, entry)

    def _log_unlock(self, category: Category, item: str, tier: Optional[int]) -> LogEntry:
        match category:
            case Category.SKILLS:
                message = f"Upgraded: {item}"
                details = f"Tier {tier} Unlocked (Levels 1-{level_cap(tier or 0)})"
            case Category.EQUIPMENT:
                message = f"Upgraded: {item}"
                details = f"Tier {tier} Unlocked"
            case Category.REGIONS:
                message = f"Unlocked Area: {item}"
                group = parent_region(item)
                details = f"({group})" if group else "New Territory"
            case Category.MOBILITY:
                message = f"Unlocked Mobility: {item}"
                details = "Travel Network Expanded"
            case Category.POWER:
                message = f"Unlocked Power: {item}"
                details = "Ancient secrets revealed..."
            case Category.MINIGAMES:
                message = f"Unlocked Minigame: {item}"
                details = "New activity available"
            case Category.BOSSES:
                message = f"Unlocked Boss: {item}"
                details = "A major threat appears..."
        return self._log.append(LogKind.UNLOCK, message, details=details)
