from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..models.progression import LogKind, LogOutcome
from .dice import RandomSource
from .history import EventLog


@dataclass(frozen=True)
class GachaDraw:
    accepted: bool
    item: str
    rerolled: bool = False

    @property
    def message(self) -> str:
        if self.accepted:
            return ""
        return f"Re-roll: {self.item} (Duplicate)."


def resolve_gacha(
    pool: Sequence[str],
    is_eligible: Callable[[str], bool],
    rng: RandomSource,
    log: Optional[EventLog] = None,
) -> GachaDraw:
    """Draw one item from ``pool`` with a single duplicate re-roll.

    The re-roll draws from the whole pool again, so a second duplicate is
    possible and yields a rejected draw. No currency is moved here.
    """

    if not pool:
        raise ValueError("Cannot draw from an empty pool")

    item = rng.choice(pool)
    if is_eligible(item):
        return GachaDraw(accepted=True, item=item)

    if log is not None:
        log.append(
            LogKind.ROLL,
            f"Rolled {item} (Duplicate/Maxed). Re-rolling...",
            outcome=LogOutcome.FAIL,
            details="Fate allows one re-roll.",
        )

    item = rng.choice(pool)
    return GachaDraw(accepted=is_eligible(item), item=item, rerolled=True)
