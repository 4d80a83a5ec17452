from __future__ import annotations

from dataclasses import dataclass

from ..models.progression import PITY_LIMIT, LogKind, LogOutcome, ProgressionSnapshot
from .dice import DICE_FACES, RandomSource, roll_dice
from .history import EventLog


@dataclass(frozen=True)
class RollOutcome:
    source: str
    roll: int
    threshold: int
    success: bool
    rare: bool = False
    pity_triggered: bool = False
    fate_points: int = 0


def resolve_roll(
    snapshot: ProgressionSnapshot,
    source: str,
    threshold: int,
    rng: RandomSource,
    *,
    log: EventLog | None = None,
    pity_limit: int = PITY_LIMIT,
) -> RollOutcome:
    """Roll a d100 against ``threshold`` percent and settle currencies.

    A success grants one key, or an omni-key when a second d100 lands on
    the top face, and resets fate points. A failure adds a fate point;
    reaching ``pity_limit`` grants a bonus key and resets the counter.
    The threshold is not range-checked: 0 never succeeds, 100 always does.
    """

    if log is None:
        log = EventLog(snapshot.history)
    roll = roll_dice(rng)

    if roll <= threshold:
        rare = roll_dice(rng) == DICE_FACES
        if rare:
            snapshot.special_keys += 1
            log.append(
                LogKind.ROLL,
                "LEGENDARY DROP! You found an Omni-Key!",
                source=source,
                outcome=LogOutcome.SUCCESS,
                roll_value=roll,
                threshold=threshold,
                details="Can be used to unlock ANY specific item directly.",
            )
        else:
            snapshot.keys += 1
            log.append(
                LogKind.ROLL,
                f"Key Found! Rolled {roll} (needed ≤ {threshold})",
                source=source,
                outcome=LogOutcome.SUCCESS,
                roll_value=roll,
                threshold=threshold,
                details="Fate points reset to 0.",
            )
        snapshot.fate_points = 0
        return RollOutcome(source, roll, threshold, success=True, rare=rare)

    fate_points = snapshot.fate_points + 1
    message = f"No Key. Rolled {roll} (needed ≤ {threshold})"

    if fate_points >= pity_limit:
        snapshot.keys += 1
        snapshot.fate_points = 0
        log.append(
            LogKind.ROLL,
            message,
            source=source,
            outcome=LogOutcome.FAIL,
            roll_value=roll,
            threshold=threshold,
            details="MAX FATE REACHED! Pity Key granted.",
        )
        log.append(
            LogKind.PITY,
            "The Fates take pity on you.",
            details="+1 Key Added",
        )
        return RollOutcome(source, roll, threshold, success=False, pity_triggered=True)

    snapshot.fate_points = fate_points
    log.append(
        LogKind.ROLL,
        message,
        source=source,
        outcome=LogOutcome.FAIL,
        roll_value=roll,
        threshold=threshold,
        details=f"Fate Points: {fate_points}/{pity_limit}",
    )
    return RollOutcome(source, roll, threshold, success=False, fate_points=fate_points)
