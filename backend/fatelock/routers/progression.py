from typing import Any, Dict

from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException, status

from ..config import settings
from ..data.catalog import DROP_RATES, DropSource
from ..models.category import Category
from ..services.progression import ProgressionEngine
from ..services.rolls import RollOutcome
from ..services.snapshot import SnapshotImportError
from ..services.wiki import enrich_pending_image
from ..schemas import (
    CatalogResponse,
    CategoryCatalog,
    FinalizeResult,
    ProgressionState,
    PullResult,
    RollRequest,
    RollResult,
    SpecialUnlockRequest,
)
from ..state import get_engine_dependency

router = APIRouter(prefix="/progression", tags=["progression"])


def _state(engine: ProgressionEngine) -> ProgressionState:
    return ProgressionState(
        snapshot=engine.snapshot,
        pending=engine.pending,
        can_unlock=engine.unlock_availability(),
    )


def _roll_result(engine: ProgressionEngine, outcome: RollOutcome) -> RollResult:
    snapshot = engine.snapshot
    return RollResult(
        source=outcome.source,
        roll=outcome.roll,
        threshold=outcome.threshold,
        success=outcome.success,
        rare=outcome.rare,
        pity_triggered=outcome.pity_triggered,
        keys=snapshot.keys,
        special_keys=snapshot.special_keys,
        fate_points=snapshot.fate_points,
    )


@router.get("/", response_model=ProgressionState)
async def get_state(
    engine: ProgressionEngine = Depends(get_engine_dependency),
) -> ProgressionState:
    """Return the current progression state."""

    return _state(engine)


@router.get("/catalog", response_model=CatalogResponse)
async def get_catalog() -> CatalogResponse:
    """Return every unlock table and the task drop rates."""

    return CatalogResponse(
        categories=[
            CategoryCatalog(
                category=category,
                label=category.label,
                tiered=category.is_tiered,
                tier_max=category.tier_max,
                items=category.items,
            )
            for category in Category
        ],
        drop_rates={source.value: rate for source, rate in DROP_RATES.items()},
    )


@router.post("/rolls", response_model=RollResult)
async def roll(
    payload: RollRequest,
    engine: ProgressionEngine = Depends(get_engine_dependency),
) -> RollResult:
    """Roll for a key after completing a task."""

    if payload.threshold is not None:
        return _roll_result(engine, engine.roll(payload.source, payload.threshold))

    try:
        outcome = engine.record_task(DropSource(payload.source))
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown drop source '{payload.source}'; pass an explicit threshold",
        ) from exc
    return _roll_result(engine, outcome)


@router.post("/skills/{skill}/level-up", response_model=RollResult)
async def level_up(
    skill: str,
    engine: ProgressionEngine = Depends(get_engine_dependency),
) -> RollResult:
    """Gain one level in a skill, which rolls for a key."""

    outcome = engine.level_up(skill)
    if outcome is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"'{skill}' cannot level up at its current tier",
        )
    return _roll_result(engine, outcome)


@router.post("/unlocks/{category}", response_model=PullResult)
async def pull(
    category: Category,
    background_tasks: BackgroundTasks,
    engine: ProgressionEngine = Depends(get_engine_dependency),
) -> PullResult:
    """Spend a key on a random unlock."""

    outcome = engine.pull(category)
    if outcome is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"No {category.label} unlock is possible right now",
        )

    pending = outcome.pending
    if pending is not None and category is Category.REGIONS and settings.wiki_enrichment:
        background_tasks.add_task(enrich_pending_image, engine.unlocks, pending)

    return PullResult(
        category=category,
        accepted=outcome.accepted,
        item=outcome.draw.item,
        rerolled=outcome.draw.rerolled,
        pending=pending,
        keys=engine.snapshot.keys,
    )


@router.post("/unlocks/{category}/special", response_model=PullResult)
async def special_unlock(
    category: Category,
    payload: SpecialUnlockRequest,
    background_tasks: BackgroundTasks,
    engine: ProgressionEngine = Depends(get_engine_dependency),
) -> PullResult:
    """Spend an omni-key on a chosen item."""

    pending = engine.special_unlock(category, payload.item)
    if pending is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"'{payload.item}' cannot be unlocked with an omni-key right now",
        )
    if category is Category.REGIONS and settings.wiki_enrichment:
        background_tasks.add_task(enrich_pending_image, engine.unlocks, pending)

    return PullResult(
        category=category,
        accepted=True,
        item=pending.item,
        pending=pending,
        keys=engine.snapshot.keys,
    )


@router.post("/pending/finalize", response_model=FinalizeResult)
async def finalize(
    engine: ProgressionEngine = Depends(get_engine_dependency),
) -> FinalizeResult:
    """Commit the revealed unlock."""

    finalized = engine.finalize()
    if finalized is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No unlock is pending",
        )
    return FinalizeResult(
        category=finalized.category,
        item=finalized.item,
        tier=finalized.tier,
        entry=finalized.entry,
    )


@router.delete("/pending", status_code=status.HTTP_204_NO_CONTENT)
async def abandon_pending(
    engine: ProgressionEngine = Depends(get_engine_dependency),
) -> None:
    """Skip the pending reveal; its key is spent all the same."""

    if engine.abandon_pending() is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No unlock is pending",
        )


@router.get("/export")
async def export_snapshot(
    engine: ProgressionEngine = Depends(get_engine_dependency),
) -> Dict[str, Any]:
    """Return the save file for the current progression."""

    return engine.export_snapshot()


@router.post("/import", response_model=ProgressionState)
async def import_snapshot(
    payload: Any = Body(...),
    engine: ProgressionEngine = Depends(get_engine_dependency),
) -> ProgressionState:
    """Replace the current progression with a save file."""

    try:
        engine.apply_snapshot(payload)
    except SnapshotImportError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return _state(engine)


@router.post("/new-game", response_model=ProgressionState)
async def new_game(
    engine: ProgressionEngine = Depends(get_engine_dependency),
) -> ProgressionState:
    """Erase progress and start over."""

    engine.new_game()
    return _state(engine)
