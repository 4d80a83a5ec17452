from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .models.category import Category
from .models.progression import LogEntry, PendingUnlock, ProgressionSnapshot


class RollRequest(BaseModel):
    source: str = Field(..., min_length=1, max_length=128)
    threshold: Optional[int] = Field(default=None, ge=0, le=100)


class RollResult(BaseModel):
    source: str
    roll: int
    threshold: int
    success: bool
    rare: bool = False
    pity_triggered: bool = False
    keys: int
    special_keys: int
    fate_points: int


class SpecialUnlockRequest(BaseModel):
    item: str = Field(..., min_length=1)


class PullResult(BaseModel):
    category: Category
    accepted: bool
    item: str
    rerolled: bool = False
    pending: Optional[PendingUnlock] = None
    keys: int


class FinalizeResult(BaseModel):
    category: Category
    item: str
    tier: Optional[int] = None
    entry: LogEntry


class ProgressionState(BaseModel):
    snapshot: ProgressionSnapshot
    pending: Optional[PendingUnlock] = None
    can_unlock: Dict[Category, bool]


class CategoryCatalog(BaseModel):
    category: Category
    label: str
    tiered: bool
    tier_max: int
    items: List[str]


class CatalogResponse(BaseModel):
    categories: List[CategoryCatalog]
    drop_rates: Dict[str, int]
