from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..data.catalog import SKILL_TIER_MAX
from .category import Category

PITY_LIMIT = 50


class LogKind(str, Enum):
    ROLL = "ROLL"
    UNLOCK = "UNLOCK"
    PITY = "PITY"


class LogOutcome(str, Enum):
    SUCCESS = "SUCCESS"
    FAIL = "FAIL"


class CostKind(str, Enum):
    """Currency consumed when a pending unlock is finalized."""

    STANDARD = "standard"
    RARE = "rare"


def level_cap(tier: int) -> int:
    """Highest skill level reachable at ``tier``."""

    if tier <= 0:
        return 1
    if tier >= SKILL_TIER_MAX:
        return 99
    return tier * 10


class LogEntry(BaseModel):
    """Immutable audit record in the progression history."""

    id: str
    timestamp: int = Field(..., description="Milliseconds since the epoch")
    kind: LogKind = Field(alias="type")
    source: Optional[str] = None
    outcome: Optional[LogOutcome] = Field(default=None, alias="result")
    roll_value: Optional[int] = Field(default=None, alias="rollValue")
    threshold: Optional[int] = None
    message: str
    details: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class UnlockRecord(BaseModel):
    """Per-table unlock progress."""

    equipment: Dict[str, int] = Field(default_factory=dict)
    skills: Dict[str, int] = Field(default_factory=dict)
    levels: Dict[str, int] = Field(default_factory=dict)
    regions: List[str] = Field(default_factory=list)
    mobility: List[str] = Field(default_factory=list)
    power: List[str] = Field(default_factory=list)
    minigames: List[str] = Field(default_factory=list)
    bosses: List[str] = Field(default_factory=list)

    def tiers(self, category: Category) -> Dict[str, int]:
        """Return the tier map backing a tiered table."""

        match category:
            case Category.EQUIPMENT:
                return self.equipment
            case Category.SKILLS:
                return self.skills
            case _:
                raise ValueError(f"{category.label} is not a tiered table")

    def unlocked(self, category: Category) -> List[str]:
        """Return the unlocked-name list backing a set table."""

        match category:
            case Category.REGIONS:
                return self.regions
            case Category.MOBILITY:
                return self.mobility
            case Category.POWER:
                return self.power
            case Category.MINIGAMES:
                return self.minigames
            case Category.BOSSES:
                return self.bosses
            case _:
                raise ValueError(f"{category.label} is not a set table")

    def tier_of(self, category: Category, item: str) -> int:
        return int(self.tiers(category).get(item, 0))

    def is_eligible(self, category: Category, item: str) -> bool:
        """``True`` when ``item`` can still receive a normal unlock."""

        if category.is_tiered:
            return self.tier_of(category, item) < category.tier_max
        return item not in self.unlocked(category)

    def progress(self, category: Category) -> int:
        """Progress units earned on catalog items of ``category``."""

        catalog = category.items
        if category.is_tiered:
            tiers = self.tiers(category)
            return sum(
                min(int(tiers.get(item, 0)), category.tier_max) for item in catalog
            )
        unlocked = set(self.unlocked(category))
        return sum(1 for item in catalog if item in unlocked)


class ProgressionSnapshot(BaseModel):
    """Serializable progression state owned by the engine."""

    keys: int = Field(default=0, ge=0)
    special_keys: int = Field(default=0, ge=0, alias="specialKeys")
    fate_points: int = Field(default=0, ge=0, le=PITY_LIMIT, alias="fatePoints")
    unlocks: UnlockRecord = Field(default_factory=UnlockRecord)
    history: List[LogEntry] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class PendingUnlock(BaseModel):
    """Unlock produced by a pull or omni-key, awaiting its reveal."""

    category: Category
    item: str
    cost_kind: CostKind
    display_type: str = ""
    item_image: Optional[str] = None
