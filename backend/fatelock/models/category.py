from __future__ import annotations

from enum import Enum
from typing import List

from ..data.catalog import (
    BOSSES_LIST,
    EQUIPMENT_SLOTS,
    EQUIPMENT_TIER_MAX,
    MINIGAMES_LIST,
    MOBILITY_LIST,
    POWER_LIST,
    REGIONS_LIST,
    SKILL_TIER_MAX,
    SKILLS_LIST,
)


class TableKind(str, Enum):
    """How a content table records progress."""

    TIERED = "tiered"
    SET = "set"


class Category(str, Enum):
    """The closed set of unlock tables."""

    EQUIPMENT = "equipment"
    SKILLS = "skills"
    REGIONS = "regions"
    MOBILITY = "mobility"
    POWER = "power"
    MINIGAMES = "minigames"
    BOSSES = "bosses"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def kind(self) -> TableKind:
        match self:
            case Category.EQUIPMENT | Category.SKILLS:
                return TableKind.TIERED
            case _:
                return TableKind.SET

    @property
    def is_tiered(self) -> bool:
        return self.kind is TableKind.TIERED

    @property
    def tier_max(self) -> int:
        """Highest tier an item can reach; 1 for set tables."""

        match self:
            case Category.SKILLS:
                return SKILL_TIER_MAX
            case Category.EQUIPMENT:
                return EQUIPMENT_TIER_MAX
            case _:
                return 1

    @property
    def items(self) -> List[str]:
        match self:
            case Category.EQUIPMENT:
                return EQUIPMENT_SLOTS
            case Category.SKILLS:
                return SKILLS_LIST
            case Category.REGIONS:
                return REGIONS_LIST
            case Category.MOBILITY:
                return MOBILITY_LIST
            case Category.POWER:
                return POWER_LIST
            case Category.MINIGAMES:
                return MINIGAMES_LIST
            case Category.BOSSES:
                return BOSSES_LIST
        raise AssertionError(f"Unhandled category {self!r}")

    @property
    def capacity(self) -> int:
        """Total progress units the table holds when complete."""

        return len(self.items) * self.tier_max
