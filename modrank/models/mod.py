"""
Mod model for the Mod Collection Ranker.
One Mod is produced per item element found on a listing page. JSON output
keeps the camelCase field names consumers of the listing already expect.
"""
from typing import List, Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class ModSlot(str, Enum):
    """Mod slot, encoded as the second digit of the mod image name."""
    SQUARE = "square"
    ARROW = "arrow"
    DIAMOND = "diamond"
    TRIANGLE = "triangle"
    CIRCLE = "circle"
    CROSS = "cross"


class ModSet(str, Enum):
    """Mod set, encoded as the first digit of the mod image name."""
    HEALTH = "health"
    OFFENSE = "offense"
    DEFENSE = "defense"
    SPEED = "speed"
    CRIT_CHANCE = "critchance"
    CRIT_DAMAGE = "critdamage"
    POTENCY = "potency"
    TENACITY = "tenacity"


SLOT_CODES = {
    "1": ModSlot.SQUARE,
    "2": ModSlot.ARROW,
    "3": ModSlot.DIAMOND,
    "4": ModSlot.TRIANGLE,
    "5": ModSlot.CIRCLE,
    "6": ModSlot.CROSS,
}

SET_CODES = {
    "1": ModSet.HEALTH,
    "2": ModSet.OFFENSE,
    "3": ModSet.DEFENSE,
    "4": ModSet.SPEED,
    "5": ModSet.CRIT_CHANCE,
    "6": ModSet.CRIT_DAMAGE,
    "7": ModSet.POTENCY,
    "8": ModSet.TENACITY,
}

# Appended to a stat type when the listing shows the value as a percentage
PERCENT_MARKER = " %"


class Stat(BaseModel):
    """A parsed stat measurement. Immutable once parsed."""
    model_config = ConfigDict(frozen=True)

    type: str
    value: float


class PrimaryStat(Stat):
    """The single primary stat of a mod. Never scored."""


class SecondaryStat(Stat):
    """A secondary stat with its 0-100 score, assigned by the scorer."""
    score: int = Field(default=0, ge=0, le=100)


class Mod(BaseModel):
    """
    A single mod extracted from the listing.

    Missing fields on the page leave the zero value in place:
    None for slot and set, 0 for level and pips, "" for text.
    """
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    uid: str = ""
    slot: Optional[ModSlot] = None
    set: Optional[ModSet] = None
    level: int = Field(default=0, ge=0, le=15)
    pips: int = Field(default=0, ge=0, le=6)
    total_score: int = Field(default=0, ge=0, alias="totalScore")
    character_name: str = Field(default="", alias="characterName")
    primary_stat: PrimaryStat = Field(
        default_factory=lambda: PrimaryStat(type="", value=0.0),
        alias="primaryStat",
    )
    secondary_stats: List[SecondaryStat] = Field(default_factory=list, alias="secondaryStats")

    def is_qualified(self, min_level: int = 12, min_pips: int = 4) -> bool:
        """Whether this mod's secondary stats count toward the stat ranges."""
        return self.level >= min_level and self.pips >= min_pips

    def to_dict(self) -> dict:
        """Return the mod in its JSON wire shape."""
        return self.model_dump(mode="json", by_alias=True)
