"""Models package initialization."""
from modrank.models.mod import Mod, ModSet, ModSlot, PrimaryStat, SecondaryStat, Stat
from modrank.models.collection import CollectionResult, PageFailure, StatRange, StatRangeTable

__all__ = [
    "Mod",
    "ModSet",
    "ModSlot",
    "Stat",
    "PrimaryStat",
    "SecondaryStat",
    "StatRange",
    "StatRangeTable",
    "PageFailure",
    "CollectionResult",
]
