"""
Run-level models: per-stat-type ranges and the result of one collection run.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from modrank.errors import PartialCollectionError
from modrank.models.mod import Mod


@dataclass
class StatRange:
    """Observed bounds of one stat type across qualified mods."""
    type: str
    min: float
    max: float
    samples: int = 1

    def include(self, value: float):
        self.min = min(self.min, value)
        self.max = max(self.max, value)
        self.samples += 1

    def to_dict(self) -> dict:
        return {"type": self.type, "min": self.min, "max": self.max, "samples": self.samples}


class StatRangeTable:
    """
    Stat ranges for one collection run.

    The table is written while pages are still being aggregated and becomes
    readable only once frozen. Reads before the freeze and writes after it
    raise RuntimeError, so a partially built range can never reach scoring.
    """

    def __init__(self):
        self._ranges: Dict[str, StatRange] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def update(self, stat_type: str, value: float):
        if self._frozen:
            raise RuntimeError("stat range table is frozen")
        existing = self._ranges.get(stat_type)
        if existing is None:
            self._ranges[stat_type] = StatRange(stat_type, value, value)
        else:
            existing.include(value)

    def freeze(self) -> "StatRangeTable":
        self._frozen = True
        return self

    def _check_readable(self):
        if not self._frozen:
            raise RuntimeError("stat ranges read before aggregation completed")

    def get(self, stat_type: str) -> Optional[StatRange]:
        self._check_readable()
        return self._ranges.get(stat_type)

    def __contains__(self, stat_type: str) -> bool:
        self._check_readable()
        return stat_type in self._ranges

    def __iter__(self) -> Iterator[StatRange]:
        self._check_readable()
        return iter(sorted(self._ranges.values(), key=lambda r: r.type))

    def __len__(self) -> int:
        return len(self._ranges)

    def to_list(self) -> List[dict]:
        return [r.to_dict() for r in self]


@dataclass
class PageFailure:
    """A listing page whose mods are missing from the result."""
    page: int
    error: str

    def to_dict(self) -> dict:
        return {"page": self.page, "error": self.error}


@dataclass
class CollectionResult:
    """Scored and ranked mods for one user, plus any page failures."""
    user: str
    page_count: int
    mods: List[Mod]
    stat_ranges: StatRangeTable
    failed_pages: List[PageFailure] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        return bool(self.failed_pages)

    def raise_for_partial(self):
        """Raise PartialCollectionError if any page failed."""
        if self.partial:
            raise PartialCollectionError(self.user, [f.page for f in self.failed_pages])

    def to_dict(self) -> dict:
        return {
            "user": self.user,
            "pageCount": self.page_count,
            "partial": self.partial,
            "failedPages": [f.to_dict() for f in self.failed_pages],
            "statRanges": self.stat_ranges.to_list(),
            "mods": [m.to_dict() for m in self.mods],
        }
