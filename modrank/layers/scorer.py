"""
Scorer for the Mod Collection Ranker.
Min-max normalizes each secondary stat against the frozen stat ranges.
"""
import math
from typing import List, Optional, Set

from modrank.models.collection import StatRange, StatRangeTable
from modrank.models.mod import Mod, SecondaryStat
from modrank.utils.logger import LayerLogger

MAX_SCORE = 100


def round_half_away_from_zero(x: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    truncated = math.trunc(x)
    if abs(x - truncated) >= 0.5:
        return int(truncated + math.copysign(1, x))
    return int(truncated)


def score_value(value: float, stat_range: Optional[StatRange]) -> int:
    """
    Score one value against its stat range, in [0, 100].

    No range (no qualified sample of this type) scores 0. A zero-width range
    scores 100. Values outside the range clamp to the ends.
    """
    if stat_range is None:
        return 0
    spread = stat_range.max - stat_range.min
    if spread == 0:
        return MAX_SCORE
    raw = (value - stat_range.min) / spread * MAX_SCORE
    return round_half_away_from_zero(min(max(raw, 0.0), float(MAX_SCORE)))


class Scorer:
    """Fills in secondary stat scores and total scores once per run."""

    def __init__(self):
        self.logger = LayerLogger("scorer")

    def score(self, mods: List[Mod], stat_ranges: StatRangeTable) -> List[Mod]:
        """
        Score every mod in place.

        Raises:
            RuntimeError: If the stat range table has not been frozen
        """
        if not stat_ranges.frozen:
            raise RuntimeError("cannot score before stat ranges are frozen")

        unranged: Set[str] = set()
        for mod in mods:
            scored = []
            for stat in mod.secondary_stats:
                stat_range = stat_ranges.get(stat.type)
                if stat_range is None and stat.type not in unranged:
                    unranged.add(stat.type)
                    self.logger.log_decision(
                        decision="score_zero",
                        reason="no qualified mod carries this stat type",
                        stat_type=stat.type,
                    )
                scored.append(SecondaryStat(
                    type=stat.type,
                    value=stat.value,
                    score=score_value(stat.value, stat_range),
                ))
            mod.secondary_stats = scored
            mod.total_score = sum(s.score for s in scored)

        self.logger.log_action(
            "score_mods",
            "completed",
            mods_scored=len(mods),
            unranged_types=sorted(unranged)
        )
        return mods
