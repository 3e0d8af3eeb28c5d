"""Ranking of scored mods."""
from typing import List

from modrank.models.mod import Mod


def rank(mods: List[Mod]) -> List[Mod]:
    """Order mods by total score, highest first; ties by uid ascending."""
    return sorted(mods, key=lambda m: (-m.total_score, m.uid))
