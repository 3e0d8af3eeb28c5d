"""
Collection aggregator.
Single consumer of every page worker's output: collects the mods and builds
the stat range table from qualified mods.
"""
import asyncio
from typing import List, Optional

from modrank.config import config
from modrank.models.collection import StatRangeTable
from modrank.models.mod import Mod
from modrank.utils.logger import LayerLogger


class CollectionAggregator:
    """
    Owns the mod list and the stat range table for one run.

    Page workers never touch the table. They put mods on the queue and this
    aggregator is the only writer, so updates are serialized.
    """

    def __init__(
        self,
        min_level: Optional[int] = None,
        min_pips: Optional[int] = None,
    ):
        self.min_level = config.QUALIFY_MIN_LEVEL if min_level is None else min_level
        self.min_pips = config.QUALIFY_MIN_PIPS if min_pips is None else min_pips
        self.mods: List[Mod] = []
        self.stat_ranges = StatRangeTable()
        self.qualified_count = 0
        self.queue: "asyncio.Queue[Optional[Mod]]" = asyncio.Queue()
        self.logger = LayerLogger("aggregator")

    async def emit(self, mod: Mod):
        """Sink handed to page workers."""
        await self.queue.put(mod)

    async def close(self):
        """Signal that every page worker has finished."""
        await self.queue.put(None)

    async def consume(self):
        """Drain the queue until close() is seen."""
        while True:
            mod = await self.queue.get()
            if mod is None:
                break
            self.add(mod)

    def add(self, mod: Mod):
        self.mods.append(mod)
        if not mod.is_qualified(self.min_level, self.min_pips):
            return
        self.qualified_count += 1
        for stat in mod.secondary_stats:
            # Unparseable stats carry no type and never get a range
            if not stat.type:
                continue
            self.stat_ranges.update(stat.type, stat.value)

    def freeze(self) -> StatRangeTable:
        """Freeze the table. Called once every page has been aggregated."""
        self.stat_ranges.freeze()
        self.logger.log_stat_ranges(
            ranges=self.stat_ranges.to_list(),
            qualified_mods=self.qualified_count,
            total_mods=len(self.mods),
        )
        return self.stat_ranges
