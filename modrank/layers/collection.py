"""
Collection pipeline for the Mod Collection Ranker.

Resolve page count -> fan out one page worker per page -> join ->
freeze stat ranges -> score -> rank.
"""
import asyncio
from typing import List, Optional

import httpx

from modrank.adapters.listing_client import ListingClient
from modrank.config import config
from modrank.errors import FetchError
from modrank.layers.aggregator import CollectionAggregator
from modrank.layers.page_count import PageCountResolver
from modrank.layers.page_worker import PageWorker
from modrank.layers.ranker import rank
from modrank.layers.scorer import Scorer
from modrank.models.collection import CollectionResult, PageFailure
from modrank.utils.logger import LayerLogger


class ModCollectionPipeline:
    """
    Collects, scores and ranks one user's mods.

    Key principles:
    - The page count must be known before any page worker starts
    - In-flight page fetches are capped by a semaphore
    - A failed page is reported, not fatal; a failed page count is fatal
    - Scoring starts only after every page task has been joined
    """

    def __init__(
        self,
        listing_client: Optional[ListingClient] = None,
        max_concurrent_pages: Optional[int] = None,
        timeout: Optional[float] = None,
        min_level: Optional[int] = None,
        min_pips: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.listing_client = listing_client or ListingClient()
        self.max_concurrent_pages = max_concurrent_pages or config.MAX_CONCURRENT_PAGES
        self.timeout = timeout
        self.min_level = min_level
        self.min_pips = min_pips
        self.transport = transport
        self.resolver = PageCountResolver(self.listing_client)
        self.worker = PageWorker(self.listing_client)
        self.scorer = Scorer()
        self.logger = LayerLogger("collection")

    async def collect(self, user: str) -> CollectionResult:
        """
        Run the full pipeline for a user.

        Args:
            user: User identifier whose collection is listed

        Returns:
            CollectionResult with mods ranked by total score

        Raises:
            FetchError: If the first page cannot be retrieved
            FormatError: If the page count cannot be read
        """
        self.logger.log_action("collect", "started", user=user)

        client_kwargs = {}
        if self.transport is not None:
            client_kwargs["transport"] = self.transport

        async with self.listing_client.build_client(self.timeout, **client_kwargs) as client:
            page_count, first_page = await self.resolver.resolve_with_document(client, user)
            aggregator = CollectionAggregator(self.min_level, self.min_pips)
            failures = await self._fan_out(client, user, page_count, first_page, aggregator)

        stat_ranges = aggregator.freeze()
        mods = rank(self.scorer.score(aggregator.mods, stat_ranges))
        failures.sort(key=lambda f: f.page)

        result = CollectionResult(
            user=user,
            page_count=page_count,
            mods=mods,
            stat_ranges=stat_ranges,
            failed_pages=failures,
        )
        self._log_ranking(result)
        return result

    async def _fan_out(
        self,
        client: httpx.AsyncClient,
        user: str,
        page_count: int,
        first_page: str,
        aggregator: CollectionAggregator,
    ) -> List[PageFailure]:
        """Run every page worker and wait until the aggregator has drained."""
        semaphore = asyncio.Semaphore(self.max_concurrent_pages)
        failures: List[PageFailure] = []

        async def run_page(page: int):
            async with semaphore:
                try:
                    await self.worker.run(
                        client,
                        user,
                        page,
                        aggregator.emit,
                        html=first_page if page == 1 else None,
                    )
                except FetchError as e:
                    failures.append(PageFailure(page=page, error=str(e)))
                    self.logger.log_page_result(
                        page=page,
                        mods_found=0,
                        result="failed",
                        user=user,
                        error=str(e),
                    )

        self.logger.log_decision(
            decision="fan_out",
            reason="page count resolved",
            user=user,
            page_count=page_count,
            max_concurrent_pages=self.max_concurrent_pages,
        )

        consumer = asyncio.create_task(aggregator.consume())
        tasks = [asyncio.create_task(run_page(page)) for page in range(1, page_count + 1)]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            # Nothing may outlive the shared client
            for task in tasks + [consumer]:
                task.cancel()
            await asyncio.gather(*tasks, consumer, return_exceptions=True)
            raise
        await aggregator.close()
        await consumer
        return failures

    def _log_ranking(self, result: CollectionResult):
        for position, mod in enumerate(result.mods, start=1):
            self.logger.log_ranked_mod(
                position,
                score=mod.total_score,
                uid=mod.uid,
                slot=mod.slot.value if mod.slot else None,
                set=mod.set.value if mod.set else None,
                pips=mod.pips,
                level=mod.level,
                character=mod.character_name,
                primary_type=mod.primary_stat.type,
                primary_value=mod.primary_stat.value,
            )

        self.logger.log_action(
            "collect",
            "completed",
            user=result.user,
            page_count=result.page_count,
            mods=len(result.mods),
            partial=result.partial,
            failed_pages=[f.page for f in result.failed_pages],
        )
