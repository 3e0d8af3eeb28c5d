"""
Page worker for the Mod Collection Ranker.
Fetches one listing page and extracts every mod on it.
"""
import re
from typing import Awaitable, Callable, Iterator, Optional, Tuple

import httpx

from modrank.adapters.field_extractor import FieldExtractor
from modrank.adapters.listing_client import ListingClient
from modrank.errors import FormatError
from modrank.layers.stat_parser import parse_stat_lenient
from modrank.models.mod import (
    SET_CODES,
    SLOT_CODES,
    Mod,
    ModSet,
    ModSlot,
    PrimaryStat,
    SecondaryStat,
)
from modrank.utils.logger import LayerLogger

MOD_SELECTOR = ".collection-mod"
IMAGE_SELECTOR = ".statmod-img"
PIP_SELECTOR = ".statmod-pip"
LEVEL_SELECTOR = ".statmod-level"
PORTRAIT_SELECTOR = ".char-portrait"
PRIMARY_LABEL_SELECTOR = ".statmod-stats-1 .statmod-stat-label"
PRIMARY_VALUE_SELECTOR = ".statmod-stats-1 .statmod-stat-value"
SECONDARY_SELECTOR = ".statmod-stats-2 .statmod-stat"
STAT_LABEL_SELECTOR = ".statmod-stat-label"
STAT_VALUE_SELECTOR = ".statmod-stat-value"

# statmodmystery_<set>_<slot>.png
IMAGE_CODE_PATTERN = re.compile(r"statmodmystery_([0-9])_([0-9])\.png")

MAX_LEVEL = 15
MAX_PIPS = 6

ModSink = Callable[[Mod], Awaitable[None]]


class PageWorker:
    """
    Extracts mods from one listing page.

    Every mod is handed to the sink as soon as it is built, so aggregation
    runs alongside extraction of other pages. Missing or garbled fields fall
    back to the field's zero value and never drop the mod.
    """

    def __init__(self, listing_client: Optional[ListingClient] = None):
        self.listing_client = listing_client or ListingClient()
        self.logger = LayerLogger("page_worker")

    async def run(
        self,
        client: httpx.AsyncClient,
        user: str,
        page: int,
        emit: ModSink,
        html: Optional[str] = None,
    ) -> int:
        """
        Fetch (unless html is given) and extract one page.

        Returns:
            Number of mods emitted

        Raises:
            FetchError: If the page cannot be retrieved
        """
        if html is None:
            html = await self.listing_client.fetch_page(client, user, page)

        emitted = 0
        for mod in self.extract(html, page):
            await emit(mod)
            emitted += 1

        self.logger.log_page_result(page=page, mods_found=emitted, result="completed", user=user)
        return emitted

    def extract(self, html: str, page: int) -> Iterator[Mod]:
        """Yield a Mod for every item element on the page."""
        document = FieldExtractor.from_html(html)
        for position, item in enumerate(document.each(MOD_SELECTOR)):
            yield self._extract_mod(item, page, position)

    def _extract_mod(self, item: FieldExtractor, page: int, position: int) -> Mod:
        uid = item.attr("data-id") or ""

        mod_set, slot = None, None
        image_src = item.attr("src", IMAGE_SELECTOR)
        if image_src is not None:
            try:
                mod_set, slot = self._decode_image(image_src)
            except FormatError as e:
                self.logger.log_recovered(
                    str(e),
                    error_type="format_error",
                    fallback="no_set_or_slot",
                    page=page,
                    position=position,
                    uid=uid,
                )

        primary = parse_stat_lenient(
            item.text(PRIMARY_LABEL_SELECTOR),
            item.text(PRIMARY_VALUE_SELECTOR),
        )

        secondary_stats = []
        for stat_node in item.each(SECONDARY_SELECTOR):
            stat = parse_stat_lenient(
                stat_node.text(STAT_LABEL_SELECTOR),
                stat_node.text(STAT_VALUE_SELECTOR),
            )
            secondary_stats.append(SecondaryStat(type=stat.type, value=stat.value))

        return Mod(
            uid=uid,
            slot=slot,
            set=mod_set,
            level=self._parse_level(item.text(LEVEL_SELECTOR), page, uid),
            pips=min(item.count(PIP_SELECTOR), MAX_PIPS),
            character_name=item.attr("title", PORTRAIT_SELECTOR) or "",
            primary_stat=PrimaryStat(type=primary.type, value=primary.value),
            secondary_stats=secondary_stats,
        )

    def _decode_image(self, image_src: str) -> Tuple[Optional[ModSet], Optional[ModSlot]]:
        """Map the set and slot digits in the mod image name to enums."""
        match = IMAGE_CODE_PATTERN.search(image_src)
        if not match:
            raise FormatError("mod image reference", image_src)
        set_code, slot_code = match.groups()
        return SET_CODES.get(set_code), SLOT_CODES.get(slot_code)

    def _parse_level(self, text: str, page: int, uid: str) -> int:
        if not text:
            return 0
        try:
            level = int(text)
        except ValueError:
            self.logger.log_recovered(
                f"Level {text!r} is not an integer",
                error_type="parse_error",
                fallback="level_zero",
                page=page,
                uid=uid,
            )
            return 0
        if not 0 <= level <= MAX_LEVEL:
            self.logger.log_recovered(
                f"Level {level} is out of range",
                error_type="parse_error",
                fallback="level_zero",
                page=page,
                uid=uid,
            )
            return 0
        return level
