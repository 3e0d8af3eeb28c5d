"""
Page count resolution.
Reads the "Page X of N" pagination indicator from the first listing page.
This must succeed before any page worker is started.
"""
import re
from typing import Optional, Tuple

import httpx

from modrank.adapters.field_extractor import FieldExtractor
from modrank.adapters.listing_client import ListingClient
from modrank.errors import FormatError
from modrank.utils.logger import LayerLogger

PAGINATION_SELECTOR = ".pull-right .pagination li a"
PAGINATION_PATTERN = re.compile(r"Page [0-9]+ of ([0-9]+)")


class PageCountResolver:
    """Determines how many listing pages a user's collection spans."""

    def __init__(self, listing_client: Optional[ListingClient] = None):
        self.listing_client = listing_client or ListingClient()
        self.logger = LayerLogger("page_count")

    async def resolve(self, client: httpx.AsyncClient, user: str) -> int:
        page_count, _ = await self.resolve_with_document(client, user)
        return page_count

    async def resolve_with_document(
        self,
        client: httpx.AsyncClient,
        user: str,
    ) -> Tuple[int, str]:
        """
        Fetch page 1 and read the page count from it.

        Returns:
            (page_count, first_page_html) so page 1 is not fetched twice

        Raises:
            FetchError: If the first page cannot be retrieved
            FormatError: If no usable pagination indicator is found
        """
        self.logger.log_action("resolve_page_count", "started", user=user)

        html = await self.listing_client.fetch_page(client, user, 1)
        page_count = self.page_count_from_html(html)

        self.logger.log_action(
            "resolve_page_count",
            "completed",
            user=user,
            page_count=page_count
        )
        return page_count, html

    def page_count_from_html(self, html: str) -> int:
        page_text = FieldExtractor.from_html(html).text(PAGINATION_SELECTOR)
        self.logger.log_decision(
            decision="pagination_text_found" if page_text else "pagination_text_missing",
            reason="first pagination link inspected",
            page_text=page_text,
        )

        match = PAGINATION_PATTERN.search(page_text)
        if not match:
            raise FormatError("pagination indicator", f"no 'Page X of N' in {page_text!r}")

        page_count = int(match.group(1))
        if page_count < 1:
            raise FormatError("pagination indicator", f"page count {page_count} is not positive")
        return page_count
