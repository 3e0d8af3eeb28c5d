"""
Listing client for the Mod Collection Ranker.
Fetches one page of a user's mod listing over HTTP.
"""
from typing import Optional
from urllib.parse import quote

import httpx

from modrank.config import config
from modrank.errors import FetchError
from modrank.utils.logger import LayerLogger


class ListingClient:
    """
    HTTP adapter for the remote mod listing.

    The httpx.AsyncClient is owned by the caller so one connection pool is
    shared by every page fetched in a run.
    """

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = (base_url or config.SOURCE_BASE_URL).rstrip("/")
        self.logger = LayerLogger("listing_client")

    def page_url(self, user: str, page: int) -> str:
        return f"{self.base_url}/u/{quote(user, safe='')}/mods/?page={page}"

    def build_client(self, timeout: Optional[float] = None, **kwargs) -> httpx.AsyncClient:
        """Create the async client used for a whole collection run."""
        return httpx.AsyncClient(
            timeout=timeout if timeout is not None else config.REQUEST_TIMEOUT,
            follow_redirects=True,
            headers=self._get_headers(),
            **kwargs
        )

    async def fetch_page(self, client: httpx.AsyncClient, user: str, page: int) -> str:
        """
        Fetch the HTML of one listing page.

        Args:
            client: Shared async client
            user: User identifier whose collection is listed
            page: 1-based page index

        Returns:
            The page HTML

        Raises:
            FetchError: On transport failure or a non-2xx response
        """
        url = self.page_url(user, page)
        self.logger.log_action("fetch_page", "started", url=url, page=page)

        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self.logger.log_error(
                f"Listing page returned HTTP {e.response.status_code}",
                error_type="http_status",
                url=url,
                page=page,
            )
            raise FetchError(url, f"HTTP {e.response.status_code}", e.response.status_code) from e
        except httpx.HTTPError as e:
            self.logger.log_error(
                f"Failed to fetch listing page: {str(e)}",
                error_type="http_error",
                url=url,
                page=page,
            )
            raise FetchError(url, str(e) or type(e).__name__) from e

        html = response.text
        self.logger.log_action(
            "fetch_page",
            "completed",
            url=url,
            page=page,
            status_code=response.status_code,
            content_length=len(html)
        )
        return html

    def _get_headers(self) -> dict:
        """Get request headers mimicking a browser."""
        return {
            "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
        }
