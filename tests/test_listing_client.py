"""Tests for the listing client."""

import httpx
import pytest

from modrank.adapters.listing_client import ListingClient


class TestPageUrl:
    """Test listing URL construction."""

    def test_plain_user(self):
        client = ListingClient(base_url="https://example.test/")
        assert client.page_url("someone", 3) == "https://example.test/u/someone/mods/?page=3"

    @pytest.mark.parametrize(
        "user,encoded",
        [
            ("x?page=9", "x%3Fpage%3D9"),
            ("a/b", "a%2Fb"),
            ("tag#1", "tag%231"),
            ("two words", "two%20words"),
        ],
    )
    def test_user_is_escaped(self, user, encoded):
        client = ListingClient(base_url="https://example.test")
        assert client.page_url(user, 2) == f"https://example.test/u/{encoded}/mods/?page=2"

    @pytest.mark.asyncio
    async def test_escaped_user_keeps_page_parameter(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text="<html></html>")

        listing = ListingClient(base_url="https://example.test")
        async with listing.build_client(transport=httpx.MockTransport(handler)) as client:
            await listing.fetch_page(client, "x?page=9", 4)

        assert seen[0].url.params["page"] == "4"
        assert seen[0].url.raw_path == b"/u/x%3Fpage%3D9/mods/?page=4"
