"""Shared fixtures: generated listing HTML served through httpx.MockTransport."""
import asyncio
from typing import Dict, List, Optional, Sequence, Tuple

import httpx
import pytest


def mod_html(
    uid: str,
    set_code: str = "4",
    slot_code: str = "1",
    pips: int = 5,
    level: Optional[str] = "15",
    character: Optional[str] = "Darth Vader",
    primary: Tuple[str, str] = ("Offense", "+5.88%"),
    secondary: Sequence[Tuple[str, str]] = (),
    image_src: Optional[str] = None,
) -> str:
    """Render one mod element the way the listing does."""
    if image_src is None:
        image_src = f"/static/img/assets/statmodmystery_{set_code}_{slot_code}.png"
    pip_html = "".join('<span class="statmod-pip"></span>' for _ in range(pips))
    level_html = f'<span class="statmod-level">{level}</span>' if level is not None else ""
    portrait_html = (
        f'<div class="char-portrait" title="{character}"></div>' if character is not None else ""
    )
    secondary_html = "".join(
        '<div class="statmod-stat">'
        f'<span class="statmod-stat-value">{value}</span>'
        f'<span class="statmod-stat-label">{label}</span>'
        "</div>"
        for label, value in secondary
    )
    return (
        f'<div class="collection-mod" data-id="{uid}">'
        f'<img class="statmod-img" src="{image_src}">'
        f'<div class="statmod-pips">{pip_html}</div>'
        f"{level_html}{portrait_html}"
        '<div class="statmod-stats-1"><div class="statmod-stat">'
        f'<span class="statmod-stat-value">{primary[1]}</span>'
        f'<span class="statmod-stat-label">{primary[0]}</span>'
        "</div></div>"
        f'<div class="statmod-stats-2">{secondary_html}</div>'
        "</div>"
    )


def page_html(page: int, page_count: Optional[int], mods: Sequence[str]) -> str:
    """Render a listing page; page_count=None leaves out the pagination."""
    pagination = ""
    if page_count is not None:
        pagination = (
            '<div class="pull-right"><ul class="pagination">'
            f'<li><a href="#">Page {page} of {page_count}</a></li>'
            '<li><a href="?page=2">Next</a></li>'
            "</ul></div>"
        )
    return f"<html><body>{pagination}<div class=\"mods\">{''.join(mods)}</div></body></html>"


class FakeListing:
    """
    In-memory listing site.

    pages maps page number to the list of mod elements on it. Pages in
    failing answer HTTP 500; delays holds per-page latency in seconds.
    """

    def __init__(
        self,
        pages: Dict[int, List[str]],
        user: str = "testuser",
        failing: Sequence[int] = (),
        delays: Optional[Dict[int, float]] = None,
        pagination: bool = True,
    ):
        self.pages = pages
        self.user = user
        self.failing = set(failing)
        self.delays = delays or {}
        self.pagination = pagination
        self.requested: List[int] = []
        self.completed: List[int] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def handler(self, request: httpx.Request) -> httpx.Response:
        page = int(request.url.params.get("page", "1"))
        self.requested.append(page)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(page, 0))
            if request.url.path != f"/u/{self.user}/mods/":
                return httpx.Response(404, text="Not found")
            if page in self.failing:
                return httpx.Response(500, text="Server error")
            page_count = len(self.pages) if self.pagination else None
            return httpx.Response(200, text=page_html(page, page_count, self.pages.get(page, [])))
        finally:
            self.in_flight -= 1
            self.completed.append(page)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def scenario_pages() -> Dict[int, List[str]]:
    """
    Two pages of three mods. Four are qualified with Speed 5, 10, 15, 20;
    mod-c and mod-f are not qualified.
    """
    return {
        1: [
            mod_html("mod-a", level="15", pips=5, secondary=[("Speed", "+5")]),
            mod_html("mod-b", level="15", pips=5, secondary=[("Speed", "+10")]),
            mod_html("mod-c", level="1", pips=1, secondary=[("Speed", "+30")]),
        ],
        2: [
            mod_html("mod-d", level="15", pips=5, secondary=[("Speed", "+15")]),
            mod_html("mod-e", level="12", pips=4, secondary=[("Speed", "+20")]),
            mod_html("mod-f", level="11", pips=6, secondary=[("Speed", "+12")]),
        ],
    }


@pytest.fixture
def scenario_listing(scenario_pages) -> FakeListing:
    return FakeListing(scenario_pages)
