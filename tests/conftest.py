"""Shared fixtures: an in-memory fake site and HTML builders.

No test in the suite touches the network or launches a browser; pipeline and
API tests run against :class:`FakeFetcher`, which serves canned HTML by URL.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional

import pytest

from qa_crawler.scraper.errors import AcquisitionError
from qa_crawler.scraper.fetcher import PageFetcher
from qa_crawler.scraper.models import AcquiredContent

BASE = "https://stackoverflow.com"


class FakeFetcher(PageFetcher):
    """Serves ``pages[url]``; unknown URLs fail like a 404 would."""

    def __init__(self, pages: Dict[str, str]) -> None:
        self.pages = pages
        self.requested: List[str] = []

    @property
    def strategy(self) -> str:
        return "fake"

    async def fetch(self, url: str) -> AcquiredContent:
        self.requested.append(url)
        if url not in self.pages:
            raise AcquisitionError(url, "HTTP 404", status_code=404)
        return AcquiredContent(url=url, html=self.pages[url], status_code=200, strategy="fake")


def build_listing_html(raw_ids: Iterable[str]) -> str:
    rows = "".join(
        f'<div id="{raw_id}" class="s-post-summary"><h3>Q</h3></div>' for raw_id in raw_ids
    )
    return f'<html><body><div id="questions">{rows}</div></body></html>'


def build_detail_html(title: Optional[str], bodies: Iterable[str]) -> str:
    header = f'<h1><a class="question-hyperlink" href="#">{title}</a></h1>' if title else ""
    posts = "".join(f'<div class="s-prose js-post-body">{b}</div>' for b in bodies)
    return f"<html><body>{header}<div id='mainbar'>{posts}</div></body></html>"


@pytest.fixture()
def listing_html() -> Callable[[Iterable[str]], str]:
    return build_listing_html


@pytest.fixture()
def detail_html() -> Callable[[Optional[str], Iterable[str]], str]:
    return build_detail_html


@pytest.fixture()
def fake_fetcher_cls() -> type:
    return FakeFetcher


@pytest.fixture()
def answered_site() -> Dict[str, str]:
    """Untagged page 1 with two fully answered questions."""
    return {
        f"{BASE}/questions?tab=active&page=1": build_listing_html(
            ["question-summary-111", "question-summary-222"]
        ),
        f"{BASE}/questions/111": build_detail_html(
            "First question", ["<p>Q one</p>", "<p>A one</p>"]
        ),
        f"{BASE}/questions/222": build_detail_html(
            "Second question", ["<p>Q two</p>", "<p>A two</p>"]
        ),
    }
