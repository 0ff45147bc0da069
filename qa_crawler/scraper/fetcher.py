"""Page acquisition: static HTTP fetch or browser-rendered fetch.

Both strategies return an :class:`~qa_crawler.scraper.models.AcquiredContent`
so the extractors never need to know which one produced a page.  The
strategy is picked once per process by :func:`open_fetcher`.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import httpx

from qa_crawler.config import Settings, settings as default_settings
from qa_crawler.scraper.errors import AcquisitionError
from qa_crawler.scraper.models import AcquiredContent

logger = logging.getLogger(__name__)

STRATEGIES = ("static", "rendered")


# ---------------------------------------------------------------------------
# Abstract base
# ---------------------------------------------------------------------------

class PageFetcher(ABC):
    """Acquires the content of a single URL."""

    @property
    @abstractmethod
    def strategy(self) -> str:
        """Short strategy name (``static`` or ``rendered``)."""

    @abstractmethod
    async def fetch(self, url: str) -> AcquiredContent:
        """Return the parsed page at *url*.

        Raises:
            AcquisitionError: On network failure, non-2xx status or timeout.
        """


# ---------------------------------------------------------------------------
# Static variant — httpx + BeautifulSoup
# ---------------------------------------------------------------------------

class StaticFetcher(PageFetcher):
    """Plain HTTP GET.  Stateless apart from a shared connection pool."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        cfg: Settings = default_settings,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers={"User-Agent": cfg.user_agent},
            timeout=cfg.request_timeout,
            follow_redirects=True,
        )

    @property
    def strategy(self) -> str:
        return "static"

    async def fetch(self, url: str) -> AcquiredContent:
        logger.debug("[FETCH] GET %s", url)
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise AcquisitionError(
                url,
                f"HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise AcquisitionError(url, f"{type(exc).__name__}: {exc}") from exc

        return AcquiredContent(
            url=url,
            html=response.text,
            status_code=response.status_code,
            strategy=self.strategy,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


# ---------------------------------------------------------------------------
# Rendered variant — one persistent Playwright tab
# ---------------------------------------------------------------------------

class BrowserSession:
    """A long-lived headless browser with exactly one tab.

    The tab is shared by every request in the process, so navigation and
    DOM reads must happen while holding :attr:`lock`.

    Playwright is imported lazily so the static strategy and the test suite
    do not need a browser installed.
    """

    def __init__(self, headless: bool = True, user_agent: Optional[str] = None) -> None:
        self.headless = headless
        self.user_agent = user_agent
        self.lock = asyncio.Lock()
        self._playwright: Any = None
        self._browser: Any = None
        self._page: Any = None

    @property
    def page(self) -> Any:
        if self._page is None:
            raise RuntimeError("BrowserSession has not been started")
        return self._page

    async def start(self) -> None:
        from playwright.async_api import async_playwright  # noqa: PLC0415

        logger.info("[RENDER] Launching Chromium (headless=%s)", self.headless)
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(headless=self.headless)
            context = await self._browser.new_context(user_agent=self.user_agent)
            self._page = await context.new_page()
        except Exception:
            await self.close()
            raise

    async def close(self) -> None:
        if self._browser is not None:
            await self._browser.close()
        if self._playwright is not None:
            await self._playwright.stop()
        self._page = self._browser = self._playwright = None
        logger.info("[RENDER] Browser session closed")


class RenderedFetcher(PageFetcher):
    """Navigate the shared tab to each URL and snapshot the rendered DOM."""

    def __init__(
        self,
        session: BrowserSession,
        timeout: float = default_settings.request_timeout,
        wait_until: str = default_settings.render_wait_until,
        settle_selector: str = default_settings.render_settle_selector,
    ) -> None:
        self._session = session
        self._timeout_ms = int(timeout * 1000)
        self._wait_until = wait_until
        self._settle_selector = settle_selector

    @property
    def strategy(self) -> str:
        return "rendered"

    async def fetch(self, url: str) -> AcquiredContent:
        from playwright.async_api import Error as PlaywrightError  # noqa: PLC0415

        async with self._session.lock:
            page = self._session.page
            logger.debug("[RENDER] goto %s", url)
            try:
                response = await page.goto(
                    url, timeout=self._timeout_ms, wait_until=self._wait_until
                )
                if self._settle_selector:
                    await page.wait_for_selector(
                        self._settle_selector, timeout=self._timeout_ms
                    )
                html = await page.content()
            except PlaywrightError as exc:
                raise AcquisitionError(url, f"navigation failed: {exc}") from exc

        status = response.status if response is not None else 200
        if not 200 <= status < 300:
            raise AcquisitionError(url, f"HTTP {status}", status_code=status)

        return AcquiredContent(url=url, html=html, status_code=status, strategy=self.strategy)


# ---------------------------------------------------------------------------
# Strategy selection
# ---------------------------------------------------------------------------

@asynccontextmanager
async def open_fetcher(
    strategy: Optional[str] = None,
    cfg: Settings = default_settings,
) -> AsyncIterator[PageFetcher]:
    """Yield a ready fetcher for *strategy* and release its resources on exit.

    Raises:
        ValueError: If *strategy* is not one of :data:`STRATEGIES`.
    """
    name = (strategy or cfg.fetch_strategy).lower()
    if name not in STRATEGIES:
        raise ValueError(f"Unknown fetch strategy {name!r}; expected one of {STRATEGIES}")

    if name == "static":
        fetcher = StaticFetcher(cfg=cfg)
        try:
            yield fetcher
        finally:
            await fetcher.aclose()
        return

    session = BrowserSession(headless=cfg.browser_headless, user_agent=cfg.user_agent)
    await session.start()
    try:
        yield RenderedFetcher(
            session,
            timeout=cfg.request_timeout,
            wait_until=cfg.render_wait_until,
            settle_selector=cfg.render_settle_selector,
        )
    finally:
        await session.close()
