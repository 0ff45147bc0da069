"""Aggregation pipeline — listing page to question/answer records.

``AggregationPipeline.run`` drives the whole crawl for one listing page:

    listing URL → fetch → extract ids → (per id) detail URL → fetch →
    extract detail → ResultRecord → missing-answer policy
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import aclosing
from typing import AsyncIterator, List, Optional, Tuple
from urllib.parse import quote

from qa_crawler.config import Settings, settings as default_settings
from qa_crawler.scraper.extractor import (
    ENTRY_PREFIX,
    extract_detail,
    extract_listing_ids,
)
from qa_crawler.scraper.fetcher import PageFetcher
from qa_crawler.scraper.models import AggregateResult, DetailRecord, ResultRecord

logger = logging.getLogger(__name__)

MISSING_ANSWER_POLICIES = ("include", "stop")


# ---------------------------------------------------------------------------
# URL and identifier helpers
# ---------------------------------------------------------------------------

def build_listing_url(
    tag: Optional[str],
    page_number: int,
    base_url: str = default_settings.source_base_url,
) -> str:
    """Return the active-questions listing URL, tag-scoped when *tag* is set.

    The tag is percent-encoded as a single path segment, so tags such as
    ``c#`` or ``c++`` reach the server intact.
    """
    if tag is None:
        return f"{base_url}/questions?tab=active&page={page_number}"
    return f"{base_url}/questions/tagged/{quote(tag, safe='')}?tab=active&page={page_number}"


def build_detail_url(
    entry_id: str,
    base_url: str = default_settings.source_base_url,
) -> str:
    return f"{base_url}/questions/{entry_id}"


def parse_entry_id(raw_id: str) -> Optional[str]:
    """Strip the listing prefix from *raw_id*.

    Returns ``None`` when nothing is left after the prefix, since such an
    entry cannot be resolved to a detail page.
    """
    entry_id = raw_id[len(ENTRY_PREFIX):] if raw_id.startswith(ENTRY_PREFIX) else raw_id
    return entry_id or None


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

class AggregationPipeline:
    """Resolve every entry of a listing page into a :class:`ResultRecord`.

    Args:
        fetcher: Acquisition strategy shared by listing and detail fetches.
        missing_answer_policy: ``include`` keeps entries whose answer text
            is empty; ``stop`` ends the run at the first such entry and
            returns only the records collected before it.
        detail_concurrency: Maximum number of detail pages in flight.  ``1``
            fetches strictly one after another.
        base_url: Root of the source site.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        missing_answer_policy: str = default_settings.missing_answer_policy,
        detail_concurrency: int = default_settings.detail_concurrency,
        base_url: str = default_settings.source_base_url,
    ) -> None:
        if missing_answer_policy not in MISSING_ANSWER_POLICIES:
            raise ValueError(
                f"Unknown missing-answer policy {missing_answer_policy!r}; "
                f"expected one of {MISSING_ANSWER_POLICIES}"
            )
        if detail_concurrency < 1:
            raise ValueError("detail_concurrency must be at least 1")
        self.fetcher = fetcher
        self.missing_answer_policy = missing_answer_policy
        self.detail_concurrency = detail_concurrency
        self.base_url = base_url.rstrip("/")

    @classmethod
    def from_settings(
        cls, fetcher: PageFetcher, cfg: Settings = default_settings
    ) -> "AggregationPipeline":
        return cls(
            fetcher,
            missing_answer_policy=cfg.missing_answer_policy,
            detail_concurrency=cfg.detail_concurrency,
            base_url=cfg.source_base_url,
        )

    async def run(self, tag: Optional[str], page_number: int = 1) -> AggregateResult:
        """Crawl one listing page and return its records in listing order.

        Returns:
            An :class:`AggregateResult`; its ``empty`` flag is set when the
            listing page has no entries at all.

        Raises:
            AcquisitionError: If the listing or any detail page cannot be
                fetched.  Nothing is retried.
        """
        listing_url = build_listing_url(tag, page_number, self.base_url)
        logger.info("[LISTING] Fetching %s", listing_url)
        listing = await self.fetcher.fetch(listing_url)
        refs = extract_listing_ids(listing)

        if not refs:
            logger.info("[LISTING] No entries on %s", listing_url)
            return AggregateResult.empty_listing()

        entry_ids: List[str] = []
        for ref in refs:
            entry_id = parse_entry_id(ref.id)
            if entry_id is None:
                logger.warning("[LISTING] Skipping entry with empty id %r", ref.id)
                continue
            entry_ids.append(entry_id)
        logger.info("[LISTING] %d entry id(s) found", len(entry_ids))

        records: List[ResultRecord] = []
        async with aclosing(self._details(entry_ids)) as details:
            async for entry_id, detail in details:
                if not detail.answer_body and self.missing_answer_policy == "stop":
                    logger.info(
                        "[DETAIL] No answer for %s; stopping with %d record(s)",
                        entry_id,
                        len(records),
                    )
                    break
                records.append(_to_record(entry_id, detail))

        return AggregateResult(records=records)

    async def fetch_question(self, entry_id: str) -> ResultRecord:
        """Resolve a single *entry_id* to its record, ignoring the policy."""
        if not entry_id.isdigit():
            raise ValueError(f"Entry id must be numeric, got {entry_id!r}")
        return _to_record(entry_id, await self._fetch_detail(entry_id))

    # ------------------------------------------------------------------
    # Detail acquisition
    # ------------------------------------------------------------------

    async def _fetch_detail(self, entry_id: str) -> DetailRecord:
        url = build_detail_url(entry_id, self.base_url)
        logger.info("[DETAIL] Fetching %s", url)
        content = await self.fetcher.fetch(url)
        return extract_detail(content)

    async def _details(self, entry_ids: List[str]) -> AsyncIterator[Tuple[str, DetailRecord]]:
        """Yield ``(entry_id, detail)`` pairs in listing order.

        A consumer that stops early prevents the remaining fetches: in
        sequential mode they are never started, in parallel mode the tasks
        still pending are cancelled when the generator is closed.  Failures
        of entries after the stopping point are never raised.
        """
        if self.detail_concurrency == 1:
            for entry_id in entry_ids:
                yield entry_id, await self._fetch_detail(entry_id)
            return

        semaphore = asyncio.Semaphore(self.detail_concurrency)

        async def bounded(entry_id: str) -> DetailRecord:
            async with semaphore:
                return await self._fetch_detail(entry_id)

        tasks = [asyncio.create_task(bounded(e)) for e in entry_ids]
        try:
            for entry_id, task in zip(entry_ids, tasks):
                yield entry_id, await task
        finally:
            for task in tasks:
                task.cancel()
            # retrieve outcomes so abandoned failures are not reported
            await asyncio.gather(*tasks, return_exceptions=True)


def _to_record(entry_id: str, detail: DetailRecord) -> ResultRecord:
    return ResultRecord(
        id=entry_id,
        title=detail.title,
        body=detail.question_body,
        answer=detail.answer_body,
    )
