"""Scraper package — page acquisition & structural extraction."""

from qa_crawler.scraper.errors import AcquisitionError, QACrawlerError
from qa_crawler.scraper.extractor import extract_detail, extract_listing_ids
from qa_crawler.scraper.fetcher import (
    BrowserSession,
    PageFetcher,
    RenderedFetcher,
    StaticFetcher,
    open_fetcher,
)
from qa_crawler.scraper.models import (
    AcquiredContent,
    AggregateResult,
    DetailRecord,
    EntryRef,
    ResultRecord,
)

__all__ = [
    "AcquiredContent",
    "AcquisitionError",
    "AggregateResult",
    "BrowserSession",
    "DetailRecord",
    "EntryRef",
    "PageFetcher",
    "QACrawlerError",
    "RenderedFetcher",
    "ResultRecord",
    "StaticFetcher",
    "extract_detail",
    "extract_listing_ids",
    "open_fetcher",
]
