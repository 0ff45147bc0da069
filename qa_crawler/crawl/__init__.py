"""Crawl package — listing-to-records aggregation."""

from qa_crawler.crawl.pipeline import (
    AggregationPipeline,
    build_detail_url,
    build_listing_url,
    parse_entry_id,
)

__all__ = [
    "AggregationPipeline",
    "build_detail_url",
    "build_listing_url",
    "parse_entry_id",
]
