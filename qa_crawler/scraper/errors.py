"""Exceptions raised by the scraper layer."""

from __future__ import annotations


class QACrawlerError(Exception):
    """Base class for all qa-crawler errors."""


class AcquisitionError(QACrawlerError):
    """A page could not be acquired.

    Covers network failures, non-2xx responses and navigation timeouts.
    The pipeline never recovers from it locally; the API maps it to a
    generic server failure.
    """

    def __init__(self, url: str, reason: str, status_code: int | None = None) -> None:
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Failed to acquire {url}: {reason}")
