"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from functools import cached_property
from typing import Any, List, Optional

from bs4 import BeautifulSoup, Tag


@dataclass
class AcquiredContent:
    """A fetched page, parsed and ready for structural queries.

    Both fetch strategies produce this same type: the static fetcher parses
    the HTTP body, the rendered fetcher parses a snapshot of the live DOM.
    Extractors only use :meth:`select`, :meth:`text` and :meth:`attr`.
    """

    url: str
    html: str
    status_code: int
    strategy: str = "static"

    @cached_property
    def soup(self) -> BeautifulSoup:
        return BeautifulSoup(self.html, "html.parser")

    def select(self, selector: str) -> List[Tag]:
        """Return every element matching the CSS *selector*, in document order."""
        return list(self.soup.select(selector))

    @staticmethod
    def text(element: Tag) -> str:
        """Return the full text content of *element*, unstripped."""
        return element.get_text()

    @staticmethod
    def attr(element: Tag, name: str) -> Optional[str]:
        """Return attribute *name* of *element*, or ``None`` when absent.

        Multi-valued attributes (``class``) are joined with single spaces.
        """
        value = element.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value


@dataclass
class EntryRef:
    """A raw, prefixed identifier as it appears in the listing markup."""

    id: str


@dataclass
class DetailRecord:
    """Structured fields read from a single question's detail page."""

    title: str = ""
    question_body: str = ""
    answer_body: str = ""


@dataclass
class ResultRecord:
    """The externally visible unit: one per processed entry."""

    id: str
    title: str
    body: str
    answer: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class AggregateResult:
    """Ordered records for one listing page.

    ``empty`` is set when the listing itself had no entries, which the API
    reports as "not found" rather than as an empty list.
    """

    records: List[ResultRecord] = field(default_factory=list)
    empty: bool = False

    @classmethod
    def empty_listing(cls) -> "AggregateResult":
        return cls(records=[], empty=True)

    def to_list(self) -> list[dict[str, Any]]:
        return [r.to_dict() for r in self.records]
