"""Structural extraction from listing and detail pages.

Extraction is total: a selector that matches nothing yields an empty
result, never an exception.
"""

from __future__ import annotations

from typing import List

from qa_crawler.scraper.models import AcquiredContent, DetailRecord, EntryRef

ENTRY_PREFIX = "question-summary-"

LISTING_ENTRY_SELECTOR = f'div[id^="{ENTRY_PREFIX}"]'
TITLE_SELECTOR = ".question-hyperlink"
POST_BODY_SELECTOR = ".js-post-body"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _first_text(content: AcquiredContent, selector: str) -> str:
    """Text of the first element matching *selector*, or empty string."""
    matches = content.select(selector)
    if not matches:
        return ""
    return content.text(matches[0])


def _joined_text(content: AcquiredContent, selector: str) -> str:
    """Concatenated text of every element matching *selector*."""
    return "".join(content.text(el) for el in content.select(selector))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_listing_ids(content: AcquiredContent) -> List[EntryRef]:
    """Return the raw entry identifiers on a listing page, in document order.

    Identifiers are returned verbatim; the numeric suffix is not validated.
    """
    refs: List[EntryRef] = []
    for element in content.select(LISTING_ENTRY_SELECTOR):
        raw_id = content.attr(element, "id")
        if raw_id is not None:
            refs.append(EntryRef(id=raw_id))
    return refs


def extract_detail(content: AcquiredContent) -> DetailRecord:
    """Read the title, question body and answer body from a detail page.

    The question body is the text of every post body on the page; the
    answer body is the text of the first one.  On a page with a single post
    body both fields therefore hold the same text.
    """
    return DetailRecord(
        title=_first_text(content, TITLE_SELECTOR),
        question_body=_joined_text(content, POST_BODY_SELECTOR),
        answer_body=_first_text(content, POST_BODY_SELECTOR),
    )
