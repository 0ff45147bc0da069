"""Question aggregation endpoints.

Routes
------
GET /api?question=<tag>&page_number=<n>    → aggregate one listing page
GET /api/questions/{entry_id}               → resolve a single question
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Path, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from qa_crawler.crawl import AggregationPipeline

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class QuestionResponse(BaseModel):
    id: str
    title: str
    body: str
    answer: str


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("", response_model=list[QuestionResponse])
async def aggregate_questions(
    request: Request,
    question: Optional[str] = Query(None, description="Tag to scope the listing to."),
    page_number: int = Query(1, ge=1, description="1-based listing page."),
) -> Any:
    """Crawl one listing page and return every question with its answer.

    Returns ``404 {"status": 404}`` when the listing page has no entries.
    """
    pipeline: AggregationPipeline = request.app.state.pipeline
    result = await pipeline.run(question, page_number)
    if result.empty:
        return JSONResponse(status_code=404, content={"status": 404})
    return result.to_list()


@router.get("/questions/{entry_id}", response_model=QuestionResponse)
async def get_question(
    request: Request,
    entry_id: str = Path(..., pattern=r"^\d+$"),
) -> Any:
    """Resolve a single question id to its title, body and answer."""
    pipeline: AggregationPipeline = request.app.state.pipeline
    record = await pipeline.fetch_question(entry_id)
    return record.to_dict()
