"""FastAPI application factory.

Lifespan
--------
On startup the app opens one page fetcher for the configured acquisition
strategy (``FETCH_STRATEGY``) and wraps it in an
:class:`~qa_crawler.crawl.AggregationPipeline` shared by all requests via
``request.app.state.pipeline``.  For the ``rendered`` strategy this launches
the single browser session; on shutdown it is closed again.

Routers
-------
    /       — health acknowledgement
    /api    — listing aggregation and single-question lookup
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from qa_crawler import __version__
from qa_crawler.config import settings
from qa_crawler.crawl import AggregationPipeline
from qa_crawler.logging_config import configure_logging
from qa_crawler.scraper import AcquisitionError, open_fetcher

from qa_crawler.api.routers import health as health_router
from qa_crawler.api.routers import questions as questions_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the fetcher on startup and release it on shutdown."""
    configure_logging()
    async with open_fetcher(settings.fetch_strategy) as fetcher:
        app.state.pipeline = AggregationPipeline.from_settings(fetcher)
        logger.info(
            "Pipeline ready (strategy=%s, policy=%s)",
            fetcher.strategy,
            settings.missing_answer_policy,
        )
        yield


async def acquisition_error_handler(request: Request, exc: AcquisitionError) -> JSONResponse:
    """Report upstream failures without leaking the underlying error."""
    logger.error("Acquisition failed for %s: %s", request.url.path, exc)
    return JSONResponse(status_code=502, content={"status": 502})


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="qa-crawler API",
        description=(
            "Crawls a paginated question listing and returns each question "
            "with its title, body and answer text."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AcquisitionError, acquisition_error_handler)

    app.include_router(health_router.router, tags=["health"])
    app.include_router(questions_router.router, prefix="/api", tags=["questions"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn qa_crawler.api.app:app --reload
app = create_app()
