"""qa-crawler CLI — entry-point for running the crawler and the API.

Usage:
    python cli/main.py --help

Commands:
    serve     → run the HTTP API under uvicorn
    crawl     → aggregate one listing page and print JSON
    question  → resolve a single question id and print JSON
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from qa_crawler.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
import json
from typing import Optional

import typer

from qa_crawler.config import settings
from qa_crawler.crawl import AggregationPipeline
from qa_crawler.logging_config import configure_logging
from qa_crawler.scraper import AcquisitionError, open_fetcher

app = typer.Typer(
    name="qa-crawler",
    help="Aggregate question/answer pairs from a paginated listing.",
    no_args_is_help=True,
)

# Exit code used when a listing page has no entries.
EXIT_EMPTY = 2


async def _crawl(tag: Optional[str], page: int, strategy: str, policy: str, concurrency: int):
    async with open_fetcher(strategy) as fetcher:
        pipeline = AggregationPipeline(
            fetcher,
            missing_answer_policy=policy,
            detail_concurrency=concurrency,
            base_url=settings.source_base_url,
        )
        return await pipeline.run(tag, page)


async def _question(entry_id: str, strategy: str):
    async with open_fetcher(strategy) as fetcher:
        pipeline = AggregationPipeline.from_settings(fetcher)
        return await pipeline.fetch_question(entry_id)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    host: str = typer.Option(settings.host, help="Interface to bind."),
    port: int = typer.Option(settings.port, help="Port to listen on (env: PORT)."),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    typer.echo(f"[serve] Listening on http://{host}:{port}")
    uvicorn.run("qa_crawler.api.app:app", host=host, port=port)


@app.command("crawl")
def crawl(
    tag: Optional[str] = typer.Option(None, "--tag", help="Tag to scope the listing to."),
    page: int = typer.Option(1, "--page", min=1, help="1-based listing page."),
    strategy: str = typer.Option(
        settings.fetch_strategy, "--strategy", help="Acquisition strategy: static | rendered."
    ),
    policy: str = typer.Option(
        settings.missing_answer_policy,
        "--policy",
        help="Missing-answer policy: include | stop.",
    ),
    concurrency: int = typer.Option(
        settings.detail_concurrency, "--concurrency", min=1, help="Parallel detail fetches."
    ),
) -> None:
    """Crawl one listing page and print the records as JSON."""
    configure_logging()
    try:
        result = asyncio.run(_crawl(tag, page, strategy, policy, concurrency))
    except (ValueError, AcquisitionError) as exc:
        typer.echo(f"[crawl] {exc}", err=True)
        raise typer.Exit(1)

    if result.empty:
        typer.echo(f"[crawl] No questions found (tag={tag!r}, page={page}).", err=True)
        raise typer.Exit(EXIT_EMPTY)

    typer.echo(json.dumps(result.to_list(), indent=2, ensure_ascii=False))


@app.command("question")
def question(
    entry_id: str = typer.Argument(..., help="Numeric question id."),
    strategy: str = typer.Option(
        settings.fetch_strategy, "--strategy", help="Acquisition strategy: static | rendered."
    ),
) -> None:
    """Resolve a single question and print it as JSON."""
    configure_logging()
    try:
        record = asyncio.run(_question(entry_id, strategy))
    except (ValueError, AcquisitionError) as exc:
        typer.echo(f"[question] {exc}", err=True)
        raise typer.Exit(1)

    typer.echo(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
