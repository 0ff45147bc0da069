"""Process-wide logging setup.

Library modules only ever call ``logging.getLogger(__name__)``; the API
lifespan and the CLI call :func:`configure_logging` once at startup.
"""

from __future__ import annotations

import logging

from qa_crawler.config import settings

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Framework / network loggers that drown out the pipeline at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "asyncio")


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger with a single stream handler."""
    resolved = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logging.basicConfig(level=resolved, format=_FORMAT)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved, logging.WARNING))
