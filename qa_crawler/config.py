"""Centralised settings for the qa-crawler service.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # HTTP server
    # ------------------------------------------------------------------
    host: str = field(default_factory=lambda: os.environ.get("HOST", "0.0.0.0"))
    # ``TOKEN`` is the variable older deployments used for the port.
    port: int = field(
        default_factory=lambda: int(
            os.environ.get("PORT") or os.environ.get("TOKEN") or "3000"
        )
    )

    # ------------------------------------------------------------------
    # Source site
    # ------------------------------------------------------------------
    source_base_url: str = field(
        default_factory=lambda: os.environ.get(
            "SOURCE_BASE_URL", "https://stackoverflow.com"
        ).rstrip("/")
    )

    # ------------------------------------------------------------------
    # Acquisition
    # ------------------------------------------------------------------
    fetch_strategy: str = field(
        default_factory=lambda: os.environ.get("FETCH_STRATEGY", "static").lower()
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "USER_AGENT",
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/122.0.0.0 Safari/537.36",
        )
    )
    browser_headless: bool = field(
        default_factory=lambda: _env_bool("BROWSER_HEADLESS", "true")
    )
    render_wait_until: str = field(
        default_factory=lambda: os.environ.get("RENDER_WAIT_UNTIL", "domcontentloaded")
    )
    render_settle_selector: str = field(
        default_factory=lambda: os.environ.get("RENDER_SETTLE_SELECTOR", "")
    )

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------
    missing_answer_policy: str = field(
        default_factory=lambda: os.environ.get("MISSING_ANSWER_POLICY", "include").lower()
    )
    detail_concurrency: int = field(
        default_factory=lambda: max(1, int(os.environ.get("DETAIL_CONCURRENCY", "1")))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )


# Module-level singleton — import this everywhere:
#   from qa_crawler.config import settings
settings = Settings()
