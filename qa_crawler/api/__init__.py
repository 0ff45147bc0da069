"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from qa_crawler.api import app

    uvicorn qa_crawler.api:app --reload
"""

from qa_crawler.api.app import app

__all__ = ["app"]
