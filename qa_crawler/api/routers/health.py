"""Root endpoint — fixed acknowledgement, independent of the pipeline."""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter()


@router.get("/")
def root() -> dict[str, str]:
    return {"body": ":)"}
