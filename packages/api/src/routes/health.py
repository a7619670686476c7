# This project was developed with assistance from AI tools.
"""Health check routes."""

from db import InMemoryStore, get_store
from fastapi import APIRouter, Depends

from ..core.config import settings

router = APIRouter()


@router.get("/")
async def health(store: InMemoryStore = Depends(get_store)) -> dict:
    """Liveness probe with a little store context."""
    return {
        "status": "ok",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "seeded": store.seeded_at is not None,
    }
