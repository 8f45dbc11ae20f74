"""API routes for presenter introspection.

Lists the registered presenters with their declared model readers,
controller methods and helper sets.
"""

import logging

from fastapi import APIRouter, HTTPException

from src.presenters.base import qualify_presenter_key
from src.presenters.errors import PresenterNotFoundError
from src.presenters.registry import get_presenter_registry
from src.presenters.schemas import PresenterSummary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/presenters", tags=["presenters"])


@router.get("", response_model=list[PresenterSummary])
async def list_presenters():
    """List all registered presenters (summaries)."""
    registry = get_presenter_registry()
    return registry.list_summaries()


@router.get("/{presenter_key}", response_model=PresenterSummary)
async def get_presenter(presenter_key: str):
    """Get one presenter by key ('Presenters.Book' or 'Book')."""
    registry = get_presenter_registry()
    try:
        return registry.describe(qualify_presenter_key(presenter_key))
    except PresenterNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
