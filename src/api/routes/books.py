"""API routes for the library catalog.

Books are rendered through BookPresenter. The output format comes from
?format= or the Accept header (see RequestController).

Endpoints:
    GET /v1/books              Catalog as list, collection, table or pagination
    GET /v1/books/{book_id}    Single book detail
"""

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from src.api.controller import get_render_context
from src.library.catalog import get_book_catalog
from src.library.presenters import get_library_template_engine
from src.presenters.errors import PresenterError, TemplateNotFoundError
from src.presenters.pagination import paginate
from src.presenters.registry import get_presenter_registry
from src.presenters.schemas import RenderContext

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/books", tags=["books"])

MEDIA_TYPES = {
    "html": "text/html",
    "json": "application/json",
}


def _respond(body: str, context: RenderContext) -> Response:
    media_type = MEDIA_TYPES.get(context.format, "text/plain")
    return Response(content=str(body), media_type=media_type)


@router.get("", name="list_books")
async def list_books(
    view: Literal["list", "collection", "table", "pagination"] = "pagination",
    page: int = 1,
    per_page: Optional[int] = None,
    context: RenderContext = Depends(get_render_context),
):
    """Render the catalog with one of the collection modes."""
    books = get_book_catalog().list_all()
    if view == "pagination":
        try:
            books = paginate(books, page=page, per_page=per_page)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    collection = get_presenter_registry().collection_presenter_for(
        books,
        context=context,
        template_engine=get_library_template_engine(),
    )
    try:
        body = getattr(collection, view)()
    except TemplateNotFoundError as e:
        raise HTTPException(
            status_code=406,
            detail=f"Format '{context.format}' is not available for view '{view}': {e}",
        )
    except PresenterError as e:
        logger.error(f"Rendering books as {view} failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    return _respond(body, context)


@router.get("/{book_id}", name="show_book")
async def show_book(
    book_id: int,
    context: RenderContext = Depends(get_render_context),
):
    """Render a single book's detail partial."""
    book = get_book_catalog().get(book_id)
    if book is None:
        raise HTTPException(status_code=404, detail=f"Book not found: {book_id}")

    presenter = get_presenter_registry().presenter_for(
        book,
        context=context,
        template_engine=get_library_template_engine(),
    )
    try:
        body = presenter.render_as("detail")
    except TemplateNotFoundError as e:
        raise HTTPException(
            status_code=406,
            detail=f"Format '{context.format}' is not available: {e}",
        )
    except PresenterError as e:
        logger.error(f"Rendering book {book_id} failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    return _respond(body, context)
