"""Request controller — the controller object presenters delegate to.

Wraps the current FastAPI request and exposes the request-scoped members
presenters may forward to via ControllerMethod. The requested output
format is read here once and threaded into the RenderContext.
"""

import logging
from typing import Optional

from fastapi import Request

from src.presenters.schemas import RenderContext
from src.presenters.templating import DEFAULT_FORMAT

logger = logging.getLogger(__name__)

# Accept header media type -> format
ACCEPT_FORMATS = {
    "application/json": "json",
    "text/html": "html",
}


class RequestController:
    """Controller facade over a single request."""

    def __init__(self, request: Request):
        self.request = request
        self.logger = logger

    def current_user(self) -> Optional[str]:
        """User name from the X-User header, None for anonymous requests."""
        return self.request.headers.get("x-user") or None

    def url_for(self, name: str, **path_params) -> str:
        return self.request.url_for(name, **path_params).path

    def requested_format(self) -> str:
        """Explicit ?format=, else the first known Accept media type, else the default."""
        explicit = self.request.query_params.get("format")
        if explicit:
            return explicit

        accept = self.request.headers.get("accept", "")
        for part in accept.split(","):
            media_type = part.split(";", 1)[0].strip()
            if media_type in ACCEPT_FORMATS:
                return ACCEPT_FORMATS[media_type]
        return DEFAULT_FORMAT


def get_render_context(request: Request) -> RenderContext:
    """FastAPI dependency building the per-request RenderContext."""
    controller = RequestController(request)
    return RenderContext(controller=controller, format=controller.requested_format())
