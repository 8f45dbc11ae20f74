"""Presenter schemas — data models for the presentation layer.

- RenderContext: the per-request controller + format pair handed to presenters
- PresenterSummary: introspection record for a registered presenter
- PageInfo: page metadata of a paginated sequence
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class RenderContext(BaseModel):
    """Explicit per-request rendering context.

    Carries the controller-like object presenters may delegate to and the
    output format requested for this render. Built by the request handler
    and threaded into every presenter it constructs.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    controller: Any = Field(
        default=None,
        description="Controller-like object exposing request-scoped methods "
        "(e.g. current_user, url_for). None when rendering outside a request.",
    )
    format: Optional[str] = Field(
        default=None,
        description="Requested output format (e.g. 'html', 'json'). "
        "None falls back to the configured default format.",
    )


class PresenterSummary(BaseModel):
    """Lightweight description of a registered presenter for listing endpoints."""

    presenter_key: str = Field(
        ...,
        description="Qualified presenter key (e.g. 'Presenters.Book')",
    )
    presenter_class: str = Field(
        ...,
        description="Dotted path of the presenter class",
    )
    template_directory: str = Field(
        ...,
        description="Directory the presenter's partials are resolved under",
    )
    model_readers: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Attribute name -> filter names applied in order",
    )
    controller_methods: list[str] = Field(default_factory=list)
    helpers: list[str] = Field(
        default_factory=list,
        description="Included helper sets, earliest first",
    )


class PageInfo(BaseModel):
    """Page metadata for a paginated sequence."""

    page: int = Field(..., ge=1, description="Current page (1-based)")
    per_page: int = Field(..., ge=1)
    total: int = Field(..., ge=0, description="Total number of items")
    total_pages: int = Field(..., ge=1)
