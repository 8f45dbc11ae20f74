"""Collection presenter — bulk rendering of an ordered sequence of models.

Each rendering mode resolves one presenter per item (in order) and hands
them to a shared template under ``shared/``, which renders the per-item
partials:

    mode         shared template        per-item partial
    list         shared/_list           list_item
    collection   shared/_collection     collection_item
    table        shared/_table          table_row
    pagination   shared/_pagination     list_item (+ page navigation)
"""

import logging
from typing import Any, Iterator, Optional, Sequence

from .base import Presenter
from .errors import NotPaginatableError
from .pagination import PaginatedSequence
from .schemas import RenderContext
from .templating import get_template_engine, resolve_format

logger = logging.getLogger(__name__)

SHARED_DIRECTORY = "shared"


class CollectionPresenter:
    """Presenter-like wrapper over an ordered sequence of model instances."""

    def __init__(
        self,
        items: Sequence[Any],
        registry: Any,
        context: Optional[RenderContext] = None,
        template_engine: Any = None,
    ):
        """Initialize the collection presenter.

        Args:
            items: Ordered model instances (a PaginatedSequence enables
                pagination())
            registry: PresenterRegistry used to resolve each item
            context: Render context shared by every item presenter
            template_engine: Engine override (default: global engine)
        """
        self.items = items
        self.registry = registry
        self.context = context or RenderContext()
        self._template_engine = template_engine

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Presenter]:
        return iter(self.presenters())

    def __repr__(self) -> str:
        return f"<CollectionPresenter items={len(self.items)}>"

    @property
    def template_engine(self) -> Any:
        if self._template_engine is None:
            self._template_engine = get_template_engine()
        return self._template_engine

    @property
    def paginatable(self) -> bool:
        return isinstance(self.items, PaginatedSequence)

    def presenters(self):
        """Resolve one presenter per item, preserving order."""
        return [
            self.registry.presenter_for(
                item,
                context=self.context,
                template_engine=self._template_engine,
            )
            for item in self.items
        ]

    def default_columns(self, presenters) -> Sequence[str]:
        """Table columns: the model readers declared by the first item's presenter."""
        if not presenters:
            return []
        return tuple(type(presenters[0]).model_readers())

    def _render_shared(self, template_name: str, format: Optional[str], **extra: Any) -> str:
        fmt = resolve_format(format, self.context)
        presenters = self.presenters()
        logger.debug(
            f"Rendering {len(presenters)} presenters as shared/{template_name} ({fmt})"
        )
        context = {
            "collection": self,
            "items": self.items,
            "presenters": presenters,
            "format": fmt,
            **extra,
        }
        if template_name == "table" and extra.get("columns") is None:
            context["columns"] = self.default_columns(presenters)
        return self.template_engine.render(SHARED_DIRECTORY, template_name, fmt, context)

    # -- Rendering modes --

    def list(self, format: Optional[str] = None, **extra: Any) -> str:
        return self._render_shared("list", format, **extra)

    def collection(self, format: Optional[str] = None, **extra: Any) -> str:
        return self._render_shared("collection", format, **extra)

    def table(
        self,
        format: Optional[str] = None,
        columns: Optional[Sequence[str]] = None,
        **extra: Any,
    ) -> str:
        return self._render_shared("table", format, columns=columns, **extra)

    def pagination(self, format: Optional[str] = None, **extra: Any) -> str:
        """Render the page's items followed by page navigation.

        Raises:
            NotPaginatableError: If the items are not a PaginatedSequence
        """
        if not self.paginatable:
            raise NotPaginatableError(self.items)
        return self._render_shared("pagination", format, page=self.items, **extra)
