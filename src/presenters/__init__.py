"""Presenters — display proxies between models and views.

A presenter wraps one model instance (and optionally the request's
controller) and exposes formatted values to templates:

- Type resolution: Book -> 'Presenters.Book' via an explicit registry
- model_reader: read accessors piped through filter chains
- controller_method: forwarding to the bound controller
- helper: composition of helper sets (markup, text, numbers)
- render_as: partial dispatch to the template engine
- CollectionPresenter: list / collection / table / pagination rendering
"""

from src.presenters.base import (
    ControllerMethod,
    ModelReader,
    Presenter,
    presenter_key_for,
    qualify_presenter_key,
    template_directory_for,
)
from src.presenters.collection import CollectionPresenter
from src.presenters.errors import (
    MissingControllerError,
    NotPaginatableError,
    PresenterError,
    PresenterNotFoundError,
    TemplateNotFoundError,
)
from src.presenters.helpers import HelperSet, MarkupHelpers, NumberHelpers, TextHelpers
from src.presenters.pagination import Page, PaginatedSequence, paginate
from src.presenters.registry import (
    PresenterRegistry,
    collection_presenter_for,
    get_presenter_registry,
    presenter_for,
)
from src.presenters.schemas import PresenterSummary, RenderContext
from src.presenters.templating import JinjaTemplateEngine, get_template_engine, set_template_engine

__all__ = [
    "CollectionPresenter",
    "ControllerMethod",
    "HelperSet",
    "JinjaTemplateEngine",
    "MarkupHelpers",
    "MissingControllerError",
    "ModelReader",
    "NotPaginatableError",
    "NumberHelpers",
    "Page",
    "PaginatedSequence",
    "Presenter",
    "PresenterError",
    "PresenterNotFoundError",
    "PresenterRegistry",
    "PresenterSummary",
    "RenderContext",
    "TemplateNotFoundError",
    "TextHelpers",
    "collection_presenter_for",
    "get_presenter_registry",
    "get_template_engine",
    "paginate",
    "presenter_for",
    "presenter_key_for",
    "qualify_presenter_key",
    "set_template_engine",
    "template_directory_for",
]
