"""Presenters for the library catalog.

Importing this module registers BookPresenter with the global presenter
registry.
"""

from pathlib import Path
from typing import Any, Optional

from src.presenters import (
    ControllerMethod,
    JinjaTemplateEngine,
    MarkupHelpers,
    ModelReader,
    NumberHelpers,
    Presenter,
    TextHelpers,
    get_presenter_registry,
)
from src.presenters.helpers import number_to_currency

from .schemas import Book

LIBRARY_TEMPLATES_DIR = Path(__file__).parent / "templates"

CURRENCY_UNITS = {"USD": "$", "EUR": "€", "GBP": "£"}

registry = get_presenter_registry()


@registry.register(Book)
class BookPresenter(Presenter, helpers=[MarkupHelpers, TextHelpers, NumberHelpers]):
    """Display logic for a catalog book."""

    author = ModelReader(filter_through="squish")
    title = ModelReader(filter_through="squish")
    summary = ModelReader(filter_through=["squish", "truncate"])
    price = ModelReader(filter_through="to_currency")

    current_user = ControllerMethod()
    url_for = ControllerMethod()

    def to_currency(self, amount: Any) -> str:
        """Format an amount in the book's own currency."""
        code = self.model.currency
        unit = CURRENCY_UNITS.get(code)
        if unit is None:
            return f"{number_to_currency(amount, unit='')} {code}"
        return number_to_currency(amount, unit=unit)

    def header(self):
        return self.content_tag("h1", f"{self.author()} – {self.title()}")

    def pages_label(self) -> str:
        return self.pluralize(self.model.pages, "page")

    def published(self) -> str:
        year = self.model.published_year
        return str(year) if year else "n.d."

    def path(self) -> str:
        return self.url_for("show_book", book_id=self.model.id)

    def viewer(self) -> str:
        return self.current_user() or "guest"


BookPresenter.model_reader("id", "pages", "currency")


# Engine with the library's partials ahead of the shared templates
_engine: Optional[JinjaTemplateEngine] = None


def get_library_template_engine() -> JinjaTemplateEngine:
    global _engine
    if _engine is None:
        _engine = JinjaTemplateEngine(search_paths=[LIBRARY_TEMPLATES_DIR])
    return _engine
