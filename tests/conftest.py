"""Shared fixtures: plain model types, a fresh registry and an in-memory template engine."""

from dataclasses import dataclass

import pytest
from jinja2 import DictLoader

from src.presenters import JinjaTemplateEngine, MarkupHelpers, Presenter, PresenterRegistry


@dataclass(frozen=True)
class Book:
    author: str
    title: str
    pages: int
    price: float = 0.0


@dataclass(frozen=True)
class Magazine:
    title: str
    issue: int


TEMPLATES = {
    "book/_header.html.j2": "{{ presenter.header() }}",
    "book/_title.html.j2": "<span>{{ presenter.title() }}</span>",
    "book/_summary.txt.j2": "{{ presenter.title() }} by {{ presenter.author() }}",
    "book/_greeting.html.j2": "Hello {{ name }}",
    "book/_list_item.html.j2": "<em>{{ presenter.title() }}</em>",
    "book/_list_item.json.j2": "{{ presenter.to_dict()|tojson }}",
    "book/_collection_item.html.j2": "<div>{{ presenter.title() }}</div>",
    "book/_table_row.html.j2": (
        "<tr>{% for column in columns %}{% set reader = presenter|attr(column) %}"
        "<td>{{ reader() }}</td>{% endfor %}</tr>"
    ),
    "magazine/_list_item.html.j2": "<strong>{{ presenter.title() }} #{{ presenter.issue() }}</strong>",
    "catalog/_header.html.j2": "catalog header",
}


@pytest.fixture
def registry():
    return PresenterRegistry(modules=[])


@pytest.fixture
def engine():
    return JinjaTemplateEngine(loader=DictLoader(TEMPLATES))


@pytest.fixture
def book():
    return Book(author="A", title="T", pages=10)


@pytest.fixture
def books():
    return [
        Book(author="Le Guin", title="T1", pages=387),
        Book(author="Calvino", title="T2", pages=165),
        Book(author="Butler", title="T3", pages=264),
    ]


@pytest.fixture
def book_presenter_cls(registry):
    """BookPresenter registered with the fresh registry."""

    @registry.register(Book)
    class BookPresenter(Presenter, helpers=[MarkupHelpers]):
        def header(self):
            return self.content_tag("h1", f"{self.author()} – {self.title()}")

    BookPresenter.model_reader("author", "title", "pages")
    return BookPresenter


@pytest.fixture
def magazine_presenter_cls(registry):
    @registry.register(Magazine)
    class MagazinePresenter(Presenter):
        pass

    MagazinePresenter.model_reader("title", "issue")
    return MagazinePresenter
