"""Tests for presenter type resolution and the registry."""

from unittest.mock import Mock, patch

import pytest

from src.presenters import (
    Presenter,
    PresenterNotFoundError,
    PresenterRegistry,
    RenderContext,
    presenter_key_for,
    qualify_presenter_key,
    template_directory_for,
)

from .conftest import Book, Magazine


class TestPresenterKeys:
    def test_key_from_instance(self, book):
        assert presenter_key_for(book) == "Presenters.Book"

    def test_key_from_type(self):
        assert presenter_key_for(Magazine) == "Presenters.Magazine"

    def test_key_from_name(self):
        assert qualify_presenter_key("Book") == "Presenters.Book"
        assert qualify_presenter_key("Presenters.Book") == "Presenters.Book"

    def test_string_model_uses_its_type(self):
        assert presenter_key_for("Book") == "Presenters.str"

    @pytest.mark.parametrize(
        "key,directory",
        [
            ("Presenters.Book", "book"),
            ("Presenters.BookReview", "book_review"),
            ("Presenters.HTTPRequest", "http_request"),
            ("Book", "book"),
        ],
    )
    def test_template_directory(self, key, directory):
        assert template_directory_for(key) == directory


class TestPresenterFor:
    def test_wraps_exactly_the_given_model(self, registry, book_presenter_cls, book):
        presenter = registry.presenter_for(book)

        assert isinstance(presenter, book_presenter_cls)
        assert presenter.model is book

    def test_each_call_builds_a_new_presenter(self, registry, book_presenter_cls, book):
        assert registry.presenter_for(book) is not registry.presenter_for(book)

    def test_unregistered_type_fails(self, registry, book_presenter_cls):
        with pytest.raises(PresenterNotFoundError) as exc_info:
            registry.presenter_for(Magazine(title="M", issue=1))

        assert exc_info.value.key == "Presenters.Magazine"
        assert exc_info.value.available == ["Presenters.Book"]

    def test_string_model_resolves_by_type(self, registry, book_presenter_cls):
        with pytest.raises(PresenterNotFoundError) as exc_info:
            registry.presenter_for("Book")

        assert exc_info.value.key == "Presenters.str"

        @registry.register(str)
        class LabelPresenter(Presenter):
            pass

        presenter = registry.presenter_for("Book")
        assert isinstance(presenter, LabelPresenter)
        assert presenter.model == "Book"

    def test_not_found_is_a_lookup_error(self, registry):
        with pytest.raises(LookupError):
            registry.presenter_for(object())

    def test_controller_is_bound(self, registry, book_presenter_cls, book):
        controller = Mock()
        presenter = registry.presenter_for(book, controller=controller)

        assert presenter.controller is controller
        assert presenter.context.format is None

    def test_controller_overrides_context(self, registry, book_presenter_cls, book):
        context = RenderContext(controller="old", format="txt")
        presenter = registry.presenter_for(book, context=context, controller="new")

        assert presenter.controller == "new"
        assert presenter.format == "txt"

    def test_no_controller_by_default(self, registry, book_presenter_cls, book):
        assert registry.presenter_for(book).controller is None

    def test_type_argument_wraps_the_type(self, registry, book_presenter_cls):
        presenter = registry.presenter_for(Book)

        assert presenter.model is Book

    def test_factory_functions_are_accepted(self, registry, book):
        factory = Mock(return_value="built")
        registry.register(Book, factory)

        assert registry.presenter_for(book) == "built"
        factory.assert_called_once()
        assert factory.call_args.args == (book,)


class TestRegistry:
    def test_register_as_decorator_returns_class(self, registry):
        @registry.register(Book)
        class BookPresenter(Presenter):
            pass

        assert registry.presenter_class_for(Book) is BookPresenter

    def test_reregistering_replaces(self, registry, book_presenter_cls, book):
        class OtherPresenter(Presenter):
            pass

        registry.register(Book, OtherPresenter)

        assert isinstance(registry.presenter_for(book), OtherPresenter)
        assert registry.count() == 1

    def test_unregister(self, registry, book_presenter_cls):
        assert registry.unregister(Book) is True
        assert registry.unregister(Book) is False
        assert not registry.is_registered(Book)

    def test_list_keys_sorted(self, registry, book_presenter_cls, magazine_presenter_cls):
        assert registry.list_keys() == ["Presenters.Book", "Presenters.Magazine"]

    def test_describe(self, registry, book_presenter_cls):
        summary = registry.describe("Book")

        assert summary.presenter_key == "Presenters.Book"
        assert summary.presenter_class.endswith("BookPresenter")
        assert summary.template_directory == "book"
        assert summary.model_readers == {"author": [], "title": [], "pages": []}
        assert summary.helpers == ["src.presenters.helpers.MarkupHelpers"]

    def test_describe_unknown(self, registry):
        with pytest.raises(PresenterNotFoundError):
            registry.describe("Nope")

    def test_load_imports_configured_modules_once(self):
        registry = PresenterRegistry(modules=["app.presenters", "app.more"])

        with patch("src.presenters.registry.importlib.import_module") as import_module:
            registry.load()
            registry.load()

        assert [c.args[0] for c in import_module.call_args_list] == [
            "app.presenters",
            "app.more",
        ]

    def test_load_logs_missing_modules(self, caplog):
        registry = PresenterRegistry(modules=["definitely_not_a_module_xyz"])

        registry.load()

        assert registry.count() == 0
        assert "definitely_not_a_module_xyz" in caplog.text
