"""Tests for model_reader accessors, filter chains and helper composition."""

from types import SimpleNamespace

import pytest

from src.presenters import HelperSet, MarkupHelpers, ModelReader, Presenter, TextHelpers


class TestModelReader:
    def test_no_filters_is_pass_through(self, book):
        class BookPresenter(Presenter):
            pass

        BookPresenter.model_reader("title", "pages")
        presenter = BookPresenter(book)

        assert presenter.title() is book.title
        assert presenter.pages() == 10

    def test_filters_apply_in_declared_order(self, book):
        class BookPresenter(Presenter):
            def f(self, value):
                return f"f({value})"

            def g(self, value):
                return f"g({value})"

        BookPresenter.model_reader("title", filter_through=["f", "g"])

        assert BookPresenter(book).title() == "g(f(T))"

    def test_single_filter_name(self, book):
        class BookPresenter(Presenter):
            def shout(self, value):
                return value.upper() + "!"

        BookPresenter.model_reader("author", filter_through="shout")

        assert BookPresenter(book).author() == "A!"

    def test_callable_filters(self, book):
        class BookPresenter(Presenter):
            pass

        BookPresenter.model_reader("pages", filter_through=[lambda n: n * 2, str])

        assert BookPresenter(book).pages() == "20"

    def test_redeclaring_overwrites(self, book):
        class BookPresenter(Presenter):
            def f(self, value):
                return f"f({value})"

            def g(self, value):
                return f"g({value})"

        BookPresenter.model_reader("title", filter_through="f")
        BookPresenter.model_reader("title", filter_through="g")

        assert BookPresenter(book).title() == "g(T)"
        assert BookPresenter.model_readers() == {"title": ["g"]}

    def test_filters_resolve_against_helpers(self, book):
        class BookPresenter(Presenter, helpers=[MarkupHelpers]):
            pass

        BookPresenter.model_reader("title", filter_through="escape")
        unsafe = type(book)(author="A", title="<b>T</b>", pages=1)

        assert BookPresenter(unsafe).title() == "&lt;b&gt;T&lt;/b&gt;"

    def test_unknown_filter_fails_when_called(self, book):
        class BookPresenter(Presenter):
            pass

        BookPresenter.model_reader("title", filter_through="nope")

        with pytest.raises(AttributeError):
            BookPresenter(book).title()

    def test_missing_model_attribute_fails(self, book):
        class BookPresenter(Presenter):
            pass

        BookPresenter.model_reader("isbn")

        with pytest.raises(AttributeError):
            BookPresenter(book).isbn()

    def test_requires_attribute_names(self):
        with pytest.raises(ValueError):
            Presenter.model_reader()

    def test_class_body_declaration(self, book):
        class BookPresenter(Presenter):
            heading = ModelReader("title", filter_through="wrap")
            author = ModelReader()

            def wrap(self, value):
                return f"[{value}]"

        presenter = BookPresenter(book)

        assert presenter.heading() == "[T]"
        assert presenter.author() == "A"
        assert BookPresenter.model_readers() == {"heading": ["wrap"], "author": []}

    def test_subclass_declarations_do_not_leak_to_parent(self, book):
        class BasePresenter(Presenter):
            pass

        BasePresenter.model_reader("title")

        class ChildPresenter(BasePresenter):
            pass

        ChildPresenter.model_reader("author")

        assert set(ChildPresenter.model_readers()) == {"title", "author"}
        assert set(BasePresenter.model_readers()) == {"title"}
        assert not hasattr(BasePresenter(book), "author")

    def test_model_is_not_modified(self, book):
        class BookPresenter(Presenter):
            def shout(self, value):
                return value.upper()

        BookPresenter.model_reader("title", filter_through="shout")
        BookPresenter(book).title()

        assert book.title == "T"

    def test_to_dict(self, book):
        class BookPresenter(Presenter):
            pass

        BookPresenter.model_reader("author", "title")

        assert BookPresenter(book).to_dict() == {"author": "A", "title": "T"}

    @pytest.mark.parametrize("attribute", ["model", "context", "controller", "format"])
    def test_attribute_named_like_presenter_property(self, attribute):
        car = SimpleNamespace(make="VW", **{attribute: "Golf"})

        class CarPresenter(Presenter):
            pass

        CarPresenter.model_reader("make", attribute)
        presenter = CarPresenter(car)

        assert presenter.make() == "VW"
        assert getattr(presenter, attribute)() == "Golf"
        assert presenter.to_dict() == {"make": "VW", attribute: "Golf"}


class LoudHelpers(HelperSet):
    def shout(self, value):
        return f"{value}!"

    def owner(self):
        return self.presenter


class QuietHelpers(HelperSet):
    def shout(self, value):
        return f"{value}."


class TestHelperInclusion:
    def test_helper_methods_are_available(self, book):
        class BookPresenter(Presenter, helpers=[TextHelpers]):
            pass

        assert BookPresenter(book).pluralize(2, "book") == "2 books"

    def test_later_inclusion_wins(self, book):
        class BookPresenter(Presenter, helpers=[LoudHelpers, QuietHelpers]):
            pass

        assert BookPresenter(book).shout("hi") == "hi."

    def test_reincluding_moves_to_latest(self, book):
        class BookPresenter(Presenter, helpers=[LoudHelpers, QuietHelpers]):
            pass

        BookPresenter.helper(LoudHelpers)

        assert BookPresenter.helpers() == [QuietHelpers, LoudHelpers]
        assert BookPresenter(book).shout("hi") == "hi!"

    def test_presenter_methods_win_over_helpers(self, book):
        class BookPresenter(Presenter, helpers=[LoudHelpers]):
            def shout(self, value):
                return "presenter"

        assert BookPresenter(book).shout("hi") == "presenter"

    def test_helper_sets_see_their_presenter(self, book):
        class BookPresenter(Presenter, helpers=[LoudHelpers]):
            pass

        presenter = BookPresenter(book)

        assert presenter.owner() is presenter

    def test_plain_objects_are_used_as_is(self, book):
        class Namespace:
            @staticmethod
            def double(value):
                return value * 2

        class BookPresenter(Presenter, helpers=[Namespace()]):
            pass

        BookPresenter.model_reader("pages", filter_through="double")

        assert BookPresenter(book).pages() == 20

    def test_helpers_are_per_class(self, book):
        class BookPresenter(Presenter, helpers=[LoudHelpers]):
            pass

        with pytest.raises(AttributeError):
            Presenter(book).shout("hi")

    def test_unknown_attribute(self, book):
        with pytest.raises(AttributeError, match="no attribute 'missing'"):
            Presenter(book).missing
