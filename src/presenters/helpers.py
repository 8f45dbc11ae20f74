"""Helper sets — utility functions presenters include and use as filters.

Each helper is a plain module-level function so it can also be registered
as a Jinja2 filter; the HelperSet classes expose them as instance methods
for inclusion into presenters:

    class BookPresenter(Presenter, helpers=[MarkupHelpers, NumberHelpers]):
        price = ModelReader(filter_through="number_to_currency")
"""

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

import markdown as markdown_lib
from markupsafe import Markup, escape

_WHITESPACE = re.compile(r"\s+")
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_VOWELS = "aeiou"


# -- Markup --


def content_tag(tag: str, content: Any = "", **attributes: Any) -> Markup:
    """Build an HTML element with escaped content and attributes.

    Trailing underscores are dropped from attribute names (``class_``) and
    inner underscores become dashes (``data_id`` -> ``data-id``). Attributes
    set to None are omitted.
    """
    attrs = Markup("").join(
        Markup(' {}="{}"').format(Markup(name.rstrip("_").replace("_", "-")), value)
        for name, value in attributes.items()
        if value is not None
    )
    return Markup("<{0}{1}>{2}</{0}>").format(Markup(tag), attrs, content)


def link_to(text: Any, href: str, **attributes: Any) -> Markup:
    return content_tag("a", text, href=href, **attributes)


def simple_format(text: Any) -> Markup:
    """Wrap paragraphs in <p> and turn single newlines into <br>."""
    normalized = str(text).replace("\r\n", "\n").strip()
    if not normalized:
        return Markup("")
    paragraphs = []
    for block in _PARAGRAPH_BREAK.split(normalized):
        lines = Markup("<br>\n").join(escape(line) for line in block.split("\n"))
        paragraphs.append(Markup("<p>{}</p>").format(lines))
    return Markup("\n\n").join(paragraphs)


def render_markdown(text: Any) -> Markup:
    return Markup(markdown_lib.markdown(str(text)))


# -- Text --


def truncate(
    text: Any,
    length: int = 30,
    omission: str = "...",
    separator: Optional[str] = None,
) -> str:
    """Shorten text to at most `length` characters including the omission."""
    text = str(text)
    if len(text) <= length:
        return text
    cut = max(length - len(omission), 0)
    stop = cut
    if separator:
        found = text.rfind(separator, 0, cut)
        if found > 0:
            stop = found
    return text[:stop] + omission


def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    """'1 page', '10 pages', '2 boxes', '3 stories'."""
    if count == 1:
        word = singular
    elif plural is not None:
        word = plural
    elif singular.endswith(("s", "x", "z", "ch", "sh")):
        word = singular + "es"
    elif singular.endswith("y") and len(singular) > 1 and singular[-2] not in _VOWELS:
        word = singular[:-1] + "ies"
    else:
        word = singular + "s"
    return f"{count} {word}"


def titleize(text: Any) -> str:
    return " ".join(word.capitalize() for word in str(text).replace("_", " ").split())


def strip_tags(text: Any) -> str:
    return Markup(str(text)).striptags()


def squish(text: Any) -> str:
    return _WHITESPACE.sub(" ", str(text)).strip()


# -- Numbers --


def number_with_delimiter(value: Any, delimiter: str = ",", separator: str = ".") -> str:
    """1234567.5 -> '1,234,567.5'."""
    integer, _, fraction = str(value).partition(".")
    sign = ""
    if integer.startswith("-"):
        sign, integer = "-", integer[1:]
    grouped = f"{int(integer):,}".replace(",", delimiter)
    return sign + grouped + (separator + fraction if fraction else "")


def number_to_currency(
    value: Any,
    unit: str = "$",
    precision: int = 2,
    delimiter: str = ",",
    separator: str = ".",
) -> str:
    """1234.5 -> '$1,234.50'; negative amounts are prefixed with '-'."""
    amount = Decimal(str(value)).quantize(
        Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP
    )
    sign = "-" if amount < 0 else ""
    return f"{sign}{unit}{number_with_delimiter(abs(amount), delimiter, separator)}"


def number_to_percentage(value: Any, precision: int = 1) -> str:
    return f"{float(value):.{precision}f}%"


# -- Helper sets --


class HelperSet:
    """Base class for helper sets included into presenters.

    A fresh instance is built per presenter, so helpers can reach the
    presenter (and through it the render context) via ``self.presenter``.
    """

    def __init__(self, presenter: Any = None):
        self.presenter = presenter


class MarkupHelpers(HelperSet):
    def escape(self, value: Any) -> Markup:
        return escape(value)

    def content_tag(self, tag: str, content: Any = "", **attributes: Any) -> Markup:
        return content_tag(tag, content, **attributes)

    def link_to(self, text: Any, href: str, **attributes: Any) -> Markup:
        return link_to(text, href, **attributes)

    def simple_format(self, text: Any) -> Markup:
        return simple_format(text)

    def markdown(self, text: Any) -> Markup:
        return render_markdown(text)


class TextHelpers(HelperSet):
    def truncate(
        self,
        text: Any,
        length: int = 30,
        omission: str = "...",
        separator: Optional[str] = None,
    ) -> str:
        return truncate(text, length, omission, separator)

    def pluralize(self, count: int, singular: str, plural: Optional[str] = None) -> str:
        return pluralize(count, singular, plural)

    def titleize(self, text: Any) -> str:
        return titleize(text)

    def strip_tags(self, text: Any) -> str:
        return strip_tags(text)

    def squish(self, text: Any) -> str:
        return squish(text)


class NumberHelpers(HelperSet):
    def number_with_delimiter(self, value: Any) -> str:
        return number_with_delimiter(value)

    def number_to_currency(self, value: Any) -> str:
        return number_to_currency(value)

    def number_to_percentage(self, value: Any) -> str:
        return number_to_percentage(value)


def register_filters(env: Any) -> None:
    """Expose the helpers to a Jinja2 environment."""
    env.filters.update(
        {
            "currency": number_to_currency,
            "delimited": number_with_delimiter,
            "percentage": number_to_percentage,
            "simple_format": simple_format,
            "markdown": render_markdown,
            "titleize": titleize,
            "pluralize": pluralize,
            "squish": squish,
        }
    )
    env.globals.update({"content_tag": content_tag, "link_to": link_to})
