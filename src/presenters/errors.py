"""Presenter errors.

All of these indicate a configuration or programming mistake rather than a
transient condition, so callers surface them instead of retrying.
"""

from typing import Optional


class PresenterError(Exception):
    """Base class for presenter layer errors."""


class PresenterNotFoundError(PresenterError, LookupError):
    """No presenter is registered under the key derived from a model."""

    def __init__(self, key: str, available: Optional[list[str]] = None):
        self.key = key
        self.available = available or []
        message = f"No presenter registered for '{key}'"
        if self.available:
            message += f". Available: {self.available}"
        super().__init__(message)


class MissingControllerError(PresenterError, RuntimeError):
    """A controller delegate was called on a presenter built without a controller."""

    def __init__(self, presenter_name: str, method_name: str):
        self.presenter_name = presenter_name
        self.method_name = method_name
        super().__init__(
            f"{presenter_name}.{method_name}() forwards to the controller, "
            f"but no controller was bound to this presenter"
        )


class TemplateNotFoundError(PresenterError, LookupError):
    """The template engine could not resolve a (directory, template, format) triple."""

    def __init__(self, directory: str, template_name: str, format: str):
        self.directory = directory
        self.template_name = template_name
        self.format = format
        super().__init__(
            f"Template not found: {directory}/{template_name} (format: {format})"
        )


class NotPaginatableError(PresenterError, TypeError):
    """Pagination was requested for a sequence without page metadata."""

    def __init__(self, items: object):
        self.items_type = type(items).__name__
        super().__init__(
            f"Cannot paginate a '{self.items_type}': wrap it with paginate() "
            f"or implement PaginatedSequence"
        )
