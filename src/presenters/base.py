"""Presenter base class and its declaration helpers.

A presenter wraps exactly one model instance plus an optional RenderContext
and exposes display-ready values to templates. Subclasses declare what they
expose in one of two equivalent ways:

    class BookPresenter(Presenter, helpers=[MarkupHelpers]):
        title = ModelReader(filter_through="escape")
        current_user = ControllerMethod()

    BookPresenter.model_reader("author", "pages")
    BookPresenter.controller_method("url_for")

Both forms install descriptor objects on the class and record the
declaration in a per-class table that subclasses inherit copy-on-write.
"""

import logging
import re
from typing import Any, Callable, Iterable, Optional, Union

from .errors import MissingControllerError
from .helpers import HelperSet
from .schemas import RenderContext

logger = logging.getLogger(__name__)

PRESENTER_NAMESPACE = "Presenters"

Filter = Union[str, Callable[[Any], Any]]
FilterSpec = Union[Filter, Iterable[Filter], None]

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def presenter_key_for(obj: Any) -> str:
    """Qualified presenter key for a model instance or type.

    >>> presenter_key_for(Book(...))
    'Presenters.Book'
    >>> presenter_key_for(Book)
    'Presenters.Book'
    """
    model_type = obj if isinstance(obj, type) else type(obj)
    return f"{PRESENTER_NAMESPACE}.{model_type.__name__}"


def qualify_presenter_key(name: str) -> str:
    """Presenter key for a bare type name or an already qualified key."""
    if name.startswith(f"{PRESENTER_NAMESPACE}."):
        return name
    return f"{PRESENTER_NAMESPACE}.{name}"


def template_directory_for(presenter_key: str) -> str:
    """Strip the namespace from a presenter key and snake-case the rest."""
    name = presenter_key.rsplit(".", 1)[-1]
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return name.lower()


def normalize_filters(filter_through: FilterSpec) -> tuple[Filter, ...]:
    """Accept a single filter or an ordered sequence of filters."""
    if filter_through is None:
        return ()
    if isinstance(filter_through, str) or callable(filter_through):
        return (filter_through,)
    return tuple(filter_through)


def filter_name(f: Filter) -> str:
    return f if isinstance(f, str) else getattr(f, "__name__", repr(f))


class ModelReader:
    """Zero-argument accessor that reads a model attribute through a filter chain.

    Accessing the descriptor on a presenter instance returns a callable, so
    templates and presenter code both use ``presenter.title()``.
    """

    def __init__(
        self,
        attribute: Optional[str] = None,
        filter_through: FilterSpec = None,
    ):
        self.attribute = attribute
        self.filters = normalize_filters(filter_through)

    def __set_name__(self, owner: type, name: str) -> None:
        if self.attribute is None:
            self.attribute = name
        owner._record_reader(name, self.filters)

    def __get__(self, presenter: Optional["Presenter"], owner: Optional[type] = None):
        if presenter is None:
            return self

        def accessor() -> Any:
            return self.read(presenter)

        accessor.__name__ = self.attribute or "accessor"
        return accessor

    def read(self, presenter: "Presenter") -> Any:
        value = getattr(presenter._model, self.attribute)
        for f in self.filters:
            value = presenter.resolve_filter(f)(value)
        return value


class ControllerMethod:
    """Method that forwards its arguments to the same-named controller member."""

    def __init__(self, name: Optional[str] = None):
        self.name = name

    def __set_name__(self, owner: type, name: str) -> None:
        if self.name is None:
            self.name = name
        owner._record_controller_method(self.name)

    def __get__(self, presenter: Optional["Presenter"], owner: Optional[type] = None):
        if presenter is None:
            return self

        def delegate(*args: Any, **kwargs: Any) -> Any:
            return self.forward(presenter, *args, **kwargs)

        delegate.__name__ = self.name or "delegate"
        return delegate

    def forward(self, presenter: "Presenter", *args: Any, **kwargs: Any) -> Any:
        controller = presenter._context.controller
        if controller is None:
            raise MissingControllerError(type(presenter).__name__, self.name)
        target = getattr(controller, self.name)
        if callable(target):
            return target(*args, **kwargs)
        # Plain controller attributes (e.g. a logger) are returned as-is
        if args or kwargs:
            raise TypeError(
                f"Controller attribute '{self.name}' is not callable "
                f"and takes no arguments"
            )
        return target


class Presenter:
    """Display proxy around a single model instance.

    The model is never mutated. Attribute lookups that miss the presenter
    class fall through to the included helper sets, latest inclusion first.
    """

    _model_readers: dict[str, tuple[Filter, ...]] = {}
    _controller_methods: tuple[str, ...] = ()
    _helpers: tuple[Any, ...] = ()

    # Overrides the directory derived from the model's type name
    template_directory_override: Optional[str] = None

    def __init_subclass__(cls, helpers: Iterable[Any] = (), **kwargs: Any):
        super().__init_subclass__(**kwargs)
        if helpers:
            cls.helper(*helpers)

    def __init__(
        self,
        model: Any,
        context: Optional[RenderContext] = None,
        template_engine: Any = None,
    ):
        self._model = model
        self._context = context or RenderContext()
        self._template_engine = template_engine
        self._helper_objects: Optional[list[Any]] = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} model={self._model!r}>"

    # -- Wrapped references --

    @property
    def model(self) -> Any:
        return self._model

    @property
    def context(self) -> RenderContext:
        return self._context

    @property
    def controller(self) -> Any:
        return self._context.controller

    @property
    def format(self) -> Optional[str]:
        return self._context.format

    # -- Declarations --

    @classmethod
    def _record_reader(cls, name: str, filters: tuple[Filter, ...]) -> None:
        readers = dict(cls._model_readers)
        readers[name] = filters
        cls._model_readers = readers

    @classmethod
    def _record_controller_method(cls, name: str) -> None:
        if name not in cls._controller_methods:
            cls._controller_methods = cls._controller_methods + (name,)

    @classmethod
    def model_reader(cls, *attributes: str, filter_through: FilterSpec = None) -> None:
        """Define a read accessor per attribute, optionally piped through filters.

        Args:
            *attributes: Model attribute names; each becomes an accessor of
                the same name on this presenter class.
            filter_through: A filter or ordered sequence of filters. String
                filters are resolved on the presenter instance (its own
                methods first, then included helpers); callables are used
                directly.

        Re-declaring an attribute replaces the earlier accessor.
        """
        if not attributes:
            raise ValueError("model_reader() needs at least one attribute name")
        filters = normalize_filters(filter_through)
        for attribute in attributes:
            setattr(cls, attribute, ModelReader(attribute, filters))
            cls._record_reader(attribute, filters)
        logger.debug(
            f"{cls.__name__}: model_reader {list(attributes)} "
            f"through {[filter_name(f) for f in filters]}"
        )

    @classmethod
    def controller_method(cls, *names: str) -> None:
        """Define methods that forward to the same-named controller members."""
        if not names:
            raise ValueError("controller_method() needs at least one method name")
        for name in names:
            setattr(cls, name, ControllerMethod(name))
            cls._record_controller_method(name)

    @classmethod
    def helper(cls, *helper_sets: Any) -> None:
        """Include helper sets; a set included later wins on name conflicts.

        Helper sets may be HelperSet subclasses (instantiated per presenter
        with the presenter as argument), other classes (instantiated without
        arguments) or plain objects/modules used as they are.
        """
        helpers = [h for h in cls._helpers if h not in helper_sets]
        helpers.extend(helper_sets)
        cls._helpers = tuple(helpers)

    @classmethod
    def model_readers(cls) -> dict[str, list[str]]:
        return {
            name: [filter_name(f) for f in filters]
            for name, filters in cls._model_readers.items()
        }

    @classmethod
    def controller_methods(cls) -> list[str]:
        return list(cls._controller_methods)

    @classmethod
    def helpers(cls) -> list[Any]:
        return list(cls._helpers)

    # -- Helper composition --

    def _helper_instances(self) -> list[Any]:
        if self._helper_objects is None:
            objects = []
            for helper_set in type(self)._helpers:
                if isinstance(helper_set, type) and issubclass(helper_set, HelperSet):
                    objects.append(helper_set(self))
                elif isinstance(helper_set, type):
                    objects.append(helper_set())
                else:
                    objects.append(helper_set)
            self._helper_objects = objects
        return self._helper_objects

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails, so presenter members win
        if name.startswith("_"):
            raise AttributeError(name)
        for helper_object in reversed(self._helper_instances()):
            if hasattr(helper_object, name):
                return getattr(helper_object, name)
        raise AttributeError(
            f"'{type(self).__name__}' object has no attribute '{name}'"
        )

    def resolve_filter(self, f: Filter) -> Callable[[Any], Any]:
        """Resolve a filter to a one-argument callable."""
        if callable(f):
            return f
        return getattr(self, f)

    # -- Rendering --

    @property
    def presenter_key(self) -> str:
        return presenter_key_for(self._model)

    @property
    def template_directory(self) -> str:
        if self.template_directory_override:
            return self.template_directory_override
        return template_directory_for(self.presenter_key)

    @property
    def template_engine(self) -> Any:
        if self._template_engine is None:
            from .templating import get_template_engine

            self._template_engine = get_template_engine()
        return self._template_engine

    def render_as(self, template_name: str, format: Optional[str] = None, **extra: Any) -> str:
        """Render one of this presenter's partials.

        Args:
            template_name: Partial name, resolved under template_directory
            format: Explicit output format; falls back to the render
                context's format, then the configured default.
            **extra: Additional template variables.

        Raises:
            TemplateNotFoundError: If the engine cannot resolve the partial.
        """
        from .templating import resolve_format

        fmt = resolve_format(format, self._context)
        context = {"presenter": self, "model": self._model, **extra}
        return self.template_engine.render(
            self.template_directory, template_name, fmt, context
        )

    def to_dict(self) -> dict[str, Any]:
        """Values of every declared model reader, keyed by accessor name."""
        return {name: getattr(self, name)() for name in type(self)._model_readers}
