"""Presenter registry — explicit table of model type -> presenter factory.

Follows the same pattern as the other registries in this service:
- In-memory dict keyed by qualified presenter key ('Presenters.Book')
- Lazy loading with _loaded guard; loading imports the modules named in
  PRESENTER_MODULES so their @register decorators run
- Global singleton via get_presenter_registry()

The table is filled at startup and only read while serving requests.
"""

import importlib
import logging
import os
from typing import Any, Callable, Optional, Sequence

from .base import Presenter, presenter_key_for, qualify_presenter_key, template_directory_for
from .collection import CollectionPresenter
from .errors import PresenterNotFoundError
from .schemas import PresenterSummary, RenderContext

logger = logging.getLogger(__name__)

# Comma-separated modules that register presenters on import
PRESENTER_MODULES = [
    m.strip() for m in os.environ.get("PRESENTER_MODULES", "").split(",") if m.strip()
]

PresenterFactory = Callable[..., Presenter]


class PresenterRegistry:
    """Registry mapping model types to presenter factories."""

    def __init__(self, modules: Optional[list[str]] = None):
        self.modules = list(modules) if modules is not None else list(PRESENTER_MODULES)
        self._factories: dict[str, PresenterFactory] = {}
        self._loaded = False

    def load(self) -> None:
        """Import the configured presenter modules."""
        if self._loaded:
            return
        self._loaded = True

        for module_name in self.modules:
            try:
                importlib.import_module(module_name)
                logger.debug(f"Imported presenter module: {module_name}")
            except ImportError as e:
                logger.error(f"Failed to import presenter module {module_name}: {e}")

        logger.info(f"Loaded {len(self._factories)} presenters")

    # -- Registration --

    def register(self, model_type: Any, presenter_cls: Optional[PresenterFactory] = None):
        """Register a presenter factory for a model type.

        Usable directly or as a class decorator:

            @registry.register(Book)
            class BookPresenter(Presenter): ...

            registry.register(Book, BookPresenter)

        Registering the same model type again replaces the earlier factory.
        """
        key = presenter_key_for(model_type)

        def decorator(factory: PresenterFactory) -> PresenterFactory:
            previous = self._factories.get(key)
            if previous is not None and previous is not factory:
                logger.warning(
                    f"Replacing presenter for {key}: "
                    f"{_factory_name(previous)} -> {_factory_name(factory)}"
                )
            self._factories[key] = factory
            logger.debug(f"Registered presenter {key} -> {_factory_name(factory)}")
            return factory

        if presenter_cls is not None:
            return decorator(presenter_cls)
        return decorator

    def unregister(self, model_type: Any) -> bool:
        """Remove a registration. Returns False if nothing was registered."""
        key = presenter_key_for(model_type)
        if key not in self._factories:
            return False
        del self._factories[key]
        logger.info(f"Unregistered presenter: {key}")
        return True

    def clear(self) -> None:
        self._factories.clear()

    # -- Lookup --

    def is_registered(self, obj: Any) -> bool:
        self.load()
        return presenter_key_for(obj) in self._factories

    def presenter_class_for(self, obj: Any) -> PresenterFactory:
        """Get the presenter factory for a model instance or type.

        Raises:
            PresenterNotFoundError: If no presenter is registered under the
                key derived from the model's type name
        """
        self.load()
        key = presenter_key_for(obj)
        factory = self._factories.get(key)
        if factory is None:
            raise PresenterNotFoundError(key, self.list_keys())
        return factory

    def presenter_for(
        self,
        obj: Any,
        context: Optional[RenderContext] = None,
        controller: Any = None,
        template_engine: Any = None,
    ) -> Presenter:
        """Build a presenter wrapping `obj`.

        Args:
            obj: Model instance to wrap. A type may be passed as well; the
                presenter then wraps the type object itself.
            context: Render context (controller + format) for this request
            controller: Controller shortcut; overrides context.controller
            template_engine: Engine override (default: global engine)

        Raises:
            PresenterNotFoundError: If no presenter is registered for obj
        """
        factory = self.presenter_class_for(obj)
        context = _merge_context(context, controller)
        return factory(obj, context=context, template_engine=template_engine)

    def collection_presenter_for(
        self,
        items: Sequence[Any],
        context: Optional[RenderContext] = None,
        controller: Any = None,
        template_engine: Any = None,
    ) -> CollectionPresenter:
        """Wrap an ordered sequence; item presenters are resolved at render time."""
        return CollectionPresenter(
            items,
            registry=self,
            context=_merge_context(context, controller),
            template_engine=template_engine,
        )

    # -- Introspection --

    def list_keys(self) -> list[str]:
        self.load()
        return sorted(self._factories)

    def count(self) -> int:
        self.load()
        return len(self._factories)

    def describe(self, model_type: Any) -> PresenterSummary:
        """Summarize the presenter registered for a model type or key.

        A string is read as a presenter key ('Book' or 'Presenters.Book'),
        never as a model instance.

        Raises:
            PresenterNotFoundError: If nothing is registered under the key
        """
        if isinstance(model_type, str):
            key = qualify_presenter_key(model_type)
        else:
            key = presenter_key_for(model_type)
        self.load()
        factory = self._factories.get(key)
        if factory is None:
            raise PresenterNotFoundError(key, self.list_keys())
        directory = template_directory_for(key)

        if isinstance(factory, type) and issubclass(factory, Presenter):
            directory = factory.template_directory_override or directory
            return PresenterSummary(
                presenter_key=key,
                presenter_class=_factory_name(factory),
                template_directory=directory,
                model_readers=factory.model_readers(),
                controller_methods=factory.controller_methods(),
                helpers=[_factory_name(h) for h in factory.helpers()],
            )

        return PresenterSummary(
            presenter_key=key,
            presenter_class=_factory_name(factory),
            template_directory=directory,
        )

    def list_summaries(self) -> list[PresenterSummary]:
        return [self.describe(key) for key in self.list_keys()]


def _factory_name(factory: Any) -> str:
    module = getattr(factory, "__module__", None)
    name = getattr(factory, "__qualname__", None) or getattr(factory, "__name__", repr(factory))
    return f"{module}.{name}" if module else name


def _merge_context(context: Optional[RenderContext], controller: Any) -> RenderContext:
    if context is None:
        return RenderContext(controller=controller)
    if controller is not None:
        return context.model_copy(update={"controller": controller})
    return context


# Global registry instance
_registry: Optional[PresenterRegistry] = None


def get_presenter_registry() -> PresenterRegistry:
    """Get the global presenter registry instance."""
    global _registry
    if _registry is None:
        _registry = PresenterRegistry()
        _registry.load()
    return _registry


def presenter_for(obj: Any, **kwargs: Any) -> Presenter:
    """Build a presenter for `obj` from the global registry."""
    return get_presenter_registry().presenter_for(obj, **kwargs)


def collection_presenter_for(items: Sequence[Any], **kwargs: Any) -> CollectionPresenter:
    """Wrap `items` in a collection presenter backed by the global registry."""
    return get_presenter_registry().collection_presenter_for(items, **kwargs)
