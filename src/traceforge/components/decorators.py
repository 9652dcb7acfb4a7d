"""TraceForge convenience decorators for factory registration.

These decorators register additional component factories with the
global registry so that graphs referencing custom components validate.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from traceforge.components.ids import ComponentClass
from traceforge.components.registry import ComponentFactory, get_component_registry

# Import factories module to ensure built-in factories are registered
import traceforge.components.factories  # noqa: F401

T = TypeVar("T", bound=type[ComponentFactory])


def _register(component_class: ComponentClass, name: str) -> Callable[[T], T]:
    def decorator(cls: T) -> T:
        if not issubclass(cls, ComponentFactory):
            raise TypeError(
                f"Class '{cls.__name__}' must be a subclass of 'ComponentFactory' "
                f"to be registered as a {component_class.value}"
            )
        get_component_registry().register_factory(component_class, name, cls())
        return cls

    return decorator


def receiver(name: str) -> Callable[[T], T]:
    """Decorator for registering a receiver factory.

    Raises:
        TypeError: If the decorated class is not a ComponentFactory.
        ValueError: If a receiver with this name is already registered.

    Example:
        >>> @receiver("skywalking")
        ... class SkywalkingReceiverFactory(ComponentFactory):
        ...     pass
    """
    return _register(ComponentClass.RECEIVER, name)


def processor(name: str) -> Callable[[T], T]:
    """Decorator for registering a processor factory."""
    return _register(ComponentClass.PROCESSOR, name)


def exporter(name: str) -> Callable[[T], T]:
    """Decorator for registering an exporter factory."""
    return _register(ComponentClass.EXPORTER, name)
