"""TraceForge component factory registry.

This module provides the registry of component factories the target
runtime knows how to load. The compiler itself never consults it; it is
used to check that a compiled pipeline graph only references known,
well-formed components. The registry is a singleton that maintains
global state for component discovery.
"""

from __future__ import annotations

from typing import Any, ClassVar

from traceforge.components.ids import ComponentClass
from traceforge.exceptions import ComponentNotFoundError


class ComponentFactory:
    """Base class for a loadable component implementation.

    Subclasses override validate() to reject settings the runtime would
    refuse to load.
    """

    def validate(self, settings: Any) -> list[str]:
        """Return validation errors for ``settings`` (empty when valid)."""
        return []


class ComponentRegistry:
    """Registry of component factories keyed by class and type.

    Example:
        >>> registry = ComponentRegistry()
        >>> factory = registry.get_factory(ComponentClass.RECEIVER, "jaeger")
        >>> factory.validate({"protocols": {"grpc": None}})
        []
    """

    _instance: ClassVar[ComponentRegistry | None] = None
    _factories: dict[tuple[ComponentClass, str], ComponentFactory]

    def __new__(cls) -> ComponentRegistry:
        """Create or return the singleton instance."""
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._factories = {}
            cls._instance = instance
        return cls._instance

    def register_factory(
        self,
        component_class: ComponentClass,
        type_name: str,
        factory: ComponentFactory,
    ) -> None:
        """Register a factory for a component type.

        Args:
            component_class: Receiver, processor or exporter.
            type_name: The component type (e.g., 'jaeger').
            factory: The factory instance.

        Raises:
            ValueError: If the type is already registered for this class.
        """
        key = (component_class, type_name)
        if key in self._factories:
            existing = self._factories[key]
            raise ValueError(
                f"{component_class.value.capitalize()} '{type_name}' is already "
                f"registered as {type(existing).__name__}"
            )
        self._factories[key] = factory

    def get_factory(
        self, component_class: ComponentClass, type_name: str
    ) -> ComponentFactory:
        """Get the factory for a component type.

        Raises:
            ComponentNotFoundError: If no factory is registered for this type.
        """
        key = (component_class, type_name)
        if key not in self._factories:
            raise ComponentNotFoundError(
                type_name,
                f"Unknown {component_class.value} type '{type_name}'",
            )
        return self._factories[key]

    def has_factory(self, component_class: ComponentClass, type_name: str) -> bool:
        """Return True if a factory is registered for this type."""
        return (component_class, type_name) in self._factories

    def types(self, component_class: ComponentClass) -> list[str]:
        """Return the registered types of a component class, sorted."""
        return sorted(t for c, t in self._factories if c is component_class)

    def clear(self) -> None:
        """Clear all registered factories. Primarily for testing."""
        self._factories.clear()


_component_registry = ComponentRegistry()


def get_component_registry() -> ComponentRegistry:
    """Get the global ComponentRegistry instance."""
    return _component_registry
