"""TraceForge component system.

This module provides the component infrastructure for pipeline graphs:
- Identifiers: ComponentID, ComponentClass
- Registry: ComponentRegistry, ComponentFactory
- Decorators: @receiver, @processor, @exporter
- Validation: validate_graph
"""

from traceforge.components.decorators import exporter, processor, receiver
from traceforge.components.factories import register_builtin_factories
from traceforge.components.ids import ComponentClass, ComponentID
from traceforge.components.registry import (
    ComponentFactory,
    ComponentRegistry,
    get_component_registry,
)
from traceforge.components.validation import validate_graph

__all__ = [
    # Identifiers
    "ComponentClass",
    "ComponentID",
    # Registry
    "ComponentFactory",
    "ComponentRegistry",
    "get_component_registry",
    "register_builtin_factories",
    # Decorators
    "receiver",
    "processor",
    "exporter",
    # Validation
    "validate_graph",
]
