"""Validation of compiled pipeline graphs against the factory registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from traceforge.components.ids import ComponentClass, ComponentID
from traceforge.components.registry import ComponentRegistry, get_component_registry
from traceforge.exceptions import ComponentNotFoundError

# Import factories module to ensure built-in factories are registered
import traceforge.components.factories  # noqa: F401

if TYPE_CHECKING:
    from traceforge.pipeline.graph import PipelineGraph


def validate_graph(
    graph: PipelineGraph, registry: ComponentRegistry | None = None
) -> list[str]:
    """Check that a graph only references known, well-formed components.

    This validates that:
    1. Every receiver, processor and exporter type has a registered factory
    2. Every component's settings pass its factory's validation
    3. Every pipeline has a receiver and an exporter
    4. Every component a pipeline references is defined in the graph

    Args:
        graph: The compiled pipeline graph.
        registry: Optional registry. Uses global registry if not provided.

    Returns:
        List of validation error messages. Empty list means valid.
    """
    registry = registry or get_component_registry()
    errors: list[str] = []

    sections: list[tuple[ComponentClass, dict[ComponentID, Any]]] = [
        (ComponentClass.RECEIVER, graph.receivers),
        (ComponentClass.PROCESSOR, graph.processors),
        (ComponentClass.EXPORTER, graph.exporters),
    ]
    for component_class, components in sections:
        for component_id, settings in components.items():
            try:
                factory = registry.get_factory(component_class, component_id.type)
            except ComponentNotFoundError as e:
                errors.append(f"{component_class.value} '{component_id}': {e}")
                continue
            for problem in factory.validate(settings):
                errors.append(f"{component_class.value} '{component_id}': {problem}")

    for name, pipeline in graph.pipelines.items():
        if not pipeline.receivers:
            errors.append(f"pipeline '{name}' must have at least one receiver")
        if not pipeline.exporters:
            errors.append(f"pipeline '{name}' must have at least one exporter")
        references = [
            (ComponentClass.RECEIVER, pipeline.receivers, graph.receivers),
            (ComponentClass.PROCESSOR, pipeline.processors, graph.processors),
            (ComponentClass.EXPORTER, pipeline.exporters, graph.exporters),
        ]
        for component_class, ids, defined in references:
            for component_id in ids:
                if component_id not in defined:
                    errors.append(
                        f"pipeline '{name}' references undefined "
                        f"{component_class.value} '{component_id}'"
                    )

    return errors
