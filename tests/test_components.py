"""Tests for the TraceForge component system.

This module tests:
- ComponentID parsing, rendering and ordering
- ComponentRegistry and built-in factories
- Convenience decorators (@receiver, @processor, @exporter)
- validate_graph
"""

from __future__ import annotations

from typing import Any

import pytest

from traceforge import (
    ComponentClass,
    ComponentFactory,
    ComponentID,
    ComponentNotFoundError,
    ComponentRegistry,
    get_component_registry,
    receiver,
    validate_graph,
)
from traceforge.pipeline import Pipeline, PipelineGraph


# =============================================================================
# ComponentID Tests
# =============================================================================


class TestComponentID:
    """Tests for ComponentID."""

    def test_render_unnamed(self) -> None:
        """Test that an unnamed ID renders as its type."""
        assert str(ComponentID("otlp")) == "otlp"

    def test_render_indexed(self) -> None:
        """Test that indexed IDs render as type/index."""
        component_id = ComponentID.indexed("otlp", 3)
        assert str(component_id) == "otlp/3"
        assert component_id.index == 3

    def test_render_named(self) -> None:
        """Test that named IDs render as type/name."""
        component_id = ComponentID("otlp", "lb")
        assert str(component_id) == "otlp/lb"
        assert component_id.index is None

    def test_parse(self) -> None:
        """Test parsing rendered IDs."""
        assert ComponentID.parse("jaeger") == ComponentID("jaeger")
        assert ComponentID.parse("metrics/spanmetrics") == ComponentID("metrics", "spanmetrics")
        assert ComponentID.parse("otlp/0") == ComponentID.indexed("otlp", 0)

    def test_equality_is_structural(self) -> None:
        """Test that equal IDs hash the same."""
        assert {ComponentID("otlp", "1"): "x"}[ComponentID.indexed("otlp", 1)] == "x"
        assert ComponentID("otlp") != ComponentID("otlphttp")

    def test_ordering_is_numeric_for_indices(self) -> None:
        """Test that index 10 sorts after index 2."""
        ids = [
            ComponentID.indexed("otlp", 10),
            ComponentID("otlp", "lb"),
            ComponentID.indexed("otlp", 2),
            ComponentID("otlp"),
            ComponentID("jaeger"),
        ]
        assert [str(i) for i in sorted(ids)] == [
            "jaeger",
            "otlp",
            "otlp/2",
            "otlp/10",
            "otlp/lb",
        ]

    @pytest.mark.parametrize("value", ["", "/0", "otlp/"])
    def test_invalid_ids(self, value: str) -> None:
        """Test that malformed IDs are rejected."""
        with pytest.raises(ValueError):
            ComponentID.parse(value)

    def test_negative_index_rejected(self) -> None:
        """Test that indices must be non-negative."""
        with pytest.raises(ValueError):
            ComponentID.indexed("otlp", -1)


# =============================================================================
# ComponentRegistry Tests
# =============================================================================


class TestComponentRegistry:
    """Tests for ComponentRegistry."""

    def test_singleton_pattern(self) -> None:
        """Test that ComponentRegistry is a singleton."""
        assert ComponentRegistry() is ComponentRegistry()
        assert get_component_registry() is ComponentRegistry()

    def test_builtin_factories_registered(self) -> None:
        """Test that every emitted component type is known."""
        registry = get_component_registry()
        assert "noop" in registry.types(ComponentClass.RECEIVER)
        assert "jaeger" in registry.types(ComponentClass.RECEIVER)
        assert registry.types(ComponentClass.PROCESSOR) == [
            "attributes",
            "automatic_logging",
            "batch",
            "spanmetrics",
            "tail_sampling",
        ]
        for exporter_type in ("otlp", "otlphttp", "loadbalancing", "prometheus", "remote_write"):
            assert registry.has_factory(ComponentClass.EXPORTER, exporter_type)

    def test_same_type_different_class(self) -> None:
        """Test that 'otlp' exists as receiver and exporter independently."""
        registry = get_component_registry()
        receiver_factory = registry.get_factory(ComponentClass.RECEIVER, "otlp")
        exporter_factory = registry.get_factory(ComponentClass.EXPORTER, "otlp")
        assert receiver_factory is not exporter_factory

    def test_unknown_factory_raises(self) -> None:
        """Test that unknown types raise ComponentNotFoundError."""
        with pytest.raises(ComponentNotFoundError) as exc_info:
            get_component_registry().get_factory(ComponentClass.RECEIVER, "skywalking")
        assert exc_info.value.component_id == "skywalking"

    def test_duplicate_registration_raises(self) -> None:
        """Test that registering a type twice raises ValueError."""
        with pytest.raises(ValueError, match="already registered"):
            get_component_registry().register_factory(
                ComponentClass.RECEIVER, "jaeger", ComponentFactory()
            )

    def test_clear(self) -> None:
        """Test that clear() removes all factories."""
        registry = get_component_registry()
        registry.clear()
        assert registry.types(ComponentClass.RECEIVER) == []


class TestDecorators:
    """Tests for factory registration decorators."""

    def test_register_receiver(self) -> None:
        """Test that @receiver registers a custom factory."""
        registry = get_component_registry()
        registry.clear()

        @receiver("skywalking")
        class SkywalkingReceiverFactory(ComponentFactory):
            def validate(self, settings: Any) -> list[str]:
                return [] if settings else ["settings required"]

        factory = registry.get_factory(ComponentClass.RECEIVER, "skywalking")
        assert isinstance(factory, SkywalkingReceiverFactory)
        assert factory.validate(None) == ["settings required"]

    def test_register_non_factory_raises(self) -> None:
        """Test that only ComponentFactory subclasses can be registered."""
        with pytest.raises(TypeError, match="ComponentFactory"):

            @receiver("not_a_factory")
            class NotAFactory:
                pass


class TestBuiltinFactoryValidation:
    """Tests for settings validation of built-in factories."""

    def test_protocol_receiver_requires_protocols(self) -> None:
        """Test that jaeger without protocols is rejected."""
        factory = get_component_registry().get_factory(ComponentClass.RECEIVER, "jaeger")
        assert factory.validate(None)
        assert factory.validate({"protocols": {}})
        assert factory.validate({"protocols": {"grpc": None}}) == []

    def test_mapping_factory_rejects_scalars(self) -> None:
        """Test that list or scalar settings are rejected."""
        factory = get_component_registry().get_factory(ComponentClass.PROCESSOR, "batch")
        assert factory.validate(["timeout"])
        assert factory.validate(None) == []

    def test_noop_receiver_accepts_nothing(self) -> None:
        """Test that the noop receiver needs no settings."""
        factory = get_component_registry().get_factory(ComponentClass.RECEIVER, "noop")
        assert factory.validate(None) == []

    def test_exporter_requires_endpoint(self) -> None:
        """Test that OTLP exporters require an endpoint."""
        factory = get_component_registry().get_factory(ComponentClass.EXPORTER, "otlp")
        assert factory.validate({"compression": "gzip"}) == ["'endpoint' must be set"]

    def test_loadbalancing_requires_protocol_and_resolver(self) -> None:
        """Test load balancing exporter validation."""
        factory = get_component_registry().get_factory(
            ComponentClass.EXPORTER, "loadbalancing"
        )
        assert len(factory.validate({})) == 2


# =============================================================================
# validate_graph Tests
# =============================================================================


def _graph(**overrides: Any) -> PipelineGraph:
    jaeger = ComponentID("jaeger")
    otlp = ComponentID.indexed("otlp", 0)
    graph = PipelineGraph(
        receivers={jaeger: {"protocols": {"grpc": None}}},
        exporters={otlp: {"endpoint": "tempo:4317"}},
        pipelines={
            ComponentID("traces"): Pipeline(
                receivers=(jaeger,), processors=(), exporters=(otlp,)
            )
        },
    )
    for key, value in overrides.items():
        setattr(graph, key, value)
    return graph


class TestValidateGraph:
    """Tests for validate_graph."""

    def test_valid_graph(self) -> None:
        """Test that a well-formed graph passes."""
        assert validate_graph(_graph()) == []

    def test_empty_receiver_config(self) -> None:
        """Test that a receiver with no protocols is reported."""
        graph = _graph(receivers={ComponentID("jaeger"): None})
        errors = validate_graph(graph)
        assert len(errors) == 1
        assert errors[0].startswith("receiver 'jaeger'")

    def test_unknown_component_type(self) -> None:
        """Test that unknown types are reported."""
        graph = _graph(processors={ComponentID("probabilistic_sampler"): {}})
        errors = validate_graph(graph)
        assert any("Unknown processor type 'probabilistic_sampler'" in e for e in errors)

    def test_undefined_reference(self) -> None:
        """Test that pipelines referencing undefined components are reported."""
        graph = _graph()
        graph.pipelines[ComponentID("traces")] = Pipeline(
            receivers=(ComponentID("jaeger"),),
            processors=(ComponentID("batch"),),
            exporters=(ComponentID.indexed("otlp", 0),),
        )
        errors = validate_graph(graph)
        assert errors == ["pipeline 'traces' references undefined processor 'batch'"]

    def test_pipeline_without_exporters(self) -> None:
        """Test that pipelines must export somewhere."""
        graph = _graph()
        graph.pipelines[ComponentID("traces")] = Pipeline(
            receivers=(ComponentID("jaeger"),), processors=(), exporters=()
        )
        assert validate_graph(graph) == [
            "pipeline 'traces' must have at least one exporter"
        ]

    def test_custom_registry(self) -> None:
        """Test validating against an emptied registry."""
        registry = get_component_registry()
        registry.clear()
        errors = validate_graph(_graph(), registry)
        assert len(errors) == 2
