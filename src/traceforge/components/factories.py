"""TraceForge built-in component factories.

This module registers every component type the pipeline compiler can
emit, plus the common trace receivers users configure:
- Receivers: jaeger, zipkin, otlp, opencensus, kafka, noop
- Processors: attributes, batch, spanmetrics, tail_sampling, automatic_logging
- Exporters: otlp, otlphttp, loadbalancing, prometheus, remote_write
"""

from __future__ import annotations

from typing import Any

from traceforge.components.ids import ComponentClass
from traceforge.components.registry import ComponentFactory, get_component_registry


class AnyFactory(ComponentFactory):
    """Factory that accepts any settings, including none."""


class MappingFactory(ComponentFactory):
    """Factory whose settings must be a mapping when present."""

    def validate(self, settings: Any) -> list[str]:
        if settings is not None and not isinstance(settings, dict):
            return [f"settings must be a mapping, got {type(settings).__name__}"]
        return []


class ProtocolReceiverFactory(MappingFactory):
    """Receiver that must enable at least one protocol."""

    def validate(self, settings: Any) -> list[str]:
        errors = super().validate(settings)
        if errors:
            return errors
        protocols = (settings or {}).get("protocols")
        if not isinstance(protocols, dict) or not protocols:
            return ["must enable at least one protocol under 'protocols'"]
        return []


class EndpointExporterFactory(MappingFactory):
    """Exporter that requires an endpoint."""

    def validate(self, settings: Any) -> list[str]:
        errors = super().validate(settings)
        if errors:
            return errors
        if not (settings or {}).get("endpoint"):
            return ["'endpoint' must be set"]
        return []


class LoadBalancingExporterFactory(MappingFactory):
    """Load balancing exporter: needs an inner protocol and a resolver."""

    def validate(self, settings: Any) -> list[str]:
        errors = super().validate(settings)
        if errors:
            return errors
        settings = settings or {}
        if not isinstance(settings.get("protocol"), dict) or "otlp" not in settings["protocol"]:
            errors.append("'protocol.otlp' must be set")
        if not settings.get("resolver"):
            errors.append("'resolver' must be set")
        return errors


class RemoteWriteExporterFactory(MappingFactory):
    """Exporter writing metrics to a metrics instance."""

    def validate(self, settings: Any) -> list[str]:
        errors = super().validate(settings)
        if errors:
            return errors
        if not (settings or {}).get("prom_instance"):
            return ["'prom_instance' must be set"]
        return []


class TailSamplingProcessorFactory(MappingFactory):
    """Tail sampling processor: needs at least one policy."""

    def validate(self, settings: Any) -> list[str]:
        errors = super().validate(settings)
        if errors:
            return errors
        if not (settings or {}).get("policies"):
            return ["'policies' must not be empty"]
        return []


BUILTIN_FACTORIES: dict[tuple[ComponentClass, str], type[ComponentFactory]] = {
    (ComponentClass.RECEIVER, "jaeger"): ProtocolReceiverFactory,
    (ComponentClass.RECEIVER, "otlp"): ProtocolReceiverFactory,
    (ComponentClass.RECEIVER, "opencensus"): MappingFactory,
    (ComponentClass.RECEIVER, "zipkin"): MappingFactory,
    (ComponentClass.RECEIVER, "kafka"): MappingFactory,
    (ComponentClass.RECEIVER, "noop"): AnyFactory,
    (ComponentClass.PROCESSOR, "attributes"): MappingFactory,
    (ComponentClass.PROCESSOR, "batch"): MappingFactory,
    (ComponentClass.PROCESSOR, "spanmetrics"): MappingFactory,
    (ComponentClass.PROCESSOR, "tail_sampling"): TailSamplingProcessorFactory,
    (ComponentClass.PROCESSOR, "automatic_logging"): MappingFactory,
    (ComponentClass.EXPORTER, "otlp"): EndpointExporterFactory,
    (ComponentClass.EXPORTER, "otlphttp"): EndpointExporterFactory,
    (ComponentClass.EXPORTER, "loadbalancing"): LoadBalancingExporterFactory,
    (ComponentClass.EXPORTER, "prometheus"): EndpointExporterFactory,
    (ComponentClass.EXPORTER, "remote_write"): RemoteWriteExporterFactory,
}


def register_builtin_factories() -> None:
    """Register the built-in factories with the global registry."""
    registry = get_component_registry()

    # Only register if not already registered (avoids double-registration on reload)
    for (component_class, type_name), factory_cls in BUILTIN_FACTORIES.items():
        if not registry.has_factory(component_class, type_name):
            registry.register_factory(component_class, type_name, factory_cls())


# Auto-register on module import
register_builtin_factories()
