"""TraceForge pipeline assembler.

This module compiles an InstanceConfig into a PipelineGraph. Each
compilation is a single deterministic pass:

1. Validate the invariants that span several configuration blocks
2. Build exporters and processors
3. Order processors, split at tail sampling when load balancing is on
4. Wire the trace pipeline(s), and the span metrics pipeline if needed

Either a complete graph is returned or a ConfigurationError is raised.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from traceforge.components.ids import ComponentID
from traceforge.config.models import InstanceConfig, TracingConfig
from traceforge.exceptions import (
    AmbiguousExportTargetError,
    ConfigurationError,
    InvalidReceiverError,
    MissingReceiversError,
)

from .credentials import SecretResolver
from .exporters import LOAD_BALANCING_EXPORTER, ExporterSetBuilder
from .graph import Pipeline, PipelineGraph
from .ordering import ProcessorKind, order_processors
from .processors import ProcessorSet, ProcessorSetBuilder

logger = logging.getLogger(__name__)

TRACES_PIPELINE = ComponentID("traces")
SPANMETRICS_PIPELINE = ComponentID("metrics", "spanmetrics")
LOAD_BALANCING_RECEIVER = ComponentID("otlp", "lb")
NOOP_RECEIVER = ComponentID("noop")


class PipelineAssembler:
    """Compiles instance configurations into pipeline graphs.

    The assembler holds no state between compilations, so one instance
    can compile any number of configurations, concurrently if need be.

    Example:
        >>> assembler = PipelineAssembler()
        >>> graph = assembler.compile(instance_config)
        >>> graph.pipeline("traces").exporters
        (ComponentID(type='otlp', name=None),)
    """

    def __init__(self, secret_resolver: SecretResolver | None = None) -> None:
        """Initialize the assembler.

        Args:
            secret_resolver: Resolver for basic auth password files.
        """
        self._exporters = ExporterSetBuilder(secret_resolver)
        self._processors = ProcessorSetBuilder()

    def compile(self, config: InstanceConfig) -> PipelineGraph:
        """Compile one instance configuration.

        Args:
            config: The validated instance configuration.

        Returns:
            The complete pipeline graph.

        Raises:
            ConfigurationError: On the first invalid setting found.
        """
        self._validate(config)

        exporters = self._exporters.build(config.push_config, config.remote_write)
        processors = self._processors.build(config)

        load_balancing = (
            config.tail_sampling.load_balancing if config.tail_sampling else None
        )
        groups = order_processors(processors.kinds, split=load_balancing is not None)

        graph = PipelineGraph(
            receivers={
                receiver_id(name): copy.deepcopy(settings)
                for name, settings in config.receivers.items()
            },
            processors=processors.by_id(),
        )
        user_receivers = tuple(graph.receivers)
        target_exporters = tuple(exporters)

        if load_balancing is None:
            graph.exporters.update(exporters)
            graph.pipelines[TRACES_PIPELINE] = Pipeline(
                receivers=user_receivers,
                processors=_processor_ids(groups[0]),
                exporters=target_exporters,
            )
        else:
            logger.debug(
                "Splitting trace pipeline for load balancing on port %d",
                load_balancing.receiver_port,
            )
            graph.receivers[LOAD_BALANCING_RECEIVER] = load_balancing_receiver(
                load_balancing.receiver_port
            )
            graph.exporters.update(exporters)
            graph.exporters[LOAD_BALANCING_EXPORTER] = (
                self._exporters.load_balancing_settings(load_balancing)
            )
            graph.pipelines[ComponentID.indexed(TRACES_PIPELINE.type, 0)] = Pipeline(
                receivers=user_receivers,
                processors=_processor_ids(groups[0]),
                exporters=(LOAD_BALANCING_EXPORTER,),
            )
            graph.pipelines[ComponentID.indexed(TRACES_PIPELINE.type, 1)] = Pipeline(
                receivers=(LOAD_BALANCING_RECEIVER,),
                processors=_processor_ids(groups[1]),
                exporters=target_exporters,
            )

        self._add_spanmetrics_pipeline(graph, processors)

        logger.info(
            "Compiled tracing instance '%s': %d pipeline(s), %d exporter(s)",
            config.name,
            len(graph.pipelines),
            len(graph.exporters),
        )
        return graph

    def _validate(self, config: InstanceConfig) -> None:
        """Check invariants spanning several blocks; first error wins."""
        if not config.receivers:
            raise MissingReceiversError()

        reserved = reserved_receivers(config)
        seen: set[ComponentID] = set()
        for name in config.receivers:
            component_id = receiver_id(name)
            if component_id in seen:
                raise InvalidReceiverError(
                    f"receiver '{name}' duplicates receiver '{component_id}'"
                )
            if component_id in reserved:
                raise InvalidReceiverError(
                    f"receiver '{component_id}' is reserved for "
                    f"{reserved[component_id]}"
                )
            seen.add(component_id)

        if config.push_config is not None and config.remote_write:
            raise AmbiguousExportTargetError(
                "push_config and remote_write cannot both be configured"
            )
        if config.push_config is None and not config.remote_write:
            raise AmbiguousExportTargetError(
                "one of push_config or remote_write must be configured"
            )

        if config.push_config is not None:
            logger.warning(
                "push_config is deprecated and will be removed; use remote_write"
            )

    def _add_spanmetrics_pipeline(
        self, graph: PipelineGraph, processors: ProcessorSet
    ) -> None:
        if processors.metrics_exporter is None:
            return
        exporter_id, exporter_settings = processors.metrics_exporter
        graph.receivers[NOOP_RECEIVER] = None
        graph.exporters[exporter_id] = exporter_settings
        graph.pipelines[SPANMETRICS_PIPELINE] = Pipeline(
            receivers=(NOOP_RECEIVER,),
            processors=(),
            exporters=(exporter_id,),
        )


def receiver_id(name: str) -> ComponentID:
    """Parse a configured receiver name.

    Raises:
        InvalidReceiverError: If the name is not ``type`` or ``type/name``.
    """
    try:
        return ComponentID.parse(name)
    except ValueError as e:
        raise InvalidReceiverError(f"invalid receiver name '{name}': {e}") from e


def reserved_receivers(config: InstanceConfig) -> dict[ComponentID, str]:
    """Receivers the assembler synthesizes for ``config``, by the block needing them."""
    reserved: dict[ComponentID, str] = {}
    if (
        config.tail_sampling is not None
        and config.tail_sampling.load_balancing is not None
    ):
        reserved[LOAD_BALANCING_RECEIVER] = "tail_sampling.load_balancing"
    if config.spanmetrics is not None:
        reserved[NOOP_RECEIVER] = "spanmetrics"
    return reserved


def load_balancing_receiver(port: int) -> dict[str, Any]:
    """Settings of the OTLP receiver peers forward spans to."""
    return {"protocols": {"grpc": {"endpoint": f"0.0.0.0:{port}"}}}


def _processor_ids(kinds: list[ProcessorKind]) -> tuple[ComponentID, ...]:
    return tuple(ComponentID(kind.value) for kind in kinds)


def compile_instance(
    config: InstanceConfig, secret_resolver: SecretResolver | None = None
) -> PipelineGraph:
    """Compile one instance configuration into a pipeline graph."""
    return PipelineAssembler(secret_resolver).compile(config)


def compile_all(
    config: TracingConfig, secret_resolver: SecretResolver | None = None
) -> dict[str, PipelineGraph]:
    """Compile every instance of a tracing configuration.

    Returns:
        Mapping of instance name to pipeline graph, in declaration order.

    Raises:
        ConfigurationError: If instance names are empty or duplicated,
            or any instance fails to compile.
    """
    errors = config.validate_names()
    if errors:
        raise ConfigurationError("Invalid tracing configuration: " + "; ".join(errors))

    assembler = PipelineAssembler(secret_resolver)
    return {instance.name: assembler.compile(instance) for instance in config.configs}
