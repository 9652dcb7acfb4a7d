"""Processor set builder.

Turns each configured processor block into a processor definition.
Ordering is not decided here; see ordering.order_processors().
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any

from traceforge.components.ids import ComponentID
from traceforge.config.models import (
    BatchConfig,
    InstanceConfig,
    SpanMetricsConfig,
    TailSamplingConfig,
)
from traceforge.exceptions import (
    AmbiguousMetricsExporterError,
    DuplicateBatchConfigError,
    InvalidPolicyShapeError,
)

from .ordering import ProcessorKind

logger = logging.getLogger(__name__)

SPANMETRICS_NAMESPACE = "tempo_spanmetrics"
PROMETHEUS_EXPORTER = ComponentID("prometheus")
REMOTE_WRITE_EXPORTER = ComponentID("remote_write")

# Policy kind → parameters that must be present.
POLICY_PARAMETERS: dict[str, tuple[str, ...]] = {
    "always_sample": (),
    "latency": ("threshold_ms",),
    "numeric_attribute": ("key", "min_value", "max_value"),
    "probabilistic": ("sampling_percentage",),
    "status_code": ("status_codes",),
    "string_attribute": ("key", "values"),
    "rate_limiting": ("spans_per_second",),
}


@dataclass
class ProcessorSet:
    """Built processors plus the side exporter span metrics writes to.

    Attributes:
        processors: Processor settings keyed by kind, in build order.
        metrics_exporter: ID and settings of the span metrics exporter,
            if span metrics are configured.
    """

    processors: dict[ProcessorKind, dict[str, Any]] = field(default_factory=dict)
    metrics_exporter: tuple[ComponentID, dict[str, Any]] | None = None

    @property
    def kinds(self) -> list[ProcessorKind]:
        """Configured processor kinds."""
        return list(self.processors)

    def by_id(self) -> dict[ComponentID, dict[str, Any]]:
        """Processor settings keyed by component ID."""
        return {ComponentID(kind.value): s for kind, s in self.processors.items()}


class ProcessorSetBuilder:
    """Builds processor definitions from the optional processor blocks.

    Only present blocks produce a processor.
    """

    def build(self, config: InstanceConfig) -> ProcessorSet:
        """Build every configured processor of an instance.

        Raises:
            DuplicateBatchConfigError: If batch is set in two places.
            AmbiguousMetricsExporterError: If span metrics has both or
                no destination.
            InvalidPolicyShapeError: If a sampling policy is malformed.
        """
        result = ProcessorSet()

        if config.attributes is not None:
            result.processors[ProcessorKind.ATTRIBUTES] = {
                "actions": copy.deepcopy(config.attributes.actions),
            }

        if config.spanmetrics is not None:
            exporter_id, exporter_settings = self.spanmetrics_exporter(
                config.spanmetrics
            )
            result.processors[ProcessorKind.SPANMETRICS] = self.spanmetrics(
                config.spanmetrics, exporter_id
            )
            result.metrics_exporter = (exporter_id, exporter_settings)

        if config.tail_sampling is not None:
            result.processors[ProcessorKind.TAIL_SAMPLING] = self.tail_sampling(
                config.tail_sampling
            )

        if config.automatic_logging is not None:
            result.processors[ProcessorKind.AUTOMATIC_LOGGING] = {
                "automatic_logging": config.automatic_logging.model_dump(
                    exclude_unset=True
                ),
            }

        batch = self.batch_config(config)
        if batch is not None:
            result.processors[ProcessorKind.BATCH] = batch.model_dump(
                exclude_none=True
            )

        logger.debug(
            "Built processors: %s", ", ".join(k.value for k in result.processors)
        )
        return result

    def batch_config(self, config: InstanceConfig) -> BatchConfig | None:
        """Return the single effective batch block, if any."""
        nested = config.push_config.batch if config.push_config else None
        if config.batch is not None and nested is not None:
            raise DuplicateBatchConfigError()
        return config.batch if config.batch is not None else nested

    def spanmetrics_exporter(
        self, spanmetrics: SpanMetricsConfig
    ) -> tuple[ComponentID, dict[str, Any]]:
        """Pick the span metrics destination and build its exporter."""
        if spanmetrics.prom_instance and spanmetrics.handler_endpoint:
            raise AmbiguousMetricsExporterError(
                "spanmetrics: prom_instance and handler_endpoint cannot both be set"
            )
        if spanmetrics.prom_instance:
            return REMOTE_WRITE_EXPORTER, {
                "namespace": SPANMETRICS_NAMESPACE,
                "prom_instance": spanmetrics.prom_instance,
            }
        if spanmetrics.handler_endpoint:
            return PROMETHEUS_EXPORTER, {
                "endpoint": spanmetrics.handler_endpoint,
                "namespace": SPANMETRICS_NAMESPACE,
            }
        raise AmbiguousMetricsExporterError(
            "spanmetrics: one of prom_instance or handler_endpoint must be set"
        )

    def spanmetrics(
        self, spanmetrics: SpanMetricsConfig, exporter_id: ComponentID
    ) -> dict[str, Any]:
        settings: dict[str, Any] = {"metrics_exporter": str(exporter_id)}
        if spanmetrics.latency_histogram_buckets is not None:
            settings["latency_histogram_buckets"] = list(
                spanmetrics.latency_histogram_buckets
            )
        if spanmetrics.dimensions is not None:
            settings["dimensions"] = copy.deepcopy(spanmetrics.dimensions)
        if spanmetrics.dimensions_cache_size is not None:
            settings["dimensions_cache_size"] = spanmetrics.dimensions_cache_size
        return settings

    def tail_sampling(self, tail_sampling: TailSamplingConfig) -> dict[str, Any]:
        return {
            "decision_wait": tail_sampling.decision_wait,
            "policies": [
                sampling_policy(i, entry)
                for i, entry in enumerate(tail_sampling.policies)
            ],
        }


def sampling_policy(index: int, entry: Any) -> dict[str, Any]:
    """Build one named tail sampling policy from ``{kind: parameters}``.

    Raises:
        InvalidPolicyShapeError: If the entry is not a single known kind
            with its required parameters.
    """
    if not isinstance(entry, dict) or len(entry) != 1:
        raise InvalidPolicyShapeError(
            index, "must be a mapping with exactly one policy kind"
        )

    (kind, parameters), = entry.items()
    if kind not in POLICY_PARAMETERS:
        raise InvalidPolicyShapeError(
            index,
            f"unknown policy kind '{kind}'. Available: {sorted(POLICY_PARAMETERS)}",
        )
    if parameters is None:
        parameters = {}
    if not isinstance(parameters, dict):
        raise InvalidPolicyShapeError(index, f"'{kind}' parameters must be a mapping")

    missing = [p for p in POLICY_PARAMETERS[kind] if p not in parameters]
    if missing:
        raise InvalidPolicyShapeError(
            index, f"'{kind}' is missing required parameters: {missing}"
        )

    policy: dict[str, Any] = {"name": f"{kind}/{index}", "type": kind}
    if parameters:
        policy[kind] = copy.deepcopy(parameters)
    return policy
