"""TraceForge pipeline graph: the compiled output of an instance config.

The graph mirrors the schema understood by the telemetry runtime:

    receivers:  {id: settings}
    processors: {id: settings}
    exporters:  {id: settings}
    service:
      pipelines: {id: {receivers: [...], processors: [...], exporters: [...]}}
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from traceforge.components.ids import ComponentID


@dataclass(frozen=True)
class Pipeline:
    """Wiring of one pipeline by component ID.

    Attributes:
        receivers: Receivers the pipeline reads from, in order.
        processors: Processors applied in order.
        exporters: Exporters the pipeline writes to, in order.
    """

    receivers: tuple[ComponentID, ...]
    processors: tuple[ComponentID, ...]
    exporters: tuple[ComponentID, ...]

    def to_dict(self) -> dict[str, list[str]]:
        """Render the pipeline with string component IDs."""
        return {
            "receivers": [str(c) for c in self.receivers],
            "processors": [str(c) for c in self.processors],
            "exporters": [str(c) for c in self.exporters],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Pipeline:
        """Build a pipeline from its rendered form."""
        return cls(
            receivers=_parse_ids(data.get("receivers")),
            processors=_parse_ids(data.get("processors")),
            exporters=_parse_ids(data.get("exporters")),
        )


@dataclass
class PipelineGraph:
    """Complete receiver/processor/exporter/pipeline description.

    Built fresh by every compilation. Mapping order is significant and
    deterministic: it is the order in which components were built.
    """

    receivers: dict[ComponentID, Any] = field(default_factory=dict)
    processors: dict[ComponentID, dict[str, Any]] = field(default_factory=dict)
    exporters: dict[ComponentID, dict[str, Any]] = field(default_factory=dict)
    pipelines: dict[ComponentID, Pipeline] = field(default_factory=dict)

    def pipeline(self, name: str) -> Pipeline:
        """Look up a pipeline by its rendered name, e.g. ``traces/0``.

        Raises:
            KeyError: If the graph has no such pipeline.
        """
        return self.pipelines[ComponentID.parse(name)]

    def to_dict(self) -> dict[str, Any]:
        """Render the graph as plain mappings and lists.

        Settings are deep-copied so callers can mutate the result freely.
        """
        return {
            "receivers": {
                str(k): copy.deepcopy(v) for k, v in self.receivers.items()
            },
            "processors": {
                str(k): copy.deepcopy(v) for k, v in self.processors.items()
            },
            "exporters": {
                str(k): copy.deepcopy(v) for k, v in self.exporters.items()
            },
            "service": {
                "pipelines": {
                    str(k): p.to_dict() for k, p in self.pipelines.items()
                },
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PipelineGraph:
        """Rebuild a graph from the output of to_dict()."""
        service = data.get("service") or {}
        return cls(
            receivers={
                ComponentID.parse(k): copy.deepcopy(v)
                for k, v in (data.get("receivers") or {}).items()
            },
            processors={
                ComponentID.parse(k): copy.deepcopy(v)
                for k, v in (data.get("processors") or {}).items()
            },
            exporters={
                ComponentID.parse(k): copy.deepcopy(v)
                for k, v in (data.get("exporters") or {}).items()
            },
            pipelines={
                ComponentID.parse(k): Pipeline.from_dict(v or {})
                for k, v in (service.get("pipelines") or {}).items()
            },
        )


def _parse_ids(values: list[str] | None) -> tuple[ComponentID, ...]:
    return tuple(ComponentID.parse(v) for v in values or [])
