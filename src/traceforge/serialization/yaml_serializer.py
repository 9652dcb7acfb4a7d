"""YAML serializer for TraceForge pipeline graphs."""

from __future__ import annotations

import yaml

from traceforge.pipeline.graph import PipelineGraph
from traceforge.serialization.protocols import Serializer


class YAMLSerializer(Serializer):
    """YAML-based graph serializer.

    Keys keep their build order, so the output reads like a hand-written
    collector configuration.

    Example:
        >>> serializer = YAMLSerializer()
        >>> data = serializer.serialize(graph)
        >>> serializer.deserialize(data) == graph
        True
    """

    def serialize(self, graph: PipelineGraph) -> bytes:
        """Serialize a graph to UTF-8 encoded YAML."""
        text = yaml.safe_dump(
            graph.to_dict(),
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )
        return text.encode("utf-8")

    def deserialize(self, data: bytes) -> PipelineGraph:
        """Deserialize YAML bytes back to a graph.

        Raises:
            yaml.YAMLError: If data is not valid YAML.
        """
        return PipelineGraph.from_dict(yaml.safe_load(data.decode("utf-8")) or {})
