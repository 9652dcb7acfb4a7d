"""JSON serializer for TraceForge pipeline graphs."""

from __future__ import annotations

import json

from traceforge.pipeline.graph import PipelineGraph
from traceforge.serialization.protocols import Serializer


class JSONSerializer(Serializer):
    """JSON-based graph serializer.

    Attributes:
        _indent: Optional indentation for pretty printing (None for compact).
        _ensure_ascii: If True, escape non-ASCII characters.
    """

    def __init__(
        self,
        indent: int | None = None,
        ensure_ascii: bool = False,
    ) -> None:
        """Initialize the JSON serializer.

        Args:
            indent: JSON indentation level (None for compact).
            ensure_ascii: Whether to escape non-ASCII characters.
        """
        self._indent = indent
        self._ensure_ascii = ensure_ascii

    def serialize(self, graph: PipelineGraph) -> bytes:
        """Serialize a graph to JSON bytes."""
        json_str = json.dumps(
            graph.to_dict(),
            indent=self._indent,
            ensure_ascii=self._ensure_ascii,
        )
        return json_str.encode("utf-8")

    def deserialize(self, data: bytes) -> PipelineGraph:
        """Deserialize JSON bytes back to a graph.

        Raises:
            json.JSONDecodeError: If data is not valid JSON.
        """
        return PipelineGraph.from_dict(json.loads(data.decode("utf-8")))
