"""MessagePack serializer for TraceForge pipeline graphs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from traceforge.pipeline.graph import PipelineGraph
from traceforge.serialization.protocols import Serializer

if TYPE_CHECKING:
    import msgpack as msgpack_module


class MessagePackSerializer(Serializer):
    """MessagePack-based graph serializer.

    Binary format that is more compact than JSON.
    Requires the optional 'msgpack' dependency.

    Note:
        Install with: pip install traceforge[msgpack]
    """

    _msgpack: msgpack_module

    def __init__(self) -> None:
        """Initialize the MessagePack serializer.

        Raises:
            ImportError: If msgpack package is not installed.
        """
        try:
            import msgpack

            self._msgpack = msgpack
        except ImportError as e:
            raise ImportError(
                "msgpack package is required for MessagePackSerializer. "
                "Install with: pip install traceforge[msgpack]"
            ) from e

    def serialize(self, graph: PipelineGraph) -> bytes:
        """Serialize a graph to MessagePack bytes."""
        return self._msgpack.packb(graph.to_dict(), use_bin_type=True)

    def deserialize(self, data: bytes) -> PipelineGraph:
        """Deserialize MessagePack bytes back to a graph.

        Raises:
            msgpack.UnpackException: If data is not valid MessagePack.
        """
        return PipelineGraph.from_dict(self._msgpack.unpackb(data, raw=False))
