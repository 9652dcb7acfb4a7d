"""Serializer interface for pipeline graphs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from traceforge.pipeline.graph import PipelineGraph


class Serializer(ABC):
    """Abstract base class for pipeline graph serialization.

    Serializers turn a PipelineGraph into the bytes handed to the
    runtime's configuration loader, and back again. Output must be
    deterministic: the same graph always yields the same bytes.

    Implementations:
        - YAMLSerializer: The runtime's native format
        - JSONSerializer: Human-readable, widely supported
        - MessagePackSerializer: Binary, compact
    """

    @abstractmethod
    def serialize(self, graph: PipelineGraph) -> bytes:
        """Serialize a graph to bytes.

        Args:
            graph: The graph to serialize.

        Returns:
            Serialized graph as bytes.
        """
        ...

    @abstractmethod
    def deserialize(self, data: bytes) -> PipelineGraph:
        """Deserialize bytes back to a graph.

        Args:
            data: Serialized graph bytes.

        Returns:
            Reconstructed PipelineGraph.
        """
        ...
