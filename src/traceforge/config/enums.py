"""TraceForge configuration enums for exporter transport settings."""

from __future__ import annotations

from enum import Enum


class ExportProtocol(Enum):
    """Wire protocol used by an OTLP exporter.

    The protocol selects the exporter type emitted for a target:
    - GRPC → ``otlp``
    - HTTP → ``otlphttp``
    """

    GRPC = "grpc"
    """OTLP over gRPC."""

    HTTP = "http"
    """OTLP over HTTP/protobuf."""

    @property
    def exporter_type(self) -> str:
        """Return the exporter component type for this protocol."""
        return "otlphttp" if self is ExportProtocol.HTTP else "otlp"


class Compression(Enum):
    """Payload compression for an exporter."""

    GZIP = "gzip"
    """Compress payloads with gzip (the default)."""

    NONE = "none"
    """Send payloads uncompressed; the field is omitted from the output."""
