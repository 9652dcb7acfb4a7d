"""TraceForge exception types."""

from traceforge.exceptions.errors import (
    AmbiguousExportTargetError,
    AmbiguousMetricsExporterError,
    ComponentNotFoundError,
    ConfigurationError,
    DuplicateBatchConfigError,
    InvalidExporterConfigError,
    InvalidPolicyShapeError,
    InvalidReceiverError,
    MissingReceiversError,
    SecretUnreadableError,
    TraceForgeError,
)

__all__ = [
    "TraceForgeError",
    "ConfigurationError",
    "MissingReceiversError",
    "AmbiguousExportTargetError",
    "DuplicateBatchConfigError",
    "AmbiguousMetricsExporterError",
    "InvalidExporterConfigError",
    "SecretUnreadableError",
    "InvalidPolicyShapeError",
    "InvalidReceiverError",
    "ComponentNotFoundError",
]
