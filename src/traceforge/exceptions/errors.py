"""TraceForge exception types."""

from __future__ import annotations


class TraceForgeError(Exception):
    """Base exception for all TraceForge errors."""

    pass


class ConfigurationError(TraceForgeError):
    """Raised when a tracing configuration is invalid.

    This includes YAML parsing errors, schema validation failures and
    every semantic error detected while compiling a pipeline graph.
    """

    pass


class MissingReceiversError(ConfigurationError):
    """Raised when an instance configures no receivers."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "at least one receiver must be configured")


class DuplicateBatchConfigError(ConfigurationError):
    """Raised when batch is configured both at top level and in push_config."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message or "batch and push_config.batch cannot both be configured"
        )


class AmbiguousMetricsExporterError(ConfigurationError):
    """Raised when spanmetrics has both (or no) destination targets."""

    pass


class InvalidExporterConfigError(ConfigurationError):
    """Raised when an exporter definition cannot be built."""

    pass


class AmbiguousExportTargetError(InvalidExporterConfigError):
    """Raised when push_config and remote_write are both set, or neither."""

    pass


class InvalidReceiverError(ConfigurationError):
    """Raised when a receiver name is malformed, duplicated or reserved."""

    pass


class SecretUnreadableError(ConfigurationError):
    """Raised when a referenced secret file cannot be read.

    Secrets are resolved while compiling, so an unreadable file is a
    configuration error rather than a runtime one.
    """

    def __init__(self, path: str, reason: str | None = None) -> None:
        self.path = path
        message = f"unable to read secret file '{path}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidPolicyShapeError(ConfigurationError):
    """Raised when a tail sampling policy entry is malformed."""

    def __init__(self, index: int, message: str) -> None:
        self.index = index
        super().__init__(f"tail_sampling policy {index}: {message}")


class ComponentNotFoundError(TraceForgeError):
    """Raised when a component type is not known to the registry."""

    def __init__(self, component_id: str, message: str | None = None) -> None:
        self.component_id = component_id
        if message is None:
            message = f"Component '{component_id}' not found in registry"
        super().__init__(message)
