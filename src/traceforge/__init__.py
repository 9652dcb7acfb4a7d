"""TraceForge - compile tracing configuration into collector pipelines.

TraceForge turns a small, user-facing tracing configuration (receivers,
export targets and optional processors) into a complete pipeline graph
of receivers, processors, exporters and named pipelines for an
OpenTelemetry-Collector-style runtime.

Example:
    >>> from traceforge import ConfigLoader, compile_instance, get_serializer
    >>> config = ConfigLoader().load_instance_from_string('''
    ... receivers:
    ...   jaeger:
    ...     protocols:
    ...       grpc:
    ... remote_write:
    ...   - endpoint: tempo:4317
    ... ''')
    >>> graph = compile_instance(config)
    >>> [str(e) for e in graph.pipeline("traces").exporters]
    ['otlp/0']
    >>> print(get_serializer("yaml").serialize(graph).decode())  # doctest: +SKIP
"""

from traceforge.components import (
    ComponentClass,
    ComponentFactory,
    ComponentID,
    ComponentRegistry,
    exporter,
    get_component_registry,
    processor,
    receiver,
    validate_graph,
)
from traceforge.config import (
    ConfigLoader,
    InstanceConfig,
    RemoteWriteConfig,
    TracingConfig,
)
from traceforge.exceptions import (
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
from traceforge.pipeline import (
    Pipeline,
    PipelineAssembler,
    PipelineGraph,
    ProcessorKind,
    SecretResolver,
    compile_all,
    compile_instance,
    order_processors,
)
from traceforge.serialization import Serializer, get_serializer

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
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
    # Config
    "ConfigLoader",
    "InstanceConfig",
    "RemoteWriteConfig",
    "TracingConfig",
    # Components
    "ComponentClass",
    "ComponentFactory",
    "ComponentID",
    "ComponentRegistry",
    "get_component_registry",
    "receiver",
    "processor",
    "exporter",
    "validate_graph",
    # Pipeline
    "Pipeline",
    "PipelineAssembler",
    "PipelineGraph",
    "ProcessorKind",
    "SecretResolver",
    "compile_all",
    "compile_instance",
    "order_processors",
    # Serialization
    "Serializer",
    "get_serializer",
]
