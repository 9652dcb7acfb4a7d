"""TraceForge configuration system for YAML tracing definitions.

This module provides tools for describing tracing instances declaratively:

- Config Models: Pydantic models for instance configuration
- ConfigLoader: Load and validate YAML configuration files

Example:
    >>> from traceforge.config import ConfigLoader
    >>>
    >>> loader = ConfigLoader()
    >>> config = loader.load("tracing.yaml")
    >>> for instance in config.configs:
    ...     print(instance.name)
"""

from .enums import Compression, ExportProtocol
from .loader import ConfigLoader
from .models import (
    AttributesConfig,
    AutomaticLoggingConfig,
    BasicAuthConfig,
    BatchConfig,
    InstanceConfig,
    LoadBalancingConfig,
    PushConfig,
    RemoteWriteConfig,
    SpanMetricsConfig,
    TailSamplingConfig,
    TLSConfig,
    TracingConfig,
)

__all__ = [
    # Loader
    "ConfigLoader",
    # Enums
    "Compression",
    "ExportProtocol",
    # Models
    "AttributesConfig",
    "AutomaticLoggingConfig",
    "BasicAuthConfig",
    "BatchConfig",
    "InstanceConfig",
    "LoadBalancingConfig",
    "PushConfig",
    "RemoteWriteConfig",
    "SpanMetricsConfig",
    "TailSamplingConfig",
    "TLSConfig",
    "TracingConfig",
]
