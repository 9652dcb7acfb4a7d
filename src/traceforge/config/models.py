"""TraceForge configuration models for tracing instance definitions.

This module provides Pydantic models for parsing and validating the
user-facing tracing configuration. The configuration hierarchy is:

    TracingConfig
    └── InstanceConfig[]
        ├── receivers: Dict[str, Any] (opaque)
        ├── PushConfig (optional, legacy)
        │   ├── BasicAuthConfig / TLSConfig
        │   └── BatchConfig
        ├── RemoteWriteConfig[] (optional)
        │   └── BasicAuthConfig / TLSConfig
        ├── BatchConfig
        ├── AttributesConfig
        ├── SpanMetricsConfig
        ├── AutomaticLoggingConfig
        └── TailSamplingConfig
            └── LoadBalancingConfig

Structural validation happens here. Semantic rules that span several
blocks (one export target, one batch block, one span metrics target)
are enforced by the pipeline assembler so they surface as dedicated
error types.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from traceforge.config.enums import Compression, ExportProtocol

DEFAULT_DECISION_WAIT = "5s"
DEFAULT_LOAD_BALANCING_PORT = 4318


class BasicAuthConfig(BaseModel):
    """Basic authentication credentials for an export target.

    Attributes:
        username: The user name.
        password: Literal password.
        password_file: Path to a file holding the password. Takes
            precedence over ``password`` when both are set.
    """

    model_config = ConfigDict(extra="forbid")

    username: str
    password: str | None = None
    password_file: str | None = None


class TLSConfig(BaseModel):
    """Client TLS files for an export target."""

    model_config = ConfigDict(extra="forbid")

    ca_file: str | None = None
    cert_file: str | None = None
    key_file: str | None = None


class BatchConfig(BaseModel):
    """Settings for the batch processor.

    Attributes:
        timeout: Time after which a batch is sent regardless of size.
        send_batch_size: Number of spans after which a batch is sent.
        send_batch_max_size: Upper bound on the size of a batch.
    """

    model_config = ConfigDict(extra="forbid")

    timeout: str | None = None
    send_batch_size: int | None = Field(default=None, ge=0)
    send_batch_max_size: int | None = Field(default=None, ge=0)


class RemoteWriteConfig(BaseModel):
    """A single export target.

    Attributes:
        endpoint: host:port (or URL for http) of the receiving backend.
        protocol: Transport protocol (grpc or http).
        compression: Payload compression (gzip or none).
        insecure: Disable client transport security.
        insecure_skip_verify: Skip server certificate verification.
        tls_config: Client certificate files.
        basic_auth: Credentials turned into an authorization header.
        headers: Extra headers sent with every request.
        retry_on_failure: Overrides for the retry policy.
        sending_queue: Overrides for the sending queue.
    """

    model_config = ConfigDict(extra="forbid")

    endpoint: str = Field(min_length=1)
    protocol: ExportProtocol = ExportProtocol.GRPC
    compression: Compression = Compression.GZIP
    insecure: bool | None = None
    insecure_skip_verify: bool | None = None
    tls_config: TLSConfig | None = None
    basic_auth: BasicAuthConfig | None = None
    headers: dict[str, str] | None = None
    retry_on_failure: dict[str, Any] | None = None
    sending_queue: dict[str, Any] | None = None

    @field_validator("protocol", mode="before")
    @classmethod
    def parse_protocol(cls, v: Any) -> ExportProtocol:
        """Allow string input for protocol."""
        if isinstance(v, str):
            return ExportProtocol(v.strip().lower())
        return v

    @field_validator("compression", mode="before")
    @classmethod
    def parse_compression(cls, v: Any) -> Compression:
        """Allow string input for compression."""
        if isinstance(v, str):
            return Compression(v.strip().lower())
        return v


class PushConfig(RemoteWriteConfig):
    """Legacy single export target with an optional nested batch block."""

    batch: BatchConfig | None = None


class AttributesConfig(BaseModel):
    """Settings for the attributes processor.

    Attributes:
        actions: Attribute actions, passed through unchanged.
    """

    model_config = ConfigDict(extra="forbid")

    actions: list[dict[str, Any]] = Field(default_factory=list)


class SpanMetricsConfig(BaseModel):
    """Settings for the span metrics processor.

    Exactly one of ``prom_instance`` (remote write to a metrics instance)
    and ``handler_endpoint`` (Prometheus scrape endpoint) selects where
    the derived metrics go.
    """

    model_config = ConfigDict(extra="forbid")

    latency_histogram_buckets: list[str] | None = None
    dimensions: list[dict[str, Any]] | None = None
    dimensions_cache_size: int | None = Field(default=None, ge=1)
    prom_instance: str | None = None
    handler_endpoint: str | None = None


class AutomaticLoggingConfig(BaseModel):
    """Settings for the automatic logging processor.

    Only the keys a user sets are emitted, so every field defaults to
    ``None`` and the model is dumped with ``exclude_unset``.
    """

    model_config = ConfigDict(extra="forbid")

    backend: str | None = None
    logs_instance_name: str | None = None
    spans: bool | None = None
    roots: bool | None = None
    processes: bool | None = None
    span_attributes: list[str] | None = None
    process_attributes: list[str] | None = None
    overrides: dict[str, str] | None = None
    timeout: str | None = None


class LoadBalancingConfig(BaseModel):
    """Trace-ID load balancing across cooperating instances.

    Attributes:
        exporter: Settings for the inner OTLP exporter (opaque).
        resolver: Peer resolver settings, passed through unchanged.
    """

    model_config = ConfigDict(extra="forbid")

    exporter: dict[str, Any] = Field(default_factory=dict)
    resolver: dict[str, Any]

    @field_validator("exporter", mode="before")
    @classmethod
    def parse_exporter(cls, v: Any) -> Any:
        """Treat an empty ``exporter:`` key as an empty mapping."""
        return {} if v is None else v

    @field_validator("resolver")
    @classmethod
    def validate_dns_port(cls, v: dict[str, Any]) -> dict[str, Any]:
        """Ensure a DNS resolver port, if given, is a valid TCP port."""
        port = _dns_port(v)
        if port is None:
            return v
        try:
            number = int(port)
        except (TypeError, ValueError):
            raise ValueError(
                f"resolver.dns.port must be an integer, got {port!r}"
            ) from None
        if isinstance(port, bool) or not 1 <= number <= 65535:
            raise ValueError(
                f"resolver.dns.port must be between 1 and 65535, got {port!r}"
            )
        return v

    @property
    def receiver_port(self) -> int:
        """Port the synthesized load balancing receiver listens on."""
        port = _dns_port(self.resolver)
        if port is None:
            return DEFAULT_LOAD_BALANCING_PORT
        return int(port)


def _dns_port(resolver: dict[str, Any]) -> Any:
    dns = resolver.get("dns") or {}
    port = dns.get("port") if isinstance(dns, dict) else None
    return None if port == "" else port


class TailSamplingConfig(BaseModel):
    """Settings for the tail sampling processor.

    Attributes:
        policies: Policies as single-key mappings ``{kind: parameters}``.
            Shape is checked when the processor is built.
        decision_wait: Time to wait before making a sampling decision.
        load_balancing: Optional trace-ID routing between instances.
    """

    model_config = ConfigDict(extra="forbid")

    policies: list[Any] = Field(min_length=1)
    decision_wait: str = DEFAULT_DECISION_WAIT
    load_balancing: LoadBalancingConfig | None = None


class InstanceConfig(BaseModel):
    """Tracing configuration for one instance.

    This is the root model compiled into a pipeline graph.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = ""
    receivers: dict[str, Any] = Field(default_factory=dict)
    push_config: PushConfig | None = None
    remote_write: list[RemoteWriteConfig] | None = None
    batch: BatchConfig | None = None
    attributes: AttributesConfig | None = None
    spanmetrics: SpanMetricsConfig | None = None
    automatic_logging: AutomaticLoggingConfig | None = None
    tail_sampling: TailSamplingConfig | None = None

    @field_validator("receivers", mode="before")
    @classmethod
    def parse_receivers(cls, v: Any) -> Any:
        """Treat an empty ``receivers:`` key as no receivers."""
        return {} if v is None else v


class TracingConfig(BaseModel):
    """Configuration holding every tracing instance of an agent.

    Attributes:
        configs: Instance configurations, each compiled independently.
    """

    model_config = ConfigDict(extra="forbid")

    configs: list[InstanceConfig] = Field(default_factory=list)

    @field_validator("configs", mode="before")
    @classmethod
    def parse_configs(cls, v: Any) -> Any:
        """Treat an empty ``configs:`` key as no instances."""
        return [] if v is None else v

    def validate_names(self) -> list[str]:
        """Check that instance names are non-empty and unique.

        Returns:
            List of validation error messages. Empty list means valid.
        """
        errors: list[str] = []
        seen: set[str] = set()
        for i, instance in enumerate(self.configs):
            if not instance.name:
                errors.append(f"Instance {i}: name must not be empty")
                continue
            if instance.name in seen:
                errors.append(f"Duplicate instance name: '{instance.name}'")
            seen.add(instance.name)
        return errors
