"""Tests for the TraceForge configuration system.

This module tests:
- Pydantic configuration models and their defaults
- ConfigLoader YAML parsing for single and multi-instance documents
- Error handling for invalid configs
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from traceforge.config import (
    AutomaticLoggingConfig,
    BatchConfig,
    Compression,
    ConfigLoader,
    ExportProtocol,
    InstanceConfig,
    LoadBalancingConfig,
    PushConfig,
    RemoteWriteConfig,
    TailSamplingConfig,
    TracingConfig,
)
from traceforge.exceptions import ConfigurationError

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# =============================================================================
# RemoteWriteConfig Tests
# =============================================================================


class TestRemoteWriteConfig:
    """Tests for RemoteWriteConfig model."""

    def test_default_values(self) -> None:
        """Test default values are applied correctly."""
        config = RemoteWriteConfig(endpoint="tempo:4317")
        assert config.protocol == ExportProtocol.GRPC
        assert config.compression == Compression.GZIP
        assert config.insecure is None
        assert config.insecure_skip_verify is None
        assert config.basic_auth is None
        assert config.headers is None

    def test_protocol_string_parsing(self) -> None:
        """Test that protocol strings are parsed case-insensitively."""
        assert RemoteWriteConfig(endpoint="x", protocol="HTTP").protocol == ExportProtocol.HTTP
        assert RemoteWriteConfig(endpoint="x", protocol="http ").protocol == ExportProtocol.HTTP

    def test_compression_none(self) -> None:
        """Test that compression 'none' is parsed to enum."""
        config = RemoteWriteConfig(endpoint="x", compression="none")
        assert config.compression == Compression.NONE

    def test_invalid_protocol_raises(self) -> None:
        """Test that an unknown protocol raises ValidationError."""
        with pytest.raises(ValidationError):
            RemoteWriteConfig(endpoint="x", protocol="thrift")

    def test_endpoint_required(self) -> None:
        """Test that endpoint is required and non-empty."""
        with pytest.raises(ValidationError):
            RemoteWriteConfig()
        with pytest.raises(ValidationError):
            RemoteWriteConfig(endpoint="")

    def test_extra_fields_forbidden(self) -> None:
        """Test that extra fields raise ValidationError."""
        with pytest.raises(ValidationError):
            RemoteWriteConfig(endpoint="x", batch={"timeout": "5s"})

    def test_protocol_exporter_type(self) -> None:
        """Test the exporter type chosen for each protocol."""
        assert ExportProtocol.GRPC.exporter_type == "otlp"
        assert ExportProtocol.HTTP.exporter_type == "otlphttp"


class TestPushConfig:
    """Tests for PushConfig model."""

    def test_accepts_nested_batch(self) -> None:
        """Test that push_config may carry its own batch block."""
        config = PushConfig(endpoint="x", batch={"timeout": "5s", "send_batch_size": 100})
        assert config.batch == BatchConfig(timeout="5s", send_batch_size=100)


# =============================================================================
# Processor Block Tests
# =============================================================================


class TestProcessorBlocks:
    """Tests for optional processor block models."""

    def test_batch_size_must_be_non_negative(self) -> None:
        """Test that batch sizes are validated."""
        with pytest.raises(ValidationError):
            BatchConfig(send_batch_size=-1)

    def test_automatic_logging_keeps_only_set_fields(self) -> None:
        """Test that only user-set keys are dumped."""
        config = AutomaticLoggingConfig(spans=True)
        assert config.model_dump(exclude_unset=True) == {"spans": True}

    def test_tail_sampling_defaults(self) -> None:
        """Test that decision_wait defaults to 5s."""
        config = TailSamplingConfig(policies=[{"always_sample": None}])
        assert config.decision_wait == "5s"
        assert config.load_balancing is None

    def test_tail_sampling_requires_policies(self) -> None:
        """Test that an empty policy list is rejected."""
        with pytest.raises(ValidationError):
            TailSamplingConfig(policies=[])

    def test_load_balancing_port_from_dns_resolver(self) -> None:
        """Test that the receiver port comes from the DNS resolver."""
        config = LoadBalancingConfig(resolver={"dns": {"hostname": "agent", "port": 9999}})
        assert config.receiver_port == 9999

    def test_load_balancing_port_default(self) -> None:
        """Test the default receiver port for resolvers without one."""
        config = LoadBalancingConfig(
            exporter=None, resolver={"static": {"hostnames": ["a:4318"]}}
        )
        assert config.exporter == {}
        assert config.receiver_port == 4318

    @pytest.mark.parametrize("port", ["abc", 0, 70000, True, [4318]])
    def test_load_balancing_invalid_port(self, port: object) -> None:
        """Test that a malformed DNS resolver port is rejected."""
        with pytest.raises(ValidationError, match="resolver.dns.port"):
            LoadBalancingConfig(resolver={"dns": {"hostname": "agent", "port": port}})

    def test_load_balancing_numeric_string_port(self) -> None:
        """Test that a numeric string port is accepted."""
        config = LoadBalancingConfig(resolver={"dns": {"hostname": "agent", "port": "5555"}})
        assert config.receiver_port == 5555


# =============================================================================
# InstanceConfig / TracingConfig Tests
# =============================================================================


class TestInstanceConfig:
    """Tests for InstanceConfig model."""

    def test_empty_instance(self) -> None:
        """Test that an empty instance parses with no blocks set."""
        config = InstanceConfig()
        assert config.receivers == {}
        assert config.push_config is None
        assert config.remote_write is None

    def test_null_receivers_become_empty(self) -> None:
        """Test that 'receivers:' with no value is an empty mapping."""
        config = InstanceConfig.model_validate({"receivers": None})
        assert config.receivers == {}

    def test_unknown_block_rejected(self) -> None:
        """Test that unknown top-level keys raise ValidationError."""
        with pytest.raises(ValidationError):
            InstanceConfig.model_validate({"receivers": {"jaeger": None}, "sampling": {}})


class TestTracingConfig:
    """Tests for TracingConfig name validation."""

    def test_valid_names(self) -> None:
        """Test that unique, non-empty names pass."""
        config = TracingConfig(configs=[InstanceConfig(name="a"), InstanceConfig(name="b")])
        assert config.validate_names() == []

    def test_empty_name(self) -> None:
        """Test that empty names are reported."""
        config = TracingConfig(configs=[InstanceConfig()])
        errors = config.validate_names()
        assert len(errors) == 1
        assert "must not be empty" in errors[0]

    def test_duplicate_names(self) -> None:
        """Test that duplicate names are reported."""
        config = TracingConfig(configs=[InstanceConfig(name="a"), InstanceConfig(name="a")])
        assert any("Duplicate instance name: 'a'" in e for e in config.validate_names())


# =============================================================================
# ConfigLoader Tests
# =============================================================================


class TestConfigLoader:
    """Tests for ConfigLoader."""

    def test_load_instance_file(self, loader: ConfigLoader) -> None:
        """Test loading a single instance from a file."""
        config = loader.load_instance(FIXTURES_DIR / "instance_basic.yaml")

        assert list(config.receivers) == ["jaeger"]
        assert config.remote_write is not None
        assert config.remote_write[0].basic_auth is not None
        assert config.remote_write[0].basic_auth.username == "12345"
        assert config.batch == BatchConfig(timeout="5s", send_batch_size=100)

    def test_load_instance_from_empty_string(self, loader: ConfigLoader) -> None:
        """Test that an empty document is an empty instance."""
        assert loader.load_instance_from_string("") == InstanceConfig()

    def test_load_multi_instance_file(self, loader: ConfigLoader) -> None:
        """Test loading several instances from a file."""
        config = loader.load(FIXTURES_DIR / "tracing_multi.yaml")

        assert [c.name for c in config.configs] == ["default", "sampled"]
        sampled = config.configs[1]
        assert sampled.tail_sampling is not None
        assert sampled.tail_sampling.load_balancing is not None

    def test_duplicate_instance_names_raise(self, loader: ConfigLoader) -> None:
        """Test that duplicate instance names are rejected on load."""
        with pytest.raises(ConfigurationError, match="Duplicate instance name"):
            loader.load(FIXTURES_DIR / "tracing_duplicate_names.yaml")

    def test_missing_file_raises(self, loader: ConfigLoader, tmp_path: Path) -> None:
        """Test that a missing file raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="not found"):
            loader.load_instance(tmp_path / "missing.yaml")

    def test_invalid_yaml_raises(self, loader: ConfigLoader) -> None:
        """Test that malformed YAML raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            loader.load_instance(FIXTURES_DIR / "invalid.yaml")

    def test_non_mapping_raises(self, loader: ConfigLoader) -> None:
        """Test that a non-mapping document raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="must be a YAML mapping"):
            loader.load_instance(FIXTURES_DIR / "not_a_mapping.yaml")

    def test_validation_error_is_wrapped(self, loader: ConfigLoader) -> None:
        """Test that schema errors surface as ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            loader.load_instance_from_string(
                """
receivers:
  jaeger:
remote_write:
  - endpoint: tempo:4317
    protocol: carrier-pigeon
"""
            )
        assert "<string>" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ValidationError)
