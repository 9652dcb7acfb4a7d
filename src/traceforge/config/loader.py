"""TraceForge configuration loader for YAML tracing definitions.

This module provides the ConfigLoader class that:
1. Reads and parses YAML configuration files
2. Transforms raw YAML into a validated InstanceConfig or TracingConfig
3. Validates instance names for multi-instance documents
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from traceforge.exceptions import ConfigurationError

from .models import InstanceConfig, TracingConfig

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigLoader:
    """Loader for YAML tracing configurations.

    Example:
        >>> loader = ConfigLoader()
        >>> instance = loader.load_instance_from_string('''
        ... receivers:
        ...   jaeger:
        ...     protocols:
        ...       grpc:
        ... push_config:
        ...   endpoint: tempo:4317
        ... ''')
        >>> instance.push_config.endpoint
        'tempo:4317'
    """

    def load_instance(self, yaml_path: str | Path) -> InstanceConfig:
        """Load a single instance configuration from a YAML file.

        Args:
            yaml_path: Path to the YAML configuration file.

        Returns:
            Validated InstanceConfig.

        Raises:
            ConfigurationError: If the file cannot be read, parsed, or validated.
        """
        path = Path(yaml_path)
        return self._parse(self._read(path), InstanceConfig, str(path))

    def load_instance_from_string(self, yaml_content: str) -> InstanceConfig:
        """Load a single instance configuration from a YAML string.

        An empty document yields an empty InstanceConfig, which is later
        rejected by the compiler for having no receivers.
        """
        return self._parse(self._safe_load(yaml_content), InstanceConfig, "<string>")

    def load(self, yaml_path: str | Path) -> TracingConfig:
        """Load a multi-instance tracing configuration from a YAML file.

        Args:
            yaml_path: Path to the YAML configuration file.

        Returns:
            Validated TracingConfig with unique, non-empty instance names.

        Raises:
            ConfigurationError: If the file cannot be read, parsed, or validated.
        """
        path = Path(yaml_path)
        config = self._parse(self._read(path), TracingConfig, str(path))
        self._check_names(config, str(path))
        return config

    def load_from_string(self, yaml_content: str) -> TracingConfig:
        """Load a multi-instance tracing configuration from a YAML string.

        Useful for testing and programmatic configuration.
        """
        config = self._parse(self._safe_load(yaml_content), TracingConfig, "<string>")
        self._check_names(config, "<string>")
        return config

    def _read(self, path: Path) -> Any:
        try:
            with path.open("r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Configuration file not found: {path}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    def _safe_load(self, yaml_content: str) -> Any:
        try:
            return yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML: {e}") from e

    def _parse(self, raw_config: Any, model: type[ModelT], source: str) -> ModelT:
        """Validate a parsed YAML document against a configuration model.

        Args:
            raw_config: Parsed YAML document.
            model: The Pydantic model to validate against.
            source: Source file path or identifier for error messages.

        Raises:
            ConfigurationError: On validation errors.
        """
        if raw_config is None:
            raw_config = {}
        if not isinstance(raw_config, dict):
            raise ConfigurationError(
                f"Configuration must be a YAML mapping, got {type(raw_config).__name__}"
            )

        try:
            return model.model_validate(raw_config)
        except ValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed for {source}: {e}"
            ) from e

    def _check_names(self, config: TracingConfig, source: str) -> None:
        errors = config.validate_names()
        if errors:
            raise ConfigurationError(
                f"Invalid tracing configuration in {source}: " + "; ".join(errors)
            )
