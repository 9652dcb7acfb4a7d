"""Shared pytest fixtures for TraceForge tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from traceforge import ConfigLoader, PipelineGraph, compile_instance
from traceforge.components import get_component_registry, register_builtin_factories

PASSWORD_IN_FILE = "password_in_file"
FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def loader() -> ConfigLoader:
    """Create a ConfigLoader instance."""
    return ConfigLoader()


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding YAML configuration fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def password_file(tmp_path: Path) -> Path:
    """A password file without a trailing newline."""
    path = tmp_path / "password"
    path.write_bytes(PASSWORD_IN_FILE.encode("utf-8"))
    return path


@pytest.fixture
def compile_yaml(loader: ConfigLoader):
    """Compile an instance configuration given as YAML text."""

    def _compile(yaml_content: str) -> PipelineGraph:
        return compile_instance(loader.load_instance_from_string(yaml_content))

    return _compile


@pytest.fixture(autouse=True)
def builtin_factories():
    """Reset the factory registry to the built-in factories around each test."""
    registry = get_component_registry()
    registry.clear()
    register_builtin_factories()
    yield
    registry.clear()
    register_builtin_factories()
