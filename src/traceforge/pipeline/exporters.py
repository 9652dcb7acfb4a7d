"""Exporter set builder.

Turns the single push target or the ordered list of remote write targets
into exporter definitions keyed by component ID.
"""

from __future__ import annotations

import base64
import copy
import logging
from typing import Any

from traceforge.components.ids import ComponentID
from traceforge.config.enums import Compression
from traceforge.config.models import (
    BasicAuthConfig,
    LoadBalancingConfig,
    PushConfig,
    RemoteWriteConfig,
)
from traceforge.exceptions import AmbiguousExportTargetError

from .credentials import SecretResolver

logger = logging.getLogger(__name__)

DEFAULT_MAX_ELAPSED_TIME = "60s"
LOAD_BALANCING_EXPORTER = ComponentID("loadbalancing")
# The load balancing exporter overrides the endpoint per peer.
LOAD_BALANCING_ENDPOINT = "noop"


class ExporterSetBuilder:
    """Builds OTLP exporter definitions from export targets.

    Example:
        >>> builder = ExporterSetBuilder()
        >>> exporters = builder.build(
        ...     remote_write=[RemoteWriteConfig(endpoint="tempo:4317")]
        ... )
        >>> [str(k) for k in exporters]
        ['otlp/0']
    """

    def __init__(self, secret_resolver: SecretResolver | None = None) -> None:
        """Initialize the builder.

        Args:
            secret_resolver: Resolver for basic auth passwords. A
                file-reading SecretResolver is used if not provided.
        """
        self._secrets = secret_resolver or SecretResolver()

    def build(
        self,
        push_config: PushConfig | None = None,
        remote_write: list[RemoteWriteConfig] | None = None,
    ) -> dict[ComponentID, dict[str, Any]]:
        """Build one exporter per export target.

        A push target yields a single unindexed exporter. Remote write
        targets are indexed by list position, whatever their protocol.

        Raises:
            AmbiguousExportTargetError: If both or neither kind of
                target is given.
            SecretUnreadableError: If a password file cannot be read.
        """
        if push_config is not None and remote_write:
            raise AmbiguousExportTargetError(
                "push_config and remote_write cannot both be configured"
            )

        exporters: dict[ComponentID, dict[str, Any]] = {}
        if push_config is not None:
            exporter_id = ComponentID(push_config.protocol.exporter_type)
            exporters[exporter_id] = self.exporter_settings(push_config)
        elif remote_write:
            for i, target in enumerate(remote_write):
                exporter_id = ComponentID.indexed(target.protocol.exporter_type, i)
                exporters[exporter_id] = self.exporter_settings(target)
        else:
            raise AmbiguousExportTargetError(
                "one of push_config or remote_write must be configured"
            )

        logger.debug("Built exporters: %s", ", ".join(str(k) for k in exporters))
        return exporters

    def exporter_settings(self, target: RemoteWriteConfig) -> dict[str, Any]:
        """Build the settings of one OTLP exporter.

        Optional fields only appear when they were configured.
        """
        settings: dict[str, Any] = {"endpoint": target.endpoint}
        if target.compression is Compression.GZIP:
            settings["compression"] = Compression.GZIP.value
        if target.insecure is not None:
            settings["insecure"] = target.insecure
        if target.insecure_skip_verify is not None:
            settings["insecure_skip_verify"] = target.insecure_skip_verify
        if target.tls_config is not None:
            settings.update(target.tls_config.model_dump(exclude_none=True))

        headers = self.headers(target)
        if headers:
            settings["headers"] = headers

        settings["retry_on_failure"] = retry_settings(target.retry_on_failure)
        if target.sending_queue is not None:
            settings["sending_queue"] = copy.deepcopy(target.sending_queue)
        return settings

    def headers(self, target: RemoteWriteConfig) -> dict[str, str]:
        """Merge user headers with the basic auth authorization header."""
        headers = dict(target.headers or {})
        if target.basic_auth is not None:
            headers["authorization"] = self.basic_auth_header(target.basic_auth)
        return headers

    def basic_auth_header(self, auth: BasicAuthConfig) -> str:
        """Return ``Basic base64(username:password)``."""
        password = self._secrets.resolve(auth.password, auth.password_file)
        credentials = auth.username.encode("utf-8") + b":" + password
        return "Basic " + base64.b64encode(credentials).decode("ascii")

    def load_balancing_settings(self, lb: LoadBalancingConfig) -> dict[str, Any]:
        """Build the settings of the trace-ID load balancing exporter.

        The inner OTLP block mirrors the user's exporter block. Its
        endpoint is a placeholder since the resolver supplies peers.
        """
        otlp = copy.deepcopy(lb.exporter)
        otlp["endpoint"] = LOAD_BALANCING_ENDPOINT
        otlp["retry_on_failure"] = retry_settings(otlp.get("retry_on_failure"))
        return {
            "protocol": {"otlp": otlp},
            "resolver": copy.deepcopy(lb.resolver),
        }


def retry_settings(overrides: dict[str, Any] | None) -> dict[str, Any]:
    """Return the retry policy with user overrides merged over the default."""
    settings: dict[str, Any] = {"max_elapsed_time": DEFAULT_MAX_ELAPSED_TIME}
    if overrides:
        settings.update(copy.deepcopy(overrides))
    return settings
