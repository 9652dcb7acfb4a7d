"""Secret resolution for export credentials."""

from __future__ import annotations

import logging
from pathlib import Path

from traceforge.exceptions import SecretUnreadableError

logger = logging.getLogger(__name__)


class SecretResolver:
    """Resolves a credential given as a literal or as a file path.

    File contents are used verbatim. This is the only step of a
    compilation that touches the filesystem; pass a different resolver to
    the assembler to keep compilation pure in tests.
    """

    def resolve(
        self, secret: str | None = None, secret_file: str | None = None
    ) -> bytes:
        """Return the secret bytes.

        Args:
            secret: Literal secret value.
            secret_file: Path to a file holding the secret. Takes
                precedence over ``secret``.

        Returns:
            The secret, or empty bytes when neither source is given.

        Raises:
            SecretUnreadableError: If the file cannot be opened or read.
        """
        if secret_file:
            return self.read_file(secret_file)
        return (secret or "").encode("utf-8")

    def read_file(self, path: str) -> bytes:
        """Read a secret file to completion."""
        try:
            with Path(path).open("rb") as f:
                data = f.read()
        except OSError as e:
            raise SecretUnreadableError(path, e.strerror or str(e)) from e
        logger.debug("Resolved secret from file %s", path)
        return data
