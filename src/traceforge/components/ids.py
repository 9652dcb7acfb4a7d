"""TraceForge component identifiers.

A component ID names one receiver, processor, exporter or pipeline
within a pipeline graph. It renders as ``type`` or ``type/name``; members
of an ordered collection use their zero-based position as the name.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering

SEPARATOR = "/"


class ComponentClass(Enum):
    """The section of a pipeline graph a component belongs to."""

    RECEIVER = "receiver"
    PROCESSOR = "processor"
    EXPORTER = "exporter"


@total_ordering
@dataclass(frozen=True)
class ComponentID:
    """Identifier of a component instance.

    Equality and ordering are defined on the structured form. Unnamed IDs
    sort before named ones of the same type, and positional names sort
    numerically.

    Attributes:
        type: Component type, e.g. ``otlp`` or ``tail_sampling``.
        name: Optional qualifier, e.g. ``lb`` or ``0``.

    Example:
        >>> str(ComponentID.indexed("otlp", 1))
        'otlp/1'
        >>> ComponentID.parse("otlp/lb")
        ComponentID(type='otlp', name='lb')
    """

    type: str
    name: str | None = None

    def __post_init__(self) -> None:
        if not self.type or SEPARATOR in self.type:
            raise ValueError(f"Invalid component type: {self.type!r}")
        if self.name is not None and not self.name:
            raise ValueError(f"Component '{self.type}' has an empty name")

    @classmethod
    def indexed(cls, type_: str, index: int) -> ComponentID:
        """Create the ID of the ``index``-th member of an ordered collection."""
        if index < 0:
            raise ValueError(f"Component index must be non-negative, got {index}")
        return cls(type_, str(index))

    @classmethod
    def parse(cls, value: str) -> ComponentID:
        """Parse a rendered ID such as ``jaeger`` or ``otlp/lb``."""
        type_, sep, name = value.strip().partition(SEPARATOR)
        return cls(type_.strip(), name.strip() if sep else None)

    @property
    def index(self) -> int | None:
        """The position encoded in the name, if it is one."""
        if self.name is not None and self.name.isdigit():
            return int(self.name)
        return None

    def _sort_key(self) -> tuple[str, int, int, str]:
        if self.name is None:
            return (self.type, 0, 0, "")
        index = self.index
        if index is not None:
            return (self.type, 1, index, "")
        return (self.type, 2, 0, self.name)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ComponentID):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        if self.name is None:
            return self.type
        return f"{self.type}{SEPARATOR}{self.name}"
