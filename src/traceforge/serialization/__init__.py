"""TraceForge serialization module."""

from traceforge.serialization.json_serializer import JSONSerializer
from traceforge.serialization.msgpack_serializer import MessagePackSerializer
from traceforge.serialization.protocols import Serializer
from traceforge.serialization.yaml_serializer import YAMLSerializer

__all__ = [
    "Serializer",
    "JSONSerializer",
    "MessagePackSerializer",
    "YAMLSerializer",
    "get_serializer",
]


def get_serializer(name: str) -> Serializer:
    """Get a serializer by name.

    Args:
        name: Serializer name ('yaml', 'json' or 'msgpack').

    Returns:
        Serializer instance.

    Raises:
        ValueError: If name is not recognized.

    Example:
        >>> serializer = get_serializer("yaml")
        >>> isinstance(serializer, YAMLSerializer)
        True
    """
    serializers: dict[str, type[Serializer]] = {
        "yaml": YAMLSerializer,
        "json": JSONSerializer,
        "msgpack": MessagePackSerializer,
    }

    if name not in serializers:
        raise ValueError(
            f"Unknown serializer '{name}'. Available: {list(serializers.keys())}"
        )

    return serializers[name]()
