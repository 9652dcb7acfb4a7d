"""Processor ordering by fixed precedence."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable

logger = logging.getLogger(__name__)


class ProcessorKind(Enum):
    """Processor kinds, declared in pipeline precedence order."""

    ATTRIBUTES = "attributes"
    """Mutate span attributes before anything else sees them."""

    SPANMETRICS = "spanmetrics"
    """Derive metrics from every span, before sampling drops any."""

    TAIL_SAMPLING = "tail_sampling"
    """Keep or drop whole traces. Must see all spans of a trace."""

    AUTOMATIC_LOGGING = "automatic_logging"
    """Log sampled spans, processes and roots."""

    BATCH = "batch"
    """Batch spans right before export."""


PRECEDENCE: tuple[ProcessorKind, ...] = tuple(ProcessorKind)

# Everything from here on runs after spans were routed by trace ID.
SPLIT_BOUNDARY = ProcessorKind.TAIL_SAMPLING


def order_processors(
    processors: Iterable[ProcessorKind | str], split: bool = False
) -> list[list[ProcessorKind]]:
    """Order configured processors by precedence.

    Args:
        processors: Configured processor kinds, in any order.
        split: If True, partition the result right before tail_sampling.

    Returns:
        One ordered group, or two groups when ``split`` is set. Groups
        are always lists, possibly empty.

    Raises:
        ValueError: If a processor kind is unknown.

    Example:
        >>> order_processors(["batch", "attributes"])
        [[<ProcessorKind.ATTRIBUTES: 'attributes'>, <ProcessorKind.BATCH: 'batch'>]]
    """
    configured = {ProcessorKind(p) for p in processors}
    ordered = [kind for kind in PRECEDENCE if kind in configured]

    if not split:
        return [ordered]

    boundary = PRECEDENCE.index(SPLIT_BOUNDARY)
    before = [k for k in ordered if PRECEDENCE.index(k) < boundary]
    after = [k for k in ordered if PRECEDENCE.index(k) >= boundary]
    logger.debug(
        "Split processors at %s: %s | %s",
        SPLIT_BOUNDARY.value,
        [k.value for k in before],
        [k.value for k in after],
    )
    return [before, after]
