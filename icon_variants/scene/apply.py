"""Best-effort property writes.

Some nodes reject writes (read-only library content, invalid values).
Bulk edits such as restroking a whole icon must not stop at the first
rejection, so each write produces a ``WriteResult`` instead of raising.
Failures are logged at DEBUG and reported back to the caller, who
decides whether they matter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from icon_variants.scene.nodes import BaseNode, NodeWriteError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WriteResult:
    """Outcome of one property write."""

    node_id: str
    node_name: str
    prop: str
    ok: bool
    error: str | None = None


def try_set(node: BaseNode, prop: str, value: Any) -> WriteResult:
    """Set ``node.<prop> = value``, capturing rejections.

    Only write rejections (``NodeWriteError``) and invalid values
    (``ValueError`` / ``TypeError`` from the setter) are captured.
    """
    try:
        setattr(node, prop, value)
    except (NodeWriteError, ValueError, TypeError) as exc:
        logger.debug("Skipped %s=%r on %r: %s", prop, value, node, exc)
        return WriteResult(node.id, node.name, prop, ok=False, error=str(exc))
    return WriteResult(node.id, node.name, prop, ok=True)


def set_all(nodes: Iterable[BaseNode], prop: str, value: Any) -> list[WriteResult]:
    """Apply :func:`try_set` to every node; never raises on rejection."""
    results = [try_set(node, prop, value) for node in nodes]
    failed = sum(1 for result in results if not result.ok)
    if failed:
        logger.debug("%d of %d writes of %s were rejected", failed, len(results), prop)
    return results
