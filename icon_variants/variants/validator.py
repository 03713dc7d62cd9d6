"""Selection eligibility.

An icon qualifies for variant generation when it is a frame, component,
instance or group, is square with a positive edge, and contains
something drawable.
Ineligible nodes are skipped quietly; the caller decides whether an empty
result is an error.
"""

from __future__ import annotations

import logging
from typing import Iterable

from icon_variants.scene.nodes import NodeType, SceneNode, is_drawable
from icon_variants.scene.traversal import contains

logger = logging.getLogger(__name__)

SUPPORTED_SELECTION_TYPES = frozenset({
    NodeType.FRAME,
    NodeType.COMPONENT,
    NodeType.INSTANCE,
    NodeType.GROUP,
})

SQUARE_TOLERANCE = 0.01


def is_supported_selection(node: SceneNode) -> bool:
    return node.type in SUPPORTED_SELECTION_TYPES


def is_square(node: SceneNode, tolerance: float = SQUARE_TOLERANCE) -> bool:
    return abs(node.width - node.height) < tolerance


def has_area(node: SceneNode) -> bool:
    return node.width > 0 and node.height > 0


def has_drawable_descendant(node: SceneNode) -> bool:
    """``True`` if *node* or any descendant is drawable."""
    return contains(node, is_drawable)


def is_eligible(node: SceneNode, tolerance: float = SQUARE_TOLERANCE) -> bool:
    if not is_supported_selection(node):
        logger.debug("Skipping %r: unsupported type %s", node, node.type.value)
        return False
    if not is_square(node, tolerance):
        logger.debug("Skipping %r: %gx%g is not square", node, node.width, node.height)
        return False
    if not has_area(node):
        logger.debug("Skipping %r: zero size", node)
        return False
    if not has_drawable_descendant(node):
        logger.debug("Skipping %r: no drawable layers", node)
        return False
    return True


def filter_eligible(
    nodes: Iterable[SceneNode], tolerance: float = SQUARE_TOLERANCE
) -> list[SceneNode]:
    """Eligible nodes, in input order."""
    return [node for node in nodes if is_eligible(node, tolerance)]
