"""
Scene graph model and host boundary.

Defines the capability-typed node tree, its geometry, traversal and
best-effort writes, and the host operations (flatten, combine as
variants, viewport, notifications) the generator runs against.

All positions and sizes are in px, parent-relative, top-left origin.
"""

from icon_variants.scene.apply import WriteResult, set_all, try_set
from icon_variants.scene.host import (
    Document,
    FlattenError,
    Host,
    Notification,
    UiChannel,
    VariantConflictError,
    Viewport,
)
from icon_variants.scene.nodes import (
    BLACK,
    DRAWABLE_TYPES,
    SCALE_CONSTRAINTS,
    BooleanOperationNode,
    ChildrenMixin,
    Color,
    ComponentNode,
    ComponentSetNode,
    Constrainable,
    Constraints,
    Effect,
    EllipseNode,
    Filled,
    FrameNode,
    GroupNode,
    InstanceNode,
    LineNode,
    NodeType,
    NodeWriteError,
    PageNode,
    PolygonNode,
    ProportionLockable,
    Rescalable,
    RectangleNode,
    SceneNode,
    SolidPaint,
    StarNode,
    Stroked,
    TextNode,
    VectorNode,
    VectorPath,
    is_drawable,
)
from icon_variants.scene.traversal import contains, find_first, walk

__all__ = [
    "BLACK",
    "DRAWABLE_TYPES",
    "SCALE_CONSTRAINTS",
    "BooleanOperationNode",
    "ChildrenMixin",
    "Color",
    "ComponentNode",
    "ComponentSetNode",
    "Constrainable",
    "Constraints",
    "Document",
    "Effect",
    "EllipseNode",
    "Filled",
    "FlattenError",
    "FrameNode",
    "GroupNode",
    "Host",
    "InstanceNode",
    "LineNode",
    "NodeType",
    "NodeWriteError",
    "Notification",
    "PageNode",
    "PolygonNode",
    "ProportionLockable",
    "RectangleNode",
    "Rescalable",
    "SceneNode",
    "SolidPaint",
    "StarNode",
    "Stroked",
    "TextNode",
    "UiChannel",
    "VariantConflictError",
    "VectorNode",
    "VectorPath",
    "Viewport",
    "WriteResult",
    "contains",
    "find_first",
    "is_drawable",
    "set_all",
    "try_set",
    "walk",
]
