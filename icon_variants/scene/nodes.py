"""Scene nodes -- a capability-typed model of the host document tree.

Every node category is a concrete class.  What a node can *do* is
declared by the capability mixins it inherits, so callers test for a
capability with ``isinstance`` instead of probing for attributes:

``ChildrenMixin``
    Holds an ordered list of child nodes.
``Rescalable``
    Supports proportional ``rescale()`` (geometry, strokes, corner radii
    and effects scale together, positions of descendants included).
``Stroked``
    Exposes ``strokes``, ``stroke_weight``, ``stroke_align``, ``dash_pattern``.
``Filled``
    Exposes ``fills``.
``ProportionLockable``
    Exposes ``constrain_proportions`` (aspect-ratio lock).
``Constrainable``
    Exposes resize ``constraints`` relative to the parent.
``AutoLayoutMixin``
    Flow layout of children with spacing, padding and hug sizing.

Coordinates
-----------
``x`` / ``y`` are relative to the parent node, top-left origin, +Y down.
``absolute_x`` / ``absolute_y`` accumulate ancestor offsets.

Read-only nodes
---------------
Nodes that belong to a remote library component are created with
``read_only=True``.  Any property write on them raises ``NodeWriteError``.
"""

from __future__ import annotations

import copy
import itertools
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Literal

from icon_variants.errors import IconVariantsError


class NodeWriteError(IconVariantsError):
    """Raised when a node rejects a property write."""

    pass


# ---------------------------------------------------------------------------
# Node categories
# ---------------------------------------------------------------------------


class NodeType(Enum):
    """Host node categories."""

    PAGE = "PAGE"
    FRAME = "FRAME"
    GROUP = "GROUP"
    COMPONENT = "COMPONENT"
    COMPONENT_SET = "COMPONENT_SET"
    INSTANCE = "INSTANCE"
    BOOLEAN_OPERATION = "BOOLEAN_OPERATION"
    VECTOR = "VECTOR"
    LINE = "LINE"
    STAR = "STAR"
    ELLIPSE = "ELLIPSE"
    POLYGON = "POLYGON"
    RECTANGLE = "RECTANGLE"
    TEXT = "TEXT"


DRAWABLE_TYPES = frozenset({
    NodeType.VECTOR,
    NodeType.LINE,
    NodeType.BOOLEAN_OPERATION,
    NodeType.STAR,
    NodeType.ELLIPSE,
    NodeType.POLYGON,
    NodeType.RECTANGLE,
})
"""Node types that hold fill/stroke geometry directly."""


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Color:
    """RGB color, each channel in [0, 1]."""

    r: float
    g: float
    b: float

    def __post_init__(self) -> None:
        for channel in ("r", "g", "b"):
            value = getattr(self, channel)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Color channel {channel} must be in [0, 1], got {value}")


@dataclass(frozen=True, slots=True)
class SolidPaint:
    """Solid fill or stroke paint."""

    color: Color
    opacity: float = 1.0
    visible: bool = True


BLACK = SolidPaint(Color(0.0, 0.0, 0.0))


@dataclass(frozen=True, slots=True)
class Constraints:
    """Resize behavior of a node when its parent is resized."""

    horizontal: Literal["MIN", "MAX", "CENTER", "STRETCH", "SCALE"] = "MIN"
    vertical: Literal["MIN", "MAX", "CENTER", "STRETCH", "SCALE"] = "MIN"

    def __post_init__(self) -> None:
        allowed = ("MIN", "MAX", "CENTER", "STRETCH", "SCALE")
        if self.horizontal not in allowed or self.vertical not in allowed:
            raise ValueError(
                f"Constraints must be one of {allowed}, "
                f"got ({self.horizontal!r}, {self.vertical!r})"
            )


SCALE_CONSTRAINTS = Constraints("SCALE", "SCALE")


@dataclass(frozen=True, slots=True)
class Effect:
    """Shadow or blur effect.  Radius, offset and spread are in px."""

    type: Literal["DROP_SHADOW", "INNER_SHADOW", "LAYER_BLUR", "BACKGROUND_BLUR"]
    radius: float
    offset: tuple[float, float] = (0.0, 0.0)
    spread: float = 0.0

    def scaled(self, factor: float) -> Effect:
        return Effect(
            type=self.type,
            radius=self.radius * factor,
            offset=(self.offset[0] * factor, self.offset[1] * factor),
            spread=self.spread * factor,
        )


@dataclass(frozen=True, slots=True)
class VectorPath:
    """One sub-path of a vector node, in node-local coordinates.

    Parameters
    ----------
    points : tuple[tuple[float, float], ...]
        Ordered vertices.  Must contain >= 2 points.
    closed : bool
        Closed paths are filled regions, open paths are strokes only.
    """

    points: tuple[tuple[float, float], ...]
    closed: bool = True

    def __post_init__(self) -> None:
        if len(self.points) < 2:
            raise ValueError(f"VectorPath requires >= 2 points, got {len(self.points)}")

    def scaled(self, factor: float) -> VectorPath:
        return VectorPath(
            tuple((x * factor, y * factor) for x, y in self.points), self.closed
        )

    def translated(self, dx: float, dy: float) -> VectorPath:
        return VectorPath(tuple((x + dx, y + dy) for x, y in self.points), self.closed)


# ---------------------------------------------------------------------------
# Property helpers
# ---------------------------------------------------------------------------

_ids = itertools.count(1)


def _next_id() -> str:
    return f"1:{next(_ids)}"


def _non_negative(value: Any) -> float:
    value = float(value)
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"Expected a finite value >= 0, got {value}")
    return value


def _choice(*options: str) -> Callable[[Any], str]:
    def coerce(value: Any) -> str:
        if value not in options:
            raise ValueError(f"Expected one of {options}, got {value!r}")
        return value
    return coerce


def _constraints_value(value: Any) -> Constraints:
    if not isinstance(value, Constraints):
        raise TypeError(f"Expected Constraints, got {type(value).__name__}")
    return value


def _node_property(
    attr: str,
    coerce: Callable[[Any], Any],
    *,
    relayout: bool = False,
    doc: str | None = None,
) -> property:
    """Build a property whose setter honours ``read_only``."""

    def getter(self: BaseNode) -> Any:
        return getattr(self, attr)

    def setter(self: BaseNode, value: Any) -> None:
        self._check_writable(attr.lstrip("_"))
        setattr(self, attr, coerce(value))
        if relayout:
            self._relayout()

    return property(getter, setter, doc=doc)


# ---------------------------------------------------------------------------
# Base classes
# ---------------------------------------------------------------------------


class BaseNode:
    """Identity, name and parent link shared by every node."""

    type: NodeType

    def __init__(self, *, name: str = "", read_only: bool = False) -> None:
        self.id = _next_id()
        self._name = name or self.type.value.replace("_", " ").title()
        self.parent: ChildrenMixin | None = None
        self.read_only = read_only

    name = _node_property("_name", str)

    def _check_writable(self, prop: str) -> None:
        if self.read_only:
            raise NodeWriteError(
                f"Cannot set '{prop}' on read-only node {self.name!r} ({self.id})"
            )

    def remove(self) -> None:
        """Detach this node from its parent."""
        if self.parent is not None:
            self.parent._detach_child(self)

    def _copy(self) -> BaseNode:
        dup = copy.copy(self)
        dup.id = _next_id()
        dup.parent = None
        return dup

    def _scale_contents(self, factor: float) -> None:
        pass

    def _relayout(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id} {self.name!r}>"


class SceneNode(BaseNode):
    """A node placed on a page: position, size, visibility, effects."""

    def __init__(
        self,
        *,
        x: float = 0.0,
        y: float = 0.0,
        width: float = 0.0,
        height: float = 0.0,
        visible: bool = True,
        effects: Iterable[Effect] = (),
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._x = float(x)
        self._y = float(y)
        self._width = _non_negative(width)
        self._height = _non_negative(height)
        self._visible = bool(visible)
        self._effects = tuple(effects)

    x = _node_property("_x", float)
    y = _node_property("_y", float)
    visible = _node_property("_visible", bool, doc="Hidden nodes are skipped by flatten.")
    effects = _node_property("_effects", tuple)

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def absolute_x(self) -> float:
        parent = self.parent
        return self._x + (parent.absolute_x if isinstance(parent, SceneNode) else 0.0)

    @property
    def absolute_y(self) -> float:
        parent = self.parent
        return self._y + (parent.absolute_y if isinstance(parent, SceneNode) else 0.0)

    def resize_without_constraints(self, width: float, height: float) -> None:
        """Set the size without touching children."""
        self._check_writable("size")
        self._width = _non_negative(width)
        self._height = _non_negative(height)
        self._relayout()
        self._notify_parent_layout()

    def clone(self) -> SceneNode:
        """Deep copy of this subtree with fresh ids and no parent."""
        return self._copy()

    def _scale_contents(self, factor: float) -> None:
        self._width *= factor
        self._height *= factor
        self._effects = tuple(effect.scaled(factor) for effect in self._effects)

    def _notify_parent_layout(self) -> None:
        if self.parent is not None:
            self.parent._relayout()


# ---------------------------------------------------------------------------
# Capabilities
# ---------------------------------------------------------------------------


class ChildrenMixin:
    """Ordered children container."""

    def __init__(self, *, children: Iterable[SceneNode] = (), **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._children: list[SceneNode] = []
        for child in children:
            self.append_child(child)

    @property
    def children(self) -> tuple[SceneNode, ...]:
        return tuple(self._children)

    def append_child(self, child: SceneNode) -> None:
        self.insert_child(len(self._children), child)

    def insert_child(self, index: int, child: SceneNode) -> None:
        """Insert *child* at *index*, moving it out of its current parent."""
        self._check_writable("children")
        node: BaseNode | None = self
        while node is not None:
            if node is child:
                raise ValueError(f"Cannot insert {child!r} into its own subtree")
            node = node.parent
        if child.parent is not None:
            child.parent._detach_child(child)
        child.parent = self
        self._children.insert(index, child)
        self._relayout()

    def index_of(self, child: SceneNode) -> int:
        return self._children.index(child)

    def _detach_child(self, child: SceneNode) -> None:
        self._children.remove(child)
        child.parent = None
        self._relayout()

    def _copy(self) -> BaseNode:
        dup = super()._copy()
        dup._children = []
        for child in self._children:
            child_copy = child._copy()
            child_copy.parent = dup
            dup._children.append(child_copy)
        return dup

    def _scale_contents(self, factor: float) -> None:
        super()._scale_contents(factor)
        for child in self._children:
            child._x *= factor
            child._y *= factor
            child._scale_contents(factor)
        self._relayout()


class Rescalable:
    """Proportional rescale capability."""

    def rescale(self, scale: float) -> None:
        """Scale geometry, strokes and effects uniformly by *scale*.

        The node keeps its own position; descendants are scaled about
        the node's top-left corner.
        """
        self._check_writable("rescale")
        scale = float(scale)
        if not math.isfinite(scale) or scale <= 0:
            raise ValueError(f"Rescale factor must be finite and > 0, got {scale}")
        self._scale_contents(scale)
        self._notify_parent_layout()


class Filled:
    """Fill paints."""

    def __init__(self, *, fills: Iterable[SolidPaint] = (), **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._fills = tuple(fills)

    fills = _node_property("_fills", tuple)


class Stroked:
    """Stroke paints and stroke geometry settings."""

    def __init__(
        self,
        *,
        strokes: Iterable[SolidPaint] = (),
        stroke_weight: float = 1.0,
        stroke_align: str = "CENTER",
        dash_pattern: Iterable[float] = (),
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._strokes = tuple(strokes)
        self._stroke_weight = _non_negative(stroke_weight)
        self._stroke_align = _choice("CENTER", "INSIDE", "OUTSIDE")(stroke_align)
        self._dash_pattern = tuple(float(v) for v in dash_pattern)

    strokes = _node_property("_strokes", tuple)
    stroke_weight = _node_property("_stroke_weight", _non_negative)
    stroke_align = _node_property("_stroke_align", _choice("CENTER", "INSIDE", "OUTSIDE"))
    dash_pattern = _node_property(
        "_dash_pattern", lambda v: tuple(_non_negative(x) for x in v)
    )

    def _scale_contents(self, factor: float) -> None:
        super()._scale_contents(factor)
        self._stroke_weight *= factor


class CornerMixin:
    """Uniform corner radius."""

    def __init__(self, *, corner_radius: float = 0.0, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._corner_radius = _non_negative(corner_radius)

    corner_radius = _node_property("_corner_radius", _non_negative)

    def _scale_contents(self, factor: float) -> None:
        super()._scale_contents(factor)
        self._corner_radius *= factor


class ProportionLockable:
    """Aspect-ratio lock."""

    def __init__(self, *, constrain_proportions: bool = False, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._constrain_proportions = bool(constrain_proportions)

    constrain_proportions = _node_property("_constrain_proportions", bool)


class Constrainable:
    """Resize constraints relative to the parent."""

    def __init__(self, *, constraints: Constraints = Constraints(), **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._constraints = constraints

    constraints = _node_property("_constraints", _constraints_value)


class AutoLayoutMixin:
    """Flow layout of children (requires ``ChildrenMixin``).

    ``layout_mode`` ``"NONE"`` leaves children where they are.  In
    ``"HORIZONTAL"`` / ``"VERTICAL"`` mode children are placed one after
    another along the primary axis with ``item_spacing`` between them,
    aligned on the counter axis per ``counter_axis_align_items``.  An
    ``"AUTO"`` sizing mode makes the node hug its content on that axis.
    """

    _layout_mode = "NONE"
    _item_spacing = 0.0
    _padding_left = 0.0
    _padding_right = 0.0
    _padding_top = 0.0
    _padding_bottom = 0.0
    _primary_axis_sizing_mode = "AUTO"
    _counter_axis_sizing_mode = "AUTO"
    _counter_axis_align_items = "MIN"

    layout_mode = _node_property(
        "_layout_mode", _choice("NONE", "HORIZONTAL", "VERTICAL"), relayout=True
    )
    item_spacing = _node_property("_item_spacing", _non_negative, relayout=True)
    padding_left = _node_property("_padding_left", _non_negative, relayout=True)
    padding_right = _node_property("_padding_right", _non_negative, relayout=True)
    padding_top = _node_property("_padding_top", _non_negative, relayout=True)
    padding_bottom = _node_property("_padding_bottom", _non_negative, relayout=True)
    primary_axis_sizing_mode = _node_property(
        "_primary_axis_sizing_mode", _choice("FIXED", "AUTO"), relayout=True
    )
    counter_axis_sizing_mode = _node_property(
        "_counter_axis_sizing_mode", _choice("FIXED", "AUTO"), relayout=True
    )
    counter_axis_align_items = _node_property(
        "_counter_axis_align_items", _choice("MIN", "CENTER", "MAX"), relayout=True
    )

    def _scale_contents(self, factor: float) -> None:
        super()._scale_contents(factor)
        self._item_spacing *= factor
        self._padding_left *= factor
        self._padding_right *= factor
        self._padding_top *= factor
        self._padding_bottom *= factor

    def _relayout(self) -> None:
        if self._layout_mode == "NONE":
            return
        horizontal = self._layout_mode == "HORIZONTAL"
        kids = [child for child in self._children if child.visible]

        if horizontal:
            main_start, main_end = self._padding_left, self._padding_right
            cross_start, cross_end = self._padding_top, self._padding_bottom
        else:
            main_start, main_end = self._padding_top, self._padding_bottom
            cross_start, cross_end = self._padding_left, self._padding_right

        def main_size(node: SceneNode) -> float:
            return node.width if horizontal else node.height

        def cross_size(node: SceneNode) -> float:
            return node.height if horizontal else node.width

        if self._counter_axis_sizing_mode == "AUTO":
            cross_inner = max((cross_size(child) for child in kids), default=0.0)
        else:
            cross_inner = max(cross_size(self) - cross_start - cross_end, 0.0)

        cursor = main_start
        for child in kids:
            if self._counter_axis_align_items == "MIN":
                offset = cross_start
            elif self._counter_axis_align_items == "CENTER":
                offset = cross_start + (cross_inner - cross_size(child)) / 2.0
            else:
                offset = cross_start + cross_inner - cross_size(child)
            if horizontal:
                child._x, child._y = cursor, offset
            else:
                child._x, child._y = offset, cursor
            cursor += main_size(child) + self._item_spacing

        main_total = (cursor - self._item_spacing if kids else cursor) + main_end
        cross_total = cross_inner + cross_start + cross_end

        if self._primary_axis_sizing_mode == "AUTO":
            if horizontal:
                self._width = main_total
            else:
                self._height = main_total
        if self._counter_axis_sizing_mode == "AUTO":
            if horizontal:
                self._height = cross_total
            else:
                self._width = cross_total


# ---------------------------------------------------------------------------
# Concrete node types
# ---------------------------------------------------------------------------


class PageNode(ChildrenMixin, BaseNode):
    """Top-level canvas.  Holds the current selection."""

    type = NodeType.PAGE

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._selection: tuple[SceneNode, ...] = ()

    @property
    def selection(self) -> tuple[SceneNode, ...]:
        return self._selection

    @selection.setter
    def selection(self, nodes: Iterable[SceneNode]) -> None:
        self._selection = tuple(nodes)


class FrameNode(
    ChildrenMixin,
    AutoLayoutMixin,
    Filled,
    Stroked,
    CornerMixin,
    Rescalable,
    ProportionLockable,
    Constrainable,
    SceneNode,
):
    type = NodeType.FRAME

    def __init__(self, *, clips_content: bool = True, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._clips_content = bool(clips_content)

    clips_content = _node_property("_clips_content", bool)


class ComponentNode(FrameNode):
    type = NodeType.COMPONENT


class InstanceNode(FrameNode):
    """Linked copy of a component.  ``detach_instance`` breaks the link."""

    type = NodeType.INSTANCE

    def __init__(self, *, main_component: ComponentNode | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._main_component = main_component

    @property
    def main_component(self) -> ComponentNode | None:
        return self._main_component

    def detach_instance(self) -> FrameNode:
        """Replace this instance with an equivalent, unlinked frame.

        The frame takes the instance's place in its parent and adopts its
        children.  The instance is left empty and parentless.
        """
        self._check_writable("detach")
        frame = FrameNode.__new__(FrameNode)
        state = dict(vars(self))
        state.pop("_main_component")
        vars(frame).update(state)
        frame.id = _next_id()
        for child in frame._children:
            child.parent = frame

        parent = self.parent
        if parent is not None:
            parent._children[parent.index_of(self)] = frame
        self.parent = None
        self._children = []
        return frame


class ComponentSetNode(
    ChildrenMixin,
    AutoLayoutMixin,
    Filled,
    Stroked,
    CornerMixin,
    SceneNode,
):
    """Variant container.  Children are components named ``Prop=Value``."""

    type = NodeType.COMPONENT_SET

    @property
    def variant_group_properties(self) -> dict[str, list[str]]:
        """Map each variant property to its values, in child order."""
        props: dict[str, list[str]] = {}
        for child in self._children:
            for key, value in parse_variant_name(child.name).items():
                values = props.setdefault(key, [])
                if value not in values:
                    values.append(value)
        return props

    @property
    def default_variant(self) -> SceneNode | None:
        return self._children[0] if self._children else None


class GroupNode(ChildrenMixin, Rescalable, ProportionLockable, SceneNode):
    type = NodeType.GROUP


class BooleanOperationNode(
    ChildrenMixin,
    Filled,
    Stroked,
    Rescalable,
    ProportionLockable,
    Constrainable,
    SceneNode,
):
    type = NodeType.BOOLEAN_OPERATION

    def __init__(
        self,
        *,
        boolean_operation: str = "UNION",
        fills: Iterable[SolidPaint] = (BLACK,),
        **kwargs: Any,
    ) -> None:
        super().__init__(fills=fills, **kwargs)
        self._boolean_operation = _choice("UNION", "SUBTRACT", "INTERSECT", "EXCLUDE")(
            boolean_operation
        )

    boolean_operation = _node_property(
        "_boolean_operation", _choice("UNION", "SUBTRACT", "INTERSECT", "EXCLUDE")
    )


class _ShapeNode(Filled, Stroked, Rescalable, ProportionLockable, Constrainable, SceneNode):
    """Leaf with its own geometry."""

    def __init__(self, *, fills: Iterable[SolidPaint] = (BLACK,), **kwargs: Any) -> None:
        super().__init__(fills=fills, **kwargs)


class RectangleNode(CornerMixin, _ShapeNode):
    type = NodeType.RECTANGLE


class EllipseNode(_ShapeNode):
    type = NodeType.ELLIPSE


class PolygonNode(_ShapeNode):
    """Regular polygon inscribed in the node's bounds."""

    type = NodeType.POLYGON

    def __init__(self, *, point_count: int = 3, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if int(point_count) < 3:
            raise ValueError(f"Polygon point_count must be >= 3, got {point_count}")
        self._point_count = int(point_count)

    @property
    def point_count(self) -> int:
        return self._point_count


class StarNode(_ShapeNode):
    """Star inscribed in the node's bounds; ``inner_radius`` is a ratio."""

    type = NodeType.STAR

    def __init__(self, *, point_count: int = 5, inner_radius: float = 0.382, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if int(point_count) < 3:
            raise ValueError(f"Star point_count must be >= 3, got {point_count}")
        if not 0.0 < inner_radius <= 1.0:
            raise ValueError(f"Star inner_radius must be in (0, 1], got {inner_radius}")
        self._point_count = int(point_count)
        self._inner_radius = float(inner_radius)

    @property
    def point_count(self) -> int:
        return self._point_count

    @property
    def inner_radius(self) -> float:
        return self._inner_radius


class LineNode(_ShapeNode):
    """Horizontal segment from (0, 0) to (width, 0).  Stroke only."""

    type = NodeType.LINE

    def __init__(
        self,
        *,
        fills: Iterable[SolidPaint] = (),
        strokes: Iterable[SolidPaint] = (BLACK,),
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("height", 0.0)
        super().__init__(fills=fills, strokes=strokes, **kwargs)


class VectorNode(_ShapeNode):
    """Free-form paths in node-local coordinates."""

    type = NodeType.VECTOR

    def __init__(self, *, vector_paths: Iterable[VectorPath] = (), **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._vector_paths = tuple(vector_paths)

    vector_paths = _node_property("_vector_paths", tuple)

    def _scale_contents(self, factor: float) -> None:
        super()._scale_contents(factor)
        self._vector_paths = tuple(path.scaled(factor) for path in self._vector_paths)


class TextNode(_ShapeNode):
    """Text layer.  Not drawable: it carries glyphs, not path geometry."""

    type = NodeType.TEXT

    def __init__(self, *, characters: str = "", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._characters = characters

    characters = _node_property("_characters", str)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def is_drawable(node: BaseNode) -> bool:
    """Return ``True`` if *node* holds fill/stroke geometry directly."""
    return node.type in DRAWABLE_TYPES


def parse_variant_name(name: str) -> dict[str, str]:
    """Parse ``"Size=16px, Theme=Dark"`` into ``{"Size": "16px", "Theme": "Dark"}``.

    Segments without ``=`` are ignored.
    """
    props: dict[str, str] = {}
    for segment in name.split(","):
        key, sep, value = segment.partition("=")
        if sep and key.strip():
            props[key.strip()] = value.strip()
    return props
