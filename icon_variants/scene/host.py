"""Host boundary -- the editor operations the generator relies on.

``Host`` lists what the generator needs from a design editor: a current
page with a selection, a viewport, a notification banner, a message
channel to the plugin UI, and four structural operations
(``create_component``, ``flatten``, ``combine_as_variants``,
``show_ui``).  Node-level operations (``clone``, ``detach_instance``,
``rescale``) live on the node classes themselves.

``Document`` is the in-memory implementation used headless and in tests.
Its flatten is geometric: every drawable node of the subtree is outlined
(fills ∪ stroked outlines, clipped by clipping frames) and the union is
stored as the paths of a single ``VectorNode``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from shapely import affinity
from shapely.geometry import box
from shapely.ops import unary_union

from icon_variants.errors import IconVariantsError
from icon_variants.scene.geometry import outlined_region, region_to_paths
from icon_variants.scene.nodes import (
    BLACK,
    BaseNode,
    BooleanOperationNode,
    ChildrenMixin,
    Color,
    ComponentNode,
    ComponentSetNode,
    Filled,
    FrameNode,
    PageNode,
    SceneNode,
    SolidPaint,
    Stroked,
    VectorNode,
    is_drawable,
)
from icon_variants.scene.traversal import contains, walk

logger = logging.getLogger(__name__)


class FlattenError(IconVariantsError):
    """Raised when a set of nodes cannot be merged into one vector."""

    pass


class VariantConflictError(IconVariantsError):
    """Raised when components cannot be combined into one variant set."""

    pass


# ---------------------------------------------------------------------------
# UI-facing pieces
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Notification:
    """A transient banner shown by the host."""

    message: str
    error: bool = False


class UiChannel:
    """Message channel between the plugin and its UI panel.

    ``post_message`` queues a plugin → UI message in ``outbox``.
    ``receive`` delivers a UI → plugin message to ``on_message``.
    """

    def __init__(self) -> None:
        self.outbox: list[dict[str, Any]] = []
        self.on_message: Callable[[dict[str, Any]], None] | None = None
        self.size: tuple[int, int] | None = None

    @property
    def visible(self) -> bool:
        return self.size is not None

    def post_message(self, message: dict[str, Any]) -> None:
        self.outbox.append(message)

    def receive(self, payload: dict[str, Any]) -> None:
        if self.on_message is None:
            logger.warning("UI message dropped, no handler registered: %r", payload)
            return
        self.on_message(payload)


class Viewport:
    """Visible canvas area: a center point and a zoom factor."""

    def __init__(self, width: float = 1440.0, height: float = 900.0) -> None:
        self.width = width
        self.height = height
        self.center: tuple[float, float] = (0.0, 0.0)
        self.zoom = 1.0

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """Visible canvas rectangle ``(x0, y0, x1, y1)``."""
        half_w = self.width / self.zoom / 2.0
        half_h = self.height / self.zoom / 2.0
        cx, cy = self.center
        return (cx - half_w, cy - half_h, cx + half_w, cy + half_h)

    def scroll_and_zoom_into_view(self, nodes: Iterable[SceneNode]) -> None:
        """Center on the nodes and zoom so all of them fit."""
        nodes = list(nodes)
        if not nodes:
            return
        x0 = min(node.absolute_x for node in nodes)
        y0 = min(node.absolute_y for node in nodes)
        x1 = max(node.absolute_x + node.width for node in nodes)
        y1 = max(node.absolute_y + node.height for node in nodes)
        self.center = ((x0 + x1) / 2.0, (y0 + y1) / 2.0)
        fit = min(self.width / max(x1 - x0, 1.0), self.height / max(y1 - y0, 1.0))
        self.zoom = min(max(fit, 0.01), 256.0)


# ---------------------------------------------------------------------------
# Host interface
# ---------------------------------------------------------------------------


class Host(ABC):
    """Operations the generator needs from the design editor."""

    current_page: PageNode
    viewport: Viewport
    ui: UiChannel

    @abstractmethod
    def show_ui(self, width: int, height: int) -> None:
        """Open the plugin UI panel."""

    @abstractmethod
    def notify(self, message: str, *, error: bool = False) -> None:
        """Show a transient banner."""

    @abstractmethod
    def create_component(self) -> ComponentNode:
        """Create an empty component on the current page."""

    @abstractmethod
    def flatten(
        self, nodes: Iterable[SceneNode], parent: ChildrenMixin | None = None
    ) -> VectorNode:
        """Merge *nodes* into one vector inside *parent*.

        Raises ``FlattenError`` when the nodes cannot be merged.
        """

    @abstractmethod
    def combine_as_variants(
        self, components: Iterable[ComponentNode], parent: ChildrenMixin
    ) -> ComponentSetNode:
        """Group components into a variant set appended to *parent*.

        Raises ``VariantConflictError`` for duplicate variant names.
        """


# ---------------------------------------------------------------------------
# In-memory implementation
# ---------------------------------------------------------------------------

WHITE = SolidPaint(Color(1.0, 1.0, 1.0))


def _origin(node: BaseNode) -> tuple[float, float]:
    if isinstance(node, SceneNode):
        return node.absolute_x, node.absolute_y
    return 0.0, 0.0


class Document(Host):
    """In-memory host holding a single page.

    Parameters
    ----------
    page_name : str
        Name of the current page.
    viewport_size : tuple[float, float]
        Viewport size in screen px.
    """

    def __init__(
        self,
        page_name: str = "Page 1",
        viewport_size: tuple[float, float] = (1440.0, 900.0),
    ) -> None:
        self.current_page = PageNode(name=page_name)
        self.viewport = Viewport(*viewport_size)
        self.ui = UiChannel()
        self.notifications: list[Notification] = []

    def show_ui(self, width: int, height: int) -> None:
        self.ui.size = (int(width), int(height))
        logger.debug("UI shown at %dx%d", width, height)

    def notify(self, message: str, *, error: bool = False) -> None:
        self.notifications.append(Notification(message, error))
        logger.info("Notification: %s", message)

    def create_component(self) -> ComponentNode:
        component = ComponentNode(name="Component", width=100.0, height=100.0, fills=(WHITE,))
        self.current_page.append_child(component)
        return component

    # -- flatten -----------------------------------------------------------

    def flatten(
        self, nodes: Iterable[SceneNode], parent: ChildrenMixin | None = None
    ) -> VectorNode:
        nodes = list(nodes)
        if not nodes:
            raise FlattenError("Nothing to flatten")
        if parent is None:
            parent = nodes[0].parent
        if parent is None:
            raise FlattenError("Flatten target has no parent")
        if parent.read_only:
            raise FlattenError(f"Cannot flatten into read-only node {parent!r}")

        sources: list[SceneNode] = []
        for node in nodes:
            if contains(node, lambda n: n.read_only):
                raise FlattenError(f"{node!r} contains read-only nodes")
            sources.extend(
                walk(
                    node,
                    lambda n: n.visible and is_drawable(n),
                    descend=lambda n: n.visible and not isinstance(n, BooleanOperationNode),
                )
            )
        if not sources:
            raise FlattenError(f"No drawable geometry in {nodes!r}")

        ox, oy = _origin(parent)
        regions = [self._placed_region(source, parent, ox, oy) for source in sources]
        merged = unary_union([region for region in regions if not region.is_empty])

        if merged.is_empty:
            x0, y0, x1, y1 = nodes[0].x, nodes[0].y, nodes[0].x, nodes[0].y
        else:
            x0, y0, x1, y1 = merged.bounds

        vector = VectorNode(
            name="Vector",
            x=x0,
            y=y0,
            width=x1 - x0,
            height=y1 - y0,
            vector_paths=region_to_paths(merged, -x0, -y0),
            fills=(self._flattened_paint(sources),),
            strokes=(),
            stroke_weight=max(
                (s.stroke_weight for s in sources if isinstance(s, Stroked)), default=1.0
            ),
        )

        index = parent.index_of(nodes[0]) if nodes[0].parent is parent else len(parent.children)
        for node in nodes:
            node.remove()
        parent.insert_child(min(index, len(parent.children)), vector)
        logger.debug("Flattened %d drawable nodes into %r", len(sources), vector)
        return vector

    @staticmethod
    def _placed_region(source: SceneNode, parent: ChildrenMixin, ox: float, oy: float):
        """Outlined region of *source* in *parent* coordinates, clipped by frames."""
        region = affinity.translate(
            outlined_region(source), source.absolute_x - ox, source.absolute_y - oy
        )
        ancestor = source.parent
        while ancestor is not None and ancestor is not parent:
            if isinstance(ancestor, FrameNode) and ancestor.clips_content:
                ax, ay = ancestor.absolute_x - ox, ancestor.absolute_y - oy
                region = region.intersection(box(ax, ay, ax + ancestor.width, ay + ancestor.height))
            ancestor = ancestor.parent
        return region

    @staticmethod
    def _flattened_paint(sources: list[SceneNode]) -> SolidPaint:
        """Paint of the merged vector: first visible fill, else first stroke."""
        for source in sources:
            if isinstance(source, Filled):
                for paint in source.fills:
                    if paint.visible:
                        return paint
        for source in sources:
            if isinstance(source, Stroked):
                for paint in source.strokes:
                    if paint.visible:
                        return paint
        return BLACK

    # -- variants ------------------------------------------------------------

    def combine_as_variants(
        self, components: Iterable[ComponentNode], parent: ChildrenMixin
    ) -> ComponentSetNode:
        components = list(components)
        if not components:
            raise VariantConflictError("At least one component is required")
        for component in components:
            if not isinstance(component, ComponentNode):
                raise VariantConflictError(f"{component!r} is not a component")

        names = [component.name for component in components]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise VariantConflictError(f"Duplicate variant names: {duplicates}")

        ox, oy = _origin(parent)
        x0 = min(c.absolute_x for c in components) - ox
        y0 = min(c.absolute_y for c in components) - oy
        x1 = max(c.absolute_x + c.width for c in components) - ox
        y1 = max(c.absolute_y + c.height for c in components) - oy

        component_set = ComponentSetNode(
            name="Component Set", x=x0, y=y0, width=x1 - x0, height=y1 - y0
        )
        parent.append_child(component_set)
        for component in components:
            local_x = component.absolute_x - ox - x0
            local_y = component.absolute_y - oy - y0
            component_set.append_child(component)
            component.x, component.y = local_x, local_y
        logger.debug("Combined %d components into %r", len(components), component_set)
        return component_set
