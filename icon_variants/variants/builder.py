"""Variant builder -- one source icon + one size → one finished component.

Pipeline per variant:
    1. Clone the source; detach the clone if it is an instance.
    2. Create a ``size × size`` component, no fill, clipping on.
    3. Move the clone into the component.
    4. Rescale proportionally by ``size / base_size`` (skipped at 1).
    5. Optionally restroke every stroked node (best effort).
    6. Center the content.
    7. Flatten into one outlined ``vector`` scaling with its parent;
       if flattening is impossible, keep the children and name each
       ``vector`` instead.
    8. Lock proportions on the component and every descendant.

Nothing in steps 4-8 raises: rejected writes and failed flattens are
logged and the variant is finished in a degraded form.
"""

from __future__ import annotations

import logging

from icon_variants.scene.apply import WriteResult, set_all, try_set
from icon_variants.scene.host import FlattenError, Host
from icon_variants.scene.nodes import (
    SCALE_CONSTRAINTS,
    BaseNode,
    ComponentNode,
    Constrainable,
    InstanceNode,
    NodeWriteError,
    ProportionLockable,
    Rescalable,
    SceneNode,
    Stroked,
)
from icon_variants.scene.traversal import walk
from icon_variants.variants.models import VariantConfig
from icon_variants.variants.sanitizer import round_half_up

logger = logging.getLogger(__name__)

FLATTENED_NAME = "vector"


def compute_scale(size_px: int, base_size: float) -> float:
    """Scale factor taking a ``base_size`` icon to ``size_px``."""
    if base_size <= 0:
        raise ValueError(f"base_size must be > 0, got {base_size}")
    return size_px / base_size


def clone_detached(source: SceneNode) -> SceneNode:
    """Clone *source*; an instance clone is detached from its component."""
    clone = source.clone()
    if isinstance(clone, InstanceNode):
        try:
            return clone.detach_instance()
        except NodeWriteError as exc:
            logger.warning("Could not detach %r, keeping it linked: %s", clone, exc)
    return clone


def rescale_content(node: SceneNode, scale: float) -> bool:
    """Rescale *node* when needed and supported.  Returns ``True`` if rescaled."""
    if scale == 1:
        return False
    if not isinstance(node, Rescalable):
        logger.debug("%r does not support rescale; keeping original size", node)
        return False
    try:
        node.rescale(scale)
    except (NodeWriteError, ValueError) as exc:
        logger.debug("Rescale of %r by %g failed: %s", node, scale, exc)
        return False
    return True


def apply_stroke_weight(root: BaseNode, weight: float) -> list[WriteResult]:
    """Set ``stroke_weight`` on every stroked node of the subtree."""
    return set_all(walk(root, lambda n: isinstance(n, Stroked)), "stroke_weight", weight)


def lock_aspect_ratio(root: BaseNode) -> list[WriteResult]:
    """Lock proportions on *root* and every lockable descendant.

    Always writes ``True``, so repeated calls leave the lock on.
    """
    return set_all(
        walk(root, lambda n: isinstance(n, ProportionLockable)),
        "constrain_proportions",
        True,
    )


def _finish_vector(node: SceneNode) -> None:
    try_set(node, "name", FLATTENED_NAME)
    if isinstance(node, Constrainable):
        try_set(node, "constraints", SCALE_CONSTRAINTS)
    if isinstance(node, ProportionLockable):
        try_set(node, "constrain_proportions", True)


def flatten_content(host: Host, component: ComponentNode) -> bool:
    """Merge the component's content into one ``vector`` child.

    Returns ``True`` when flattened, ``False`` when the fallback left the
    children in place.
    """
    children = list(component.children)
    if not children:
        return False
    try:
        flattened = host.flatten(children, component)
    except FlattenError as exc:
        logger.warning("Flatten failed for %r, keeping layers: %s", component.name, exc)
        for child in component.children:
            _finish_vector(child)
        return False
    _finish_vector(flattened)
    return True


def build_variant_component(
    host: Host,
    source: SceneNode,
    variant: VariantConfig,
    base_size: float,
    *,
    custom_stroke: bool = False,
) -> ComponentNode:
    """Build the finished component for one variant of *source*.

    Parameters
    ----------
    host : Host
        Editor providing component creation and flatten.
    source : SceneNode
        Eligible (square, drawable) icon.  Left untouched.
    variant : VariantConfig
        Target size and stroke weight.
    base_size : float
        Edge length of *source*.
    custom_stroke : bool
        Apply ``variant.stroke_weight`` to every stroked layer.

    Returns
    -------
    ComponentNode
        Component named ``Size={size}px`` on the current page.
    """
    size = variant.size_px
    scale = compute_scale(size, base_size)

    component = host.create_component()
    component.name = variant.component_name
    component.resize_without_constraints(size, size)
    component.fills = ()
    component.clips_content = True

    working = clone_detached(source)
    component.append_child(working)

    rescaled = rescale_content(working, scale)

    if custom_stroke:
        results = apply_stroke_weight(working, variant.stroke_weight)
        rejected = sum(1 for r in results if not r.ok)
        if rejected:
            logger.debug("%d layers kept their stroke weight in %s", rejected, component.name)

    try_set(working, "x", round_half_up((size - working.width) / 2))
    try_set(working, "y", round_half_up((size - working.height) / 2))

    flattened = flatten_content(host, component)
    lock_aspect_ratio(component)

    logger.debug(
        "Built %s (scale=%g, rescaled=%s, flattened=%s)",
        component.name, scale, rescaled, flattened,
    )
    return component
