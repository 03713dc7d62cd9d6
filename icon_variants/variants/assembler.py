"""Set assembler -- variant components → one styled component set.

The set exposes a single ``Size`` variant axis and follows a fixed
visual convention: transparent fill, dashed purple border, rounded
corners, horizontal auto layout that hugs its content.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Sequence

from icon_variants.scene.host import Host
from icon_variants.scene.nodes import ChildrenMixin, Color, ComponentNode, ComponentSetNode, SolidPaint

if TYPE_CHECKING:
    from icon_variants.configs.loader import SetStyleConfig

logger = logging.getLogger(__name__)

# "/" is the host's grouping-path separator in component names
_PATH_SEPARATOR = re.compile(r"\s*/\s*")


def set_name_for(source_name: str) -> str:
    """``"icons / arrow / left"`` → ``"icons-arrow-left"``."""
    return _PATH_SEPARATOR.sub("-", source_name)


def style_component_set(component_set: ComponentSetNode, style: SetStyleConfig) -> None:
    """Apply the dashed-border, auto-layout convention to *component_set*."""
    component_set.fills = ()
    component_set.strokes = (SolidPaint(Color(*style.stroke_color)),)
    component_set.stroke_weight = style.stroke_weight
    component_set.dash_pattern = style.dash_pattern
    component_set.corner_radius = style.corner_radius
    component_set.layout_mode = "HORIZONTAL"
    component_set.item_spacing = style.item_spacing
    component_set.counter_axis_align_items = "CENTER"
    component_set.primary_axis_sizing_mode = "AUTO"
    component_set.counter_axis_sizing_mode = "AUTO"
    component_set.padding_left = style.padding
    component_set.padding_right = style.padding
    component_set.padding_top = style.padding
    component_set.padding_bottom = style.padding


def assemble_component_set(
    host: Host,
    components: Sequence[ComponentNode],
    source_name: str,
    style: SetStyleConfig,
    parent: ChildrenMixin | None = None,
) -> ComponentSetNode:
    """Combine *components* (in order) into a styled, named variant set.

    Raises
    ------
    VariantConflictError
        If two components share a name.
    """
    target = parent if parent is not None else host.current_page
    component_set = host.combine_as_variants(components, target)
    component_set.name = set_name_for(source_name)
    style_component_set(component_set, style)
    logger.debug(
        "Assembled %r with %d variants (%gx%g)",
        component_set.name, len(components), component_set.width, component_set.height,
    )
    return component_set
