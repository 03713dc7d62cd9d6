"""Canvas placement of generated component sets.

The first set goes to the right of its source icon.  Every later set is
stacked under the previous *set*, not next to its own source, so a batch
forms one column.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from icon_variants.scene.nodes import ComponentSetNode, SceneNode

if TYPE_CHECKING:
    from icon_variants.configs.loader import LayoutConfig


def place_component_set(
    component_set: ComponentSetNode,
    source: SceneNode,
    previous: ComponentSetNode | None,
    layout: LayoutConfig,
) -> tuple[float, float]:
    """Position *component_set* and return its new ``(x, y)``."""
    if previous is None:
        x = source.x + source.width + layout.set_offset_x
        y = source.y
    else:
        x = previous.x
        y = previous.y + previous.height + layout.set_gap_y
    component_set.x = x
    component_set.y = y
    return x, y
