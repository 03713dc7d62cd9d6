"""Tests for component set assembly, styling and canvas placement."""

from __future__ import annotations

import pytest

from icon_variants.configs.loader import LayoutConfig, PluginConfig
from icon_variants.scene import (
    Color,
    ComponentNode,
    ComponentSetNode,
    Document,
    FrameNode,
    SolidPaint,
    VariantConflictError,
)
from icon_variants.variants.assembler import assemble_component_set, set_name_for
from icon_variants.variants.layout import place_component_set


def make_components(document: Document, sizes: list[int]) -> list[ComponentNode]:
    components = []
    for size in sizes:
        component = document.create_component()
        component.name = f"Size={size}px"
        component.resize_without_constraints(size, size)
        components.append(component)
    return components


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


class TestSetName:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("arrow", "arrow"),
            ("icons/arrow", "icons-arrow"),
            ("icons / arrow / left", "icons-arrow-left"),
            ("a  /b", "a-b"),
        ],
    )
    def test_path_separator_replaced(self, source: str, expected: str) -> None:
        assert set_name_for(source) == expected


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------


class TestAssemble:
    def test_styled_set(self, document: Document, config: PluginConfig) -> None:
        components = make_components(document, [16, 24])
        component_set = assemble_component_set(
            document, components, "icons/home", config.set_style
        )
        style = config.set_style

        assert isinstance(component_set, ComponentSetNode)
        assert component_set.name == "icons-home"
        assert component_set.parent is document.current_page
        assert component_set.children == tuple(components)
        assert component_set.variant_group_properties == {"Size": ["16px", "24px"]}
        assert component_set.fills == ()
        assert component_set.strokes == (SolidPaint(Color(*style.stroke_color)),)
        assert component_set.stroke_weight == style.stroke_weight
        assert component_set.dash_pattern == style.dash_pattern
        assert component_set.corner_radius == style.corner_radius
        assert component_set.layout_mode == "HORIZONTAL"
        assert component_set.counter_axis_align_items == "CENTER"

    def test_hugs_content(self, document: Document, config: PluginConfig) -> None:
        components = make_components(document, [16, 24])
        component_set = assemble_component_set(document, components, "home", config.set_style)
        pad, gap = config.set_style.padding, config.set_style.item_spacing

        assert component_set.width == pad + 16 + gap + 24 + pad
        assert component_set.height == pad + 24 + pad
        small, large = component_set.children
        assert (small.x, small.y) == (pad, pad + 4)
        assert (large.x, large.y) == (pad + 16 + gap, pad)

    def test_duplicate_names(self, document: Document, config: PluginConfig) -> None:
        components = make_components(document, [16, 16])
        with pytest.raises(VariantConflictError, match="Duplicate"):
            assemble_component_set(document, components, "home", config.set_style)

    def test_explicit_parent(self, document: Document, config: PluginConfig) -> None:
        section = FrameNode(name="section", width=500, height=500)
        document.current_page.append_child(section)
        components = make_components(document, [16])
        component_set = assemble_component_set(
            document, components, "home", config.set_style, parent=section
        )
        assert component_set.parent is section

    def test_combine_rejects_non_components(self, document: Document) -> None:
        with pytest.raises(VariantConflictError, match="not a component"):
            document.combine_as_variants([FrameNode()], document.current_page)
        with pytest.raises(VariantConflictError, match="At least one"):
            document.combine_as_variants([], document.current_page)


# ---------------------------------------------------------------------------
# Placement
# ---------------------------------------------------------------------------


class TestPlacement:
    LAYOUT = LayoutConfig(set_offset_x=48, set_gap_y=40)

    def test_first_set_right_of_source(self) -> None:
        source = FrameNode(x=10, y=30, width=24, height=24)
        component_set = ComponentSetNode(width=64, height=64)
        assert place_component_set(component_set, source, None, self.LAYOUT) == (82, 30)
        assert (component_set.x, component_set.y) == (82, 30)

    def test_later_sets_stack_under_previous(self) -> None:
        previous = ComponentSetNode(x=72, y=0, width=200, height=64)
        far_source = FrameNode(x=500, y=500, width=24, height=24)
        component_set = ComponentSetNode(width=64, height=64)
        assert place_component_set(component_set, far_source, previous, self.LAYOUT) == (72, 104)
