"""End-to-end tests for the variant generator.

Runs full generations against the in-memory document: output structure,
canvas layout, input rejections, cancellation and re-entrancy.
"""

from __future__ import annotations

import dataclasses

import pytest

from icon_variants.configs.loader import PluginConfig, SelectionConfig
from icon_variants.generator import (
    MSG_BUSY,
    MSG_EMPTY_SELECTION,
    MSG_INVALID_MESSAGE,
    MSG_NO_ICONS,
    MSG_NO_VARIANTS,
    GenerationProgress,
    GeneratorState,
    VariantGenerator,
    format_cancelled,
    format_summary,
)
from icon_variants.scene import (
    ComponentNode,
    ComponentSetNode,
    Document,
    FrameNode,
    InstanceNode,
    RectangleNode,
    TextNode,
    VectorNode,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def generator(document: Document, config: PluginConfig) -> VariantGenerator:
    return VariantGenerator(document, config)


def page_sets(document: Document) -> list[ComponentSetNode]:
    return [n for n in document.current_page.children if isinstance(n, ComponentSetNode)]


E2E_ROWS = [{"sizePx": 16, "strokeWeight": 1.5}, {"sizePx": 24, "strokeWeight": 2}]


# ---------------------------------------------------------------------------
# Summary text
# ---------------------------------------------------------------------------


class TestSummary:
    def test_plural(self) -> None:
        assert format_summary(2, 3) == "Created 2 component sets with 3 size variants each."

    def test_singular(self) -> None:
        assert format_summary(1, 1) == "Created 1 component set with 1 size variant each."

    def test_cancelled(self) -> None:
        assert format_cancelled(1) == "Cancelled after 1 component set."
        assert format_cancelled(0) == "Cancelled after 0 component sets."


# ---------------------------------------------------------------------------
# End-to-end
# ---------------------------------------------------------------------------


class TestEndToEnd:
    def test_single_icon(self, document: Document, generator: VariantGenerator, make_icon) -> None:
        icon = make_icon(name="arrow", size=24)
        document.current_page.selection = [icon]

        report = generator.generate(E2E_ROWS, custom_stroke=True)

        assert report.ok
        assert report.icon_count == 1
        (component_set,) = report.component_sets
        assert component_set.name == "arrow"
        assert [c.name for c in component_set.children] == ["Size=16px", "Size=24px"]
        for component, weight in zip(component_set.children, (1.5, 2.0)):
            assert isinstance(component, ComponentNode)
            (child,) = component.children
            assert isinstance(child, VectorNode)
            assert child.name == "vector"
            assert child.constrain_proportions
            assert child.stroke_weight == weight
        assert [c.width for c in component_set.children] == [16, 24]

    def test_one_component_per_variant_in_order(
        self, document: Document, generator: VariantGenerator, make_icon
    ) -> None:
        icons = [make_icon(name=f"i{k}", size=32, x=100 * k) for k in range(3)]
        document.current_page.selection = icons
        rows = [{"sizePx": s} for s in (48, 12, 20)]

        report = generator.generate(rows)

        assert [s.name for s in report.component_sets] == ["i0", "i1", "i2"]
        for component_set in report.component_sets:
            assert [c.name for c in component_set.children] == [
                "Size=48px", "Size=12px", "Size=20px",
            ]

    def test_layout_scenario(
        self, document: Document, generator: VariantGenerator, make_icon
    ) -> None:
        first = make_icon(name="a", size=24, x=0, y=0)
        second = make_icon(name="b", size=24, x=200, y=0)
        document.current_page.selection = [first, second]

        report = generator.generate([{"sizePx": 24}])

        set1, set2 = report.component_sets
        assert (set1.x, set1.y) == (72, 0)
        assert set2.x == 72
        assert set2.y == set1.y + set1.height + 40
        assert set2.y == 104

    def test_sources_untouched(
        self, document: Document, generator: VariantGenerator, make_icon
    ) -> None:
        icon = make_icon(name="arrow", size=24, kind="stroke", stroke_weight=2)
        (child,) = icon.children
        document.current_page.selection = [icon]

        generator.generate(E2E_ROWS, custom_stroke=True)

        assert icon.parent is document.current_page
        assert (icon.x, icon.y, icon.width, icon.height) == (0, 0, 24, 24)
        assert icon.children == (child,)
        assert child.stroke_weight == 2
        assert not child.constrain_proportions

    def test_instance_source(self, document: Document, generator: VariantGenerator) -> None:
        main = ComponentNode(name="main", width=24, height=24)
        instance = InstanceNode(
            name="inst", width=24, height=24, main_component=main,
            children=[RectangleNode(width=12, height=12)],
        )
        document.current_page.append_child(instance)
        document.current_page.selection = [instance]

        report = generator.generate([{"sizePx": 16}])

        assert report.icon_count == 1
        assert isinstance(instance, InstanceNode)
        assert instance.parent is document.current_page

    def test_selection_viewport_and_messages(
        self, document: Document, generator: VariantGenerator, make_icon
    ) -> None:
        icon = make_icon(name="arrow", size=24)
        document.current_page.selection = [icon]

        report = generator.generate(E2E_ROWS)

        assert document.current_page.selection == tuple(report.component_sets)
        (component_set,) = report.component_sets
        x0, y0, x1, y1 = document.viewport.bounds
        assert x0 <= component_set.x and component_set.x + component_set.width <= x1
        assert y0 <= component_set.y and component_set.y + component_set.height <= y1
        assert document.notifications[-1].message == (
            "Created 1 component set with 2 size variants each."
        )
        assert not document.notifications[-1].error
        assert document.ui.outbox[-1] == {
            "type": "done", "componentSets": 1, "variantsPerSet": 2, "cancelled": False,
        }

    def test_ineligible_nodes_skipped(
        self, document: Document, generator: VariantGenerator, make_icon
    ) -> None:
        icon = make_icon(name="ok", size=24)
        wide = FrameNode(name="wide", width=48, height=24, children=[RectangleNode()])
        text = TextNode(name="label")
        for node in (wide, text):
            document.current_page.append_child(node)
        document.current_page.selection = [wide, icon, text]

        report = generator.generate([{"sizePx": 16}])

        assert [s.name for s in report.component_sets] == ["ok"]
        assert report.skipped == 2


# ---------------------------------------------------------------------------
# Input rejections
# ---------------------------------------------------------------------------


class TestRejections:
    def assert_rejected(self, document: Document, report, message: str) -> None:
        assert not report.ok
        assert report.error == message
        assert report.component_sets == []
        assert document.notifications[-1].message == message
        assert document.notifications[-1].error
        assert document.ui.outbox[-1] == {"type": "error", "message": message}
        assert page_sets(document) == []
        assert not any(isinstance(n, ComponentNode) for n in document.current_page.children)

    def test_empty_selection(self, document: Document, generator: VariantGenerator) -> None:
        report = generator.generate(E2E_ROWS)
        self.assert_rejected(document, report, MSG_EMPTY_SELECTION)

    def test_too_many(self, document: Document, config: PluginConfig, make_icon) -> None:
        limited = dataclasses.replace(
            config, selection=SelectionConfig(max_nodes=2, square_tolerance=0.01)
        )
        document.current_page.selection = [make_icon(name=str(k)) for k in range(3)]
        report = VariantGenerator(document, limited).generate(E2E_ROWS)
        self.assert_rejected(document, report, "Select a maximum of 2 icons.")

    def test_no_valid_variants(
        self, document: Document, generator: VariantGenerator, make_icon
    ) -> None:
        document.current_page.selection = [make_icon()]
        report = generator.generate([{"sizePx": 0}, {"sizePx": "abc"}])
        self.assert_rejected(document, report, MSG_NO_VARIANTS)

    def test_no_eligible_icons(self, document: Document, generator: VariantGenerator) -> None:
        frame = FrameNode(width=100, height=50, children=[RectangleNode()])
        document.current_page.append_child(frame)
        document.current_page.selection = [frame]
        report = generator.generate(E2E_ROWS)
        self.assert_rejected(document, report, MSG_NO_ICONS)

    def test_zero_size_icon_rejected(
        self, document: Document, generator: VariantGenerator
    ) -> None:
        frame = FrameNode(width=0, height=0, children=[RectangleNode(width=0, height=0)])
        document.current_page.append_child(frame)
        document.current_page.selection = [frame]
        report = generator.generate([{"sizePx": 16}])
        self.assert_rejected(document, report, MSG_NO_ICONS)
        assert generator.state is GeneratorState.IDLE

    def test_state_reset_after_rejection(self, generator: VariantGenerator) -> None:
        generator.generate(E2E_ROWS)
        assert generator.state is GeneratorState.IDLE


# ---------------------------------------------------------------------------
# Cancellation and re-entrancy
# ---------------------------------------------------------------------------


class TestCancelAndReentry:
    def test_cancel_between_icons(
        self, document: Document, generator: VariantGenerator, make_icon
    ) -> None:
        document.current_page.selection = [make_icon(name=f"i{k}", x=100 * k) for k in range(3)]
        progress: list[GenerationProgress] = []

        def on_progress(update: GenerationProgress) -> None:
            progress.append(update)
            generator.cancel()

        generator.set_progress_callback(on_progress)
        report = generator.generate([{"sizePx": 16}])

        assert report.cancelled
        assert report.icon_count == 1
        assert [(p.completed, p.total) for p in progress] == [(1, 3)]
        assert len(page_sets(document)) == 1
        assert document.notifications[-1].message == "Cancelled after 1 component set."
        assert document.ui.outbox[-1]["cancelled"] is True
        assert generator.state is GeneratorState.IDLE

    def test_cancel_when_idle_is_noop(
        self, document: Document, generator: VariantGenerator, make_icon
    ) -> None:
        generator.cancel()
        document.current_page.selection = [make_icon()]
        report = generator.generate([{"sizePx": 16}])
        assert not report.cancelled
        assert report.icon_count == 1

    def test_reentrant_generate_rejected(
        self, document: Document, generator: VariantGenerator, make_icon
    ) -> None:
        document.current_page.selection = [make_icon(name="a"), make_icon(name="b", x=100)]
        nested = []

        def on_progress(update: GenerationProgress) -> None:
            nested.append(generator.generate([{"sizePx": 16}]))

        generator.set_progress_callback(on_progress)
        report = generator.generate([{"sizePx": 16}])

        assert report.icon_count == 2
        assert [r.error for r in nested] == [MSG_BUSY, MSG_BUSY]
        assert any(n.message == MSG_BUSY and n.error for n in document.notifications)

    def test_progress_callback_errors_do_not_stop_run(
        self, document: Document, generator: VariantGenerator, make_icon
    ) -> None:
        document.current_page.selection = [make_icon(name="a"), make_icon(name="b", x=100)]

        def broken(update: GenerationProgress) -> None:
            raise RuntimeError("boom")

        generator.set_progress_callback(broken)
        assert generator.generate([{"sizePx": 16}]).icon_count == 2


# ---------------------------------------------------------------------------
# UI messages
# ---------------------------------------------------------------------------


class TestHandleMessage:
    def test_generate_message(
        self, document: Document, generator: VariantGenerator, make_icon
    ) -> None:
        document.current_page.selection = [make_icon(name="arrow")]
        report = generator.handle_message({
            "type": "generate",
            "variants": [{"sizePx": "20", "strokeWeight": "1.5"}],
            "customStroke": True,
        })
        (component_set,) = report.component_sets
        (component,) = component_set.children
        assert component.name == "Size=20px"
        assert component.children[0].stroke_weight == 1.5

    def test_cancel_message(self, generator: VariantGenerator) -> None:
        assert generator.handle_message({"type": "cancel"}) is None

    @pytest.mark.parametrize(
        "payload",
        [{"type": "explode"}, {"variants": []}, "generate", {"type": "generate", "variants": 3}],
    )
    def test_invalid_message(
        self, document: Document, generator: VariantGenerator, payload
    ) -> None:
        assert generator.handle_message(payload) is None
        assert document.notifications[-1].message == MSG_INVALID_MESSAGE
        assert document.ui.outbox[-1] == {"type": "error", "message": MSG_INVALID_MESSAGE}
