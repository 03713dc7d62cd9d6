"""Variant generator -- drives one generation run over the selection.

Run sequence (linear, no retries):
    1. Read the selection; reject empty or oversized selections.
    2. Sanitize the variant rows; reject when none survive.
    3. Keep eligible icons; reject when none survive.
    4. Per icon, in selection order: build every variant, assemble the
       set, place it (right of the first icon, then stacked under the
       previous set).
    5. Select the new sets, fit the viewport, post a summary.

Input rejections are reported once (banner + UI error message) before
anything is created.  Sets already created are never rolled back.

Cancellation is cooperative: ``cancel()`` sets a flag that is checked
before each icon, so the run stops at an icon boundary and keeps what it
built.  Only one run may be in flight; a second ``generate`` while
running is rejected.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Iterable

from pydantic import ValidationError

from icon_variants.configs.loader import PluginConfig, load_config
from icon_variants.errors import IconVariantsError
from icon_variants.messages import CancelMessage, DoneMessage, ErrorMessage, parse_ui_message
from icon_variants.scene.host import Host
from icon_variants.scene.nodes import ComponentSetNode, SceneNode
from icon_variants.utils.logging_config import log_context
from icon_variants.variants.assembler import assemble_component_set
from icon_variants.variants.builder import build_variant_component
from icon_variants.variants.layout import place_component_set
from icon_variants.variants.models import VariantConfig
from icon_variants.variants.sanitizer import sanitize_variants
from icon_variants.variants.validator import filter_eligible

logger = logging.getLogger(__name__)

MSG_EMPTY_SELECTION = "Select at least one square icon frame to generate variants."
MSG_TOO_MANY = "Select a maximum of {limit} icons."
MSG_NO_VARIANTS = "Add at least one valid variant size."
MSG_NO_ICONS = (
    "No valid icons found. Select square frames, components, instances, "
    "or groups with vector layers."
)
MSG_BUSY = "Generation already in progress."
MSG_INVALID_MESSAGE = "Invalid message from the plugin UI."


class InputRejected(IconVariantsError):
    """Raised when a run is refused before any node is created."""

    pass


# ---------------------------------------------------------------------------
# State and results
# ---------------------------------------------------------------------------


class GeneratorState(Enum):
    """Current generator state."""

    IDLE = auto()
    RUNNING = auto()


@dataclass
class GenerationProgress:
    """Progress snapshot, sent after each finished set."""

    completed: int
    total: int
    last_set: str = ""


@dataclass
class GenerationReport:
    """Outcome of one ``generate`` call."""

    component_sets: list[ComponentSetNode] = field(default_factory=list)
    variant_count: int = 0
    skipped: int = 0
    cancelled: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def icon_count(self) -> int:
        return len(self.component_sets)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


def format_summary(icon_count: int, variant_count: int) -> str:
    """``"Created 2 component sets with 1 size variant each."``"""
    return (
        f"Created {_plural(icon_count, 'component set')} "
        f"with {_plural(variant_count, 'size variant')} each."
    )


def format_cancelled(icon_count: int) -> str:
    return f"Cancelled after {_plural(icon_count, 'component set')}."


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class VariantGenerator:
    """Generate variant component sets for the host's current selection.

    Parameters
    ----------
    host : Host
        Editor to read the selection from and create nodes in.
    config : PluginConfig | None
        Plugin configuration.  ``None`` loads the shipped defaults.
    """

    def __init__(self, host: Host, config: PluginConfig | None = None) -> None:
        self._host = host
        self._cfg = config if config is not None else load_config()
        self._state = GeneratorState.IDLE
        self._cancel_flag = threading.Event()
        self._progress_cb: Callable[[GenerationProgress], None] | None = None

    # ------------------------------------------------------------------
    # Common
    # ------------------------------------------------------------------

    @property
    def state(self) -> GeneratorState:
        return self._state

    def set_progress_callback(self, fn: Callable[[GenerationProgress], None]) -> None:
        """Register a callback invoked after each component set is placed."""
        self._progress_cb = fn

    def notify_error(self, message: str) -> None:
        """Report *message* as a banner and as a UI error message."""
        logger.warning("Generation refused: %s", message)
        self._host.notify(message, error=True)
        self._host.ui.post_message(ErrorMessage(message=message).to_wire())

    def handle_message(self, payload: Any) -> GenerationReport | None:
        """Dispatch one UI message.  Returns the report for ``generate``."""
        try:
            message = parse_ui_message(payload)
        except ValidationError as exc:
            logger.warning("Rejected UI message %r: %s", payload, exc)
            self.notify_error(MSG_INVALID_MESSAGE)
            return None

        if isinstance(message, CancelMessage):
            self.cancel()
            return None
        return self.generate(message.variants, custom_stroke=message.custom_stroke)

    def cancel(self) -> None:
        """Stop the running generation at the next icon boundary."""
        if self._state is GeneratorState.IDLE:
            logger.debug("Cancel ignored: no generation running")
            return
        logger.info("Cancellation requested")
        self._cancel_flag.set()

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate(self, rows: Iterable[Any], *, custom_stroke: bool = False) -> GenerationReport:
        """Run one generation over the current selection.

        Parameters
        ----------
        rows : iterable
            Raw variant rows (see ``sanitize_variants``).
        custom_stroke : bool
            Apply each row's stroke weight to every stroked layer.

        Returns
        -------
        GenerationReport
            Created sets, or the refusal message in ``error``.
        """
        if self._state is not GeneratorState.IDLE:
            self.notify_error(MSG_BUSY)
            return GenerationReport(error=MSG_BUSY)

        self._state = GeneratorState.RUNNING
        self._cancel_flag.clear()
        try:
            return self._run(list(rows), custom_stroke)
        except InputRejected as exc:
            self.notify_error(str(exc))
            return GenerationReport(error=str(exc))
        finally:
            self._state = GeneratorState.IDLE
            self._cancel_flag.clear()

    def _validate_inputs(
        self, rows: list[Any], custom_stroke: bool
    ) -> tuple[list[VariantConfig], list[SceneNode], int]:
        selection = list(self._host.current_page.selection)
        limit = self._cfg.selection.max_nodes
        if not selection:
            raise InputRejected(MSG_EMPTY_SELECTION)
        if len(selection) > limit:
            raise InputRejected(MSG_TOO_MANY.format(limit=limit))

        variants = sanitize_variants(rows, custom_stroke)
        if not variants:
            raise InputRejected(MSG_NO_VARIANTS)

        icons = filter_eligible(selection, self._cfg.selection.square_tolerance)
        if not icons:
            raise InputRejected(MSG_NO_ICONS)
        return variants, icons, len(selection) - len(icons)

    def _run(self, rows: list[Any], custom_stroke: bool) -> GenerationReport:
        variants, icons, skipped = self._validate_inputs(rows, custom_stroke)
        logger.info(
            "Generating %d sizes for %d icons (%d skipped)",
            len(variants), len(icons), skipped,
        )

        report = GenerationReport(variant_count=len(variants), skipped=skipped)
        previous: ComponentSetNode | None = None
        for icon in icons:
            if self._cancel_flag.is_set():
                report.cancelled = True
                logger.info("Cancelled with %d of %d sets built", report.icon_count, len(icons))
                break

            with log_context(icon=icon.name):
                component_set = self._build_set(icon, variants, custom_stroke)
                place_component_set(component_set, icon, previous, self._cfg.layout)

            previous = component_set
            report.component_sets.append(component_set)
            self._report_progress(
                GenerationProgress(report.icon_count, len(icons), component_set.name)
            )

        self._host.current_page.selection = report.component_sets
        self._host.viewport.scroll_and_zoom_into_view(report.component_sets)

        if report.cancelled:
            summary = format_cancelled(report.icon_count)
        else:
            summary = format_summary(report.icon_count, report.variant_count)
        self._host.notify(summary)
        self._host.ui.post_message(
            DoneMessage(
                component_sets=report.icon_count,
                variants_per_set=report.variant_count,
                cancelled=report.cancelled,
            ).to_wire()
        )
        logger.info(summary)
        return report

    def _build_set(
        self, icon: SceneNode, variants: list[VariantConfig], custom_stroke: bool
    ) -> ComponentSetNode:
        base_size = icon.width
        components = [
            build_variant_component(
                self._host, icon, variant, base_size, custom_stroke=custom_stroke
            )
            for variant in variants
        ]
        return assemble_component_set(
            self._host, components, icon.name, self._cfg.set_style
        )

    def _report_progress(self, progress: GenerationProgress) -> None:
        if self._progress_cb is None:
            return
        try:
            self._progress_cb(progress)
        except Exception as exc:  # noqa: BLE001
            logger.error("Progress callback error: %s", exc)
