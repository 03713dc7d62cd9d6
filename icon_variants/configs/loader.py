"""Configuration loader for the icon variant generator.

Loads and validates ``defaults.yaml`` into typed, frozen dataclasses.
Layout offsets, component-set styling, the selection limit and the
default variant table all come from the config; the generator hardcodes
none of them.

Usage::

    from icon_variants.configs.loader import load_config
    cfg = load_config()                         # default path
    cfg = load_config("/custom/variants.yaml")  # explicit path
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from icon_variants.errors import IconVariantsError
from icon_variants.utils.fs import load_yaml
from icon_variants.variants.models import VariantConfig

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(IconVariantsError):
    """Raised when configuration validation fails."""

    pass


# ---------------------------------------------------------------------------
# Dataclasses -- mirror the YAML structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UiConfig:
    """Plugin UI panel size in px."""

    width: int
    height: int


@dataclass(frozen=True)
class SelectionConfig:
    """Selection limits.

    Parameters
    ----------
    max_nodes : int
        Largest selection accepted in one run.
    square_tolerance : float
        Maximum ``|width - height|`` for an icon to count as square.
    """

    max_nodes: int
    square_tolerance: float


@dataclass(frozen=True)
class LayoutConfig:
    """Canvas placement of generated component sets."""

    set_offset_x: float
    set_gap_y: float


@dataclass(frozen=True)
class SetStyleConfig:
    """Visual convention applied to every component set.

    The set hugs its content with a horizontal auto layout; the stroke
    is dashed with ``dash_pattern`` (dash, gap).
    """

    stroke_color: tuple[float, float, float]
    stroke_weight: float
    dash_pattern: tuple[float, ...]
    corner_radius: float
    item_spacing: float
    padding: float


@dataclass(frozen=True)
class VariantTableConfig:
    """Initial state of the variant form shown by the UI."""

    custom_stroke: bool
    defaults: tuple[VariantConfig, ...]


@dataclass(frozen=True)
class PluginConfig:
    """Complete configuration loaded from ``defaults.yaml``."""

    ui: UiConfig
    selection: SelectionConfig
    layout: LayoutConfig
    set_style: SetStyleConfig
    variants: VariantTableConfig


# ---------------------------------------------------------------------------
# Internal parsing helpers
# ---------------------------------------------------------------------------


def _positive(section: str, key: str, value: Any, *, allow_zero: bool = False) -> float:
    """Coerce *value* to a finite float > 0 (or >= 0) or raise ``ConfigError``."""
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{section}.{key} must be a number, got {value!r}") from exc
    if not math.isfinite(number) or number < 0 or (number == 0 and not allow_zero):
        bound = ">= 0" if allow_zero else "> 0"
        raise ConfigError(f"{section}.{key} must be {bound}, got {value!r}")
    return number


def _parse_set_style(data: dict[str, Any]) -> SetStyleConfig:
    """Parse the ``set_style`` section."""
    color = data["stroke_color"]
    if not isinstance(color, (list, tuple)) or len(color) != 3:
        raise ConfigError(
            f"set_style.stroke_color must be a 3-element list, got {color!r}"
        )
    rgb = tuple(float(c) for c in color)
    if any(not 0.0 <= c <= 1.0 for c in rgb):
        raise ConfigError(f"set_style.stroke_color channels must be in [0, 1], got {color!r}")

    dash = data.get("dash_pattern", [])
    if not isinstance(dash, (list, tuple)):
        raise ConfigError(f"set_style.dash_pattern must be a list, got {dash!r}")

    return SetStyleConfig(
        stroke_color=rgb,
        stroke_weight=_positive("set_style", "stroke_weight", data["stroke_weight"]),
        dash_pattern=tuple(_positive("set_style", "dash_pattern", d) for d in dash),
        corner_radius=_positive("set_style", "corner_radius", data["corner_radius"], allow_zero=True),
        item_spacing=_positive("set_style", "item_spacing", data["item_spacing"], allow_zero=True),
        padding=_positive("set_style", "padding", data["padding"], allow_zero=True),
    )


def _parse_variant_table(data: dict[str, Any]) -> VariantTableConfig:
    """Parse the ``variants`` section."""
    rows = []
    for i, row in enumerate(data.get("defaults", [])):
        try:
            rows.append(VariantConfig(int(row["size_px"]), float(row["stroke_weight"])))
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigError(f"variants.defaults[{i}] is invalid: {exc}") from exc
    sizes = [row.size_px for row in rows]
    if len(set(sizes)) != len(sizes):
        raise ConfigError(f"variants.defaults contains duplicate sizes: {sizes}")
    return VariantTableConfig(
        custom_stroke=bool(data.get("custom_stroke", False)),
        defaults=tuple(rows),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(path: str | Path | None = None) -> PluginConfig:
    """Load and validate plugin configuration from YAML.

    Parameters
    ----------
    path : str | Path | None
        Path to a config YAML.  ``None`` loads ``defaults.yaml`` shipped
        alongside this module.

    Returns
    -------
    PluginConfig
        Fully validated, frozen configuration object.

    Raises
    ------
    ConfigError
        If any field is missing or fails validation.
    FileNotFoundError
        If *path* does not exist.
    """
    if path is None:
        path = Path(__file__).parent / "defaults.yaml"
    else:
        path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info("Loading configuration from %s", path)

    data: dict[str, Any] = load_yaml(path)
    if data is None:
        raise ConfigError(f"Empty configuration file: {path}")

    try:
        ui_data = data["ui"]
        ui = UiConfig(
            width=int(_positive("ui", "width", ui_data["width"])),
            height=int(_positive("ui", "height", ui_data["height"])),
        )

        sel_data = data["selection"]
        selection = SelectionConfig(
            max_nodes=int(_positive("selection", "max_nodes", sel_data["max_nodes"])),
            square_tolerance=_positive(
                "selection", "square_tolerance", sel_data.get("square_tolerance", 0.01)
            ),
        )

        layout_data = data["layout"]
        layout = LayoutConfig(
            set_offset_x=_positive("layout", "set_offset_x", layout_data["set_offset_x"], allow_zero=True),
            set_gap_y=_positive("layout", "set_gap_y", layout_data["set_gap_y"], allow_zero=True),
        )

        set_style = _parse_set_style(data["set_style"])
        variants = _parse_variant_table(data.get("variants", {}))
    except KeyError as exc:
        raise ConfigError(f"Missing required config key: {exc}") from exc

    return PluginConfig(
        ui=ui,
        selection=selection,
        layout=layout,
        set_style=set_style,
        variants=variants,
    )
