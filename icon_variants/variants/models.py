"""Variant value types.

A *variant row* is one user-requested (size, stroke weight) pair.  Once
sanitized it becomes an immutable ``VariantConfig``.  Sizes are whole
px; stroke weights are px and may be fractional.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

VARIANT_PROPERTY = "Size"
"""Name of the single variant axis exposed by every component set."""


@dataclass(frozen=True, slots=True)
class VariantConfig:
    """One output size.

    Parameters
    ----------
    size_px : int
        Edge length of the square variant component, > 0.
    stroke_weight : float
        Stroke weight applied when custom strokes are enabled, > 0.
    """

    size_px: int
    stroke_weight: float = 1.0

    def __post_init__(self) -> None:
        if isinstance(self.size_px, bool) or not isinstance(self.size_px, int):
            raise ValueError(f"size_px must be an int, got {self.size_px!r}")
        if self.size_px <= 0:
            raise ValueError(f"size_px must be > 0, got {self.size_px}")
        if not math.isfinite(self.stroke_weight) or self.stroke_weight <= 0:
            raise ValueError(f"stroke_weight must be finite and > 0, got {self.stroke_weight}")

    @property
    def value(self) -> str:
        """Variant property value, e.g. ``"16px"``."""
        return f"{self.size_px}px"

    @property
    def component_name(self) -> str:
        """Component name, e.g. ``"Size=16px"``."""
        return f"{VARIANT_PROPERTY}={self.value}"
