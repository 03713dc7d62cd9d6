"""Variant row sanitizer.

Turns the raw rows typed into the UI form into ``VariantConfig`` objects.
Numbers are coerced the way the UI's JavaScript does it (``Number(x)``):
decimal, ``Infinity`` and 0x/0o/0b strings parse, blank strings read as
0, overflow reads as infinity, anything else is NaN.
Rows that fail a check are dropped, never repaired.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Iterable, Mapping

from icon_variants.variants.models import VariantConfig

logger = logging.getLogger(__name__)

DEFAULT_STROKE_WEIGHT = 1.0

# String forms JavaScript's Number() accepts; Python's float() is looser ("1_6", "inf", "nan")
_DECIMAL_RE = re.compile(r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")
_RADIX_RE = re.compile(r"0([xXoObB])([0-9a-zA-Z]+)")
_RADIX_BASES = {"x": 16, "o": 8, "b": 2}


def to_number(value: Any) -> float:
    """Coerce a form value to float; unparseable input gives NaN."""
    if isinstance(value, bool) or value is None:
        return math.nan
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        return _parse_number(value.strip())
    return math.nan


def _parse_number(text: str) -> float:
    if not text:
        return 0.0
    if _DECIMAL_RE.fullmatch(text):
        # float() overflows to inf for long literals, as Number() does
        return float(text.replace("Infinity", "inf"))
    radix = _RADIX_RE.fullmatch(text)
    if radix:
        try:
            value = int(radix.group(2), _RADIX_BASES[radix.group(1).lower()])
        except ValueError:
            return math.nan
        try:
            return float(value)
        except OverflowError:
            return math.inf
    return math.nan


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity."""
    return math.floor(value + 0.5)


def _field(row: Any, name: str, alias: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(alias, row.get(name))
    return getattr(row, name, None)


def sanitize_variants(rows: Iterable[Any], custom_stroke: bool) -> list[VariantConfig]:
    """Clean raw variant rows.

    Parameters
    ----------
    rows : iterable
        Mappings with ``sizePx`` / ``strokeWeight`` (or ``size_px`` /
        ``stroke_weight``) keys, or objects with ``size_px`` /
        ``stroke_weight`` attributes.
    custom_stroke : bool
        When set, every row needs a finite stroke weight > 0.  When not
        set, the stroke weight is ignored and defaults to 1.

    Returns
    -------
    list[VariantConfig]
        Valid rows in input order.  A row whose rounded size repeats an
        earlier row is dropped.  May be empty.
    """
    variants: list[VariantConfig] = []
    seen: set[int] = set()
    for index, row in enumerate(rows):
        size = to_number(_field(row, "size_px", "sizePx"))
        if not math.isfinite(size):
            logger.debug("Row %d dropped: size %r is not a number", index, size)
            continue
        size_px = round_half_up(size)
        if size_px <= 0:
            logger.debug("Row %d dropped: size %d is not positive", index, size_px)
            continue

        if custom_stroke:
            stroke_weight = to_number(_field(row, "stroke_weight", "strokeWeight"))
            if not math.isfinite(stroke_weight) or stroke_weight <= 0:
                logger.debug("Row %d dropped: stroke weight %r is invalid", index, stroke_weight)
                continue
        else:
            stroke_weight = DEFAULT_STROKE_WEIGHT

        if size_px in seen:
            logger.warning("Row %d dropped: size %dpx already requested", index, size_px)
            continue
        seen.add(size_px)
        variants.append(VariantConfig(size_px, stroke_weight))
    return variants
