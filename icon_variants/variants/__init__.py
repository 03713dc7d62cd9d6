"""
Variant pipeline.

Sanitize the requested sizes, pick eligible icons, build one component
per size, assemble the components into a styled set, and place the set
on the canvas.

All sizes in px.
"""

from icon_variants.variants.assembler import assemble_component_set, set_name_for, style_component_set
from icon_variants.variants.builder import (
    FLATTENED_NAME,
    apply_stroke_weight,
    build_variant_component,
    compute_scale,
    lock_aspect_ratio,
)
from icon_variants.variants.layout import place_component_set
from icon_variants.variants.models import VARIANT_PROPERTY, VariantConfig
from icon_variants.variants.sanitizer import sanitize_variants
from icon_variants.variants.validator import filter_eligible, is_eligible

__all__ = [
    "FLATTENED_NAME",
    "VARIANT_PROPERTY",
    "VariantConfig",
    "apply_stroke_weight",
    "assemble_component_set",
    "build_variant_component",
    "compute_scale",
    "filter_eligible",
    "is_eligible",
    "lock_aspect_ratio",
    "place_component_set",
    "sanitize_variants",
    "set_name_for",
    "style_component_set",
]
