"""Geometric operations for drawable nodes.

Provides:
    - Node-local shapely geometry for every drawable node type
    - Stroke outlining: stroke paint → filled region (center/inside/outside)
    - Outlined geometry of a node: fill region ∪ stroke region
    - Conversion of merged geometry back into vector paths

Used by:
    - Host flatten: merge a subtree into one outlined vector
    - Tests: checking flatten output bounds and areas

All coordinates in px, node-local (top-left origin, +Y down) unless a
function takes an explicit offset.
"""

from __future__ import annotations

import logging
from functools import reduce
from typing import Iterator

import numpy as np
from shapely import affinity
from shapely.geometry import LineString, Point, Polygon, box
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from icon_variants.scene.nodes import (
    BooleanOperationNode,
    EllipseNode,
    Filled,
    LineNode,
    PolygonNode,
    RectangleNode,
    SceneNode,
    StarNode,
    Stroked,
    VectorNode,
    VectorPath,
)

logger = logging.getLogger(__name__)

EMPTY = Polygon()

# Segments per quarter circle for ellipse and rounded-corner buffers
_QUAD_SEGS = 16


def regular_polygon_points(
    width: float, height: float, point_count: int, inner_ratio: float | None = None
) -> np.ndarray:
    """Vertices of a regular polygon (or star) inscribed in a box.

    Parameters
    ----------
    width, height : float
        Bounding box size.
    point_count : int
        Number of outer vertices, >= 3.
    inner_ratio : float | None
        For stars, inner radius as a fraction of the outer radius.
        ``None`` gives a plain polygon.

    Returns
    -------
    np.ndarray
        Vertices, shape (N, 2).  The first vertex points straight up.
    """
    steps = point_count * 2 if inner_ratio is not None else point_count
    angles = -np.pi / 2 + np.arange(steps) * (2 * np.pi / steps)
    radius = np.ones(steps)
    if inner_ratio is not None:
        radius[1::2] = inner_ratio
    xs = width / 2.0 + radius * np.cos(angles) * width / 2.0
    ys = height / 2.0 + radius * np.sin(angles) * height / 2.0
    return np.column_stack([xs, ys])


def _paths_region(paths: tuple[VectorPath, ...]) -> BaseGeometry:
    """Closed paths → region, combined with the even-odd rule."""
    polygons = []
    for path in paths:
        if path.closed and len(path.points) >= 3:
            poly = Polygon(path.points)
            if not poly.is_valid:
                poly = poly.buffer(0)
            polygons.append(poly)
    if not polygons:
        return EMPTY
    return reduce(lambda acc, poly: acc.symmetric_difference(poly), polygons)


def fill_region(node: SceneNode) -> BaseGeometry:
    """Region covered by the node's closed geometry (node-local)."""
    w, h = node.width, node.height
    if isinstance(node, RectangleNode):
        r = min(node.corner_radius, w / 2.0, h / 2.0)
        if r > 0:
            return box(r, r, w - r, h - r).buffer(r, quad_segs=_QUAD_SEGS)
        return box(0.0, 0.0, w, h)
    if isinstance(node, EllipseNode):
        circle = Point(0.0, 0.0).buffer(1.0, quad_segs=_QUAD_SEGS)
        return affinity.translate(affinity.scale(circle, w / 2.0, h / 2.0, origin=(0, 0)), w / 2.0, h / 2.0)
    if isinstance(node, StarNode):
        return Polygon(regular_polygon_points(w, h, node.point_count, node.inner_radius))
    if isinstance(node, PolygonNode):
        return Polygon(regular_polygon_points(w, h, node.point_count))
    if isinstance(node, VectorNode):
        return _paths_region(node.vector_paths)
    if isinstance(node, BooleanOperationNode):
        return boolean_region(node)
    return EMPTY


def open_lines(node: SceneNode) -> list[LineString]:
    """Open sub-paths of the node (node-local).  Only lines and vectors have any."""
    if isinstance(node, LineNode):
        return [LineString([(0.0, 0.0), (node.width, 0.0)])]
    if isinstance(node, VectorNode):
        return [LineString(path.points) for path in node.vector_paths if not path.closed]
    return []


def boolean_region(node: BooleanOperationNode) -> BaseGeometry:
    """Combine the children of a boolean operation into one region.

    Each child contributes its fill region (strokes of operands are
    ignored, as the operation's own stroke applies to the result).
    """
    regions = [
        affinity.translate(fill_region(child), child.x, child.y)
        for child in node.children
        if child.visible
    ]
    if not regions:
        return EMPTY
    op = node.boolean_operation
    if op == "UNION":
        return unary_union(regions)
    if op == "SUBTRACT":
        return regions[0].difference(unary_union(regions[1:])) if len(regions) > 1 else regions[0]
    if op == "INTERSECT":
        return reduce(lambda acc, region: acc.intersection(region), regions)
    return reduce(lambda acc, region: acc.symmetric_difference(region), regions)


def stroke_region(node: SceneNode) -> BaseGeometry:
    """Outline the node's stroke into a filled region (node-local).

    Closed outlines honour ``stroke_align``.  Open paths are always
    centered with flat caps.
    """
    if not isinstance(node, Stroked):
        return EMPTY
    weight = node.stroke_weight
    if weight <= 0 or not any(paint.visible for paint in node.strokes):
        return EMPTY

    parts = []
    region = fill_region(node)
    if not region.is_empty:
        if node.stroke_align == "CENTER":
            parts.append(region.boundary.buffer(weight / 2.0, quad_segs=_QUAD_SEGS))
        elif node.stroke_align == "INSIDE":
            parts.append(region.boundary.buffer(weight, quad_segs=_QUAD_SEGS).intersection(region))
        else:
            parts.append(region.boundary.buffer(weight, quad_segs=_QUAD_SEGS).difference(region))
    for line in open_lines(node):
        parts.append(line.buffer(weight / 2.0, cap_style="flat", quad_segs=_QUAD_SEGS))
    return unary_union(parts) if parts else EMPTY


def outlined_region(node: SceneNode) -> BaseGeometry:
    """Everything the node paints: visible fills plus outlined strokes."""
    parts = []
    if isinstance(node, Filled) and any(paint.visible for paint in node.fills):
        parts.append(fill_region(node))
    parts.append(stroke_region(node))
    parts = [part for part in parts if not part.is_empty]
    return unary_union(parts) if parts else EMPTY


def iter_polygons(geom: BaseGeometry) -> Iterator[Polygon]:
    """Yield the polygons of any (multi-part) geometry, skipping lower dimensions."""
    if geom.is_empty:
        return
    if isinstance(geom, Polygon):
        yield geom
    elif hasattr(geom, "geoms"):
        for part in geom.geoms:
            yield from iter_polygons(part)


def region_to_paths(geom: BaseGeometry, dx: float = 0.0, dy: float = 0.0) -> tuple[VectorPath, ...]:
    """Convert a region into closed vector paths (exteriors and holes).

    Coordinates are shifted by ``(dx, dy)``.  Paths are meant to be read
    back with the even-odd rule, which restores the holes.
    """
    paths = []
    for poly in iter_polygons(geom):
        for ring in (poly.exterior, *poly.interiors):
            coords = np.asarray(ring.coords)[:-1] + np.array([dx, dy])
            if len(coords) >= 3:
                paths.append(VectorPath(tuple(map(tuple, coords.tolist())), closed=True))
    return tuple(paths)
