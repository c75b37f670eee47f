"""
Bounding region of the drawing surface for one line.

Endpoint bbox, grown by stroke width, then by a per-style overshoot allowance,
then by outline width, then by a fixed padding. If the traced curve still
leaves that rectangle (arcs scaled to a half circle, strongly bowed fluid
paths), the rectangle is grown to the curve bounds plus the same margins.
Plug outlines and the drop shadow copy are folded in afterwards, so the
region covers every point the path, markers, outline and shadow touch.
"""

from __future__ import annotations

import numpy as np

from leaderline.core.config import (
    ARC_EXTRA_SPACE,
    CURVED_EXTRA_SPACE,
    REGION_PADDING,
    STRAIGHT_EXTRA_SPACE,
)
from leaderline.core.geometry import trace_bounds
from leaderline.core.markers import plug_polygons
from leaderline.core.path import build_path, sample_path
from leaderline.core.types import (
    BoundingRegion,
    DropShadowOptions,
    PathDescription,
    PathSpec,
    PathType,
    PlacedPlug,
    Point,
)


def extra_space(path_type: PathType) -> float:
    """Overshoot allowance for a path style."""
    if path_type is PathType.ARC:
        return ARC_EXTRA_SPACE
    if path_type is PathType.STRAIGHT:
        return STRAIGHT_EXTRA_SPACE
    return CURVED_EXTRA_SPACE


def compute_region(
    start: Point,
    end: Point,
    spec: PathSpec,
    stroke_width: float,
    outline_width: float = 0.0,
    path: PathDescription | None = None,
    padding: float = REGION_PADDING,
) -> BoundingRegion:
    """
    Region containing the path, its stroke, outline and end decorations.
    Pass `path` when it is already built to avoid rebuilding it.
    """
    sw = max(0.0, stroke_width)
    ow = max(0.0, outline_width)
    pad = max(0.0, padding)
    margin = sw + ow + pad

    extra = extra_space(spec.type)
    minx = min(start.x, end.x) - sw - extra - ow - pad
    miny = min(start.y, end.y) - sw - extra - ow - pad
    maxx = max(start.x, end.x) + sw + extra + ow + pad
    maxy = max(start.y, end.y) + sw + extra + ow + pad

    if spec.type in (PathType.ARC, PathType.FLUID) and start != end:
        description = path if path is not None else build_path(start, end, spec)
        cminx, cminy, cmaxx, cmaxy = trace_bounds(sample_path(description))
        minx = min(minx, cminx - margin)
        miny = min(miny, cminy - margin)
        maxx = max(maxx, cmaxx + margin)
        maxy = max(maxy, cmaxy + margin)

    return BoundingRegion(x=minx, y=miny, width=max(0.0, maxx - minx), height=max(0.0, maxy - miny))


def include_points(region: BoundingRegion, xy: np.ndarray, margin: float = 0.0) -> BoundingRegion:
    """Smallest region containing `region` and every point of xy grown by margin."""
    if xy.shape[0] == 0:
        return region
    minx, miny, maxx, maxy = region.as_bounds()
    pminx, pminy, pmaxx, pmaxy = trace_bounds(xy)
    m = max(0.0, margin)
    minx = min(minx, pminx - m)
    miny = min(miny, pminy - m)
    maxx = max(maxx, pmaxx + m)
    maxy = max(maxy, pmaxy + m)
    return BoundingRegion(x=minx, y=miny, width=maxx - minx, height=maxy - miny)


def include_plugs(region: BoundingRegion, plugs: list[PlacedPlug | None], padding: float = REGION_PADDING) -> BoundingRegion:
    """Grow the region over placed plug outlines (plugs are centered on the endpoints)."""
    for plug in plugs:
        if plug is None:
            continue
        parts = plug_polygons(plug)
        if not parts:
            continue
        outline = plug.spec.outline.width if plug.spec.outline is not None else 0.0
        region = include_points(region, np.vstack(parts), margin=outline + padding)
    return region


def include_drop_shadow(region: BoundingRegion, shadow: DropShadowOptions | None) -> BoundingRegion:
    """Union of the region and its copy shifted by the shadow offset, grown by the blur."""
    if shadow is None:
        return region
    minx, miny, maxx, maxy = region.as_bounds()
    corners = np.array(
        [(minx + shadow.dx, miny + shadow.dy), (maxx + shadow.dx, maxy + shadow.dy)], dtype=float
    )
    return include_points(region, corners, margin=shadow.blur)
