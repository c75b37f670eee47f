"""
Plug (marker) shapes and their placement at a path terminus.

Shapes are drawn in a local size x size box. Placement translates the box so
its center sits on the endpoint, then rotates it along the chord direction:
translate(x, y) rotate(r) translate(-size/2, -size/2).
The `behind` plug skips this mechanism and is drawn as a square centered
directly on the endpoint.
"""

from __future__ import annotations

import math

import numpy as np

from leaderline.core.config import MAX_PLUG_SIZE, MIN_PLUG_SIZE
from leaderline.core.geometry import angle_deg
from leaderline.core.types import (
    PlacedPlug,
    PlugPlacement,
    PlugShape,
    PlugSpec,
    PlugType,
    Point,
    fmt_number,
)


def _n(v: float) -> str:
    return fmt_number(v)


def plug_path_data(plug_type: PlugType, size: float) -> str:
    """SVG path data of a plug in its local box; empty for none/behind."""
    s = size
    h = size / 2.0
    if plug_type is PlugType.ARROW1:
        return f"M 0 0 L {_n(s)} {_n(h)} L 0 {_n(s)} z"
    if plug_type is PlugType.ARROW2:
        return f"M 0 {_n(h)} L {_n(s)} 0 L {_n(s * 0.8)} {_n(h)} L {_n(s)} {_n(s)} z"
    if plug_type is PlugType.ARROW3:
        return f"M 0 {_n(h)} L {_n(s)} 0 L {_n(s * 0.6)} {_n(h)} L {_n(s)} {_n(s)} z"
    if plug_type is PlugType.DISC:
        return (
            f"M {_n(h)} {_n(h)} m -{_n(h)} 0 "
            f"a {_n(h)} {_n(h)} 0 1 0 {_n(s)} 0 "
            f"a {_n(h)} {_n(h)} 0 1 0 -{_n(s)} 0"
        )
    if plug_type is PlugType.SQUARE:
        return f"M 0 0 L {_n(s)} 0 L {_n(s)} {_n(s)} L 0 {_n(s)} z"
    if plug_type is PlugType.DIAMOND:
        return f"M {_n(h)} 0 L {_n(s)} {_n(h)} L {_n(h)} {_n(s)} L 0 {_n(h)} z"
    if plug_type is PlugType.HAND:
        return (
            f"M 0 {_n(h)} L {_n(s * 0.6)} 0 L {_n(s)} {_n(h * 0.3)} "
            f"L {_n(s * 0.8)} {_n(h)} L {_n(s)} {_n(h * 1.7)} L {_n(s * 0.6)} {_n(s)} z"
        )
    if plug_type is PlugType.CROSSHAIR:
        return f"M {_n(h)} 0 L {_n(h)} {_n(s)} M 0 {_n(h)} L {_n(s)} {_n(h)}"
    return ""


def plug_outline_points(plug_type: PlugType, size: float) -> list[list[tuple[float, float]]]:
    """
    Vertex lists of the plug in its local box, one list per subpath, for raster
    previews. The disc is approximated by a 24-gon.
    """
    s = size
    h = size / 2.0
    if plug_type is PlugType.ARROW1:
        return [[(0, 0), (s, h), (0, s)]]
    if plug_type is PlugType.ARROW2:
        return [[(0, h), (s, 0), (s * 0.8, h), (s, s)]]
    if plug_type is PlugType.ARROW3:
        return [[(0, h), (s, 0), (s * 0.6, h), (s, s)]]
    if plug_type is PlugType.DISC:
        t = np.linspace(0.0, 2.0 * np.pi, 24, endpoint=False)
        return [[(float(h + h * np.cos(a)), float(h + h * np.sin(a))) for a in t]]
    if plug_type is PlugType.SQUARE:
        return [[(0, 0), (s, 0), (s, s), (0, s)]]
    if plug_type is PlugType.DIAMOND:
        return [[(h, 0), (s, h), (h, s), (0, h)]]
    if plug_type is PlugType.HAND:
        return [[(0, h), (s * 0.6, 0), (s, h * 0.3), (s * 0.8, h), (s, h * 1.7), (s * 0.6, s)]]
    if plug_type is PlugType.CROSSHAIR:
        return [[(h, 0), (h, s)], [(0, h), (s, h)]]
    return []


def build_plug_shape(plug_type: PlugType, size: float) -> PlugShape:
    d = plug_path_data(plug_type, size)
    return PlugShape(plug_type=plug_type, size=size, d=d, closed=plug_type is not PlugType.CROSSHAIR)


def clamp_plug_size(size: float) -> float:
    return max(MIN_PLUG_SIZE, min(MAX_PLUG_SIZE, float(size)))


def plug_placement(start: Point, end: Point, is_end: bool = True) -> PlugPlacement:
    """End plug: at end, along the chord angle. Start plug: at start, reversed."""
    angle = angle_deg(start, end)
    if is_end:
        return PlugPlacement(position=end, rotation_deg=angle)
    return PlugPlacement(position=start, rotation_deg=angle + 180.0)


def plug_transform(placement: PlugPlacement, size: float) -> str:
    """SVG transform moving the local box onto the terminus."""
    p = placement.position
    return (
        f"translate({_n(p.x)}, {_n(p.y)}) rotate({_n(placement.rotation_deg)}) "
        f"translate({_n(-size / 2.0)}, {_n(-size / 2.0)})"
    )


def behind_plug_square(point: Point, size: float) -> str:
    """Absolute square path centered on point, for the behind plug."""
    h = size / 2.0
    x0, y0 = point.x - h, point.y - h
    return f"M {_n(x0)} {_n(y0)} L {_n(x0 + size)} {_n(y0)} L {_n(x0 + size)} {_n(y0 + size)} L {_n(x0)} {_n(y0 + size)} z"


def place_plug(spec: PlugSpec, start: Point, end: Point, is_end: bool) -> PlacedPlug | None:
    """Shape and transform of a plug on one terminus; None for PlugType.NONE."""
    if spec.type is PlugType.NONE:
        return None
    size = clamp_plug_size(spec.size)
    placement = plug_placement(start, end, is_end)
    if spec.type is PlugType.BEHIND:
        shape = PlugShape(plug_type=PlugType.BEHIND, size=size, d=behind_plug_square(placement.position, size))
        return PlacedPlug(spec=spec, shape=shape, placement=placement, transform="")
    shape = build_plug_shape(spec.type, size)
    return PlacedPlug(spec=spec, shape=shape, placement=placement, transform=plug_transform(placement, size))


def plug_polygons(plug: PlacedPlug) -> list[np.ndarray]:
    """Plug vertex lists in surface coordinates, after the placement transform."""
    size = plug.shape.size
    if plug.spec.type is PlugType.BEHIND:
        p = plug.placement.position
        h = size / 2.0
        return [np.array([(p.x - h, p.y - h), (p.x + h, p.y - h), (p.x + h, p.y + h), (p.x - h, p.y + h)])]
    rad = math.radians(plug.placement.rotation_deg)
    rot = np.array([[math.cos(rad), -math.sin(rad)], [math.sin(rad), math.cos(rad)]])
    origin = np.array([plug.placement.position.x, plug.placement.position.y])
    out: list[np.ndarray] = []
    for part in plug_outline_points(plug.spec.type, size):
        local = np.array(part, dtype=float) - size / 2.0
        out.append(local @ rot.T + origin)
    return out
