"""
Path generation for the five path styles, plus sampling of a path into a polyline.

straight: one segment.
arc:      circular arc, radius = chord length * curvature, fixed sweep flag 1.
          A radius shorter than half the chord is scaled up by the renderer
          (SVG rule), giving a half circle.
fluid:    cubic Bezier, control points at 25%/75% of the chord shifted
          perpendicular by chord length * curvature.
magnet:   orthogonal route through the midpoint of the dominant axis
          (horizontal legs only when |dx| > |dy|).
grid:     orthogonal route that always goes horizontal, vertical, horizontal
          through the x midpoint, whatever the dominant axis.
"""

from __future__ import annotations

import math

import numpy as np

from leaderline.core.config import PATH_SAMPLES_PER_SEGMENT
from leaderline.core.geometry import distance, polyline_length, unit_normal
from leaderline.core.types import PathCommand, PathDescription, PathSpec, PathType, Point

ARC_SWEEP_FLAG: int = 1
ARC_LARGE_ARC_FLAG: int = 0


def _move(p: Point) -> PathCommand:
    return PathCommand("M", (p.x, p.y))


def _line(p: Point) -> PathCommand:
    return PathCommand("L", (p.x, p.y))


def _polyline(path_type: PathType, points: list[Point]) -> PathDescription:
    commands = [_move(points[0])] + [_line(p) for p in points[1:]]
    return PathDescription(path_type, tuple(commands), tuple(points[1:-1]))


def straight_path(start: Point, end: Point) -> PathDescription:
    return _polyline(PathType.STRAIGHT, [start, end])


def arc_path(start: Point, end: Point, curvature: float) -> PathDescription:
    r = distance(start, end) * abs(curvature)
    arc = PathCommand("A", (r, r, 0.0, ARC_LARGE_ARC_FLAG, ARC_SWEEP_FLAG, end.x, end.y))
    return PathDescription(PathType.ARC, (_move(start), arc))


def fluid_path(start: Point, end: Point, curvature: float) -> PathDescription:
    dx = end.x - start.x
    dy = end.y - start.y
    n = unit_normal(start, end)
    if n is None:
        return _polyline(PathType.FLUID, [start, end])
    bow = distance(start, end) * curvature
    cp1 = Point(start.x + dx * 0.25 + n.x * bow, start.y + dy * 0.25 + n.y * bow)
    cp2 = Point(start.x + dx * 0.75 + n.x * bow, start.y + dy * 0.75 + n.y * bow)
    curve = PathCommand("C", (cp1.x, cp1.y, cp2.x, cp2.y, end.x, end.y))
    return PathDescription(PathType.FLUID, (_move(start), curve), (cp1, cp2))


def magnet_path(start: Point, end: Point) -> PathDescription:
    mid_x = (start.x + end.x) / 2.0
    mid_y = (start.y + end.y) / 2.0
    if abs(end.x - start.x) > abs(end.y - start.y):
        pts = [start, Point(mid_x, start.y), Point(mid_x, end.y), end]
    else:
        pts = [start, Point(start.x, mid_y), Point(end.x, mid_y), end]
    return _polyline(PathType.MAGNET, pts)


def grid_path(start: Point, end: Point) -> PathDescription:
    mid_x = start.x + (end.x - start.x) * 0.5
    return _polyline(PathType.GRID, [start, Point(mid_x, start.y), Point(mid_x, end.y), end])


def degenerate_path(path_type: PathType, p: Point) -> PathDescription:
    """Zero-length path for coincident endpoints."""
    return PathDescription(path_type, (_move(p), _line(p)))


def build_path(start: Point, end: Point, spec: PathSpec) -> PathDescription:
    """Draw commands from start to end in the requested path style."""
    if start == end:
        return degenerate_path(spec.type, start)
    if spec.type is PathType.ARC:
        return arc_path(start, end, spec.curvature)
    if spec.type is PathType.FLUID:
        return fluid_path(start, end, spec.curvature)
    if spec.type is PathType.MAGNET:
        return magnet_path(start, end)
    if spec.type is PathType.GRID:
        return grid_path(start, end)
    return straight_path(start, end)


# ----- Sampling -----


def _sample_cubic(p0: Point, values: tuple[float, ...], n: int) -> np.ndarray:
    t = np.linspace(0.0, 1.0, n + 1)[1:, None]
    pts = np.array([(p0.x, p0.y), values[0:2], values[2:4], values[4:6]], dtype=float)
    mt = 1.0 - t
    return mt**3 * pts[0] + 3 * mt**2 * t * pts[1] + 3 * mt * t**2 * pts[2] + t**3 * pts[3]


def _sample_arc(p0: Point, values: tuple[float, ...], n: int) -> np.ndarray:
    """Endpoint-parameterized circular arc (no rotation) sampled into n points after p0."""
    r, _, _, large_arc, sweep, x2, y2 = values
    x1, y1 = p0.x, p0.y
    r = abs(r)
    if r == 0 or (x1 == x2 and y1 == y2):
        return np.array([(x2, y2)], dtype=float)
    hx = (x1 - x2) / 2.0
    hy = (y1 - y2) / 2.0
    lam = (hx * hx + hy * hy) / (r * r)
    if lam > 1.0:
        r *= math.sqrt(lam)
    num = r * r * r * r - r * r * hy * hy - r * r * hx * hx
    den = r * r * hy * hy + r * r * hx * hx
    coef = math.sqrt(max(0.0, num / den)) if den > 0 else 0.0
    if bool(large_arc) == bool(sweep):
        coef = -coef
    cxp = coef * hy
    cyp = -coef * hx
    cx = cxp + (x1 + x2) / 2.0
    cy = cyp + (y1 + y2) / 2.0
    theta1 = math.atan2((hy - cyp) / r, (hx - cxp) / r)
    theta2 = math.atan2((-hy - cyp) / r, (-hx - cxp) / r)
    dtheta = theta2 - theta1
    if sweep and dtheta < 0:
        dtheta += 2.0 * math.pi
    elif not sweep and dtheta > 0:
        dtheta -= 2.0 * math.pi
    t = np.linspace(theta1, theta1 + dtheta, n + 1)[1:]
    out = np.column_stack((cx + r * np.cos(t), cy + r * np.sin(t)))
    out[-1] = (x2, y2)
    return out


def sample_path(description: PathDescription, samples_per_segment: int = PATH_SAMPLES_PER_SEGMENT) -> np.ndarray:
    """(N, 2) polyline tracing the path; curves are subdivided, lines kept as-is."""
    n = max(1, int(samples_per_segment))
    parts: list[np.ndarray] = []
    current = Point(0.0, 0.0)
    for cmd in description.commands:
        if cmd.op == "M" or cmd.op == "L":
            parts.append(np.array([cmd.values[0:2]], dtype=float))
        elif cmd.op == "C":
            parts.append(_sample_cubic(current, cmd.values, n))
        elif cmd.op == "A":
            parts.append(_sample_arc(current, cmd.values, n))
        current = Point(cmd.values[-2], cmd.values[-1])
    if not parts:
        return np.zeros((0, 2))
    return np.vstack(parts)


def path_length(description: PathDescription) -> float:
    """Approximate drawn length of the path."""
    return polyline_length(sample_path(description))
