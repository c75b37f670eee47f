"""
Geometry helpers: distance, angle, chord interpolation, perpendiculars,
and shapely bounds of sampled curves.
"""

from __future__ import annotations

import math

import numpy as np
from shapely.geometry import LineString, MultiPoint
from shapely.geometry.base import BaseGeometry

from leaderline.core.types import Point


def distance(p1: Point, p2: Point) -> float:
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def angle_rad(p1: Point, p2: Point) -> float:
    """Angle of the vector p1 -> p2 in radians."""
    return math.atan2(p2.y - p1.y, p2.x - p1.x)


def angle_deg(p1: Point, p2: Point) -> float:
    return math.degrees(angle_rad(p1, p2))


def lerp(p1: Point, p2: Point, ratio: float) -> Point:
    """Point at `ratio` along the chord p1 -> p2."""
    return Point(p1.x + (p2.x - p1.x) * ratio, p1.y + (p2.y - p1.y) * ratio)


def unit_normal(p1: Point, p2: Point) -> Point | None:
    """
    Left-hand unit normal (-dy, dx) / |d| of the chord p1 -> p2.
    None for a zero-length chord.
    """
    d = distance(p1, p2)
    if d == 0:
        return None
    return Point(-(p2.y - p1.y) / d, (p2.x - p1.x) / d)


def trace_geometry(xy: np.ndarray) -> BaseGeometry:
    """Shapely geometry for a traced path; MultiPoint when it collapses to a single location."""
    if xy.shape[0] == 0:
        return MultiPoint()
    unique = np.unique(xy, axis=0)
    if unique.shape[0] < 2:
        return MultiPoint([tuple(unique[0])])
    return LineString([tuple(row) for row in xy])


def trace_bounds(xy: np.ndarray) -> tuple[float, float, float, float]:
    """Return (minx, miny, maxx, maxy) of a traced path."""
    geom = trace_geometry(xy)
    if geom.is_empty:
        return (0.0, 0.0, 0.0, 0.0)
    b = geom.bounds
    return (float(b[0]), float(b[1]), float(b[2]), float(b[3]))


def polyline_length(xy: np.ndarray) -> float:
    """Sum of segment lengths of an (N, 2) polyline."""
    if xy.shape[0] < 2:
        return 0.0
    return float(np.sum(np.hypot(np.diff(xy[:, 0]), np.diff(xy[:, 1]))))
