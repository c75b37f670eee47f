# tests/test_markers.py
"""
Plug shapes, size clamping, terminus placement and transform strings.
"""

from __future__ import annotations

import pytest

from leaderline.core.markers import (
    build_plug_shape,
    clamp_plug_size,
    place_plug,
    plug_outline_points,
    plug_path_data,
    plug_placement,
    plug_transform,
)
from leaderline.core.types import PlugSpec, PlugType, Point

DRAWN_TYPES = [t for t in PlugType if t not in (PlugType.NONE, PlugType.BEHIND)]


def test_arrow1_path() -> None:
    assert plug_path_data(PlugType.ARROW1, 10) == "M 0 0 L 10 5 L 0 10 z"


def test_square_and_diamond_paths() -> None:
    assert plug_path_data(PlugType.SQUARE, 8) == "M 0 0 L 8 0 L 8 8 L 0 8 z"
    assert plug_path_data(PlugType.DIAMOND, 8) == "M 4 0 L 8 4 L 4 8 L 0 4 z"


def test_none_and_behind_have_no_local_shape() -> None:
    assert plug_path_data(PlugType.NONE, 10) == ""
    assert plug_path_data(PlugType.BEHIND, 10) == ""
    assert plug_outline_points(PlugType.NONE, 10) == []


@pytest.mark.parametrize("plug_type", DRAWN_TYPES)
def test_drawn_shapes_stay_in_local_box(plug_type: PlugType) -> None:
    shape = build_plug_shape(plug_type, 12)
    assert not shape.is_empty
    for part in plug_outline_points(plug_type, 12):
        for x, y in part:
            assert -1e-9 <= x <= 12 + 1e-9
            assert -1e-9 <= y <= 12 + 1e-9


def test_crosshair_is_open() -> None:
    assert build_plug_shape(PlugType.CROSSHAIR, 10).closed is False
    assert build_plug_shape(PlugType.DISC, 10).closed is True


def test_clamp_plug_size() -> None:
    assert clamp_plug_size(0) == 1
    assert clamp_plug_size(-5) == 1
    assert clamp_plug_size(500) == 100
    assert clamp_plug_size(12.5) == 12.5


def test_end_and_start_placement_angles() -> None:
    a, b = Point(0, 0), Point(0, 10)
    end = plug_placement(a, b, is_end=True)
    start = plug_placement(a, b, is_end=False)
    assert end.position == b and end.rotation_deg == pytest.approx(90.0)
    assert start.position == a and start.rotation_deg == pytest.approx(270.0)


def test_transform_string() -> None:
    placement = plug_placement(Point(80, 25), Point(300, 25), is_end=True)
    assert plug_transform(placement, 10) == "translate(300, 25) rotate(0) translate(-5, -5)"


def test_place_plug_none_returns_none() -> None:
    assert place_plug(PlugSpec(PlugType.NONE), Point(0, 0), Point(1, 0), is_end=True) is None


def test_place_plug_clamps_size() -> None:
    placed = place_plug(PlugSpec(PlugType.ARROW1, size=1000), Point(0, 0), Point(50, 0), is_end=True)
    assert placed is not None
    assert placed.shape.size == 100
    assert placed.transform.endswith("translate(-50, -50)")


def test_behind_plug_is_square_on_endpoint() -> None:
    placed = place_plug(PlugSpec(PlugType.BEHIND, size=4), Point(10, 10), Point(20, 10), is_end=False)
    assert placed is not None
    assert placed.transform == ""
    assert placed.shape.d == "M 8 8 L 12 8 L 12 12 L 8 12 z"
