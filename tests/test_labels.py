# tests/test_labels.py
"""
Label layout: chord ratios, caption/path perpendicular offsets, per-label
offsets, slot order and label normalization.
"""

from __future__ import annotations

from leaderline.core.config import LABEL_PERPENDICULAR_OFFSET
from leaderline.core.labels import label_position, layout_labels, normalize_label, upper_normal
from leaderline.core.types import LabelOptions, LabelSlot, Point


def test_ratio_positions_on_horizontal_chord() -> None:
    a, b = Point(0, 0), Point(100, 0)
    assert label_position(a, b, LabelSlot.START) == Point(10, 0)
    assert label_position(a, b, LabelSlot.MIDDLE) == Point(50, 0)
    assert label_position(a, b, LabelSlot.END) == Point(90, 0)


def test_caption_above_and_path_below() -> None:
    a, b = Point(0, 0), Point(100, 0)
    d = LABEL_PERPENDICULAR_OFFSET
    assert label_position(a, b, LabelSlot.CAPTION) == Point(50, -d)
    assert label_position(a, b, LabelSlot.PATH) == Point(50, d)
    # Direction of travel does not flip the sides.
    assert label_position(b, a, LabelSlot.CAPTION) == Point(50, -d)


def test_vertical_chord_caption_on_left() -> None:
    assert upper_normal(Point(0, 0), Point(0, 100)) == Point(-1, 0)
    assert upper_normal(Point(0, 100), Point(0, 0)) == Point(-1, 0)


def test_zero_chord_points_up() -> None:
    p = Point(3, 3)
    assert upper_normal(p, p) == Point(0, -1)
    assert label_position(p, p, LabelSlot.MIDDLE) == p


def test_layout_order_and_offset() -> None:
    labels = {
        LabelSlot.PATH: LabelOptions("p"),
        LabelSlot.START: LabelOptions("s", offset=Point(0, 5)),
        LabelSlot.MIDDLE: LabelOptions("m"),
    }
    out = layout_labels(Point(0, 0), Point(100, 0), labels, measure=False)
    assert [lab.slot for lab in out] == [LabelSlot.START, LabelSlot.MIDDLE, LabelSlot.PATH]
    assert out[0].position == Point(10, 5)
    assert out[0].width == 0 and out[0].height == 0


def test_layout_measures_boxes() -> None:
    out = layout_labels(Point(0, 0), Point(100, 0), {LabelSlot.MIDDLE: LabelOptions("Hello", padding=4)})
    assert out[0].width > 8
    assert out[0].height > 8
    # Measuring never moves a label.
    assert out[0].position == Point(50, 0)


def test_normalize_label_forms() -> None:
    assert normalize_label(None) is None
    assert normalize_label("") is None
    assert normalize_label({"text": ""}) is None
    assert normalize_label("hi") == LabelOptions("hi")
    lab = normalize_label({"text": "x", "font_size": 20, "background_color": "#fff", "offset": (1, 2)})
    assert lab is not None
    assert lab.font_size == 20
    assert lab.background_color == "#fff"
    assert lab.offset == Point(1, 2)
    assert lab.font_family == "Arial" and lab.padding == 4
