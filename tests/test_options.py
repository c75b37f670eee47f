# tests/test_options.py
"""
Loose configuration parsing: enum fallbacks with warnings, attachments,
dash, outline and drop shadow normalization, and full line config dicts.
"""

from __future__ import annotations

import logging

import pytest

from leaderline.core.error_codes import INVALID_CONFIGURATION
from leaderline.core.options import (
    dash_array,
    line_options_from_dict,
    normalize_drop_shadow,
    normalize_outline,
    parse_attachment,
    parse_path,
    parse_path_type,
    parse_plug_type,
    parse_point,
    parse_socket,
)
from leaderline.core.types import (
    DropShadowOptions,
    ElementAttachment,
    LabelSlot,
    PathType,
    PlugType,
    Point,
    PointAttachment,
    SocketPosition,
)


def test_enum_spellings() -> None:
    assert parse_socket("topLeft") is SocketPosition.TOP_LEFT
    assert parse_socket("BOTTOM_RIGHT") is SocketPosition.BOTTOM_RIGHT
    assert parse_socket("bottom-left") is SocketPosition.BOTTOM_LEFT
    assert parse_path_type("Fluid") is PathType.FLUID
    assert parse_plug_type("arrow2") is PlugType.ARROW2
    assert parse_plug_type(PlugType.DISC) is PlugType.DISC


def test_unknown_values_fall_back_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="leaderline.core.options"):
        assert parse_path_type("zigzag") is PathType.STRAIGHT
        assert parse_plug_type("star") is PlugType.NONE
        assert parse_socket("middle-ish") is SocketPosition.CENTER
    assert sum(INVALID_CONFIGURATION in r.getMessage() for r in caplog.records) == 3


def test_none_means_default_without_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        assert parse_path_type(None) is PathType.STRAIGHT
    assert not caplog.records


def test_parse_path_forms() -> None:
    assert parse_path("arc", 0.5).curvature == 0.5
    spec = parse_path({"type": "fluid", "curvature": 0.3})
    assert spec.type is PathType.FLUID and spec.curvature == 0.3
    assert parse_path(None).type is PathType.STRAIGHT


def test_parse_attachment_forms() -> None:
    el = object()
    a = parse_attachment({"element": el})
    assert isinstance(a, ElementAttachment) and a.socket is SocketPosition.AUTO
    b = parse_attachment({"element": el, "socket": "right", "offset": {"x": 1, "y": 2}})
    assert isinstance(b, ElementAttachment)
    assert b.socket is SocketPosition.RIGHT and b.offset == Point(1, 2)
    c = parse_attachment((3, 4))
    assert isinstance(c, PointAttachment) and c.point == Point(3, 4)
    d = parse_attachment({"point": [1, 1], "offset": (2, 2)})
    assert isinstance(d, PointAttachment) and d.offset == Point(2, 2)
    e = parse_attachment(ElementAttachment(el), socket="top")
    assert e.socket is SocketPosition.TOP


def test_dash_array() -> None:
    assert dash_array(True) == "5,5"
    assert dash_array(False) is None
    assert dash_array(None) is None
    assert dash_array("2,4") == "2,4"
    assert dash_array({"pattern": "1,3"}) == "1,3"


def test_normalize_outline() -> None:
    assert normalize_outline(None) is None
    assert normalize_outline(False) is None
    assert normalize_outline({"enabled": False}) is None
    on = normalize_outline(True)
    assert on is not None and on.color == "auto" and on.width == 1
    custom = normalize_outline({"color": "#fff", "size": 3, "opacity": 0.5})
    assert custom is not None
    assert (custom.color, custom.width, custom.opacity) == ("#fff", 3.0, 0.5)


def test_line_options_from_dict() -> None:
    el = object()
    opts = line_options_from_dict(
        {
            "start": {"element": el},
            "end": (10, 20),
            "start_socket": "right",
            "path": "magnet",
            "end_plug": "disc",
            "end_plug_size": 6,
            "color": "#123456",
            "stroke_width": 3,
            "dash": True,
            "middle_label": "m",
            "caption_label": {"text": "c", "color": "#f00"},
        }
    )
    assert isinstance(opts.start, ElementAttachment) and opts.start.socket is SocketPosition.RIGHT
    assert isinstance(opts.end, PointAttachment)
    assert opts.path.type is PathType.MAGNET
    assert opts.start_plug.type is PlugType.NONE
    assert opts.end_plug.type is PlugType.DISC and opts.end_plug.size == 6
    assert opts.color == "#123456" and opts.stroke_width == 3
    assert set(opts.labels) == {LabelSlot.MIDDLE, LabelSlot.CAPTION}
    assert opts.labels[LabelSlot.CAPTION].color == "#f00"


def test_line_options_defaults() -> None:
    opts = line_options_from_dict({"start": (0, 0), "end": (1, 1)})
    assert opts.end_plug.type is PlugType.ARROW1
    assert opts.path.type is PathType.STRAIGHT
    assert opts.outline is None and opts.labels == {}


def test_line_options_requires_both_ends() -> None:
    with pytest.raises(ValueError):
        line_options_from_dict({"start": (0, 0)})


@pytest.mark.parametrize("bad", [5, "abc", b"xy", (1, 2, 3), ("a", "b"), object()])
def test_parse_point_rejects_non_points(bad: object) -> None:
    with pytest.raises(ValueError, match="Not a point"):
        parse_point(bad)


@pytest.mark.parametrize("key", ["start", "end"])
@pytest.mark.parametrize("bad", [5, "abc", (1, 2, 3)])
def test_line_options_names_bad_end(key: str, bad: object) -> None:
    config = {"start": (0, 0), "end": (1, 1), key: bad}
    with pytest.raises(ValueError, match=f"'{key}'"):
        line_options_from_dict(config)


def test_plug_outlines_from_dict() -> None:
    opts = line_options_from_dict(
        {
            "start": (0, 0),
            "end": (100, 0),
            "start_plug": "disc",
            "start_plug_outline": True,
            "end_plug_outline": {"color": "#f00", "width": 3, "opacity": 0.5},
        }
    )
    assert opts.start_plug.outline is not None and opts.start_plug.outline.width > 0
    end = opts.end_plug.outline
    assert end is not None and (end.color, end.width, end.opacity) == ("#f00", 3.0, 0.5)
    plain = line_options_from_dict({"start": (0, 0), "end": (1, 1)})
    assert plain.start_plug.outline is None and plain.end_plug.outline is None


def test_normalize_drop_shadow() -> None:
    assert normalize_drop_shadow(None) is None
    assert normalize_drop_shadow(False) is None
    default = normalize_drop_shadow(True)
    assert default == DropShadowOptions()
    assert (default.dx, default.dy, default.blur) == (2.0, 2.0, 2.0)
    assert default.color == "rgba(0,0,0,0.3)" and default.opacity == 0.3
    custom = normalize_drop_shadow({"dx": -4, "blur": -1, "color": "#333"})
    assert custom == DropShadowOptions(dx=-4.0, dy=2.0, blur=0.0, color="#333", opacity=0.3)
    opts = line_options_from_dict({"start": (0, 0), "end": (1, 1), "drop_shadow": {"dy": 6}})
    assert opts.drop_shadow is not None and opts.drop_shadow.dy == 6.0
