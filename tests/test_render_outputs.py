# tests/test_render_outputs.py
"""
Drawing-surface outputs: dict snapshot, SVG export and PNG preview of one line.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from leaderline.core.engine import compute_line_geometry
from leaderline.core.markers import plug_polygons
from leaderline.core.render import dash_pattern, mpl_color, render_line_png
from leaderline.core.render_svg import export_line_svg, line_to_svg
from leaderline.core.serialize import geometry_to_dict
from leaderline.core.types import (
    DropShadowOptions,
    ElementAttachment,
    ElementLayout,
    LabelOptions,
    LabelSlot,
    LineGeometry,
    LineOptions,
    OutlineOptions,
    PathSpec,
    PathType,
    PlugSpec,
    PlugType,
    Point,
    PointAttachment,
    SocketPosition,
    fmt_number,
)

SVG = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def geometry() -> LineGeometry:
    opts = LineOptions(
        start=ElementAttachment("a", SocketPosition.RIGHT),
        end=ElementAttachment("b", SocketPosition.LEFT),
        path=PathSpec(PathType.FLUID, 0.2),
        start_plug=PlugSpec(PlugType.BEHIND),
        end_plug=PlugSpec(PlugType.ARROW1, color="#0000ff"),
        labels={
            LabelSlot.MIDDLE: LabelOptions("middle"),
            LabelSlot.CAPTION: LabelOptions("caption", background_color="#ffffcc"),
        },
        dash=True,
        outline=OutlineOptions(color="#ffffff", width=2),
    )
    a = ElementLayout(0, 0, 80, 50, 0, 0)
    b = ElementLayout(300, 0, 80, 50, 300, 0)
    return compute_line_geometry(opts, a, b, measure_labels=False)


def test_geometry_to_dict(geometry: LineGeometry) -> None:
    d = geometry_to_dict(geometry)
    assert d["start"] == {"x": 80.0, "y": 25.0}
    assert d["sockets"] == {"start": "right", "end": "left"}
    assert d["path"]["type"] == "fluid" and d["path"]["d"].startswith("M 80 25 C")
    assert len(d["path"]["waypoints"]) == 2
    assert d["plugs"]["start"]["type"] == "behind"
    assert d["plugs"]["end"]["color"] == "#0000ff"
    assert d["plugs"]["end"]["transform"].startswith("translate(300, 25)")
    assert [lab["slot"] for lab in d["labels"]] == ["middle", "caption"]
    assert d["style"]["dash_array"] == "5,5"
    assert d["style"]["outline"] == {"color": "#ffffff", "width": 2, "opacity": 1.0}
    assert set(d["region"]) == {"x", "y", "width", "height"}


def test_svg_structure(geometry: LineGeometry) -> None:
    root = ET.fromstring(line_to_svg(geometry))
    r = geometry.region
    assert root.get("viewBox").split() == [fmt_number(v) for v in (r.x, r.y, r.width, r.height)]
    paths = root.findall(f".//{SVG}path")
    # outline, line, behind plug, arrow plug
    assert len(paths) == 4
    line = paths[1]
    assert line.get("d") == geometry.path.d
    assert line.get("stroke-dasharray") == "5,5"
    assert float(paths[0].get("stroke-width")) == geometry.stroke_width + 4
    groups = [g for g in root.iter(f"{SVG}g") if g.get("transform")]
    assert len(groups) == 1
    assert groups[0].find(f"{SVG}path").get("fill") == "#0000ff"
    texts = [t.text for t in root.iter(f"{SVG}text")]
    assert texts == ["middle", "caption"]


def test_svg_label_background_only_when_set(geometry: LineGeometry) -> None:
    measured = compute_line_geometry(
        LineOptions(
            start=ElementAttachment("a", SocketPosition.RIGHT),
            end=ElementAttachment("b", SocketPosition.LEFT),
            labels={LabelSlot.CAPTION: LabelOptions("cap", background_color="#ffffcc")},
        ),
        ElementLayout(0, 0, 80, 50, 0, 0),
        ElementLayout(300, 0, 80, 50, 300, 0),
    )
    root = ET.fromstring(line_to_svg(measured))
    rects = list(root.iter(f"{SVG}rect"))
    assert len(rects) == 1 and rects[0].get("fill") == "#ffffcc"
    assert not list(ET.fromstring(line_to_svg(geometry)).iter(f"{SVG}rect"))


def test_export_svg_writes_file(geometry: LineGeometry, tmp_path: Path) -> None:
    out = export_line_svg(geometry, tmp_path / "line.svg")
    text = out.read_text(encoding="utf-8")
    assert text.startswith("<?xml")
    assert "<svg" in text


def test_plug_polygons_follow_placement(geometry: LineGeometry) -> None:
    assert geometry.end_plug is not None
    (tri,) = plug_polygons(geometry.end_plug)
    # Arrow tip (size, size/2) in the local box maps onto the line end shifted by size/2.
    assert tri[1][0] == pytest.approx(305.0)
    assert tri[1][1] == pytest.approx(25.0)
    assert geometry.start_plug is not None
    (square,) = plug_polygons(geometry.start_plug)
    assert square.min(axis=0).tolist() == [75.0, 20.0]


def test_render_png(geometry: LineGeometry, tmp_path: Path) -> None:
    out = tmp_path / "line.png"
    render_line_png(geometry, out, width_px=200, height_px=120)
    data = out.read_bytes()
    assert data[:8] == b"\x89PNG\r\n\x1a\n"


def test_render_png_degenerate(tmp_path: Path) -> None:
    p = PointAttachment(Point(10, 10))
    g = compute_line_geometry(LineOptions(start=p, end=p), measure_labels=False)
    out = tmp_path / "dot.png"
    render_line_png(g, out, width_px=64, height_px=64)
    assert out.stat().st_size > 0


@pytest.fixture
def styled() -> LineGeometry:
    opts = LineOptions(
        start=PointAttachment(Point(0, 0)),
        end=PointAttachment(Point(100, 0)),
        end_plug=PlugSpec(PlugType.SQUARE, size=20, outline=OutlineOptions(color="auto", width=2, opacity=0.5)),
        dash="8 4 2",
        drop_shadow=DropShadowOptions(),
    )
    return compute_line_geometry(opts, measure_labels=False)


def test_dash_pattern() -> None:
    assert dash_pattern(None) == "solid"
    assert dash_pattern("5,5") == (0, (5.0, 5.0))
    assert dash_pattern("8 4 2") == (0, (8.0, 4.0, 2.0, 8.0, 4.0, 2.0))
    assert dash_pattern("3, 1 4 1") == (0, (3.0, 1.0, 4.0, 1.0))
    assert dash_pattern("x,y") == (0, (5.0, 5.0))
    assert dash_pattern("0 0") == (0, (5.0, 5.0))


def test_mpl_color() -> None:
    assert mpl_color("#ff0000") == "#ff0000"
    assert mpl_color("auto") == "white"
    assert mpl_color("transparent") == "none"
    assert mpl_color("rgba(0,0,0,0.3)") == pytest.approx((0.0, 0.0, 0.0, 0.3))
    assert mpl_color("rgb(255, 0, 0)") == pytest.approx((1.0, 0.0, 0.0, 1.0))


def test_svg_drop_shadow_and_plug_outline(styled: LineGeometry) -> None:
    root = ET.fromstring(line_to_svg(styled))
    paths = root.findall(f".//{SVG}path")
    shadow, line = paths[0], paths[1]
    assert shadow.get("class") == "drop-shadow"
    assert shadow.get("d") == line.get("d") == styled.path.d
    assert shadow.get("transform") == "translate(2, 2)"
    assert shadow.get("stroke") == "rgba(0,0,0,0.3)" and shadow.get("fill") == "none"
    assert shadow.get("opacity") == "0.3"
    assert shadow.get("stroke-width") == fmt_number(styled.stroke_width)
    assert line.get("stroke-dasharray") == "8 4 2"
    plug = [g for g in root.iter(f"{SVG}g") if g.get("transform")][0].find(f"{SVG}path")
    assert plug.get("stroke") == "white"
    assert plug.get("stroke-width") == "4" and plug.get("stroke-opacity") == "0.5"


def test_dict_carries_shadow_and_plug_outline(styled: LineGeometry) -> None:
    d = geometry_to_dict(styled)
    assert d["style"]["drop_shadow"] == {"dx": 2.0, "dy": 2.0, "blur": 2.0, "color": "rgba(0,0,0,0.3)", "opacity": 0.3}
    assert d["plugs"]["end"]["outline"] == {"color": "auto", "width": 2, "opacity": 0.5}
    assert d["plugs"]["start"] is None


def test_render_png_with_dash_pattern_and_shadow(styled: LineGeometry, tmp_path: Path) -> None:
    out = tmp_path / "styled.png"
    render_line_png(styled, out, width_px=160, height_px=80)
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
