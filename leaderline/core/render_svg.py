"""
Export a computed line as a self-contained SVG: drop shadow, outline, path,
plugs (with their outlines), labels.
The viewBox is the line's bounding region.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from leaderline.core.types import LabelPlacement, LineGeometry, PlacedPlug, fmt_number

SVG_NS = "http://www.w3.org/2000/svg"


def _svg_color(color: str) -> str:
    return "white" if color == "auto" else color


def _plug_element(parent: ET.Element, plug: PlacedPlug, line_color: str) -> None:
    if plug.shape.is_empty:
        return
    color = plug.spec.color or line_color
    outline = plug.spec.outline
    attrs = {"d": plug.shape.d}
    if plug.shape.closed:
        attrs["fill"] = color
        if outline is not None:
            attrs.update(
                {
                    "stroke": _svg_color(outline.color),
                    "stroke-width": fmt_number(2.0 * outline.width),
                    "stroke-opacity": fmt_number(outline.opacity),
                    "stroke-linejoin": "round",
                    "paint-order": "stroke",
                }
            )
    else:
        attrs.update({"fill": "none", "stroke": color, "stroke-width": "1"})
    if plug.transform:
        g = ET.SubElement(parent, "g", {"transform": plug.transform})
        ET.SubElement(g, "path", attrs)
    else:
        ET.SubElement(parent, "path", attrs)


def _label_element(parent: ET.Element, label: LabelPlacement) -> None:
    o = label.options
    x, y = label.position.x, label.position.y
    if o.background_color != "transparent" and label.width > 0:
        ET.SubElement(
            parent,
            "rect",
            {
                "x": fmt_number(x - label.width / 2.0),
                "y": fmt_number(y - label.height / 2.0),
                "width": fmt_number(label.width),
                "height": fmt_number(label.height),
                "fill": o.background_color,
            },
        )
    text = ET.SubElement(
        parent,
        "text",
        {
            "x": fmt_number(x),
            "y": fmt_number(y),
            "font-family": o.font_family,
            "font-size": fmt_number(o.font_size),
            "fill": o.color,
            "text-anchor": "middle",
            "dominant-baseline": "central",
            "data-slot": label.slot.value,
        },
    )
    text.text = label.text


def line_to_svg(geometry: LineGeometry) -> str:
    """SVG document text for one line."""
    r = geometry.region
    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "width": fmt_number(r.width),
            "height": fmt_number(r.height),
            "viewBox": f"{fmt_number(r.x)} {fmt_number(r.y)} {fmt_number(r.width)} {fmt_number(r.height)}",
        },
    )
    g = ET.SubElement(root, "g", {"opacity": fmt_number(geometry.opacity)})

    shadow = geometry.drop_shadow
    if shadow is not None:
        shadow_attrs = {
            "d": geometry.path.d,
            "fill": "none",
            "stroke": shadow.color,
            "stroke-width": fmt_number(geometry.stroke_width),
            "opacity": fmt_number(shadow.opacity),
            "transform": f"translate({fmt_number(shadow.dx)}, {fmt_number(shadow.dy)})",
            "class": "drop-shadow",
        }
        if geometry.dash_array:
            shadow_attrs["stroke-dasharray"] = geometry.dash_array
        ET.SubElement(g, "path", shadow_attrs)

    if geometry.outline is not None:
        outline_color = _svg_color(geometry.outline.color)
        ET.SubElement(
            g,
            "path",
            {
                "d": geometry.path.d,
                "fill": "none",
                "stroke": outline_color,
                "stroke-opacity": fmt_number(geometry.outline.opacity),
                "stroke-width": fmt_number(geometry.stroke_width + 2.0 * geometry.outline.width),
                "stroke-linecap": "round",
            },
        )

    path_attrs = {
        "d": geometry.path.d,
        "fill": "none",
        "stroke": geometry.color,
        "stroke-width": fmt_number(geometry.stroke_width),
        "stroke-linecap": "round",
        "stroke-linejoin": "round",
    }
    if geometry.dash_array:
        path_attrs["stroke-dasharray"] = geometry.dash_array
    ET.SubElement(g, "path", path_attrs)

    for plug in (geometry.start_plug, geometry.end_plug):
        if plug is not None:
            _plug_element(g, plug, geometry.color)

    if geometry.labels:
        g_labels = ET.SubElement(root, "g", {"id": "labels"})
        for label in geometry.labels:
            _label_element(g_labels, label)

    return ET.tostring(root, encoding="unicode", method="xml")


def export_line_svg(geometry: LineGeometry, out_path: str | Path) -> Path:
    """Write the SVG for one line. Returns the written path."""
    out = Path(out_path)
    out.write_text('<?xml version="1.0" encoding="UTF-8"?>\n' + line_to_svg(geometry), encoding="utf-8")
    return out
