"""
Plain-dict snapshot of a computed line for drawing-surface and label consumers.
"""

from __future__ import annotations

from typing import Any

from leaderline.core.types import LabelPlacement, LineGeometry, OutlineOptions, PlacedPlug, Point


def _point(p: Point) -> dict[str, float]:
    return {"x": float(p.x), "y": float(p.y)}


def _outline(outline: OutlineOptions | None) -> dict[str, Any] | None:
    if outline is None:
        return None
    return {"color": outline.color, "width": outline.width, "opacity": outline.opacity}


def _plug(plug: PlacedPlug | None) -> dict[str, Any] | None:
    if plug is None:
        return None
    return {
        "type": plug.spec.type.value,
        "size": plug.shape.size,
        "color": plug.spec.color,
        "d": plug.shape.d,
        "closed": plug.shape.closed,
        "position": _point(plug.placement.position),
        "rotation_deg": plug.placement.rotation_deg,
        "transform": plug.transform,
        "outline": _outline(plug.spec.outline),
    }


def _label(label: LabelPlacement) -> dict[str, Any]:
    o = label.options
    return {
        "slot": label.slot.value,
        "text": label.text,
        "position": _point(label.position),
        "size": {"width": label.width, "height": label.height},
        "style": {
            "font_size": o.font_size,
            "font_family": o.font_family,
            "color": o.color,
            "background_color": o.background_color,
            "padding": o.padding,
        },
    }


def geometry_to_dict(geometry: LineGeometry) -> dict:
    """Structure handed to renderers: path, plugs, region, labels, stroke style."""
    r = geometry.region
    shadow = geometry.drop_shadow
    return {
        "start": _point(geometry.start),
        "end": _point(geometry.end),
        "sockets": {
            "start": geometry.start_socket.value if geometry.start_socket else None,
            "end": geometry.end_socket.value if geometry.end_socket else None,
        },
        "path": {
            "type": geometry.path.path_type.value,
            "d": geometry.path.d,
            "waypoints": [_point(p) for p in geometry.path.waypoints],
        },
        "plugs": {"start": _plug(geometry.start_plug), "end": _plug(geometry.end_plug)},
        "region": {"x": r.x, "y": r.y, "width": r.width, "height": r.height},
        "labels": [_label(lab) for lab in geometry.labels],
        "style": {
            "color": geometry.color,
            "stroke_width": geometry.stroke_width,
            "opacity": geometry.opacity,
            "dash_array": geometry.dash_array,
            "outline": _outline(geometry.outline),
            "drop_shadow": None if shadow is None else {
                "dx": shadow.dx,
                "dy": shadow.dy,
                "blur": shadow.blur,
                "color": shadow.color,
                "opacity": shadow.opacity,
            },
        },
    }
