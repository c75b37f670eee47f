"""
Parse loosely-typed line configuration (strings, mappings, tuples) into typed options.
Unrecognized enum values fall back to documented defaults with a warning:
path -> straight, plug -> none, socket -> center.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping, TypeVar

from leaderline.core.config import (
    DEFAULT_COLOR,
    DEFAULT_CURVATURE,
    DEFAULT_DASH_PATTERN,
    DEFAULT_OPACITY,
    DEFAULT_OUTLINE_COLOR,
    DEFAULT_OUTLINE_WIDTH,
    DEFAULT_PLUG_SIZE,
    DEFAULT_STROKE_WIDTH,
)
from leaderline.core.error_codes import INVALID_CONFIGURATION
from leaderline.core.labels import normalize_label
from leaderline.core.types import (
    Attachment,
    DropShadowOptions,
    ElementAttachment,
    LabelOptions,
    LabelSlot,
    LineOptions,
    OutlineOptions,
    PathSpec,
    PathType,
    PlugSpec,
    PlugType,
    Point,
    PointAttachment,
    SocketPosition,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

# Config keys for the five label slots, in layout order.
LABEL_KEYS: dict[str, LabelSlot] = {
    "start_label": LabelSlot.START,
    "middle_label": LabelSlot.MIDDLE,
    "end_label": LabelSlot.END,
    "caption_label": LabelSlot.CAPTION,
    "path_label": LabelSlot.PATH,
}


def _parse_enum(enum_cls: type[E], value: Any, default: E, field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return default
    key = str(value).strip().lower().replace("-", "_")
    # Accept camelCase corner names (topLeft, bottomRight) as well.
    if key not in enum_cls._value2member_map_:
        key = "".join("_" + c.lower() if c.isupper() else c for c in str(value).strip()).lstrip("_")
    member = enum_cls._value2member_map_.get(key)
    if member is None:
        logger.warning(
            "%s: unrecognized %s %r; using %r",
            INVALID_CONFIGURATION, field_name, value, default.value,
        )
        return default
    return member  # type: ignore[return-value]


def parse_socket(value: Any, default: SocketPosition = SocketPosition.CENTER) -> SocketPosition:
    return _parse_enum(SocketPosition, value, default, "socket")


def parse_path_type(value: Any) -> PathType:
    return _parse_enum(PathType, value, PathType.STRAIGHT, "path type")


def parse_plug_type(value: Any) -> PlugType:
    return _parse_enum(PlugType, value, PlugType.NONE, "plug type")


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def parse_path(value: Any, curvature: Any = None) -> PathSpec:
    """Path from a type string, a mapping {type, curvature}, or a PathSpec."""
    if isinstance(value, PathSpec):
        return value
    if isinstance(value, Mapping):
        c = value.get("curvature", curvature)
        return PathSpec(parse_path_type(value.get("type")), _as_float(c, DEFAULT_CURVATURE))
    return PathSpec(parse_path_type(value), _as_float(curvature, DEFAULT_CURVATURE))


def parse_plug(
    value: Any, size: Any = None, color: str | None = None, outline: OutlineOptions | None = None
) -> PlugSpec:
    if isinstance(value, PlugSpec):
        return value
    return PlugSpec(parse_plug_type(value), _as_float(size, DEFAULT_PLUG_SIZE), color, outline)


def parse_point(value: Any) -> Point | None:
    """
    Point from a Point, an (x, y) pair, or a mapping with x/y.
    Raises ValueError for anything else (scalars, strings, wrong arity).
    """
    if value is None:
        return None
    if isinstance(value, Point):
        return value
    if isinstance(value, Mapping):
        return Point(_as_float(value.get("x"), 0.0), _as_float(value.get("y"), 0.0))
    if isinstance(value, (str, bytes)):
        raise ValueError(f"Not a point: {value!r}")
    try:
        x, y = value
        return Point(float(x), float(y))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Not a point: {value!r}") from e


def parse_attachment(value: Any, socket: Any = None) -> Attachment:
    """
    Attachment from an existing attachment, a point-like value, or a mapping
    with either "point" or "element" (plus optional "socket" and "offset").
    `socket` applies when the mapping carries none.
    """
    if isinstance(value, (PointAttachment, ElementAttachment)):
        if isinstance(value, ElementAttachment) and socket is not None:
            return ElementAttachment(value.element, parse_socket(socket), value.offset)
        return value
    if isinstance(value, Mapping):
        offset = parse_point(value.get("offset"))
        if value.get("element") is not None:
            sock = value.get("socket", socket)
            return ElementAttachment(
                value["element"],
                parse_socket(sock, default=SocketPosition.CENTER) if sock is not None else SocketPosition.AUTO,
                offset,
            )
        if "point" in value:
            return PointAttachment(parse_point(value["point"]), offset)  # type: ignore[arg-type]
        return PointAttachment(parse_point(value), offset)  # type: ignore[arg-type]
    return PointAttachment(parse_point(value))  # type: ignore[arg-type]


def normalize_outline(value: Any, default_color: str | None = None) -> OutlineOptions | None:
    """Outline from True/False or a mapping; None when disabled or absent."""
    if not value:
        return None
    if value is True:
        return OutlineOptions(True, default_color or DEFAULT_OUTLINE_COLOR, DEFAULT_OUTLINE_WIDTH, 1.0)
    if isinstance(value, OutlineOptions):
        return value if value.enabled else None
    if isinstance(value, Mapping):
        if value.get("enabled") is False:
            return None
        width = value.get("width") or value.get("size") or DEFAULT_OUTLINE_WIDTH
        return OutlineOptions(
            True,
            value.get("color") or default_color or DEFAULT_OUTLINE_COLOR,
            _as_float(width, DEFAULT_OUTLINE_WIDTH),
            _as_float(value.get("opacity") or 1.0, 1.0),
        )
    return None


def normalize_drop_shadow(value: Any) -> DropShadowOptions | None:
    """Drop shadow from True/False or a mapping {dx, dy, blur, color, opacity}."""
    if not value:
        return None
    if isinstance(value, DropShadowOptions):
        return value
    if isinstance(value, Mapping):
        base = DropShadowOptions()
        return DropShadowOptions(
            dx=_as_float(value.get("dx"), base.dx),
            dy=_as_float(value.get("dy"), base.dy),
            blur=max(0.0, _as_float(value.get("blur"), base.blur)),
            color=str(value.get("color") or base.color),
            opacity=_as_float(value.get("opacity"), base.opacity),
        )
    return DropShadowOptions()


def dash_array(dash: Any) -> str | None:
    """SVG dash array from True/False, a pattern string, or a mapping with "pattern"."""
    if isinstance(dash, bool):
        return DEFAULT_DASH_PATTERN if dash else None
    if isinstance(dash, str):
        return dash or None
    if isinstance(dash, Mapping) and dash.get("pattern"):
        return str(dash["pattern"])
    return None


def parse_labels(config: Mapping[str, Any]) -> dict[LabelSlot, LabelOptions]:
    labels: dict[LabelSlot, LabelOptions] = {}
    for key, slot in LABEL_KEYS.items():
        label = normalize_label(config.get(key))
        if label is not None:
            labels[slot] = label
    return labels


def line_options_from_dict(config: Mapping[str, Any]) -> LineOptions:
    """
    Build LineOptions from a flat config mapping. Keys: start, end, start_socket,
    end_socket, path, curvature, start_plug, end_plug, start_plug_size,
    end_plug_size, start_plug_color, end_plug_color, color, stroke_width,
    opacity, dash, outline, start_plug_outline, end_plug_outline, drop_shadow
    and the five *_label keys.
    Raises ValueError when start or end is missing or is not a point, element
    or attachment; the message names the offending key.
    """
    if config.get("start") is None or config.get("end") is None:
        raise ValueError("Line config requires both 'start' and 'end'")
    ends: dict[str, Attachment] = {}
    for key in ("start", "end"):
        try:
            ends[key] = parse_attachment(config[key], config.get(f"{key}_socket"))
        except ValueError as e:
            raise ValueError(f"Line config '{key}' is not a point, element or attachment: {config[key]!r}") from e
    color = config.get("color") or DEFAULT_COLOR
    return LineOptions(
        start=ends["start"],
        end=ends["end"],
        path=parse_path(config.get("path"), config.get("curvature")),
        start_plug=parse_plug(
            config.get("start_plug", PlugType.NONE),
            config.get("start_plug_size"),
            config.get("start_plug_color"),
            normalize_outline(config.get("start_plug_outline")),
        ),
        end_plug=parse_plug(
            config.get("end_plug", PlugType.ARROW1),
            config.get("end_plug_size"),
            config.get("end_plug_color"),
            normalize_outline(config.get("end_plug_outline")),
        ),
        labels=parse_labels(config),
        color=color,
        stroke_width=max(0.0, _as_float(config.get("stroke_width"), DEFAULT_STROKE_WIDTH)),
        opacity=_as_float(config.get("opacity"), DEFAULT_OPACITY),
        dash=config.get("dash"),
        outline=normalize_outline(config.get("outline"), color),
        drop_shadow=normalize_drop_shadow(config.get("drop_shadow")),
    )
