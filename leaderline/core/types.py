"""
Dataclasses and enums for attachments, path/plug/label specs and computed line geometry.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Union

from leaderline.core.config import (
    DEFAULT_COLOR,
    DEFAULT_CURVATURE,
    DEFAULT_LABEL_BACKGROUND,
    DEFAULT_LABEL_COLOR,
    DEFAULT_LABEL_FONT_FAMILY,
    DEFAULT_LABEL_FONT_SIZE,
    DEFAULT_LABEL_PADDING,
    DEFAULT_OPACITY,
    DEFAULT_OUTLINE_COLOR,
    DEFAULT_OUTLINE_WIDTH,
    DEFAULT_PLUG_SIZE,
    DEFAULT_SHADOW_BLUR,
    DEFAULT_SHADOW_COLOR,
    DEFAULT_SHADOW_DX,
    DEFAULT_SHADOW_DY,
    DEFAULT_SHADOW_OPACITY,
    DEFAULT_STROKE_WIDTH,
)


class SocketPosition(str, Enum):
    """Named anchor positions on an element rectangle."""
    AUTO = "auto"
    CENTER = "center"
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"


class PathType(str, Enum):
    STRAIGHT = "straight"
    ARC = "arc"
    FLUID = "fluid"
    MAGNET = "magnet"
    GRID = "grid"


class PlugType(str, Enum):
    """Marker shapes drawn at a line terminus."""
    NONE = "none"
    BEHIND = "behind"
    DISC = "disc"
    SQUARE = "square"
    ARROW1 = "arrow1"
    ARROW2 = "arrow2"
    ARROW3 = "arrow3"
    DIAMOND = "diamond"
    HAND = "hand"
    CROSSHAIR = "crosshair"


class LabelSlot(str, Enum):
    START = "start"
    MIDDLE = "middle"
    END = "end"
    CAPTION = "caption"
    PATH = "path"


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)


@dataclass(frozen=True)
class ElementLayout:
    """
    Measured geometry of an element: local (x, y), size, page-absolute origin,
    and capture timestamp (ms). Sockets resolve against the page rectangle.
    """
    x: float
    y: float
    width: float
    height: float
    page_x: float
    page_y: float
    timestamp: float = 0.0

    @property
    def center(self) -> Point:
        return Point(self.page_x + self.width / 2.0, self.page_y + self.height / 2.0)

    def same_geometry(self, other: ElementLayout | None) -> bool:
        """True if other describes the same rectangle, ignoring the timestamp."""
        if other is None:
            return False
        return (
            self.x == other.x
            and self.y == other.y
            and self.width == other.width
            and self.height == other.height
            and self.page_x == other.page_x
            and self.page_y == other.page_y
        )


@dataclass(frozen=True)
class PointAttachment:
    """Fixed endpoint in drawing-surface coordinates."""
    point: Point
    offset: Point | None = None
    kind: Literal["point"] = "point"


@dataclass(frozen=True)
class ElementAttachment:
    """Endpoint bound to a measurable element; `element` is opaque to the engine."""
    element: Any
    socket: SocketPosition = SocketPosition.AUTO
    offset: Point | None = None
    kind: Literal["element"] = "element"

    def __post_init__(self) -> None:
        if not isinstance(self.socket, SocketPosition):
            from leaderline.core.options import parse_socket

            object.__setattr__(self, "socket", parse_socket(self.socket))


Attachment = Union[PointAttachment, ElementAttachment]


@dataclass(frozen=True)
class PathSpec:
    type: PathType = PathType.STRAIGHT
    curvature: float = DEFAULT_CURVATURE

    def __post_init__(self) -> None:
        # Loose callers pass plain strings; the engine compares enum members.
        if not isinstance(self.type, PathType):
            from leaderline.core.options import parse_path_type

            object.__setattr__(self, "type", parse_path_type(self.type))


@dataclass(frozen=True)
class PlugSpec:
    type: PlugType = PlugType.NONE
    size: float = DEFAULT_PLUG_SIZE
    color: str | None = None
    outline: OutlineOptions | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, PlugType):
            from leaderline.core.options import parse_plug_type

            object.__setattr__(self, "type", parse_plug_type(self.type))


@dataclass(frozen=True)
class LabelOptions:
    """Label text and pass-through presentation style."""
    text: str
    font_size: float = DEFAULT_LABEL_FONT_SIZE
    font_family: str = DEFAULT_LABEL_FONT_FAMILY
    color: str = DEFAULT_LABEL_COLOR
    background_color: str = DEFAULT_LABEL_BACKGROUND
    padding: float = DEFAULT_LABEL_PADDING
    offset: Point | None = None


@dataclass(frozen=True)
class OutlineOptions:
    enabled: bool = True
    color: str = DEFAULT_OUTLINE_COLOR
    width: float = DEFAULT_OUTLINE_WIDTH
    opacity: float = 1.0


@dataclass(frozen=True)
class DropShadowOptions:
    """Shifted, translucent copy of the line stroke drawn underneath it."""
    dx: float = DEFAULT_SHADOW_DX
    dy: float = DEFAULT_SHADOW_DY
    blur: float = DEFAULT_SHADOW_BLUR
    color: str = DEFAULT_SHADOW_COLOR
    opacity: float = DEFAULT_SHADOW_OPACITY


@dataclass(frozen=True)
class BoundingRegion:
    x: float
    y: float
    width: float
    height: float

    def contains(self, p: Point) -> bool:
        return self.x <= p.x <= self.x + self.width and self.y <= p.y <= self.y + self.height

    def as_bounds(self) -> tuple[float, float, float, float]:
        """Return (minx, miny, maxx, maxy)."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class LineOptions:
    """Caller-supplied description of one leader line."""
    start: Attachment
    end: Attachment
    path: PathSpec = field(default_factory=PathSpec)
    start_plug: PlugSpec = field(default_factory=PlugSpec)
    end_plug: PlugSpec = field(default_factory=lambda: PlugSpec(PlugType.ARROW1))
    labels: dict[LabelSlot, LabelOptions] = field(default_factory=dict)
    color: str = DEFAULT_COLOR
    stroke_width: float = DEFAULT_STROKE_WIDTH
    opacity: float = DEFAULT_OPACITY
    dash: bool | str | None = None
    outline: OutlineOptions | None = None
    drop_shadow: DropShadowOptions | None = None


# ----- Computed geometry -----

PathOp = Literal["M", "L", "C", "A"]


@dataclass(frozen=True)
class PathCommand:
    """One draw command. A carries (rx, ry, rotation, large_arc, sweep, x, y)."""
    op: PathOp
    values: tuple[float, ...]

    def to_svg(self) -> str:
        return " ".join([self.op] + [fmt_number(v) for v in self.values])


@dataclass(frozen=True)
class PathDescription:
    path_type: PathType
    commands: tuple[PathCommand, ...]
    waypoints: tuple[Point, ...] = ()

    @property
    def d(self) -> str:
        """SVG path data."""
        return " ".join(c.to_svg() for c in self.commands)

    @property
    def start(self) -> Point:
        v = self.commands[0].values
        return Point(v[-2], v[-1])

    @property
    def end(self) -> Point:
        v = self.commands[-1].values
        return Point(v[-2], v[-1])

    @property
    def is_degenerate(self) -> bool:
        return self.start == self.end and all(c.op in ("M", "L") for c in self.commands) and not self.waypoints


@dataclass(frozen=True)
class PlugShape:
    """Marker outline in local coordinates (0..size box); empty d means nothing to draw."""
    plug_type: PlugType
    size: float
    d: str
    closed: bool = True

    @property
    def is_empty(self) -> bool:
        return not self.d


@dataclass(frozen=True)
class PlugPlacement:
    position: Point
    rotation_deg: float


@dataclass(frozen=True)
class PlacedPlug:
    spec: PlugSpec
    shape: PlugShape
    placement: PlugPlacement
    transform: str


@dataclass(frozen=True)
class LabelPlacement:
    slot: LabelSlot
    text: str
    position: Point
    options: LabelOptions
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class LineGeometry:
    """Everything a drawing surface and label presenter need for one line."""
    start: Point
    end: Point
    start_socket: SocketPosition | None
    end_socket: SocketPosition | None
    path: PathDescription
    start_plug: PlacedPlug | None
    end_plug: PlacedPlug | None
    region: BoundingRegion
    labels: tuple[LabelPlacement, ...]
    color: str = DEFAULT_COLOR
    stroke_width: float = DEFAULT_STROKE_WIDTH
    opacity: float = DEFAULT_OPACITY
    dash_array: str | None = None
    outline: OutlineOptions | None = None
    drop_shadow: DropShadowOptions | None = None


def fmt_number(v: float) -> str:
    """Compact number for path data: integers without trailing .0."""
    f = float(v)
    if not math.isfinite(f):
        return str(f)
    if f == int(f):
        return str(int(f))
    return f"{f:.4f}".rstrip("0").rstrip(".")
