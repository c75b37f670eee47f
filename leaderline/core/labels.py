"""
Label layout along the chord between two resolved endpoints.

Each slot has a fixed ratio along the straight chord (start 0.1, middle 0.5,
end 0.9). Caption and path labels sit at the chord midpoint, offset by a fixed
distance perpendicular to the chord: caption on the upper side, path on the
lower side. Curved paths use the same chord positions, so middle/caption/path
labels can drift from a strongly bowed curve. No collision resolution between
labels of one line is attempted.
"""

from __future__ import annotations

from typing import Any, Mapping

from leaderline.core.config import (
    DEFAULT_LABEL_BACKGROUND,
    DEFAULT_LABEL_COLOR,
    DEFAULT_LABEL_FONT_FAMILY,
    DEFAULT_LABEL_FONT_SIZE,
    DEFAULT_LABEL_PADDING,
    LABEL_PERPENDICULAR_OFFSET,
    LABEL_RATIO_END,
    LABEL_RATIO_MIDDLE,
    LABEL_RATIO_START,
)
from leaderline.core.geometry import lerp, unit_normal
from leaderline.core.text_metrics import label_box_size
from leaderline.core.types import LabelOptions, LabelPlacement, LabelSlot, Point

SLOT_ORDER: tuple[LabelSlot, ...] = (
    LabelSlot.START,
    LabelSlot.MIDDLE,
    LabelSlot.END,
    LabelSlot.CAPTION,
    LabelSlot.PATH,
)

SLOT_RATIOS: dict[LabelSlot, float] = {
    LabelSlot.START: LABEL_RATIO_START,
    LabelSlot.MIDDLE: LABEL_RATIO_MIDDLE,
    LabelSlot.END: LABEL_RATIO_END,
    LabelSlot.CAPTION: LABEL_RATIO_MIDDLE,
    LabelSlot.PATH: LABEL_RATIO_MIDDLE,
}

# +1 = upper side of the chord, -1 = lower side, 0 = on the chord
SLOT_SIDES: dict[LabelSlot, int] = {
    LabelSlot.START: 0,
    LabelSlot.MIDDLE: 0,
    LabelSlot.END: 0,
    LabelSlot.CAPTION: 1,
    LabelSlot.PATH: -1,
}


def normalize_label(value: Any) -> LabelOptions | None:
    """
    LabelOptions from a string, a mapping, or LabelOptions. None/empty -> None.
    Mapping keys: text, font_size, font_family, color, background_color, padding, offset.
    """
    if value is None or value == "":
        return None
    if isinstance(value, LabelOptions):
        return value
    if isinstance(value, str):
        return LabelOptions(text=value)
    if isinstance(value, Mapping):
        text = value.get("text")
        if not text:
            return None
        offset = value.get("offset")
        if offset is not None and not isinstance(offset, Point):
            if isinstance(offset, Mapping):
                offset = Point(float(offset.get("x", 0.0)), float(offset.get("y", 0.0)))
            else:
                offset = Point(float(offset[0]), float(offset[1]))
        return LabelOptions(
            text=str(text),
            font_size=float(value.get("font_size", DEFAULT_LABEL_FONT_SIZE)),
            font_family=str(value.get("font_family", DEFAULT_LABEL_FONT_FAMILY)),
            color=str(value.get("color", DEFAULT_LABEL_COLOR)),
            background_color=str(value.get("background_color", DEFAULT_LABEL_BACKGROUND)),
            padding=float(value.get("padding", DEFAULT_LABEL_PADDING)),
            offset=offset,
        )
    return LabelOptions(text=str(value))


def upper_normal(start: Point, end: Point) -> Point:
    """
    Unit normal of the chord pointing to its upper side (negative screen y).
    Vertical chords use the left side; a zero-length chord points straight up.
    """
    n = unit_normal(start, end)
    if n is None:
        return Point(0.0, -1.0)
    if n.y > 0 or (n.y == 0 and n.x > 0):
        return Point(-n.x, -n.y)
    return n


def label_position(start: Point, end: Point, slot: LabelSlot) -> Point:
    """Chord position of a slot, before any per-label offset."""
    pos = lerp(start, end, SLOT_RATIOS[slot])
    side = SLOT_SIDES[slot]
    if side == 0:
        return pos
    n = upper_normal(start, end)
    d = LABEL_PERPENDICULAR_OFFSET * side
    return Point(pos.x + n.x * d, pos.y + n.y * d)


def layout_labels(
    start: Point,
    end: Point,
    labels: Mapping[LabelSlot, LabelOptions],
    measure: bool = True,
) -> list[LabelPlacement]:
    """
    Resolve every present slot to a position, in start/middle/end/caption/path order.
    With measure=True each placement carries its padded text box size.
    """
    out: list[LabelPlacement] = []
    for slot in SLOT_ORDER:
        options = labels.get(slot)
        if options is None:
            continue
        pos = label_position(start, end, slot)
        if options.offset is not None:
            pos = pos + options.offset
        w, h = (0.0, 0.0)
        if measure:
            w, h = label_box_size(options.text, options.font_family, options.font_size, options.padding)
        out.append(LabelPlacement(slot=slot, text=options.text, position=pos, options=options, width=w, height=h))
    return out
