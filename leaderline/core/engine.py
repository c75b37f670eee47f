"""
Per-line geometry pipeline: attachments + measured layouts -> LineGeometry.
Pure function of its inputs; the update loop and registry call into it.
"""

from __future__ import annotations

import logging

from leaderline.core.anchors import resolve_attachment
from leaderline.core.error_codes import DEGENERATE_GEOMETRY, NotReadyError
from leaderline.core.labels import layout_labels
from leaderline.core.markers import place_plug
from leaderline.core.options import dash_array
from leaderline.core.path import build_path
from leaderline.core.region import compute_region, include_drop_shadow, include_plugs
from leaderline.core.sockets import point_layout, resolve_sockets
from leaderline.core.types import (
    Attachment,
    ElementAttachment,
    ElementLayout,
    LineGeometry,
    LineOptions,
    Point,
    SocketPosition,
)

logger = logging.getLogger(__name__)


def _layout_for(attachment: Attachment, layout: ElementLayout | None) -> ElementLayout:
    """Rectangle used for auto-detection: the measured one, or a zero-size box at a fixed point."""
    if isinstance(attachment, ElementAttachment):
        if layout is None:
            raise NotReadyError(attachment.element)
        return layout
    return point_layout(attachment.point)


def resolve_endpoints(
    options: LineOptions,
    start_layout: ElementLayout | None = None,
    end_layout: ElementLayout | None = None,
) -> tuple[Point, Point, SocketPosition | None, SocketPosition | None]:
    """
    Resolve both attachments to points, replacing AUTO sockets first.
    Returns (start, end, start_socket, end_socket); sockets are None for point ends.
    Raises NotReadyError if an element end has no layout.
    """
    start_rect = _layout_for(options.start, start_layout)
    end_rect = _layout_for(options.end, end_layout)
    start_socket = options.start.socket if isinstance(options.start, ElementAttachment) else SocketPosition.CENTER
    end_socket = options.end.socket if isinstance(options.end, ElementAttachment) else SocketPosition.CENTER
    start_socket, end_socket = resolve_sockets(start_socket, end_socket, start_rect, end_rect)

    start = resolve_attachment(options.start, start_layout, start_socket)
    end = resolve_attachment(options.end, end_layout, end_socket)
    return (
        start,
        end,
        start_socket if isinstance(options.start, ElementAttachment) else None,
        end_socket if isinstance(options.end, ElementAttachment) else None,
    )


def geometry_from_points(
    options: LineOptions,
    start: Point,
    end: Point,
    start_socket: SocketPosition | None = None,
    end_socket: SocketPosition | None = None,
    measure_labels: bool = True,
) -> LineGeometry:
    """Path, plugs, region and labels for already-resolved endpoints."""
    if start == end:
        logger.debug("%s: start and end coincide at (%s, %s)", DEGENERATE_GEOMETRY, start.x, start.y)
    path = build_path(start, end, options.path)
    outline_width = options.outline.width if options.outline is not None else 0.0
    start_plug = place_plug(options.start_plug, start, end, is_end=False)
    end_plug = place_plug(options.end_plug, start, end, is_end=True)
    region = compute_region(start, end, options.path, options.stroke_width, outline_width, path=path)
    region = include_plugs(region, [start_plug, end_plug])
    region = include_drop_shadow(region, options.drop_shadow)
    return LineGeometry(
        start=start,
        end=end,
        start_socket=start_socket,
        end_socket=end_socket,
        path=path,
        start_plug=start_plug,
        end_plug=end_plug,
        region=region,
        labels=tuple(layout_labels(start, end, options.labels, measure=measure_labels)),
        color=options.color,
        stroke_width=options.stroke_width,
        opacity=options.opacity,
        dash_array=dash_array(options.dash),
        outline=options.outline,
        drop_shadow=options.drop_shadow,
    )


def compute_line_geometry(
    options: LineOptions,
    start_layout: ElementLayout | None = None,
    end_layout: ElementLayout | None = None,
    measure_labels: bool = True,
) -> LineGeometry:
    """Full geometry for one line. Raises NotReadyError if an element end is unmeasured."""
    start, end, start_socket, end_socket = resolve_endpoints(options, start_layout, end_layout)
    return geometry_from_points(options, start, end, start_socket, end_socket, measure_labels=measure_labels)


def try_line_geometry(
    options: LineOptions,
    start_layout: ElementLayout | None = None,
    end_layout: ElementLayout | None = None,
    measure_labels: bool = True,
) -> tuple[LineGeometry | None, str]:
    """(geometry, "") or (None, reason). A line that cannot resolve is simply not drawn."""
    try:
        return compute_line_geometry(options, start_layout, end_layout, measure_labels=measure_labels), ""
    except NotReadyError as e:
        return None, e.code
