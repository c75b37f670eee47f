"""
Anchor resolution: turn an attachment plus a measured element rectangle into a point.
Sockets resolve against the page-absolute rectangle (page_x, page_y, width, height).
"""

from __future__ import annotations

from leaderline.core.error_codes import NotReadyError
from leaderline.core.geometry import distance
from leaderline.core.types import (
    Attachment,
    ElementAttachment,
    ElementLayout,
    Point,
    SocketPosition,
)

# Every socket except AUTO, in tie-break order for closest_socket.
CONCRETE_SOCKETS: tuple[SocketPosition, ...] = (
    SocketPosition.CENTER,
    SocketPosition.TOP,
    SocketPosition.RIGHT,
    SocketPosition.BOTTOM,
    SocketPosition.LEFT,
    SocketPosition.TOP_LEFT,
    SocketPosition.TOP_RIGHT,
    SocketPosition.BOTTOM_LEFT,
    SocketPosition.BOTTOM_RIGHT,
)


def socket_point(layout: ElementLayout, socket: SocketPosition) -> Point:
    """Point of a socket on the rectangle. CENTER and an unresolved AUTO give the midpoint."""
    x, y, w, h = layout.page_x, layout.page_y, layout.width, layout.height
    if socket is SocketPosition.TOP:
        return Point(x + w / 2.0, y)
    if socket is SocketPosition.BOTTOM:
        return Point(x + w / 2.0, y + h)
    if socket is SocketPosition.LEFT:
        return Point(x, y + h / 2.0)
    if socket is SocketPosition.RIGHT:
        return Point(x + w, y + h / 2.0)
    if socket is SocketPosition.TOP_LEFT:
        return Point(x, y)
    if socket is SocketPosition.TOP_RIGHT:
        return Point(x + w, y)
    if socket is SocketPosition.BOTTOM_LEFT:
        return Point(x, y + h)
    if socket is SocketPosition.BOTTOM_RIGHT:
        return Point(x + w, y + h)
    return Point(x + w / 2.0, y + h / 2.0)


def all_socket_points(layout: ElementLayout) -> dict[SocketPosition, Point]:
    """All nine concrete socket points of a rectangle."""
    return {s: socket_point(layout, s) for s in CONCRETE_SOCKETS}


def closest_socket(layout: ElementLayout, target: Point) -> SocketPosition:
    """Concrete socket nearest to target; ties keep CONCRETE_SOCKETS order."""
    best = SocketPosition.CENTER
    best_d = float("inf")
    for socket, p in all_socket_points(layout).items():
        d = distance(p, target)
        if d < best_d:
            best_d = d
            best = socket
    return best


def resolve_attachment(
    attachment: Attachment,
    layout: ElementLayout | None = None,
    socket: SocketPosition | None = None,
) -> Point:
    """
    Concrete point for an attachment. `socket` overrides the attachment's own
    socket (used once AUTO has been resolved). Offsets are added last.
    Raises NotReadyError for an element attachment without a layout.
    """
    if isinstance(attachment, ElementAttachment):
        if layout is None:
            raise NotReadyError(attachment.element)
        p = socket_point(layout, socket if socket is not None else attachment.socket)
    else:
        p = attachment.point
    if attachment.offset is not None:
        p = p + attachment.offset
    return p
