"""
Socket auto-detection: pick the side of a rectangle that faces another rectangle.
"""

from __future__ import annotations

from leaderline.core.types import ElementLayout, Point, SocketPosition


def point_layout(p: Point) -> ElementLayout:
    """Zero-size rectangle at p, so fixed points can take part in auto-detection."""
    return ElementLayout(x=p.x, y=p.y, width=0.0, height=0.0, page_x=p.x, page_y=p.y)


def choose_socket(own: ElementLayout, other: ElementLayout) -> SocketPosition:
    """
    Side of `own` facing `other`, from the vector between their centers.
    |dx| > |dy| picks right/left; otherwise bottom/top, so equal magnitudes
    take the vertical branch. Coincident centers give CENTER.
    """
    a = own.center
    b = other.center
    dx = b.x - a.x
    dy = b.y - a.y
    if dx == 0 and dy == 0:
        return SocketPosition.CENTER
    if abs(dx) > abs(dy):
        return SocketPosition.RIGHT if dx > 0 else SocketPosition.LEFT
    return SocketPosition.BOTTOM if dy > 0 else SocketPosition.TOP


def resolve_sockets(
    start_socket: SocketPosition,
    end_socket: SocketPosition,
    start_rect: ElementLayout,
    end_rect: ElementLayout,
) -> tuple[SocketPosition, SocketPosition]:
    """Replace AUTO on either end independently; concrete sockets pass through."""
    if start_socket is SocketPosition.AUTO:
        start_socket = choose_socket(start_rect, end_rect)
    if end_socket is SocketPosition.AUTO:
        end_socket = choose_socket(end_rect, start_rect)
    return start_socket, end_socket
