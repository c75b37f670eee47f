"""
Id-keyed store of line configurations with create/update/remove/show/hide.
Updates are queued and applied in one batch (debounced when an event loop is
running, or on flush_updates()). The store only holds configuration; geometry
stays a pure function of each line's options and layouts.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Mapping

from leaderline.core.config import BATCH_UPDATE_DELAY_S
from leaderline.core.engine import try_line_geometry
from leaderline.core.error_codes import INVALID_CONFIGURATION
from leaderline.core.options import line_options_from_dict
from leaderline.core.types import ElementLayout, LineGeometry, LineOptions

logger = logging.getLogger(__name__)


@dataclass
class LineRecord:
    id: str
    props: dict[str, Any]
    is_visible: bool = True
    last_update: float = field(default_factory=time.time)

    @property
    def options(self) -> LineOptions:
        return line_options_from_dict(self.props)


class LineRegistry:
    """Map-backed line manager. batch_updates=False applies every update immediately."""

    def __init__(self, batch_updates: bool = True, batch_delay: float = BATCH_UPDATE_DELAY_S) -> None:
        self.batch_updates = batch_updates
        self.batch_delay = batch_delay
        self._lines: dict[str, LineRecord] = {}
        self._queue: dict[str, dict[str, Any]] = {}
        self._flush_handle: asyncio.TimerHandle | None = None

    # ----- CRUD -----

    def create_line(self, line_id: str, props: Mapping[str, Any] | None = None) -> str:
        """Register (or replace) a line. Returns its id."""
        data = dict(props or {})
        self._lines[line_id] = LineRecord(id=line_id, props=data, is_visible=_visible(data))
        self._queue.pop(line_id, None)
        return line_id

    add_line = create_line

    def update_line(self, line_id: str, props: Mapping[str, Any]) -> None:
        """Merge props into a line; queued when batching."""
        if line_id not in self._lines:
            logger.debug("update_line: unknown line %r ignored", line_id)
            return
        if not self.batch_updates:
            self._apply(line_id, props)
            return
        self._queue.setdefault(line_id, {}).update(props)
        self._schedule_flush()

    def update_lines(self, updates: list[tuple[str, Mapping[str, Any]]]) -> None:
        """Apply several updates at once, bypassing the queue."""
        for line_id, props in updates:
            if line_id in self._lines:
                self._apply(line_id, props)

    def remove_line(self, line_id: str) -> None:
        if self._lines.pop(line_id, None) is None:
            logger.debug("remove_line: unknown line %r ignored", line_id)
        self._queue.pop(line_id, None)

    def show_line(self, line_id: str) -> None:
        self.update_line(line_id, {"opacity": 1.0})

    def hide_line(self, line_id: str) -> None:
        self.update_line(line_id, {"opacity": 0.0})

    def refresh_all(self) -> None:
        """Touch every line's last_update so consumers re-render."""
        now = time.time()
        for record in self._lines.values():
            record.last_update = now

    def clear(self) -> None:
        self._lines.clear()
        self._queue.clear()
        self._cancel_flush()

    clear_all = clear
    remove_all_lines = clear

    # ----- Queries -----

    def get_line(self, line_id: str) -> LineRecord | None:
        return self._lines.get(line_id)

    def has_line(self, line_id: str) -> bool:
        return line_id in self._lines

    def line_ids(self) -> list[str]:
        return list(self._lines)

    @property
    def lines(self) -> list[LineRecord]:
        return list(self._lines.values())

    def get_performance_metrics(self) -> dict[str, Any]:
        return {
            "total_lines": len(self._lines),
            "queued_updates": len(self._queue),
            "last_update_time": max((r.last_update for r in self._lines.values()), default=0.0),
        }

    def geometry(
        self,
        line_id: str,
        start_layout: ElementLayout | None = None,
        end_layout: ElementLayout | None = None,
    ) -> LineGeometry | None:
        """Geometry of a registered line; None if unknown, incomplete or not resolvable yet."""
        record = self._lines.get(line_id)
        if record is None:
            return None
        try:
            options = record.options
        except ValueError as e:
            logger.debug("line %r not drawn: %s: %s", line_id, INVALID_CONFIGURATION, e)
            return None
        geometry, reason = try_line_geometry(options, start_layout, end_layout)
        if geometry is None:
            logger.debug("line %r not drawn: %s", line_id, reason)
        return geometry

    # ----- Batching -----

    def flush_updates(self) -> int:
        """Apply all queued updates now. Returns how many lines were updated."""
        self._cancel_flush()
        queued = self._queue
        self._queue = {}
        applied = 0
        for line_id, props in queued.items():
            if line_id in self._lines:
                self._apply(line_id, props)
                applied += 1
        return applied

    def _apply(self, line_id: str, props: Mapping[str, Any]) -> None:
        record = self._lines[line_id]
        record.props = {**record.props, **props}
        record.is_visible = _visible(record.props)
        record.last_update = time.time()

    def _schedule_flush(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop: updates stay queued until flush_updates().
            return
        self._cancel_flush()
        self._flush_handle = loop.call_later(self.batch_delay, self.flush_updates)

    def _cancel_flush(self) -> None:
        if self._flush_handle is not None:
            self._flush_handle.cancel()
            self._flush_handle = None


def _visible(props: Mapping[str, Any]) -> bool:
    opacity = props.get("opacity", 1.0)
    try:
        return float(opacity) > 0.0
    except (TypeError, ValueError):
        return True
