"""
Reactive update loop for one line: poll element measurements on a fixed
interval and recompute geometry only when a rectangle actually changed.

States: unmeasured -> measuring -> ready -> (stale -> measuring)* -> torn_down.
Runs on asyncio; all state is owned by the event loop thread, so no locks.
A measurement that fails (exception or None) is logged and retried on the
next tick. Update requests arriving while a measurement is in flight are
coalesced into a single follow-up round. After close() no further work runs
and results of an in-flight measurement are dropped.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from leaderline.core.config import POLL_INTERVAL_S
from leaderline.core.engine import compute_line_geometry, try_line_geometry
from leaderline.core.error_codes import MEASUREMENT_FAILURE
from leaderline.core.types import (
    Attachment,
    ElementAttachment,
    ElementLayout,
    LineGeometry,
    LineOptions,
)

logger = logging.getLogger(__name__)

Measure = Callable[[Any], Awaitable[Optional[ElementLayout]]]
UpdateCallback = Callable[[LineGeometry], None]


class LineState(str, Enum):
    UNMEASURED = "unmeasured"
    MEASURING = "measuring"
    READY = "ready"
    STALE = "stale"
    TORN_DOWN = "torn_down"


def _same_target(a: Attachment, b: Attachment) -> bool:
    """True if both attachments refer to the same element (or are both fixed points)."""
    if isinstance(a, ElementAttachment) and isinstance(b, ElementAttachment):
        return a.element is b.element
    return not isinstance(a, ElementAttachment) and not isinstance(b, ElementAttachment)


class LineUpdater:
    """
    Keeps one line's geometry in sync with its endpoints.

    measure: async callable returning the element's ElementLayout, or None when
        the element cannot be measured right now.
    on_update: called with the new LineGeometry after every recomputation.
    """

    def __init__(
        self,
        options: LineOptions,
        measure: Measure | None = None,
        on_update: UpdateCallback | None = None,
        poll_interval: float = POLL_INTERVAL_S,
        measure_labels: bool = True,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        self._options = options
        self._measure = measure
        self._on_update = on_update
        self.poll_interval = poll_interval
        self.measure_labels = measure_labels
        self._state = LineState.UNMEASURED
        self._layouts: dict[str, ElementLayout] = {}
        self._geometry: LineGeometry | None = None
        self._generation = 0
        self._inflight: asyncio.Task | None = None
        self._rerun = False
        self._poll_task: asyncio.Task | None = None
        self.update_count = 0
        self.failure_count = 0

    # ----- Public state -----

    @property
    def state(self) -> LineState:
        return self._state

    @property
    def geometry(self) -> LineGeometry | None:
        """Last computed geometry; None until both ends have resolved."""
        return self._geometry

    @property
    def options(self) -> LineOptions:
        return self._options

    @property
    def is_running(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    @property
    def has_pending_update(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    # ----- Lifecycle -----

    def start(self) -> None:
        """Begin measuring and polling. Must be called with a running event loop."""
        if self._state is LineState.TORN_DOWN:
            raise RuntimeError("LineUpdater has been closed")
        if self._poll_task is None:
            self._poll_task = asyncio.get_running_loop().create_task(self._poll())
        self.request_update()

    def close(self) -> None:
        """Tear down: cancel the poll timer now; in-flight results are discarded."""
        if self._state is LineState.TORN_DOWN:
            return
        self._state = LineState.TORN_DOWN
        self._rerun = False
        if self._poll_task is not None:
            self._poll_task.cancel()

    async def aclose(self) -> None:
        """close() and wait until the poll task has finished."""
        self.close()
        task = self._poll_task
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def __aenter__(self) -> LineUpdater:
        self.start()
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    # ----- Options -----

    def set_options(self, options: LineOptions) -> None:
        """
        Replace the line options. A change of start/end element identity drops
        cached layouts and measures again; any other change recomputes from
        the cached layouts right away.
        """
        if self._state is LineState.TORN_DOWN:
            return
        old = self._options
        self._options = options
        if not (_same_target(old.start, options.start) and _same_target(old.end, options.end)):
            self._generation += 1
            self._layouts = {}
            self._geometry = None
            if self._poll_task is not None:
                self._state = LineState.MEASURING
                self.request_update()
            else:
                self._state = LineState.UNMEASURED
            return
        if self._geometry is None:
            return
        geometry, _ = try_line_geometry(
            options, self._layouts.get("start"), self._layouts.get("end"), measure_labels=self.measure_labels
        )
        if geometry is not None:
            self._publish(geometry)

    # ----- Updates -----

    def request_update(self) -> asyncio.Task | None:
        """Schedule a measurement round, or fold into the one already in flight."""
        if self._state is LineState.TORN_DOWN:
            return None
        if self._inflight is not None and not self._inflight.done():
            self._rerun = True
            return self._inflight
        self._inflight = asyncio.get_running_loop().create_task(self._run_updates())
        return self._inflight

    async def refresh(self) -> LineGeometry | None:
        """Run (or join) a measurement round and return the resulting geometry."""
        task = self.request_update()
        if task is not None:
            await task
        return self._geometry

    async def _run_updates(self) -> None:
        while True:
            self._rerun = False
            await self._update_once()
            if not self._rerun or self._state is LineState.TORN_DOWN:
                break

    async def _poll(self) -> None:
        while self._state is not LineState.TORN_DOWN:
            await asyncio.sleep(self.poll_interval)
            if self._state is LineState.TORN_DOWN:
                break
            if self._state is LineState.READY:
                self._state = LineState.STALE
            self.request_update()

    async def _measure_one(self, element: Any) -> ElementLayout | None:
        if self._measure is None:
            logger.warning("%s: no measure function for element %r", MEASUREMENT_FAILURE, element)
            return None
        try:
            layout = await self._measure(element)
        except Exception as e:
            self.failure_count += 1
            logger.warning("%s: measuring %r raised %s: %s", MEASUREMENT_FAILURE, element, type(e).__name__, e)
            return None
        if layout is None:
            self.failure_count += 1
            logger.warning("%s: element %r is not measurable yet", MEASUREMENT_FAILURE, element)
        return layout

    async def _update_once(self) -> None:
        generation = self._generation
        options = self._options
        self._state = LineState.MEASURING

        layouts: dict[str, ElementLayout] = {}
        for name, attachment in (("start", options.start), ("end", options.end)):
            if not isinstance(attachment, ElementAttachment):
                continue
            layout = await self._measure_one(attachment.element)
            if self._state is LineState.TORN_DOWN or generation != self._generation:
                return
            if layout is None:
                self._state = LineState.MEASURING
                return
            layouts[name] = layout

        unchanged = self._geometry is not None and all(
            layout.same_geometry(self._layouts.get(name)) for name, layout in layouts.items()
        )
        if unchanged:
            logger.debug("layout unchanged; skipping recompute")
            self._state = LineState.READY
            return
        self._layouts = layouts
        geometry = compute_line_geometry(
            self._options, layouts.get("start"), layouts.get("end"), measure_labels=self.measure_labels
        )
        self._publish(geometry)

    def _publish(self, geometry: LineGeometry) -> None:
        self._geometry = geometry
        self._state = LineState.READY
        self.update_count += 1
        if self._on_update is not None:
            try:
                self._on_update(geometry)
            except Exception:
                logger.exception("on_update callback failed")
