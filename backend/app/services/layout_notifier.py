# backend/app/services/layout_notifier.py
# Debounced delivery of layout changes to the persistence boundary
#
# Every pointer move during a drag changes the layout. The sink only sees a
# snapshot once the layout has been quiet for `delay` seconds; the last change
# always gets delivered (on the timer, on flush() or on close()).

from typing import Any, Callable, List, Optional, Protocol
import asyncio
import logging

from ..config import NOTIFY_DELAY
from .layout_types import PlacedRoom, layout_snapshot

logger = logging.getLogger(__name__)

LayoutSink = Callable[[List[PlacedRoom]], Any]


class TimerHandle(Protocol):
    def cancel(self) -> Any: ...


class Scheduler(Protocol):
    """Anything that can run a callback later and cancel it (event loop, test clock)."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle: ...


class AsyncioScheduler:
    """Schedules on an asyncio event loop (the running one unless given)."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], Any]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class LayoutChangeNotifier:
    """Collapse bursts of layout changes into one sink call per quiet period."""

    def __init__(
        self,
        sink: LayoutSink,
        scheduler: Optional[Scheduler] = None,
        delay: float = NOTIFY_DELAY
    ):
        self.sink = sink
        self.scheduler = scheduler or AsyncioScheduler()
        self.delay = delay
        self.delivered = 0

        self._pending: Optional[List[PlacedRoom]] = None
        self._timer: Optional[TimerHandle] = None
        self._closed = False

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def notify(self, layout: List[PlacedRoom]):
        """Record a change and restart the quiet-period timer."""
        if self._closed:
            logger.debug("Layout change after close ignored")
            return
        if not layout:
            # A change to empty still supersedes whatever was pending
            self.cancel()
            return

        self._pending = layout_snapshot(layout)
        self._cancel_timer()
        self._timer = self.scheduler.call_later(self.delay, self._fire)

    def flush(self):
        """Deliver the pending snapshot now, if any."""
        self._cancel_timer()
        self._fire()

    def cancel(self):
        """Drop the pending snapshot without delivering it."""
        self._cancel_timer()
        self._pending = None

    def close(self):
        """Deliver anything pending, then stop accepting changes. Never raises."""
        if self._closed:
            return
        self.flush()
        self._closed = True

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self):
        self._timer = None
        snapshot = self._pending
        self._pending = None
        if snapshot is None:
            return

        try:
            self.sink(snapshot)
            self.delivered += 1
        except Exception as e:
            logger.error(f"Layout change sink failed: {str(e)}", exc_info=True)
