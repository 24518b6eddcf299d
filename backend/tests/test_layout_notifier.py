"""Tests for app/services/layout_notifier.py."""
import asyncio

from app.services.layout_notifier import AsyncioScheduler, LayoutChangeNotifier
from conftest import make_room


def layout_with_x(x):
    return [make_room("a", x, 0, 100, 80)]


def test_burst_delivers_once_with_last_state(scheduler):
    received = []
    notifier = LayoutChangeNotifier(received.append, scheduler, delay=0.2)

    for x in (10, 20, 30, 40):
        notifier.notify(layout_with_x(x))
        scheduler.advance(0.1)

    assert received == []
    scheduler.advance(0.2)
    assert len(received) == 1
    assert received[0][0].x == 40
    assert notifier.delivered == 1


def test_separate_quiet_windows_deliver_separately(scheduler):
    received = []
    notifier = LayoutChangeNotifier(received.append, scheduler, delay=0.2)

    notifier.notify(layout_with_x(10))
    scheduler.advance(0.3)
    notifier.notify(layout_with_x(20))
    scheduler.advance(0.3)

    assert [snapshot[0].x for snapshot in received] == [10, 20]


def test_snapshot_is_independent_of_live_layout(scheduler):
    received = []
    notifier = LayoutChangeNotifier(received.append, scheduler)
    live = layout_with_x(10)

    notifier.notify(live)
    live[0].x = 500
    scheduler.advance(1)

    assert received[0][0].x == 10


def test_empty_layout_not_notified(scheduler):
    received = []
    notifier = LayoutChangeNotifier(received.append, scheduler)
    notifier.notify([])
    scheduler.advance(1)
    assert received == []
    assert not notifier.has_pending


def test_flush_delivers_immediately(scheduler):
    received = []
    notifier = LayoutChangeNotifier(received.append, scheduler)
    notifier.notify(layout_with_x(10))
    notifier.flush()
    assert len(received) == 1
    assert scheduler.pending == []

    notifier.flush()
    assert len(received) == 1


def test_close_flushes_and_stops(scheduler):
    received = []
    notifier = LayoutChangeNotifier(received.append, scheduler)
    notifier.notify(layout_with_x(10))
    notifier.close()
    assert len(received) == 1

    notifier.notify(layout_with_x(20))
    scheduler.advance(1)
    assert len(received) == 1
    assert scheduler.pending == []
    notifier.close()


def test_cancel_drops_pending(scheduler):
    received = []
    notifier = LayoutChangeNotifier(received.append, scheduler)
    notifier.notify(layout_with_x(10))
    notifier.cancel()
    scheduler.advance(1)
    assert received == []


def test_sink_errors_are_contained(scheduler):
    def failing_sink(layout):
        raise RuntimeError("database down")

    notifier = LayoutChangeNotifier(failing_sink, scheduler)
    notifier.notify(layout_with_x(10))
    scheduler.advance(1)
    assert notifier.delivered == 0
    notifier.close()


def test_asyncio_scheduler_debounces():
    received = []

    async def scenario():
        notifier = LayoutChangeNotifier(received.append, AsyncioScheduler(), delay=0.01)
        notifier.notify(layout_with_x(10))
        notifier.notify(layout_with_x(20))
        await asyncio.sleep(0.05)

    asyncio.run(scenario())
    assert [snapshot[0].x for snapshot in received] == [20]


def test_change_to_empty_drops_pending(scheduler):
    received = []
    notifier = LayoutChangeNotifier(received.append, scheduler)
    notifier.notify(layout_with_x(10))
    notifier.notify([])
    scheduler.advance(1)
    assert received == []
    assert scheduler.pending == []
