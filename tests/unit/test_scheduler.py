"""延迟任务调度与状态订阅测试"""
import threading
import pytest

from core.cards import parse_cards
from core.state import GameState, Player, HUMAN_ID
from engine.events import EventBus
from engine.scheduler import ScheduledTask, ManualScheduler, ThreadingScheduler


class TestScheduledTask:

    def test_run_once(self):
        calls = []
        task = ScheduledTask(0.0, lambda: calls.append(1))
        task.run()
        task.run()
        assert calls == [1]
        assert not task.pending

    def test_cancelled_task_skipped(self):
        calls = []
        task = ScheduledTask(0.0, lambda: calls.append(1))
        task.cancel()
        task.run()
        assert calls == []
        assert not task.pending


class TestManualScheduler:
    """手动调度器测试"""

    def test_fifo(self):
        scheduler = ManualScheduler()
        calls = []
        scheduler.call_later(2.0, lambda: calls.append("a"))
        scheduler.call_later(1.0, lambda: calls.append("b"))
        assert scheduler.run_pending() == 2
        assert calls == ["a", "b"]

    def test_run_next_empty(self):
        assert not ManualScheduler().run_next()

    def test_skips_cancelled(self):
        scheduler = ManualScheduler()
        calls = []
        first = scheduler.call_later(0.0, lambda: calls.append("a"))
        scheduler.call_later(0.0, lambda: calls.append("b"))
        first.cancel()
        assert len(scheduler.pending) == 1
        assert scheduler.run_next()
        assert calls == ["b"]

    def test_cancelled_tasks_do_not_accumulate(self):
        scheduler = ManualScheduler()
        for _ in range(50):
            scheduler.call_later(0.0, lambda: None).cancel()
        scheduler.call_later(0.0, lambda: None)
        assert len(scheduler._queue) == 1
        assert len(scheduler.pending) == 1

    def test_runs_tasks_added_while_running(self):
        scheduler = ManualScheduler()
        calls = []

        def chain():
            calls.append(len(calls))
            if len(calls) < 3:
                scheduler.call_later(0.0, chain)

        scheduler.call_later(0.0, chain)
        assert scheduler.run_pending() == 3
        assert calls == [0, 1, 2]

    def test_max_tasks(self):
        scheduler = ManualScheduler()
        for _ in range(5):
            scheduler.call_later(0.0, lambda: None)
        assert scheduler.run_pending(max_tasks=2) == 2
        assert len(scheduler.pending) == 3

    def test_shutdown(self):
        scheduler = ManualScheduler()
        task = scheduler.call_later(0.0, lambda: None)
        scheduler.shutdown()
        assert not task.pending
        assert scheduler.pending == []


class TestThreadingScheduler:
    """实时调度器测试"""

    def test_fires(self):
        scheduler = ThreadingScheduler()
        fired = threading.Event()
        scheduler.call_later(0.01, fired.set)
        assert fired.wait(2.0)
        scheduler.shutdown()

    def test_cancel(self):
        scheduler = ThreadingScheduler()
        fired = threading.Event()
        task = scheduler.call_later(0.05, fired.set)
        task.cancel()
        assert not fired.wait(0.2)
        scheduler.shutdown()


@pytest.fixture
def state():
    return GameState(players=[Player(id=HUMAN_ID, name="Alice", hand=parse_cards("cloud-3"))])


class TestEventBus:
    """状态订阅测试"""

    def test_registration_order(self, state):
        bus = EventBus()
        calls = []
        bus.subscribe(lambda s: calls.append("first"))
        bus.subscribe(lambda s: calls.append("second"))
        bus.notify(state)
        assert calls == ["first", "second"]

    def test_unsubscribe(self, state):
        bus = EventBus()
        calls = []
        unsubscribe = bus.subscribe(lambda s: calls.append(1))
        unsubscribe()
        unsubscribe()
        bus.notify(state)
        assert calls == []

    def test_each_listener_gets_own_snapshot(self, state):
        bus = EventBus()
        received = []

        def vandal(snapshot):
            snapshot.players[0].hand.clear()
            received.append(snapshot)

        bus.subscribe(vandal)
        bus.subscribe(received.append)
        bus.notify(state)

        assert received[1].players[0].hand == parse_cards("cloud-3")
        assert state.players[0].hand == parse_cards("cloud-3")

    def test_unsubscribe_during_notify(self, state):
        bus = EventBus()
        calls = []

        def once(snapshot):
            calls.append("once")
            bus.unsubscribe(once)

        bus.subscribe(once)
        bus.subscribe(lambda s: calls.append("other"))
        bus.notify(state)
        bus.notify(state)
        assert calls == ["once", "other", "other"]
