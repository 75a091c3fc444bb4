import threading
import unittest

from tests._test_path import SRC  # noqa: F401
from tests._fakes import ManualScheduler

from alphaportrait.app.timers import NarrationTimers, ThreadingScheduler, TkScheduler


class FakeTkWidget:
    def __init__(self):
        self.pending = {}
        self._next = 0

    def after(self, ms, callback):
        self._next += 1
        after_id = f"after#{self._next}"
        self.pending[after_id] = (ms, callback)
        return after_id

    def after_cancel(self, after_id):
        del self.pending[after_id]


class TestNarrationTimers(unittest.TestCase):
    def test_fires_until_cancelled(self):
        sched = ManualScheduler()
        timers = NarrationTimers(sched)
        seen = []
        timers.schedule(2.0, lambda: seen.append("a"))
        timers.schedule(5.0, lambda: seen.append("b"))

        sched.fire(2.0)
        timers.cancel_all()
        sched.fire(5.0)

        self.assertEqual(seen, ["a"])
        self.assertTrue(all(h.cancelled for h in sched.handles))

    def test_callback_already_in_flight_is_suppressed(self):
        sched = ManualScheduler()
        timers = NarrationTimers(sched)
        seen = []
        timers.schedule(2.0, lambda: seen.append("late"))
        timers.cancel_all()

        sched.fire_all_regardless()
        self.assertEqual(seen, [])

    def test_schedule_after_cancel_is_ignored(self):
        sched = ManualScheduler()
        timers = NarrationTimers(sched)
        timers.cancel_all()
        timers.schedule(1.0, lambda: None)
        self.assertEqual(sched.handles, [])

    def test_cancel_all_is_idempotent(self):
        timers = NarrationTimers(ManualScheduler())
        timers.schedule(1.0, lambda: None)
        timers.cancel_all()
        timers.cancel_all()


class TestThreadingScheduler(unittest.TestCase):
    def test_fires_through_post(self):
        fired = threading.Event()
        posted = []

        def post(fn):
            posted.append(fn)
            fn()

        ThreadingScheduler(post).call_later(0.01, fired.set)
        self.assertTrue(fired.wait(2.0))
        self.assertEqual(len(posted), 1)

    def test_cancel(self):
        fired = threading.Event()
        handle = ThreadingScheduler().call_later(0.2, fired.set)
        handle.cancel()
        self.assertFalse(fired.wait(0.4))


class TestTkScheduler(unittest.TestCase):
    def test_after_and_cancel(self):
        widget = FakeTkWidget()
        sched = TkScheduler(widget)

        h1 = sched.call_later(2.0, lambda: None)
        sched.call_later(5.0, lambda: None)
        self.assertEqual(sorted(ms for ms, _ in widget.pending.values()), [2000, 5000])

        h1.cancel()
        h1.cancel()  # second cancel is a no-op
        self.assertEqual([ms for ms, _ in widget.pending.values()], [5000])


class TestNarrationTimersThreaded(unittest.TestCase):
    def test_cancel_all_waits_for_running_callback(self):
        sched = ManualScheduler()
        timers = NarrationTimers(sched)
        entered, release = threading.Event(), threading.Event()
        order = []

        def narrate():
            entered.set()
            release.wait(2.0)
            order.append("narration applied")

        def cancel():
            timers.cancel_all()
            order.append("cancel_all returned")

        timers.schedule(2.0, narrate)
        firing = threading.Thread(target=sched.fire, args=(2.0,))
        firing.start()
        self.assertTrue(entered.wait(2.0))

        cancelling = threading.Thread(target=cancel)
        cancelling.start()
        cancelling.join(0.1)
        self.assertTrue(cancelling.is_alive())  # blocked behind the running callback

        release.set()
        firing.join(2.0)
        cancelling.join(2.0)
        self.assertEqual(order, ["narration applied", "cancel_all returned"])

    def test_context_manager_cancels(self):
        sched = ManualScheduler()
        with NarrationTimers(sched) as timers:
            timers.schedule(2.0, lambda: None)
        self.assertTrue(all(h.cancelled for h in sched.handles))

    def test_callback_may_cancel_its_own_set(self):
        sched = ManualScheduler()
        timers = NarrationTimers(sched)
        timers.schedule(2.0, timers.cancel_all)
        sched.fire(2.0)
        self.assertTrue(all(h.cancelled for h in sched.handles))
