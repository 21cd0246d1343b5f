"""
Tests for the virtual clock scheduler.
"""

import unittest
from datetime import datetime, timedelta

from puffybooth.core.scheduler import VirtualClock


class TestVirtualClock(unittest.TestCase):

    def setUp(self):
        self.start = datetime(2025, 1, 1, 9, 0, 0)
        self.clock = VirtualClock(start=self.start)
        self.calls = []

    def test_runs_callbacks_when_due(self):
        self.clock.call_later(100, lambda: self.calls.append("a"))
        self.clock.advance(99)
        self.assertEqual(self.calls, [])
        self.clock.advance(1)
        self.assertEqual(self.calls, ["a"])
        self.assertEqual(self.clock.pending, 0)

    def test_callbacks_run_in_due_order(self):
        self.clock.call_later(300, lambda: self.calls.append("late"))
        self.clock.call_later(100, lambda: self.calls.append("early"))
        self.clock.advance(1000)
        self.assertEqual(self.calls, ["early", "late"])

    def test_same_instant_runs_in_schedule_order(self):
        for name in ("first", "second", "third"):
            self.clock.call_later(50, lambda n=name: self.calls.append(n))
        self.clock.advance(50)
        self.assertEqual(self.calls, ["first", "second", "third"])

    def test_chained_callbacks_within_one_advance(self):
        def first():
            self.calls.append(("first", self.clock.elapsed_ms))
            self.clock.call_later(200, second)

        def second():
            self.calls.append(("second", self.clock.elapsed_ms))

        self.clock.call_later(100, first)
        self.clock.advance(500)
        self.assertEqual(self.calls, [("first", 100), ("second", 300)])
        self.assertEqual(self.clock.elapsed_ms, 500)

    def test_now_follows_virtual_time(self):
        self.clock.advance(2500)
        self.assertEqual(self.clock.now(), self.start + timedelta(milliseconds=2500))

    def test_negative_delay_rejected(self):
        with self.assertRaises(ValueError):
            self.clock.call_later(-1, lambda: None)

    def test_run_until_idle(self):
        self.clock.call_later(1000, lambda: self.clock.call_later(500, lambda: None))
        self.assertEqual(self.clock.run_until_idle(), 1500)
        self.assertEqual(self.clock.pending, 0)

    def test_run_until_idle_limit(self):
        def reschedule():
            self.clock.call_later(1000, reschedule)

        self.clock.call_later(1000, reschedule)
        with self.assertRaises(RuntimeError):
            self.clock.run_until_idle(limit_ms=10_000)


if __name__ == '__main__':
    unittest.main()
