from __future__ import annotations

import threading
import unittest

from yielddesk import RefreshScheduler, RequestSequencer


class RequestSequencerTests(unittest.TestCase):
    def test_late_response_for_older_request_is_discarded(self) -> None:
        sequencer = RequestSequencer()
        first = sequencer.issue()
        second = sequencer.issue()
        self.assertTrue(sequencer.accept(second))
        with self.assertLogs("yielddesk.refresh", level="WARNING"):
            self.assertFalse(sequencer.accept(first))
        self.assertEqual(sequencer.latest_accepted, second.seq)

    def test_in_order_responses_are_accepted(self) -> None:
        sequencer = RequestSequencer()
        for _ in range(3):
            self.assertTrue(sequencer.accept(sequencer.issue()))
        self.assertEqual(sequencer.latest_accepted, 3)

    def test_duplicate_delivery_is_discarded(self) -> None:
        sequencer = RequestSequencer()
        ticket = sequencer.issue()
        self.assertTrue(sequencer.accept(ticket))
        with self.assertLogs("yielddesk.refresh", level="WARNING"):
            self.assertFalse(sequencer.accept(ticket))


class RefreshSchedulerTests(unittest.TestCase):
    def test_tick_delivers_fetched_value(self) -> None:
        received: list[int] = []
        scheduler = RefreshScheduler(lambda: 7, received.append, interval_s=60.0)
        self.assertTrue(scheduler.tick())
        self.assertEqual(received, [7])
        self.assertIsNone(scheduler.last_error)

    def test_fetch_failure_is_recorded_and_nothing_delivered(self) -> None:
        received: list[int] = []

        def fetch() -> int:
            raise ConnectionError("down")

        scheduler = RefreshScheduler(fetch, received.append, interval_s=60.0)
        with self.assertLogs("yielddesk.refresh", level="WARNING"):
            self.assertFalse(scheduler.tick())
        self.assertEqual(received, [])
        self.assertIsInstance(scheduler.last_error, ConnectionError)

    def test_sink_failure_is_recorded(self) -> None:
        def sink(value: int) -> None:
            raise RuntimeError("render failed")

        scheduler = RefreshScheduler(lambda: 1, sink, interval_s=60.0)
        with self.assertLogs("yielddesk.refresh", level="WARNING"):
            self.assertFalse(scheduler.tick())
        self.assertIsInstance(scheduler.last_error, RuntimeError)

    def test_stale_delivery_does_not_reach_sink(self) -> None:
        received: list[str] = []
        scheduler = RefreshScheduler(lambda: "unused", received.append, interval_s=60.0)
        slow = scheduler.sequencer.issue()
        fast = scheduler.sequencer.issue()
        self.assertTrue(scheduler.deliver(fast, "fresh"))
        with self.assertLogs("yielddesk.refresh", level="WARNING"):
            self.assertFalse(scheduler.deliver(slow, "stale"))
        self.assertEqual(received, ["fresh"])

    def test_start_runs_immediately_and_stops(self) -> None:
        delivered = threading.Event()
        received: list[int] = []

        def sink(value: int) -> None:
            received.append(value)
            delivered.set()

        scheduler = RefreshScheduler(lambda: 1, sink, interval_s=30.0)
        scheduler.start()
        try:
            self.assertTrue(delivered.wait(2.0))
        finally:
            scheduler.stop()
        self.assertEqual(received, [1])

    def test_rejects_non_positive_interval(self) -> None:
        with self.assertRaises(ValueError):
            RefreshScheduler(lambda: 1, lambda _: None, interval_s=0.0)


if __name__ == "__main__":
    unittest.main()
