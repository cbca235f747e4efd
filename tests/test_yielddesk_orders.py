from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
import unittest

from yielddesk import OrderBook, OrderValidationError, rate_for_term
from yieldplot import YieldPoint


CURVE = (YieldPoint("1M", 5.20), YieldPoint("2Y", 4.10), YieldPoint("10Y", 4.50))


class _StepClock:
    def __init__(self) -> None:
        self.now = datetime(2026, 10, 18, 14, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


class OrderBookTests(unittest.TestCase):
    def setUp(self) -> None:
        self.book = OrderBook(lambda: CURVE, clock=_StepClock())

    def test_submit_captures_rate_and_normalizes_term(self) -> None:
        order = self.book.submit(" 2y ", "1000.50")
        self.assertEqual(order.id, 1)
        self.assertEqual(order.term, "2Y")
        self.assertEqual(order.amount, Decimal("1000.50"))
        self.assertEqual(order.status, "SUBMITTED")
        self.assertEqual(order.rate_at_submission, 4.10)
        self.assertEqual(order.rate_display(), "4.10%")

    def test_unknown_term_has_no_rate(self) -> None:
        order = self.book.submit("7Y", 10)
        self.assertIsNone(order.rate_at_submission)
        self.assertEqual(order.rate_display(), "—")

    def test_orders_are_listed_newest_first(self) -> None:
        self.book.submit("1M", 1)
        self.book.submit("10Y", 2)
        self.book.submit("2Y", 3)
        self.assertEqual([o.term for o in self.book.orders()], ["2Y", "10Y", "1M"])
        self.assertEqual(len(self.book), 3)

    def test_validation_messages(self) -> None:
        cases = [
            (("", 10), "Term is required"),
            (("   ", 10), "Term is required"),
            (("2Y", 0), "Amount must be > 0"),
            (("2Y", -5), "Amount must be > 0"),
            (("2Y", "abc"), "Amount must be a number"),
            (("2Y", True), "Amount must be a number"),
        ]
        for (term, amount), message in cases:
            with self.subTest(term=term, amount=amount):
                with self.assertRaises(OrderValidationError) as ctx:
                    self.book.submit(term, amount)
                self.assertEqual(str(ctx.exception), message)
        self.assertEqual(len(self.book), 0)

    def test_rate_lookup_is_case_insensitive(self) -> None:
        self.assertEqual(rate_for_term(CURVE, "10y"), 4.50)
        self.assertIsNone(rate_for_term((), "10Y"))


if __name__ == "__main__":
    unittest.main()
