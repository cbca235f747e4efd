from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
import itertools
import logging
import threading
from typing import Callable, Sequence

from yielddesk.errors import OrderValidationError
from yieldplot.scales import format_point_value
from yieldplot.series import YieldPoint

LOGGER = logging.getLogger(__name__)

STATUS_SUBMITTED = "SUBMITTED"


@dataclass(frozen=True)
class Order:
    id: int
    term: str
    amount: Decimal
    created_at: datetime
    status: str
    rate_at_submission: float | None

    def rate_display(self) -> str:
        if self.rate_at_submission is None:
            return "—"
        return format_point_value(self.rate_at_submission)


def rate_for_term(curve: Sequence[YieldPoint], term: str) -> float | None:
    wanted = term.strip().upper()
    for point in curve:
        if point.term.upper() == wanted:
            return point.rate
    return None


class OrderBook:
    """In-memory order store; captures the curve rate at submission time."""

    def __init__(
        self,
        curve: Callable[[], Sequence[YieldPoint]],
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._curve = curve
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._ids = itertools.count(1)
        self._orders: list[Order] = []
        self._lock = threading.Lock()

    def submit(self, term: str, amount: float | int | str | Decimal) -> Order:
        if not isinstance(term, str) or not term.strip():
            raise OrderValidationError("Term is required")
        value = _coerce_amount(amount)
        rate = rate_for_term(self._curve(), term)
        with self._lock:
            order = Order(
                id=next(self._ids),
                term=term.strip().upper(),
                amount=value,
                created_at=self._clock(),
                status=STATUS_SUBMITTED,
                rate_at_submission=rate,
            )
            self._orders.append(order)
        LOGGER.info("order %d submitted: %s %s at %s", order.id, order.term, order.amount, order.rate_display())
        return order

    def orders(self) -> list[Order]:
        """All orders, newest first."""
        with self._lock:
            snapshot = list(self._orders)
        return sorted(snapshot, key=lambda o: (o.created_at, o.id), reverse=True)

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)


def _coerce_amount(amount: float | int | str | Decimal) -> Decimal:
    if isinstance(amount, bool):
        raise OrderValidationError("Amount must be a number")
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation as exc:
        raise OrderValidationError("Amount must be a number") from exc
    if not value.is_finite() or value <= 0:
        raise OrderValidationError("Amount must be > 0")
    return value
