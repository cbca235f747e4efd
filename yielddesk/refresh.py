from __future__ import annotations

from dataclasses import dataclass
import logging
import threading
from typing import Callable, Generic, Optional, TypeVar

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Ticket:
    seq: int


class RequestSequencer:
    """Orders fetch responses by request issue order.

    A response is accepted only when its ticket is newer than the last
    accepted one, so a slow response never overwrites fresher data.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._issued = 0
        self._accepted = 0

    def issue(self) -> Ticket:
        with self._lock:
            self._issued += 1
            return Ticket(self._issued)

    def accept(self, ticket: Ticket) -> bool:
        with self._lock:
            if ticket.seq <= self._accepted:
                LOGGER.warning("discarding stale response #%d (latest accepted #%d)", ticket.seq, self._accepted)
                return False
            self._accepted = ticket.seq
            return True

    @property
    def latest_accepted(self) -> int:
        with self._lock:
            return self._accepted


class RefreshScheduler(Generic[T]):
    """Caller-owned periodic task: fetch, drop stale results, hand fresh ones to ``sink``."""

    def __init__(
        self,
        fetch: Callable[[], T],
        sink: Callable[[T], None],
        interval_s: float,
        *,
        name: str = "yielddesk-refresh",
        sequencer: RequestSequencer | None = None,
    ) -> None:
        if interval_s <= 0:
            raise ValueError("interval_s must be > 0")
        self._fetch = fetch
        self._sink = sink
        self._interval_s = float(interval_s)
        self._name = name
        self._sequencer = sequencer or RequestSequencer()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._last_error: Exception | None = None

    @property
    def sequencer(self) -> RequestSequencer:
        return self._sequencer

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    def tick(self) -> bool:
        """Run one fetch/deliver cycle on the caller thread. True when delivered."""
        ticket = self._sequencer.issue()
        try:
            result = self._fetch()
        except Exception as exc:
            self._last_error = exc
            LOGGER.warning("refresh fetch #%d failed: %s", ticket.seq, exc)
            return False
        return self.deliver(ticket, result)

    def deliver(self, ticket: Ticket, result: T) -> bool:
        if not self._sequencer.accept(ticket):
            return False
        try:
            self._sink(result)
        except Exception as exc:
            self._last_error = exc
            LOGGER.warning("refresh sink failed for #%d: %s", ticket.seq, exc)
            return False
        return True

    def start(self, *, immediate: bool = True) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run_loop, args=(immediate,), name=self._name, daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 1.0) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=timeout)
            self._thread = None

    def _run_loop(self, immediate: bool) -> None:
        if immediate:
            self.tick()
        while not self._stop.wait(self._interval_s):
            self.tick()
