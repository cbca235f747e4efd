from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
import logging
import threading
import time
from typing import Callable, Sequence
import xml.etree.ElementTree as ET

from yielddesk.errors import FeedParseError
from yieldplot.series import YieldPoint

LOGGER = logging.getLogger(__name__)

TREASURY_XML_URL = (
    "https://home.treasury.gov/resource-center/data-chart-center/interest-rates/pages/xml"
    "?data=daily_treasury_yield_curve&field_tdr_date_value_month={yyyymm}"
)

FIELD_TO_TERM = {
    "BC_1MONTH": "1M",
    "BC_1_5MONTH": "1.5M",
    "BC_2MONTH": "2M",
    "BC_3MONTH": "3M",
    "BC_4MONTH": "4M",
    "BC_6MONTH": "6M",
    "BC_1YEAR": "1Y",
    "BC_2YEAR": "2Y",
    "BC_3YEAR": "3Y",
    "BC_5YEAR": "5Y",
    "BC_7YEAR": "7Y",
    "BC_10YEAR": "10Y",
    "BC_20YEAR": "20Y",
    "BC_30YEAR": "30Y",
}

CANONICAL_ORDER = ("1M", "1.5M", "2M", "3M", "4M", "6M", "1Y", "2Y", "3Y", "5Y", "7Y", "10Y", "20Y", "30Y")

_DATE_FIELDS = {"NEW_DATE", "CMTDATE", "DATE"}


def treasury_feed_url(day: date) -> str:
    return TREASURY_XML_URL.format(yyyymm=f"{day.year:04d}{day.month:02d}")


def parse_treasury_xml(xml_text: str | None, on_or_before: date) -> tuple[YieldPoint, ...]:
    """Extract the latest curve dated on or before ``on_or_before``.

    Entries without a parseable date are ignored, as are ``N/A``, empty and
    non-numeric tenor values. The result is in canonical maturity order.
    """
    if not xml_text or not xml_text.strip():
        return ()
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as exc:
        raise FeedParseError(f"malformed treasury XML: {exc}") from exc

    best_date: date | None = None
    best: dict[str, float] = {}
    for entry in root.iter():
        if _local_name(entry.tag) != "ENTRY":
            continue
        entry_date = _entry_date(entry)
        if entry_date is None or entry_date > on_or_before:
            continue
        values = _entry_values(entry)
        if values and (best_date is None or entry_date > best_date):
            best_date = entry_date
            best = values

    if best_date is None:
        return ()
    LOGGER.debug("parsed %d tenors for %s", len(best), best_date.isoformat())
    points = [YieldPoint(term=FIELD_TO_TERM[key], rate=value) for key, value in best.items() if key in FIELD_TO_TERM]
    return order_canonically(points)


def order_canonically(points: Sequence[YieldPoint]) -> tuple[YieldPoint, ...]:
    by_term: dict[str, YieldPoint] = {}
    for point in points:
        by_term.setdefault(point.term, point)
    return tuple(by_term[term] for term in CANONICAL_ORDER if term in by_term)


def fetch_curve(http_get: Callable[[str], str], today: date) -> tuple[YieldPoint, ...]:
    """Fetch this month's feed, falling back to last month when it has no entries."""
    curve = parse_treasury_xml(http_get(treasury_feed_url(today)), today)
    if curve:
        return curve
    last_month = _previous_month(today)
    curve = parse_treasury_xml(http_get(treasury_feed_url(last_month)), today)
    if not curve:
        LOGGER.warning("no yield curve data available for %s or %s", today.isoformat(), last_month.isoformat())
    return curve


@dataclass
class CurveCache:
    """Serves the last successfully fetched curve for ``ttl_s`` seconds."""

    fetch: Callable[[], Sequence[YieldPoint]]
    ttl_s: float = 30 * 60.0
    clock: Callable[[], float] = time.monotonic
    _curve: tuple[YieldPoint, ...] = field(default=(), repr=False)
    _fetched_at: float | None = field(default=None, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.ttl_s < 0:
            raise ValueError("ttl_s must be >= 0")

    def get(self) -> tuple[YieldPoint, ...]:
        now = self.clock()
        with self._lock:
            cached = self._curve
            fetched_at = self._fetched_at
        if cached and fetched_at is not None and now - fetched_at < self.ttl_s:
            LOGGER.debug("serving yield curve from cache (%d points)", len(cached))
            return cached
        # Fetch runs unlocked; readers keep getting the previous curve meanwhile.
        try:
            curve = tuple(self.fetch())
        except Exception as exc:
            LOGGER.error("error retrieving yield curve: %s", exc)
            return cached
        with self._lock:
            if curve and (self._fetched_at is None or now >= self._fetched_at):
                self._curve = curve
                self._fetched_at = now
            return curve or self._curve

    def invalidate(self) -> None:
        with self._lock:
            self._curve = ()
            self._fetched_at = None


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1].upper()


def _entry_date(entry: ET.Element) -> date | None:
    for node in entry.iter():
        if _local_name(node.tag) in _DATE_FIELDS and node.text:
            try:
                return date.fromisoformat(node.text.strip().split("T")[0])
            except ValueError:
                return None
    return None


def _entry_values(entry: ET.Element) -> dict[str, float]:
    values: dict[str, float] = {}
    for node in entry.iter():
        key = _local_name(node.tag)
        if not key.startswith("BC_"):
            continue
        raw = (node.text or "").strip()
        if not raw or raw.upper() == "N/A":
            continue
        try:
            values[key] = float(raw)
        except ValueError:
            continue
    return values


def _previous_month(day: date) -> date:
    first = day.replace(day=1)
    last_of_previous = first - timedelta(days=1)
    return last_of_previous.replace(day=min(day.day, last_of_previous.day))
