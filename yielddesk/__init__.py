from yielddesk.errors import FeedParseError, OrderValidationError
from yielddesk.feed import CANONICAL_ORDER, CurveCache, fetch_curve, order_canonically, parse_treasury_xml, treasury_feed_url
from yielddesk.orders import Order, OrderBook, rate_for_term
from yielddesk.refresh import RefreshScheduler, RequestSequencer, Ticket

__all__ = [
    "CANONICAL_ORDER",
    "CurveCache",
    "FeedParseError",
    "Order",
    "OrderBook",
    "OrderValidationError",
    "RefreshScheduler",
    "RequestSequencer",
    "Ticket",
    "fetch_curve",
    "order_canonically",
    "parse_treasury_xml",
    "rate_for_term",
    "treasury_feed_url",
]
