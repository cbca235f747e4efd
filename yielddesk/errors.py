from __future__ import annotations


class FeedParseError(ValueError):
    """Raised when a yield curve feed document cannot be parsed."""


class OrderValidationError(ValueError):
    """Raised when an order submission is rejected."""
