from __future__ import annotations


class PlotDataError(ValueError):
    """Raised when chart input or layout parameters are invalid."""
