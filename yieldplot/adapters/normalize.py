from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
import math
from typing import Any

from yieldplot.errors import PlotDataError
from yieldplot.series import YieldPoint


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


def normalize_points(data: Any) -> tuple[YieldPoint, ...]:
    """Coerce caller input into an immutable, ordered tuple of yield points.

    Accepts yield points, ``{"term": ..., "rate": ...}`` mappings, ``(term, rate)``
    pairs, or a pandas DataFrame with ``term`` and ``rate`` columns. Input order
    is kept as the maturity order.
    """
    if data is None:
        return ()
    if pd is not None and isinstance(data, pd.DataFrame):
        return _from_frame(data)
    if isinstance(data, (str, bytes, bytearray)) or not isinstance(data, Sequence):
        raise PlotDataError(f"unsupported points input type: {type(data)!r}")
    return tuple(_coerce_point(raw, index=i) for i, raw in enumerate(data))


def _from_frame(frame: Any) -> tuple[YieldPoint, ...]:
    for column in ("term", "rate"):
        if column not in frame.columns:
            raise PlotDataError(f"column not found: {column}")
    terms = frame["term"].tolist()
    rates = frame["rate"].tolist()
    return tuple(_make_point(term, rate, index=i) for i, (term, rate) in enumerate(zip(terms, rates, strict=True)))


def _coerce_point(raw: Any, *, index: int) -> YieldPoint:
    if isinstance(raw, YieldPoint):
        return _make_point(raw.term, raw.rate, index=index)
    if isinstance(raw, Mapping):
        try:
            return _make_point(raw["term"], raw["rate"], index=index)
        except KeyError as exc:
            raise PlotDataError(f"point {index} missing field: {exc.args[0]}") from exc
    if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes, bytearray)) and len(raw) == 2:
        return _make_point(raw[0], raw[1], index=index)
    raise PlotDataError(f"unsupported point at index {index}: {raw!r}")


def _make_point(term: Any, rate: Any, *, index: int) -> YieldPoint:
    if term is None:
        raise PlotDataError(f"point {index} has no term")
    if isinstance(rate, bool) or rate is None:
        raise PlotDataError(f"point {index} has non-numeric rate: {rate!r}")
    if isinstance(rate, Decimal):
        value = float(rate)
    else:
        try:
            value = float(rate)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"point {index} has non-numeric rate: {rate!r}") from exc
    if not math.isfinite(value):
        raise PlotDataError(f"point {index} has non-finite rate: {rate!r}")
    return YieldPoint(term=str(term), rate=value)
