from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

import numpy as np

from yieldplot.errors import PlotDataError


GRIDLINE_TOLERANCE = 1e-6
MAX_GRIDLINES = 1000


def gridline_values(vmin: float, vmax: float, step: float) -> np.ndarray:
    if not np.isfinite(step) or step <= 0:
        raise PlotDataError("gridline step must be > 0")
    if vmax <= vmin:
        raise PlotDataError("axis max must be greater than axis min")
    steps = np.floor((vmax - vmin + GRIDLINE_TOLERANCE) / step)
    if not np.isfinite(steps) or steps + 1 > MAX_GRIDLINES:
        raise PlotDataError(f"gridline step {step} yields more than {MAX_GRIDLINES} gridlines")
    count = int(steps) + 1
    values = vmin + step * np.arange(count, dtype=np.float64)
    # Snap floating-point drift so the last line lands on the axis max.
    values[np.isclose(values, vmax, rtol=0.0, atol=GRIDLINE_TOLERANCE)] = vmax
    return values


def format_axis_value(value: float) -> str:
    return f"{_quantize(value, 1)}%"


def format_point_value(value: float) -> str:
    return f"{_quantize(value, 2)}%"


def format_as_of(day) -> str:
    return f"As of {day.strftime('%B')} {day.day}, {day.year}"


def _quantize(value: float, decimals: int) -> str:
    if not np.isfinite(value):
        return str(value)
    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    if out.startswith("-") and Decimal(out) == 0:
        out = out[1:]
    return out
