from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from yieldplot.errors import PlotDataError
from yieldplot.scales import gridline_values
from yieldplot.series import AnchorPoint, YieldPoint


@dataclass(frozen=True)
class ValueAxis:
    min: float
    max: float

    def __post_init__(self) -> None:
        if not (np.isfinite(self.min) and np.isfinite(self.max)):
            raise PlotDataError("axis range must be finite")
        if self.max <= self.min:
            raise PlotDataError("axis max must be greater than axis min")

    @property
    def span(self) -> float:
        return self.max - self.min


@dataclass(frozen=True)
class Margins:
    left: float = 95.0
    top: float = 80.0
    right: float = 95.0
    bottom: float = 80.0


DEFAULT_MARGINS = Margins()


@dataclass(frozen=True)
class PlotArea:
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


def compute_layout(width_px: float, height_px: float, axis: ValueAxis, margins: Margins = DEFAULT_MARGINS) -> PlotArea:
    """Return the plotting rectangle left inside the fixed margins.

    Surfaces smaller than the combined margins collapse to a zero-size area
    instead of raising; callers check ``is_empty`` and skip drawing.
    """
    _ = axis
    width = float(width_px) - (margins.left + margins.right)
    height = float(height_px) - (margins.top + margins.bottom)
    if width <= 0 or height <= 0:
        return PlotArea(left=margins.left, top=margins.top, width=0.0, height=0.0)
    return PlotArea(left=margins.left, top=margins.top, width=width, height=height)


def map_x(index: int, count: int, area: PlotArea) -> float:
    if count <= 0:
        raise PlotDataError("point count must be > 0")
    if index < 0 or index >= count:
        raise PlotDataError(f"index {index} out of range for {count} points")
    if count == 1:
        return area.left
    if index == count - 1:
        return area.right
    return area.left + (index / (count - 1)) * area.width


def map_y(value: float, axis: ValueAxis, area: PlotArea) -> float:
    # Endpoints are pinned so float rounding never moves the plot edges.
    if value == axis.min:
        return area.bottom
    if value == axis.max:
        return area.top
    return area.bottom - ((value - axis.min) / axis.span) * area.height


def anchor_points(points: Sequence[YieldPoint], axis: ValueAxis, area: PlotArea) -> tuple[AnchorPoint, ...]:
    count = len(points)
    return tuple(
        AnchorPoint(x=map_x(i, count, area), y=map_y(p.rate, axis, area), value=p.rate)
        for i, p in enumerate(points)
    )


def horizontal_gridlines(axis: ValueAxis, step: float, area: PlotArea) -> tuple[tuple[float, float], ...]:
    values = gridline_values(axis.min, axis.max, step)
    return tuple((float(v), map_y(float(v), axis, area)) for v in values.tolist())


def vertical_gridlines(count: int, area: PlotArea) -> tuple[float, ...]:
    if count <= 0:
        return ()
    return tuple(map_x(i, count, area) for i in range(count))
