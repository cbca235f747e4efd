from __future__ import annotations

from dataclasses import dataclass

from yieldplot.errors import PlotDataError
from yieldplot.layout import PlotArea
from yieldplot.series import AnchorPoint, LabelPlacement, TextAlign


@dataclass(frozen=True)
class LabelTuning:
    """Offsets (logical px) used to place per-point value labels."""

    lift: float = 32.0
    min_gap: float = 24.0
    min_gap_push: float = 24.0
    inset_y: float = 16.0
    inset_x: float = 10.0
    edge_offset: float = 10.0

    def __post_init__(self) -> None:
        for name in ("lift", "min_gap", "min_gap_push", "inset_y", "inset_x", "edge_offset"):
            if getattr(self, name) < 0:
                raise PlotDataError(f"label {name} must be >= 0")
        if self.min_gap_push < self.min_gap:
            raise PlotDataError("label min_gap_push must be >= min_gap")


DEFAULT_LABEL_TUNING = LabelTuning()


def place_label(
    anchor: AnchorPoint,
    index: int,
    count: int,
    area: PlotArea,
    tuning: LabelTuning = DEFAULT_LABEL_TUNING,
) -> LabelPlacement:
    """Resolve the value label position for one anchor.

    Placement is local to the point: lift above the anchor, align edge labels
    inward, clamp into the inset plot rectangle, then push away from the anchor
    when clamping left the label closer than ``min_gap``. Dense or
    non-monotonic curves can still overlap neighbouring labels.
    """
    if count <= 0 or index < 0 or index >= count:
        raise PlotDataError(f"index {index} out of range for {count} points")

    align: TextAlign
    x = anchor.x
    if index == 0:
        align = "left"
        x = anchor.x + tuning.edge_offset
    elif index == count - 1:
        align = "right"
        x = anchor.x - tuning.edge_offset
    else:
        align = "center"

    min_y = area.top + tuning.inset_y
    max_y = area.bottom - tuning.inset_y
    y = _clamp(anchor.y - tuning.lift, min_y, max_y)
    if y > anchor.y - tuning.min_gap:
        y = _clamp(max(min_y, anchor.y - tuning.min_gap_push), min_y, max_y)

    x = _clamp(x, area.left + tuning.inset_x, area.right - tuning.inset_x)
    return LabelPlacement(x=x, y=y, align=align)


def place_labels(
    anchors: tuple[AnchorPoint, ...],
    area: PlotArea,
    tuning: LabelTuning = DEFAULT_LABEL_TUNING,
) -> tuple[LabelPlacement, ...]:
    count = len(anchors)
    return tuple(place_label(a, i, count, area, tuning) for i, a in enumerate(anchors))


def _clamp(value: float, lo: float, hi: float) -> float:
    # lo wins when the inset rectangle is inverted on tiny plots.
    return max(lo, min(hi, value))
