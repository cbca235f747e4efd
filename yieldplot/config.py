from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
import tomllib
from typing import Any, Mapping

from yieldplot.errors import PlotDataError
from yieldplot.labels import LabelTuning
from yieldplot.layout import DEFAULT_MARGINS, Margins, ValueAxis
from yieldplot.scales import gridline_values
from yieldplot.style import DEFAULT_STYLE, ChartStyle, apply_style_overrides


@dataclass(frozen=True)
class ChartConfig:
    axis: ValueAxis
    gridline_step: float
    margins: Margins = DEFAULT_MARGINS
    labels: LabelTuning = field(default_factory=LabelTuning)
    style: ChartStyle = DEFAULT_STYLE
    title: str = "U.S. Treasury Yield Curve"
    x_title: str = "Maturity"
    y_title: str = "Yield (%)"

    def __post_init__(self) -> None:
        # Validates the step against the axis up front.
        gridline_values(self.axis.min, self.axis.max, self.gridline_step)


TREASURY_PRESET = ChartConfig(
    axis=ValueAxis(min=3.6, max=5.0),
    gridline_step=0.2,
    labels=LabelTuning(lift=32.0, min_gap=24.0, min_gap_push=24.0),
)

OVERVIEW_PRESET = ChartConfig(
    axis=ValueAxis(min=1.0, max=7.0),
    gridline_step=1.0,
    labels=LabelTuning(lift=14.0, min_gap=12.0, min_gap_push=20.0),
)

PRESETS: dict[str, ChartConfig] = {
    "treasury": TREASURY_PRESET,
    "overview": OVERVIEW_PRESET,
}

DEFAULT_CONFIG = TREASURY_PRESET

_TOP_LEVEL_KEYS = {"preset", "axis", "labels", "margins", "text", "style"}
_TEXT_KEYS = {"title", "x_title", "y_title"}


def get_preset(name: str) -> ChartConfig:
    try:
        return PRESETS[name]
    except KeyError as exc:
        raise ValueError(f"unknown chart preset: {name} (expected one of {sorted(PRESETS)})") from exc


def load_chart_config(path: Path) -> ChartConfig:
    with path.open("rb") as f:
        raw = tomllib.load(f)
    return chart_config_from_mapping(raw)


def chart_config_from_mapping(raw: Mapping[str, Any]) -> ChartConfig:
    unknown = set(raw) - _TOP_LEVEL_KEYS
    if unknown:
        raise ValueError(f"unknown chart config key: {sorted(unknown)[0]}")
    base = get_preset(str(raw.get("preset", "treasury")))

    axis_raw = _section(raw, "axis")
    _reject_unknown(axis_raw, {"min", "max", "step"}, "axis")
    margins_raw = _section(raw, "margins")
    _reject_unknown(margins_raw, {"left", "top", "right", "bottom"}, "margins")
    labels_raw = _section(raw, "labels")
    _reject_unknown(labels_raw, {"lift", "min_gap", "min_gap_push", "inset_y", "inset_x", "edge_offset"}, "labels")
    text_raw = _section(raw, "text")
    _reject_unknown(text_raw, _TEXT_KEYS, "text")

    try:
        axis = ValueAxis(
            min=_number(axis_raw, "min", base.axis.min),
            max=_number(axis_raw, "max", base.axis.max),
        )
        step = _number(axis_raw, "step", base.gridline_step)
        margins = replace(base.margins, **{k: _number(margins_raw, k, 0.0) for k in margins_raw})
        labels = replace(base.labels, **{k: _number(labels_raw, k, 0.0) for k in labels_raw})
        text = {k: _text(text_raw, k) for k in text_raw}
        style = apply_style_overrides(base.style, _section(raw, "style"))
        return replace(base, axis=axis, gridline_step=step, margins=margins, labels=labels, style=style, **text)
    except PlotDataError as exc:
        raise ValueError(f"invalid chart config: {exc}") from exc


def _section(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = raw.get(name, {})
    if not isinstance(value, Mapping):
        raise ValueError(f"`{name}` must be a table")
    return value


def _reject_unknown(section: Mapping[str, Any], allowed: set[str], name: str) -> None:
    for key in section:
        if key not in allowed:
            raise ValueError(f"unknown key in [{name}]: {key}")


def _number(section: Mapping[str, Any], key: str, default: float) -> float:
    if key not in section:
        return default
    value = section[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"`{key}` must be a number")
    return float(value)


def _text(section: Mapping[str, Any], key: str) -> str:
    value = section[key]
    if not isinstance(value, str):
        raise ValueError(f"`{key}` must be a string")
    return value
