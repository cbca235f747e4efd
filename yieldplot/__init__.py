from yieldplot.config import DEFAULT_CONFIG, OVERVIEW_PRESET, PRESETS, TREASURY_PRESET, ChartConfig, get_preset, load_chart_config
from yieldplot.errors import PlotDataError
from yieldplot.labels import LabelTuning, place_label
from yieldplot.layout import Margins, PlotArea, ValueAxis, compute_layout, map_x, map_y
from yieldplot.renderer import FrameLayout, compute_frame, render
from yieldplot.series import AnchorPoint, LabelPlacement, YieldPoint
from yieldplot.style import ChartStyle
from yieldplot.surface import Surface

__all__ = [
    "AnchorPoint",
    "ChartConfig",
    "ChartStyle",
    "DEFAULT_CONFIG",
    "FrameLayout",
    "LabelPlacement",
    "LabelTuning",
    "Margins",
    "OVERVIEW_PRESET",
    "PRESETS",
    "PlotArea",
    "PlotDataError",
    "Surface",
    "TREASURY_PRESET",
    "ValueAxis",
    "YieldPoint",
    "compute_frame",
    "compute_layout",
    "get_preset",
    "load_chart_config",
    "map_x",
    "map_y",
    "place_label",
    "render",
]
