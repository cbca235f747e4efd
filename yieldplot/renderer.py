from __future__ import annotations

from dataclasses import dataclass
from datetime import date
import logging
from typing import Any, Protocol

from yieldplot.adapters import normalize_points
from yieldplot.config import DEFAULT_CONFIG, ChartConfig
from yieldplot.errors import PlotDataError
from yieldplot.labels import place_labels
from yieldplot.layout import PlotArea, anchor_points, compute_layout, horizontal_gridlines, vertical_gridlines
from yieldplot.raster.canvas import LinearGradient
from yieldplot.raster.context import DrawContext, Shadow
from yieldplot.scales import format_as_of, format_axis_value, format_point_value
from yieldplot.series import AnchorPoint, LabelPlacement, YieldPoint

LOGGER = logging.getLogger(__name__)

Y_VALUE_LABEL_GAP = 15.0
TERM_LABEL_DROP = 24.0
TITLE_Y = 35.0
SUBTITLE_Y = 55.0
Y_TITLE_X = 25.0
X_TITLE_INSET = 10.0


class RenderSurface(Protocol):
    width: int
    height: int

    def resolve_backing(self) -> tuple[int, int]:
        ...

    def context(self) -> DrawContext | None:
        ...


@dataclass(frozen=True)
class FrameLayout:
    width: float
    height: float
    plot_area: PlotArea
    anchors: tuple[AnchorPoint, ...]
    labels: tuple[LabelPlacement, ...]
    h_gridlines: tuple[tuple[float, float], ...]
    v_gridlines: tuple[float, ...]


def compute_frame(
    points: tuple[YieldPoint, ...],
    width: float,
    height: float,
    config: ChartConfig = DEFAULT_CONFIG,
) -> FrameLayout:
    """Derive every position one render pass needs. Pure; nothing is cached."""
    area = compute_layout(width, height, config.axis, config.margins)
    if area.is_empty or not points:
        return FrameLayout(width, height, area, (), (), (), ())
    anchors = anchor_points(points, config.axis, area)
    return FrameLayout(
        width=width,
        height=height,
        plot_area=area,
        anchors=anchors,
        labels=place_labels(anchors, area, config.labels),
        h_gridlines=horizontal_gridlines(config.axis, config.gridline_step, area),
        v_gridlines=vertical_gridlines(len(points), area),
    )


def render(
    points: Any,
    surface: RenderSurface,
    config: ChartConfig = DEFAULT_CONFIG,
    *,
    as_of: date | None = None,
) -> None:
    """Draw one complete yield curve frame onto ``surface``.

    Empty input, an unready surface and a plot area squeezed to nothing all
    skip the frame without touching the surface. Invalid point data and any
    failure while drawing are logged and the frame is skipped; nothing is
    raised to the caller.
    """
    try:
        data = normalize_points(points)
    except PlotDataError as exc:
        LOGGER.warning("skipping frame, invalid points: %s", exc)
        return
    except Exception as exc:
        LOGGER.warning("skipping frame, could not read points: %s", exc, exc_info=True)
        return
    if not data:
        LOGGER.debug("skipping frame, no points")
        return

    try:
        surface.resolve_backing()
        ctx = surface.context()
        if ctx is None:
            LOGGER.debug("skipping frame, surface not ready")
            return

        frame = compute_frame(data, float(surface.width), float(surface.height), config)
        if frame.plot_area.is_empty:
            LOGGER.debug("skipping frame, surface %sx%s smaller than margins", surface.width, surface.height)
            return

        draw_frame(ctx, frame, data, config, as_of=as_of or date.today())
    except Exception as exc:
        LOGGER.warning("skipping frame, render failed: %s", exc, exc_info=True)


def draw_frame(
    ctx: DrawContext,
    frame: FrameLayout,
    points: tuple[YieldPoint, ...],
    config: ChartConfig,
    *,
    as_of: date,
) -> None:
    # Later stages paint over earlier ones.
    ctx.font_family = config.style.font_family
    ctx.clear()
    _draw_background(ctx, frame, config)
    _draw_gridlines(ctx, frame, config)
    _draw_axes(ctx, frame, config)
    _draw_guides(ctx, frame, config)
    _draw_area(ctx, frame, config)
    _draw_curve(ctx, frame, config)
    _draw_markers(ctx, frame, config)
    _draw_value_labels(ctx, frame, config)
    _draw_term_labels(ctx, frame, points, config)
    _draw_axis_values(ctx, frame, config)
    _draw_titles(ctx, frame, config, as_of)


def _draw_background(ctx: DrawContext, frame: FrameLayout, config: ChartConfig) -> None:
    style = config.style
    gradient = LinearGradient(
        0.0,
        0.0,
        0.0,
        frame.height,
        ((0.0, style.background_top), (1.0, style.background_bottom)),
    )
    ctx.fill_rect(0.0, 0.0, frame.width, frame.height, gradient)


def _draw_gridlines(ctx: DrawContext, frame: FrameLayout, config: ChartConfig) -> None:
    style = config.style
    area = frame.plot_area
    for _, y in frame.h_gridlines:
        ctx.stroke_line(area.left, y, area.right, y, style.grid_color, style.grid_width, dash=style.grid_dash)
    for x in frame.v_gridlines:
        ctx.stroke_line(x, area.top, x, area.bottom, style.grid_color, style.grid_width, dash=style.grid_dash)


def _draw_axes(ctx: DrawContext, frame: FrameLayout, config: ChartConfig) -> None:
    style = config.style
    area = frame.plot_area
    ctx.stroke_polyline(
        [(area.left, area.top), (area.left, area.bottom), (area.right, area.bottom)],
        style.axis_color,
        style.axis_width,
    )


def _draw_guides(ctx: DrawContext, frame: FrameLayout, config: ChartConfig) -> None:
    style = config.style
    baseline = frame.plot_area.bottom
    for anchor in frame.anchors:
        ctx.stroke_line(anchor.x, anchor.y, anchor.x, baseline, style.guide_color, style.guide_width)


def _draw_area(ctx: DrawContext, frame: FrameLayout, config: ChartConfig) -> None:
    style = config.style
    area = frame.plot_area
    outline = [(area.left, area.bottom)]
    outline.extend((a.x, a.y) for a in frame.anchors)
    outline.append((frame.anchors[-1].x, area.bottom))
    gradient = LinearGradient(
        0.0,
        area.top,
        0.0,
        area.bottom,
        ((0.0, style.area_top), (1.0, style.area_bottom)),
    )
    ctx.fill_polygon(outline, gradient)


def _draw_curve(ctx: DrawContext, frame: FrameLayout, config: ChartConfig) -> None:
    style = config.style
    area = frame.plot_area
    gradient = LinearGradient(area.left, 0.0, area.right, 0.0, style.curve_stops)
    ctx.stroke_polyline([(a.x, a.y) for a in frame.anchors], gradient, style.curve_width)


def _draw_markers(ctx: DrawContext, frame: FrameLayout, config: ChartConfig) -> None:
    style = config.style
    glow = Shadow(color=style.glow_color, blur=style.glow_blur)
    for anchor in frame.anchors:
        ctx.fill_circle(anchor.x, anchor.y, style.halo_radius, style.halo_color, glow=glow)
        ctx.fill_circle(anchor.x, anchor.y, style.dot_radius, style.dot_color)


def _draw_value_labels(ctx: DrawContext, frame: FrameLayout, config: ChartConfig) -> None:
    style = config.style
    for anchor, placement in zip(frame.anchors, frame.labels, strict=True):
        ctx.fill_text(
            format_point_value(anchor.value),
            placement.x,
            placement.y,
            style.text_color,
            style.value_label_font,
            align=placement.align,
        )


def _draw_term_labels(ctx: DrawContext, frame: FrameLayout, points: tuple[YieldPoint, ...], config: ChartConfig) -> None:
    style = config.style
    y = frame.plot_area.bottom + TERM_LABEL_DROP
    for x, point in zip(frame.v_gridlines, points, strict=True):
        ctx.fill_text(point.term, x, y, style.text_color, style.term_label_font, align="center")


def _draw_axis_values(ctx: DrawContext, frame: FrameLayout, config: ChartConfig) -> None:
    style = config.style
    x = frame.plot_area.left - Y_VALUE_LABEL_GAP
    for value, y in frame.h_gridlines:
        ctx.fill_text(
            format_axis_value(value),
            x,
            y,
            style.text_color,
            style.axis_label_font,
            align="right",
            baseline="middle",
        )


def _draw_titles(ctx: DrawContext, frame: FrameLayout, config: ChartConfig, as_of: date) -> None:
    style = config.style
    center_x = frame.width / 2.0
    ctx.fill_text(
        config.title,
        center_x,
        TITLE_Y,
        style.title_color,
        style.title_font,
        align="center",
        shadow=Shadow(color=style.title_shadow, blur=2.0, offset_y=1.0),
    )
    ctx.fill_text(format_as_of(as_of), center_x, SUBTITLE_Y, style.subtitle_color, style.subtitle_font, align="center")
    ctx.fill_text(
        config.y_title,
        Y_TITLE_X,
        frame.height / 2.0,
        style.text_color,
        style.axis_title_font,
        rotate_deg=90,
    )
    ctx.fill_text(
        config.x_title,
        center_x,
        frame.height - X_TITLE_INSET,
        style.text_color,
        style.axis_title_font,
        align="center",
    )
