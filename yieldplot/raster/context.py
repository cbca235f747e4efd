from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

import numpy as np

from yieldplot.raster.canvas import LinearGradient, Paint, clear
from yieldplot.raster.draw_fill import fill_polygon, fill_rect
from yieldplot.raster.draw_lines import draw_line, draw_polyline
from yieldplot.raster.draw_markers import draw_circle, draw_glow
from yieldplot.raster.draw_text import TextAlign, TextBaseline, draw_text
from yieldplot.style import RGBA, FontSpec


@dataclass(frozen=True)
class Shadow:
    color: RGBA
    blur: float
    offset_x: float = 0.0
    offset_y: float = 0.0


class DrawContext(Protocol):
    """2D drawing calls the chart renderer issues, in logical pixels."""

    font_family: str

    def clear(self) -> None:
        ...

    def fill_rect(self, x: float, y: float, width: float, height: float, paint: Paint) -> None:
        ...

    def stroke_line(
        self,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        color: RGBA,
        width: float,
        dash: tuple[float, float] | None = None,
    ) -> None:
        ...

    def stroke_polyline(self, points: Sequence[tuple[float, float]], paint: Paint, width: float) -> None:
        ...

    def fill_polygon(self, points: Sequence[tuple[float, float]], paint: Paint) -> None:
        ...

    def fill_circle(self, cx: float, cy: float, radius: float, color: RGBA, glow: Shadow | None = None) -> None:
        ...

    def fill_text(
        self,
        text: str,
        x: float,
        y: float,
        color: RGBA,
        font: FontSpec,
        *,
        align: TextAlign = "left",
        baseline: TextBaseline = "alphabetic",
        rotate_deg: int = 0,
        shadow: Shadow | None = None,
    ) -> None:
        ...


class RasterContext:
    """``DrawContext`` over an RGBA numpy buffer scaled by the device pixel ratio."""

    def __init__(self, buffer: np.ndarray, scale: float = 1.0, font_family: str = "DejaVu Sans") -> None:
        if buffer.ndim != 3 or buffer.shape[2] != 4 or buffer.dtype != np.uint8:
            raise ValueError("buffer must be a uint8 array of shape (H, W, 4)")
        if scale <= 0:
            raise ValueError("scale must be > 0")
        self._buffer = buffer
        self._scale = float(scale)
        self.font_family = font_family

    @property
    def scale(self) -> float:
        return self._scale

    def clear(self) -> None:
        clear(self._buffer)

    def fill_rect(self, x: float, y: float, width: float, height: float, paint: Paint) -> None:
        s = self._scale
        fill_rect(self._buffer, x * s, y * s, width * s, height * s, self._paint(paint))

    def stroke_line(
        self,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        color: RGBA,
        width: float,
        dash: tuple[float, float] | None = None,
    ) -> None:
        s = self._scale
        scaled_dash = None if dash is None else (dash[0] * s, dash[1] * s)
        draw_line(self._buffer, (x0 * s, y0 * s), (x1 * s, y1 * s), color, width * s, dash=scaled_dash)

    def stroke_polyline(self, points: Sequence[tuple[float, float]], paint: Paint, width: float) -> None:
        draw_polyline(self._buffer, self._points(points), self._paint(paint), width * self._scale, round_caps=True)

    def fill_polygon(self, points: Sequence[tuple[float, float]], paint: Paint) -> None:
        fill_polygon(self._buffer, self._points(points), self._paint(paint))

    def fill_circle(self, cx: float, cy: float, radius: float, color: RGBA, glow: Shadow | None = None) -> None:
        s = self._scale
        if glow is not None:
            draw_glow(
                self._buffer,
                (cx + glow.offset_x) * s,
                (cy + glow.offset_y) * s,
                radius * s,
                glow.color,
                glow.blur * s,
            )
        draw_circle(self._buffer, cx * s, cy * s, radius * s, color)

    def fill_text(
        self,
        text: str,
        x: float,
        y: float,
        color: RGBA,
        font: FontSpec,
        *,
        align: TextAlign = "left",
        baseline: TextBaseline = "alphabetic",
        rotate_deg: int = 0,
        shadow: Shadow | None = None,
    ) -> None:
        s = self._scale
        draw_text(
            self._buffer,
            x * s,
            y * s,
            text,
            color,
            font_family=self.font_family,
            font_size_px=font.size_px * s,
            embolden_px=max(2, int(round(s)) + 1) if font.bold else 1,
            align=align,
            baseline=baseline,
            rotate_deg=rotate_deg,
            shadow_color=None if shadow is None else shadow.color,
            shadow_blur=0.0 if shadow is None else shadow.blur * s,
            shadow_offset=(0.0, 0.0) if shadow is None else (shadow.offset_x * s, shadow.offset_y * s),
        )

    def _points(self, points: Sequence[tuple[float, float]]) -> list[tuple[float, float]]:
        s = self._scale
        return [(px * s, py * s) for px, py in points]

    def _paint(self, paint: Paint) -> Paint:
        if isinstance(paint, LinearGradient):
            return paint.scaled(self._scale)
        return paint
