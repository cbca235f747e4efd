from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from PIL import Image, ImageDraw

from yieldplot.raster.canvas import Paint, blend_mask, mask_bounds


def draw_polyline(
    dst: np.ndarray,
    points: Sequence[tuple[float, float]],
    paint: Paint,
    width: float = 1.0,
    *,
    round_caps: bool = False,
) -> None:
    if not points:
        return
    stroke = max(1, int(round(width)))
    bounds = mask_bounds(dst, list(points), pad=stroke)
    if bounds is None:
        return
    x0, y0, w, h = bounds
    local = [(px - x0, py - y0) for px, py in points]
    image = Image.new("L", (w, h), 0)
    draw = ImageDraw.Draw(image)
    if len(local) >= 2:
        draw.line(local, fill=255, width=stroke, joint="curve" if round_caps else None)
    if round_caps or len(local) == 1:
        r = stroke / 2.0
        for px, py in (local[0], local[-1]):
            draw.ellipse((px - r, py - r, px + r, py + r), fill=255)
    blend_mask(dst, x0, y0, np.asarray(image, dtype=np.uint8), paint)


def draw_line(
    dst: np.ndarray,
    start: tuple[float, float],
    end: tuple[float, float],
    paint: Paint,
    width: float = 1.0,
    *,
    dash: tuple[float, float] | None = None,
) -> None:
    if dash is None:
        draw_polyline(dst, [start, end], paint, width)
        return
    for seg_start, seg_end in dash_segments(start, end, dash):
        draw_polyline(dst, [seg_start, seg_end], paint, width)


def dash_segments(
    start: tuple[float, float],
    end: tuple[float, float],
    dash: tuple[float, float],
) -> list[tuple[tuple[float, float], tuple[float, float]]]:
    on, off = dash
    if on <= 0:
        return []
    length = math.hypot(end[0] - start[0], end[1] - start[1])
    if length <= 0:
        return []
    ux = (end[0] - start[0]) / length
    uy = (end[1] - start[1]) / length
    period = on + max(0.0, off)
    out: list[tuple[tuple[float, float], tuple[float, float]]] = []
    pos = 0.0
    while pos < length:
        stop = min(length, pos + on)
        out.append(
            (
                (start[0] + ux * pos, start[1] + uy * pos),
                (start[0] + ux * stop, start[1] + uy * stop),
            )
        )
        pos += period
    return out
