from __future__ import annotations

from typing import Sequence

import numpy as np
from PIL import Image, ImageDraw

from yieldplot.raster.canvas import Paint, blend_mask, mask_bounds


def fill_polygon(dst: np.ndarray, points: Sequence[tuple[float, float]], paint: Paint) -> None:
    if len(points) < 3:
        return
    bounds = mask_bounds(dst, list(points), pad=1.0)
    if bounds is None:
        return
    x0, y0, w, h = bounds
    image = Image.new("L", (w, h), 0)
    ImageDraw.Draw(image).polygon([(px - x0, py - y0) for px, py in points], fill=255)
    blend_mask(dst, x0, y0, np.asarray(image, dtype=np.uint8), paint)


def fill_rect(dst: np.ndarray, x: float, y: float, width: float, height: float, paint: Paint) -> None:
    left = max(0, int(round(min(x, x + width))))
    right = min(dst.shape[1], int(round(max(x, x + width))))
    top = max(0, int(round(min(y, y + height))))
    bottom = min(dst.shape[0], int(round(max(y, y + height))))
    if right <= left or bottom <= top:
        return
    mask = np.full((bottom - top, right - left), 255, dtype=np.uint8)
    blend_mask(dst, left, top, mask, paint)
