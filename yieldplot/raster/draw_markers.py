from __future__ import annotations

import numpy as np
from PIL import Image, ImageDraw, ImageFilter

from yieldplot.raster.canvas import Paint, blend_mask, mask_bounds
from yieldplot.style import RGBA


def draw_circle(dst: np.ndarray, cx: float, cy: float, radius: float, paint: Paint) -> None:
    if radius <= 0:
        return
    bounds = mask_bounds(dst, [(cx, cy)], pad=radius + 1.0)
    if bounds is None:
        return
    x0, y0, w, h = bounds
    lx = cx - x0
    ly = cy - y0
    image = Image.new("L", (w, h), 0)
    ImageDraw.Draw(image).ellipse((lx - radius, ly - radius, lx + radius, ly + radius), fill=255)
    blend_mask(dst, x0, y0, np.asarray(image, dtype=np.uint8), paint)


def draw_glow(dst: np.ndarray, cx: float, cy: float, radius: float, color: RGBA, blur: float) -> None:
    """Soft shadow of a filled circle, blurred like a canvas ``shadowBlur``."""
    if radius <= 0 or blur <= 0:
        return
    sigma = blur / 2.0
    pad = radius + 3.0 * sigma + 2.0
    # Unclipped box so the blur kernel sees the whole disc near canvas edges.
    x0 = int(np.floor(cx - pad))
    y0 = int(np.floor(cy - pad))
    size = int(np.ceil(2 * pad)) + 1
    if x0 + size <= 0 or y0 + size <= 0 or x0 >= dst.shape[1] or y0 >= dst.shape[0]:
        return
    lx = cx - x0
    ly = cy - y0
    image = Image.new("L", (size, size), 0)
    ImageDraw.Draw(image).ellipse((lx - radius, ly - radius, lx + radius, ly + radius), fill=255)
    image = image.filter(ImageFilter.GaussianBlur(radius=sigma))
    blend_mask(dst, x0, y0, np.asarray(image, dtype=np.uint8), color)
