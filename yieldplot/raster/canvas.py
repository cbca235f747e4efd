from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np

from yieldplot.style import RGBA, GradientStops


@dataclass(frozen=True)
class LinearGradient:
    x0: float
    y0: float
    x1: float
    y1: float
    stops: GradientStops

    def scaled(self, factor: float) -> "LinearGradient":
        return LinearGradient(
            x0=self.x0 * factor,
            y0=self.y0 * factor,
            x1=self.x1 * factor,
            y1=self.y1 * factor,
            stops=self.stops,
        )


Paint = Union[RGBA, LinearGradient]


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 0)) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :, 0] = color[0]
    canvas[:, :, 1] = color[1]
    canvas[:, :, 2] = color[2]
    canvas[:, :, 3] = color[3]
    return canvas


def clear(dst: np.ndarray, color: RGBA = (0, 0, 0, 0)) -> None:
    dst[:, :] = np.asarray(color, dtype=np.uint8)


def paint_patch(paint: Paint, x0: int, y0: int, width: int, height: int) -> np.ndarray:
    """Return float32 RGBA values (0..255) of ``paint`` over a pixel rectangle."""
    if not isinstance(paint, LinearGradient):
        out = np.empty((height, width, 4), dtype=np.float32)
        out[:, :] = np.asarray(paint, dtype=np.float32)
        return out

    dx = paint.x1 - paint.x0
    dy = paint.y1 - paint.y0
    denom = dx * dx + dy * dy
    xs = np.arange(x0, x0 + width, dtype=np.float32) + 0.5
    ys = np.arange(y0, y0 + height, dtype=np.float32) + 0.5
    if denom <= 1e-12:
        t = np.zeros((height, width), dtype=np.float32)
    else:
        t = ((xs[None, :] - paint.x0) * dx + (ys[:, None] - paint.y0) * dy) / denom
        t = np.clip(t, 0.0, 1.0)
    offsets = np.asarray([s[0] for s in paint.stops], dtype=np.float32)
    colors = np.asarray([s[1] for s in paint.stops], dtype=np.float32)
    out = np.empty((height, width, 4), dtype=np.float32)
    for ch in range(4):
        out[:, :, ch] = np.interp(t, offsets, colors[:, ch])
    return out


def blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, paint: Paint) -> None:
    """Source-over composite ``paint`` through an 8-bit coverage mask placed at (x, y)."""
    h, w = mask.shape
    if h <= 0 or w <= 0:
        return

    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    sx0 = x0 - x
    sy0 = y0 - y
    cov = mask[sy0 : sy0 + (y1 - y0), sx0 : sx0 + (x1 - x0)].astype(np.float32) / 255.0
    if not np.any(cov > 0):
        return

    src = paint_patch(paint, x0, y0, x1 - x0, y1 - y0)
    src_alpha = (src[:, :, 3] / 255.0) * cov
    if not np.any(src_alpha > 0):
        return

    patch = dst[y0:y1, x0:x1]
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0

    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src[:, :, :3] * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    out_rgb = out_rgb_num / safe_alpha[:, :, None]

    patch[:, :, :3] = np.clip(np.rint(out_rgb), 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(np.rint(out_alpha * 255.0), 0, 255).astype(np.uint8)


def mask_bounds(
    dst: np.ndarray,
    points: list[tuple[float, float]],
    pad: float,
) -> tuple[int, int, int, int] | None:
    """Integer (x, y, width, height) box around ``points`` grown by ``pad``,
    cropped to ``dst``. ``None`` when nothing of it lands on the canvas."""
    if not points:
        return None
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    x0 = max(0, int(np.floor(min(xs) - pad)))
    y0 = max(0, int(np.floor(min(ys) - pad)))
    x1 = min(dst.shape[1], int(np.ceil(max(xs) + pad)) + 1)
    y1 = min(dst.shape[0], int(np.ceil(max(ys) + pad)) + 1)
    if x1 <= x0 or y1 <= y0:
        return None
    return x0, y0, x1 - x0, y1 - y0
