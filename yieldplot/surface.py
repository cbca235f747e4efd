from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from pathlib import Path

import numpy as np
from PIL import Image

from yieldplot.raster.canvas import new_canvas
from yieldplot.raster.context import RasterContext

LOGGER = logging.getLogger(__name__)

# 8192 x 8192 RGBA, 256 MiB.
MAX_BACKING_PIXELS = 8192 * 8192


@dataclass
class Surface:
    """Drawing target with a logical pixel size and a density-scaled backing buffer."""

    width: int
    height: int
    device_pixel_ratio: float = 1.0
    _buffer: np.ndarray | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("width and height must be >= 0")
        if not math.isfinite(self.device_pixel_ratio) or self.device_pixel_ratio <= 0:
            raise ValueError("device_pixel_ratio must be > 0")

    @property
    def backing_size(self) -> tuple[int, int]:
        return (
            int(math.floor(self.width * self.device_pixel_ratio)),
            int(math.floor(self.height * self.device_pixel_ratio)),
        )

    @property
    def is_ready(self) -> bool:
        return self._buffer is not None and self._buffer.shape[0] > 0 and self._buffer.shape[1] > 0

    def resize(self, width: int, height: int, device_pixel_ratio: float | None = None) -> None:
        if width < 0 or height < 0:
            raise ValueError("width and height must be >= 0")
        self.width = int(width)
        self.height = int(height)
        if device_pixel_ratio is not None:
            if device_pixel_ratio <= 0:
                raise ValueError("device_pixel_ratio must be > 0")
            self.device_pixel_ratio = float(device_pixel_ratio)
        self._buffer = None

    def resolve_backing(self) -> tuple[int, int]:
        """(Re)allocate the backing buffer to match logical size times density."""
        bw, bh = self.backing_size
        if bw <= 0 or bh <= 0:
            self._buffer = None
            return (bw, bh)
        if bw * bh > MAX_BACKING_PIXELS:
            LOGGER.warning("backing buffer %dx%d exceeds %d pixels; surface left unready", bw, bh, MAX_BACKING_PIXELS)
            self._buffer = None
            return (bw, bh)
        if self._buffer is None or self._buffer.shape[:2] != (bh, bw):
            self._buffer = new_canvas(bw, bh)
        return (bw, bh)

    def context(self) -> RasterContext | None:
        if not self.is_ready:
            return None
        assert self._buffer is not None
        return RasterContext(self._buffer, scale=self.device_pixel_ratio)

    def to_rgba(self) -> np.ndarray:
        if self._buffer is None:
            bw, bh = self.backing_size
            if bw * bh > MAX_BACKING_PIXELS:
                return new_canvas(0, 0)
            return new_canvas(max(0, bw), max(0, bh))
        return self._buffer.copy()

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.to_rgba())

    def save_png(self, path: Path) -> None:
        if not self.is_ready:
            raise ValueError("surface has no backing buffer to save")
        self.to_image().save(path, format="PNG")
