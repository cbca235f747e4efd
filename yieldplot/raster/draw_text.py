from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

import numpy as np
from PIL import Image, ImageDraw, ImageFilter, ImageFont

from yieldplot.raster.canvas import blend_mask
from yieldplot.style import RGBA


TextBaseline = Literal["alphabetic", "middle", "top"]
TextAlign = Literal["left", "center", "right"]

DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX = 12.0
SANS_FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "helvetica",
    "arial",
    "liberationsans",
    "liberation sans",
    "freesans",
)


def draw_text(
    dst: np.ndarray,
    x: float,
    y: float,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    embolden_px: int = 1,
    align: TextAlign = "left",
    baseline: TextBaseline = "alphabetic",
    rotate_deg: int = 0,
    shadow_color: RGBA | None = None,
    shadow_blur: float = 0.0,
    shadow_offset: tuple[float, float] = (0.0, 0.0),
) -> None:
    """Draw ``text`` anchored at (x, y) the way a 2D canvas ``fillText`` does.

    Rotated text is centered on the anchor point.
    """
    if not text:
        return
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    mask = _render_mask(text=text, font=font)
    if embolden_px > 1:
        mask = _embolden(mask, embolden_px)

    turns = _normalize_quarter_turns(rotate_deg)
    if turns:
        mask = np.rot90(mask, k=turns)
        left = int(round(x - mask.shape[1] / 2.0))
        top = int(round(y - mask.shape[0] / 2.0))
    else:
        left, top = _anchor_origin(font, text, x, y, align=align, baseline=baseline)

    if shadow_color is not None:
        shadow = mask
        pad = 0
        if shadow_blur > 0:
            pad = int(np.ceil(shadow_blur * 1.5))
            image = Image.fromarray(np.pad(mask, pad))
            shadow = np.asarray(image.filter(ImageFilter.GaussianBlur(radius=shadow_blur / 2.0)), dtype=np.uint8)
        blend_mask(
            dst,
            left - pad + int(round(shadow_offset[0])),
            top - pad + int(round(shadow_offset[1])),
            shadow,
            shadow_color,
        )
    blend_mask(dst, left, top, mask, color)


def _anchor_origin(
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
    text: str,
    x: float,
    y: float,
    *,
    align: TextAlign,
    baseline: TextBaseline,
) -> tuple[int, int]:
    # Mask pixels start at the glyph bbox; bbox offsets are relative to the ascender line.
    bbox_left, bbox_top, _, _ = font.getbbox(text)
    ascent, descent = font.getmetrics()
    advance = float(font.getlength(text))
    if align == "center":
        origin_x = x - advance / 2.0
    elif align == "right":
        origin_x = x - advance
    else:
        origin_x = x
    if baseline == "top":
        origin_y = y
    elif baseline == "middle":
        origin_y = y - (ascent + descent) / 2.0
    else:
        origin_y = y - ascent
    return int(round(origin_x + bbox_left)), int(round(origin_y + bbox_top))


def _embolden(mask: np.ndarray, embolden_px: int) -> np.ndarray:
    if embolden_px <= 1:
        return mask
    out = mask.copy()
    for shift in range(1, embolden_px):
        src = mask[:, : max(0, mask.shape[1] - shift)]
        dst = out[:, shift:]
        if src.size == 0 or dst.size == 0:
            break
        np.maximum(dst, src, out=dst)
    return out


@lru_cache(maxsize=256)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    mask = np.asarray(image, dtype=np.uint8)
    mask.setflags(write=False)
    return mask


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family)
    if font_path is None:
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError:
        return ImageFont.load_default(size=size)


@lru_cache(maxsize=16)
def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + SANS_FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(sorted(base.rglob(ext)))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            if stem == p or stem.startswith(p + "-") or (p in stem and "mono" not in stem and "bold" not in stem):
                return path
    return None


def _normalize_quarter_turns(rotate_deg: int) -> int:
    if rotate_deg % 90 != 0:
        raise ValueError("rotate_deg must be a multiple of 90")
    return (rotate_deg // 90) % 4
