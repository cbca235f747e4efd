from __future__ import annotations

from dataclasses import dataclass, fields, replace
import re
from typing import Any, Mapping

RGBA = tuple[int, int, int, int]
GradientStops = tuple[tuple[float, RGBA], ...]

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")


def parse_hex_color(value: str, alpha: float = 1.0) -> RGBA:
    if not isinstance(value, str) or not _HEX_COLOR.match(value):
        raise ValueError(f"invalid hex color: {value!r} (expected #RRGGBB or #RRGGBBAA)")
    r = int(value[1:3], 16)
    g = int(value[3:5], 16)
    b = int(value[5:7], 16)
    a = int(value[7:9], 16) if len(value) == 9 else 255
    return (r, g, b, int(round(a * max(0.0, min(1.0, alpha)))))


@dataclass(frozen=True)
class FontSpec:
    size_px: float
    bold: bool = False


@dataclass(frozen=True)
class ChartStyle:
    """Colors, strokes and fonts. Presentation only; layout never reads these."""

    background_top: RGBA = (248, 249, 250, 255)
    background_bottom: RGBA = (255, 255, 255, 255)
    grid_color: RGBA = (207, 214, 220, 255)
    grid_width: float = 1.25
    grid_dash: tuple[float, float] = (4.0, 4.0)
    axis_color: RGBA = (73, 80, 87, 255)
    axis_width: float = 2.0
    guide_color: RGBA = (0, 123, 255, 115)
    guide_width: float = 2.0
    area_top: RGBA = (0, 123, 255, 71)
    area_bottom: RGBA = (0, 123, 255, 15)
    curve_stops: GradientStops = (
        (0.0, (40, 167, 69, 255)),
        (0.3, (0, 123, 255, 255)),
        (0.7, (111, 66, 193, 255)),
        (1.0, (220, 53, 69, 255)),
    )
    curve_width: float = 4.0
    halo_color: RGBA = (255, 255, 255, 255)
    halo_radius: float = 6.0
    glow_color: RGBA = (0, 123, 255, 153)
    glow_blur: float = 8.0
    dot_color: RGBA = (0, 123, 255, 255)
    dot_radius: float = 4.0
    text_color: RGBA = (73, 80, 87, 255)
    title_color: RGBA = (33, 37, 41, 255)
    subtitle_color: RGBA = (108, 117, 125, 255)
    title_shadow: RGBA = (0, 0, 0, 26)
    font_family: str = "DejaVu Sans"
    value_label_font: FontSpec = FontSpec(12.0, bold=True)
    term_label_font: FontSpec = FontSpec(13.0, bold=True)
    axis_label_font: FontSpec = FontSpec(12.0)
    title_font: FontSpec = FontSpec(20.0, bold=True)
    subtitle_font: FontSpec = FontSpec(12.0)
    axis_title_font: FontSpec = FontSpec(14.0, bold=True)


DEFAULT_STYLE = ChartStyle()

_COLOR_KEYS = {
    f.name
    for f in fields(ChartStyle)
    if f.name.endswith(("_color", "_top", "_bottom", "_shadow"))
}
_NUMBER_KEYS = {"grid_width", "axis_width", "guide_width", "curve_width", "halo_radius", "glow_blur", "dot_radius"}


def apply_style_overrides(base: ChartStyle, overrides: Mapping[str, Any] | None = None) -> ChartStyle:
    """Merge ``[style]`` overrides into ``base``.

    Colors are hex strings, widths and radii positive numbers; anything else
    is rejected so a typo in a config file surfaces immediately.
    """
    if not overrides:
        return base
    changes: dict[str, Any] = {}
    for key, value in overrides.items():
        if key in _COLOR_KEYS:
            changes[key] = parse_hex_color(value)
        elif key in _NUMBER_KEYS:
            if isinstance(value, bool) or not isinstance(value, (int, float)) or float(value) <= 0:
                raise ValueError(f"Style `{key}` must be a positive number")
            changes[key] = float(value)
        elif key == "font_family":
            if not isinstance(value, str) or not value.strip():
                raise ValueError("Style `font_family` must be a non-empty string")
            changes[key] = value
        else:
            raise ValueError(f"Unknown style key: {key}")
    return replace(base, **changes)
