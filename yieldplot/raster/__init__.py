from .canvas import LinearGradient, Paint, blend_mask, new_canvas
from .context import DrawContext, RasterContext, Shadow
from .draw_fill import fill_polygon, fill_rect
from .draw_lines import dash_segments, draw_line, draw_polyline
from .draw_markers import draw_circle, draw_glow
from .draw_text import draw_text

__all__ = [
    "DrawContext",
    "LinearGradient",
    "Paint",
    "RasterContext",
    "Shadow",
    "blend_mask",
    "dash_segments",
    "draw_circle",
    "draw_glow",
    "draw_line",
    "draw_polyline",
    "draw_text",
    "fill_polygon",
    "fill_rect",
    "new_canvas",
]
