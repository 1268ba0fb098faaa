from .canvas import BLACK, RGBA, WHITE, clear_canvas, draw_pixel, flat_view, in_bounds, new_canvas
from .draw_lines import draw_line, draw_segments, round_half_away

__all__ = [
    "BLACK",
    "RGBA",
    "WHITE",
    "clear_canvas",
    "draw_line",
    "draw_pixel",
    "draw_segments",
    "flat_view",
    "in_bounds",
    "new_canvas",
    "round_half_away",
]
