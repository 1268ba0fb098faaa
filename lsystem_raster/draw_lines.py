from __future__ import annotations

import math
from typing import Iterable, Protocol

import numpy as np

from lsystem_raster.canvas import BLACK, RGBA, draw_pixel


Point = tuple[float, float]


class SegmentLike(Protocol):
    x0: float
    y0: float
    x1: float
    y1: float


def round_half_away(value: float) -> int:
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def draw_line(p0: Point, p1: Point, dst: np.ndarray, color: RGBA = BLACK) -> int:
    """Rasterize p0 -> p1 inclusive. Returns the number of in-bounds pixels plotted."""
    x0 = round_half_away(p0[0])
    y0 = round_half_away(p0[1])
    x1 = round_half_away(p1[0])
    y1 = round_half_away(p1[1])

    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy
    plotted = 0

    while True:
        if draw_pixel(dst, x0, y0, color):
            plotted += 1
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy
    return plotted


def draw_segments(dst: np.ndarray, segments: Iterable[SegmentLike], color: RGBA = BLACK) -> int:
    count = 0
    for seg in segments:
        draw_line((seg.x0, seg.y0), (seg.x1, seg.y1), dst, color=color)
        count += 1
    return count
