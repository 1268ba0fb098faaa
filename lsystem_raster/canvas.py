from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]

WHITE: RGBA = (255, 255, 255, 255)
BLACK: RGBA = (0, 0, 0, 255)


def new_canvas(width: int, height: int, color: RGBA = WHITE) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    clear_canvas(canvas, color)
    return canvas


def clear_canvas(dst: np.ndarray, color: RGBA) -> None:
    dst[:, :, 0] = color[0]
    dst[:, :, 1] = color[1]
    dst[:, :, 2] = color[2]
    dst[:, :, 3] = color[3]


def in_bounds(dst: np.ndarray, x: int, y: int) -> bool:
    return 0 <= x < dst.shape[1] and 0 <= y < dst.shape[0]


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> bool:
    if not in_bounds(dst, x, y):
        return False
    a = color[3]
    if a >= 255:
        dst[y, x, 0:3] = color[0:3]
    elif a > 0:
        alpha = a / 255.0
        current = dst[y, x, :3].astype(np.float32)
        dst[y, x, 0:3] = (np.asarray(color[0:3], dtype=np.float32) * alpha + current * (1.0 - alpha)).astype(np.uint8)
    dst[y, x, 3] = 255
    return True


def flat_view(dst: np.ndarray) -> np.ndarray:
    """Row-major (width * height, 4) view; pixel (x, y) lives at y * width + x."""
    return dst.reshape(-1, 4)
