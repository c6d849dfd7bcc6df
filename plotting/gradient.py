from __future__ import annotations

from typing import Iterator, Tuple
import math
import numpy as np

from instructions import CanvasInstruction, Color
from shapes import rotate_about

# Number of bands per direction: 0 vertical, 1 horizontal, 2 TL->BR, 3 TR->BL.
GRADIENT_STEPS = {0: 100, 1: 100, 2: 150, 3: 110}

# (band offset in percent of height, rotation in degrees) for the diagonal bands
_DIAGONAL = {2: (40, -15), 3: (5, 110)}


def _tdiv(a: int, b: int) -> int:
    """
    Integer division truncating toward zero.
    """
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def step_color(start: Color, end: Color, i: int, steps: int) -> Color:
    ratio = i / steps
    return Color(
        int(end.red * ratio + start.red * (1 - ratio)),
        int(end.green * ratio + start.green * (1 - ratio)),
        int(end.blue * ratio + start.blue * (1 - ratio)),
    )


def gradient_band(canvas: CanvasInstruction, i: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Vertices of band i. Bands overlap: each later band overpaints the tail of
    the previous ones.
    """
    w = canvas.width
    h = canvas.height
    direction = canvas.gradient_direction
    if direction == 0:
        top = _tdiv(h * (i - 1), 100)
        return np.array([0, w, w, 0], dtype=np.int64), np.array([top, top, top + h, top + h], dtype=np.int64)
    if direction == 1:
        left = _tdiv(w * (i - 1), 100)
        return np.array([left, left + w, left + w, left], dtype=np.int64), np.array([0, 0, h, h], dtype=np.int64)
    offset, angle = _DIAGONAL[direction]
    hyp = int(math.sqrt(w * w + h * h))
    top = _tdiv(h * (i - offset), 100)
    xs = np.array([0, hyp, hyp, 0], dtype=np.int64)
    ys = np.array([top, top, 2 * h, 2 * h], dtype=np.int64)
    rotate_about(xs, ys, hyp // 2, top + h // 2, angle)
    return xs, ys


def gradient_bands(canvas: CanvasInstruction) -> Iterator[Tuple[Color, np.ndarray, np.ndarray]]:
    if not canvas.is_gradient:
        raise ValueError("canvas has no gradient")
    steps = GRADIENT_STEPS[canvas.gradient_direction]
    for i in range(steps):
        xs, ys = gradient_band(canvas, i)
        yield step_color(canvas.gradient_start, canvas.gradient_end, i, steps), xs, ys


def paint_gradient(surface, canvas: CanvasInstruction) -> None:
    for color, xs, ys in gradient_bands(canvas):
        surface.set_color(color)
        surface.fill_polygon(xs, ys, len(xs))
