from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple
import math
import numpy as np
from shapely.geometry import Polygon

INT32_MIN = -2**31
INT32_MAX = 2**31 - 1


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0

    def distance_to_origin(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def distance(self, other: "Point") -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def midpoint(self, other: "Point") -> "Point":
        return Point((self.x + other.x) / 2, (self.y + other.y) / 2)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class Shape:
    """
    Named closed polygon in the 100x100 template frame.
    The first point need not repeat as the last one; closing is implicit.
    """
    def __init__(self, name: str, points: Sequence[Point | Tuple[float, float]]):
        if not name:
            raise ValueError("Shape names must not be None or empty")
        pts: list[Point] = []
        for p in points:
            if p is None:
                raise ValueError("point must not be None")
            pts.append(p if isinstance(p, Point) else Point(float(p[0]), float(p[1])))
        if not pts:
            raise ValueError(f"shape {name!r} requires at least one point")
        self._name = name
        self._points = tuple(pts)

    @property
    def name(self) -> str:
        return self._name

    @property
    def point_count(self) -> int:
        return len(self._points)

    def point(self, idx: int) -> Point:
        return self._points[idx]

    @property
    def points(self) -> Tuple[Point, ...]:
        return self._points

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Shape):
            return NotImplemented
        return self._name == other._name and self._points == other._points

    def __hash__(self) -> int:
        return hash((self._name, self._points))

    def __repr__(self) -> str:
        return f"Shape({self._name!r}, {len(self._points)} points)"

    def as_array(self) -> np.ndarray:
        return np.array([[p.x, p.y] for p in self._points], dtype=float)

    def to_polygon(self) -> Polygon:
        return Polygon(self.as_array())

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """
        (minx, miny, maxx, maxy) of the template vertices.
        """
        arr = self.as_array()
        xmin, ymin = arr.min(axis=0)
        xmax, ymax = arr.max(axis=0)
        return float(xmin), float(ymin), float(xmax), float(ymax)

    def describe(self) -> str:
        lines = [f"Shape name : {self._name}", "points:"]
        lines.extend(str(p) for p in self._points)
        return "\n".join(lines) + "\n"


# ---- Integer vertex arrays ----

def to_pixels(values: np.ndarray) -> np.ndarray:
    """
    Truncate toward zero and saturate to the signed 32-bit range.
    """
    v = np.trunc(np.asarray(values, dtype=float))
    return np.clip(v, INT32_MIN, INT32_MAX).astype(np.int64)


def scale_points(shape: Shape, scale_percent: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Integer working arrays (xs, ys) of the template scaled by scale_percent / 100.
    """
    factor = scale_percent / 100.0
    arr = shape.as_array()
    return to_pixels(arr[:, 0] * factor), to_pixels(arr[:, 1] * factor)


def translate(xs: np.ndarray, ys: np.ndarray, dx: int, dy: int) -> None:
    xs += dx
    ys += dy


def rotate_about(xs: np.ndarray, ys: np.ndarray, cx: int, cy: int, degrees: float) -> None:
    """
    Rotate the working arrays in place about (cx, cy); y grows downward so
    positive angles turn clockwise on screen.
    """
    theta = degrees * (math.pi / 180)
    c = math.cos(theta)
    s = math.sin(theta)
    dx = (xs - cx).astype(float)
    dy = (ys - cy).astype(float)
    new_x = to_pixels(c * dx - s * dy + cx)
    new_y = to_pixels(s * dx + c * dy + cy)
    xs[:] = new_x
    ys[:] = new_y
