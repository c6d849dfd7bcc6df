from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional, Sequence, Tuple
import numpy as np
import matplotlib.pyplot as plt
from PIL import Image, ImageDraw
from shapely.geometry import Polygon

from instructions import BLACK, WHITE, Color


class SurfaceError(RuntimeError):
    pass


def _vertices(xs: Sequence[int], ys: Sequence[int], count: int) -> List[Tuple[int, int]]:
    if len(xs) != len(ys):
        raise SurfaceError(f"vertex arrays differ in length ({len(xs)} != {len(ys)})")
    if count < 1 or count > len(xs):
        raise SurfaceError(f"vertex count {count} out of range for {len(xs)} vertices")
    return [(int(xs[k]), int(ys[k])) for k in range(count)]


class DrawingSurface:
    """
    Pixel canvas the engine paints on: origin at top-left, y grows downward.
    Constructing a surface with (width, height) is the create operation.
    """
    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise SurfaceError(f"surface size must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.color: Color = BLACK

    def set_color(self, color: Color) -> None:
        self.color = color

    def set_background(self, color: Color) -> None:
        raise NotImplementedError

    def fill_polygon(self, xs: Sequence[int], ys: Sequence[int], count: int) -> None:
        raise NotImplementedError

    def draw_polygon(self, xs: Sequence[int], ys: Sequence[int], count: int) -> None:
        raise NotImplementedError


class RasterSurface(DrawingSurface):
    """
    Off-screen Pillow image.
    """
    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self.image = Image.new("RGB", (self.width, self.height), WHITE.as_tuple())
        self._draw = ImageDraw.Draw(self.image)

    def set_background(self, color: Color) -> None:
        self._draw.rectangle((0, 0, self.width - 1, self.height - 1), fill=color.as_tuple())

    def _polygon(self, xs, ys, count: int, filled: bool) -> None:
        pts = _vertices(xs, ys, count)
        if len(pts) == 1:
            pts = pts * 2
        rgb = self.color.as_tuple()
        try:
            if filled:
                self._draw.polygon(pts, fill=rgb, outline=rgb)
            else:
                self._draw.polygon(pts, outline=rgb)
        except (ValueError, TypeError, OverflowError) as e:
            raise SurfaceError(f"raster backend rejected polygon: {e}") from e

    def fill_polygon(self, xs, ys, count: int) -> None:
        self._polygon(xs, ys, count, filled=True)

    def draw_polygon(self, xs, ys, count: int) -> None:
        self._polygon(xs, ys, count, filled=False)

    def pixel(self, x: int, y: int) -> Color:
        return Color(*self.image.getpixel((x, y)))

    def to_array(self) -> np.ndarray:
        return np.asarray(self.image, dtype=np.uint8)

    def save(self, path: str, format: Optional[str] = None) -> None:
        self.image.save(path, format=format)


class FigureSurface(DrawingSurface):
    """
    Matplotlib figure whose axes span exactly the canvas; suitable for SVG.
    """
    def __init__(self, width: int, height: int, dpi: int = 100):
        super().__init__(width, height)
        self.dpi = dpi
        self.figure = plt.figure(figsize=(self.width / dpi, self.height / dpi), dpi=dpi)
        self.ax = self.figure.add_axes((0.0, 0.0, 1.0, 1.0))
        self.ax.set_xlim(0, self.width)
        self.ax.set_ylim(self.height, 0)
        self.ax.axis("off")
        self.set_background(WHITE)

    def set_background(self, color: Color) -> None:
        rgb = color.to_unit()
        self.figure.patch.set_facecolor(rgb)
        self.ax.set_facecolor(rgb)

    def fill_polygon(self, xs, ys, count: int) -> None:
        pts = _vertices(xs, ys, count)
        rgb = self.color.to_unit()
        self.ax.fill([p[0] for p in pts], [p[1] for p in pts], fc=rgb, ec=rgb, linewidth=0.5)

    def draw_polygon(self, xs, ys, count: int) -> None:
        pts = _vertices(xs, ys, count)
        rgb = self.color.to_unit()
        self.ax.fill([p[0] for p in pts], [p[1] for p in pts], fill=False, ec=rgb, linewidth=1.0)

    def save(self, path: str, format: Optional[str] = None) -> None:
        self.figure.savefig(path, dpi=self.dpi, format=format, facecolor=self.figure.get_facecolor())

    def close(self) -> None:
        plt.close(self.figure)


OpKind = Literal["background", "fill", "draw"]


@dataclass(frozen=True)
class SurfaceOp:
    kind: OpKind
    color: Color
    points: Tuple[Tuple[int, int], ...] = ()

    @property
    def xs(self) -> List[int]:
        return [p[0] for p in self.points]

    @property
    def ys(self) -> List[int]:
        return [p[1] for p in self.points]

    def polygon(self) -> Polygon:
        return Polygon(self.points)


class RecordingSurface(DrawingSurface):
    """
    Keeps every primitive in call order instead of painting it.
    """
    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self.ops: List[SurfaceOp] = []

    def set_background(self, color: Color) -> None:
        self.ops.append(SurfaceOp("background", color))

    def fill_polygon(self, xs, ys, count: int) -> None:
        self.ops.append(SurfaceOp("fill", self.color, tuple(_vertices(xs, ys, count))))

    def draw_polygon(self, xs, ys, count: int) -> None:
        self.ops.append(SurfaceOp("draw", self.color, tuple(_vertices(xs, ys, count))))

    def polygons(self) -> List[SurfaceOp]:
        return [op for op in self.ops if op.kind != "background"]
