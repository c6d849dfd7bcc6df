from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence
import logging
import numpy as np

from instructions import CanvasInstruction, DrawInstruction, parse_instruction_file
from shapes import ShapeLibrary, rotate_about, scale_points, translate

from .gradient import paint_gradient
from .surfaces import DrawingSurface, RasterSurface

logger = logging.getLogger(__name__)

SurfaceFactory = Callable[[int, int], DrawingSurface]

_DEFAULT_RNG = np.random.default_rng()


@dataclass(frozen=True)
class RenderConfig:
    random_seed: Optional[int] = None
    format: str = "png"
    dpi: int = 100

    def make_rng(self) -> np.random.Generator:
        if self.random_seed is None:
            return _DEFAULT_RNG
        return np.random.default_rng(self.random_seed)


class Drawing:
    """
    A canvas plus an ordered list of draw instructions, rendered against a
    shape library. Rendering order is instruction order.
    """
    def __init__(self,
                 library: ShapeLibrary,
                 canvas: CanvasInstruction,
                 instructions: Sequence[DrawInstruction],
                 name: Optional[str] = None):
        self.library = library
        self.canvas = canvas
        self.instructions: List[DrawInstruction] = list(instructions)
        self.name = name

    @classmethod
    def from_file(cls, library: ShapeLibrary, path: str | Path, strict: bool = True) -> "Drawing":
        canvas, draws = parse_instruction_file(path, strict=strict)
        return cls(library, canvas, draws, name=Path(path).stem)

    def draw(self,
             surface_factory: SurfaceFactory = RasterSurface,
             rng: Optional[np.random.Generator] = None) -> DrawingSurface:
        """
        Acquire a surface of the canvas size, paint the background and then
        every instruction. Returns the painted surface.
        """
        if rng is None:
            rng = _DEFAULT_RNG
        canvas = self.canvas
        logger.debug("rendering %s: %dx%d %s, %d instructions",
                     self.name or "drawing", canvas.width, canvas.height,
                     "gradient" if canvas.is_gradient else "solid", len(self.instructions))
        surface = surface_factory(canvas.width, canvas.height)
        if canvas.is_gradient:
            paint_gradient(surface, canvas)
        else:
            surface.set_background(canvas.solid)
        for instruction in self.instructions:
            self._draw_instruction(surface, instruction, rng)
        return surface

    # ---- Per-instruction pipeline ----
    def _draw_instruction(self, surface: DrawingSurface, instruction: DrawInstruction,
                          rng: np.random.Generator) -> None:
        shape = self.library.lookup(instruction.shape_name)
        xs, ys = scale_points(shape, instruction.scale_percent)
        surface.set_color(instruction.color)
        start_x = instruction.x.raw
        start_y = instruction.y.raw
        # Translation applies unless both axes are random; a single random
        # axis therefore shifts by the sentinel on that axis.
        if not (instruction.x.is_random and instruction.y.is_random):
            translate(xs, ys, start_x, start_y)
        self._emit(surface, instruction, xs, ys)

        for _ in range(instruction.repeats - 1):
            if instruction.repeat_rotate > 0:
                self._rotate(surface, instruction, xs, ys, instruction.repeat_rotate)
            self._repeat(surface, instruction, xs, ys, rng)

        if instruction.rotate > 1:
            self._rotate(surface, instruction, xs, ys, instruction.rotate)

    def _emit(self, surface: DrawingSurface, instruction: DrawInstruction,
              xs: np.ndarray, ys: np.ndarray) -> None:
        if instruction.filled:
            surface.fill_polygon(xs, ys, len(xs))
        else:
            surface.draw_polygon(xs, ys, len(xs))

    def _rotate(self, surface: DrawingSurface, instruction: DrawInstruction,
                xs: np.ndarray, ys: np.ndarray, angle: int) -> None:
        cx = instruction.x.raw + instruction.scale_percent // 2
        cy = instruction.y.raw + instruction.scale_percent // 2
        rotate_about(xs, ys, cx, cy, angle)
        self._emit(surface, instruction, xs, ys)

    def _repeat(self, surface: DrawingSurface, instruction: DrawInstruction,
                xs: np.ndarray, ys: np.ndarray, rng: np.random.Generator) -> None:
        if instruction.x.is_random:
            ox = int(rng.integers(0, self.canvas.width))
        else:
            ox = instruction.repeat_offset_x
        if instruction.y.is_random:
            oy = int(rng.integers(0, self.canvas.height))
        else:
            oy = instruction.repeat_offset_y
        translate(xs, ys, ox, oy)
        self._emit(surface, instruction, xs, ys)
        if instruction.has_random_axis:
            translate(xs, ys, -ox, -oy)

    def describe(self) -> str:
        return self.canvas.describe() + "\n" + "".join(d.describe() for d in self.instructions)
