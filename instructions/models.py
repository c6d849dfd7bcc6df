from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

RANDOM_SENTINEL = -2147483648

MIN_GRADIENT_DIRECTION = 0
MAX_GRADIENT_DIRECTION = 3


def rgb_range_limit(value: int) -> int:
    return min(255, max(0, int(value)))


@dataclass(frozen=True)
class Color:
    """
    8-bit RGB colour; channels are clamped to [0, 255] on construction.
    """
    red: int = 0
    green: int = 0
    blue: int = 0

    def __post_init__(self):
        object.__setattr__(self, "red", rgb_range_limit(self.red))
        object.__setattr__(self, "green", rgb_range_limit(self.green))
        object.__setattr__(self, "blue", rgb_range_limit(self.blue))

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    def to_unit(self) -> Tuple[float, float, float]:
        return (self.red / 255.0, self.green / 255.0, self.blue / 255.0)

    def __str__(self) -> str:
        return f"rgb({self.red}, {self.green}, {self.blue})"


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)


@dataclass(frozen=True)
class Coordinate:
    """
    Starting position on one axis: either a fixed pixel value or a request
    for random placement.
    """
    value: int = 0
    is_random: bool = False

    @classmethod
    def fixed(cls, value: int) -> "Coordinate":
        return cls(value=int(value), is_random=False)

    @classmethod
    def random(cls) -> "Coordinate":
        return cls(value=0, is_random=True)

    @classmethod
    def from_raw(cls, raw: int) -> "Coordinate":
        return cls.random() if raw == RANDOM_SENTINEL else cls.fixed(raw)

    @property
    def raw(self) -> int:
        return RANDOM_SENTINEL if self.is_random else self.value

    def __str__(self) -> str:
        return "random" if self.is_random else str(self.value)


@dataclass(frozen=True)
class CanvasInstruction:
    """
    Background of a drawing: solid colour or two-colour gradient.

    Normalisation on construction:
      - width/height are lifted to >= 1
      - a lone gradient colour (start without end or vice versa) becomes the
        solid colour
      - identical start and end collapse to a solid colour
      - with neither a gradient nor a solid colour the canvas is white
      - a direction outside 0..3 is reset to 0
    """
    width: int = 100
    height: int = 100
    solid: Optional[Color] = None
    gradient_start: Optional[Color] = None
    gradient_end: Optional[Color] = None
    gradient_direction: int = 0

    def __post_init__(self):
        solid = self.solid
        start = self.gradient_start
        end = self.gradient_end
        if (start is None) != (end is None):
            solid = start if start is not None else end
            start = end = None
        if start is not None and start == end:
            solid = start
            start = end = None
        if start is None and solid is None:
            solid = WHITE
        direction = int(self.gradient_direction)
        if direction < MIN_GRADIENT_DIRECTION or direction > MAX_GRADIENT_DIRECTION:
            direction = 0
        object.__setattr__(self, "width", max(1, int(self.width)))
        object.__setattr__(self, "height", max(1, int(self.height)))
        object.__setattr__(self, "solid", solid)
        object.__setattr__(self, "gradient_start", start)
        object.__setattr__(self, "gradient_end", end)
        object.__setattr__(self, "gradient_direction", direction)

    @property
    def is_gradient(self) -> bool:
        return self.gradient_start is not None

    def describe(self) -> str:
        return (
            "Canvas:\n"
            f"Width: {self.width} Height: {self.height}\n"
            f"colorSolid: {self.solid} colorStart: {self.gradient_start}\n"
            f"colorEnd: {self.gradient_end} gradDirection: {self.gradient_direction}\n"
            f"isGradient: {self.is_gradient}\n"
        )


@dataclass(frozen=True)
class DrawInstruction:
    """
    One shape drawing: which template, how large, where, how often and how.
    """
    shape_name: str = "none"
    scale_percent: int = 100
    x: Coordinate = field(default_factory=Coordinate)
    y: Coordinate = field(default_factory=Coordinate)
    repeats: int = 1
    repeat_offset_x: int = 0
    repeat_offset_y: int = 0
    filled: bool = True
    color: Color = BLACK
    rotate: int = 0
    repeat_rotate: int = 0

    def __post_init__(self):
        if not self.shape_name:
            raise ValueError("Shape names must not be None or empty")
        if self.color is None:
            raise ValueError("Color must not be None")
        object.__setattr__(self, "scale_percent", max(1, int(self.scale_percent)))
        object.__setattr__(self, "repeats", max(1, int(self.repeats)))

    @property
    def has_random_axis(self) -> bool:
        return self.x.is_random or self.y.is_random

    def describe(self) -> str:
        return (
            f"shapeName: {self.shape_name} scalePercent: {self.scale_percent} startingX: {self.x}\n"
            f"startingY: {self.y} repeats: {self.repeats} repeatOffsetX: {self.repeat_offset_x}\n"
            f"repeatOffsetY: {self.repeat_offset_y} filled: {self.filled} color: {self.color}\n"
            f"rotate: {self.rotate} repeatRotate: {self.repeat_rotate}\n\n"
        )
