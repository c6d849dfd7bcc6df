from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from .geometry import Shape
from .templates import builtin_shapes, ensure_templates, load_template_dir


class ShapeNotFound(KeyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"no shape named {self.name!r} in the library"


class ShapeLibrary:
    """
    Named collection of template polygons, read-only once built.
    Names are unique: adding a second shape with an existing name is an error.
    """
    def __init__(self, template_dir: Optional[str | Path] = None, shapes: Optional[Iterable[Shape]] = None):
        self._shapes: List[Shape] = []
        self._by_name: dict[str, Shape] = {}
        if shapes is None:
            folder = ensure_templates(template_dir)
            shapes = builtin_shapes() if folder is None else load_template_dir(folder)
        for shape in shapes:
            self.add(shape)

    def add(self, shape: Shape) -> None:
        if shape is None:
            raise ValueError("shape must not be None")
        if shape.name in self._by_name:
            raise ValueError(f"duplicate shape name {shape.name!r}")
        self._shapes.append(shape)
        self._by_name[shape.name] = shape

    def lookup(self, name: str) -> Shape:
        try:
            return self._by_name[name]
        except KeyError:
            raise ShapeNotFound(name) from None

    def count(self) -> int:
        return len(self._shapes)

    def at(self, index: int) -> Shape:
        return self._shapes[index]

    def names(self) -> List[str]:
        return [s.name for s in self._shapes]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._shapes)

    def __iter__(self) -> Iterator[Shape]:
        return iter(self._shapes)

    def describe(self) -> str:
        return "\n".join(s.describe() for s in self._shapes)
