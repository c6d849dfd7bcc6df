from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple
import json
import logging

from .geometry import Shape

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".json"

# All coordinates live in the 100x100 template frame.
SQUARE = [(0, 0), (100, 0), (100, 100), (0, 100)]

STAR = [
    (50, 0), (60, 40), (100, 50), (60, 60),
    (50, 100), (40, 60), (0, 50), (40, 40),
]

CIRCLE = [
    (100.0, 50.0), (98.0, 37.0), (93.0, 25.0), (85.0, 15.0), (75.0, 7.0),
    (63.0, 2.0), (50.0, 0.0), (37.0, 2.0), (25.0, 7.0), (15.0, 15.0),
    (7.0, 25.0), (2.0, 37.0), (0.0, 50.0), (2.0, 63.0), (7.0, 75.0),
    (15.0, 85.0), (25.0, 93.0), (37.0, 98.0), (50.0, 100.0), (63.0, 98.0),
    (75.0, 93.0), (85.0, 85.0), (93.0, 75.0), (98.0, 63.0), (100.0, 50.0),
]

HEART = [
    (100.0, 25.0), (99.0, 19.0), (97.0, 13.0), (93.0, 7.0), (88.0, 3.0),
    (81.0, 1.0), (75.0, 0.0), (69.0, 1.0), (63.0, 3.0), (57.0, 7.0),
    (53.0, 13.0), (51.0, 19.0), (50.0, 25.0), (49.0, 19.0), (47.0, 13.0),
    (43.0, 7.0), (38.0, 3.0), (31.0, 1.0), (25.0, 0.0), (19.0, 1.0),
    (13.0, 3.0), (7.0, 7.0), (3.0, 13.0), (1.0, 19.0), (0.0, 25.0),
    (50.0, 100.0), (100.0, 25.0),
]

RHOMBUS = [(50, 0), (100, 50), (50, 100), (0, 50)]

TRIANGLE = [(0, 100), (50, 0), (100, 100)]

BUILTIN_TEMPLATES: Dict[str, List[Tuple[float, float]]] = {
    "square": SQUARE,
    "star": STAR,
    "circle": CIRCLE,
    "heart": HEART,
    "rhombus": RHOMBUS,
    "triangle": TRIANGLE,
}


def builtin_shapes() -> List[Shape]:
    return [Shape(name, pts) for name, pts in BUILTIN_TEMPLATES.items()]


def shape_to_dict(shape: Shape) -> dict:
    return {"name": shape.name, "points": [[p.x, p.y] for p in shape]}


def shape_from_dict(d: dict) -> Shape:
    if "name" not in d or "points" not in d:
        raise ValueError("template JSON requires 'name' and 'points'")
    return Shape(str(d["name"]), [(float(x), float(y)) for x, y in d["points"]])


def write_template(shape: Shape, path: Path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(shape_to_dict(shape), f, indent=2)


def read_template(path: Path) -> Shape:
    with open(path, "r", encoding="utf-8") as f:
        return shape_from_dict(json.load(f))


def ensure_templates(template_dir: Optional[str | Path] = None) -> Optional[Path]:
    """
    Guarantee the six built-in templates are available.
    Without a directory the in-module tables already satisfy that; with one,
    every built-in is (re)written as <name>.json so edited copies are restored.
    Extra files in the directory are left alone.
    """
    if template_dir is None:
        return None
    folder = Path(template_dir)
    folder.mkdir(parents=True, exist_ok=True)
    for shape in builtin_shapes():
        path = folder / f"{shape.name}{TEMPLATE_SUFFIX}"
        logger.debug("writing template %s -> %s", shape.name, path)
        write_template(shape, path)
    return folder


def load_template_dir(template_dir: str | Path) -> List[Shape]:
    """
    Built-ins first in their fixed order, then any extra templates by filename.
    """
    folder = Path(template_dir)
    builtin_paths = [folder / f"{name}{TEMPLATE_SUFFIX}" for name in BUILTIN_TEMPLATES]
    extra_paths = sorted(p for p in folder.glob(f"*{TEMPLATE_SUFFIX}") if p not in builtin_paths)
    shapes = [read_template(p) for p in builtin_paths if p.exists()]
    shapes += [read_template(p) for p in extra_paths]
    logger.debug("loaded %d templates from %s", len(shapes), folder)
    return shapes
