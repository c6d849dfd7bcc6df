from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Tuple
import logging
import re

from .models import CanvasInstruction, Color, Coordinate, DrawInstruction

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"^[+-]?[0-9]+$")
_INT32_MIN = -2**31
_INT32_MAX = 2**31 - 1


class ParseError(ValueError):
    def __init__(self, message: str, line_number: Optional[int] = None, record: Optional[str] = None):
        self.message = message
        self.line_number = line_number
        self.record = record
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


def split_fields(record: str) -> List[Tuple[str, str]]:
    """
    Split one record into (key, value) pairs, both trimmed and lower-cased.
    Blank fields are skipped; a field without a value is an error.
    """
    pairs: List[Tuple[str, str]] = []
    for raw in record.split(","):
        if not raw.strip():
            continue
        pieces = raw.split("=")
        key = pieces[0].strip().lower()
        if len(pieces) < 2 or not pieces[1].strip():
            raise ParseError(f"field {raw.strip()!r} has no value", record=record)
        pairs.append((key, pieces[1].strip().lower()))
    return pairs


def parse_int(key: str, value: str) -> int:
    if not _INT_RE.match(value):
        raise ParseError(f"{key}={value!r} is not an integer")
    n = int(value)
    if n < _INT32_MIN or n > _INT32_MAX:
        raise ParseError(f"{key}={value} is outside the 32-bit integer range")
    return n


_SOLID_KEYS = {"red": 0, "green": 1, "blue": 2}
_START_KEYS = {"gradstartred": 0, "gradstartgreen": 1, "gradstartblue": 2}
_END_KEYS = {"gradendred": 0, "gradendgreen": 1, "gradendblue": 2}


def parse_canvas_record(record: str) -> CanvasInstruction:
    width = 100
    height = 100
    direction = 0
    # A colour is supplied once any of its channels appears; the rest default to 255.
    solid: Optional[List[int]] = None
    start: Optional[List[int]] = None
    end: Optional[List[int]] = None
    for key, value in split_fields(record):
        if key == "width":
            width = parse_int(key, value)
        elif key == "height":
            height = parse_int(key, value)
        elif key == "graddir":
            direction = parse_int(key, value)
        elif key in _SOLID_KEYS:
            solid = solid or [255, 255, 255]
            solid[_SOLID_KEYS[key]] = parse_int(key, value)
        elif key in _START_KEYS:
            start = start or [255, 255, 255]
            start[_START_KEYS[key]] = parse_int(key, value)
        elif key in _END_KEYS:
            end = end or [255, 255, 255]
            end[_END_KEYS[key]] = parse_int(key, value)
    return CanvasInstruction(
        width=width,
        height=height,
        solid=None if solid is None else Color(*solid),
        gradient_start=None if start is None else Color(*start),
        gradient_end=None if end is None else Color(*end),
        gradient_direction=direction,
    )


_DRAW_INT_KEYS = {
    "scale": "scale_percent",
    "rep": "repeats",
    "repoffx": "repeat_offset_x",
    "repoffy": "repeat_offset_y",
    "rotate": "rotate",
    "reprot": "repeat_rotate",
}


def parse_draw_record(record: str) -> DrawInstruction:
    kwargs: dict = {}
    rgb = [0, 0, 0]
    for key, value in split_fields(record):
        if key == "shape":
            kwargs["shape_name"] = value
        elif key in _DRAW_INT_KEYS:
            kwargs[_DRAW_INT_KEYS[key]] = parse_int(key, value)
        elif key == "x":
            kwargs["x"] = Coordinate.from_raw(parse_int(key, value))
        elif key == "y":
            kwargs["y"] = Coordinate.from_raw(parse_int(key, value))
        elif key == "filled":
            kwargs["filled"] = value != "false"
        elif key in _SOLID_KEYS:
            rgb[_SOLID_KEYS[key]] = parse_int(key, value)
    return DrawInstruction(color=Color(*rgb), **kwargs)


def _with_location(exc: ParseError, line_number: int, record: str) -> ParseError:
    return ParseError(exc.message, line_number=line_number, record=record)


def parse_instructions(
    lines: Iterable[str],
    strict: bool = True,
) -> Tuple[CanvasInstruction, List[DrawInstruction]]:
    """
    Parse a canvas record (first non-blank line) followed by draw records.

    strict=True raises on the first malformed record. strict=False logs and
    skips malformed draw records; the canvas record must always parse.
    """
    canvas: Optional[CanvasInstruction] = None
    draws: List[DrawInstruction] = []
    for line_number, line in enumerate(lines, start=1):
        record = line.strip()
        if not record:
            continue
        if canvas is None:
            try:
                canvas = parse_canvas_record(record)
            except ParseError as e:
                raise _with_location(e, line_number, record) from None
            continue
        try:
            draws.append(parse_draw_record(record))
        except ParseError as e:
            err = _with_location(e, line_number, record)
            if strict:
                raise err from None
            logger.warning("skipping draw record: %s", err)
    if canvas is None:
        raise ParseError("instruction input has no canvas record")
    return canvas, draws


def parse_instruction_file(
    path: str | Path,
    strict: bool = True,
) -> Tuple[CanvasInstruction, List[DrawInstruction]]:
    with open(path, "r", encoding="utf-8") as f:
        lines = f.readlines()
    canvas, draws = parse_instructions(lines, strict=strict)
    logger.debug("parsed %s: canvas %dx%d, %d draw records", path, canvas.width, canvas.height, len(draws))
    return canvas, draws
