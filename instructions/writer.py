from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from .models import CanvasInstruction, Color, DrawInstruction


def _color_fields(color: Optional[Color], prefix: str = "") -> List[str]:
    if color is None:
        return []
    if not prefix:
        return [f"red={color.red}", f"green={color.green}", f"blue={color.blue}"]
    return [f"{prefix}Red={color.red}", f"{prefix}Green={color.green}", f"{prefix}Blue={color.blue}"]


def format_canvas_record(canvas: CanvasInstruction) -> str:
    fields = [f"width={canvas.width}", f"height={canvas.height}"]
    fields += _color_fields(canvas.solid)
    if canvas.is_gradient:
        fields += _color_fields(canvas.gradient_start, "gradStart")
        fields += _color_fields(canvas.gradient_end, "gradEnd")
    fields.append(f"gradDir={canvas.gradient_direction}")
    return ", ".join(fields)


def format_draw_record(draw: DrawInstruction) -> str:
    fields = [
        f"shape={draw.shape_name}",
        f"scale={draw.scale_percent}",
        f"x={draw.x.raw}",
        f"y={draw.y.raw}",
        f"rep={draw.repeats}",
        f"repOffX={draw.repeat_offset_x}",
        f"repOffY={draw.repeat_offset_y}",
        f"filled={'true' if draw.filled else 'false'}",
        f"rotate={draw.rotate}",
        f"repRot={draw.repeat_rotate}",
    ]
    fields += _color_fields(draw.color)
    return ", ".join(fields)


def write_instruction_file(
    path: str | Path,
    canvas: CanvasInstruction,
    draws: Sequence[DrawInstruction],
) -> None:
    lines = [format_canvas_record(canvas)] + [format_draw_record(d) for d in draws]
    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
