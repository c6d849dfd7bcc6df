from .models import (
    RANDOM_SENTINEL,
    Color,
    Coordinate,
    CanvasInstruction,
    DrawInstruction,
    rgb_range_limit,
    WHITE,
    BLACK,
)
from .parser import (
    ParseError,
    parse_canvas_record,
    parse_draw_record,
    parse_instructions,
    parse_instruction_file,
)
from .writer import (
    format_canvas_record,
    format_draw_record,
    write_instruction_file,
)
