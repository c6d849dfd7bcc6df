from __future__ import annotations

import logging

import pytest

from instructions import (
    CanvasInstruction,
    Color,
    Coordinate,
    DrawInstruction,
    ParseError,
    parse_canvas_record,
    parse_draw_record,
    parse_instruction_file,
    parse_instructions,
)

GRADIENT_RECORD = (
    "width=100,height=100,"
    "gradStartRed=255,gradStartGreen=0,gradStartBlue=0,"
    "gradEndRed=0,gradEndGreen=0,gradEndBlue=255,gradDir=0"
)


def test_canvas_solid_white_default() -> None:
    c = parse_canvas_record("width=50,height=50")
    assert c == CanvasInstruction(width=50, height=50, solid=Color(255, 255, 255))
    assert not c.is_gradient


def test_canvas_defaults_when_empty_of_known_keys() -> None:
    c = parse_canvas_record("foo=bar")
    assert (c.width, c.height) == (100, 100)
    assert c.solid == Color(255, 255, 255)


def test_canvas_gradient_record() -> None:
    c = parse_canvas_record(GRADIENT_RECORD)
    assert c.is_gradient
    assert c.gradient_start == Color(255, 0, 0)
    assert c.gradient_end == Color(0, 0, 255)
    assert c.gradient_direction == 0


def test_canvas_missing_gradient_channels_default_to_255() -> None:
    c = parse_canvas_record("gradStartRed=0,gradEndBlue=0")
    assert c.gradient_start == Color(0, 255, 255)
    assert c.gradient_end == Color(255, 255, 0)


def test_canvas_lone_gradient_color_is_solid() -> None:
    c = parse_canvas_record("red=0,green=0,blue=0,gradStartRed=10,gradStartGreen=20,gradStartBlue=30")
    assert not c.is_gradient
    assert c.solid == Color(10, 20, 30)


def test_canvas_direction_alone_keeps_solid() -> None:
    c = parse_canvas_record("red=1,green=2,blue=3,graddir=9")
    assert not c.is_gradient
    assert c.solid == Color(1, 2, 3)
    assert c.gradient_direction == 0


def test_canvas_same_color_gradient_collapses() -> None:
    c = parse_canvas_record(
        "gradstartred=128,gradstartgreen=128,gradstartblue=128,"
        "gradendred=128,gradendgreen=128,gradendblue=128,graddir=2"
    )
    assert not c.is_gradient
    assert c.solid == Color(128, 128, 128)


def test_canvas_clamps_and_lifts() -> None:
    c = parse_canvas_record("width=0,height=-4,red=999,green=-1,blue=40")
    assert (c.width, c.height) == (1, 1)
    assert c.solid == Color(255, 0, 40)


def test_key_case_folding() -> None:
    assert parse_canvas_record("Width=50") == parse_canvas_record("width=50")
    assert parse_draw_record("SHAPE=star,Scale=20") == parse_draw_record("shape=star,scale=20")


def test_unknown_keys_are_ignored() -> None:
    record = "shape=square,x=10,y=10,scale=50,red=255,green=0,blue=0"
    assert parse_draw_record(record + ",foo=bar") == parse_draw_record(record)
    assert parse_canvas_record("width=20,foo=bar") == parse_canvas_record("width=20")


def test_draw_record_fields() -> None:
    d = parse_draw_record(
        " shape = Rhombus , scale=20, x=-3, y=4, rep=3, repoffx=25, repoffy=-1,"
        " filled=FALSE, rotate=45, reprot=10, red=0, green=0, blue=300 "
    )
    assert d == DrawInstruction(
        shape_name="rhombus",
        scale_percent=20,
        x=Coordinate.fixed(-3),
        y=Coordinate.fixed(4),
        repeats=3,
        repeat_offset_x=25,
        repeat_offset_y=-1,
        filled=False,
        color=Color(0, 0, 255),
        rotate=45,
        repeat_rotate=10,
    )


def test_draw_record_defaults() -> None:
    d = parse_draw_record("shape=circle")
    assert d.scale_percent == 100
    assert d.x == Coordinate.fixed(0) and d.y == Coordinate.fixed(0)
    assert d.repeats == 1
    assert d.filled
    assert d.color == Color(0, 0, 0)


def test_filled_any_value_but_false_is_filled() -> None:
    assert parse_draw_record("shape=star,filled=no").filled
    assert not parse_draw_record("shape=star,filled=false").filled


def test_random_sentinel_becomes_random_coordinate() -> None:
    d = parse_draw_record("shape=circle,x=-2147483648,y=5")
    assert d.x.is_random
    assert not d.y.is_random


def test_scale_and_repeats_lifted() -> None:
    d = parse_draw_record("shape=star,scale=-4,rep=0")
    assert d.scale_percent == 1
    assert d.repeats == 1


def test_repeated_key_last_wins_and_blank_fields_skipped() -> None:
    d = parse_draw_record("shape=star,scale=10,,scale=30,")
    assert d.scale_percent == 30


@pytest.mark.parametrize(
    "record",
    ["shape=star,scale", "shape=star,scale=", "shape=star,scale=abc", "shape=star,x=1.5", "shape=star,y=2147483648"],
)
def test_malformed_draw_fields_raise(record: str) -> None:
    with pytest.raises(ParseError):
        parse_draw_record(record)


def test_parse_error_is_value_error_with_line_number() -> None:
    with pytest.raises(ValueError) as info:
        parse_instructions(["width=10", "", "shape=star,rep=many"])
    assert isinstance(info.value, ParseError)
    assert info.value.line_number == 3
    assert "line 3" in str(info.value)


def test_parse_instructions_skips_blank_lines() -> None:
    canvas, draws = parse_instructions(["", "  width=20,height=30  ", "", "shape=square", "shape=star  ", ""])
    assert (canvas.width, canvas.height) == (20, 30)
    assert [d.shape_name for d in draws] == ["square", "star"]


def test_parse_instructions_requires_canvas() -> None:
    with pytest.raises(ParseError):
        parse_instructions(["", "   "])


def test_lenient_mode_skips_bad_draw_records(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="instructions.parser"):
        canvas, draws = parse_instructions(["width=10", "shape=star,x=oops", "shape=heart"], strict=False)
    assert [d.shape_name for d in draws] == ["heart"]
    assert "line 2" in caplog.text


def test_lenient_mode_still_fails_on_bad_canvas() -> None:
    with pytest.raises(ParseError):
        parse_instructions(["width=wide", "shape=heart"], strict=False)


def test_parse_instruction_file(tmp_path) -> None:
    path = tmp_path / "simple.txt"
    path.write_text(
        "width=200,height=200,red=255,green=255,blue=255\n"
        "shape=square,x=10,y=10,scale=50,red=255,green=0,blue=0\n\n",
        encoding="utf-8",
    )
    canvas, draws = parse_instruction_file(path)
    assert canvas.width == 200
    assert len(draws) == 1
    assert draws[0].color == Color(255, 0, 0)


def test_missing_file_raises_os_error(tmp_path) -> None:
    with pytest.raises(OSError):
        parse_instruction_file(tmp_path / "nope.txt")
