from __future__ import annotations

import numpy as np
import pytest

from instructions import Color
from plotting import FigureSurface, RasterSurface, RecordingSurface, SurfaceError

RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)


@pytest.mark.parametrize("surface_cls", [RasterSurface, RecordingSurface])
def test_bad_vertex_arrays_raise(surface_cls) -> None:
    surface = surface_cls(10, 10)
    with pytest.raises(SurfaceError):
        surface.fill_polygon([0, 1, 2], [0, 1], 2)
    with pytest.raises(SurfaceError):
        surface.draw_polygon([0, 1, 2], [0, 1, 2], 4)
    with pytest.raises(SurfaceError):
        surface.fill_polygon([0, 1, 2], [0, 1, 2], 0)


def test_surface_size_must_be_positive() -> None:
    with pytest.raises(SurfaceError):
        RasterSurface(0, 10)


def test_raster_background_and_fill() -> None:
    surface = RasterSurface(20, 10)
    surface.set_background(GREEN)
    assert surface.pixel(19, 9) == GREEN
    surface.set_color(RED)
    surface.fill_polygon(np.array([2, 8, 8, 2]), np.array([2, 2, 8, 8]), 4)
    assert surface.pixel(5, 5) == RED
    assert surface.pixel(15, 5) == GREEN
    assert surface.to_array().shape == (10, 20, 3)


def test_raster_outline_leaves_interior() -> None:
    surface = RasterSurface(20, 20)
    surface.set_background(Color(255, 255, 255))
    surface.set_color(RED)
    surface.draw_polygon([2, 17, 17, 2], [2, 2, 17, 17], 4)
    assert surface.pixel(2, 10) == RED
    assert surface.pixel(10, 10) == Color(255, 255, 255)


def test_raster_uses_only_first_count_vertices() -> None:
    surface = RasterSurface(20, 20)
    surface.set_color(RED)
    surface.fill_polygon([0, 10, 10, 19], [0, 0, 10, 19], 3)
    assert surface.pixel(19, 19) == Color(255, 255, 255)


def test_raster_save(tmp_path) -> None:
    surface = RasterSurface(12, 7)
    path = tmp_path / "out.png"
    surface.save(str(path))
    assert path.exists()


def test_figure_surface_collects_patches(tmp_path) -> None:
    surface = FigureSurface(50, 40)
    try:
        surface.set_background(GREEN)
        surface.set_color(RED)
        surface.fill_polygon([0, 10, 10], [0, 0, 10], 3)
        surface.draw_polygon([0, 10, 10], [0, 0, 10], 3)
        assert len(surface.ax.patches) == 2
        assert surface.ax.get_ylim() == (40.0, 0.0)
        path = tmp_path / "out.svg"
        surface.save(str(path), format="svg")
        assert "<svg" in path.read_text(encoding="utf-8")
    finally:
        surface.close()


def test_recording_surface_keeps_call_order() -> None:
    surface = RecordingSurface(30, 30)
    surface.set_background(GREEN)
    surface.set_color(RED)
    surface.fill_polygon([0, 10, 10, 0], [0, 0, 10, 10], 4)
    surface.draw_polygon([5, 6, 7], [5, 9, 5], 3)
    assert [op.kind for op in surface.ops] == ["background", "fill", "draw"]
    assert surface.ops[1].color == RED
    assert surface.ops[1].polygon().bounds == (0.0, 0.0, 10.0, 10.0)
    assert surface.ops[2].xs == [5, 6, 7]
    assert len(surface.polygons()) == 2
