from __future__ import annotations

from typing import Optional, Sequence
import os
import numpy as np
import matplotlib.pyplot as plt
from PIL import Image

from shapes import ShapeLibrary

from .engine import Drawing
from .surfaces import FigureSurface, RasterSurface


def _output_format(out_path: str, format: Optional[str]) -> str:
    if format is None:
        format = "svg" if out_path.lower().endswith(".svg") else "png"
    format = format.lower()
    if format not in ("png", "svg"):
        raise ValueError(f"unsupported output format: {format}")
    return format


def _ensure_parent(out_path: str) -> None:
    parent = os.path.dirname(out_path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def render_image(drawing: Drawing, rng: Optional[np.random.Generator] = None) -> Image.Image:
    surface = drawing.draw(RasterSurface, rng=rng)
    return surface.image


def render_to_file(
    drawing: Drawing,
    out_path: str,
    format: Optional[str] = None,
    rng: Optional[np.random.Generator] = None,
    dpi: int = 100,
) -> None:
    """
    Render one drawing to disk: PNG through the raster surface, SVG through
    the matplotlib figure surface.
    """
    fmt = _output_format(out_path, format)
    _ensure_parent(out_path)
    if fmt == "svg":
        surface = drawing.draw(lambda w, h: FigureSurface(w, h, dpi=dpi), rng=rng)
        try:
            surface.save(out_path, format="svg")
        finally:
            surface.close()
        return
    surface = drawing.draw(RasterSurface, rng=rng)
    surface.save(out_path, format="PNG")


def _grid_axes(n: int, cols: int, figsize_per_cell: tuple[float, float]):
    cols = max(1, min(cols, n))
    rows = (n + cols - 1) // cols
    fig, axes = plt.subplots(
        rows, cols,
        figsize=(figsize_per_cell[0] * cols, figsize_per_cell[1] * rows),
        constrained_layout=True,
        squeeze=False,
    )
    fig.patch.set_facecolor("white")
    for idx in range(n, rows * cols):
        axes[idx // cols, idx % cols].axis("off")
    return fig, axes, cols


def render_drawing_grid(
    drawings: Sequence[Drawing],
    out_path: str,
    cols: int = 4,
    titles: Optional[Sequence[str]] = None,
    rng: Optional[np.random.Generator] = None,
    figsize_per_cell: tuple[float, float] = (3.0, 3.0),
    images: Optional[Sequence[Image.Image]] = None,
) -> None:
    """
    Contact sheet of several rendered drawings, one cell each.
    Pass already rendered images to reuse them instead of drawing again.
    """
    if not drawings:
        raise ValueError("No drawings provided")
    if images is not None and len(images) != len(drawings):
        raise ValueError(f"{len(images)} images for {len(drawings)} drawings")
    fig, axes, cols = _grid_axes(len(drawings), cols, figsize_per_cell)
    for idx, drawing in enumerate(drawings):
        ax = axes[idx // cols, idx % cols]
        image = images[idx] if images is not None else render_image(drawing, rng=rng)
        ax.imshow(image, interpolation="none")
        ax.set_xticks([])
        ax.set_yticks([])
        title = titles[idx] if titles is not None else (drawing.name or f"{idx}")
        ax.set_title(title, fontsize=10, color="black")
    _ensure_parent(out_path)
    fig.savefig(out_path, dpi=150, format=_output_format(out_path, None), facecolor="white")
    plt.close(fig)


def render_library_sheet(
    library: ShapeLibrary,
    out_path: str,
    cols: int = 3,
    figsize_per_cell: tuple[float, float] = (2.5, 2.5),
) -> None:
    """
    Contact sheet of the library templates in their 100x100 frame.
    """
    if len(library) == 0:
        raise ValueError("library is empty")
    fig, axes, cols = _grid_axes(len(library), cols, figsize_per_cell)
    for idx, shape in enumerate(library):
        ax = axes[idx // cols, idx % cols]
        verts = shape.as_array()
        ax.fill(verts[:, 0], verts[:, 1], fc=(0.2, 0.45, 0.95), ec="black", linewidth=1.0)
        ax.set_xlim(-5, 105)
        ax.set_ylim(105, -5)
        ax.set_aspect("equal")
        ax.set_xticks([])
        ax.set_yticks([])
        ax.set_title(f"{shape.name} ({shape.point_count})", fontsize=10)
    _ensure_parent(out_path)
    fig.savefig(out_path, dpi=150, format=_output_format(out_path, None), facecolor="white")
    plt.close(fig)


def show_drawings(drawings: Sequence[Drawing],
                  rng: Optional[np.random.Generator] = None,
                  images: Optional[Sequence[Image.Image]] = None) -> None:
    """
    Open one preview window per drawing and block until they are closed.
    """
    for idx, drawing in enumerate(drawings):
        image = images[idx] if images is not None else render_image(drawing, rng=rng)
        fig = plt.figure(figsize=(image.width / 100, image.height / 100), dpi=100)
        if drawing.name and fig.canvas.manager is not None:
            fig.canvas.manager.set_window_title(drawing.name)
        ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
        ax.imshow(image, interpolation="none")
        ax.axis("off")
    plt.show()
