from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional, Sequence

import numpy as np
from PIL import Image

from instructions import ParseError
from plotting import (
    Drawing,
    RenderConfig,
    SurfaceError,
    render_drawing_grid,
    render_image,
    render_library_sheet,
    render_to_file,
    show_drawings,
)
from shapes import ShapeLibrary, ShapeNotFound


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Render polygon drawings from instruction files.")
    p.add_argument("files", nargs="+", help="instruction files to render")
    p.add_argument("--seed", type=int, default=None, help="seed for random placement (default: unseeded)")
    p.add_argument("--outdir", type=str, default=None, help="write one image per drawing into this directory")
    p.add_argument("--format", choices=("png", "svg"), default="png", help="image format for --outdir (default: png)")
    p.add_argument("--dpi", type=int, default=100, help="figure dpi for svg output (default: 100)")
    p.add_argument("--grid", type=str, default=None, help="write a contact sheet of all drawings to this path")
    p.add_argument("--cols", type=int, default=4, help="columns in the contact sheet")
    p.add_argument("--templates", type=str, default=None, help="template directory (built-ins are written there if missing)")
    p.add_argument("--library-sheet", type=str, default=None, help="write a contact sheet of the shape templates to this path")
    p.add_argument("--describe", action="store_true", help="print the shape library and the parsed instructions")
    p.add_argument("--show", action="store_true", help="open a preview window per drawing")
    p.add_argument("--lenient", action="store_true", help="skip malformed draw records instead of failing the file")
    p.add_argument("--verbose", action="store_true", help="debug logging")
    return p.parse_args(argv)


def load_drawings(library: ShapeLibrary, paths: Sequence[str], strict: bool) -> tuple[List[Drawing], int]:
    drawings: List[Drawing] = []
    failures = 0
    for path in paths:
        try:
            drawings.append(Drawing.from_file(library, path, strict=strict))
        except (OSError, ParseError) as e:
            print(f"[error] {path}: {e}", file=sys.stderr)
            failures += 1
    return drawings, failures


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    cfg = RenderConfig(random_seed=args.seed, format=args.format, dpi=args.dpi)
    rng = cfg.make_rng()

    library = ShapeLibrary(template_dir=args.templates)
    if args.library_sheet:
        print(f"Rendering shape library ({len(library)} templates) -> {args.library_sheet}")
        render_library_sheet(library, args.library_sheet)

    drawings, failures = load_drawings(library, args.files, strict=not args.lenient)

    if args.describe:
        print("*********Shape Library**************")
        print(library.describe())
        for drawing in drawings:
            print(f"*********{drawing.name}*********")
            print(drawing.describe())

    rendered: List[Drawing] = []
    images: List[Image.Image] = []
    for i, drawing in enumerate(drawings):
        # One seed per drawing so every output of it shows the same placement.
        seed = int(rng.integers(0, 2**32))
        try:
            image = render_image(drawing, rng=np.random.default_rng(seed))
            if args.outdir:
                os.makedirs(args.outdir, exist_ok=True)
                out_path = os.path.join(args.outdir, f"{drawing.name}.{cfg.format}")
                print(f"[{i + 1}/{len(drawings)}] Rendering {drawing.name} -> {out_path}")
                if cfg.format == "svg":
                    render_to_file(drawing, out_path, format="svg",
                                   rng=np.random.default_rng(seed), dpi=cfg.dpi)
                else:
                    image.save(out_path, format="PNG")
        except (ShapeNotFound, SurfaceError, OSError) as e:
            print(f"[error] {drawing.name}: {e}", file=sys.stderr)
            failures += 1
            continue
        rendered.append(drawing)
        images.append(image)

    if args.grid and rendered:
        print(f"Rendering contact sheet -> {args.grid}")
        try:
            render_drawing_grid(rendered, out_path=args.grid, cols=args.cols, images=images)
        except OSError as e:
            print(f"[error] contact sheet: {e}", file=sys.stderr)
            failures += 1

    if args.show and rendered:
        show_drawings(rendered, images=images)

    print("Done." if not failures else f"Done with {failures} failure(s).")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
