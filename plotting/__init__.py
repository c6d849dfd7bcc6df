from .surfaces import (
    SurfaceError,
    DrawingSurface,
    RasterSurface,
    FigureSurface,
    RecordingSurface,
    SurfaceOp,
)
from .gradient import (
    GRADIENT_STEPS,
    gradient_band,
    gradient_bands,
    paint_gradient,
    step_color,
)
from .engine import (
    Drawing,
    RenderConfig,
)
from .renderer import (
    render_image,
    render_to_file,
    render_drawing_grid,
    render_library_sheet,
    show_drawings,
)
