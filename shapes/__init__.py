# Re-export core geometry API for convenience
from .geometry import (
    Point,
    Shape,
    scale_points,
    translate,
    rotate_about,
    to_pixels,
)
from .templates import (
    BUILTIN_TEMPLATES,
    builtin_shapes,
    ensure_templates,
)
from .library import (
    ShapeLibrary,
    ShapeNotFound,
)
