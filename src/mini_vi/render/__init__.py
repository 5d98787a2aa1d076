"""Frame computation and the painter boundary."""

from .plan import DIRTY_MARKER, DrawPlan, RenderError, build_plan
from .painter import GridPainter, Painter, paint

__all__ = [
    "DIRTY_MARKER",
    "DrawPlan",
    "GridPainter",
    "Painter",
    "RenderError",
    "build_plan",
    "paint",
]
