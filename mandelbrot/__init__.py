"""Public API for Mandelbrot rendering utilities."""

from .complex_number import ComplexNumber, add, times
from .viewport import Viewport
from .renderer import (
    ESCAPE_THRESHOLD,
    INSIDE,
    MAX_ITERATIONS,
    IterationGrid,
    evaluate,
    render,
    render_tensor,
)
from .coloring import PixelBuffer, colorize
from .output import display, encode_png, to_image, write_gif
from .generator import compute_zoom_factors, zoom_frames

__all__ = [
    "ComplexNumber",
    "ESCAPE_THRESHOLD",
    "INSIDE",
    "IterationGrid",
    "MAX_ITERATIONS",
    "PixelBuffer",
    "Viewport",
    "add",
    "colorize",
    "compute_zoom_factors",
    "display",
    "encode_png",
    "evaluate",
    "render",
    "render_tensor",
    "times",
    "to_image",
    "write_gif",
    "zoom_frames",
]
