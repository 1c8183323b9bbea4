"""Public API for escape-time fractal rendering."""

from .colouring import escape_iter_range, pixel_colour, render_image, render_pixels
from .events import PaletteBuilt, RenderEvent, StripCompleted
from .palette import DEFAULT_VERTICES, palette, parse_vertices, relative_vectors, vertices_from_colormap
from .primitives import BLACK, Colour, Complex, Vector3d
from .region import RegionDefinition
from .renderer import (
    DEFAULT_STRIPS_PER_WORKER,
    RenderError,
    SampleBuffer,
    calc_region,
    calc_region_parallel,
    escape_iterations,
)

__all__ = [
    "BLACK",
    "Colour",
    "Complex",
    "DEFAULT_STRIPS_PER_WORKER",
    "DEFAULT_VERTICES",
    "PaletteBuilt",
    "RegionDefinition",
    "RenderError",
    "RenderEvent",
    "SampleBuffer",
    "StripCompleted",
    "Vector3d",
    "calc_region",
    "calc_region_parallel",
    "escape_iter_range",
    "escape_iterations",
    "palette",
    "parse_vertices",
    "pixel_colour",
    "relative_vectors",
    "render_image",
    "render_pixels",
    "vertices_from_colormap",
]
