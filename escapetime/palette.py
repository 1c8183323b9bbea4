"""Piecewise-linear colour palettes.

A palette is a path through the RGB cube that visits an ordered list of
vertex colours. The vertices come back verbatim at the leg boundaries and
the colours in between are linear interpolations, truncated to integers.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from matplotlib import colormaps

from .primitives import Colour, Vector3d

DEFAULT_VERTICES: tuple[Colour, ...] = (
    Colour.from_24bit_int(0x010D62),
    Colour.from_24bit_int(0x63B8EC),
    Colour.from_24bit_int(0xFFFFFF),
    Colour.from_24bit_int(0xFFB700),
    Colour.from_24bit_int(0x611012),
)


def relative_vectors(vertices: Sequence[Vector3d]) -> list[Vector3d]:
    """Vectors from each vertex to the next; one fewer than ``vertices``."""

    return [end - start for start, end in zip(vertices, vertices[1:])]


def leg_gaps(size: int, legs: int) -> list[int]:
    """Number of gaps between consecutive palette colours on each leg.

    ``size - 1`` gaps are shared out evenly; the first legs take one extra
    each when they do not divide.
    """

    base, remainder = divmod(size - 1, legs)
    return [base + 1 if i < remainder else base for i in range(legs)]


def palette(size: int, vertices: Sequence[Colour]) -> list[Colour]:
    """Create ``size`` colours forming a path through ``vertices`` in order."""

    if len(vertices) < 2:
        raise ValueError(f"a palette is defined by two or more colours, got {len(vertices)}")
    if size < len(vertices):
        raise ValueError(
            f"palette size ({size}) must not be less than the number of vertices ({len(vertices)})"
        )

    points = [colour.to_vector3d() for colour in vertices]
    legs = relative_vectors(points)
    gaps = leg_gaps(size, len(legs))

    colours = [vertices[0]]
    for i, leg in enumerate(legs):
        start = points[i]
        step_vec = leg / gaps[i]
        for step in range(1, gaps[i]):
            colours.append(Colour.from_vector3d(start + step_vec * step))
        colours.append(vertices[i + 1])
    return colours


def palette_array(colours: Sequence[Colour]) -> np.ndarray:
    """Pack colours into an ``(n, 3)`` uint8 array for table lookups."""

    return np.array([colour.as_tuple() for colour in colours], dtype=np.uint8).reshape(-1, 3)


def parse_vertices(text: str) -> list[Colour]:
    """Parse a comma separated list of ``RRGGBB`` hex colours (``#`` optional)."""

    vertices = []
    for item in text.split(","):
        hex_color = item.strip().lstrip("#")
        if len(hex_color) != 6:
            raise ValueError(f"palette colour '{item.strip()}' must be in the form RRGGBB")
        try:
            vertices.append(Colour.from_24bit_int(int(hex_color, 16)))
        except ValueError as exc:
            raise ValueError(f"palette colour '{item.strip()}' must contain only hexadecimal digits") from exc
    if len(vertices) < 2:
        raise ValueError("a palette needs at least two colours")
    return vertices


def vertices_from_colormap(name: str, stops: int) -> list[Colour]:
    """Sample a matplotlib colormap at ``stops`` evenly spaced points."""

    if stops < 2:
        raise ValueError(f"a palette needs at least two stops, got {stops}")
    try:
        cmap = colormaps[name]
    except KeyError:
        raise ValueError(f"unknown matplotlib colormap '{name}'") from None

    rgba = np.asarray(cmap(np.linspace(0.0, 1.0, stops)), dtype=np.float64)
    rgb = np.uint8(np.clip(np.round(rgba[:, :3] * 255), 0, 255))
    return [Colour(int(r), int(g), int(b)) for r, g, b in rgb]
