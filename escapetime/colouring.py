"""Turn escape iteration counts into an RGB pixel grid."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import PIL.Image

from .events import EventHandler, PaletteBuilt, emit
from .palette import DEFAULT_VERTICES, palette, palette_array
from .primitives import BLACK, Colour, Vector3d
from .renderer import SampleBuffer


def escape_iter_range(data: Sequence[int]) -> tuple[int, int]:
    """Smallest and largest iteration count in the whole buffer."""

    values = np.asarray(data)
    if values.size == 0:
        raise ValueError("cannot take the iteration range of an empty buffer")
    return int(values.min()), int(values.max())


def pixel_colour(
    data: Sequence[int],
    real_idx: int,
    imag_idx: int,
    width_px: int,
    oversampling: int,
    min_iter: int,
    colours: Sequence[Colour],
) -> Colour:
    """Average colour of the sub-samples of one pixel.

    ``imag_idx`` counts pixel rows from the bottom of the region, in the same
    order as the sample buffer.
    """

    # index of the bottom-left sub-sample of the pixel
    idx_base = width_px * imag_idx * oversampling * oversampling + real_idx * oversampling
    total = Vector3d(0.0, 0.0, 0.0)

    for i in range(oversampling):
        for r in range(oversampling):
            iters = int(data[idx_base + i * width_px * oversampling + r])
            colour = BLACK if iters == 0 else colours[iters - min_iter]
            total = total + colour.to_vector3d()
    return Colour.from_vector3d(total / (oversampling * oversampling))


def render_pixels(
    buffer: SampleBuffer,
    vertices: Sequence[Colour] = DEFAULT_VERTICES,
    *,
    on_event: EventHandler = None,
) -> np.ndarray:
    """Colour every pixel of ``buffer``.

    Returns a ``(height_px, width_px, 3)`` uint8 array whose first row is the
    top of the region. The palette spans the iteration range of the whole
    buffer, one colour per count.
    """

    region = buffer.region
    k = region.oversampling
    min_iter, max_iter = escape_iter_range(buffer.data)
    colours = palette(max_iter - min_iter + 1, vertices)
    emit(on_event, PaletteBuilt(len(colours), min_iter, max_iter))

    table = palette_array(colours)
    data = buffer.data.astype(np.int64)
    # a zero count implies min_iter == 0, so the lookup index is always valid
    samples = table[data - min_iter].astype(np.float64)
    samples[data == 0] = 0.0

    grid = samples.reshape(region.height_px, k, region.width_px, k, 3).sum(axis=(1, 3))
    grid /= k * k
    # buffer rows run bottom-up, image rows top-down
    return np.ascontiguousarray(grid.astype(np.uint8)[::-1])


def render_image(
    buffer: SampleBuffer,
    vertices: Sequence[Colour] = DEFAULT_VERTICES,
    *,
    on_event: EventHandler = None,
) -> PIL.Image.Image:
    return PIL.Image.fromarray(render_pixels(buffer, vertices, on_event=on_event))
