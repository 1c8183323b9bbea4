"""Description of the sampled rectangle and how it is divided into strips."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .primitives import Complex


@dataclass(frozen=True)
class RegionDefinition:
    """Parameters that describe how to sample an area of the complex plane.

    ``origin`` is the bottom-left corner. Pixels are square with side
    ``pixel_size`` and every pixel is sampled ``oversampling`` times along each
    axis.
    """

    origin: Complex
    pixel_size: float
    width_px: int
    height_px: int
    oversampling: int
    max_iterations: int
    escape_radius: float

    def __post_init__(self) -> None:
        if self.width_px <= 0:
            raise ValueError(f"width_px must be positive, got {self.width_px}")
        if self.height_px < 0:
            raise ValueError(f"height_px must not be negative, got {self.height_px}")
        if self.oversampling < 1:
            raise ValueError(f"oversampling must be at least 1, got {self.oversampling}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {self.max_iterations}")
        if not self.escape_radius > 0:
            raise ValueError(f"escape_radius must be positive, got {self.escape_radius}")
        if not self.pixel_size > 0:
            raise ValueError(f"pixel_size must be positive, got {self.pixel_size}")

    @classmethod
    def from_bounds(
        cls,
        min_real: float,
        max_real: float,
        min_imag: float,
        max_imag: float,
        width_px: int,
        oversampling: int,
        max_iterations: int,
        escape_radius: float,
    ) -> RegionDefinition:
        """Build a region from the rectangle bounds and the output width.

        The height is derived from the width so pixels stay square, which means
        the imaginary extent is only matched to the nearest whole pixel.
        """

        if not min_real < max_real:
            raise ValueError(f"min_real ({min_real}) must be less than max_real ({max_real})")
        if not min_imag < max_imag:
            raise ValueError(f"min_imag ({min_imag}) must be less than max_imag ({max_imag})")
        if width_px <= 0:
            raise ValueError(f"width_px must be positive, got {width_px}")

        pixel_size = (max_real - min_real) / width_px
        height_px = int(round((max_imag - min_imag) / pixel_size))
        if height_px <= 0:
            raise ValueError("the imaginary extent is smaller than half a pixel")

        return cls(
            origin=Complex(min_real, min_imag),
            pixel_size=pixel_size,
            width_px=width_px,
            height_px=height_px,
            oversampling=oversampling,
            max_iterations=max_iterations,
            escape_radius=escape_radius,
        )

    @property
    def samples_per_pixel(self) -> int:
        return self.oversampling * self.oversampling

    @property
    def sample_count(self) -> int:
        return self.width_px * self.height_px * self.samples_per_pixel

    def split(self, count: int) -> list[RegionDefinition]:
        """Split the area into ``count`` horizontal strips stacked bottom to top.

        Every strip has the same width and parameters as this region. Rows that
        do not divide evenly go to the lowest strips, one each.
        """

        if count < 1:
            raise ValueError(f"cannot split a region into {count} strips")

        base, remainder = divmod(self.height_px, count)
        heights = [base + 1 if i < remainder else base for i in range(count)]

        strips: list[RegionDefinition] = []
        imag = self.origin.imag
        for height in heights:
            origin = Complex(self.origin.real, imag)
            strips.append(replace(self, origin=origin, height_px=height))
            imag += height * self.pixel_size
        return strips
