"""Small value types used by the evaluator and the colour pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Complex:
    """A point in the complex plane."""

    real: float
    imag: float

    def add(self, other: Complex) -> Complex:
        return Complex(self.real + other.real, self.imag + other.imag)

    def multiply(self, other: Complex) -> Complex:
        return Complex(
            self.real * other.real - self.imag * other.imag,
            self.real * other.imag + self.imag * other.real,
        )

    __add__ = add
    __mul__ = multiply


@dataclass(frozen=True)
class Vector3d:
    """Real 3-vector used to interpolate and average colours."""

    x: float
    y: float
    z: float

    @classmethod
    def from_colour(cls, colour: Colour) -> Vector3d:
        return cls(float(colour.r), float(colour.g), float(colour.b))

    def add(self, other: Vector3d) -> Vector3d:
        return Vector3d(self.x + other.x, self.y + other.y, self.z + other.z)

    def sub(self, other: Vector3d) -> Vector3d:
        return Vector3d(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, multiplier: float) -> Vector3d:
        return Vector3d(self.x * multiplier, self.y * multiplier, self.z * multiplier)

    def divide(self, divisor: float) -> Vector3d:
        return Vector3d(self.x / divisor, self.y / divisor, self.z / divisor)

    __add__ = add
    __sub__ = sub
    __mul__ = scale
    __truediv__ = divide


def _channel(value: float) -> int:
    # int() truncates toward zero; out-of-range values saturate
    return min(max(int(value), 0), 255)


@dataclass(frozen=True)
class Colour:
    """A 24-bit RGB colour."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"colour channel {name}={value} is outside 0..255")

    @classmethod
    def from_vector3d(cls, vec: Vector3d) -> Colour:
        """Convert a colour-space vector back to a colour, truncating each channel."""

        return cls(_channel(vec.x), _channel(vec.y), _channel(vec.z))

    @classmethod
    def from_24bit_int(cls, colour: int) -> Colour:
        """Build a colour from a packed ``0xRRGGBB`` literal."""

        if not 0 <= colour <= 0xFFFFFF:
            raise ValueError(f"0x{colour:x} is not a 24-bit colour")
        return cls((colour >> 16) & 0xFF, (colour >> 8) & 0xFF, colour & 0xFF)

    def to_vector3d(self) -> Vector3d:
        return Vector3d.from_colour(self)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


BLACK = Colour(0, 0, 0)
