import pytest

from escapetime import Colour, Complex, Vector3d


def test_complex_add_and_multiply():
    a = Complex(1.0, 2.0)
    b = Complex(3.0, -1.0)
    assert a.add(b) == Complex(4.0, 1.0)
    assert a + b == Complex(4.0, 1.0)
    assert a.multiply(b) == Complex(5.0, 5.0)
    assert a * b == a.multiply(b)


def test_vector_arithmetic():
    v1 = Vector3d(3.0, 6.0, 9.0)
    v2 = Vector3d(1.0, 2.0, 3.0)
    assert v1 + v2 == Vector3d(4.0, 8.0, 12.0)
    assert v1 - v2 == Vector3d(2.0, 4.0, 6.0)
    assert v1 * 3.0 == Vector3d(9.0, 18.0, 27.0)
    assert v1 / 3.0 == Vector3d(1.0, 2.0, 3.0)


def test_colour_from_24bit_int():
    assert Colour.from_24bit_int(0x63B8EC) == Colour(0x63, 0xB8, 0xEC)
    assert Colour.from_24bit_int(0) == Colour(0, 0, 0)
    with pytest.raises(ValueError):
        Colour.from_24bit_int(0x1000000)


def test_colour_from_vector_truncates():
    assert Colour.from_vector3d(Vector3d(10.9, 20.5, 254.999)) == Colour(10, 20, 254)


def test_colour_vector_conversion():
    colour = Colour(1, 13, 98)
    assert colour.to_vector3d() == Vector3d(1.0, 13.0, 98.0)
    assert Vector3d.from_colour(colour) == colour.to_vector3d()
    assert Colour.from_vector3d(colour.to_vector3d()) == colour


def test_colour_rejects_out_of_range_channels():
    with pytest.raises(ValueError):
        Colour(256, 0, 0)
    with pytest.raises(ValueError):
        Colour(0, -1, 0)
