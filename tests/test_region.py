from dataclasses import replace

import pytest

from escapetime import Complex, RegionDefinition


def _region(height_px=100):
    return RegionDefinition(
        origin=Complex(1.0, 2.0),
        pixel_size=0.01,
        width_px=200,
        height_px=height_px,
        oversampling=2,
        max_iterations=100,
        escape_radius=2.0,
    )


def test_split_simple():
    region = _region()
    expected = [
        replace(region, origin=Complex(1.0, 2.0), height_px=25),
        replace(region, origin=Complex(1.0, 2.25), height_px=25),
        replace(region, origin=Complex(1.0, 2.5), height_px=25),
        replace(region, origin=Complex(1.0, 2.75), height_px=25),
    ]
    strips = region.split(4)
    assert [s.height_px for s in strips] == [25, 25, 25, 25]
    for strip, exp in zip(strips, expected):
        assert strip.origin.real == exp.origin.real
        assert strip.origin.imag == pytest.approx(exp.origin.imag)
        assert replace(strip, origin=exp.origin) == exp


def test_split_with_remainder():
    strips = _region().split(3)
    assert [s.height_px for s in strips] == [34, 33, 33]
    assert [s.origin.imag for s in strips] == pytest.approx([2.0, 2.34, 2.67])


@pytest.mark.parametrize("height_px", [0, 1, 7, 50, 101])
@pytest.mark.parametrize("count", [1, 2, 3, 10, 80])
def test_split_heights_sum_and_remainder_go_first(height_px, count):
    region = _region(height_px)
    heights = [s.height_px for s in region.split(count)]
    assert len(heights) == count
    assert sum(heights) == height_px
    base = height_px // count
    extra = height_px % count
    assert heights == [base + 1] * extra + [base] * (count - extra)


def test_split_strips_are_contiguous():
    region = _region(37)
    strips = region.split(5)
    for lower, upper in zip(strips, strips[1:]):
        assert upper.origin.imag == pytest.approx(lower.origin.imag + lower.height_px * region.pixel_size)
    for strip in strips:
        assert strip.width_px == region.width_px
        assert strip.oversampling == region.oversampling
        assert strip.max_iterations == region.max_iterations
        assert strip.escape_radius == region.escape_radius
        assert strip.pixel_size == region.pixel_size


@pytest.mark.parametrize("count", [0, -1])
def test_split_rejects_non_positive_count(count):
    with pytest.raises(ValueError):
        _region().split(count)


def test_from_bounds_derives_square_pixels():
    region = RegionDefinition.from_bounds(-2.0, 1.0, -1.0, 1.0, 300, 2, 100, 10.0)
    assert region.origin == Complex(-2.0, -1.0)
    assert region.pixel_size == pytest.approx(0.01)
    assert region.height_px == 200
    assert region.sample_count == 300 * 200 * 4


def test_from_bounds_rounds_height():
    # 0.04 / (0.03 / 1200) is 1600 up to floating point error
    region = RegionDefinition.from_bounds(-0.77, -0.74, 0.07, 0.11, 1200, 2, 400, 10.0)
    assert region.height_px == 1600


@pytest.mark.parametrize(
    "args",
    [
        (1.0, -2.0, -1.0, 1.0, 100, 1, 10, 2.0),
        (-2.0, 1.0, 1.0, -1.0, 100, 1, 10, 2.0),
        (-2.0, 1.0, -1.0, 1.0, 0, 1, 10, 2.0),
        (-2.0, 1.0, -1.0, 1.0, 100, 0, 10, 2.0),
        (-2.0, 1.0, -1.0, 1.0, 100, 1, 0, 2.0),
        (-2.0, 1.0, -1.0, 1.0, 100, 1, 10, 0.0),
        (-2.0, 1.0, -1.0, 1.0, 100, 1, 10, -2.0),
        (-2.0, 1.0, 0.0, 0.001, 100, 1, 10, 2.0),
    ],
)
def test_from_bounds_rejects_invalid_configuration(args):
    with pytest.raises(ValueError):
        RegionDefinition.from_bounds(*args)
