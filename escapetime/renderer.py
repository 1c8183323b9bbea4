"""Escape-time evaluation of a region, serially or across a worker pool."""

from __future__ import annotations

from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass

import numpy as np

from .events import EventHandler, StripCompleted, emit
from .primitives import Complex
from .region import RegionDefinition

DEFAULT_STRIPS_PER_WORKER = 10

_EXECUTORS = {
    "process": ProcessPoolExecutor,
    "thread": ThreadPoolExecutor,
}


class RenderError(RuntimeError):
    """Raised when a unit of work fails and the render has to be abandoned."""


@dataclass(frozen=True)
class SampleBuffer:
    """Escape iteration counts for every sub-sample of a region.

    ``data`` is flat and row-major, bottom row first, with
    ``width_px * oversampling`` samples per row. ``0`` means the sample did not
    escape.
    """

    region: RegionDefinition
    data: np.ndarray

    def __post_init__(self) -> None:
        if self.data.shape != (self.region.sample_count,):
            raise ValueError(
                f"expected {self.region.sample_count} samples, got array of shape {self.data.shape}"
            )


def escape_iterations(point: Complex, max_iterations: int, escape_radius: float) -> int:
    """Return the iteration at which ``point`` escapes, or 0 if it never does.

    A point that escapes on iteration 0 also reports 0, so callers cannot tell
    it apart from a point in the set.
    """

    escape_value = escape_radius * escape_radius
    real = point.real
    imag = point.imag

    for i in range(max_iterations):
        # squares are reused for the next z, no square root needed
        zr2 = real * real
        zi2 = imag * imag
        zri = real * imag
        if zr2 + zi2 > escape_value:
            return i
        real = zr2 - zi2 + point.real
        imag = zri + zri + point.imag
    return 0


def calc_region(region: RegionDefinition) -> SampleBuffer:
    """Evaluate every sub-sample of ``region``."""

    step = region.pixel_size / region.oversampling
    rows = region.height_px * region.oversampling
    cols = region.width_px * region.oversampling
    data = np.empty(region.sample_count, dtype=np.uint32)

    idx = 0
    for i in range(rows):
        for r in range(cols):
            point = region.origin + Complex(r * step, i * step)
            data[idx] = escape_iterations(point, region.max_iterations, region.escape_radius)
            idx += 1
    return SampleBuffer(region=region, data=data)


def _make_executor(kind: str, workers: int) -> Executor:
    try:
        factory = _EXECUTORS[kind]
    except KeyError:
        raise ValueError(f"unknown executor '{kind}', choose from {', '.join(sorted(_EXECUTORS))}") from None
    return factory(max_workers=workers)


def calc_region_parallel(
    region: RegionDefinition,
    workers: int,
    *,
    strips_per_worker: int = DEFAULT_STRIPS_PER_WORKER,
    executor: str = "process",
    on_event: EventHandler = None,
) -> SampleBuffer:
    """Evaluate ``region`` on a pool of ``workers`` and reassemble the strips.

    The region is cut into ``workers * strips_per_worker`` strips so a slow
    strip does not leave the rest of the pool idle. Results arrive in
    completion order and are put back in strip order before concatenation, so
    the buffer is the same whatever the worker count.
    """

    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")
    if strips_per_worker < 1:
        raise ValueError(f"strips_per_worker must be at least 1, got {strips_per_worker}")

    strips = region.split(workers * strips_per_worker)
    total = len(strips)
    results: list[tuple[int, SampleBuffer]] = []

    pool = _make_executor(executor, workers)
    try:
        futures = {pool.submit(calc_region, strip): idx for idx, strip in enumerate(strips)}
        for future in as_completed(futures):
            idx = futures[future]
            try:
                strip_data = future.result()
            except Exception as exc:
                raise RenderError(f"strip {idx} of {total} failed: {exc}") from exc
            results.append((idx, strip_data))
            emit(on_event, StripCompleted(idx, len(results), total, strips[idx].height_px))
    except BaseException:
        pool.shutdown(wait=True, cancel_futures=True)
        raise
    pool.shutdown(wait=True)

    results.sort(key=lambda item: item[0])
    data = np.concatenate([strip_data.data for _, strip_data in results])
    return SampleBuffer(region=region, data=data)
