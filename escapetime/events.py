"""Progress events emitted by the render pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Union


@dataclass(frozen=True)
class StripCompleted:
    """A strip finished evaluating. ``completed`` counts strips received so far."""

    index: int
    completed: int
    total: int
    height_px: int


@dataclass(frozen=True)
class PaletteBuilt:
    size: int
    min_iter: int
    max_iter: int


RenderEvent = Union[StripCompleted, PaletteBuilt]
EventHandler = Optional[Callable[[RenderEvent], None]]


def emit(handler: EventHandler, event: RenderEvent) -> None:
    if handler is not None:
        handler(event)
