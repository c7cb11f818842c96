"""Glyph section queueing, scissor regions and glyph cache sizing."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

F = TypeVar("F")
S = TypeVar("S")

_U32_MAX = 0xFFFFFFFF
DEFAULT_MAX_CACHE_DIMENSION = 64


@dataclass(frozen=True)
class Region:
    """A rectangular region of the screen, in pixels."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        for name in ("x", "y", "width", "height"):
            value = getattr(self, name)
            if not 0 <= value <= _U32_MAX:
                raise ValueError(f"{name} must fit in an unsigned 32-bit int, got {value}")

    def contains(self, x: int, y: int) -> bool:
        """Return whether the pixel at ``(x, y)`` lies inside the region."""
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


class GlyphQueue(Generic[F, S]):
    """Fonts available for drawing and the sections queued for the next draw.

    A font is referenced by its index in :meth:`fonts`.
    """

    def __init__(self, fonts: Iterable[F] = ()) -> None:
        self._fonts: list[F] = list(fonts)
        self._queued: list[S] = []

    def __len__(self) -> int:
        return len(self._queued)

    def queue(self, section: S) -> None:
        """Queue a section to be drawn; may be called many times per frame."""
        self._queued.append(section)

    def drain(self) -> list[S]:
        """Return the queued sections in queueing order and empty the queue."""
        sections, self._queued = self._queued, []
        return sections

    def add_font(self, font: F) -> int:
        """Add a font and return the id that references it."""
        self._fonts.append(font)
        return len(self._fonts) - 1

    def fonts(self) -> tuple[F, ...]:
        """Return the available fonts, indexed by font id."""
        return tuple(self._fonts)


def next_cache_dimensions(
    suggested: tuple[int, int],
    current: tuple[int, int],
    max_dimension: int = DEFAULT_MAX_CACHE_DIMENSION,
) -> tuple[int, int]:
    """Choose the new glyph cache texture size after it turned out too small.

    When the suggested size exceeds ``max_dimension`` on either side while the
    current texture is still below it on either side, the cache grows to
    ``max_dimension`` square first; otherwise the suggestion is taken.
    """
    if max_dimension <= 0:
        raise ValueError("max_dimension must be positive")
    exceeds = suggested[0] > max_dimension or suggested[1] > max_dimension
    below = current[0] < max_dimension or current[1] < max_dimension
    if exceeds and below:
        return (max_dimension, max_dimension)
    return (suggested[0], suggested[1])