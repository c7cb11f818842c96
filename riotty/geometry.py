"""Rectangle instances, uniforms, projection and texture row padding."""

from __future__ import annotations

import struct
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

MAX_INSTANCES = 10_000
QUAD_INDICES: tuple[int, ...] = (0, 1, 2, 0, 2, 3)
COPY_BYTES_PER_ROW_ALIGNMENT = 256
INITIAL_UPLOAD_BUFFER_SIZE = COPY_BYTES_PER_ROW_ALIGNMENT * 100

IDENTITY_MATRIX: tuple[float, ...] = (
    1.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 1.0,
)

_RECT = struct.Struct("=8f")
_UNIFORMS = struct.Struct("=20f")


@dataclass(frozen=True)
class Rect:
    """A coloured rectangle instance."""

    position: tuple[float, float] = (0.0, 0.0)
    color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    size: tuple[float, float] = (0.0, 0.0)

    def __post_init__(self) -> None:
        if len(self.position) != 2 or len(self.size) != 2 or len(self.color) != 4:
            raise ValueError("position and size take two values, color takes four")

    def to_bytes(self) -> bytes:
        """Pack as the GPU instance layout: position, color, size as float32."""
        return _RECT.pack(*self.position, *self.color, *self.size)


@dataclass(frozen=True)
class Uniforms:
    """Transform matrix and scale, padded to a 16-byte boundary."""

    transform: tuple[float, ...] = field(default=IDENTITY_MATRIX)
    scale: float = 1.0

    def __post_init__(self) -> None:
        if len(self.transform) != 16:
            raise ValueError(f"transform must have 16 values, got {len(self.transform)}")

    def to_bytes(self) -> bytes:
        """Pack the matrix, the scale and three padding floats."""
        return _UNIFORMS.pack(*self.transform, self.scale, 0.0, 0.0, 0.0)


def orthographic_projection(width: int, height: int) -> tuple[float, ...]:
    """Column-major matrix mapping pixel coordinates to clip space."""
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive")
    return (
        2.0 / width, 0.0, 0.0, 0.0,
        0.0, -2.0 / height, 0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
        -1.0, 1.0, 0.0, 1.0,
    )


def create_vertices_rect() -> list[tuple[float, float]]:
    """Return the four corner vertices of the instanced quad."""
    return [(0.0, 0.0), (0.5, 0.0), (0.5, 1.0), (0.0, 1.0)]


def batch_instances(
    instances: Sequence[Rect], limit: int = MAX_INSTANCES
) -> Iterator[Sequence[Rect]]:
    """Yield consecutive slices of at most ``limit`` instances."""
    if limit <= 0:
        raise ValueError("limit must be positive")
    for start in range(0, len(instances), limit):
        yield instances[start:start + limit]


def padded_width(width: int, align: int = COPY_BYTES_PER_ROW_ALIGNMENT) -> int:
    """Round ``width`` up to the next multiple of ``align``."""
    if align <= 0:
        raise ValueError("align must be positive")
    if width < 0:
        raise ValueError("width must not be negative")
    return width + (align - width % align) % align


def pad_rows(
    data: bytes, width: int, height: int, align: int = COPY_BYTES_PER_ROW_ALIGNMENT
) -> bytes:
    """Copy ``height`` rows of ``width`` bytes into rows padded to ``align``."""
    if height < 0:
        raise ValueError("height must not be negative")
    if len(data) < width * height:
        raise ValueError("data is shorter than width * height")
    stride = padded_width(width, align)
    padding = bytes(stride - width)
    return b"".join(
        data[row * width:(row + 1) * width] + padding for row in range(height)
    )