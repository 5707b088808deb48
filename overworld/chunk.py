"""Chunk coordinates, loaders and the constants that size the world grid."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

DO_DEBUG_DRAW: bool = True
"""Enable or disable (most) debug drawing."""

CHUNK_WIDTH: float = 10.0
"""Chunk width in meters."""

CHUNK_RESOLUTION: int = 4
"""Vertices along one side of a chunk (squared for the full vertex count)."""


@dataclass(frozen=True, order=True)
class ChunkSpot:
    """Integer grid coordinate of a chunk on the x/z plane."""

    x: int
    y: int

    def path(self) -> str:
        """Asset path of the chunk data file for this spot."""
        return f"chunkdata/{self.x},{self.y}/data.ron"


@dataclass
class ChunkLoader:
    """Marks an entity that keeps chunks loaded within ``range`` spots of itself."""

    range: int = 1


def spot_for_position(x: float, z: float) -> ChunkSpot:
    """Return the chunk spot containing the world position (x, z)."""
    return ChunkSpot(math.floor(x / CHUNK_WIDTH), math.floor(z / CHUNK_WIDTH))


def spots_in_range(center: ChunkSpot, radius: int) -> Iterator[ChunkSpot]:
    """Yield every spot in the square of the given radius around ``center``.

    Spots are produced with x in the outer loop and y in the inner loop.
    """
    if radius < 0:
        raise ValueError(f"radius must not be negative, got {radius}")
    for x in range(center.x - radius, center.x + radius + 1):
        for y in range(center.y - radius, center.y + radius + 1):
            yield ChunkSpot(x, y)