"""Chunk height data, its mesh and its RON file format."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Union

from overworld.chunk import CHUNK_RESOLUTION, CHUNK_WIDTH

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]


class ChunkDataLoaderError(Exception):
    """Raised when chunk data cannot be read or parsed."""


@dataclass
class Mesh:
    """A triangle-list mesh with positions, UVs, indices and vertex normals."""

    positions: list[Vec3]
    uvs: list[Vec2]
    indices: list[int]
    normals: list[Vec3]


def _smooth_normals(positions: list[Vec3], indices: list[int]) -> list[Vec3]:
    sums = [[0.0, 0.0, 0.0] for _ in positions]
    for a, b, c in zip(indices[0::3], indices[1::3], indices[2::3]):
        (ax, ay, az), (bx, by, bz), (cx, cy, cz) = positions[a], positions[b], positions[c]
        ux, uy, uz = bx - ax, by - ay, bz - az
        vx, vy, vz = cx - ax, cy - ay, cz - az
        face = (uy * vz - uz * vy, uz * vx - ux * vz, ux * vy - uy * vx)
        for vertex in (a, b, c):
            sums[vertex] = [s + f for s, f in zip(sums[vertex], face)]
    normals: list[Vec3] = []
    for sx, sy, sz in sums:
        length = math.sqrt(sx * sx + sy * sy + sz * sz)
        if length == 0.0 or not math.isfinite(length):
            normals.append((0.0, 0.0, 0.0))
        else:
            normals.append((sx / length, sy / length, sz / length))
    return normals


@dataclass
class ChunkData:
    """Heights of a chunk's vertex grid, stored row by row."""

    heights: list[float] = field(default_factory=list)

    def vec3_heights(self) -> list[Vec3]:
        """Vertex positions relative to the chunk origin."""
        spacing = CHUNK_WIDTH / (CHUNK_RESOLUTION - 1)
        return [
            ((i % CHUNK_RESOLUTION) * spacing, height, (i // CHUNK_RESOLUTION) * spacing)
            for i, height in enumerate(self.heights)
        ]

    def get_index(self, x: int, y: int) -> int:
        """Index of the grid vertex at column ``x`` and row ``y``."""
        return x + CHUNK_RESOLUTION * y

    def generate_mesh(self) -> Mesh:
        """Build a triangulated mesh of the chunk with smooth normals."""
        positions = self.vec3_heights()
        needed = CHUNK_RESOLUTION * CHUNK_RESOLUTION
        if len(positions) < needed:
            raise ValueError(
                f"chunk needs {needed} heights to build a mesh, got {len(positions)}"
            )

        indices: list[int] = []
        for x in range(CHUNK_RESOLUTION - 1):
            for y in range(CHUNK_RESOLUTION - 1):
                indices += [
                    self.get_index(x, y),
                    self.get_index(x, y + 1),
                    self.get_index(x + 1, y),
                    self.get_index(x, y + 1),
                    self.get_index(x + 1, y + 1),
                    self.get_index(x + 1, y),
                ]

        uvs = [(px / CHUNK_WIDTH, pz / CHUNK_WIDTH) for px, _, pz in positions]
        return Mesh(positions, uvs, indices, _smooth_normals(positions, indices))


_COMMENTS = re.compile(r"//[^\n]*|/\*.*?\*/", re.DOTALL)
_DOCUMENT = re.compile(
    r"\s*(?:ChunkData)?\s*\(\s*heights\s*:\s*\[(?P<items>[^\]]*)\]\s*,?\s*\)\s*",
    re.DOTALL,
)
_NUMBER = re.compile(
    r"[+-]?(?:inf|NaN|(?:\d[\d_]*(?:\.[\d_]*)?|\.\d[\d_]*)(?:[eE][+-]?\d+)?)"
)


def _error(message: str) -> ChunkDataLoaderError:
    return ChunkDataLoaderError(f"Could not parse RON: {message}")


def parse_chunk_data(text: Union[str, bytes]) -> ChunkData:
    """Parse chunk data from RON text such as ``(heights: [0.0, 1.0])``."""
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise _error(str(exc)) from exc
    document = _DOCUMENT.fullmatch(_COMMENTS.sub(" ", text))
    if document is None:
        raise _error("expected struct ChunkData with field `heights`")
    items = [item.strip() for item in document["items"].split(",")]
    if items and not items[-1]:
        items.pop()
    heights = []
    for item in items:
        if not _NUMBER.fullmatch(item):
            raise _error(f"expected a float in `heights`, found {item!r}")
        heights.append(float(item.replace("_", "")))
    return ChunkData(heights)


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return repr(float(value))


def dump_chunk_data(data: ChunkData) -> str:
    """Serialise chunk data to compact RON text."""
    return "(heights:[" + ",".join(_format_float(h) for h in data.heights) + "])"


def load_chunk_data(path: Union[str, PathLike[str]]) -> ChunkData:
    """Read and parse a chunk data file."""
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise ChunkDataLoaderError(f"Could not load asset: {exc}") from exc
    return parse_chunk_data(raw)