"""A headless world of entities that streams terrain chunks around a player."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Union

from overworld.chunk import (
    CHUNK_WIDTH,
    ChunkLoader,
    ChunkSpot,
    spot_for_position,
    spots_in_range,
)
from overworld.chunkdata import (
    ChunkData,
    ChunkDataLoaderError,
    Mesh,
    load_chunk_data,
)

Vec3 = tuple[float, float, float]

PLAYER_SPEED: float = 10.0
"""Player movement speed in meters per second."""

CHUNK_TEXTURE: str = "textures/bluemud.png"
"""Texture applied to every chunk mesh."""

_KEY_DIRECTIONS: dict[str, tuple[float, float]] = {
    "KeyD": (1.0, 0.0),
    "KeyA": (-1.0, 0.0),
    "KeyW": (0.0, -1.0),
    "KeyS": (0.0, 1.0),
}


def _normalise_key(key: str) -> str:
    if len(key) == 1:
        return "Key" + key.upper()
    return key


@dataclass(eq=False)
class Entity:
    """A bag of optional components living in a :class:`World`."""

    id: int
    translation: Vec3 = (0.0, 0.0, 0.0)
    chunk_spot: ChunkSpot | None = None
    chunk_loader: ChunkLoader | None = None
    player: bool = False
    world_chunk: bool = False
    data_handle: str | None = None
    chunk_data: ChunkData | None = None
    mesh: Mesh | None = None
    texture: str | None = None
    _spot_changed: bool = field(default=False, repr=False)
    _loader_added: bool = field(default=False, repr=False)
    _data_added: bool = field(default=False, repr=False)


class World:
    """Entities plus the systems that move the player and stream chunks."""

    def __init__(
        self,
        existing_chunks: Iterable[ChunkSpot] = (),
        loader: Callable[[str], ChunkData] | None = None,
        asset_root: Union[str, PathLike[str]] = "assets",
    ) -> None:
        self.existing_chunks: set[ChunkSpot] = set(existing_chunks)
        root = Path(asset_root)
        self._loader = loader or (lambda path: load_chunk_data(root / path))
        self._entities: dict[int, Entity] = {}
        self._next_id = 0
        self._pending: list[str] = []
        self.load_errors: dict[str, ChunkDataLoaderError] = {}
        self._debug_span = ""

    @property
    def entities(self) -> list[Entity]:
        """All live entities in spawn order."""
        return list(self._entities.values())

    def _spawn(self, **components) -> Entity:
        entity = Entity(id=self._next_id, **components)
        self._next_id += 1
        self._entities[entity.id] = entity
        return entity

    def despawn(self, entity: Entity) -> None:
        """Remove an entity from the world."""
        self._entities.pop(entity.id, None)

    def spawn_player(self, x: float = CHUNK_WIDTH / 2, z: float = CHUNK_WIDTH / 2) -> Entity:
        """Spawn the player, a chunk loader with the default range."""
        return self._spawn(
            translation=(float(x), 0.0, float(z)),
            chunk_spot=spot_for_position(x, z),
            chunk_loader=ChunkLoader(),
            player=True,
            _spot_changed=True,
            _loader_added=True,
        )

    def load_chunk(self, spot: ChunkSpot) -> Entity:
        """Spawn a chunk entity at ``spot`` and request its data."""
        path = spot.path()
        if path not in self._pending:
            self._pending.append(path)
        return self._spawn(
            translation=(spot.x * CHUNK_WIDTH, 0.0, spot.y * CHUNK_WIDTH),
            chunk_spot=ChunkSpot(spot.x, spot.y),
            world_chunk=True,
            data_handle=path,
            _spot_changed=True,
        )

    def process_chunkdata(self) -> None:
        """Replace data handles with chunk data once it has been loaded."""
        pending, self._pending = self._pending, []
        for path in pending:
            try:
                data = self._loader(path)
            except ChunkDataLoaderError as exc:
                self.load_errors[path] = exc
                continue
            for entity in self.entities:
                if entity.data_handle == path:
                    entity.chunk_data = ChunkData(list(data.heights))
                    entity.data_handle = None
                    entity._data_added = True

    def update_chunk_spots(self) -> None:
        """Move every entity's chunk spot to the chunk its position lies in."""
        for entity in self.entities:
            if entity.chunk_spot is None:
                continue
            x, _, z = entity.translation
            new_spot = spot_for_position(x, z)
            if new_spot != entity.chunk_spot:
                entity.chunk_spot = new_spot
                entity._spot_changed = True

    def handle_loading_unloading(self) -> None:
        """Load chunks around loaders that moved or appeared; unload the rest."""
        loaders = [
            e
            for e in self.entities
            if e.chunk_spot is not None
            and e.chunk_loader is not None
            and (e._spot_changed or e._loader_added)
        ]
        for entity in loaders:
            entity._spot_changed = False
            entity._loader_added = False
        if not loaders:
            return

        chunks = [e for e in self.entities if e.world_chunk and e.chunk_spot is not None]
        to_load: set[ChunkSpot] = set()
        to_keep: set[ChunkSpot] = set()
        for loader in loaders:
            center = loader.chunk_spot
            radius = loader.chunk_loader.range
            for chunk in chunks:
                spot = chunk.chunk_spot
                if abs(spot.x - center.x) <= radius and abs(spot.y - center.y) <= radius:
                    to_keep.add(spot)
            for spot in spots_in_range(center, radius):
                if spot in to_keep or spot not in self.existing_chunks:
                    continue
                to_load.add(spot)

        for chunk in chunks:
            if chunk.chunk_spot not in to_keep:
                self.despawn(chunk)
        for spot in sorted(to_load):
            self.load_chunk(spot)

    def on_chunk_loaded(self) -> None:
        """Build a mesh and material for chunks whose data just arrived."""
        for entity in self.entities:
            if entity._data_added and entity.chunk_data is not None:
                entity.mesh = entity.chunk_data.generate_mesh()
                entity.texture = CHUNK_TEXTURE
                entity._data_added = False

    def update_player_position(self, keys: Iterable[str], delta: float) -> None:
        """Move players by the held WASD keys over ``delta`` seconds."""
        vx = vz = 0.0
        for key in {_normalise_key(k) for k in keys}:
            dx, dz = _KEY_DIRECTIONS.get(key, (0.0, 0.0))
            vx += dx
            vz += dz
        step = PLAYER_SPEED * delta
        for entity in self.entities:
            if entity.player:
                x, y, z = entity.translation
                entity.translation = (x + vx * step, y, z + vz * step)

    def debug_text(self) -> str:
        """Text showing the chunk of the single chunk loader, if there is one."""
        loaders = [
            e for e in self.entities if e.chunk_spot is not None and e.chunk_loader is not None
        ]
        if len(loaders) == 1:
            spot = loaders[0].chunk_spot
            self._debug_span = f"{spot.x},{spot.y}"
        return "Player chunk: " + self._debug_span

    def loaded_spots(self) -> list[ChunkSpot]:
        """Sorted spots of all chunk entities currently in the world."""
        return sorted(e.chunk_spot for e in self.entities if e.world_chunk and e.chunk_spot)

    def step(self, keys: Iterable[str], delta: float) -> None:
        """Run one frame of every update system."""
        self.update_player_position(keys, delta)
        self.update_chunk_spots()
        self.handle_loading_unloading()
        self.process_chunkdata()
        self.on_chunk_loaded()
        self.debug_text()