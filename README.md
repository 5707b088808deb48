# overworld

A small terrain overworld that runs without a window. The world is split
into square chunks, and each chunk is described by a grid of heights. Chunks
near a player are loaded and turned into triangle meshes. Chunks that fall out
of range are unloaded as the player moves.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The `overworld` command

```
overworld [--assets DIR] [--steps N] [--delta SECONDS] [--key {w,a,s,d}] ...
```

The command spawns a player in the middle of chunk `0,0` and runs the world
for `--steps` frames. The default is 1 frame of `--delta` seconds, and the
default delta is 1/60. Each `--key` holds that key down for every frame. The
option can be repeated. After each frame the command prints a line such as
`Player chunk: 0,0`. At the end it prints `Loaded chunks: 0,0 0,1`, which lists
every chunk entity that is present.

Only the spots `0,0`, `0,1` and `0,2` are treated as having data. Their files
are read from `<assets>/chunkdata/<x>,<y>/data.ron`, and `--assets` defaults to
`assets`. A file that cannot be read or parsed does not stop the run. Its error
is printed to standard error, and the chunk stays in the world without data.
A negative `--steps` makes the command exit with status 2.

Keys move the player at 10 metres per second:

| Key | Direction |
|-----|-----------|
| `d` | +x |
| `a` | −x |
| `w` | −z |
| `s` | +z |

## Chunks (`overworld.chunk`)

- `CHUNK_WIDTH` is 10.0 metres. `CHUNK_RESOLUTION` is 4 vertices per side, so a
  full chunk has 16 heights.
- `ChunkSpot(x, y)` is a frozen, ordered grid coordinate. `path()` returns the
  relative data path:

  ```python
  from overworld.chunk import ChunkSpot

  ChunkSpot(0, 2).path()   # "chunkdata/0,2/data.ron"
  ```

- `ChunkLoader(range=1)` marks an entity that keeps the chunks within `range`
  spots of itself loaded. The default gives a 3×3 block.
- `spot_for_position(x, z)` returns the spot that contains a world position. It
  uses floor division by `CHUNK_WIDTH`.
- `spots_in_range(center, radius)` yields every spot in the square around
  `center`. x varies in the outer loop and y in the inner loop. A negative
  radius raises `ValueError`.

## Chunk data (`overworld.chunkdata`)

A data file holds the heights row by row in RON:

```
(heights: [0.0, 0.5, 1.0, 0.5, 0.2, 0.8, 1.2, 0.6, 0.1, 0.4, 0.9, 0.3, 0.0, 0.2, 0.4, 0.1])
```

The parser accepts an optional `ChunkData` struct name, `//` and `/* */`
comments, a trailing comma, `_` digit separators, and `inf`, `-inf` and `NaN`.

```python
from overworld.chunkdata import load_chunk_data, parse_chunk_data, dump_chunk_data

data = load_chunk_data("assets/chunkdata/0,0/data.ron")
mesh = data.generate_mesh()
text = dump_chunk_data(data)        # compact: "(heights:[0.0,0.5,...])"
assert parse_chunk_data(text).heights == data.heights
```

- `ChunkData.vec3_heights()` gives vertex positions relative to the chunk
  origin, spaced `CHUNK_WIDTH / 3` apart.
- `ChunkData.get_index(x, y)` is `x + CHUNK_RESOLUTION * y`.
- `ChunkData.generate_mesh()` returns a `Mesh` with `positions`, `uvs` (position
  divided by the chunk width), triangle-list `indices` (two triangles per grid
  cell), and smooth vertex `normals`. It raises `ValueError` if the data has
  fewer than 16 heights.
- `parse_chunk_data` accepts `str` or UTF-8 `bytes`. `parse_chunk_data` and
  `load_chunk_data` raise `ChunkDataLoaderError` when a file cannot be read or
  parsed.

## The world (`overworld.world`)

`World(existing_chunks=(), loader=None, asset_root="assets")` holds `Entity`
objects and runs the per-frame systems. By default `loader` reads
`asset_root / path` with `load_chunk_data`. Any callable that takes a
relative path and returns `ChunkData` can be used in its place.

- `spawn_player(x=5.0, z=5.0)` spawns the player, which is also a chunk loader.
- `update_player_position(keys, delta)` moves players by the held keys. Keys
  can be given as `"w"` or as `"KeyW"`.
- `update_chunk_spots()` moves each entity's spot to match its position.
- `handle_loading_unloading()` runs for loaders that moved to a new spot or
  were just added. It spawns chunks (`load_chunk(spot)`) for spots in range that
  are listed in `existing_chunks` and not already present. It despawns chunks
  outside every such loader's range.
- `process_chunkdata()` loads the requested data and attaches it to the chunk
  entities. Failures are stored in `world.load_errors`, keyed by path.
- `on_chunk_loaded()` builds a mesh for newly loaded chunks and sets their
  `texture` to `CHUNK_TEXTURE` (`"textures/bluemud.png"`).
- `debug_text()` returns `"Player chunk: x,y"` when exactly one chunk loader
  exists.
- `loaded_spots()` returns the sorted spots of all chunk entities.
  `entities` lists all live entities, and `despawn(entity)` removes one.
- `step(keys, delta)` runs one whole frame of the systems above.

## What it does not do

The package does not open a window, render anything, or read the keyboard.
Meshes and texture names are plain data, and nothing draws them. There is no
camera, lighting or on-screen debug drawing. Movement comes only from the
keys passed to `step` or `--key`. The set of chunks with data is fixed by the
caller (or by the command's three spots). It is not discovered from the asset
directory.