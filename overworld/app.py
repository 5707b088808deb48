"""Command-line entry point running the overworld simulation headlessly."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from overworld.chunk import ChunkSpot
from overworld.world import World

EXISTING_CHUNKS: tuple[ChunkSpot, ...] = (ChunkSpot(0, 0), ChunkSpot(0, 1), ChunkSpot(0, 2))
"""Chunk spots that have data on disk."""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="overworld", description="Terrain/Overworld test: stream chunks around a player."
    )
    parser.add_argument("--assets", default="assets", help="asset directory")
    parser.add_argument("--steps", type=int, default=1, help="number of frames to run")
    parser.add_argument("--delta", type=float, default=1 / 60, help="seconds per frame")
    parser.add_argument(
        "--key",
        action="append",
        default=[],
        choices=["w", "a", "s", "d"],
        help="key held down during every frame (repeatable)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the simulation and print the player's chunk after every frame."""
    args = _build_parser().parse_args(argv)
    if args.steps < 0:
        print("overworld: --steps must not be negative", file=sys.stderr)
        return 2

    world = World(existing_chunks=EXISTING_CHUNKS, asset_root=args.assets)
    world.spawn_player()
    keys = set(args.key)
    for _ in range(args.steps):
        world.step(keys, args.delta)
        print(world.debug_text())

    for path, error in world.load_errors.items():
        print(f"{path}: {error}", file=sys.stderr)
    spots = " ".join(f"{s.x},{s.y}" for s in world.loaded_spots())
    print(f"Loaded chunks: {spots}")
    return 0


if __name__ == "__main__":
    sys.exit(main())