"""Chunked heightmap terrain that streams in and out around a player, run headlessly."""

__version__ = "0.1.0"

__all__ = ["__version__"]