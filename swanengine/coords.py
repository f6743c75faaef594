"""Conversions between world tile positions and chunk coordinates."""

from __future__ import annotations

from .constants import CHUNK_HEIGHT, CHUNK_WIDTH
from .vector import Vector2


def tile_pos_to_chunk_pos(pos: Vector2) -> Vector2:
    """Return the position of the chunk containing a tile."""
    return Vector2(int(pos.x) // CHUNK_WIDTH, int(pos.y) // CHUNK_HEIGHT)


def tile_pos_to_chunk_rel_pos(pos: Vector2) -> Vector2:
    """Return a tile's position relative to the top-left of its chunk."""
    return Vector2(int(pos.x) % CHUNK_WIDTH, int(pos.y) % CHUNK_HEIGHT)