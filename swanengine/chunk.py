"""World chunks: a grid of tile IDs that can be compressed while idle."""

from __future__ import annotations

import logging
import sys
import zlib
from array import array
from collections.abc import Mapping, Sequence
from enum import Enum, auto
from typing import Any

from .constants import CHUNK_HEIGHT, CHUNK_WIDTH
from .vector import Vector2

log = logging.getLogger(__name__)

TILE_COUNT = CHUNK_WIDTH * CHUNK_HEIGHT
TILE_ID_SIZE = 2
TILE_DATA_SIZE = TILE_COUNT * TILE_ID_SIZE
DEACTIVATE_INTERVAL = 20.0

COMPRESSION_NONE = 0
COMPRESSION_ZLIB = 1


class ChunkError(Exception):
    """Raised when chunk data is malformed or cannot be decoded."""


class TickAction(Enum):
    NOTHING = auto()
    DEACTIVATE = auto()
    DELETE = auto()


def _tiles_from_bytes(raw: bytes) -> array:
    tiles = array("H")
    tiles.frombytes(raw)
    if sys.byteorder != "little":
        tiles.byteswap()
    return tiles


def _tiles_to_bytes(tiles: array) -> bytes:
    if sys.byteorder != "little":
        tiles = array("H", tiles)
        tiles.byteswap()
    return tiles.tobytes()


class Chunk:
    """A CHUNK_WIDTH x CHUNK_HEIGHT block of tile IDs at a chunk position."""

    def __init__(self, pos: Vector2 = Vector2(0, 0)) -> None:
        self.pos = pos
        self.is_modified = False
        self.deactivate_timer = DEACTIVATE_INTERVAL
        self._tiles: array | None = array("H", bytes(TILE_DATA_SIZE))
        self._compressed: bytes | None = None

    def _require_tiles(self) -> array:
        if self._tiles is None:
            raise RuntimeError(f"chunk {self.pos} is compressed")
        return self._tiles

    @staticmethod
    def _index(rpos: Vector2) -> int:
        x, y = int(rpos.x), int(rpos.y)
        if not (0 <= x < CHUNK_WIDTH and 0 <= y < CHUNK_HEIGHT):
            raise IndexError(f"relative position {rpos} outside chunk")
        return y * CHUNK_WIDTH + x

    def get_tile_id(self, rpos: Vector2) -> int:
        return self._require_tiles()[self._index(rpos)]

    def set_tile_id(self, rpos: Vector2, tile_id: int) -> None:
        self._require_tiles()[self._index(rpos)] = tile_id
        self.is_modified = True

    def is_compressed(self) -> bool:
        return self._compressed is not None

    def is_active(self) -> bool:
        return self.deactivate_timer > 0

    def compress(self) -> None:
        """Compress the tile data, unless that would make it bigger."""
        if self.is_compressed():
            return

        raw = _tiles_to_bytes(self._require_tiles())
        packed = zlib.compress(raw, 9)
        if len(packed) > TILE_DATA_SIZE:
            log.info(
                "Didn't compress chunk %s because compressing it would've made it bigger",
                self.pos,
            )
            return

        self._compressed = packed
        self._tiles = None
        log.info(
            "Compressed chunk %s from %d bytes to %d bytes",
            self.pos, TILE_DATA_SIZE, len(packed),
        )

    def decompress(self) -> None:
        if self._compressed is None:
            return

        try:
            raw = zlib.decompress(self._compressed)
        except zlib.error as exc:
            raise ChunkError(f"Decompressing chunk failed: {exc}") from exc
        if len(raw) != TILE_DATA_SIZE:
            raise ChunkError(
                f"Decompressing chunk failed: got {len(raw)} bytes, "
                f"expected {TILE_DATA_SIZE}"
            )

        log.info(
            "Decompressed chunk %s from %d bytes to %d bytes.",
            self.pos, len(self._compressed), TILE_DATA_SIZE,
        )
        self._tiles = _tiles_from_bytes(raw)
        self._compressed = None

    def tick(self, dt: float) -> TickAction:
        """Count down towards deactivation and say what should happen."""
        if not self.is_active():
            raise RuntimeError(f"ticking inactive chunk {self.pos}")

        self.deactivate_timer -= dt
        if self.deactivate_timer <= 0:
            return TickAction.DEACTIVATE if self.is_modified else TickAction.DELETE
        return TickAction.NOTHING

    def keep_active(self) -> None:
        self.deactivate_timer = DEACTIVATE_INTERVAL
        self.decompress()

    def to_dict(self) -> dict[str, Any]:
        """Serialize the chunk, compressing it first if that pays off."""
        self.compress()
        if self._compressed is not None:
            return {
                "x": self.pos.x,
                "y": self.pos.y,
                "compression": COMPRESSION_ZLIB,
                "tiles": self._compressed,
            }
        return {
            "x": self.pos.x,
            "y": self.pos.y,
            "compression": COMPRESSION_NONE,
            "tiles": _tiles_to_bytes(self._require_tiles()),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], tile_map: Sequence[int]) -> Chunk:
        """Build a chunk from serialized data, translating saved tile IDs.

        Saved IDs with no entry in `tile_map` become 0.
        """
        chunk = cls(Vector2(int(data.get("x", 0)), int(data.get("y", 0))))
        chunk.is_modified = True
        was_compressed = False

        if "tiles" in data:
            compression = int(data.get("compression", -1))
            tiles = bytes(data["tiles"])
            if compression == COMPRESSION_NONE:
                if len(tiles) != TILE_DATA_SIZE:
                    raise ValueError("Bad chunk size")
                chunk._tiles = _tiles_from_bytes(tiles)
                chunk._compressed = None
                chunk.deactivate_timer = DEACTIVATE_INTERVAL
            elif compression == COMPRESSION_ZLIB:
                chunk._tiles = None
                chunk._compressed = tiles
                chunk.deactivate_timer = DEACTIVATE_INTERVAL
                chunk.decompress()
                was_compressed = True
            else:
                raise ValueError("Invalid compression type")

        current = chunk._require_tiles()
        size = len(tile_map)
        chunk._tiles = array(
            "H", (tile_map[t] if t < size else 0 for t in current)
        )

        if was_compressed:
            chunk.compress()
            chunk.deactivate_timer = 0.0

        return chunk