"""Cellular automaton that simulates flowing water on a sub-tile grid."""

from __future__ import annotations

import random
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from typing import NamedTuple

from .constants import CHUNK_HEIGHT, CHUNK_WIDTH
from .coords import tile_pos_to_chunk_pos, tile_pos_to_chunk_rel_pos
from .vector import Vector2

RESOLUTION = 2


class Cell(IntEnum):
    AIR = 0
    SOLID = 1
    WATER = 2
    WATER_L = 3
    WATER_R = 4


_WATER = frozenset({Cell.WATER, Cell.WATER_L, Cell.WATER_R})

# Neighbour offsets in window order: left, right, above, below.
_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class _Loc(NamedTuple):
    chunk: Vector2
    x: int
    y: int


class _Window(NamedTuple):
    self: _Loc
    left: _Loc
    right: _Loc
    above: _Loc
    below: _Loc


@dataclass(slots=True)
class _MoveEvent:
    src: _Loc
    dest: _Loc
    src_cell: Cell
    dest_cell: Cell
    after: Cell


@dataclass
class AutomataChunk:
    """A grid of cells covering one world chunk."""

    width: int
    height: int
    modified: bool = False
    next_modified: bool = False
    cells: list[list[Cell]] = field(init=False)

    def __post_init__(self) -> None:
        self.cells = [[Cell.AIR] * self.width for _ in range(self.height)]


class Automata:
    """Water simulation; each tile is split into resolution x resolution cells."""

    def __init__(
        self, resolution: int = RESOLUTION, rng: random.Random | None = None
    ) -> None:
        if resolution <= 0:
            raise ValueError("resolution must be positive")
        self.resolution = resolution
        self.width = CHUNK_WIDTH * resolution
        self.height = CHUNK_HEIGHT * resolution
        self._chunks: dict[Vector2, AutomataChunk] = {}
        self._events: list[_MoveEvent] = []
        self._rng = rng if rng is not None else random.Random()

    @property
    def chunks(self) -> Mapping[Vector2, AutomataChunk]:
        return self._chunks

    def get_chunk(self, cpos: Vector2) -> AutomataChunk:
        """Return the chunk at `cpos`, creating an all-air one if needed."""
        chunk = self._chunks.get(cpos)
        if chunk is None:
            chunk = AutomataChunk(self.width, self.height)
            self._chunks[cpos] = chunk
        return chunk

    def cell_at(self, cpos: Vector2, x: int, y: int) -> Cell:
        """Return a cell by chunk and cell coordinates; missing chunks are air."""
        chunk = self._chunks.get(cpos)
        if chunk is None:
            return Cell.AIR
        return chunk.cells[y][x]

    def set_tile(self, pos: Vector2, value: Cell) -> None:
        """Set every cell covered by the tile at `pos`."""
        cpos = tile_pos_to_chunk_pos(pos)
        rel = tile_pos_to_chunk_rel_pos(pos)
        res = self.resolution
        chunk = self.get_chunk(cpos)
        chunk.modified = True
        x0 = rel.x * res
        for y in range(rel.y * res, rel.y * res + res):
            chunk.cells[y][x0:x0 + res] = [value] * res

    def fill(self, pos: Vector2) -> None:
        self.set_tile(pos, Cell.SOLID)

    def clear(self, pos: Vector2) -> None:
        self.set_tile(pos, Cell.AIR)

    def tick(self) -> None:
        """Advance the simulation by one step."""
        for cpos, chunk in list(self._chunks.items()):
            self._tick_chunk(cpos, chunk)

        for chunk in self._chunks.values():
            chunk.modified = chunk.next_modified
            chunk.next_modified = False

        self._resolve_events()

    def _get(self, loc: _Loc) -> Cell:
        return self._chunks[loc.chunk].cells[loc.y][loc.x]

    def _put(self, loc: _Loc, value: Cell) -> None:
        self._chunks[loc.chunk].cells[loc.y][loc.x] = value

    def _neighbour(self, cpos: Vector2, x: int, y: int, dx: int, dy: int) -> _Loc | None:
        nx, ny = x + dx, y + dy
        ox = -1 if nx < 0 else 1 if nx >= self.width else 0
        oy = -1 if ny < 0 else 1 if ny >= self.height else 0
        if ox or oy:
            cpos = cpos.add(ox, oy)
            if cpos not in self._chunks:
                return None
            nx -= ox * self.width
            ny -= oy * self.height
        return _Loc(cpos, nx, ny)

    def _tick_chunk(self, cpos: Vector2, chunk: AutomataChunk) -> None:
        for y, row in enumerate(chunk.cells):
            for x, cell in enumerate(row):
                # Only water cells ever trigger a rule.
                if cell not in _WATER:
                    continue

                neighbours = [self._neighbour(cpos, x, y, dx, dy) for dx, dy in _OFFSETS]
                if any(loc is None for loc in neighbours):
                    continue

                involved = {cpos, *(loc.chunk for loc in neighbours)}
                if not any(self._chunks[c].modified for c in involved):
                    continue

                if self._rule(_Window(_Loc(cpos, x, y), *neighbours)):
                    for c in involved:
                        self._chunks[c].next_modified = True

    def _push(self, src: _Loc, dest: _Loc, after: Cell | None = None) -> None:
        src_cell = self._get(src)
        self._events.append(_MoveEvent(
            src=src,
            dest=dest,
            src_cell=src_cell,
            dest_cell=self._get(dest),
            after=src_cell if after is None else after,
        ))

    def _chance(self, n: int) -> int:
        return self._rng.randrange(n)

    def _rule(self, win: _Window) -> bool:
        me = self._get(win.self)
        left = self._get(win.left)
        right = self._get(win.right)
        below = self._get(win.below)

        if me == Cell.WATER:
            if below == Cell.AIR:
                self._push(win.self, win.below)
            elif below == Cell.WATER_L and self._chance(4) == 0:
                self._push(win.self, win.self, Cell.WATER_L)
            elif below == Cell.WATER_R and self._chance(4) == 0:
                self._push(win.self, win.self, Cell.WATER_R)
            elif left == Cell.AIR and right == Cell.AIR:
                after = Cell.WATER_L if self._chance(2) else Cell.WATER_R
                self._push(win.self, win.self, after)
            elif left == Cell.AIR:
                self._push(win.self, win.left, Cell.WATER_L)
            elif right == Cell.AIR:
                self._push(win.self, win.right, Cell.WATER_R)
            else:
                return False
        elif me in (Cell.WATER_L, Cell.WATER_R) and below == Cell.AIR:
            self._push(win.self, win.below)
        elif me == Cell.WATER_L:
            self._flow(win, left, right, below, toward=win.left,
                       ahead=left, same=Cell.WATER_L, opposite=Cell.WATER_R)
        elif me == Cell.WATER_R:
            self._flow(win, left, right, below, toward=win.right,
                       ahead=right, same=Cell.WATER_R, opposite=Cell.WATER_L)
        else:
            return False

        return True

    def _flow(
        self, win: _Window, left: Cell, right: Cell, below: Cell, *,
        toward: _Loc, ahead: Cell, same: Cell, opposite: Cell,
    ) -> None:
        """Rules for water that is moving sideways in one direction."""
        if left == Cell.AIR and right == Cell.AIR and self._chance(128) == 0:
            self._push(win.self, win.self, Cell.AIR)
        elif ahead == Cell.SOLID:
            self._push(win.self, win.self, opposite)
        elif ahead in _WATER and self._chance(4) == 0:
            self._push(win.self, win.self, opposite)
        elif ahead == Cell.AIR and (below != same or self._chance(8) > 0):
            self._push(win.self, toward)
        elif self._chance(16) == 0:
            self._push(win.self, win.self, Cell.WATER)

    def _resolve_events(self) -> None:
        events = self._events
        progress = True
        while events and progress:
            progress = False
            for i, evt in enumerate(events):
                if self._get(evt.src) != evt.src_cell or self._get(evt.dest) != evt.dest_cell:
                    continue
                self._put(evt.dest, evt.after)
                if evt.dest != evt.src:
                    self._put(evt.src, evt.dest_cell)
                events[i] = events[-1]
                events.pop()
                progress = True
                break
        events.clear()