"""Tile lighting: sunlight, point lights, bounced light and smoothing per chunk."""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum, auto

from .constants import CHUNK_HEIGHT, CHUNK_WIDTH
from .coords import tile_pos_to_chunk_pos, tile_pos_to_chunk_rel_pos
from .vector import Vector2

log = logging.getLogger(__name__)

LIGHT_CUTOFF = 0.001
LIGHT_CUTOFF_DIST = 64

_AREA = CHUNK_WIDTH * CHUNK_HEIGHT
_SUN_FULL_DEPTH = 20
_SMOOTHING_PASSES = 4
_BOUNCE_FACTOR = 0.1
_RAY_ACCURACY = 4


def _round_half_away(value: float) -> int:
    return int(math.floor(value + 0.5)) if value >= 0 else -int(math.floor(-value + 0.5))


def lin_to_srgb(lin: float) -> int:
    """Convert a linear light value to an 8-bit level, clamped to 0..255."""
    if lin <= 0.0031308:
        s = lin / 12.92
    else:
        s = 1.055 * math.pow(lin, 1 / 2.4) - 0.055
    return min(max(_round_half_away(s * 255), 0), 255)


def _attenuate(dist: float, square_dist: float) -> float:
    return 1 / (1 + 1 * dist + 0.02 * square_dist)


def attenuate(dist: float) -> float:
    """Light falloff factor at a distance from the source."""
    return _attenuate(dist, dist * dist)


def _attenuate_squared(square_dist: float) -> float:
    return _attenuate(math.sqrt(square_dist), square_dist)


@dataclass
class NewLightChunk:
    """Light-relevant data of a chunk handed to the light server."""

    blocks: list[bool] = field(default_factory=lambda: [False] * _AREA)
    light_sources: dict[Vector2, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if len(self.blocks) != _AREA:
            raise ValueError(f"blocks must hold {_AREA} entries, got {len(self.blocks)}")


class LightChunk:
    """Per-chunk lighting state kept by the light server."""

    def __init__(self, new: NewLightChunk | None = None) -> None:
        if new is None:
            new = NewLightChunk()
        self.blocks: list[bool] = list(new.blocks)
        self.light_sources: dict[Vector2, float] = dict(new.light_sources)
        self.blocks_line: list[int] = [0] * CHUNK_WIDTH
        for i, solid in enumerate(self.blocks):
            if solid:
                self.blocks_line[i % CHUNK_WIDTH] += 1
        self.light_levels = bytearray(_AREA)
        self.bounces: list[tuple[int, int, float]] = []
        self.buffer = 0
        self._buffers = ([0.0] * _AREA, [0.0] * _AREA)

    @property
    def light_buffer(self) -> list[float]:
        return self._buffers[self.buffer]

    @property
    def back_buffer(self) -> list[float]:
        return self._buffers[(self.buffer + 1) % 2]

    def flip(self) -> None:
        self.buffer = (self.buffer + 1) % 2

    def level_at(self, x: int, y: int) -> int:
        """Final 8-bit light level of a tile, in chunk-relative coordinates."""
        return self.light_levels[y * CHUNK_WIDTH + x]


class _Tag(Enum):
    BLOCK_ADDED = auto()
    BLOCK_REMOVED = auto()
    LIGHT_ADDED = auto()
    LIGHT_REMOVED = auto()
    CHUNK_ADDED = auto()
    CHUNK_REMOVED = auto()


@dataclass(slots=True)
class _Event:
    tag: _Tag
    pos: Vector2
    level: float = 0.0
    chunk: NewLightChunk | None = None


LightCallback = Callable[[LightChunk, Vector2], None]


class LightServer:
    """Queues lighting changes and recomputes the affected chunks on process()."""

    def __init__(self, callback: LightCallback | None = None) -> None:
        self._callback = callback
        self._chunks: dict[Vector2, LightChunk] = {}
        self._events: list[_Event] = []
        self._lock = threading.Lock()
        self._updated: dict[Vector2, None] = {}
        self._cache: tuple[int, int, LightChunk] | None = None

    @property
    def chunks(self) -> Mapping[Vector2, LightChunk]:
        return self._chunks

    def _push(self, event: _Event) -> None:
        with self._lock:
            self._events.append(event)

    def on_chunk_added(self, pos: Vector2, chunk: NewLightChunk) -> None:
        self._push(_Event(_Tag.CHUNK_ADDED, pos, chunk=chunk))

    def on_chunk_removed(self, pos: Vector2) -> None:
        self._push(_Event(_Tag.CHUNK_REMOVED, pos))

    def on_solid_block_added(self, pos: Vector2) -> None:
        self._push(_Event(_Tag.BLOCK_ADDED, pos))

    def on_solid_block_removed(self, pos: Vector2) -> None:
        self._push(_Event(_Tag.BLOCK_REMOVED, pos))

    def on_light_added(self, pos: Vector2, level: float) -> None:
        self._push(_Event(_Tag.LIGHT_ADDED, pos, level=level))

    def on_light_removed(self, pos: Vector2, level: float) -> None:
        self._push(_Event(_Tag.LIGHT_REMOVED, pos, level=level))

    def tile_is_solid(self, pos: Vector2) -> bool:
        """Whether a tile blocks light; tiles in unknown chunks count as solid."""
        return self._solid(int(pos.x), int(pos.y))

    def _chunk_at(self, cx: int, cy: int) -> LightChunk | None:
        cache = self._cache
        if cache is not None and cache[0] == cx and cache[1] == cy:
            return cache[2]
        chunk = self._chunks.get(Vector2(cx, cy))
        if chunk is not None:
            self._cache = (cx, cy, chunk)
        return chunk

    def _solid(self, x: int, y: int) -> bool:
        cx, rx = divmod(x, CHUNK_WIDTH)
        cy, ry = divmod(y, CHUNK_HEIGHT)
        chunk = self._chunk_at(cx, cy)
        if chunk is None:
            return True
        return chunk.blocks[ry * CHUNK_WIDTH + rx]

    def process(self) -> list[Vector2]:
        """Apply queued events and relight affected chunks; return their positions."""
        with self._lock:
            events, self._events = self._events, []
        if not events:
            return []

        self._updated = {}
        for evt in events:
            self._process_event(evt)

        todo = [(pos, self._chunks[pos]) for pos in self._updated if pos in self._chunks]

        for pos, chunk in todo:
            self._process_sun(chunk, pos)
        for pos, chunk in todo:
            self._process_lights(chunk, pos)
        for pos, chunk in todo:
            self._process_bounces(chunk, pos)
        for _ in range(_SMOOTHING_PASSES):
            for pos, chunk in todo:
                self._process_smoothing(chunk, pos)
                chunk.flip()
        for _, chunk in todo:
            chunk.light_levels = bytearray(lin_to_srgb(v) for v in chunk.light_buffer)
        if self._callback is not None:
            for pos, chunk in todo:
                self._callback(chunk, pos)

        return [pos for pos, _ in todo]

    def _mark(self, cpos: Vector2, left: bool, right: bool, top: bool, bottom: bool) -> None:
        mark = self._updated
        mark[cpos] = None
        for dx, dy, cond in (
            (-1, 0, left), (1, 0, right), (0, -1, top), (0, 1, bottom),
            (-1, -1, left and top), (1, -1, right and top),
            (-1, 1, left and bottom), (1, 1, right and bottom),
        ):
            if cond:
                mark[cpos.add(dx, dy)] = None

    def _mark_adjacent(self, cpos: Vector2) -> None:
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                self._updated[cpos.add(dx, dy)] = None

    def _mark_light(self, cpos: Vector2, rpos: Vector2, light: float) -> None:
        self._mark(
            cpos,
            light * attenuate(max(rpos.x - 5, 0)) >= LIGHT_CUTOFF,
            light * attenuate(max(CHUNK_WIDTH - rpos.x - 5, 0)) >= LIGHT_CUTOFF,
            light * attenuate(max(rpos.y - 5, 0)) >= LIGHT_CUTOFF,
            light * attenuate(max(CHUNK_HEIGHT - rpos.y - 5, 0)) >= LIGHT_CUTOFF,
        )

    def _mark_range(self, cpos: Vector2, rpos: Vector2, rng: int) -> None:
        self._mark(
            cpos,
            rpos.x <= rng,
            CHUNK_WIDTH - rpos.x <= rng,
            rpos.y <= rng,
            CHUNK_WIDTH - rpos.y <= rng,
        )

    def _process_event(self, evt: _Event) -> None:
        if evt.tag is _Tag.CHUNK_ADDED:
            if evt.pos in self._chunks:
                log.warning("LightServer: CHUNK_ADDED added an existing chunk %s", evt.pos)
            self._chunks[evt.pos] = LightChunk(evt.chunk)
            self._cache = None
            self._mark_adjacent(evt.pos)
            return
        if evt.tag is _Tag.CHUNK_REMOVED:
            if evt.pos not in self._chunks:
                log.warning("LightServer: CHUNK_REMOVED removed a non-existent chunk %s", evt.pos)
            self._chunks.pop(evt.pos, None)
            self._cache = None
            self._mark_adjacent(evt.pos)
            return

        cpos = tile_pos_to_chunk_pos(evt.pos)
        chunk = self._chunks.get(cpos)
        if chunk is None:
            return
        rpos = tile_pos_to_chunk_rel_pos(evt.pos)
        idx = rpos.y * CHUNK_WIDTH + rpos.x

        if evt.tag is _Tag.BLOCK_ADDED:
            chunk.blocks[idx] = True
            chunk.blocks_line[rpos.x] += 1
            self._mark_range(cpos, rpos, LIGHT_CUTOFF_DIST)
        elif evt.tag is _Tag.BLOCK_REMOVED:
            chunk.blocks[idx] = False
            chunk.blocks_line[rpos.x] -= 1
            self._mark_range(cpos, rpos, LIGHT_CUTOFF_DIST)
        elif evt.tag is _Tag.LIGHT_ADDED:
            level = chunk.light_sources.get(rpos, 0.0) + evt.level
            chunk.light_sources[rpos] = level
            self._mark_light(cpos, rpos, level)
        elif evt.tag is _Tag.LIGHT_REMOVED:
            level = chunk.light_sources.get(rpos, 0.0)
            self._mark_light(cpos, rpos, level)
            level -= evt.level
            if level < LIGHT_CUTOFF:
                chunk.light_sources.pop(rpos, None)
            else:
                chunk.light_sources[rpos] = level

    def _raycast(self, fx: float, fy: float, tx: float, ty: float) -> bool:
        """Whether a solid tile lies between two points."""
        dx, dy = tx - fx, ty - fy
        square = dx * dx + dy * dy
        dist = math.sqrt(square)
        sx = dx / (dist * _RAY_ACCURACY)
        sy = dy / (dist * _RAY_ACCURACY)
        cx, cy = fx, fy
        tile = (math.floor(cx), math.floor(cy))
        target = (math.floor(tx), math.floor(ty))
        while tile != target and (cx - fx) ** 2 + (cy - fy) ** 2 <= square:
            if self._solid(*tile):
                return True
            while True:
                cx += sx
                cy += sy
                nxt = (math.floor(cx), math.floor(cy))
                if nxt != tile:
                    break
            tile = nxt
        return False

    def _diffused_raycast(
        self, fx: float, fy: float, tx: float, ty: float, nx: float, ny: float
    ) -> float:
        if self._raycast(fx, fy, tx, ty):
            return 0.0
        dx, dy = tx - fx, ty - fy
        length = math.sqrt(dx * dx + dy * dy)
        dot = (dx * nx + dy * ny) / length
        return min(max(dot, 0.0), 1.0)

    def _recalc_tile(self, px: int, py: int, lights: list[tuple[int, int, float]]) -> float:
        solid = self._solid
        is_solid = solid(px, py)
        culled = (
            solid(px - 1, py) and solid(px + 1, py)
            and solid(px, py - 1) and solid(px, py + 1)
        )
        max_square = LIGHT_CUTOFF_DIST * LIGHT_CUTOFF_DIST
        acc = 0.0

        for lx, ly, level in lights:
            if lx == px and ly == py:
                acc += level
                continue
            if culled:
                continue
            square = (lx - px) ** 2 + (ly - py) ** 2
            if square > max_square:
                continue
            light = level * _attenuate_squared(square)
            if light < LIGHT_CUTOFF:
                continue

            tx, ty = lx + 0.5, ly + 0.5
            if not is_solid:
                if not self._raycast(px + 0.5, py + 0.5, tx, ty):
                    acc += light
                continue

            frac = max(
                0.0,
                self._diffused_raycast(px + 0.5, py - 0.1, tx, ty, 0, -1),
                self._diffused_raycast(px + 0.5, py + 1.1, tx, ty, 0, 1),
                self._diffused_raycast(px - 0.1, py + 0.5, tx, ty, -1, 0),
                self._diffused_raycast(px + 1.1, py + 0.5, tx, ty, 1, 0),
            )
            acc += light * frac

        return acc

    def _process_sun(self, chunk: LightChunk, cpos: Vector2) -> None:
        above = self._chunks.get(cpos.add(0, -1))
        buf = chunk.light_buffer
        shadowed = [False] * CHUNK_WIDTH
        base = cpos.y * CHUNK_HEIGHT

        for ry in range(CHUNK_HEIGHT):
            y = base + ry
            if y <= _SUN_FULL_DEPTH:
                light = 1.0
            else:
                light = attenuate(y - _SUN_FULL_DEPTH)
                if light < LIGHT_CUTOFF:
                    light = 0.0
            row = ry * CHUNK_WIDTH
            for rx in range(CHUNK_WIDTH):
                lit = (
                    light > 0 and above is not None
                    and above.blocks_line[rx] == 0 and not shadowed[rx]
                )
                if lit:
                    buf[row + rx] = light
                    if chunk.blocks[row + rx]:
                        shadowed[rx] = True
                else:
                    buf[row + rx] = 0.0

    def _neighbours(self, cpos: Vector2):
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                other = self._chunks.get(cpos.add(dx, dy))
                if other is not None:
                    yield dx, dy, other

    def _process_lights(self, chunk: LightChunk, cpos: Vector2) -> None:
        bx, by = cpos.x * CHUNK_WIDTH, cpos.y * CHUNK_HEIGHT
        lights = [(bx + p.x, by + p.y, lvl) for p, lvl in chunk.light_sources.items()]
        for dx, dy, other in self._neighbours(cpos):
            ox, oy = bx + dx * CHUNK_WIDTH, by + dy * CHUNK_HEIGHT
            lights.extend((ox + p.x, oy + p.y, lvl) for p, lvl in other.light_sources.items())

        chunk.bounces = []
        if not lights:
            return
        buf = chunk.light_buffer
        for y in range(CHUNK_HEIGHT):
            for x in range(CHUNK_WIDTH):
                idx = y * CHUNK_WIDTH + x
                light = self._recalc_tile(bx + x, by + y, lights)
                buf[idx] += light
                if light > 0 and chunk.blocks[idx]:
                    chunk.bounces.append((bx + x, by + y, light * _BOUNCE_FACTOR))

    def _process_bounces(self, chunk: LightChunk, cpos: Vector2) -> None:
        lights = list(chunk.bounces)
        for _, _, other in self._neighbours(cpos):
            lights.extend(other.bounces)
        if not lights:
            return
        bx, by = cpos.x * CHUNK_WIDTH, cpos.y * CHUNK_HEIGHT
        buf = chunk.light_buffer
        for y in range(CHUNK_HEIGHT):
            for x in range(CHUNK_WIDTH):
                buf[y * CHUNK_WIDTH + x] += self._recalc_tile(bx + x, by + y, lights)

    def _process_smoothing(self, chunk: LightChunk, cpos: Vector2) -> None:
        W, H = CHUNK_WIDTH, CHUNK_HEIGHT
        top = self._chunks.get(cpos.add(0, -1))
        bottom = self._chunks.get(cpos.add(0, 1))
        left = self._chunks.get(cpos.add(-1, 0))
        right = self._chunks.get(cpos.add(1, 0))
        tbuf = top.light_buffer if top else None
        bbuf = bottom.light_buffer if bottom else None
        lbuf = left.light_buffer if left else None
        rbuf = right.light_buffer if right else None
        src = chunk.light_buffer
        dest = chunk.back_buffer

        inner_x, inner_y = range(1, W - 1), range(1, H - 1)
        regions = [(inner_x, inner_y)]
        if top:
            regions.append((inner_x, range(0, 1)))
        if bottom:
            regions.append((inner_x, range(H - 1, H)))
        if left:
            regions.append((range(0, 1), inner_y))
        if right:
            regions.append((range(W - 1, W), inner_y))
        if top and left:
            regions.append((range(0, 1), range(0, 1)))
        if top and right:
            regions.append((range(W - 1, W), range(0, 1)))
        if bottom and left:
            regions.append((range(0, 1), range(H - 1, H)))
        if bottom and right:
            regions.append((range(W - 1, W), range(H - 1, H)))

        for xs, ys in regions:
            for y in ys:
                row = y * W
                for x in xs:
                    t = src[row - W + x] if y > 0 else tbuf[(H - 1) * W + x]
                    b = src[row + W + x] if y < H - 1 else bbuf[x]
                    l = src[row + x - 1] if x > 0 else lbuf[row + W - 1]
                    r = src[row + x + 1] if x < W - 1 else rbuf[row]
                    light = src[row + x]
                    count = 1
                    for val in (t, b, l, r):
                        if val > light:
                            light += val
                            count += 1
                    dest[row + x] = light / count