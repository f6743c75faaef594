import pytest

from swanengine.constants import CHUNK_HEIGHT, CHUNK_WIDTH
from swanengine.lighting import (
    LightChunk,
    LightServer,
    NewLightChunk,
    attenuate,
    lin_to_srgb,
)
from swanengine.vector import Vector2


def _blocks(*positions):
    blocks = [False] * (CHUNK_WIDTH * CHUNK_HEIGHT)
    for x, y in positions:
        blocks[y * CHUNK_WIDTH + x] = True
    return blocks


def test_lin_to_srgb_endpoints_and_clamp():
    assert lin_to_srgb(0.0) == 0
    assert lin_to_srgb(1.0) == 255
    assert lin_to_srgb(5.0) == 255


def test_lin_to_srgb_is_monotonic():
    values = [lin_to_srgb(v / 20) for v in range(21)]
    assert values == sorted(values)


def test_attenuate_is_one_at_source_and_decreasing():
    assert attenuate(0) == 1.0
    samples = [attenuate(d) for d in range(10)]
    assert all(a > b for a, b in zip(samples, samples[1:]))


def test_new_light_chunk_rejects_wrong_size():
    with pytest.raises(ValueError):
        NewLightChunk(blocks=[False] * 3)


def test_light_chunk_counts_blocks_per_column():
    chunk = LightChunk(NewLightChunk(blocks=_blocks((3, 0), (3, 10), (7, 5))))
    assert chunk.blocks_line[3] == 2
    assert chunk.blocks_line[7] == 1
    assert sum(chunk.blocks_line) == 3


def test_tile_in_unknown_chunk_is_solid():
    server = LightServer()
    assert server.tile_is_solid(Vector2(5, 5)) is True


def test_chunk_becomes_known_after_process():
    server = LightServer()
    server.on_chunk_added(Vector2(0, 0), NewLightChunk(blocks=_blocks((2, 2))))
    assert server.tile_is_solid(Vector2(1, 1)) is True
    server.process()
    assert server.tile_is_solid(Vector2(1, 1)) is False
    assert server.tile_is_solid(Vector2(2, 2)) is True


def test_negative_coordinates_map_to_correct_chunk():
    server = LightServer()
    server.on_chunk_added(
        Vector2(-1, -1), NewLightChunk(blocks=_blocks((CHUNK_WIDTH - 1, CHUNK_HEIGHT - 1)))
    )
    server.process()
    assert server.tile_is_solid(Vector2(-1, -1)) is True
    assert server.tile_is_solid(Vector2(-2, -1)) is False


def test_block_events_toggle_solidity():
    server = LightServer()
    server.on_chunk_added(Vector2(0, 0), NewLightChunk())
    server.process()
    server.on_solid_block_added(Vector2(4, 6))
    server.process()
    assert server.tile_is_solid(Vector2(4, 6)) is True
    assert server.chunks[Vector2(0, 0)].blocks_line[4] == 1
    server.on_solid_block_removed(Vector2(4, 6))
    server.process()
    assert server.tile_is_solid(Vector2(4, 6)) is False
    assert server.chunks[Vector2(0, 0)].blocks_line[4] == 0


def test_chunk_removed_is_forgotten():
    server = LightServer()
    server.on_chunk_added(Vector2(0, 0), NewLightChunk())
    server.process()
    server.on_chunk_removed(Vector2(0, 0))
    server.process()
    assert Vector2(0, 0) not in server.chunks
    assert server.tile_is_solid(Vector2(3, 3)) is True


def test_re_adding_chunk_replaces_it():
    server = LightServer()
    server.on_chunk_added(Vector2(0, 0), NewLightChunk(blocks=_blocks((1, 1))))
    server.on_chunk_added(Vector2(0, 0), NewLightChunk())
    server.process()
    assert server.tile_is_solid(Vector2(1, 1)) is False


def test_events_for_unknown_chunk_are_ignored():
    server = LightServer()
    server.on_solid_block_added(Vector2(1, 1))
    server.on_light_added(Vector2(1, 1), 1.0)
    assert server.process() == []
    assert dict(server.chunks) == {}


def test_process_without_events_does_nothing():
    calls = []
    server = LightServer(lambda chunk, pos: calls.append(pos))
    assert server.process() == []
    assert calls == []


@pytest.fixture(scope="module")
def sunlit():
    calls = []
    server = LightServer(lambda chunk, pos: calls.append(pos))
    server.on_chunk_added(Vector2(0, -1), NewLightChunk())
    server.on_chunk_added(Vector2(0, 0), NewLightChunk(blocks=_blocks((10, 3))))
    processed = server.process()
    return server, processed, calls


def test_callback_receives_every_processed_chunk(sunlit):
    _, processed, calls = sunlit
    assert set(processed) == {Vector2(0, -1), Vector2(0, 0)}
    assert sorted(calls, key=lambda p: p.y) == sorted(processed, key=lambda p: p.y)


def test_sun_lights_chunk_below_open_sky(sunlit):
    server, _, _ = sunlit
    assert server.chunks[Vector2(0, 0)].level_at(32, 5) == 255


def test_chunk_without_chunk_above_gets_no_sun(sunlit):
    server, _, _ = sunlit
    assert server.chunks[Vector2(0, -1)].level_at(32, 10) == 0


def test_block_casts_shadow_downwards(sunlit):
    server, _, _ = sunlit
    chunk = server.chunks[Vector2(0, 0)]
    assert chunk.level_at(10, 3) == 255
    assert chunk.level_at(10, 30) < chunk.level_at(40, 30)


def test_point_light_lights_and_fades():
    server = LightServer()
    server.on_chunk_added(Vector2(0, 0), NewLightChunk())
    server.process()
    chunk = server.chunks[Vector2(0, 0)]
    assert chunk.level_at(32, 32) == 0

    server.on_light_added(Vector2(32, 32), 1.0)
    server.process()
    assert chunk.light_sources == {Vector2(32, 32): 1.0}
    near = chunk.level_at(32, 32)
    mid = chunk.level_at(32, 40)
    far = chunk.level_at(32, 60)
    assert near > 0
    assert near >= mid >= far
    assert near > far

    server.on_light_removed(Vector2(32, 32), 1.0)
    server.process()
    assert chunk.light_sources == {}
    assert chunk.level_at(32, 32) == 0
    assert chunk.level_at(32, 40) == 0