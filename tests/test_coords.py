import pytest

from swanengine.constants import CHUNK_HEIGHT, CHUNK_WIDTH
from swanengine.coords import tile_pos_to_chunk_pos, tile_pos_to_chunk_rel_pos
from swanengine.vector import Vector2


def test_origin_is_in_chunk_zero():
    assert tile_pos_to_chunk_pos(Vector2(0, 0)) == Vector2(0, 0)
    assert tile_pos_to_chunk_rel_pos(Vector2(0, 0)) == Vector2(0, 0)


def test_negative_tile_belongs_to_negative_chunk():
    pos = Vector2(-1, -1)
    assert tile_pos_to_chunk_pos(pos) == Vector2(-1, -1)
    assert tile_pos_to_chunk_rel_pos(pos) == Vector2(CHUNK_WIDTH - 1, CHUNK_HEIGHT - 1)


def test_chunk_boundary():
    assert tile_pos_to_chunk_pos(Vector2(CHUNK_WIDTH, CHUNK_HEIGHT)) == Vector2(1, 1)
    assert tile_pos_to_chunk_pos(Vector2(CHUNK_WIDTH - 1, 0)) == Vector2(0, 0)


@pytest.mark.parametrize("x,y", [(0, 0), (5, 70), (-65, -1), (-128, 127), (1000, -999)])
def test_round_trip(x, y):
    pos = Vector2(x, y)
    chunk = tile_pos_to_chunk_pos(pos)
    rel = tile_pos_to_chunk_rel_pos(pos)
    assert 0 <= rel.x < CHUNK_WIDTH and 0 <= rel.y < CHUNK_HEIGHT
    assert chunk * Vector2(CHUNK_WIDTH, CHUNK_HEIGHT) + rel == pos