from dataclasses import dataclass

import pytest

from swanengine.physics import BasicPhysicsBody, Body
from swanengine.vector import Vector2


@dataclass
class Tile:
    is_solid: bool


class Plane:
    def __init__(self, solid):
        self.solid = solid

    def get_tile(self, pos):
        return Tile(self.solid(pos))


def floor_plane(level):
    return Plane(lambda pos: pos.y >= level)


def wall_plane(x_min):
    return Plane(lambda pos: pos.x >= x_min)


def test_body_edges():
    body = Body(Vector2(2.0, 3.0), Vector2(1.5, 2.5))
    assert body.left() == 2.0
    assert body.top() == 3.0
    assert body.right() == 2.0 + 1.5
    assert body.bottom() == 3.0 + 2.5
    assert body.bottom_right() == Vector2(3.5, 5.5)


def test_collides_with_overlap_and_touching():
    a = Body(Vector2(0.0, 0.0), Vector2(1.0, 1.0))
    overlapping = Body(Vector2(0.5, 0.5), Vector2(1.0, 1.0))
    touching = Body(Vector2(1.0, 0.0), Vector2(1.0, 1.0))
    far = Body(Vector2(5.0, 5.0), Vector2(1.0, 1.0))
    assert a.collides_with(overlapping)
    assert overlapping.collides_with(a)
    assert not a.collides_with(touching)
    assert not a.collides_with(far)


def test_falling_body_lands_on_floor():
    phys = BasicPhysicsBody(Body(Vector2(0.0, 8.5), Vector2(1.0, 1.0)),
                            vel=Vector2(0.0, 10.0))
    phys.update(floor_plane(10), 1.0)
    assert phys.body.bottom() == 10.0
    assert phys.on_ground is True
    assert phys.vel.y == 0


def test_force_is_applied_and_cleared():
    phys = BasicPhysicsBody(Body(Vector2(0.0, 0.0)), mass=2.0,
                            force=Vector2(0.0, 4.0))
    phys.update(floor_plane(100), 0.5)
    assert phys.vel.y == pytest.approx(4.0 / 2.0 * 0.5)
    assert phys.force == Vector2(0.0, 0.0)
    assert phys.on_ground is False


def test_free_motion_moves_by_velocity():
    phys = BasicPhysicsBody(Body(Vector2(0.0, 0.0)), vel=Vector2(1.0, 2.0))
    phys.update(floor_plane(100), 1.0)
    assert phys.body.pos.x == pytest.approx(1.0)
    assert phys.body.pos.y == pytest.approx(2.0)


def test_ceiling_stops_upward_motion():
    plane = Plane(lambda pos: pos.y < 0)
    phys = BasicPhysicsBody(Body(Vector2(0.0, 0.3)), vel=Vector2(0.0, -1.0))
    phys.update(plane, 1.0)
    assert phys.body.top() == 0.0
    assert phys.on_ground is False


def test_wall_bounce_reverses_velocity():
    phys = BasicPhysicsBody(Body(Vector2(3.7, 0.0)), bounciness=1.0,
                            vel=Vector2(0.4, 0.0))
    phys.update(wall_plane(5), 1.0)
    assert phys.body.right() == 5.0
    assert phys.vel.x == pytest.approx(-0.4)


def test_mushyness_kills_small_bounces():
    phys = BasicPhysicsBody(Body(Vector2(3.5, 0.0)), bounciness=0.5,
                            mushyness=1.0, vel=Vector2(1.0, 0.0))
    phys.update(wall_plane(5), 1.0)
    assert phys.body.right() == 5.0
    assert phys.vel.x == 0


def test_collide_with_body_below_sets_on_ground():
    phys = BasicPhysicsBody(Body(Vector2(0.0, 0.0)), vel=Vector2(0.0, 5.0))
    other = Body(Vector2(0.0, 0.9))
    phys.collide_with(other)
    assert phys.body.bottom() == pytest.approx(other.top())
    assert phys.vel.y == 0.01
    assert phys.on_ground is True


def test_collide_with_body_on_the_right():
    phys = BasicPhysicsBody(Body(Vector2(0.0, 0.0), Vector2(1.0, 3.0)),
                            vel=Vector2(5.0, 0.0))
    other = Body(Vector2(0.9, -5.0), Vector2(1.0, 10.0))
    phys.collide_with(other)
    assert phys.body.right() == pytest.approx(other.left())
    assert phys.vel.x == 0.01


def test_collide_all_ignores_self_and_non_solid():
    me = Body(Vector2(0.0, 0.0))
    phys = BasicPhysicsBody(me)
    ghost = Body(Vector2(0.0, 0.9), is_solid=False)
    phys.collide_all([me, ghost])
    assert me.pos == Vector2(0.0, 0.0)
    assert ghost.pos == Vector2(0.0, 0.9)
    assert phys.on_ground is False


def test_collide_all_pushes_overlapping_bodies_apart():
    phys = BasicPhysicsBody(Body(Vector2(0.0, 0.0)))
    other = Body(Vector2(0.0, 0.9))
    phys.collide_all([other])
    assert not phys.body.collides_with(other)
    assert phys.on_ground is True