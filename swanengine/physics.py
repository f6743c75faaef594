"""Axis-aligned bodies and simple tile-colliding physics."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from .vector import Vector2

EPSILON = 0.05
_MAX_STEP = 0.4


class TileLike(Protocol):
    is_solid: bool


class TileSource(Protocol):
    def get_tile(self, pos: Vector2) -> TileLike: ...


@dataclass(eq=False)
class Body:
    """An axis-aligned box in world units."""

    pos: Vector2 = field(default_factory=lambda: Vector2(0.0, 0.0))
    size: Vector2 = field(default_factory=lambda: Vector2(1.0, 1.0))
    is_solid: bool = True

    def left(self) -> float:
        return self.pos.x

    def right(self) -> float:
        return self.pos.x + self.size.x

    def top(self) -> float:
        return self.pos.y

    def bottom(self) -> float:
        return self.pos.y + self.size.y

    def top_left(self) -> Vector2:
        return self.pos

    def bottom_right(self) -> Vector2:
        return self.pos + self.size

    def collides_with(self, other: Body) -> bool:
        return (
            self.left() < other.right() and self.right() > other.left()
            and self.top() < other.bottom() and self.bottom() > other.top()
        )

    def _move(self, dx: float = 0.0, dy: float = 0.0) -> None:
        self.pos = Vector2(self.pos.x + dx, self.pos.y + dy)


@dataclass
class BasicPhysicsBody:
    """A body with velocity that collides with solid tiles and other bodies."""

    body: Body
    mass: float = 1.0
    bounciness: float = 0.0
    mushyness: float = 0.0
    vel: Vector2 = field(default_factory=lambda: Vector2(0.0, 0.0))
    force: Vector2 = field(default_factory=lambda: Vector2(0.0, 0.0))
    on_ground: bool = False

    def collide_with(self, other: Body) -> None:
        """Push this body and `other` apart along the shallowest edge."""
        body = self.body
        if body.bottom() < other.top() + 0.2:
            delta = body.bottom() - other.top()
            body._move(dy=-delta / 2)
            other._move(dy=delta / 2)
            if self.vel.y > 0.01:
                self.vel = Vector2(self.vel.x, 0.01)
            self.on_ground = True
        elif body.top() > other.bottom() - 0.2:
            delta = body.top() - other.bottom()
            body._move(dy=-delta / 2)
            other._move(dy=delta / 2)
            if self.vel.y < -0.01:
                self.vel = Vector2(self.vel.x, -0.01)
        elif body.right() < other.left() + 0.2:
            delta = body.right() - other.left()
            body._move(dx=-delta / 2)
            other._move(dx=delta / 2)
            if self.vel.x > 0.01:
                self.vel = Vector2(0.01, self.vel.y)
        elif body.left() > other.right() - 0.2:
            delta = body.left() - other.right()
            body._move(dx=-delta / 2)
            other._move(dx=delta / 2)
            if self.vel.x < -0.01:
                self.vel = Vector2(-0.01, self.vel.y)

    def collide_all(self, bodies: Iterable[Body]) -> None:
        """Collide with every other solid body that overlaps this one."""
        for other in bodies:
            if other is self.body or not other.is_solid:
                continue
            if self.body.collides_with(other):
                self.collide_with(other)

    def update(self, plane: TileSource, dt: float) -> None:
        """Integrate forces and move, resolving collisions with solid tiles."""
        self.vel = Vector2(
            self.vel.x + self.force.x / self.mass * dt,
            self.vel.y + self.force.y / self.mass * dt,
        )
        self.force = Vector2(0.0, 0.0)

        dist_x = self.vel.x * dt
        dist_y = self.vel.y * dt
        step_x = _MAX_STEP if dist_x > 0 else -_MAX_STEP
        step_y = _MAX_STEP if dist_y > 0 else -_MAX_STEP

        while abs(dist_y) > abs(step_y):
            self.body._move(dy=step_y)
            self._collide_y(plane)
            dist_y -= step_y
        self.body._move(dy=dist_y)
        self._collide_y(plane)

        while abs(dist_x) > abs(step_x):
            self.body._move(dx=step_x)
            self._collide_x(plane)
            dist_x -= step_x
        self.body._move(dx=dist_x)
        self._collide_x(plane)

    def _bounce(self, v: float) -> float:
        v *= -self.bounciness
        return 0.0 if abs(v) < self.mushyness else v

    def _collide_x(self, plane: TileSource) -> None:
        body = self.body
        collided = False
        first_y = math.floor(body.top() + EPSILON)
        last_y = math.floor(body.bottom() - EPSILON)

        for y in range(first_y, last_y + 1):
            lx = math.floor(body.left())
            if plane.get_tile(Vector2(lx, y)).is_solid:
                body.pos = Vector2(lx + 1.0, body.pos.y)
                collided = True
                break

            rx = math.floor(body.right())
            if plane.get_tile(Vector2(rx, y)).is_solid:
                body.pos = Vector2(rx - body.size.x, body.pos.y)
                collided = True
                break

        if collided:
            self.vel = Vector2(self._bounce(self.vel.x), self.vel.y)

    def _collide_y(self, plane: TileSource) -> None:
        body = self.body
        collided = False
        self.on_ground = False
        first_x = math.floor(body.left() + EPSILON)
        last_x = math.floor(body.right() - EPSILON)

        for x in range(first_x, last_x + 1):
            by = math.floor(body.bottom())
            if plane.get_tile(Vector2(x, by)).is_solid:
                body.pos = Vector2(body.pos.x, by - body.size.y)
                collided = True
                self.on_ground = True
                break

            ty = math.floor(body.top())
            if plane.get_tile(Vector2(x, ty)).is_solid:
                body.pos = Vector2(body.pos.x, ty + 1.0)
                collided = True
                break

        if collided:
            self.vel = Vector2(self.vel.x, self._bounce(self.vel.y))