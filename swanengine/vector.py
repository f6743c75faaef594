"""Two-dimensional vectors for positions, sizes and velocities."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass
from typing import ClassVar, Union

Number = Union[int, float]


def _is_int(value: Number) -> bool:
    return isinstance(value, int)


def _div(a: Number, b: Number) -> Number:
    """Divide, truncating toward zero when both operands are integers."""
    if _is_int(a) and _is_int(b):
        quotient = abs(a) // abs(b)
        return quotient if (a >= 0) == (b >= 0) else -quotient
    return a / b


@dataclass(frozen=True, slots=True)
class Vector2:
    """An immutable 2D vector with integer or float components."""

    x: Number = 0
    y: Number = 0

    ZERO: ClassVar[Vector2]

    def _ints(self) -> bool:
        return _is_int(self.x) and _is_int(self.y)

    def length(self) -> Number:
        """Euclidean length; truncated to an int for integer vectors."""
        result = math.sqrt(self.square_length())
        return int(result) if self._ints() else result

    def square_length(self) -> Number:
        return self.x * self.x + self.y * self.y

    def sign(self) -> Vector2:
        """Per-component sign, where anything not positive counts as -1."""
        return Vector2(1 if self.x > 0 else -1, 1 if self.y > 0 else -1)

    def add(self, ax: Number, ay: Number) -> Vector2:
        return Vector2(self.x + ax, self.y + ay)

    def scale(self, sx: Number, sy: Number | None = None) -> Vector2:
        """Scale per axis, or uniformly when only one factor is given."""
        if sy is None:
            sy = sx
        return Vector2(self.x * sx, self.y * sy)

    def norm(self) -> Vector2:
        return self / self.length()

    def dot(self, other: Vector2) -> Number:
        return self.x * other.x + self.y * other.y

    def as_int(self) -> Vector2:
        return Vector2(int(self.x), int(self.y))

    def as_float(self) -> Vector2:
        return Vector2(float(self.x), float(self.y))

    def __iter__(self) -> Iterator[Number]:
        yield self.x
        yield self.y

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def __add__(self, other: Vector2) -> Vector2:
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, other: Vector2 | Number) -> Vector2:
        if isinstance(other, Vector2):
            return Vector2(self.x * other.x, self.y * other.y)
        if isinstance(other, (int, float)):
            return Vector2(self.x * other, self.y * other)
        return NotImplemented

    def __rmul__(self, other: Number) -> Vector2:
        if isinstance(other, (int, float)):
            return Vector2(self.x * other, self.y * other)
        return NotImplemented

    def __truediv__(self, other: Vector2 | Number) -> Vector2:
        if isinstance(other, Vector2):
            return Vector2(_div(self.x, other.x), _div(self.y, other.y))
        if isinstance(other, (int, float)):
            return Vector2(_div(self.x, other), _div(self.y, other))
        return NotImplemented

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


Vector2.ZERO = Vector2(0, 0)