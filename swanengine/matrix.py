"""3x3 affine transformation matrix."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import ClassVar

from .vector import Vector2

_IDENTITY = (1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)


def _checked(values: Iterable[float]) -> list[float]:
    result = list(values)
    if len(result) != 9:
        raise ValueError(f"a 3x3 matrix needs 9 values, got {len(result)}")
    return result


@dataclass
class Matrix3:
    """Row-major 3x3 matrix; the last row is assumed to stay (0, 0, 1)."""

    vals: list[float] = field(default_factory=lambda: list(_IDENTITY))

    IDENTITY: ClassVar[tuple[float, ...]] = _IDENTITY

    def __post_init__(self) -> None:
        self.vals = _checked(self.vals)

    def at(self, x: int, y: int) -> float:
        return self.vals[y * 3 + x]

    def set_at(self, x: int, y: int, value: float) -> None:
        self.vals[y * 3 + x] = value

    def set(self, values: Iterable[float]) -> Matrix3:
        self.vals = _checked(values)
        return self

    def reset(self) -> Matrix3:
        self.vals = list(_IDENTITY)
        return self

    def copy(self) -> Matrix3:
        return Matrix3(list(self.vals))

    def translate(self, vec: Vector2) -> Matrix3:
        self.vals[2] += vec.x
        self.vals[5] += vec.y
        return self

    def scale(self, vec: Vector2) -> Matrix3:
        for i in range(3):
            self.vals[i] *= vec.x
            self.vals[3 + i] *= vec.y
        return self

    def rotate(self, rads: float) -> Matrix3:
        s = math.sin(rads)
        c = math.cos(rads)
        top = self.vals[0:3]
        mid = self.vals[3:6]
        self.vals[0:3] = [c * t - s * m for t, m in zip(top, mid)]
        self.vals[3:6] = [s * t + c * m for t, m in zip(top, mid)]
        return self

    def __str__(self) -> str:
        rows = (
            f"({self.at(0, y)}, {self.at(1, y)}, {self.at(2, y)})" for y in range(3)
        )
        return "(" + ", ".join(rows) + ")"