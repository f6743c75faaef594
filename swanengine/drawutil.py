"""Colour helpers used when drawing backgrounds and overlays."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0


def _lerp(start: float, end: float, frac: float) -> float:
    return min(max(end * frac + start * (1 - frac), 0.0), 255.0)


def _lerp_color(start: Color, end: Color, frac: float) -> Color:
    return Color(
        r=_lerp(start.r, end.r, frac),
        g=_lerp(start.g, end.g, frac),
        b=_lerp(start.b, end.b, frac),
        a=_lerp(start.a, end.a, frac),
    )


def linear_gradient(val: float, colors: Sequence[tuple[float, Color]]) -> Color:
    """Interpolate a colour for `val` between stops sorted by position."""
    if not colors:
        raise ValueError("a gradient needs at least one colour stop")

    if val < colors[0][0]:
        return colors[0][1]

    for (from_val, from_color), (to_val, to_color) in zip(colors, colors[1:]):
        if to_val < val:
            continue
        frac = (val - from_val) / (to_val - from_val)
        return _lerp_color(from_color, to_color, frac)

    return colors[-1][1]