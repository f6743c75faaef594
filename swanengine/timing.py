"""Timers for periodic game logic and sprite animation."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Clock:
    """Accumulates elapsed time."""

    time: float = 0.0

    def tick(self, dt: float) -> None:
        self.time += dt

    def periodic(self, secs: float) -> bool:
        """Return True and restart when at least `secs` have elapsed."""
        if self.time >= secs:
            self.time = 0.0
            return True
        return False


@dataclass
class Animation:
    """Steps through the frames of a sprite at a fixed interval."""

    frame_count: int
    interval: float
    repeat_from: int = 0
    frame: int = field(default=0, init=False)
    done: bool = field(default=False, init=False)
    timer: float = field(init=False)

    def __post_init__(self) -> None:
        self.timer = self.interval

    def tick(self, dt: float) -> None:
        self.timer -= dt
        if self.timer <= 0:
            self.timer += self.interval
            self.frame += 1
            if self.frame >= self.frame_count:
                self.frame = self.repeat_from
                self.done = True

    def reset(self) -> None:
        self.timer = self.interval
        self.frame = 0
        self.done = False