from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import time
from typing import Callable

import numpy as np

from lsystem_raster import BLACK, RGBA, WHITE, clear_canvas, draw_segments

from .actions import ActionTable
from .turtle import TurtleInterpreter
from .viewport import ViewportFit

LOGGER = logging.getLogger(__name__)


class AnimationState(str, Enum):
    RUNNING = "running"
    STOPPED = "stopped"


@dataclass(frozen=True)
class FrameResult:
    cursor: int
    advanced: bool
    segments: int


def render_frame(
    commands: str,
    cursor: int,
    scale: float,
    origin: tuple[float, float],
    table: ActionTable,
    canvas: np.ndarray,
    *,
    interpreter: TurtleInterpreter | None = None,
    background: RGBA = WHITE,
    ink: RGBA = BLACK,
) -> int:
    """Clear `canvas` and rasterize the path for commands[:cursor]. Returns the segment count."""
    interpreter = interpreter or TurtleInterpreter()
    clear_canvas(canvas, background)
    segments = interpreter.render(commands, cursor, scale, origin, table)
    return draw_segments(canvas, segments, color=ink)


@dataclass
class AnimationController:
    """Owns the reveal cursor and redraws the revealed prefix on every tick."""

    commands: str
    table: ActionTable
    fit: ViewportFit
    canvas: np.ndarray
    interval_s: float = 0.005
    reveal_step: int = 1
    interpreter: TurtleInterpreter = field(default_factory=TurtleInterpreter)
    background: RGBA = WHITE
    ink: RGBA = BLACK
    clock: Callable[[], float] = time.perf_counter
    _cursor: int = 0
    _state: AnimationState = AnimationState.RUNNING
    _last_advance: float | None = None

    def __post_init__(self) -> None:
        if self.interval_s < 0:
            raise ValueError("interval_s must be >= 0")
        if self.reveal_step <= 0:
            raise ValueError("reveal_step must be > 0")
        if self.canvas.ndim != 3 or self.canvas.shape[2] != 4 or self.canvas.dtype != np.uint8:
            raise ValueError("canvas must be a uint8 array of shape (H, W, 4)")
        self._last_advance = self.clock()

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def state(self) -> AnimationState:
        return self._state

    @property
    def is_complete(self) -> bool:
        return self._cursor >= len(self.commands)

    def cancel(self) -> None:
        if self._state == AnimationState.STOPPED:
            return
        self._state = AnimationState.STOPPED
        LOGGER.info("animation stopped at cursor %d/%d", self._cursor, len(self.commands))

    def tick(self) -> FrameResult:
        if self._state == AnimationState.STOPPED:
            raise RuntimeError("animation is stopped")
        now = self.clock()
        advanced = False
        assert self._last_advance is not None
        if now - self._last_advance >= self.interval_s:
            nxt = min(len(self.commands), self._cursor + self.reveal_step)
            advanced = nxt != self._cursor
            self._cursor = nxt
            self._last_advance = now
        drawn = render_frame(
            self.commands,
            self._cursor,
            self.fit.scale,
            self.fit.origin,
            self.table,
            self.canvas,
            interpreter=self.interpreter,
            background=self.background,
            ink=self.ink,
        )
        return FrameResult(cursor=self._cursor, advanced=advanced, segments=drawn)
