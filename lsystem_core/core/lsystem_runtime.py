from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Callable

import numpy as np

from lsystem_core.targets.base import RenderTarget
from lsystem_raster import new_canvas

from .actions import ActionTable
from .animation import AnimationController
from .config import LSystemConfig
from .display_runtime import DisplayRuntime
from .frame_rate_controller import FrameRateController
from .grammar import GrammarEngine
from .turtle import TurtleInterpreter
from .viewport import ViewportFit, ViewportFitter
from .window_matrix import WindowMatrix

LOGGER = logging.getLogger(__name__)


@dataclass
class LSystemSession:
    """Everything one reveal run needs; replaces process-wide window/animation globals."""

    config: LSystemConfig
    commands: str
    table: ActionTable
    fit: ViewportFit
    canvas: np.ndarray
    controller: AnimationController


@dataclass(frozen=True)
class LSystemRunResult:
    ticks_run: int
    frames_presented: int
    final_cursor: int
    sequence_length: int
    stopped_by_target_close: bool
    completed: bool


def prepare_session(
    config: LSystemConfig,
    *,
    engine: GrammarEngine | None = None,
    clock: Callable[[], float] = time.perf_counter,
) -> LSystemSession:
    engine = engine or GrammarEngine(max_symbols=config.max_symbols)
    commands = engine.expand(config.axiom, config.productions(), config.generations)
    table = config.action_table()
    interpreter = TurtleInterpreter(step_length=config.step_length, strict_stack=config.strict_stack)
    if config.strict_stack:
        # Unbalanced pops fail here, before any surface exists.
        interpreter.replay(commands, len(commands), 1.0, (0.0, 0.0), table)
    fitter =ViewportFitter(step_length=config.step_length, model_branches=config.fit_mode == "branching")
    fit = fitter.fit(commands, table, (config.width, config.height), config.margin_fraction)
    LOGGER.info(
        "prepared %r: %d symbols, scale=%.4f origin=(%.1f, %.1f)",
        config.name,
        len(commands),
        fit.scale,
        fit.origin[0],
        fit.origin[1],
    )
    canvas = new_canvas(config.width, config.height, config.background)
    controller = AnimationController(
        commands=commands,
        table=table,
        fit=fit,
        canvas=canvas,
        interval_s=config.tick_interval_s,
        reveal_step=config.reveal_step,
        interpreter=interpreter,
        background=config.background,
        ink=config.ink,
        clock=clock,
    )
    return LSystemSession(
        config=config,
        commands=commands,
        table=table,
        fit=fit,
        canvas=canvas,
        controller=controller,
    )


class LSystemRuntime:
    """Single-threaded loop: poll the target, tick the reveal, commit and present the frame."""

    def __init__(self, target: RenderTarget, sleep: Callable[[float], None] = time.sleep) -> None:
        self._target = target
        self._sleep = sleep
        self._last_error: Exception | None = None

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    def run(
        self,
        session: LSystemSession,
        *,
        max_ticks: int | None = None,
        target_fps: int = 60,
        present_fps: int | None = None,
        stop_when_complete: bool = False,
    ) -> LSystemRunResult:
        if max_ticks is not None and max_ticks <= 0:
            raise ValueError("max_ticks must be > 0")
        rate = FrameRateController(target_fps=target_fps, present_fps=present_fps)
        config = session.config
        controller = session.controller
        matrix = WindowMatrix(height=config.height, width=config.width, background=config.background)
        display = DisplayRuntime(matrix=matrix, target=self._target)

        ticks_run = 0
        frames_presented = 0
        stopped_by_target_close = False
        started = False
        try:
            self._target.start()
            started = True
            while max_ticks is None or ticks_run < max_ticks:
                self._target.pump_events()
                if self._target.should_close():
                    stopped_by_target_close = True
                    break
                now = time.perf_counter()
                controller.tick()
                ticks_run += 1
                matrix.commit_canvas(session.canvas)
                finishing = stop_when_complete and controller.is_complete
                if rate.should_present(now) or finishing:
                    if display.run_once() is not None:
                        frames_presented += 1
                if finishing:
                    break
                sleep_for = rate.compute_sleep(loop_started_at=now, loop_finished_at=time.perf_counter())
                if sleep_for > 0:
                    self._sleep(sleep_for)
        except Exception as exc:  # noqa: BLE001
            self._last_error = exc
            LOGGER.exception("l-system run failed: %s", exc)
            raise
        finally:
            controller.cancel()
            if started:
                self._target.stop()

        return LSystemRunResult(
            ticks_run=ticks_run,
            frames_presented=frames_presented,
            final_cursor=controller.cursor,
            sequence_length=len(session.commands),
            stopped_by_target_close=stopped_by_target_close,
            completed=controller.is_complete,
        )
