from __future__ import annotations

from dataclasses import dataclass
import logging

LOGGER = logging.getLogger(__name__)


@dataclass
class FrameRateController:
    """Paces the control loop and decides which ticks are presented."""

    target_fps: int
    present_fps: int | None = None
    overruns: int = 0
    _next_present_at: float | None = None

    def __post_init__(self) -> None:
        if self.target_fps <= 0:
            raise ValueError("target_fps must be > 0")
        if self.present_fps is not None and self.present_fps <= 0:
            raise ValueError("present_fps must be > 0 when provided")
        if self.present_fps is not None:
            self.present_fps = min(self.present_fps, self.target_fps)

    @property
    def frame_dt(self) -> float:
        return 1.0 / float(self.target_fps)

    @property
    def present_dt(self) -> float:
        return 1.0 / float(self.present_fps or self.target_fps)

    def should_present(self, now: float) -> bool:
        if self._next_present_at is None:
            self._next_present_at = now
        if now < self._next_present_at:
            return False
        # Skip missed slots instead of presenting a burst after a stall.
        dt = self.present_dt
        while self._next_present_at <= now:
            self._next_present_at += dt
        return True

    def compute_sleep(self, loop_started_at: float, loop_finished_at: float) -> float:
        elapsed = max(0.0, loop_finished_at - loop_started_at)
        remaining = self.frame_dt - elapsed
        if remaining < 0:
            self.overruns += 1
            LOGGER.debug("frame overran budget by %.2f ms", -remaining * 1000.0)
            return 0.0
        return remaining
