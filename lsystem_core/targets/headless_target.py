from __future__ import annotations

from dataclasses import dataclass, field

from .base import DisplayFrame, RenderTarget


@dataclass
class HeadlessTarget(RenderTarget):
    """Keeps presented frames in memory; optionally signals cancel after `close_after` frames."""

    close_after: int | None = None
    keep_frames: bool = False
    frames_presented: int = 0
    started: bool = False
    last_frame: DisplayFrame | None = None
    frames: list[DisplayFrame] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.close_after is not None and self.close_after <= 0:
            raise ValueError("close_after must be > 0 when provided")

    def start(self) -> None:
        self.started = True

    def present_frame(self, frame: DisplayFrame) -> None:
        if not self.started:
            raise RuntimeError("headless target not started")
        self.frames_presented += 1
        self.last_frame = frame
        if self.keep_frames:
            self.frames.append(frame)

    def stop(self) -> None:
        self.started = False

    def is_active(self) -> bool:
        return self.started

    def poll_cancel_signal(self) -> bool:
        return self.close_after is not None and self.frames_presented >= self.close_after
