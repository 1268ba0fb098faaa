from __future__ import annotations

from collections import deque
from dataclasses import dataclass
import threading
import time

import numpy as np
import torch


@dataclass(frozen=True)
class CallBlitEvent:
    event_id: int
    revision: int
    ts_ns: int


class WindowMatrix:
    """Committed RGBA255 frame shown by the display; each commit is a new revision."""

    def __init__(self, height: int, width: int, background: tuple[int, int, int, int] = (255, 255, 255, 255)) -> None:
        if height <= 0 or width <= 0:
            raise ValueError("height and width must be > 0")
        self.height = height
        self.width = width
        self._lock = threading.Lock()
        self._events: deque[CallBlitEvent] = deque()
        self._next_event_id = 1
        self._revision = 0
        bg = torch.tensor(background, dtype=torch.uint8).view(1, 1, 4)
        self._matrix = bg.expand(height, width, 4).clone()

    @property
    def revision(self) -> int:
        return self._revision

    def read_snapshot(self) -> torch.Tensor:
        with self._lock:
            return self._matrix.clone()

    def commit_canvas(self, canvas: np.ndarray) -> CallBlitEvent:
        if canvas.dtype != np.uint8:
            raise ValueError("canvas must be uint8")
        if canvas.shape != (self.height, self.width, 4):
            raise ValueError(f"canvas has invalid shape: {canvas.shape} expected {(self.height, self.width, 4)}")
        frame = torch.from_numpy(np.ascontiguousarray(canvas)).clone()
        with self._lock:
            self._matrix = frame
            self._revision += 1
            event = CallBlitEvent(event_id=self._next_event_id, revision=self._revision, ts_ns=time.time_ns())
            self._next_event_id += 1
            self._events.append(event)
        return event

    def pop_call_blit(self) -> CallBlitEvent | None:
        with self._lock:
            if not self._events:
                return None
            return self._events.popleft()

    def pending_call_blit_count(self) -> int:
        with self._lock:
            return len(self._events)
