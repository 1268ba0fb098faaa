from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Any

import numpy as np
import torch

LOGGER = logging.getLogger(__name__)


class PresenterState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    STOPPED = "stopped"
    FAILED = "failed"


@dataclass
class MatplotlibPresenter:
    """Shows RGBA frames in a matplotlib window; closing it or pressing a cancel key ends the run."""

    width: int
    height: int
    title: str = "L-System"
    cancel_keys: tuple[str, ...] = ("escape",)
    pause_s: float = 0.001
    pyplot: Any = None
    _state: PresenterState = PresenterState.UNINITIALIZED
    _last_error: Exception | None = None
    _closed: bool = False
    _cancel_requested: bool = False
    _figure: Any = None
    _image: Any = None
    _connections: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")
        if self.pause_s < 0:
            raise ValueError("pause_s must be >= 0")

    @property
    def state(self) -> PresenterState:
        return self._state

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    def initialize(self) -> None:
        if self._state == PresenterState.READY:
            return
        if self._state == PresenterState.FAILED:
            raise RuntimeError("presenter is in FAILED state; create a new presenter instance")
        try:
            if self.pyplot is None:
                import matplotlib.pyplot as plt

                self.pyplot = plt
            plt = self.pyplot
            plt.ion()
            dpi = 100.0
            fig, ax = plt.subplots(figsize=(self.width / dpi, self.height / dpi), dpi=dpi)
            fig.subplots_adjust(left=0, right=1, top=1, bottom=0)
            ax.set_axis_off()
            blank = np.full((self.height, self.width, 4), 255, dtype=np.uint8)
            self._image = ax.imshow(blank, origin="upper", interpolation="nearest")
            if fig.canvas.manager is not None:
                fig.canvas.manager.set_window_title(self.title)
            self._connections = [
                fig.canvas.mpl_connect("close_event", self._on_close),
                fig.canvas.mpl_connect("key_press_event", self._on_key),
            ]
            self._figure = fig
            plt.show(block=False)
        except Exception as exc:  # noqa: BLE001
            self._state = PresenterState.FAILED
            self._last_error = exc
            raise RuntimeError("failed to create matplotlib window") from exc
        self._state = PresenterState.READY
        LOGGER.info("opened %dx%d window %r", self.width, self.height, self.title)

    def present_rgba(self, rgba: torch.Tensor, revision: int) -> None:
        if self._state != PresenterState.READY:
            raise RuntimeError(f"presenter must be READY to present frames (state={self._state.value})")
        self._validate_frame(rgba)
        try:
            self._image.set_data(rgba.cpu().numpy())
            self._figure.canvas.draw_idle()
        except Exception as exc:  # noqa: BLE001
            self._state = PresenterState.FAILED
            self._last_error = exc
            raise RuntimeError(f"failed to present frame revision {revision}") from exc

    def pump_events(self) -> None:
        if self._state != PresenterState.READY:
            return
        if self.pause_s > 0:
            self.pyplot.pause(self.pause_s)
        else:
            self._figure.canvas.flush_events()

    def is_active(self) -> bool:
        return self._state == PresenterState.READY and not self._closed

    def poll_cancel_signal(self) -> bool:
        return self._cancel_requested

    def shutdown(self) -> None:
        if self._state != PresenterState.READY:
            return
        figure = self._figure
        for cid in self._connections:
            figure.canvas.mpl_disconnect(cid)
        self._connections = []
        if not self._closed:
            self.pyplot.close(figure)
        self._figure = None
        self._image = None
        self._state = PresenterState.STOPPED

    def _on_close(self, _event: Any) -> None:
        self._closed = True

    def _on_key(self, event: Any) -> None:
        if getattr(event, "key", None) in self.cancel_keys:
            LOGGER.info("cancel key %r pressed", event.key)
            self._cancel_requested = True

    def _validate_frame(self, rgba: torch.Tensor) -> None:
        if tuple(rgba.shape) != (self.height, self.width, 4):
            raise ValueError(f"frame has invalid shape: {tuple(rgba.shape)} expected {(self.height, self.width, 4)}")
        if rgba.dtype != torch.uint8:
            raise ValueError(f"frame must be uint8, got {rgba.dtype}")
