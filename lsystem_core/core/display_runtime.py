from __future__ import annotations

from dataclasses import dataclass
import logging

import torch

from lsystem_core.targets.base import DisplayFrame, RenderTarget

from .window_matrix import CallBlitEvent, WindowMatrix

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderTick:
    event: CallBlitEvent
    frame: DisplayFrame


class DisplayRuntime:
    """Forwards the newest committed frame of a WindowMatrix to a render target."""

    def __init__(self, matrix: WindowMatrix, target: RenderTarget) -> None:
        self._matrix = matrix
        self._target = target

    def run_once(self) -> RenderTick | None:
        event = self._matrix.pop_call_blit()
        if event is None:
            return None

        # Coalesce to the newest revision; older frames are never shown.
        while True:
            newer = self._matrix.pop_call_blit()
            if newer is None:
                break
            event = newer

        frame = _build_frame(self._matrix.read_snapshot(), revision=event.revision)
        self._target.present_frame(frame)
        return RenderTick(event=event, frame=frame)


def _build_frame(snapshot: torch.Tensor, revision: int) -> DisplayFrame:
    if snapshot.ndim != 3 or snapshot.shape[2] != 4:
        raise ValueError(f"invalid snapshot shape: {tuple(snapshot.shape)}")
    if snapshot.dtype != torch.uint8:
        raise ValueError(f"invalid snapshot dtype: {snapshot.dtype}")
    height, width, _ = snapshot.shape
    return DisplayFrame(revision=revision, width=int(width), height=int(height), rgba=snapshot)
