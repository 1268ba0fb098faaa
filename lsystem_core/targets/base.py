from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import torch


@dataclass(frozen=True)
class DisplayFrame:
    revision: int
    width: int
    height: int
    rgba: torch.Tensor


class RenderTarget(ABC):
    """Display surface the control loop presents into.

    `start` creates the surface; failures raised from `start` or `present_frame`
    are fatal to the run.
    """

    @abstractmethod
    def start(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def present_frame(self, frame: DisplayFrame) -> None:
        raise NotImplementedError

    @abstractmethod
    def stop(self) -> None:
        raise NotImplementedError

    def pump_events(self) -> None:
        """Optional hook for targets that need explicit event pumping."""
        return

    def is_active(self) -> bool:
        return True

    def poll_cancel_signal(self) -> bool:
        return False

    def should_close(self) -> bool:
        return (not self.is_active()) or self.poll_cancel_signal()
