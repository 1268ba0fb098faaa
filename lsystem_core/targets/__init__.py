"""Display targets for the reveal loop."""

from .base import DisplayFrame, RenderTarget
from .headless_target import HeadlessTarget
from .window_target import WindowPresenter, WindowTarget

__all__ = ["DisplayFrame", "HeadlessTarget", "RenderTarget", "WindowPresenter", "WindowTarget"]
