from __future__ import annotations

from dataclasses import dataclass
import logging
import math

from .actions import ActionTable, Move, Turn
from .turtle import TurtleInterpreter

LOGGER = logging.getLogger(__name__)

MIN_EXTENT = 1.0


@dataclass(frozen=True)
class PathBounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class ViewportFit:
    scale: float
    origin: tuple[float, float]
    bounds: PathBounds


class ViewportFitter:
    """Computes a uniform scale and origin that frame the whole path inside the canvas margin.

    The default dry run walks only Move and Turn actions, so branches restored by
    Pop are not followed back to their fork point. `model_branches=True` replays
    the pose stack as well and frames exactly what will be drawn.
    """

    def __init__(self, step_length: float = 1.0, model_branches: bool = False) -> None:
        if not math.isfinite(step_length) or step_length <= 0:
            raise ValueError("step_length must be a positive finite number")
        self.step_length = step_length
        self.model_branches = model_branches

    def bounds(self, commands: str, table: ActionTable) -> PathBounds:
        if self.model_branches:
            return self._branching_bounds(commands, table)
        return self._linear_bounds(commands, table)

    def fit(
        self,
        commands: str,
        table: ActionTable,
        canvas_size: tuple[int, int],
        margin_fraction: float,
    ) -> ViewportFit:
        width, height = canvas_size
        if width <= 0 or height <= 0:
            raise ValueError("canvas width/height must be > 0")
        if not (0.0 <= margin_fraction < 0.5):
            raise ValueError("margin_fraction must satisfy 0 <= f < 0.5")

        bounds = self.bounds(commands, table)
        path_w = bounds.width
        path_h = bounds.height
        if path_w <= 0.0 or path_h <= 0.0:
            LOGGER.debug("degenerate path extent %.3fx%.3f; using minimum extent", path_w, path_h)
        path_w = path_w if path_w > 0.0 else MIN_EXTENT
        path_h = path_h if path_h > 0.0 else MIN_EXTENT

        avail_w = width * (1.0 - 2.0 * margin_fraction)
        avail_h = height * (1.0 - 2.0 * margin_fraction)
        scale = min(avail_w / path_w, avail_h / path_h)
        origin = (
            margin_fraction * width - bounds.min_x * scale,
            margin_fraction * height - bounds.min_y * scale,
        )
        return ViewportFit(scale=scale, origin=origin, bounds=bounds)

    def _linear_bounds(self, commands: str, table: ActionTable) -> PathBounds:
        x = y = heading = 0.0
        min_x = max_x = x
        min_y = max_y = y
        for symbol in commands:
            action = table.lookup(symbol)
            if isinstance(action, Move):
                x += math.cos(heading) * self.step_length
                y += math.sin(heading) * self.step_length
                min_x = min(min_x, x)
                max_x = max(max_x, x)
                min_y = min(min_y, y)
                max_y = max(max_y, y)
            elif isinstance(action, Turn):
                heading += action.angle
        return PathBounds(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y)

    def _branching_bounds(self, commands: str, table: ActionTable) -> PathBounds:
        interpreter = TurtleInterpreter(step_length=self.step_length)
        segments = interpreter.render(commands, len(commands), 1.0, (0.0, 0.0), table)
        min_x = max_x = min_y = max_y = 0.0
        for seg in segments:
            min_x = min(min_x, seg.x0, seg.x1)
            max_x = max(max_x, seg.x0, seg.x1)
            min_y = min(min_y, seg.y0, seg.y1)
            max_y = max(max_y, seg.y0, seg.y1)
        return PathBounds(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y)
