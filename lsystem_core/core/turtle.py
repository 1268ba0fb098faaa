from __future__ import annotations

from dataclasses import dataclass
import math

from .actions import ActionTable, Idle, Move, Pop, Push, Turn


FULL_TURN = 2.0 * math.pi


class PoseStackUnderflow(RuntimeError):
    pass


@dataclass(frozen=True)
class PenState:
    x: float
    y: float
    heading: float = 0.0


@dataclass(frozen=True)
class LineSegment:
    x0: float
    y0: float
    x1: float
    y1: float


@dataclass(frozen=True)
class TurtleReplay:
    segments: list[LineSegment]
    pen: PenState
    stack_depth: int


class PoseStack:
    def __init__(self) -> None:
        self._items: list[PenState] = []

    def push(self, pose: PenState) -> None:
        self._items.append(pose)

    def pop(self) -> PenState | None:
        if not self._items:
            return None
        return self._items.pop()

    def __len__(self) -> int:
        return len(self._items)


class TurtleInterpreter:
    """Replays a command prefix from a fresh pen; no state survives between calls."""

    def __init__(self, step_length: float = 1.0, strict_stack: bool = False) -> None:
        if not math.isfinite(step_length) or step_length <= 0:
            raise ValueError("step_length must be a positive finite number")
        self.step_length = step_length
        self.strict_stack = strict_stack

    def render(
        self,
        commands: str,
        upto: int,
        scale: float,
        origin: tuple[float, float],
        table: ActionTable,
    ) -> list[LineSegment]:
        return self.replay(commands, upto, scale, origin, table).segments

    def replay(
        self,
        commands: str,
        upto: int,
        scale: float,
        origin: tuple[float, float],
        table: ActionTable,
    ) -> TurtleReplay:
        if upto < 0:
            raise ValueError("upto must be >= 0")
        dist = self.step_length * scale
        x, y = float(origin[0]), float(origin[1])
        heading = 0.0
        stack = PoseStack()
        segments: list[LineSegment] = []

        for index, symbol in enumerate(commands[: min(upto, len(commands))]):
            action = table.lookup(symbol)
            if isinstance(action, Move):
                nx = x + math.cos(heading) * dist
                ny = y + math.sin(heading) * dist
                segments.append(LineSegment(x, y, nx, ny))
                x, y = nx, ny
            elif isinstance(action, Turn):
                heading = _wrap(heading + action.angle)
            elif isinstance(action, Push):
                stack.push(PenState(x, y, heading))
                heading = _wrap(heading + action.angle)
            elif isinstance(action, Pop):
                pose = stack.pop()
                if pose is not None:
                    x, y, heading = pose.x, pose.y, pose.heading
                elif self.strict_stack:
                    raise PoseStackUnderflow(f"pop on empty pose stack at command {index} ({symbol!r})")
                heading = _wrap(heading + action.angle)
            elif isinstance(action, Idle):
                continue
            else:
                raise TypeError(f"Unsupported action: {type(action)!r}")

        return TurtleReplay(segments=segments, pen=PenState(x, y, heading), stack_depth=len(stack))


def _wrap(heading: float) -> float:
    return heading % FULL_TURN
