from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Mapping, TypeAlias


@dataclass(frozen=True)
class Move:
    pass


@dataclass(frozen=True)
class Turn:
    angle: float


@dataclass(frozen=True)
class Push:
    angle: float = 0.0


@dataclass(frozen=True)
class Pop:
    angle: float = 0.0


@dataclass(frozen=True)
class Idle:
    pass


Action: TypeAlias = Move | Turn | Push | Pop | Idle

MOVE = Move()
IDLE = Idle()

_DEFAULT_FACTORS = {"turn": 1.0, "push": 0.0, "pop": 0.0}


class ActionTable:
    """Symbol -> turtle action. Unknown symbols resolve to Idle."""

    def __init__(self, actions: Mapping[str, Action] | None = None) -> None:
        self._actions: dict[str, Action] = {}
        for symbol, action in (actions or {}).items():
            self.bind(symbol, action)

    def bind(self, symbol: str, action: Action) -> None:
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise ValueError(f"action symbol must be a single character, got {symbol!r}")
        if not isinstance(action, (Move, Turn, Push, Pop, Idle)):
            raise TypeError(f"Unsupported action: {type(action)!r}")
        self._actions[symbol] = action

    def lookup(self, symbol: str) -> Action:
        return self._actions.get(symbol, IDLE)

    def symbols(self) -> list[str]:
        return sorted(self._actions)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._actions

    def __len__(self) -> int:
        return len(self._actions)

    @classmethod
    def standard(cls, turn_angle: float) -> "ActionTable":
        """Classic plant table: F/G draw, +/- turn, [ ] save/restore, X placeholder."""
        return cls(
            {
                "F": MOVE,
                "G": MOVE,
                "+": Turn(-turn_angle),
                "-": Turn(turn_angle),
                "[": Push(0.0),
                "]": Pop(0.0),
                "X": IDLE,
            }
        )

    @classmethod
    def from_spec(cls, spec: Mapping[str, str], turn_angle: float) -> "ActionTable":
        """Parse `kind[:factor]` entries, e.g. {"F": "move", "+": "turn:-1", "]": "pop"}."""
        table = cls()
        for symbol, raw in spec.items():
            table.bind(symbol, parse_action(raw, turn_angle))
        return table


def parse_action(raw: str, turn_angle: float) -> Action:
    if not isinstance(raw, str):
        raise ValueError(f"action binding must be a string, got {raw!r}")
    kind, _, factor_text = raw.strip().lower().partition(":")
    if kind == "move":
        return MOVE
    if kind == "idle":
        return IDLE
    if kind not in _DEFAULT_FACTORS:
        raise ValueError(f"unknown action kind: {kind!r}")
    factor = _DEFAULT_FACTORS[kind]
    if factor_text:
        try:
            factor = float(factor_text)
        except ValueError as exc:
            raise ValueError(f"invalid angle factor in action binding: {raw!r}") from exc
        if not math.isfinite(factor):
            raise ValueError(f"angle factor must be finite: {raw!r}")
    angle = factor * turn_angle
    if kind == "turn":
        return Turn(angle)
    if kind == "push":
        return Push(angle)
    return Pop(angle)
