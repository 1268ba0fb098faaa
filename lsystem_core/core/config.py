from __future__ import annotations

from dataclasses import dataclass, field, replace
import math
from pathlib import Path
import tomllib
from typing import Any, Literal

from .actions import ActionTable
from .grammar import DEFAULT_MAX_SYMBOLS, ProductionSet, build_production_set

FitMode = Literal["linear", "branching"]
RGBA = tuple[int, int, int, int]

_KNOWN_KEYS = {
    "name",
    "axiom",
    "generations",
    "turn_angle_deg",
    "step_length",
    "margin_fraction",
    "tick_interval_ms",
    "reveal_step",
    "width",
    "height",
    "title",
    "fit_mode",
    "strict_stack",
    "max_symbols",
    "background",
    "ink",
    "rules",
    "actions",
}


@dataclass(frozen=True)
class LSystemConfig:
    name: str
    axiom: str
    rules: dict[str, str]
    generations: int = 6
    turn_angle_deg: float = 25.0
    actions: dict[str, str] | None = None
    step_length: float = 1.0
    margin_fraction: float = 0.05
    tick_interval_ms: float = 5.0
    reveal_step: int = 1
    width: int = 800
    height: int = 600
    title: str = "L-System Generator"
    fit_mode: FitMode = "linear"
    strict_stack: bool = False
    max_symbols: int = DEFAULT_MAX_SYMBOLS
    background: RGBA = (255, 255, 255, 255)
    ink: RGBA = (0, 0, 0, 255)
    source: Path | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.axiom:
            raise ValueError("axiom must not be empty")
        if self.generations < 0:
            raise ValueError("generations must be >= 0")
        if not math.isfinite(self.turn_angle_deg):
            raise ValueError("turn_angle_deg must be finite")
        if not math.isfinite(self.step_length) or self.step_length <= 0:
            raise ValueError("step_length must be > 0")
        if not (0.0 <= self.margin_fraction < 0.5):
            raise ValueError("margin_fraction must satisfy 0 <= f < 0.5")
        if self.tick_interval_ms < 0:
            raise ValueError("tick_interval_ms must be >= 0")
        if self.reveal_step <= 0:
            raise ValueError("reveal_step must be > 0")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")
        if self.fit_mode not in ("linear", "branching"):
            raise ValueError(f"fit_mode must be 'linear' or 'branching', got {self.fit_mode!r}")
        if self.max_symbols <= 0:
            raise ValueError("max_symbols must be > 0")

    @property
    def turn_angle(self) -> float:
        return math.radians(self.turn_angle_deg)

    @property
    def tick_interval_s(self) -> float:
        return self.tick_interval_ms / 1000.0

    def productions(self) -> ProductionSet:
        return build_production_set(self.rules)

    def action_table(self) -> ActionTable:
        if self.actions is None:
            return ActionTable.standard(self.turn_angle)
        return ActionTable.from_spec(self.actions, self.turn_angle)

    def with_overrides(self, **overrides: Any) -> "LSystemConfig":
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})


def load_config(path: str | Path) -> LSystemConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"l-system config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    return config_from_mapping(raw, source=config_path)


def config_from_mapping(raw: dict[str, Any], *, source: Path | None = None) -> LSystemConfig:
    unknown = sorted(set(raw) - _KNOWN_KEYS)
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(unknown)}")
    try:
        name = _coerce_str(raw["name"], "name")
        axiom = _coerce_str(raw["axiom"], "axiom")
    except KeyError as exc:
        raise ValueError(f"config missing required field: {exc.args[0]}") from exc
    kwargs: dict[str, Any] = {
        "name": name,
        "axiom": axiom,
        "rules": _coerce_str_table(raw.get("rules", {}), "rules"),
        "source": source,
    }
    if "actions" in raw:
        kwargs["actions"] = _coerce_str_table(raw["actions"], "actions")
    for key in ("generations", "reveal_step", "width", "height", "max_symbols"):
        if key in raw:
            kwargs[key] = _coerce_int(raw[key], key)
    for key in ("turn_angle_deg", "step_length", "margin_fraction", "tick_interval_ms"):
        if key in raw:
            kwargs[key] = _coerce_float(raw[key], key)
    for key in ("title", "fit_mode"):
        if key in raw:
            kwargs[key] = _coerce_str(raw[key], key)
    if "strict_stack" in raw:
        kwargs["strict_stack"] = _coerce_bool(raw["strict_stack"], "strict_stack")
    for key in ("background", "ink"):
        if key in raw:
            kwargs[key] = _coerce_rgba(raw[key], key)
    return LSystemConfig(**kwargs)


PRESETS: dict[str, LSystemConfig] = {
    "fractal-plant": LSystemConfig(
        name="fractal-plant",
        axiom="+++X",
        rules={"X": "F+[[X]-X]-F[-FX]+X", "F": "FF"},
        generations=6,
        turn_angle_deg=25.0,
    ),
    "koch-curve": LSystemConfig(
        name="koch-curve",
        axiom="F",
        rules={"F": "F+F-F-F+F"},
        generations=4,
        turn_angle_deg=90.0,
        tick_interval_ms=2.0,
    ),
    "dragon-curve": LSystemConfig(
        name="dragon-curve",
        axiom="FX",
        rules={"X": "X+YF+", "Y": "-FX-Y"},
        generations=12,
        turn_angle_deg=90.0,
        actions={"F": "move", "+": "turn:-1", "-": "turn:1"},
        tick_interval_ms=1.0,
        reveal_step=4,
    ),
    "binary-tree": LSystemConfig(
        name="binary-tree",
        axiom="0",
        rules={"1": "11", "0": "1[0]0"},
        generations=6,
        turn_angle_deg=45.0,
        actions={"0": "move", "1": "move", "[": "push:-1", "]": "pop:1"},
        fit_mode="branching",
    ),
}


def get_preset(name: str) -> LSystemConfig:
    try:
        return PRESETS[name]
    except KeyError as exc:
        known = ", ".join(sorted(PRESETS))
        raise ValueError(f"unknown preset {name!r}; available: {known}") from exc


def _coerce_str(value: Any, label: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{label} must be a string")
    return value


def _coerce_int(value: Any, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{label} must be an integer")
    return value


def _coerce_float(value: Any, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{label} must be a number")
    return float(value)


def _coerce_bool(value: Any, label: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{label} must be a boolean")
    return value


def _coerce_str_table(value: Any, label: str) -> dict[str, str]:
    if not isinstance(value, dict):
        raise ValueError(f"{label} must be a table")
    out: dict[str, str] = {}
    for key, item in value.items():
        if not isinstance(item, str):
            raise ValueError(f"{label}.{key} must be a string")
        out[str(key)] = item
    return out


def _coerce_rgba(value: Any, label: str) -> RGBA:
    if not isinstance(value, list) or len(value) != 4:
        raise ValueError(f"{label} must be a list of 4 integers")
    channels = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, int) or not (0 <= item <= 255):
            raise ValueError(f"{label} channels must be integers in [0, 255]")
        channels.append(item)
    return (channels[0], channels[1], channels[2], channels[3])
