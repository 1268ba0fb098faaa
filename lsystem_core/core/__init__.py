from .actions import Action, ActionTable, Idle, Move, Pop, Push, Turn, parse_action
from .animation import AnimationController, AnimationState, FrameResult, render_frame
from .config import PRESETS, LSystemConfig, config_from_mapping, get_preset, load_config
from .display_runtime import DisplayRuntime, RenderTick
from .frame_rate_controller import FrameRateController
from .grammar import (
    DEFAULT_MAX_GENERATIONS,
    DEFAULT_MAX_SYMBOLS,
    GrammarEngine,
    ProductionSet,
    Rule,
    SequenceTooLarge,
    build_production_set,
    expand,
    expand_once,
    projected_length,
)
from .lsystem_runtime import LSystemRunResult, LSystemRuntime, LSystemSession, prepare_session
from .turtle import LineSegment, PenState, PoseStack, PoseStackUnderflow, TurtleInterpreter, TurtleReplay
from .viewport import PathBounds, ViewportFit, ViewportFitter
from .window_matrix import CallBlitEvent, WindowMatrix

__all__ = [
    "Action",
    "ActionTable",
    "AnimationController",
    "AnimationState",
    "CallBlitEvent",
    "DEFAULT_MAX_GENERATIONS",
    "DEFAULT_MAX_SYMBOLS",
    "DisplayRuntime",
    "FrameRateController",
    "FrameResult",
    "GrammarEngine",
    "Idle",
    "LSystemConfig",
    "LSystemRunResult",
    "LSystemRuntime",
    "LSystemSession",
    "LineSegment",
    "Move",
    "PRESETS",
    "PathBounds",
    "PenState",
    "Pop",
    "PoseStack",
    "PoseStackUnderflow",
    "ProductionSet",
    "Push",
    "RenderTick",
    "Rule",
    "SequenceTooLarge",
    "Turn",
    "TurtleInterpreter",
    "TurtleReplay",
    "ViewportFit",
    "ViewportFitter",
    "WindowMatrix",
    "build_production_set",
    "config_from_mapping",
    "expand",
    "expand_once",
    "get_preset",
    "load_config",
    "parse_action",
    "prepare_session",
    "projected_length",
    "render_frame",
]
