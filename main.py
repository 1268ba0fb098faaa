from __future__ import annotations

import argparse
from collections import Counter
import json
import logging
from pathlib import Path
import sys

from lsystem_core.core import (
    PRESETS,
    GrammarEngine,
    LSystemConfig,
    LSystemRuntime,
    PoseStackUnderflow,
    SequenceTooLarge,
    get_preset,
    load_config,
    prepare_session,
)
from lsystem_core.targets import HeadlessTarget, RenderTarget, WindowTarget

LOGGER = logging.getLogger("lsystem")

DEFAULT_HEADLESS_TICKS = 100_000


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lsystem")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Reveal an L-system on a display surface.")
    _add_source_args(run)
    run.add_argument("--render", choices=["headless", "window"], default="window")
    run.add_argument(
        "--ticks",
        type=int,
        default=None,
        help="Max loop ticks. Default: until the window closes; headless stops once the reveal completes.",
    )
    run.add_argument("--fps", type=int, default=60)
    run.add_argument("--width", type=int, default=None)
    run.add_argument("--height", type=int, default=None)
    run.add_argument("--reveal-step", type=int, default=None)
    run.add_argument("--tick-interval-ms", type=float, default=None)
    run.add_argument("--fit-mode", choices=["linear", "branching"], default=None)
    run.add_argument("--strict-stack", action="store_true", default=None)

    exp = sub.add_parser("expand", help="Print the expanded symbol sequence.")
    _add_source_args(exp)
    exp.add_argument("--stats", action="store_true", help="Print length and symbol counts instead of the sequence.")

    sub.add_parser("presets", help="List built-in presets.")
    return parser


def _add_source_args(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--preset", default=None, choices=sorted(PRESETS))
    source.add_argument("--config", type=Path, default=None, help="TOML l-system definition.")
    parser.add_argument("--generations", type=int, default=None)


def resolve_config(args: argparse.Namespace) -> LSystemConfig:
    if args.config is not None:
        config = load_config(args.config)
    else:
        config = get_preset(args.preset or "fractal-plant")
    overrides = {"generations": args.generations}
    if args.command == "run":
        overrides.update(
            width=args.width,
            height=args.height,
            reveal_step=args.reveal_step,
            tick_interval_ms=args.tick_interval_ms,
            fit_mode=args.fit_mode,
            strict_stack=args.strict_stack,
        )
    return config.with_overrides(**overrides)


def build_target(render: str, config: LSystemConfig) -> RenderTarget:
    if render == "headless":
        return HeadlessTarget()
    from lsystem_core.platform import MatplotlibPresenter

    return WindowTarget(presenter=MatplotlibPresenter(width=config.width, height=config.height, title=config.title))


def _skip_sleep(_seconds: float) -> None:
    return None


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "presets":
        for name in sorted(PRESETS):
            preset = PRESETS[name]
            print(f"{name}: axiom={preset.axiom!r} generations={preset.generations} angle={preset.turn_angle_deg:g}")
        return 0

    try:
        config = resolve_config(args)
        if args.command == "expand":
            engine = GrammarEngine(max_symbols=config.max_symbols)
            sequence = engine.expand(config.axiom, config.productions(), config.generations)
            if args.stats:
                counts = dict(Counter(sequence))
                print(json.dumps({"length": len(sequence), "symbols": counts}, indent=2, sort_keys=True))
            else:
                print(sequence)
            return 0

        if args.command == "run":
            headless = args.render == "headless"
            if headless and args.tick_interval_ms is None:
                # Headless runs advance the reveal on every tick.
                config = config.with_overrides(tick_interval_ms=0.0)
            LOGGER.info("running %r on %s target", config.name, args.render)
            session = prepare_session(config)
            target = build_target(args.render, config)
            max_ticks = args.ticks
            if max_ticks is None and headless:
                max_ticks = DEFAULT_HEADLESS_TICKS
            runtime = LSystemRuntime(target, sleep=_skip_sleep) if headless else LSystemRuntime(target)
            result = runtime.run(
                session,
                max_ticks=max_ticks,
                target_fps=args.fps,
                stop_when_complete=headless,
            )
            print(
                f"run complete: ticks={result.ticks_run} frames={result.frames_presented} "
                f"cursor={result.final_cursor}/{result.sequence_length} "
                f"stopped_by_target_close={result.stopped_by_target_close}"
            )
            return 0
    except (SequenceTooLarge, PoseStackUnderflow, ValueError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    raise RuntimeError(f"unsupported command: {args.command}")


if __name__ == "__main__":
    sys.exit(main())
