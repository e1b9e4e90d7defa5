"""Command-line tools for headless Retro Snake runs."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from retro_snake.config import EngineConfig
from retro_snake.engine import SimulationEngine
from retro_snake.snake import Direction

logger = logging.getLogger(__name__)

_MOVE_CODES: dict[str, Direction | None] = {
    "U": Direction.UP,
    "D": Direction.DOWN,
    "L": Direction.LEFT,
    "R": Direction.RIGHT,
    ".": None,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="retro-snake",
        description="Retro Snake simulation tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Run a scripted game and print the final state.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON engine config file.",
    )
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument("--grid-width", type=int, default=None)
    sim_p.add_argument("--grid-height", type=int, default=None)
    sim_p.add_argument(
        "--moves", type=str, default="",
        help="One character per tick: U, D, L, R, or '.' to keep heading.",
    )
    sim_p.add_argument("--max-ticks", type=int, default=1_000)

    # --- config ---
    cfg_p = sub.add_parser("config", help="Print the engine config as JSON.")
    cfg_p.add_argument("--config", type=str, default=None)

    return parser


def _load_config(args: argparse.Namespace) -> EngineConfig:
    config = EngineConfig.load(args.config) if args.config else EngineConfig()
    overrides = {
        name: getattr(args, name)
        for name in ("grid_width", "grid_height")
        if getattr(args, name, None) is not None
    }
    if overrides:
        d = config.to_dict()
        d.update(overrides)
        config = EngineConfig(**d)
    return config


def parse_moves(moves: str) -> list[Direction | None]:
    """Decode a move script such as ``"RRD.L"``."""
    decoded: list[Direction | None] = []
    for ch in moves.upper():
        if ch.isspace():
            continue
        if ch not in _MOVE_CODES:
            raise ValueError(f"Invalid move code: {ch!r}.")
        decoded.append(_MOVE_CODES[ch])
    return decoded


def _run_simulate(args: argparse.Namespace) -> int:
    config = _load_config(args)
    moves = parse_moves(args.moves)
    engine = SimulationEngine(config, seed=args.seed)
    engine.start()

    for i in range(args.max_ticks):
        if engine.is_over():
            break
        move = moves[i] if i < len(moves) else None
        if move is not None:
            engine.set_direction(move)
        engine.tick()

    snapshot = engine.snapshot()
    logger.info(
        "Simulation finished: phase=%s score=%d ticks=%d.",
        snapshot.phase.value, snapshot.score, snapshot.ticks,
    )
    print(json.dumps(snapshot.to_dict(), indent=2))  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    config = EngineConfig.load(args.config) if args.config else EngineConfig()
    print(json.dumps(config.to_dict(), indent=2))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``retro-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
