"""CLI for running headless snake games."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Iterator

from snake_core.config import GameConfig
from snake_core.engine import GameEngine
from snake_core.grid import Direction
from snake_core.models import GamePhase, GameSnapshot
from snake_core.scheduler import AsyncioScheduler, ManualScheduler

logger = logging.getLogger(__name__)

_NO_INPUT = "."


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-sim",
        description="Run snake games without a UI.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (overrides other flags).",
    )
    common.add_argument("--columns", type=int, default=None)
    common.add_argument("--rows", type=int, default=None)
    common.add_argument("--seed", type=int, default=None)
    common.add_argument(
        "--moves", type=str, default="",
        help="One of U/D/L/R per tick, '.' for no input.",
    )
    common.add_argument("--max-ticks", type=int, default=1_000)

    sub.add_parser(
        "run", parents=[common],
        help="Tick as fast as possible and print the final state.",
    )

    live_p = sub.add_parser(
        "live", parents=[common],
        help="Tick in real time on an asyncio timer.",
    )
    live_p.add_argument(
        "--interval", type=float, default=None,
        help="Seconds between ticks.",
    )

    return parser


def _load_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.load(args.config) if args.config else GameConfig()

    overrides: dict = {}
    flag_map = {
        "columns": "columns",
        "rows": "rows",
        "interval": "tick_interval",
    }
    for cli_name, cfg_name in flag_map.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            overrides[cfg_name] = val

    if overrides:
        d = config.to_dict()
        d.update(overrides)
        config = GameConfig(**d)
    return config


def _parse_moves(moves: str) -> list[Direction | None]:
    return [
        None if ch == _NO_INPUT else Direction.from_name(ch)
        for ch in moves.replace(" ", "")
    ]


def _script(moves: list[Direction | None]) -> Iterator[Direction | None]:
    yield from moves
    while True:
        yield None


def _run_sync(args: argparse.Namespace) -> int:
    config = _load_config(args)
    scheduler = ManualScheduler()
    engine = GameEngine(config, scheduler=scheduler, seed=args.seed)
    script = _script(_parse_moves(args.moves))

    engine.start()
    for _ in range(args.max_ticks):
        direction = next(script)
        if direction is not None:
            engine.request_direction_change(direction)
        if not scheduler.fire():
            break

    print(json.dumps(engine.get_state(), indent=2))  # noqa: T201
    return 0


async def _run_live(engine: GameEngine, args: argparse.Namespace) -> None:
    scheduler = engine.scheduler
    assert isinstance(scheduler, AsyncioScheduler)  # noqa: S101
    script = _script(_parse_moves(args.moves))

    def on_snapshot(snapshot: GameSnapshot) -> None:
        logger.info(
            "tick=%d phase=%s score=%d head=(%d,%d)",
            snapshot.tick, snapshot.phase.value, snapshot.score,
            snapshot.head.x, snapshot.head.y,
        )
        if snapshot.tick >= args.max_ticks:
            engine.pause()
            return
        if snapshot.phase == GamePhase.PLAYING:
            direction = next(script)
            if direction is not None:
                engine.request_direction_change(direction)

    unsubscribe = engine.subscribe(on_snapshot)
    try:
        engine.start()
        await scheduler.wait_disarmed()
    finally:
        unsubscribe()
        scheduler.disarm()


def _run_realtime(args: argparse.Namespace) -> int:
    config = _load_config(args)
    engine = GameEngine(config, scheduler=AsyncioScheduler(), seed=args.seed)
    asyncio.run(_run_live(engine, args))
    print(json.dumps(engine.get_state(), indent=2))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-sim`` CLI."""
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
        "run": _run_sync,
        "live": _run_realtime,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
