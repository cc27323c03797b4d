from __future__ import annotations

import argparse
import logging
import sys

from .board import BoardState
from .config import PuzzleConfig, load_config
from .game import GameSession, current_solution, default_topology, status
from .generator import fresh_seed, generate
from .planner import format_plan
from .simulator import Simulator
from .strategies import PlanFollowing

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _seed(args, cfg: PuzzleConfig) -> float:
    if args.seed is not None:
        return args.seed
    if cfg.seed is not None:
        return cfg.seed
    return fresh_seed()


def cmd_new(args, cfg: PuzzleConfig) -> int:
    seed = _seed(args, cfg)
    board = generate(seed, cfg.rows, cfg.cols, cutoff=cfg.cutoff)
    print(f"seed: {seed!r}")
    print(board)
    print(status(board, default_topology(cfg.rows, cfg.cols)))
    return 0


def cmd_solve(args, cfg: PuzzleConfig) -> int:
    if args.board:
        board = BoardState.from_rows(args.board)
    else:
        board = generate(_seed(args, cfg), cfg.rows, cfg.cols, cutoff=cfg.cutoff)
    steps = current_solution(board, default_topology(board.rows, board.cols))
    print(board)
    if steps is None:
        print("No Solution")
        return 1
    if not steps:
        print("Vector Solved")
        return 0
    for line in format_plan(steps, board.cols):
        print(line)
    return 0


def cmd_autoplay(args, cfg: PuzzleConfig) -> int:
    seed = _seed(args, cfg)
    session = GameSession(PuzzleConfig(cfg.rows, cfg.cols, cfg.cutoff, seed))
    policy = PlanFollowing()
    policy.reset(session.topology)
    final, actions, counts = Simulator(session.topology).run(
        session.board, policy, T=session.topology.N
    )
    for a in actions:
        session.play(a)
    print(f"seed: {seed!r}")
    print(f"presses: {' '.join(str(a) for a in actions) or '-'}")
    print(f"lights on: {' -> '.join(str(c) for c in counts)}")
    print("solved" if session.solved else "unsolved")
    return 0 if session.solved else 1


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="neurogrid", description="Lights-out puzzle engine")
    ap.add_argument("--config", default=None, help="YAML config file")
    ap.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    p_new = sub.add_parser("new", help="Generate a puzzle")
    p_new.add_argument("--seed", type=float, default=None)
    p_new.set_defaults(func=cmd_new)

    p_solve = sub.add_parser("solve", help="Print the ordered solution plan")
    p_solve.add_argument("--seed", type=float, default=None)
    p_solve.add_argument("--board", nargs="+", default=None, help="Board rows, e.g. 01100 10000")
    p_solve.set_defaults(func=cmd_solve)

    p_auto = sub.add_parser("autoplay", help="Let the strategist solve a puzzle")
    p_auto.add_argument("--seed", type=float, default=None)
    p_auto.set_defaults(func=cmd_autoplay)
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        cfg = load_config(args.config)
        return args.func(args, cfg)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
