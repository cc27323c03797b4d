from __future__ import annotations

import logging
import math
import time

import numpy as np

from .board import BoardState, is_solved, toggle

logger = logging.getLogger(__name__)

DEFAULT_CUTOFF = 0.35


def seed_threshold(seed: float, i: int) -> float:
    """Sine hash of (seed, i); fractional part keeps the sign of the product."""
    return math.fmod(math.sin(seed + i * 12.9898) * 43758.5453, 1.0)


def fallback_index(seed: float, N: int) -> int:
    return int(math.floor(math.fmod(abs(math.sin(seed) * N), N)))


def generate(
    seed: float, rows: int = 5, cols: int = 5, cutoff: float = DEFAULT_CUTOFF
) -> BoardState:
    """Deterministically build a non-solved board from ``seed``.

    Every board is composed of presses on the zero board, so the solver
    always finds a solution for it.
    """
    try:
        seed = float(seed)
    except OverflowError as exc:
        raise ValueError(f"Seed must be a finite number, got {seed!r}") from exc
    if not math.isfinite(seed):
        raise ValueError(f"Seed must be a finite number, got {seed!r}")

    board = BoardState(rows, cols)
    N = board.size
    toggles = 0
    for i in range(N):
        if abs(seed_threshold(seed, i)) > cutoff:
            board = toggle(board, i)
            toggles += 1

    if toggles == 0 or is_solved(board):
        idx = fallback_index(seed, N)
        logger.debug("Seed %r gave a trivial board after %d toggles, pressing %d", seed, toggles, idx)
        board = toggle(board, idx)

    logger.debug("Generated board for seed %r: %d toggles, %d lights on", seed, toggles, board.count_on())
    return board


def fresh_seed(rng: np.random.Generator | None = None) -> float:
    rng = rng or np.random.default_rng()
    return float(rng.random() * 1000 + time.time())
