"""Gameplay entry points used by a presentation layer.

A presentation layer reads an immutable :class:`GameSnapshot` and calls
:func:`apply_move` or :func:`new_puzzle`; everything else is derived from
the snapshot's board on demand.
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional

import numpy as np

from . import board as _board
from .algebra import ToggleMatrix
from .board import BoardState, toggle
from .config import PuzzleConfig
from .generator import DEFAULT_CUTOFF, fresh_seed, generate
from .planner import plan

logger = logging.getLogger(__name__)


@lru_cache(maxsize=8)
def _topology(rows: int, cols: int) -> ToggleMatrix:
    return ToggleMatrix(rows, cols)


def default_topology(rows: int = 5, cols: int = 5) -> ToggleMatrix:
    """Shared read-only matrix for an R×C grid, built on first use."""
    return _topology(int(rows), int(cols))


@dataclass(frozen=True)
class GameSnapshot:
    board: BoardState
    moves: int = 0
    seed: Optional[float] = None

    @property
    def solved(self) -> bool:
        return is_solved(self.board)


def is_solved(board: BoardState) -> bool:
    return _board.is_solved(board)


def new_puzzle(
    seed: float,
    topology: ToggleMatrix | None = None,
    cutoff: float = DEFAULT_CUTOFF,
) -> GameSnapshot:
    topology = topology or default_topology()
    b = generate(seed, topology.rows, topology.cols, cutoff=cutoff)
    return GameSnapshot(board=b, moves=0, seed=float(seed))


def apply_move(snapshot: GameSnapshot, index: int) -> GameSnapshot:
    """Press ``index``; raises OutOfRangeIndex before touching anything."""
    nxt = toggle(snapshot.board, index)
    return dataclasses.replace(snapshot, board=nxt, moves=snapshot.moves + 1)


def current_solution(
    b: BoardState, topology: ToggleMatrix | None = None
) -> Optional[List[int]]:
    """Ordered plan for ``b``; [] when already solved, None when unsolvable."""
    topology = topology or default_topology(b.rows, b.cols)
    solution = topology.solve(b)
    if solution is None:
        return None
    return plan(np.flatnonzero(solution), topology.rows, topology.cols)


def hint(b: BoardState, topology: ToggleMatrix | None = None) -> Optional[int]:
    steps = current_solution(b, topology)
    if not steps:
        return None
    return steps[0]


def status(b: BoardState, topology: ToggleMatrix | None = None) -> str:
    steps = current_solution(b, topology)
    if steps is None:
        return "No Solution"
    if len(steps) == 0:
        return "Vector Solved"
    return f"Move {len(steps)}"


class GameSession:
    """Holds the current snapshot; every event swaps it for a new one."""

    def __init__(
        self,
        config: PuzzleConfig | None = None,
        rng: np.random.Generator | None = None,
    ):
        self.config = config or PuzzleConfig()
        self.topology = default_topology(self.config.rows, self.config.cols)
        self.rng = rng or np.random.default_rng()
        seed = self.config.seed if self.config.seed is not None else fresh_seed(self.rng)
        self.snapshot = new_puzzle(seed, self.topology, self.config.cutoff)

    @property
    def board(self) -> BoardState:
        return self.snapshot.board

    @property
    def moves(self) -> int:
        return self.snapshot.moves

    @property
    def solved(self) -> bool:
        return self.snapshot.solved

    @property
    def solution(self) -> Optional[List[int]]:
        return current_solution(self.snapshot.board, self.topology)

    @property
    def hint(self) -> Optional[int]:
        return hint(self.snapshot.board, self.topology)

    def play(self, index: int) -> GameSnapshot:
        self.snapshot = apply_move(self.snapshot, index)
        logger.debug("Move %d: pressed %d, %d lights on", self.moves, index, self.board.count_on())
        return self.snapshot

    def shuffle(self, seed: float | None = None) -> GameSnapshot:
        if seed is None:
            seed = fresh_seed(self.rng)
        self.snapshot = new_puzzle(seed, self.topology, self.config.cutoff)
        logger.debug("New puzzle from seed %r", seed)
        return self.snapshot
