from __future__ import annotations

from typing import Optional

import numpy as np

from ..algebra import ToggleMatrix
from ..board import BoardState, is_solved
from ..planner import plan
from .base import NoPlanError, Strategy


class PlanFollowing(Strategy):
    """
    Solve the board at each step and press the first cell of the ordered plan.
    Replans after every move based on the current state.
    """

    def __init__(self):
        self.topology: Optional[ToggleMatrix] = None

    def reset(self, topology: ToggleMatrix, params: dict | None = None) -> None:
        self.topology = topology

    def select_action(self, state: BoardState, t: int, history) -> int:
        assert (
            self.topology is not None
        ), "PlanFollowing: topology not set, call reset() first"

        if is_solved(state):
            raise NoPlanError("PlanFollowing: board already solved.")
        solution = self.topology.solve(state)
        if solution is None:
            raise NoPlanError("PlanFollowing: no solution for this board.")
        steps = plan(np.flatnonzero(solution), self.topology.rows, self.topology.cols)
        return steps[0]


class FixedPlan(Strategy):
    """Solve once for the initial board and replay the ordered plan."""

    def __init__(self):
        self.plan: list[int] | None = None
        self.topology: Optional[ToggleMatrix] = None

    def reset(self, topology: ToggleMatrix, params: dict | None = None) -> None:
        self.topology = topology
        self.plan = None

    def _compute_plan(self, state: BoardState) -> None:
        assert self.topology is not None, "Strategy not initialized properly."
        solution = self.topology.solve(state)
        if solution is None:
            self.plan = []
            return
        self.plan = plan(np.flatnonzero(solution), self.topology.rows, self.topology.cols)

    def select_action(self, state: BoardState, t: int, history) -> int:
        if self.plan is None:
            self._compute_plan(state)

        if self.plan is None or len(self.plan) == 0:
            raise NoPlanError("No valid plan for this board.")
        return int(self.plan.pop(0))
