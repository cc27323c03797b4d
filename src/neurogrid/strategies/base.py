from __future__ import annotations
from typing import Protocol
from ..algebra import ToggleMatrix
from ..board import BoardState


class NoPlanError(Exception):
    """Raised by a strategy when no valid plan exists for the given state."""

    pass


class Strategy(Protocol):
    def reset(self, topology: ToggleMatrix, params: dict | None = None): ...
    def select_action(self, state: BoardState, t: int, history) -> int: ...
