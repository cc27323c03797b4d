from __future__ import annotations

from typing import Iterable, List, Tuple

import numpy as np

OFFSETS: Tuple[Tuple[int, int], ...] = ((0, 0), (1, 0), (-1, 0), (0, 1), (0, -1))


class OutOfRangeIndex(IndexError):
    """Raised when a cell index falls outside [0, N) for the board."""

    def __init__(self, index, size: int):
        super().__init__(f"Cell index {index!r} out of range for board of {size} cells")
        self.index = index
        self.size = size


def neighbors(rows: int, cols: int, r: int, c: int) -> List[Tuple[int, int]]:
    """Cells flipped by pressing (r, c): the cell itself plus in-bounds orthogonal neighbors."""
    out = []
    for dr, dc in OFFSETS:
        rr, cc = r + dr, c + dc
        if 0 <= rr < rows and 0 <= cc < cols:
            out.append((rr, cc))
    return out


class BoardState:
    """Immutable R x C lights-out board, stored row-major as 0/1 bytes."""

    def __init__(self, rows: int, cols: int, state: np.ndarray | None = None):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Board dimensions must be positive, got {rows}x{cols}")
        self.rows = int(rows)
        self.cols = int(cols)
        if state is None:
            grid = np.zeros((self.rows, self.cols), dtype=np.uint8)
        else:
            grid = np.asarray(state)
            if grid.size != self.rows * self.cols:
                raise ValueError(
                    f"Expected {self.rows * self.cols} cells, got shape {grid.shape}"
                )
            grid = (grid.reshape(self.rows, self.cols) % 2).astype(np.uint8, copy=True)
        grid.flags.writeable = False
        self.state = grid

    @property
    def size(self) -> int:
        return self.rows * self.cols

    def copy(self) -> "BoardState":
        return BoardState(self.rows, self.cols, self.state)

    def to_flat(self) -> np.ndarray:
        return self.state.reshape(-1)

    @staticmethod
    def from_flat(rows: int, cols: int, flat) -> "BoardState":
        return BoardState(rows, cols, np.asarray(flat).reshape(rows, cols))

    @staticmethod
    def from_rows(lines: Iterable[str]) -> "BoardState":
        """Parse rows such as ``["01100", "10000", ...]``."""
        grid = [[int(ch) for ch in line.strip()] for line in lines if line.strip()]
        if not grid:
            raise ValueError("Board needs at least one row")
        width = len(grid[0])
        if any(len(row) != width for row in grid):
            raise ValueError("All board rows must have the same length")
        if any(v not in (0, 1) for row in grid for v in row):
            raise ValueError("Board cells must be 0 or 1")
        return BoardState(len(grid), width, np.array(grid, dtype=np.uint8))

    def count_on(self) -> int:
        return int(self.state.sum())

    def __eq__(self, other) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return (self.rows, self.cols) == (other.rows, other.cols) and bool(
            np.array_equal(self.state, other.state)
        )

    def __hash__(self) -> int:
        return hash((self.rows, self.cols, self.state.tobytes()))

    def __repr__(self):
        return f"BoardState(rows={self.rows}, cols={self.cols}, on={self.count_on()})"

    def __str__(self) -> str:
        return "\n".join("".join("1" if cell else "0" for cell in row) for row in self.state)


def check_index(index, size: int) -> int:
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise OutOfRangeIndex(index, size)
    if not 0 <= index < size:
        raise OutOfRangeIndex(index, size)
    return int(index)


def toggle(board: BoardState, index: int) -> BoardState:
    """Return a new board with cell ``index`` and its orthogonal neighbors flipped."""
    idx = check_index(index, board.size)
    r, c = divmod(idx, board.cols)
    grid = board.state.copy()
    for rr, cc in neighbors(board.rows, board.cols, r, c):
        grid[rr, cc] ^= 1
    return BoardState(board.rows, board.cols, grid)


def is_solved(board: BoardState) -> bool:
    return not board.state.any()
