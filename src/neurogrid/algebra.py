from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import numpy as np

from .board import BoardState, neighbors

logger = logging.getLogger(__name__)


def build_toggle_matrix(rows: int, cols: int) -> np.ndarray:
    """Return the N×N toggle matrix M over GF(2) for an R×C grid.
    Column j encodes the cells flipped when pressing cell j, so
    M[i, j] = 1 iff pressing j flips i.
    """
    if rows <= 0 or cols <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
    N = rows * cols
    M = np.zeros((N, N), dtype=np.uint8)

    def idx(r, c):
        return r * cols + c

    for r in range(rows):
        for c in range(cols):
            j = idx(r, c)
            for rr, cc in neighbors(rows, cols, r, c):
                M[idx(rr, cc), j] = 1
    return M


def gf2_rref_augmented(
    A: np.ndarray, b: np.ndarray
) -> Tuple[np.ndarray, np.ndarray, int]:
    """Return RREF of augmented matrix [A|b] over GF(2).

    Returns:
        M: reduced augmented matrix, shape (m, n+1)
        pivots: per-row pivot column, -1 for rows without a pivot
        rank: number of pivot rows (they occupy rows 0..rank-1)
    """
    A = np.asarray(A)
    b = np.asarray(b)
    if A.ndim != 2:
        raise ValueError(f"Expected a 2-D matrix, got shape {A.shape}")
    m, n = A.shape
    if b.reshape(-1).shape[0] != m:
        raise ValueError(f"Target of length {b.size} does not match {m} rows")
    M = np.concatenate(
        [(A % 2).astype(np.uint8), (b % 2).astype(np.uint8).reshape(-1, 1)],
        axis=1,
    )

    pivots = np.full(m, -1, dtype=np.int64)
    row = 0
    for col in range(n):
        if row == m:
            break
        # first row in/under current row with a 1 in this column
        pivot = None
        for r in range(row, m):
            if M[r, col]:
                pivot = r
                break
        if pivot is None:
            continue
        if pivot != row:
            M[[row, pivot]] = M[[pivot, row]]
        pivots[row] = col
        # eliminate ALL other rows (Gauss-Jordan)
        for r in range(m):
            if r != row and M[r, col]:
                M[r, :] ^= M[row, :]
        row += 1
    return M, pivots, row


def gf2_solve(A: np.ndarray, b: np.ndarray) -> Optional[np.ndarray]:
    """Solve A x = b over GF(2) with free variables fixed to 0.

    Returns the canonical solution (length n, uint8) or None if inconsistent.
    """
    R, pivots, rank = gf2_rref_augmented(A, b)
    n = R.shape[1] - 1
    R_A = R[:, :n]
    R_b = R[:, n]

    # 0...0 | 1 rows below the pivot rows
    for r in range(rank, R.shape[0]):
        if not R_A[r].any() and R_b[r] == 1:
            logger.debug("Inconsistent system: rank=%d, zero row %d has target 1", rank, r)
            return None

    x = np.zeros((n,), dtype=np.uint8)
    for ri in range(rank - 1, -1, -1):
        pc = int(pivots[ri])
        # x_pc = r_b ^ sum_{j>pc} R_A[ri, j]*x_j
        rhs = int(R_b[ri])
        if pc + 1 < n:
            rhs ^= int(np.bitwise_and(R_A[ri, pc + 1 :], x[pc + 1 :]).sum() % 2)
        x[pc] = rhs
    return x


def gf2_rank(A: np.ndarray) -> int:
    A = np.asarray(A)
    _, _, rank = gf2_rref_augmented(A, np.zeros(A.shape[0], dtype=np.uint8))
    return rank


def gf2_nullspace(A: np.ndarray) -> List[np.ndarray]:
    """Basis of {v : A v = 0} over GF(2), one vector per free column."""
    A = np.asarray(A)
    n = A.shape[1]
    R, pivots, rank = gf2_rref_augmented(A, np.zeros(A.shape[0], dtype=np.uint8))
    R_A = R[:, :n]
    pivcols = [int(p) for p in pivots[:rank]]

    # for each free column f, set x_f=1, others free=0; solve pivot vars
    frees = [j for j in range(n) if j not in pivcols]
    basis: list[np.ndarray] = []
    for f in frees:
        v = np.zeros((n,), dtype=np.uint8)
        v[f] = 1
        for ri in range(rank - 1, -1, -1):
            pc = pivcols[ri]
            rhs = 0
            if pc + 1 < n:
                rhs ^= int(np.bitwise_and(R_A[ri, pc + 1 :], v[pc + 1 :]).sum() % 2)
            v[pc] = rhs
        basis.append(v)
    return basis


class ToggleMatrix:
    """Read-only toggle matrix for one grid, built once and shared."""

    def __init__(self, rows: int = 5, cols: int = 5):
        self.rows = int(rows)
        self.cols = int(cols)
        self.N = self.rows * self.cols
        M = build_toggle_matrix(self.rows, self.cols)
        M.flags.writeable = False
        self.matrix = M
        quiet = gf2_nullspace(M)
        for v in quiet:
            v.flags.writeable = False
        self.quiet_patterns: Tuple[np.ndarray, ...] = tuple(quiet)
        self.rank = self.N - len(quiet)
        logger.debug(
            "Built %dx%d toggle matrix: rank=%d nullity=%d",
            self.rows, self.cols, self.rank, len(quiet),
        )

    @property
    def nullity(self) -> int:
        return len(self.quiet_patterns)

    def _target(self, board: BoardState | np.ndarray) -> np.ndarray:
        if isinstance(board, BoardState):
            if (board.rows, board.cols) != (self.rows, self.cols):
                raise ValueError(
                    f"Board is {board.rows}x{board.cols}, matrix is {self.rows}x{self.cols}"
                )
            return board.to_flat()
        target = np.asarray(board, dtype=np.uint8).reshape(-1)
        if target.shape[0] != self.N:
            raise ValueError(f"Expected {self.N} cells, got {target.shape[0]}")
        return target

    def solve(self, board: BoardState | np.ndarray) -> Optional[np.ndarray]:
        return gf2_solve(self.matrix, self._target(board))

    def is_solvable(self, board: BoardState | np.ndarray) -> bool:
        """M is symmetric, so its image is the orthogonal complement of its nullspace."""
        target = self._target(board)
        return all(
            int(np.bitwise_and(q, target).sum()) % 2 == 0 for q in self.quiet_patterns
        )

    def apply(self, solution) -> BoardState:
        """Board obtained by pressing every cell of ``solution`` on the zero board."""
        x = self._target(solution)
        flat = (self.matrix.astype(np.int64) @ x.astype(np.int64)) % 2
        return BoardState.from_flat(self.rows, self.cols, flat)

    def __repr__(self):
        return f"ToggleMatrix(rows={self.rows}, cols={self.cols}, rank={self.rank})"
