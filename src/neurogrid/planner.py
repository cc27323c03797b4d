from __future__ import annotations

from typing import Iterable, List


def center_distance(rows: int, cols: int, i: int) -> float:
    """Manhattan distance of cell i from the grid center (half-integer on even sides)."""
    r, c = divmod(i, cols)
    return abs(r - (rows - 1) / 2) + abs(c - (cols - 1) / 2)


def plan(cells: Iterable[int], rows: int = 5, cols: int = 5) -> List[int]:
    """Order the cells to press from the center outwards.

    ``cells`` holds cell indices, e.g. ``np.flatnonzero(solution)``. Ties are
    broken by row, then column. Presses commute, so any order clears the board.
    """
    N = rows * cols
    cells = sorted({int(i) for i in cells})
    for i in cells:
        if not 0 <= i < N:
            raise ValueError(f"Cell index {i} out of range for a {rows}x{cols} grid")
    return sorted(
        cells,
        key=lambda i: (center_distance(rows, cols, i), i // cols, i % cols),
    )


def describe_step(index: int, cols: int = 5) -> str:
    r, c = divmod(index, cols)
    return f"Toggle node [{r + 1}, {c + 1}]"


def format_plan(steps: Iterable[int], cols: int = 5) -> List[str]:
    return [
        f"Step {order}: {describe_step(index, cols)}"
        for order, index in enumerate(steps, start=1)
    ]
