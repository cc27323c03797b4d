from neurogrid.algebra import ToggleMatrix, build_toggle_matrix, gf2_solve
from neurogrid.board import BoardState, OutOfRangeIndex, is_solved, toggle
from neurogrid.game import (
    GameSession,
    GameSnapshot,
    apply_move,
    current_solution,
    new_puzzle,
)
from neurogrid.generator import generate
from neurogrid.planner import plan
