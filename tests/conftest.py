# tests/conftest.py
import sys
from pathlib import Path

import numpy as np
import pytest

# Add src/ to sys.path so "neurogrid" imports without an install
SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from neurogrid.algebra import ToggleMatrix  # noqa: E402
from neurogrid.board import BoardState  # noqa: E402


@pytest.fixture(scope="session")
def topology5() -> ToggleMatrix:
    return ToggleMatrix(5, 5)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def center_board() -> BoardState:
    return BoardState.from_rows(["00000", "00100", "01110", "00100", "00000"])


@pytest.fixture
def corner_board() -> BoardState:
    return BoardState.from_rows(["10000", "00000", "00000", "00000", "00000"])
