import numpy as np
import pytest

from neurogrid.board import BoardState, OutOfRangeIndex, is_solved, neighbors, toggle


def test_zero_board_is_solved():
    b = BoardState(5, 5)
    assert is_solved(b)
    assert b.count_on() == 0
    assert b.to_flat().shape == (25,)


def test_toggle_center_flips_plus_shape():
    b = toggle(BoardState(5, 5), 12)
    assert set(np.flatnonzero(b.to_flat()).tolist()) == {7, 11, 12, 13, 17}
    assert not is_solved(b)


@pytest.mark.parametrize("index, expected", [(0, {0, 1, 5}), (2, {1, 2, 3, 7}), (24, {19, 23, 24})])
def test_toggle_respects_bounds(index, expected):
    b = toggle(BoardState(5, 5), index)
    assert set(np.flatnonzero(b.to_flat()).tolist()) == expected


def test_toggle_is_self_inverse(rng):
    for _ in range(20):
        b = BoardState.from_flat(5, 5, rng.integers(0, 2, 25))
        for i in range(25):
            assert toggle(toggle(b, i), i) == b


def test_toggle_returns_new_board():
    b = BoardState(5, 5)
    nb = toggle(b, 3)
    assert b.count_on() == 0
    assert nb is not b
    with pytest.raises(ValueError):
        nb.state[0, 0] = 1


@pytest.mark.parametrize("index", [25, -1, 100, 2.0, "3", True])
def test_toggle_rejects_bad_index(index):
    b = BoardState(5, 5)
    with pytest.raises(OutOfRangeIndex):
        toggle(b, index)


def test_out_of_range_is_index_error():
    with pytest.raises(IndexError, match=r"out of range"):
        toggle(BoardState(3, 3), 9)


def test_toggle_accepts_numpy_integer():
    b = toggle(BoardState(5, 5), np.int64(12))
    assert b == toggle(BoardState(5, 5), 12)


def test_rectangular_board_indexing():
    b = toggle(BoardState(2, 3), 5)
    assert str(b) == "001\n011"


def test_from_rows_and_str():
    rows = ["01100", "10000", "00000", "00001", "00011"]
    b = BoardState.from_rows(rows)
    assert str(b) == "\n".join(rows)
    assert b.count_on() == 6


def test_from_rows_rejects_ragged():
    with pytest.raises(ValueError, match=r"same length"):
        BoardState.from_rows(["010", "01"])
    with pytest.raises(ValueError):
        BoardState.from_rows(["012"])


def test_board_equality_and_hash():
    a = toggle(BoardState(5, 5), 6)
    b = toggle(BoardState(5, 5), 6)
    assert a == b
    assert hash(a) == hash(b)
    assert a != BoardState(5, 5)


def test_bad_dimensions():
    with pytest.raises(ValueError):
        BoardState(0, 5)
    with pytest.raises(ValueError, match=r"Expected 25 cells"):
        BoardState(5, 5, np.zeros(24))


def test_neighbors_corner_and_interior():
    assert sorted(neighbors(5, 5, 0, 0)) == [(0, 0), (0, 1), (1, 0)]
    assert len(neighbors(5, 5, 2, 2)) == 5
