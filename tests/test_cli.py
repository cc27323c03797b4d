import pytest

from neurogrid.cli import main
from neurogrid.generator import generate


def test_new_prints_board(capsys):
    assert main(["new", "--seed", "42"]) == 0
    out = capsys.readouterr().out
    assert "seed: 42.0" in out
    assert str(generate(42.0)) in out
    assert "Move " in out


def test_solve_board_argument(capsys):
    rows = ["00000", "00100", "01110", "00100", "00000"]
    assert main(["solve", "--board", *rows]) == 0
    out = capsys.readouterr().out
    assert "Step 1: Toggle node [3, 3]" in out
    assert "Step 2" not in out


def test_solve_unsolvable_board(capsys):
    rows = ["10000", "00000", "00000", "00000", "00000"]
    assert main(["solve", "--board", *rows]) == 1
    assert "No Solution" in capsys.readouterr().out


def test_solve_solved_board(capsys):
    assert main(["solve", "--board", "000", "000", "000"]) == 0
    assert "Vector Solved" in capsys.readouterr().out


def test_autoplay(capsys):
    assert main(["autoplay", "--seed", "5"]) == 0
    out = capsys.readouterr().out
    assert out.strip().splitlines()[-1] == "solved"
    assert "-> 0" in out


def test_config_file_changes_grid(tmp_path, capsys):
    path = tmp_path / "cfg.yaml"
    path.write_text("puzzle:\n  board: {rows: 3, cols: 4}\n  seed: 8\n", encoding="utf-8")
    assert main(["--config", str(path), "new"]) == 0
    out = capsys.readouterr().out
    assert str(generate(8.0, 3, 4)) in out


def test_bad_config_exits_with_error(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("puzzle:\n  board: {rows: -2}\n", encoding="utf-8")
    assert main(["--config", str(path), "new", "--seed", "1"]) == 2


def test_log_level_is_case_insensitive(capsys):
    assert main(["--log-level", "debug", "new", "--seed", "3"]) == 0
    assert "seed: 3.0" in capsys.readouterr().out


def test_unknown_log_level_is_rejected(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--log-level", "LOUD", "new", "--seed", "3"])
    assert exc.value.code == 2
    assert "invalid choice" in capsys.readouterr().err
