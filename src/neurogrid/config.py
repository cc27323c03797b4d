from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from .generator import DEFAULT_CUTOFF


class ConfigError(ValueError):
    """Raised for malformed or out-of-range configuration values."""


@dataclass(frozen=True)
class PuzzleConfig:
    rows: int = 5
    cols: int = 5
    cutoff: float = DEFAULT_CUTOFF
    seed: Optional[float] = None

    def __post_init__(self):
        if self.rows <= 0 or self.cols <= 0:
            raise ConfigError(f"Board dimensions must be positive, got {self.rows}x{self.cols}")
        if not 0.0 <= self.cutoff < 1.0:
            raise ConfigError(f"Generator cutoff must lie in [0, 1), got {self.cutoff}")

    @property
    def size(self) -> int:
        return self.rows * self.cols

    @staticmethod
    def from_dict(cfg: dict | None) -> "PuzzleConfig":
        """Build from the ``puzzle:`` block of a config file."""
        cfg = cfg or {}
        if not isinstance(cfg, dict):
            raise ConfigError(f"Expected a mapping for 'puzzle', got {type(cfg).__name__}")
        board = cfg.get("board") or {}
        generator = cfg.get("generator") or {}
        try:
            rows = int(board.get("rows", 5))
            cols = int(board.get("cols", rows))
            cutoff = float(generator.get("cutoff", DEFAULT_CUTOFF))
            seed = cfg.get("seed", None)
            seed = None if seed is None else float(seed)
        except (TypeError, ValueError, AttributeError) as exc:
            raise ConfigError(f"Invalid puzzle config: {exc}") from exc
        return PuzzleConfig(rows=rows, cols=cols, cutoff=cutoff, seed=seed)

    def to_dict(self) -> dict:
        out: dict = {
            "board": {"rows": self.rows, "cols": self.cols},
            "generator": {"cutoff": self.cutoff},
        }
        if self.seed is not None:
            out["seed"] = self.seed
        return {"puzzle": out}


def load_config(path: str | Path | None = None) -> PuzzleConfig:
    if path is None:
        return PuzzleConfig()
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    return PuzzleConfig.from_dict(data.get("puzzle"))
