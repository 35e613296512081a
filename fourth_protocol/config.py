# fourth_protocol/config.py
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional
import os
import tomllib

from fourth_protocol.debug import debug
from fourth_protocol.utils import DEFAULT_GRID_SIZE, WIN_LENGTH, Kind

DEFAULT_ROSTER = [Kind.FROG, Kind.SNAKE, Kind.DONKEY, Kind.ANTELOPE, Kind.LION]
CENTER_BONUS_MODES = ("distance", "legacy", "none")


@dataclass
class GameConfig:
    grid_size: int = DEFAULT_GRID_SIZE
    win_length: int = WIN_LENGTH
    roster: List[Kind] = field(default_factory=lambda: list(DEFAULT_ROSTER))
    max_moves: int = 200  # game is drawn after this many plies

    def validate(self) -> None:
        if self.win_length < 2:
            raise ValueError(f"win_length must be at least 2, got {self.win_length}")
        if self.grid_size < self.win_length:
            raise ValueError(
                f"grid_size {self.grid_size} is smaller than win_length {self.win_length}")
        if not self.roster:
            raise ValueError("roster must contain at least one piece")
        if 2 * len(self.roster) > self.grid_size * self.grid_size:
            raise ValueError(
                f"{len(self.roster)} pieces per side do not fit on a "
                f"{self.grid_size}x{self.grid_size} grid")
        if self.max_moves < 1:
            raise ValueError(f"max_moves must be positive, got {self.max_moves}")


@dataclass
class SearchConfig:
    depth: int = 3
    use_pruning: bool = True
    win_score: int = 10000  # terminal scores are offset by remaining depth

    def validate(self) -> None:
        if self.depth < 1:
            raise ValueError(f"search depth must be at least 1, got {self.depth}")
        if self.win_score <= 0:
            raise ValueError(f"win_score must be positive, got {self.win_score}")


@dataclass
class EvalConfig:
    line_weight: int = 10  # multiplied by run_length ** 2
    center_bonus: str = "distance"  # "distance", "legacy" or "none"

    def validate(self) -> None:
        if self.center_bonus not in CENTER_BONUS_MODES:
            raise ValueError(
                f"center_bonus must be one of {CENTER_BONUS_MODES}, got {self.center_bonus!r}")


class Difficulty(Enum):
    EASY = "easy"      # 2 plies on 5x5
    MEDIUM = "medium"  # 3 plies on 5x5
    HARD = "hard"      # 3 plies on 7x7


DIFFICULTY_PRESETS: Dict[Difficulty, Dict[str, int]] = {
    Difficulty.EASY: {"depth": 2, "grid_size": 5},
    Difficulty.MEDIUM: {"depth": 3, "grid_size": 5},
    Difficulty.HARD: {"depth": 3, "grid_size": 7},
}


@dataclass
class Config:
    game: GameConfig = field(default_factory=GameConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    log_level: str = "WARNING"

    def validate(self) -> "Config":
        self.game.validate()
        self.search.validate()
        self.eval.validate()
        return self

    def apply_difficulty(self, difficulty: Difficulty) -> "Config":
        """Overlay a preset's depth and grid size, keeping every other setting."""
        preset = DIFFICULTY_PRESETS[difficulty]
        self.search.depth = preset["depth"]
        self.game.grid_size = preset["grid_size"]
        return self

    @staticmethod
    def for_difficulty(difficulty: Difficulty) -> "Config":
        return Config().apply_difficulty(difficulty).validate()

    @staticmethod
    def load_from_toml(path: str = "fourth_protocol.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        debug.info(f"Loading configuration from {path}", "config")

        _merge_section(cfg.game, raw.get("game", {}))
        _merge_section(cfg.search, raw.get("search", {}))
        _merge_section(cfg.eval, raw.get("eval", {}))
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"])
        return cfg.validate()


def _merge_section(section: Any, values: Dict[str, Any]) -> None:
    types = {f.name: f.type for f in fields(section)}
    for key, value in values.items():
        if key not in types:
            debug.warning(f"Ignoring unknown config key '{key}'", "config")
            continue
        if key == "roster":
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ValueError(f"roster must be a list of piece names, got {value!r}")
            value = [Kind.parse(v) for v in value]
        # bool is a subclass of int, so it is checked separately
        elif isinstance(value, bool) != (types[key] is bool) or not isinstance(value, types[key]):
            raise ValueError(f"{key} must be {types[key].__name__}, got {value!r}")
        setattr(section, key, value)


def load_config(path: Optional[str] = None,
                difficulty: Optional[Difficulty] = None) -> Config:
    """
    Load the configuration, honouring the environment overrides.

    A difficulty preset is applied on top of the file before the
    FOURTH_PROTOCOL_DEPTH override.
    """
    cfg = Config.load_from_toml(path or os.environ.get("FOURTH_PROTOCOL_CONFIG", "fourth_protocol.toml"))
    if difficulty is not None:
        cfg.apply_difficulty(difficulty)
    override_depth = os.environ.get("FOURTH_PROTOCOL_DEPTH")
    if override_depth:
        try:
            cfg.search.depth = int(override_depth)
        except ValueError:
            debug.warning(f"Ignoring non-integer FOURTH_PROTOCOL_DEPTH={override_depth!r}", "config")
    return cfg.validate()
