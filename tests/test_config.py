import pytest

from fourth_protocol.config import (DEFAULT_ROSTER, Config, Difficulty, EvalConfig, GameConfig,
                                    SearchConfig, load_config)
from fourth_protocol.utils import Kind


def test_defaults_are_valid():
    cfg = Config().validate()

    assert cfg.game.grid_size == 5
    assert cfg.game.win_length == 4
    assert cfg.game.roster == DEFAULT_ROSTER
    assert cfg.search.depth == 3
    assert cfg.search.use_pruning
    assert cfg.eval.center_bonus == "distance"


@pytest.mark.parametrize("section", [
    GameConfig(grid_size=3),
    GameConfig(win_length=1),
    GameConfig(roster=[]),
    GameConfig(grid_size=4, roster=[Kind.FROG] * 9),
    GameConfig(max_moves=0),
    SearchConfig(depth=0),
    SearchConfig(win_score=0),
    EvalConfig(center_bonus="corner"),
])
def test_invalid_sections_are_rejected(section):
    with pytest.raises(ValueError):
        section.validate()


@pytest.mark.parametrize("difficulty, depth, size", [
    (Difficulty.EASY, 2, 5),
    (Difficulty.MEDIUM, 3, 5),
    (Difficulty.HARD, 3, 7),
])
def test_difficulty_presets(difficulty, depth, size):
    cfg = Config.for_difficulty(difficulty)

    assert cfg.search.depth == depth
    assert cfg.game.grid_size == size


def test_missing_file_gives_defaults(tmp_path):
    cfg = Config.load_from_toml(str(tmp_path / "absent.toml"))

    assert cfg == Config()


def test_load_from_toml(tmp_path):
    path = tmp_path / "fourth_protocol.toml"
    path.write_text(
        'log_level = "DEBUG"\n'
        '[game]\n'
        'grid_size = 6\n'
        'roster = ["D", "snake", "L"]\n'
        'colour = "red"\n'
        '[search]\n'
        'depth = 2\n'
        'use_pruning = false\n'
        '[eval]\n'
        'center_bonus = "legacy"\n'
    )

    cfg = Config.load_from_toml(str(path))

    assert cfg.log_level == "DEBUG"
    assert cfg.game.grid_size == 6
    assert cfg.game.roster == [Kind.DONKEY, Kind.SNAKE, Kind.LION]
    assert not hasattr(cfg.game, "colour")
    assert cfg.search.depth == 2
    assert not cfg.search.use_pruning
    assert cfg.eval.center_bonus == "legacy"


def test_invalid_toml_values_raise(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text('[game]\ngrid_size = 3\n')

    with pytest.raises(ValueError):
        Config.load_from_toml(str(path))


def test_environment_overrides(tmp_path, monkeypatch):
    path = tmp_path / "custom.toml"
    path.write_text('[search]\ndepth = 4\n')
    monkeypatch.setenv("FOURTH_PROTOCOL_CONFIG", str(path))

    assert load_config().search.depth == 4

    monkeypatch.setenv("FOURTH_PROTOCOL_DEPTH", "1")
    assert load_config().search.depth == 1

    monkeypatch.setenv("FOURTH_PROTOCOL_DEPTH", "deep")
    assert load_config().search.depth == 4


@pytest.mark.parametrize("body", [
    '[game]\ngrid_size = "5"\n',
    '[game]\nroster = "FSDAL"\n',
    '[search]\nuse_pruning = 1\n',
    '[search]\ndepth = true\n',
    '[eval]\ncenter_bonus = 3\n',
])
def test_wrongly_typed_toml_values_raise_value_error(tmp_path, body):
    path = tmp_path / "typed.toml"
    path.write_text(body)

    with pytest.raises(ValueError):
        Config.load_from_toml(str(path))


def test_difficulty_overlays_loaded_file(tmp_path, monkeypatch):
    path = tmp_path / "custom.toml"
    path.write_text('[game]\nwin_length = 5\n[search]\nuse_pruning = false\n')
    monkeypatch.delenv("FOURTH_PROTOCOL_DEPTH", raising=False)

    cfg = load_config(str(path), Difficulty.HARD)

    assert cfg.game.grid_size == 7
    assert cfg.game.win_length == 5
    assert cfg.search.depth == 3
    assert not cfg.search.use_pruning
