import numpy as np
import pytest

from fourth_protocol.utils import (Kind, Player, count_in_line, find_winning_line, has_won,
                                   parse_grid, render_board_ascii)


def grid_with(one=(), two=(), size=5):
    grid = np.zeros((size, size), dtype=int)
    for i, (r, c) in enumerate(one):
        grid[r, c] = i + 1
    for i, (r, c) in enumerate(two):
        grid[r, c] = -(i + 1)
    return grid


def test_player_helpers():
    assert Player.ONE.other() == Player.TWO
    assert Player.TWO.other() == Player.ONE
    assert Player.ONE.token(0) == 1
    assert Player.TWO.token(3) == -4
    assert Player.owner(-2) == Player.TWO
    assert Player.owner(0) == Player.EMPTY


@pytest.mark.parametrize("text, kind", [
    ("F", Kind.FROG), ("s", Kind.SNAKE), ("donkey", Kind.DONKEY), (" A ", Kind.ANTELOPE), ("Lion", Kind.LION),
])
def test_kind_parse(text, kind):
    assert Kind.parse(text) == kind


def test_kind_parse_rejects_unknown():
    with pytest.raises(ValueError):
        Kind.parse("Q")


def test_count_in_line_counts_both_directions():
    grid = grid_with(one=[(2, 0), (2, 1), (2, 2)], two=[(2, 3)])

    assert count_in_line(grid, 2, 1, 0, 1) == 3
    assert count_in_line(grid, 2, 1, 1, 0) == 1
    assert count_in_line(grid, 2, 3, 0, 1) == 1
    assert count_in_line(grid, 0, 0, 0, 1) == 0


def test_count_in_line_follows_diagonals():
    grid = grid_with(two=[(4, 0), (3, 1), (2, 2)])

    assert count_in_line(grid, 3, 1, -1, 1) == 3
    assert count_in_line(grid, 3, 1, 1, 1) == 1


def test_find_winning_line_returns_cells_in_order():
    grid = grid_with(one=[(1, 4), (2, 4), (3, 4), (4, 4)])

    assert find_winning_line(grid, Player.ONE) == [(1, 4), (2, 4), (3, 4), (4, 4)]
    assert find_winning_line(grid, Player.TWO) == []


def test_has_won_respects_win_length():
    grid = grid_with(two=[(0, 0), (1, 1), (2, 2)])

    assert not has_won(grid, Player.TWO)
    assert has_won(grid, Player.TWO, win_length=3)


def test_parse_grid_infers_size():
    grid = parse_grid("1,0,0,0, 0,-1,0,0, 0,0,0,0, 0,0,0,2")

    assert grid.shape == (4, 4)
    assert grid[1, 1] == -1
    assert grid[3, 3] == 2


def test_parse_grid_rejects_wrong_count():
    with pytest.raises(ValueError):
        parse_grid("1,2,3", size=2)


def test_render_board_ascii_defaults_to_player_marks():
    text = render_board_ascii(grid_with(one=[(0, 0)], two=[(0, 1)], size=4))
    lines = text.splitlines()

    assert lines[0] == "   0 1 2 3"
    assert lines[2] == " 0|X O . .|"
