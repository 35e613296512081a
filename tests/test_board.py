import numpy as np
import pytest

from fourth_protocol.game.board import Board
from fourth_protocol.game.moves import Move
from fourth_protocol.utils import UNPLACED, Kind, Player

from tests.helpers import DONKEYS, build_board


def test_new_board_is_empty_with_full_pools():
    board = Board()

    assert board.size == 5
    assert board.win_length == 4
    assert not board.grid.any()
    assert board.positions(Player.ONE) == [(UNPLACED, UNPLACED)] * 5
    assert len(board.unplaced_pieces(Player.TWO)) == 5
    assert not board.all_placed()


def test_board_rejects_impossible_dimensions():
    with pytest.raises(ValueError):
        Board(size=3, win_length=4)
    with pytest.raises(ValueError):
        Board(size=2, roster=DONKEYS, win_length=2)


def test_place_writes_signed_token():
    board = Board()

    assert board.place(Player.ONE, 2, 1, 3)
    assert board.place(Player.TWO, 4, 3, 1)
    assert board.grid[1, 3] == 3
    assert board.grid[3, 1] == -5
    assert board.get_piece(Player.ONE, 2).position == (1, 3)
    assert board.piece_at(3, 1).kind == Kind.LION
    assert board.piece_at(0, 0) is None


@pytest.mark.parametrize("player, index, row, col", [
    (Player.TWO, 0, 2, 2),   # occupied cell
    (Player.ONE, 0, 0, 0),   # piece already placed
    (Player.ONE, 1, 5, 0),   # off the board
    (Player.ONE, 1, -1, 2),
])
def test_invalid_placement_leaves_board_untouched(player, index, row, col):
    board = build_board(one=[(2, 2)])
    before = board.copy()

    assert not board.place(player, index, row, col)
    assert board == before


def test_invalid_relocation_leaves_board_untouched():
    board = build_board(one=[(0, 0), (0, 1), (2, 2)])
    before = board.copy()

    assert not board.move_piece(Player.ONE, 2, 3, 3)   # donkey cannot go diagonally
    assert not board.move_piece(Player.ONE, 2, 0, 2)   # out of reach
    assert not board.move_piece(Player.ONE, 3, 1, 1)   # antelope still in the pool
    assert not board.make_move(Player.ONE, Move(2, 1, 1, 1, 2))  # wrong source
    assert board == before


def test_move_piece_relocates():
    board = build_board(one=[(0, 0), (0, 1), (2, 2)])

    assert board.move_piece(Player.ONE, 2, 2, 3)
    assert board.grid[2, 2] == 0
    assert board.grid[2, 3] == 3
    assert board.get_piece(Player.ONE, 2).position == (2, 3)


def test_out_of_range_piece_index_raises():
    board = Board()

    with pytest.raises(IndexError):
        board.get_piece(Player.ONE, 5)
    with pytest.raises(IndexError):
        board.place(Player.ONE, 99, 0, 0)


def test_apply_and_undo_restore_grid_and_positions():
    board = build_board(one=[(0, 0), (1, 1), (2, 2)], two=[(4, 4)])
    before = board.copy()
    moves = [Move.placement(3, 3, 3), Move(2, 2, 2, 2, 3)]

    for move in moves:
        board.apply_move(Player.ONE, move)
        assert board != before
        board.undo_move(Player.ONE, move)
        assert board == before
        assert np.array_equal(board.grid, before.grid)


def test_applied_undoes_when_block_raises():
    board = build_board(one=[(0, 0)])
    before = board.copy()

    with pytest.raises(RuntimeError):
        with board.applied(Player.ONE, Move.placement(1, 4, 4)):
            assert board.grid[4, 4] == 2
            raise RuntimeError("abort")

    assert board == before


def test_copy_is_independent():
    board = build_board(one=[(0, 0)], two=[(1, 1)])
    twin = board.copy()

    assert twin == board
    twin.place(Player.ONE, 1, 3, 3)
    assert twin != board
    assert board.is_empty(3, 3)


def test_from_grid_places_tokens():
    grid = np.zeros((5, 5), dtype=int)
    grid[0, 0] = 1
    grid[4, 4] = -3
    board = Board.from_grid(grid)

    assert board.get_piece(Player.ONE, 0).position == (0, 0)
    assert board.get_piece(Player.TWO, 2).position == (4, 4)
    assert len(board.placed_pieces(Player.ONE)) == 1


def test_from_grid_rejects_bad_tokens():
    grid = np.zeros((5, 5), dtype=int)
    grid[0, 0] = grid[1, 1] = 2
    with pytest.raises(ValueError):
        Board.from_grid(grid)

    grid = np.zeros((5, 5), dtype=int)
    grid[0, 0] = 9
    with pytest.raises(IndexError):
        Board.from_grid(grid)


LINES = {
    "horizontal": [[(0, 0), (0, 1), (0, 2), (0, 3)], [(4, 1), (4, 2), (4, 3), (4, 4)]],
    "vertical": [[(0, 2), (1, 2), (2, 2), (3, 2)], [(1, 4), (2, 4), (3, 4), (4, 4)]],
    "diagonal_down": [[(0, 0), (1, 1), (2, 2), (3, 3)], [(1, 1), (2, 2), (3, 3), (4, 4)]],
    "diagonal_up": [[(3, 0), (2, 1), (1, 2), (0, 3)], [(4, 1), (3, 2), (2, 3), (1, 4)]],
}


@pytest.mark.parametrize("cells", [cells for group in LINES.values() for cells in group],
                         ids=[f"{name}-{i}" for name, group in LINES.items() for i in range(len(group))])
@pytest.mark.parametrize("player", [Player.ONE, Player.TWO])
def test_four_in_a_row_wins(cells, player):
    if player == Player.ONE:
        board = build_board(one=cells)
    else:
        board = build_board(two=cells)

    assert board.has_won(player)
    assert not board.has_won(player.other())
    assert sorted(board.get_winning_line(player)) == sorted(cells)


@pytest.mark.parametrize("one, two", [
    ([(0, 0), (0, 1), (0, 2)], []),                    # three in a row
    ([(0, 0), (0, 1), (0, 3), (0, 4)], []),            # broken line
    ([(0, 0), (0, 1), (0, 2)], [(0, 3)]),              # mixed sides
    ([(0, 3), (0, 4), (1, 0), (1, 1)], []),            # no wrapping across rows
    ([(0, 0), (1, 1), (2, 2), (4, 4)], []),
])
def test_no_win_without_contiguous_line(one, two):
    board = build_board(one=one, two=two)

    assert not board.has_won(Player.ONE)
    assert not board.has_won(Player.TWO)
    assert board.get_winning_line(Player.ONE) == []


def test_render_shows_kind_letters():
    board = build_board(one=[(0, 0)], two=[(1, 1)])

    text = board.render()
    assert "F" in text
    assert "f" in text
    assert str(board) == text
