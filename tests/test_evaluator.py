import pytest

from fourth_protocol.ai.evaluator import BoardEvaluator, center_bonus
from fourth_protocol.config import EvalConfig
from fourth_protocol.game.board import Board
from fourth_protocol.utils import Player

from tests.helpers import build_board

LINES_ONLY = EvalConfig(center_bonus="none")


def test_empty_board_scores_zero():
    evaluator = BoardEvaluator()

    assert evaluator.evaluate(Board(), Player.ONE) == 0


def test_single_piece_scores_each_axis():
    board = build_board(one=[(2, 2)])
    evaluator = BoardEvaluator(LINES_ONLY)

    assert evaluator.evaluate(board, Player.ONE) == 4 * 1 * 10
    assert evaluator.evaluate(board, Player.TWO) == -40


def test_runs_are_squared_for_every_member():
    board = build_board(one=[(0, 0), (0, 1)])
    evaluator = BoardEvaluator(LINES_ONLY)

    # each piece: horizontal run 2 -> 40, three single axes -> 30
    assert evaluator.piece_score(board, 0, 0) == 70
    assert evaluator.evaluate(board, Player.ONE) == 140


def test_opponent_pieces_break_runs():
    board = build_board(one=[(0, 0), (0, 2)], two=[(0, 1)])
    evaluator = BoardEvaluator(LINES_ONLY)

    assert evaluator.player_total(board, Player.ONE) == 80
    assert evaluator.player_total(board, Player.TWO) == 40
    assert evaluator.evaluate(board, Player.ONE) == 40


def test_evaluation_is_antisymmetric():
    board = build_board(one=[(0, 0), (1, 1), (3, 2)], two=[(2, 2), (2, 3), (4, 0)])
    evaluator = BoardEvaluator()

    assert evaluator.evaluate(board, Player.ONE) == -evaluator.evaluate(board, Player.TWO)


def test_line_weight_scales_the_line_term():
    board = build_board(one=[(0, 0), (0, 1)])
    evaluator = BoardEvaluator(EvalConfig(line_weight=1, center_bonus="none"))

    assert evaluator.evaluate(board, Player.ONE) == 14


@pytest.mark.parametrize("row, col, expected", [
    (2, 2, 4), (0, 0, 0), (1, 2, 3), (4, 4, 0), (0, 2, 2),
])
def test_distance_center_bonus(row, col, expected):
    assert center_bonus(row, col, 5, "distance") == expected


@pytest.mark.parametrize("row, col, expected", [
    (0, 0, 0), (1, 1, 2), (2, 2, 4), (4, 4, 0), (1, 2, 3),
])
def test_legacy_center_bonus(row, col, expected):
    assert center_bonus(row, col, 5, "legacy") == expected


def test_center_bonus_added_per_piece():
    board = build_board(one=[(2, 2)])

    assert BoardEvaluator().evaluate(board, Player.ONE) == 44
    assert BoardEvaluator(EvalConfig(center_bonus="legacy")).evaluate(board, Player.ONE) == 44
    assert center_bonus(2, 2, 5, "none") == 0


def test_unknown_center_bonus_mode_is_rejected():
    with pytest.raises(ValueError):
        BoardEvaluator(EvalConfig(center_bonus="middle"))
