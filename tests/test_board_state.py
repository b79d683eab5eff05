import random

import pytest

from mancala_server.game_core import (
    TIE,
    TOTAL_SEEDS,
    EmptyPit,
    InvalidMove,
    InvalidPit,
    WrongPitForPlayer,
    collect_remaining_seeds,
    create_initial_board_state,
    get_available_moves,
    get_opposite_pit,
    sow_seeds,
)


def test_initial_board():
    board = create_initial_board_state()
    assert board == [4, 4, 4, 4, 4, 4, 0, 4, 4, 4, 4, 4, 4, 0]
    assert sum(board) == TOTAL_SEEDS


def test_simple_sow_passes_turn():
    board = [4, 4, 4, 4, 4, 4, 0, 4, 4, 4, 4, 4, 4, 0]
    outcome = sow_seeds(board, 0, 1)

    assert outcome.board == [0, 5, 5, 5, 5, 4, 0, 4, 4, 4, 4, 4, 4, 0]
    assert outcome.next_player == 2
    assert outcome.extra_turn is False
    assert outcome.captured is False
    assert outcome.game_over is False
    assert outcome.winner is None


def test_sow_does_not_mutate_input():
    board = create_initial_board_state()
    sow_seeds(board, 2, 1)
    assert board == create_initial_board_state()


def test_last_seed_in_own_store_grants_extra_turn():
    board = [0, 0, 4, 0, 0, 0, 0, 4, 4, 4, 4, 4, 4, 0]
    outcome = sow_seeds(board, 2, 1)

    assert outcome.board == [0, 0, 0, 1, 1, 1, 1, 4, 4, 4, 4, 4, 4, 0]
    assert outcome.extra_turn is True
    assert outcome.next_player == 1


def test_capture_from_opposite_pit():
    board = [0, 0, 0, 0, 1, 0, 0, 7, 0, 0, 0, 0, 0, 0]
    outcome = sow_seeds(board, 4, 1)

    assert outcome.captured is True
    assert outcome.board[6] == 8
    assert outcome.board[5] == 0
    assert outcome.board[7] == 0
    # Обе стороны пусты -> партия окончена
    assert outcome.game_over is True
    assert outcome.winner == 1


def test_no_capture_when_opposite_pit_empty():
    board = [0, 0, 0, 0, 1, 0, 0, 0, 3, 0, 0, 0, 0, 0]
    outcome = sow_seeds(board, 4, 1)

    assert outcome.captured is False
    assert outcome.board[5] == 1
    assert outcome.board[6] == 0


def test_no_capture_on_opponent_side():
    # Последнее семя игрока 1 падает в пустую лунку 7 (сторона соперника)
    board = [1, 0, 0, 0, 0, 2, 0, 0, 1, 1, 1, 1, 1, 0]
    outcome = sow_seeds(board, 5, 1)

    assert outcome.captured is False
    assert outcome.board[7] == 1
    assert outcome.board[5] == 0


def test_player_two_capture():
    board = [1, 0, 0, 0, 5, 0, 0, 1, 0, 0, 0, 0, 2, 0]
    outcome = sow_seeds(board, 7, 2)

    # 7 -> 8 (была пустой), напротив лунка 4 с 5 семенами
    assert outcome.captured is True
    assert outcome.board[13] == 6
    assert outcome.board[4] == 0
    assert outcome.board[8] == 0
    assert outcome.next_player == 1


def test_player_one_skips_opponent_store():
    board = [1, 1, 1, 1, 1, 10, 0, 1, 1, 1, 1, 1, 1, 0]
    outcome = sow_seeds(board, 5, 1)

    # 10 семян: 6, 7..12, (13 пропущен), 0, 1, 2
    assert outcome.board[13] == 0
    assert outcome.board[6] == 1
    assert outcome.board[0] == 2
    assert outcome.board[2] == 2
    assert outcome.captured is False
    assert sum(outcome.board) == sum(board)


def test_player_two_skips_opponent_store():
    board = [1, 1, 1, 1, 1, 1, 0, 1, 1, 1, 1, 1, 10, 0]
    outcome = sow_seeds(board, 12, 2)

    # 10 семян: 13, 0..5, (6 пропущен), 7, 8, 9
    assert outcome.board[6] == 0
    assert outcome.board[13] == 1
    assert outcome.board[7] == 2
    assert outcome.board[9] == 2
    assert outcome.captured is False
    assert sum(outcome.board) == sum(board)


def test_collect_remaining_seeds_sweeps_other_side():
    board = [0, 0, 0, 0, 0, 0, 20, 1, 2, 3, 1, 1, 1, 19]
    assert collect_remaining_seeds(board) is True
    assert board == [0, 0, 0, 0, 0, 0, 20, 0, 0, 0, 0, 0, 0, 28]


def test_collect_remaining_seeds_no_empty_side():
    board = create_initial_board_state()
    assert collect_remaining_seeds(board) is False
    assert board == create_initial_board_state()


def test_game_over_after_last_seed_leaves_side():
    board = [0, 0, 0, 0, 0, 1, 23, 4, 4, 4, 4, 4, 4, 0]
    outcome = sow_seeds(board, 5, 1)

    assert outcome.game_over is True
    assert outcome.board[6] == 24
    assert outcome.board[13] == 24
    assert outcome.winner == TIE


@pytest.mark.parametrize("pit, expected", [(0, 12), (5, 7), (7, 5), (12, 0), (6, None), (13, None)])
def test_opposite_pit(pit, expected):
    assert get_opposite_pit(pit) == expected


@pytest.mark.parametrize("pit", [-1, 14, 100, "3", None, 2.0, True])
def test_invalid_pit_index(pit):
    with pytest.raises(InvalidPit):
        sow_seeds(create_initial_board_state(), pit, 1)


@pytest.mark.parametrize("pit", [6, 13])
def test_cannot_move_from_store(pit):
    with pytest.raises(InvalidPit) as exc_info:
        sow_seeds(create_initial_board_state(), pit, 1)
    assert "store" in exc_info.value.message


def test_wrong_pit_for_player():
    with pytest.raises(WrongPitForPlayer) as exc_info:
        sow_seeds(create_initial_board_state(), 8, 1)
    assert exc_info.value.code == 'WRONG_PIT_FOR_PLAYER'

    with pytest.raises(WrongPitForPlayer):
        sow_seeds(create_initial_board_state(), 3, 2)


def test_empty_pit():
    board = create_initial_board_state()
    board[3] = 0
    with pytest.raises(EmptyPit) as exc_info:
        sow_seeds(board, 3, 1)
    assert exc_info.value.message == "Invalid move: Pit is empty"
    # Все ошибки хода - подклассы InvalidMove
    assert isinstance(exc_info.value, InvalidMove)


def test_seed_conservation_over_random_playouts():
    rng = random.Random(1234)
    for _ in range(50):
        board = create_initial_board_state()
        player = 1
        for _ in range(300):
            moves = get_available_moves(board, player)
            if not moves:
                break
            outcome = sow_seeds(board, rng.choice(moves), player)
            assert sum(outcome.board) == TOTAL_SEEDS
            assert all(v >= 0 for v in outcome.board)
            board, player = outcome.board, outcome.next_player
            if outcome.game_over:
                assert all(board[i] == 0 for i in range(0, 6)) or all(board[i] == 0 for i in range(7, 13))
                break
