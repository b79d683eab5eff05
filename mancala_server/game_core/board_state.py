# mancala_server/game_core/board_state.py

from typing import List, NamedTuple, Optional, Union

from . import constants as c
from .move_validator import validate_pit_choice
from .utils import (
    get_other_player,
    get_store_pos,
    get_pit_range,
    get_opposite_pit,
    is_own_pit,
    is_side_empty,
    get_winner,
)


class MoveOutcome(NamedTuple):
    """Результат посева на уровне доски (без GameState)."""
    board: List[int]
    next_player: int
    extra_turn: bool
    captured: bool
    game_over: bool
    winner: Optional[Union[int, str]]


def create_initial_board_state():
    """
    Создает доску, используя константы правил.
    """
    board = [0] * c.BOARD_SIZE
    for i in list(c.PITS_PLAYER_ONE) + list(c.PITS_PLAYER_TWO):
        board[i] = c.SEEDS_PER_PIT
    return board


def collect_remaining_seeds(board):
    """
    Проверка конца партии. Если одна из сторон пуста, вторая сторона
    сгребает свои семена в свой амбар. Меняет переданную доску.
    Возвращает True, если партия окончена.
    """
    for player in (c.PLAYER_ONE, c.PLAYER_TWO):
        if not is_side_empty(board, player):
            continue

        other = get_other_player(player)
        other_store = get_store_pos(other)
        for i in get_pit_range(other):
            board[other_store] += board[i]
            board[i] = 0
        return True

    return False


def sow_seeds(board, pit_index, player):
    """
    Применяет ОДИН ход к копии доски и возвращает MoveOutcome.
    Исходная доска не меняется. Невалидный ход -> InvalidMove.
    """
    validate_pit_choice(board, player, pit_index)

    new_board = list(board)
    own_store = get_store_pos(player)
    opponent_store = get_store_pos(get_other_player(player))

    seeds = new_board[pit_index]
    new_board[pit_index] = 0

    current = pit_index
    while seeds > 0:
        current = (current + 1) % c.BOARD_SIZE
        if current == opponent_store:
            continue
        new_board[current] += 1
        seeds -= 1

    extra_turn = False
    captured = False

    if current == own_store:
        extra_turn = True

    elif is_own_pit(player, current) and new_board[current] == 1:
        opposite = get_opposite_pit(current)
        if new_board[opposite] > 0:
            new_board[own_store] += new_board[opposite] + 1
            new_board[opposite] = 0
            new_board[current] = 0
            captured = True

    game_over = collect_remaining_seeds(new_board)
    winner = get_winner(new_board) if game_over else None

    return MoveOutcome(
        board=new_board,
        next_player=player if extra_turn else get_other_player(player),
        extra_turn=extra_turn,
        captured=captured,
        game_over=game_over,
        winner=winner,
    )
