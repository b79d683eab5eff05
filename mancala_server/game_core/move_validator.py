# mancala_server/game_core/move_validator.py

from . import constants as c
from .errors import InvalidPit, WrongPitForPlayer, EmptyPit
from .utils import get_pit_range


def validate_pit_choice(board, player, pit_index):
    """
    Проверяет выбор лунки игроком.
    Порядок проверок важен: сначала границы доски и амбары,
    затем принадлежность лунки, затем наличие семян.
    Ничего не возвращает, при ошибке бросает исключение.
    """
    # bool - подкласс int, но ходом не является
    if isinstance(pit_index, bool) or not isinstance(pit_index, int):
        raise InvalidPit(f"Invalid pit index: {pit_index!r}. Must be an integer between 0 and 13.")

    if pit_index < 0 or pit_index >= c.BOARD_SIZE:
        raise InvalidPit(f"Invalid pit index: {pit_index}. Must be between 0 and 13.")

    if pit_index in (c.STORE_PLAYER_ONE, c.STORE_PLAYER_TWO):
        raise InvalidPit("Cannot move from store")

    own_pits = get_pit_range(player)
    if pit_index not in own_pits:
        raise WrongPitForPlayer(
            f"Invalid move: Player {player} can only move from pits "
            f"{own_pits.start}-{own_pits.stop - 1}, got {pit_index}"
        )

    if board[pit_index] == 0:
        raise EmptyPit("Invalid move: Pit is empty")
