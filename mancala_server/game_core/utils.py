# mancala_server/game_core/utils.py

from . import constants as c


def get_other_player(player):
    """Возвращает номер соперника (1 <-> 2)."""
    return c.PLAYER_TWO if player == c.PLAYER_ONE else c.PLAYER_ONE


def get_store_pos(player):
    """Возвращает индекс амбара игрока."""
    return c.STORE_PLAYER_ONE if player == c.PLAYER_ONE else c.STORE_PLAYER_TWO


def get_pit_range(player):
    """Возвращает диапазон лунок игрока."""
    return c.PITS_PLAYER_ONE if player == c.PLAYER_ONE else c.PITS_PLAYER_TWO


def get_opposite_pit(index):
    """
    Лунка напротив. Половины доски зеркальны относительно оси 12:
    0 <-> 12, 5 <-> 7. Для амбаров возвращает None.
    """
    if index in c.PITS_PLAYER_ONE or index in c.PITS_PLAYER_TWO:
        return c.OPPOSITE_AXIS - index
    return None


def is_own_pit(player, index):
    return index in get_pit_range(player)


def is_side_empty(board, player):
    """Проверяет, что все шесть лунок игрока пусты."""
    return all(board[i] == 0 for i in get_pit_range(player))


def get_available_moves(board, player):
    """Список непустых лунок игрока (по возрастанию индекса)."""
    return [i for i in get_pit_range(player) if board[i] > 0]


def get_winner(board):
    """Возвращает 1, 2 или 'tie' по содержимому амбаров."""
    store_one = board[c.STORE_PLAYER_ONE]
    store_two = board[c.STORE_PLAYER_TWO]
    if store_one > store_two:
        return c.PLAYER_ONE
    if store_two > store_one:
        return c.PLAYER_TWO
    return c.TIE
