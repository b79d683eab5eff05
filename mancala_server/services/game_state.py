# mancala_server/services/game_state.py

from typing import List, Dict, Any, NamedTuple, Optional, Union

from mancala_server.game_core import (
    create_initial_board_state,
    sow_seeds,
    PLAYER_ONE,
    STATUS_PLAYING,
    STATUS_FINISHED,
)


class GameState:
    """
    Простой класс-хранилище (DTO) для состояния одной партии.
    Конструктор - ЕДИНСТВЕННОЕ место, где создается начальное состояние,
    и первым всегда ходит игрок 1 (создатель комнаты).
    """
    def __init__(self):
        self.board: List[int] = create_initial_board_state()
        self.current_player: int = PLAYER_ONE
        self.status: str = STATUS_PLAYING
        self.winner: Optional[Union[int, str]] = None
        self.last_move: Optional[Dict[str, int]] = None

    @property
    def is_finished(self) -> bool:
        return self.status == STATUS_FINISHED

    def copy(self) -> 'GameState':
        clone = GameState.__new__(GameState)
        clone.board = list(self.board)
        clone.current_player = self.current_player
        clone.status = self.status
        clone.winner = self.winner
        clone.last_move = dict(self.last_move) if self.last_move else None
        return clone

    def to_dict(self) -> Dict[str, Any]:
        """Форма для отправки клиенту (camelCase)."""
        return {
            'board': list(self.board),
            'currentPlayer': self.current_player,
            'status': self.status,
            'winner': self.winner,
            'lastMove': dict(self.last_move) if self.last_move else None,
        }


class MoveResult(NamedTuple):
    new_state: GameState
    extra_turn: bool
    captured: bool
    game_over: bool
    winner: Optional[Union[int, str]]


def apply_move(state: GameState, pit_index: int) -> MoveResult:
    """
    Применяет ход текущего игрока и возвращает НОВОЕ состояние.
    Исходный state не меняется. Невалидный ход -> InvalidMove.
    """
    mover = state.current_player
    outcome = sow_seeds(state.board, pit_index, mover)

    new_state = state.copy()
    new_state.board = outcome.board
    new_state.current_player = outcome.next_player
    new_state.status = STATUS_FINISHED if outcome.game_over else STATUS_PLAYING
    new_state.winner = outcome.winner
    new_state.last_move = {'player': mover, 'pitIndex': pit_index}

    return MoveResult(
        new_state=new_state,
        extra_turn=outcome.extra_turn,
        captured=outcome.captured,
        game_over=outcome.game_over,
        winner=outcome.winner,
    )
