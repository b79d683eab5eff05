# mancala_server/services/errors.py
"""
Ошибки слоя сессий. Все наследуются от GameError,
поэтому у каждой есть `code` для ответа клиенту.
"""

from mancala_server.game_core import GameError


class RoomNotFound(GameError):
    """Room not found"""
    code = 'ROOM_NOT_FOUND'


class RoomFull(GameError):
    """Room is full"""
    code = 'ROOM_FULL'


class GameNotStarted(GameError):
    """Game not started yet"""
    code = 'GAME_NOT_STARTED'


class PlayerNotIdentifiable(GameError):
    """Cannot identify player. Please refresh and try again."""
    code = 'PLAYER_NOT_IDENTIFIABLE'


class NotYourTurn(GameError):
    """It's not your turn!"""
    code = 'NOT_YOUR_TURN'

    def __init__(self, expected_player: int, actual_player: int):
        super().__init__(
            f"It's not your turn! Current player is {expected_player}, "
            f"but you are player {actual_player}"
        )
        self.expected_player = expected_player
        self.actual_player = actual_player


class CodeGenerationExhausted(GameError):
    """Failed to generate unique room code"""
    code = 'ROOM_CODE_EXHAUSTED'
