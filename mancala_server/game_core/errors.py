# mancala_server/game_core/errors.py


class GameError(Exception):
    """
    Базовая ошибка игровой логики.
    `code` уходит клиенту вместе с сообщением.
    """
    code = 'GAME_ERROR'

    def __init__(self, message: str = None):
        super().__init__(message or self.__class__.__doc__.strip())
        self.message = str(self.args[0])


class InvalidMove(GameError):
    """Invalid move"""
    code = 'INVALID_MOVE'


class InvalidPit(InvalidMove):
    """Invalid pit index"""
    code = 'INVALID_PIT'


class WrongPitForPlayer(InvalidMove):
    """Pit belongs to the opponent"""
    code = 'WRONG_PIT_FOR_PLAYER'


class EmptyPit(InvalidMove):
    """Invalid move: Pit is empty"""
    code = 'EMPTY_PIT'
