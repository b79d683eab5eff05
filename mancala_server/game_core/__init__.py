# mancala_server/game_core/__init__.py

# Создаем "публичный API" для вашего game_core
from .constants import (
    PLAYER_ONE, PLAYER_TWO, TIE, TOTAL_SEEDS,
    STATUS_PLAYING, STATUS_FINISHED, DIFFICULTIES
)

from .errors import (
    GameError,
    InvalidMove,
    InvalidPit,
    WrongPitForPlayer,
    EmptyPit
)

from .board_state import (
    MoveOutcome,
    create_initial_board_state,
    sow_seeds,
    collect_remaining_seeds
)

from .move_validator import (
    validate_pit_choice
)

from .search import (
    select_move
)

from .utils import (
    get_other_player,
    get_store_pos,
    get_pit_range,
    get_opposite_pit,
    get_available_moves,
    is_side_empty,
    get_winner
)
