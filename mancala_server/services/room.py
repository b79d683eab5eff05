# mancala_server/services/room.py

import threading
import time
from typing import Optional, Dict, Any

from mancala_server.game_core import PLAYER_ONE, PLAYER_TWO
from .game_state import GameState


def now_ms() -> int:
    return int(time.time() * 1000)


def _normalize_id(player_id) -> str:
    return str(player_id).strip() if player_id is not None else ''


class Room:
    """
    Комната: два игрока и одна общая партия.
    Все изменения комнаты выполняются под `self.lock`.
    """
    # Поля, которые можно менять через RoomRegistry.update_room
    UPDATABLE_FIELDS = ('player2_id', 'player2_name', 'game_state')

    def __init__(self, room_id: str, code: str, player1_id: str, player1_name: str, created_at: int = None):
        self.id = room_id
        self.code = code
        self.player1_id: str = player1_id
        self.player1_name: str = player1_name
        self.player2_id: Optional[str] = None
        self.player2_name: Optional[str] = None
        self.game_state: Optional[GameState] = None

        self.created_at = created_at if created_at is not None else now_ms()
        self.last_activity_at = self.created_at

        self.lock = threading.RLock()

    # --- Хелперы ---

    @property
    def is_full(self) -> bool:
        return bool(self.player1_id) and bool(self.player2_id)

    def touch(self, at: int = None):
        self.last_activity_at = at if at is not None else now_ms()

    def get_player_number(self, player_id) -> Optional[int]:
        """
        Номер игрока (1/2) по точному совпадению id без пробелов по краям.
        None, если игрок не из этой комнаты.
        """
        normalized = _normalize_id(player_id)
        if not normalized:
            return None
        if normalized == _normalize_id(self.player1_id):
            return PLAYER_ONE
        if normalized == _normalize_id(self.player2_id):
            return PLAYER_TWO
        return None

    def has_player(self, player_id) -> bool:
        return self.get_player_number(player_id) is not None

    def to_dict(self) -> Dict[str, Any]:
        with self.lock:
            return {
                'id': self.id,
                'code': self.code,
                'player1Id': self.player1_id,
                'player2Id': self.player2_id,
                'player1Name': self.player1_name,
                'player2Name': self.player2_name,
                'gameState': self.game_state.to_dict() if self.game_state else None,
                'createdAt': self.created_at,
                'lastActivityAt': self.last_activity_at,
            }
