# mancala_server/services/room_registry.py

import random
import string
import threading
import uuid
from typing import Optional, Dict, List, Callable, Tuple

from .game_state import GameState
from .room import Room, now_ms
from .room_backend import InMemoryRoomBackend
from .errors import RoomNotFound, RoomFull, CodeGenerationExhausted

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_room_code(length: int = 6) -> str:
    """Короткий код комнаты из латинских букв и цифр."""
    return ''.join(random.choices(ROOM_CODE_ALPHABET, k=length))


def normalize_code(code) -> str:
    return str(code or '').strip().upper()


class RoomRegistry:
    """
    Отвечает ИСКЛЮЧИТЕЛЬНО за хранение комнат и их жизненный цикл
    (создание, вход второго игрока, обновление, очистка).
    Потокобезопасен.

    Порядок блокировок: room.lock -> self.lock. Реестр никогда
    не ждет room.lock, удерживая self.lock.
    """
    def __init__(
        self,
        log_event_func: Callable = None,
        backend: InMemoryRoomBackend = None,
        code_generator: Callable[[int], str] = None,
        code_length: int = 6,
        max_code_attempts: int = 100,
        retention_sec: int = 60 * 60,
        clock: Callable[[], int] = None
    ):
        self.backend = backend or InMemoryRoomBackend()
        self.code_to_room_id: Dict[str, str] = {}

        self.code_generator = code_generator or generate_room_code
        self.code_length = code_length
        self.max_code_attempts = max_code_attempts
        self.retention_ms = retention_sec * 1000
        self.clock = clock or now_ms

        self.lock = threading.RLock()
        self.log_event = log_event_func or (lambda *args, **kwargs: None)

    # --- Создание ---

    def create_room(self, player1_id: str, player1_name: str) -> Room:
        """
        Создает комнату с уникальным кодом.
        После `max_code_attempts` коллизий - CodeGenerationExhausted.
        """
        with self.lock:
            code = None
            for _ in range(self.max_code_attempts):
                candidate = normalize_code(self.code_generator(self.code_length))
                if candidate and candidate not in self.code_to_room_id:
                    code = candidate
                    break

            if code is None:
                self.log_event(
                    "ROOM_CODE_EXHAUSTED",
                    f"No unique room code after {self.max_code_attempts} attempts. Rooms: {self.backend.count()}"
                )
                raise CodeGenerationExhausted()

            room = Room(str(uuid.uuid4()), code, player1_id, player1_name, created_at=self.clock())
            self.backend.put(room)
            self.code_to_room_id[code] = room.id

            self.log_event("ROOM_CREATE", f"Комната {code} создана игроком {player1_name}. Всего комнат: {self.backend.count()}", room_id=room.id)
            return room

    # --- Вход второго игрока ---

    def join_room(self, code: str, player_id: str, player_name: str) -> Tuple[Room, bool]:
        """
        Привязывает игрока к комнате по коду.

        Возвращает (room, game_started):
        - повторный вход уже привязанного игрока ничего не меняет -> (room, False);
        - вход второго игрока создает партию ровно один раз -> (room, True).
        """
        room = self.get_room_by_code(code)
        if not room:
            self.log_event("ROOM_JOIN_FAIL", f"Room with code {code!r} not found.")
            raise RoomNotFound()

        with room.lock:
            if room.has_player(player_id):
                self.log_event("ROOM_REJOIN", f"Player {player_id} already in room {room.code}.", room_id=room.id)
                return room, False

            if room.player2_id:
                self.log_event("ROOM_FULL", f"Player {player_id} rejected: room {room.code} is full.", room_id=room.id)
                raise RoomFull()

            room.player2_id = player_id
            room.player2_name = player_name
            room.touch(self.clock())

            game_started = False
            # Единственная точка инициализации партии
            if room.is_full and room.game_state is None:
                room.game_state = GameState()
                game_started = True
                self.log_event(
                    "GAME_INIT",
                    f"Game initialized: {room.player1_name} vs {room.player2_name}, first move: player {room.game_state.current_player}",
                    room_id=room.id
                )

            self.log_event("ROOM_JOIN", f"Игрок {player_name} вошел в комнату {room.code}.", room_id=room.id)
            return room, game_started

    # --- Поиск ---

    def get_room_by_id(self, room_id: str) -> Optional[Room]:
        """Получить комнату по ID."""
        if not room_id:
            return None
        with self.lock:
            return self.backend.get(str(room_id))

    def get_room_by_code(self, code: str) -> Optional[Room]:
        """Получить комнату по коду (регистр не важен)."""
        with self.lock:
            room_id = self.code_to_room_id.get(normalize_code(code))
            if not room_id:
                return None
            return self.backend.get(room_id)

    # --- Изменение ---

    def update_room(self, room_id: str, **fields) -> Optional[Room]:
        """
        Сливает поля в комнату и обновляет last_activity_at.
        Возвращает None, если комната уже удалена.
        """
        unknown = set(fields) - set(Room.UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update room fields: {sorted(unknown)}")

        room = self.get_room_by_id(room_id)
        if not room:
            self.log_event("REGISTRY_WARN", f"Попытка обновить несуществующую комнату {room_id}", room_id=room_id)
            return None

        with room.lock:
            for name, value in fields.items():
                setattr(room, name, value)
            room.touch(self.clock())
            return room

    def delete_room(self, room_id: str) -> bool:
        with self.lock:
            room = self.backend.get(room_id)
            if not room:
                return False
            self.backend.delete(room_id)
            if self.code_to_room_id.get(room.code) == room_id:
                del self.code_to_room_id[room.code]
            self.log_event("ROOM_REMOVE", f"Комната {room.code} удалена. Осталось комнат: {self.backend.count()}", room_id=room_id)
            return True

    # --- Очистка ---

    def list_expired(self, now: int = None) -> List[str]:
        """ID комнат без активности дольше окна хранения."""
        threshold = (now if now is not None else self.clock()) - self.retention_ms
        with self.lock:
            return [room.id for room in self.backend.values() if room.last_activity_at < threshold]

    def sweep_inactive(self) -> int:
        """Удаляет неактивные комнаты. Возвращает число удаленных."""
        removed = 0
        for room_id in self.list_expired():
            if self.delete_room(room_id):
                removed += 1
        if removed:
            self.log_event("ROOM_SWEEP", f"Removed {removed} inactive room(s). Remaining: {self.count()}")
        return removed

    def count(self) -> int:
        with self.lock:
            return self.backend.count()
