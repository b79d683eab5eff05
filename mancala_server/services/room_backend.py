# mancala_server/services/room_backend.py

from typing import Optional, Dict, List, TYPE_CHECKING

if TYPE_CHECKING:
    from .room import Room


class InMemoryRoomBackend:
    """
    Хранилище комнат в словаре процесса.
    Объекты хранятся по ссылке: изменения Room видны сразу,
    без повторного put(). Сериализующий бэкенд (Redis и т.п.)
    потребует явного put() после каждого изменения.
    """

    def __init__(self):
        self._rooms: Dict[str, 'Room'] = {}

    def get(self, room_id: str) -> Optional['Room']:
        return self._rooms.get(room_id)

    def put(self, room: 'Room') -> None:
        self._rooms[room.id] = room

    def delete(self, room_id: str) -> bool:
        return self._rooms.pop(room_id, None) is not None

    def values(self) -> List['Room']:
        return list(self._rooms.values())

    def count(self) -> int:
        return len(self._rooms)
