# mancala_server/services/room_service.py

import queue
from typing import Optional, Dict, Any, List, Callable

from .room import Room
from .room_registry import RoomRegistry
from .game_turn_manager import GameTurnManager
from .errors import RoomNotFound

Notification = Dict[str, Any]


class RoomService:
    """
    Фасад, координирующий высокоуровневые действия с комнатами.
    Не владеет состоянием, а делегирует его реестру и менеджеру ходов.
    Рассылка идет через очередь уведомлений, переданную в конструктор.
    """

    def __init__(self,
                 registry: RoomRegistry,
                 turn_manager: GameTurnManager,
                 notification_queue: queue.Queue,
                 log_event: Callable = None):
        """
        Инициализируется через Внедрение Зависимостей (Dependency Injection).
        """
        self.registry = registry
        self.turn_manager = turn_manager
        self.notification_queue = notification_queue
        self.log_event = log_event or (lambda *args, **kwargs: None)

    ### Приватные методы ###

    def _publish(self, notifications: List[Notification]) -> None:
        for msg in notifications:
            self.notification_queue.put(msg)

    @staticmethod
    def _snapshot_notifications(room: Room, target: str) -> List[Notification]:
        """room-snapshot и, если партия идет, game-started."""
        with room.lock:
            snapshot = room.to_dict()

        notifications = [{'event': 'room-snapshot', 'payload': snapshot, 'room': target}]
        if snapshot['gameState'] is not None:
            notifications.append({
                'event': 'game-started',
                'payload': {'gameState': snapshot['gameState']},
                'room': target
            })
        return notifications

    ### Жизненный цикл комнаты (REST) ###

    def create_room(self, player_id: str, player_name: str) -> Room:
        """Создает комнату; создатель становится игроком 1."""
        return self.registry.create_room(player_id, player_name)

    def join_room(self, code: str, player_id: str, player_name: str) -> Room:
        """
        Второй игрок входит по коду. Подписчики комнаты получают свежий
        снимок; если этот вход запустил партию - еще и game-started.
        """
        room, game_started = self.registry.join_room(code, player_id, player_name)

        notifications = self._snapshot_notifications(room, target=room.id)
        if not game_started:
            # Повторный вход: только снимок, партия уже объявлена ранее
            notifications = notifications[:1]
        self._publish(notifications)

        return room

    def get_room_by_code(self, code: str) -> Room:
        room = self.registry.get_room_by_code(code)
        if not room:
            raise RoomNotFound()
        return room

    ### Real-time канал ###

    def room_exists(self, room_id: str) -> bool:
        return self.registry.get_room_by_id(room_id) is not None

    def get_snapshot_for_subscriber(self, room_id: str, sid: str) -> List[Notification]:
        """
        Снимок комнаты для только что подписавшегося сокета.
        Так второй клиент узнает о старте партии, не дожидаясь хода.
        """
        room = self.registry.get_room_by_id(room_id)
        if not room:
            self.log_event("SUBSCRIBE_WARN", f"Subscribed to unknown room {room_id!r}.", sid=sid, room_id=room_id)
            return [{
                'event': 'move-rejected',
                'payload': {'message': RoomNotFound().message, 'code': RoomNotFound.code},
                'room': sid
            }]
        return self._snapshot_notifications(room, target=sid)

    def make_move(self, sid: str, data: Optional[Dict[str, Any]]) -> List[Notification]:
        data = data or {}
        return self.turn_manager.apply_player_move(
            sid,
            room_id=data.get('roomId'),
            pit_index=data.get('pitIndex'),
            room_code=data.get('roomCode'),
            player_id=data.get('playerId')
        )

    ### Обслуживание ###

    def sweep_inactive_rooms(self) -> int:
        return self.registry.sweep_inactive()
