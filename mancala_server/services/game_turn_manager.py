# mancala_server/services/game_turn_manager.py

from typing import TYPE_CHECKING, Dict, Any, List, Callable, Optional

from mancala_server.game_core import GameError, validate_pit_choice
from .game_state import apply_move
from .errors import RoomNotFound, GameNotStarted, PlayerNotIdentifiable, NotYourTurn

if TYPE_CHECKING:
    from .room import Room
    from .room_registry import RoomRegistry

Notification = Dict[str, Any]


class GameTurnManager:
    """
    Управляет логикой одного хода: поиск комнаты, проверка игрока,
    очередности и лунки, применение хода и рассылка результата.
    Единственный, кто пишет игровое состояние после старта партии.
    """
    def __init__(
        self,

        # --- Зависимости, внедренные контейнером ---
        registry: 'RoomRegistry',
        log_event: Callable = None
    ):
        self.registry = registry
        self.log_event = log_event or (lambda *args, **kwargs: None)

    def resolve_room(self, room_id: Optional[str], room_code: Optional[str] = None) -> 'Room':
        """Ищет комнату по ID, затем по коду (fallback)."""
        room = self.registry.get_room_by_id(room_id)
        if not room and room_code:
            room = self.registry.get_room_by_code(room_code)
            if room:
                self.log_event("ROOM_LOOKUP", f"Room {room_id!r} resolved by code {room_code!r}.", room_id=room.id)
        if not room:
            raise RoomNotFound()
        return room

    def apply_player_move(
        self,
        sid: str,
        room_id: Optional[str],
        pit_index: Any,
        room_code: Optional[str] = None,
        player_id: Optional[str] = None
    ) -> List[Notification]:
        """
        Обрабатывает ход игрока.

        1. Проверки-предохранители (комната, партия, игрок, очередь, лунка).
        2. Расчет нового состояния движком.
        3. Сохранение через реестр.
        4. Уведомления: всей комнате при успехе, только отправителю при отказе.
        """
        notifications: List[Notification] = []

        try:
            room = self.resolve_room(room_id, room_code)

            with room.lock:
                # --- 1. Проверки-предохранители (Guard Clauses) ---
                game_state = room.game_state
                if game_state is None:
                    raise GameNotStarted()

                moving_player = room.get_player_number(player_id)
                if moving_player is None:
                    raise PlayerNotIdentifiable()

                if moving_player != game_state.current_player:
                    raise NotYourTurn(game_state.current_player, moving_player)

                validate_pit_choice(game_state.board, moving_player, pit_index)

                # --- 2. Фаза "Calculate" ---
                result = apply_move(game_state, pit_index)

                # --- 3. Фаза "Commit" ---
                updated_room = self.registry.update_room(room.id, game_state=result.new_state)
                if not updated_room:
                    # Комнату удалили между поиском и сохранением
                    raise RoomNotFound()

                final_state = updated_room.game_state.to_dict()

        except GameError as e:
            self.log_event(
                "MOVE_REJECTED",
                f"{e.code}: {e.message}",
                sid=sid,
                room_id=room_id,
                extra_data={'pitIndex': pit_index, 'playerId': player_id}
            )
            notifications.append({'event': 'move-rejected', 'payload': {'message': e.message, 'code': e.code}, 'room': sid})
            return notifications

        except Exception as e:
            self.log_event(
                "CRITICAL_ERROR",
                f"Failed during 'apply_player_move'. Error: {e}",
                sid=sid,
                room_id=room_id,
                exc_info=True
            )
            notifications.append({'event': 'move-rejected', 'payload': {'message': 'Internal server error while applying move.', 'code': 'SERVER_ERROR'}, 'room': sid})
            return notifications

        # --- 4. Отправка уведомлений ---
        self.log_event(
            "MOVE_APPLIED",
            f"Player {moving_player} played pit {pit_index}. Extra turn: {result.extra_turn}, captured: {result.captured}.",
            sid=sid,
            room_id=room.id,
            extra_data={'board': final_state['board']}
        )

        notifications.append({
            'event': 'state-update',
            'payload': {
                'gameState': final_state,
                'extraTurn': result.extra_turn,
                'captured': result.captured,
            },
            'room': room.id
        })

        if result.game_over:
            self.log_event("GAME_OVER", f"Game finished. Winner: {result.winner}.", room_id=room.id, extra_data={'board': final_state['board']})
            notifications.append({
                'event': 'game-over',
                'payload': {'winner': result.winner, 'finalState': final_state},
                'room': room.id
            })

        return notifications
