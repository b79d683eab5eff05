# mancala_server/sockets/game_handlers.py

from flask import request, current_app
from flask_socketio import emit, join_room, leave_room
from ..extensions import socketio
from ..globals import sid_to_session, sid_to_session_lock, log_event
from ..services.errors import RoomNotFound


def _extract_room_id(data):
    """Клиент шлет либо строку roomId, либо {'roomId': ...}."""
    if isinstance(data, dict):
        data = data.get('roomId')
    return str(data).strip() if data else None


def _emit_all(notifications):
    for msg in notifications:
        emit(msg['event'], msg['payload'], to=msg['room'])


@socketio.on('join-room')
def handle_join_room(data):
    """
    Подписывает сокет на канал комнаты и сразу отправляет
    ЭТОМУ сокету текущий снимок комнаты (и партии, если она идет).
    """
    room_service = current_app.room_service
    sid = request.sid

    room_id = _extract_room_id(data)
    if not room_id:
        emit('move-rejected', {'message': 'roomId is required', 'code': 'BAD_REQUEST'})
        return

    # Несуществующая комната: канал не открываем
    if not room_service.room_exists(room_id):
        log_event("SUBSCRIBE_WARN", "Subscribe to unknown room rejected.", sid=sid, room_id=room_id)
        emit('move-rejected', {'message': RoomNotFound().message, 'code': RoomNotFound.code})
        return

    join_room(room_id)
    with sid_to_session_lock:
        session_data = sid_to_session.get(sid)
        if session_data is not None:
            session_data['rooms'].add(room_id)

    log_event("ROOM_SUBSCRIBE", "Socket joined room channel.", sid=sid, room_id=room_id)

    _emit_all(room_service.get_snapshot_for_subscriber(room_id, sid))


@socketio.on('leave-room')
def handle_leave_room(data):
    sid = request.sid

    room_id = _extract_room_id(data)
    if not room_id:
        return

    leave_room(room_id)
    with sid_to_session_lock:
        session_data = sid_to_session.get(sid)
        if session_data is not None:
            session_data['rooms'].discard(room_id)

    log_event("ROOM_UNSUBSCRIBE", "Socket left room channel.", sid=sid, room_id=room_id)


@socketio.on('make-move')
def handle_make_move(data):
    room_service = current_app.room_service
    sid = request.sid

    if not isinstance(data, dict):
        emit('move-rejected', {'message': 'Move payload must be an object', 'code': 'BAD_REQUEST'})
        return

    _emit_all(room_service.make_move(sid, data))
