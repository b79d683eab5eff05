# mancala_server/sockets/connection_handlers.py
import datetime
from flask import request
from ..extensions import socketio
from ..globals import sid_to_session, sid_to_session_lock, log_event


@socketio.on('connect')
def handle_connect(auth=None):
    sid = request.sid

    with sid_to_session_lock:
        sid_to_session[sid] = {
            "connect_time": datetime.datetime.now(),
            "rooms": set()
        }

    log_event("SESSION_START", "Socket connected.", sid=sid)


@socketio.on('disconnect')
def handle_disconnect(*args):
    """
    Отключение не отменяет ходы и не трогает комнаты:
    комната живет до очистки по неактивности.
    """
    sid = request.sid
    duration_str = "N/A"

    with sid_to_session_lock:
        session_data = sid_to_session.pop(sid, None)

    if not session_data:
        log_event("SESSION_END", "Disconnected (already popped).", sid=sid)
        return

    connect_time = session_data.get("connect_time")
    if connect_time:
        duration = datetime.datetime.now() - connect_time
        duration_str = str(datetime.timedelta(seconds=int(duration.total_seconds())))

    rooms = sorted(session_data.get("rooms", ()))
    log_event("SESSION_END", f"Disconnected. Session duration: {duration_str}. Rooms: {rooms}", sid=sid)
