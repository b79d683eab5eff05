# mancala_server/globals.py

import threading
import datetime
import logging
import traceback
from mancala_server.services.logging_service import log_event_to_file

logger = logging.getLogger(__name__)

# --- Общее состояние сокетов ---
# { 'sid': {'connect_time': datetime, 'rooms': set(room_id, ...)}, ... }
sid_to_session = {}
sid_to_session_lock = threading.Lock()


def log_event(event_type, message, sid=None, room_id=None, extra_data=None, exc_info=False):
    """
    Пишет одну строку игрового события в лог событий.
    С exc_info=True дописывает traceback текущего исключения
    и дублирует запись в обычный логгер.
    """
    timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    log_entry = f"[{timestamp}] [TYPE: {event_type}]"

    if sid:
        log_entry += f" [SID: {sid}]"
    if room_id:
        log_entry += f" [RoomID: {room_id}]"
    if extra_data:
        log_entry += f" [Data: {extra_data}]"

    log_entry += f" | {message}\n"

    if exc_info:
        log_entry += traceback.format_exc()
        logger.error(f"[{event_type}] {message}", exc_info=True)

    log_event_to_file(log_entry)
