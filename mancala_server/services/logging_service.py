# mancala_server/services/logging_service.py

import threading
import logging
from flask import current_app, has_app_context

logger = logging.getLogger(__name__)

file_lock = threading.RLock()


def log_event_to_file(log_entry):
    """
    Записывает общее событие в лог-файл (путь из app.config).
    Вне контекста приложения пишет в обычный логгер.
    """
    if not has_app_context():
        logger.info(log_entry.rstrip('\n'))
        return

    log_path = current_app.config['EVENT_LOG_FILE']

    with file_lock:
        try:
            with open(log_path, 'a', encoding='utf-8') as f:
                f.write(log_entry)
        except OSError as e:
            logger.error(f"Failed to write to event log file {log_path}: {e}")
