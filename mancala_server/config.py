# mancala_server/config.py


class Config:
    """Базовый класс конфигурации (безопасные значения)."""

    LOG_FILE = 'application.log'
    EVENT_LOG_FILE = 'game_events.log'

    # None - SocketIO сам выберет режим (eventlet, если установлен)
    SOCKETIO_ASYNC_MODE = None
    CORS_ALLOWED_ORIGINS = "*"

    # --- Комнаты ---
    ROOM_CODE_LENGTH = 6
    ROOM_CODE_MAX_ATTEMPTS = 100
    ROOM_RETENTION_SEC = 60 * 60       # 1 час без активности
    ROOM_SWEEP_INTERVAL_SEC = 30 * 60  # очистка раз в 30 минут
    ROOM_SWEEP_ENABLED = True

    # --- Компьютерный соперник ---
    AI_SEARCH_DEPTH = 4
    AI_SEARCH_TIMEOUT_SEC = 10.0
    AI_MAX_WORKERS = None  # None -> os.cpu_count()

    # --- Ограничения частоты запросов ---
    RATELIMIT_ENABLED = True
    RATELIMIT_ROOMS = "30 per minute"
    RATELIMIT_AI = "60 per minute"
