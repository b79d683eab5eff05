import logging
from flask import Flask
from .extensions import (
    socketio,
    limiter,
    notification_queue
)
from .globals import log_event
from .workers import start_notification_consumer, start_room_sweeper

# Получаем логгер
logger = logging.getLogger(__name__)


def _configure_logging(app):
    """
    Настраивает файловый логгер. app.logger - это логгер пакета
    'mancala_server', так что в файл попадают и все дочерние модули.
    """
    for handler in list(app.logger.handlers):
        if isinstance(handler, logging.FileHandler):
            app.logger.removeHandler(handler)
            handler.close()

    file_handler = logging.FileHandler(app.config['LOG_FILE'], encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s'))

    app.logger.addHandler(file_handler)
    app.logger.setLevel(logging.INFO)

    logger.info("Файловый логгер настроен.")


def _init_extensions(app):
    """Инициализирует расширения Flask."""
    socketio.init_app(
        app,
        async_mode=app.config['SOCKETIO_ASYNC_MODE'],
        cors_allowed_origins=app.config['CORS_ALLOWED_ORIGINS']
    )
    limiter.init_app(app)
    logger.info(f"Расширения Flask (SocketIO [{socketio.async_mode}], Limiter) инициализированы.")


def _init_services(app):
    """Инициализирует и внедряет сервисы приложения."""

    # Импорты сервисов лучше делать здесь, чтобы избежать
    # циклических зависимостей.
    from .services.room_registry import RoomRegistry
    from .services.game_turn_manager import GameTurnManager
    from .services.room_service import RoomService
    from .game_core.ai_controller import AIController

    registry = RoomRegistry(
        log_event_func=log_event,
        code_length=app.config['ROOM_CODE_LENGTH'],
        max_code_attempts=app.config['ROOM_CODE_MAX_ATTEMPTS'],
        retention_sec=app.config['ROOM_RETENTION_SEC']
    )

    turn_manager = GameTurnManager(registry=registry, log_event=log_event)

    room_service = RoomService(
        registry=registry,
        turn_manager=turn_manager,
        notification_queue=notification_queue,
        log_event=log_event
    )

    ai_controller = AIController(
        max_workers=app.config['AI_MAX_WORKERS'],
        search_depth=app.config['AI_SEARCH_DEPTH'],
        timeout=app.config['AI_SEARCH_TIMEOUT_SEC']
    )

    # Прикрепляем сервисы к экземпляру приложения
    app.room_service = room_service
    app.ai_controller = ai_controller
    logger.info("Игровые сервисы (RoomRegistry, GameTurnManager, RoomService, AIController) инициализированы.")


def _register_blueprints(app):
    """Регистрирует все маршруты API (Blueprints)."""
    from .api.main_routes import bp as main_bp
    app.register_blueprint(main_bp)

    from .api.room_routes import bp as rooms_bp
    app.register_blueprint(rooms_bp, url_prefix='/api/rooms')

    from .api.ai_routes import bp as ai_bp
    app.register_blueprint(ai_bp, url_prefix='/api/ai')

    logger.info("Blueprints (маршруты API) зарегистрированы.")


def _register_socketio_handlers():
    """
    Импортирует обработчики SocketIO для их регистрации.
    """
    # Этот импорт регистрирует обработчики в экземпляре socketio
    from .sockets import connection_handlers  # noqa: F401
    from .sockets import game_handlers  # noqa: F401
    logger.info("Обработчики SocketIO (connection, game) зарегистрированы.")


def create_app(config_class=None):
    """
    Фабрика приложений (Паттерн Application Factory).
    Возвращает (app, socketio).
    """

    app = Flask(__name__, instance_relative_config=True)

    # 1. Загрузка конфигурации
    app.config.from_object(config_class or 'mancala_server.config.Config')
    if config_class is None:
        app.config.from_pyfile('config.py', silent=True)

    # 2. Настройка логирования
    _configure_logging(app)

    # 3. Регистрация обработчиков SocketIO (до init_app, чтобы каждый
    #    новый сервер SocketIO получил их из socketio.handlers)
    _register_socketio_handlers()

    # 4. Инициализация расширений
    _init_extensions(app)

    # 5. Инициализация сервисов
    _init_services(app)

    # 6. Регистрация Blueprints (маршрутов API)
    _register_blueprints(app)

    # 7. Запуск фоновых воркеров
    logger.info("Запуск фонового потока-потребителя (QueueConsumer)...")
    start_notification_consumer(socketio, notification_queue)

    if app.config['ROOM_SWEEP_ENABLED']:
        start_room_sweeper(socketio, app, app.config['ROOM_SWEEP_INTERVAL_SEC'])

    app.logger.info("Приложение 'mancala-server' создано.")
    app.logger.info(f"Путь к логам: {app.config['LOG_FILE']}")
    app.logger.info(f"Путь к логу событий: {app.config['EVENT_LOG_FILE']}")

    return app, socketio
