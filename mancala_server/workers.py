# mancala_server/workers.py

import logging

# Получаем логгер для этого модуля
logger = logging.getLogger(__name__)


def _notification_queue_consumer(socketio_instance, queue_instance):
    """
    Фоновый воркер (consumer) для обработки очереди уведомлений.
    Извлекает сообщения из `notification_queue` и отправляет их
    клиентам через SocketIO.
    """
    logger.info("[QueueConsumer] Поток-потребитель для emit'ов запущен.")
    while True:
        try:
            msg = queue_instance.get()
            if msg is None:
                logger.info("[QueueConsumer] Получен сигнал None, завершение работы.")
                break

            event = msg.get('event')
            payload = msg.get('payload', {})
            room = msg.get('room')

            if not event or not room:
                logger.warning(f"[QueueConsumer] Пропуск невалидного сообщения: {msg}")
                continue

            socketio_instance.emit(event, payload, to=room)

        except Exception as e:
            logger.error(f"[QueueConsumer] КРИТИЧЕСКАЯ ОШИБКА в потоке-потребителе: {e}", exc_info=True)
            socketio_instance.sleep(1)


def _room_sweeper(socketio_instance, app, interval_sec):
    """
    Периодически удаляет комнаты без активности.
    Работает в контексте приложения, чтобы log_event писал в файл.
    """
    logger.info(f"[RoomSweeper] Запущен. Интервал: {interval_sec} сек.")
    while True:
        socketio_instance.sleep(interval_sec)
        try:
            with app.app_context():
                removed = app.room_service.sweep_inactive_rooms()
            if removed:
                logger.info(f"[RoomSweeper] Удалено неактивных комнат: {removed}")
        except Exception as e:
            logger.error(f"[RoomSweeper] Ошибка при очистке комнат: {e}", exc_info=True)


def start_notification_consumer(socketio_instance, queue_instance):
    """
    Публичная функция для запуска воркера из create_app.
    """
    socketio_instance.start_background_task(
        target=_notification_queue_consumer,
        socketio_instance=socketio_instance,
        queue_instance=queue_instance
    )


def start_room_sweeper(socketio_instance, app, interval_sec):
    socketio_instance.start_background_task(
        target=_room_sweeper,
        socketio_instance=socketio_instance,
        app=app,
        interval_sec=interval_sec
    )
