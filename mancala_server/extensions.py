# mancala_server/extensions.py
"""
Экземпляры расширений Flask и общая очередь уведомлений.
Создаются здесь без приложения, привязываются в create_app.
"""

from flask_socketio import SocketIO
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import queue

# --- Расширения Flask ---

# async_mode и CORS приходят из конфига в init_app
socketio = SocketIO(compress=True)

# Лимиты считаются по IP клиента
limiter = Limiter(key_func=get_remote_address)


# --- Очередь уведомлений ---

# REST-обработчики кладут сюда {'event', 'payload', 'room'},
# фоновый consumer (workers.py) рассылает их через SocketIO.
notification_queue: queue.Queue = queue.Queue()
