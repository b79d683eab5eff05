import eventlet
eventlet.monkey_patch()

# 2. Обычные импорты
import argparse
import logging
from mancala_server import create_app

logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(name)s: %(message)s')

print("[run.py] Eventlet monkey-patch применен.")

# 3. Создаем приложение
app, socketio = create_app()

if __name__ == '__main__':

    # 4. Настраиваем парсер аргументов
    parser = argparse.ArgumentParser(description='Запуск Flask-SocketIO сервера манкалы.')

    parser.add_argument(
        '-e', '--env',
        default='local',
        choices=['local', 'prod'],
        help='Режим запуска: local (для разработки) или prod (для боевого сервера). По умолчанию: local.'
    )
    parser.add_argument(
        '-p', '--port',
        type=int,
        default=None,
        help='Порт. По умолчанию: 3000 (prod) или 4999 (local).'
    )

    # 5. Считываем аргументы
    args = parser.parse_args()

    # 6. Выбираем, как запускать сервер

    if args.env == 'prod':
        port = args.port or 3000
        print(f"[run.py] Запуск в режиме PRODUCTION (prod) на 0.0.0.0:{port}...")

        socketio.run(app,
                     host='0.0.0.0',
                     port=port,
                     debug=False
                    )

    else:
        port = args.port or 4999
        print(f"[run.py] Запуск в режиме LOCAL (dev) на 127.0.0.1:{port}...")
        print("[run.py] Включен режим отладки (debug=True).")

        socketio.run(app,
                     host='127.0.0.1',
                     port=port,
                     debug=True,
                     use_reloader=False
                    )
