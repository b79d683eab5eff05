from flask import Blueprint, jsonify

# Создаем новый Blueprint
bp = Blueprint('main', __name__)


@bp.route('/health')
def health_check():
    """
    Простой эндпоинт для проверки доступности сервера.
    Клиент может использовать его перед попыткой WebSocket-соединения.
    """
    return jsonify({"status": "ok"}), 200
