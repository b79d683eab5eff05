# mancala_server/api/room_routes.py

from flask import request, jsonify, Blueprint, current_app
from marshmallow import ValidationError
from ..extensions import limiter
from ..services.errors import RoomNotFound, RoomFull, CodeGenerationExhausted
from .schemas import CreateRoomSchema, JoinRoomSchema

bp = Blueprint('rooms', __name__)

# --- СЛОВАРЬ КОДОВ ОШИБОК ДЛЯ КЛИЕНТА ---
# Мы сопоставляем ИМЯ ПОЛЯ из схемы (schemas.py) с нашим кодом.
VALIDATION_ERROR_CODES = {
    "playerId": "ROOM_INVALID_PLAYER_ID",
    "playerName": "ROOM_INVALID_PLAYER_NAME",
    "code": "ROOM_INVALID_CODE"
}


def _rate_limit():
    return current_app.config.get('RATELIMIT_ROOMS', '30 per minute')


def error_response(message, code, http_code):
    return jsonify({"status": "error", "message": message, "code": code}), http_code


def validation_error_response(err: ValidationError, codes: dict):
    """Ответ 400 по первому полю с ошибкой."""
    messages = err.messages if isinstance(err.messages, dict) else {'_schema': err.messages}
    first_field_with_error = next(iter(messages), '_schema')
    error_code = codes.get(first_field_with_error, "VALIDATION_ERROR")
    field_errors = messages.get(first_field_with_error)
    error_message = field_errors[0] if isinstance(field_errors, list) and field_errors else str(field_errors)

    return error_response(
        f"Validation failed on '{first_field_with_error}': {error_message}",
        error_code,
        400
    )


def _load_json(schema):
    json_data = request.get_json(silent=True)
    if not json_data:
        return None, error_response("No data provided.", "GENERIC_BAD_REQUEST", 400)
    try:
        return schema.load(json_data), None
    except ValidationError as err:
        return None, validation_error_response(err, VALIDATION_ERROR_CODES)


@bp.route('/create', methods=['POST'])
@limiter.limit(_rate_limit)
def handle_create_room():
    data, error = _load_json(CreateRoomSchema())
    if error:
        return error

    try:
        room = current_app.room_service.create_room(data['player_id'], data['player_name'])
    except CodeGenerationExhausted as e:
        current_app.logger.error(f"Не удалось создать комнату: {e.message}")
        return error_response(e.message, e.code, 503)

    return jsonify(room.to_dict()), 201


@bp.route('/join', methods=['POST'])
@limiter.limit(_rate_limit)
def handle_join_room():
    data, error = _load_json(JoinRoomSchema())
    if error:
        return error

    try:
        room = current_app.room_service.join_room(data['code'], data['player_id'], data['player_name'])
    except RoomNotFound as e:
        return error_response(e.message, e.code, 404)
    except RoomFull as e:
        return error_response(e.message, e.code, 409)

    return jsonify(room.to_dict()), 200


@bp.route('/<string:code>', methods=['GET'])
@limiter.limit(_rate_limit)
def handle_get_room(code):
    try:
        room = current_app.room_service.get_room_by_code(code)
    except RoomNotFound as e:
        return error_response(e.message, e.code, 404)

    return jsonify(room.to_dict()), 200
