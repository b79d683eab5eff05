# mancala_server/api/ai_routes.py

from flask import request, jsonify, Blueprint, current_app
from marshmallow import ValidationError
from ..extensions import limiter
from ..game_core.ai_controller import AISearchTimeout
from .schemas import AIMoveSchema
from .room_routes import error_response, validation_error_response

bp = Blueprint('ai', __name__)

VALIDATION_ERROR_CODES = {
    "board": "AI_INVALID_BOARD",
    "currentPlayer": "AI_INVALID_PLAYER",
    "difficulty": "AI_INVALID_DIFFICULTY"
}


def _rate_limit():
    return current_app.config.get('RATELIMIT_AI', '60 per minute')


@bp.route('/move', methods=['POST'])
@limiter.limit(_rate_limit)
def handle_ai_move():
    """
    Ход компьютера для офлайн-партии.
    Возвращает {"pitIndex": int} или {"pitIndex": null}, если ходить нечем.
    """
    json_data = request.get_json(silent=True)
    if not json_data:
        return error_response("No data provided.", "GENERIC_BAD_REQUEST", 400)

    try:
        data = AIMoveSchema().load(json_data)
    except ValidationError as err:
        return validation_error_response(err, VALIDATION_ERROR_CODES)

    try:
        pit_index = current_app.ai_controller.get_move(
            data['board'], data['current_player'], data['difficulty']
        )
    except AISearchTimeout as e:
        return error_response(e.message, e.code, 504)

    return jsonify({"status": "success", "pitIndex": pit_index}), 200
