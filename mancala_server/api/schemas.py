# mancala_server/api/schemas.py

from marshmallow import Schema, fields, pre_load, validates, ValidationError
from marshmallow.validate import Length, OneOf, Range

from mancala_server.game_core.constants import BOARD_SIZE, DIFFICULTIES, PLAYER_ONE, PLAYER_TWO, TOTAL_SEEDS

# --- Базовая схема для очистки данных ---


class BaseRoomSchema(Schema):
    """
    Базовая схема, которая автоматически "очищает" (strip)
    строковые поля перед любой валидацией.
    """
    STRIPPED_FIELDS = ('playerId', 'playerName', 'code')

    @pre_load
    def strip_whitespace(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in self.STRIPPED_FIELDS:
            if isinstance(data.get(key), str):
                data[key] = data[key].strip()
        return data


# --- Схема для создания комнаты ---

class CreateRoomSchema(BaseRoomSchema):
    player_id = fields.Str(
        required=True,
        data_key='playerId',
        validate=Length(min=1, max=64, error="Player ID must be 1-64 characters."),
        error_messages={"required": "Player ID is required."}
    )
    player_name = fields.Str(
        required=True,
        data_key='playerName',
        validate=Length(min=1, max=32, error="Player name must be 1-32 characters."),
        error_messages={"required": "Player name is required."}
    )


# --- Схема для входа в комнату ---

class JoinRoomSchema(CreateRoomSchema):
    code = fields.Str(
        required=True,
        validate=Length(min=1, max=16, error="Room code must be 1-16 characters."),
        error_messages={"required": "Room code is required."}
    )


# --- Схема для хода компьютера ---

class AIMoveSchema(Schema):
    board = fields.List(
        fields.Int(strict=True, validate=Range(min=0, error="Seed counts must be non-negative.")),
        required=True,
        validate=Length(equal=BOARD_SIZE, error=f"Board must contain exactly {BOARD_SIZE} values."),
        error_messages={"required": "Board is required."}
    )
    current_player = fields.Int(
        strict=True,
        required=True,
        data_key='currentPlayer',
        validate=OneOf([PLAYER_ONE, PLAYER_TWO], error="currentPlayer must be 1 or 2."),
        error_messages={"required": "currentPlayer is required."}
    )
    difficulty = fields.Str(
        load_default='easy',
        validate=OneOf(DIFFICULTIES, error="difficulty must be one of: easy, medium, hard.")
    )

    @validates('board')
    def validate_board(self, value, **kwargs):
        if any(isinstance(v, bool) for v in value):
            raise ValidationError("Seed counts must be integers.")
        # На доске всегда ровно 48 семян
        if sum(value) != TOTAL_SEEDS:
            raise ValidationError(f"Board must contain exactly {TOTAL_SEEDS} seeds.")
