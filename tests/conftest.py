import pytest

from mancala_server import create_app, socketio
from mancala_server.config import Config
from mancala_server.services.game_state import GameState
from mancala_server.services.room_registry import RoomRegistry


class BaseTestConfig(Config):
    TESTING = True
    SOCKETIO_ASYNC_MODE = 'threading'
    ROOM_SWEEP_ENABLED = False
    RATELIMIT_ENABLED = False
    AI_MAX_WORKERS = 2


@pytest.fixture()
def flask_app(tmp_path):
    class TestConfig(BaseTestConfig):
        LOG_FILE = str(tmp_path / 'application.log')
        EVENT_LOG_FILE = str(tmp_path / 'game_events.log')

    application, _ = create_app(TestConfig)
    yield application
    application.ai_controller.shutdown()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    """Creates connected Socket.IO test clients; disconnects them afterwards."""
    created = []

    def _make():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client()
        )
        created.append(test_client)
        return test_client

    yield _make

    for test_client in created:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start=1_000_000):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def events():
    """Collects log_event calls as (event_type, message, kwargs)."""
    collected = []

    def _log_event(event_type, message, **kwargs):
        collected.append((event_type, message, kwargs))

    _log_event.collected = collected
    return _log_event


@pytest.fixture()
def registry(clock, events):
    return RoomRegistry(log_event_func=events, clock=clock)


def make_state(board, current_player=1):
    """GameState with a custom board, for rule tests."""
    state = GameState()
    state.board = list(board)
    state.current_player = current_player
    return state


@pytest.fixture()
def started_room(registry):
    room = registry.create_room('alice-id', 'Alice')
    room, _ = registry.join_room(room.code, 'bob-id', 'Bob')
    return room
