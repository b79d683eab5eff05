import time

from mancala_server import socketio
from mancala_server.globals import sid_to_session, sid_to_session_lock


def _events(received, name):
    return [msg['args'][0] for msg in received if msg['name'] == name]


def _wait_for(sio_client, name, timeout=3.0):
    """Собирает входящие события, пока не придет `name` (или таймаут)."""
    collected = []
    deadline = time.time() + timeout
    while time.time() < deadline:
        collected.extend(sio_client.get_received())
        if _events(collected, name):
            return collected
        time.sleep(0.05)
    return collected


def _started_room(client):
    created = client.post('/api/rooms/create', json={'playerId': 'alice-id', 'playerName': 'Alice'}).get_json()
    client.post('/api/rooms/join', json={'code': created['code'], 'playerId': 'bob-id', 'playerName': 'Bob'})
    return created


def test_connect(sio_factory):
    sio = sio_factory()
    assert sio.is_connected()


def test_join_room_sends_snapshot_to_subscriber(client, sio_factory):
    room = _started_room(client)
    sio = sio_factory()
    sio.get_received()

    sio.emit('join-room', {'roomId': room['id']})
    received = sio.get_received()

    snapshots = _events(received, 'room-snapshot')
    assert snapshots
    assert snapshots[-1]['id'] == room['id']
    assert snapshots[-1]['player2Id'] == 'bob-id'

    started = _events(received, 'game-started')
    assert started
    assert started[-1]['gameState']['currentPlayer'] == 1


def test_join_room_accepts_plain_room_id(client, sio_factory):
    room = _started_room(client)
    sio = sio_factory()

    sio.emit('join-room', room['id'])
    assert _events(sio.get_received(), 'room-snapshot')


def test_join_unknown_room(sio_factory):
    sio = sio_factory()
    sio.emit('join-room', {'roomId': 'no-such-room'})

    rejected = _events(sio.get_received(), 'move-rejected')
    assert rejected[-1]['code'] == 'ROOM_NOT_FOUND'

    # Сокет не подписан на канал несуществующей комнаты
    with sid_to_session_lock:
        assert all('no-such-room' not in s['rooms'] for s in sid_to_session.values())
    assert 'no-such-room' not in (socketio.server.manager.rooms.get('/') or {})


def test_move_is_broadcast_to_room(client, sio_factory):
    room = _started_room(client)
    alice, bob = sio_factory(), sio_factory()
    alice.emit('join-room', {'roomId': room['id']})
    bob.emit('join-room', {'roomId': room['id']})
    alice.get_received()
    bob.get_received()

    alice.emit('make-move', {'roomId': room['id'], 'pitIndex': 0, 'playerId': 'alice-id'})

    for sio in (alice, bob):
        updates = _events(sio.get_received(), 'state-update')
        assert len(updates) == 1
        assert updates[0]['gameState']['currentPlayer'] == 2
        assert updates[0]['gameState']['lastMove'] == {'player': 1, 'pitIndex': 0}
        assert updates[0]['extraTurn'] is False


def test_rejection_goes_to_sender_only(client, sio_factory):
    room = _started_room(client)
    alice, bob = sio_factory(), sio_factory()
    alice.emit('join-room', {'roomId': room['id']})
    bob.emit('join-room', {'roomId': room['id']})
    alice.get_received()
    bob.get_received()

    bob.emit('make-move', {'roomId': room['id'], 'pitIndex': 7, 'playerId': 'bob-id'})

    rejected = _events(bob.get_received(), 'move-rejected')
    assert rejected == [{
        'message': "It's not your turn! Current player is 1, but you are player 2",
        'code': 'NOT_YOUR_TURN'
    }]
    assert not _events(alice.get_received(), 'move-rejected')


def test_make_move_requires_object(client, sio_factory):
    sio = sio_factory()
    sio.emit('make-move', 'pit-0')

    rejected = _events(sio.get_received(), 'move-rejected')
    assert rejected[-1]['code'] == 'BAD_REQUEST'


def test_rest_join_is_pushed_to_subscribers(client, sio_factory):
    created = client.post('/api/rooms/create', json={'playerId': 'alice-id', 'playerName': 'Alice'}).get_json()
    alice = sio_factory()
    alice.emit('join-room', {'roomId': created['id']})

    received = alice.get_received()
    assert _events(received, 'room-snapshot')[-1]['gameState'] is None
    assert not _events(received, 'game-started')

    client.post('/api/rooms/join', json={'code': created['code'], 'playerId': 'bob-id', 'playerName': 'Bob'})

    received = _wait_for(alice, 'game-started')
    started = _events(received, 'game-started')
    assert started, "game-started не пришел подписчику"
    assert started[0]['gameState']['currentPlayer'] == 1
    assert _events(received, 'room-snapshot')[-1]['player2Id'] == 'bob-id'


def test_leave_room_stops_broadcasts(client, sio_factory):
    room = _started_room(client)
    alice, bob = sio_factory(), sio_factory()
    alice.emit('join-room', {'roomId': room['id']})
    bob.emit('join-room', {'roomId': room['id']})
    bob.emit('leave-room', {'roomId': room['id']})
    alice.get_received()
    bob.get_received()

    alice.emit('make-move', {'roomId': room['id'], 'pitIndex': 0, 'playerId': 'alice-id'})

    assert _events(alice.get_received(), 'state-update')
    assert not _events(bob.get_received(), 'state-update')
