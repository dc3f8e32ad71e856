def events(received, name):
    return [pkt['args'][0] for pkt in received if pkt['name'] == name]


def latest_state(received, room_code):
    states = [payload['state'] for payload in events(received, room_code) if 'state' in payload]
    assert states, f"no state broadcast for {room_code}"
    return states[-1]


def create_game(sio_client, name='Alice', variant='family'):
    sio_client.emit('createGame', {'name': name, 'variant': variant})
    received = sio_client.get_received()
    success = events(received, 'createGameSuccess')
    assert success, received
    return success[0]['roomCode'], received


def test_create_game_replies_and_broadcasts(make_sio_client):
    alice = make_sio_client()

    code, received = create_game(alice)

    assert events(received, 'createGameSuccess') == [{'roomCode': code, 'playerId': 0}]
    state = latest_state(received, code)
    assert state['roomCode'] == code
    assert state['gameStatus'] == 'WAITING FOR ANSWERS'
    player_id, player = state['players'][0]
    assert player_id == 0
    assert player['name'] == 'Alice'
    assert player['role'] == 'JUDGE'
    assert len(player['cardsInHand']) == 10


def test_create_game_with_bad_name_fails(make_sio_client):
    alice = make_sio_client()
    alice.emit('createGame', {'name': '', 'variant': 'PG'})
    received = alice.get_received()
    assert events(received, 'createGameFailure') == [{'errorMessage': 'Name must be 1-30 characters'}]


def test_join_game_success_is_addressed_and_broadcast(make_sio_client):
    alice = make_sio_client()
    bob = make_sio_client()
    code, _ = create_game(alice)

    bob.emit('joinGame', {'name': 'Bob', 'roomCode': code})

    bob_received = bob.get_received()
    assert {'joinGameSuccess': True, 'playerId': 1} in events(bob_received, code)
    state = latest_state(bob_received, code)
    assert [pair[0] for pair in state['players']] == [0, 1]
    assert state['players'][1][1]['role'] == 'NON_JUDGE'

    alice_received = alice.get_received()
    assert all('joinGameSuccess' not in payload for payload in events(alice_received, code))
    assert latest_state(alice_received, code)['playerNames'] == ['Alice', 'Bob']


def test_join_game_accepts_legacy_room_key(make_sio_client):
    alice = make_sio_client()
    bob = make_sio_client()
    code, _ = create_game(alice)

    bob.emit('joinGame', {'name': 'Bob', 'room': code.lower()})

    assert {'joinGameSuccess': True, 'playerId': 1} in events(bob.get_received(), code)


def test_join_game_failures(make_sio_client):
    alice = make_sio_client()
    bob = make_sio_client()
    code, _ = create_game(alice)

    bob.emit('joinGame', {'name': 'Bob', 'roomCode': 'QQQQ'})
    bob.emit('joinGame', {'name': 'Alice', 'roomCode': code})

    failures = events(bob.get_received(), 'joinGameFailure')
    assert failures == [
        {'errorMessage': 'Invalid room code'},
        {'errorMessage': "Player with name 'Alice' is already in game. Choose different name"},
    ]


def test_full_round_over_sockets(make_sio_client):
    alice = make_sio_client()
    bob = make_sio_client()
    code, received = create_game(alice)
    question = latest_state(received, code)['currentQuestion']
    bob.emit('joinGame', {'name': 'Bob', 'roomCode': code})
    hand = latest_state(bob.get_received(), code)['players'][1][1]['cardsInHand']
    alice.get_received()

    card = hand[0]
    bob.emit('move', {'roomCode': code, 'moveKind': 'PLAY_ANSWER_CARD', 'card': card, 'playerId': 1})
    state = latest_state(alice.get_received(), code)
    bob_state = state['players'][1][1]
    assert state['answerCards'] == [card]
    assert state['gameStatus'] == 'ALL CARDS REVEALED'
    assert bob_state['state'] == 'PLAYED_CARD'
    assert card not in bob_state['cardsInHand']
    assert len([c for c in bob_state['cardsInHand'] if c]) == 10

    alice.emit('move', {'roomCode': code, 'moveKind': 'CHOOSE_WINNER_CARD', 'card': card, 'playerId': 0})
    state = latest_state(bob.get_received(), code)
    assert state['winnerCard'] == card
    assert state['gameStatus'] == 'WINNER_CHOSEN'
    assert state['players'][1][1]['score'] == 1
    assert state['players'][1][1]['winningAnswers'] == [card]
    assert state['players'][1][1]['winningQuestions'] == [question]

    alice.emit('move', {'gameRoom': code, 'move': 'DRAW_NEW_QUESTION', 'playerId': 0})
    state = latest_state(bob.get_received(), code)
    assert state['judge'] == 1
    assert state['players'][0][1]['role'] == 'NON_JUDGE'
    assert state['players'][1][1]['role'] == 'JUDGE'
    assert state['roundNum'] == 2
    assert state['answerCards'] == []
    assert state['winnerCard'] is None
    assert all(p['state'] == 'NOT_PLAYED_CARD' for _, p in state['players'])


def test_illegal_move_gets_no_reply_or_broadcast(make_sio_client):
    alice = make_sio_client()
    bob = make_sio_client()
    code, _ = create_game(alice)
    bob.emit('joinGame', {'name': 'Bob', 'roomCode': code})
    hand = latest_state(bob.get_received(), code)['players'][1][1]['cardsInHand']
    alice.get_received()

    # Judge trying to play, Bob claiming Alice's seat, and a premature round change
    alice.emit('move', {'roomCode': code, 'moveKind': 'PLAY_ANSWER_CARD', 'card': hand[0], 'playerId': 0})
    bob.emit('move', {'roomCode': code, 'moveKind': 'DRAW_NEW_QUESTION', 'playerId': 0})
    alice.emit('move', {'roomCode': code, 'moveKind': 'DRAW_NEW_QUESTION', 'playerId': 0})
    bob.emit('move', {'roomCode': code, 'moveKind': 'NOT_A_MOVE', 'playerId': 1})

    assert alice.get_received() == []
    assert bob.get_received() == []


def test_duplicate_play_is_ignored(make_sio_client):
    alice = make_sio_client()
    bob = make_sio_client()
    carol = make_sio_client()
    code, _ = create_game(alice)
    bob.emit('joinGame', {'name': 'Bob', 'roomCode': code})
    carol.emit('joinGame', {'name': 'Carol', 'roomCode': code})
    hand = latest_state(bob.get_received(), code)['players'][1][1]['cardsInHand']
    alice.get_received()

    bob.emit('move', {'roomCode': code, 'moveKind': 'PLAY_ANSWER_CARD', 'card': hand[0], 'playerId': 1})
    first = latest_state(alice.get_received(), code)
    bob.emit('move', {'roomCode': code, 'moveKind': 'PLAY_ANSWER_CARD', 'card': hand[1], 'playerId': 1})

    assert alice.get_received() == []
    assert first['answerCards'] == [hand[0]]


def test_judge_disconnect_rotates_judge(make_sio_client):
    alice = make_sio_client()
    bob = make_sio_client()
    carol = make_sio_client()
    code, _ = create_game(alice)
    bob.emit('joinGame', {'name': 'Bob', 'roomCode': code})
    carol.emit('joinGame', {'name': 'Carol', 'roomCode': code})
    bob.get_received()

    alice.disconnect()

    state = latest_state(bob.get_received(), code)
    assert state['judge'] == 1
    assert state['playerNames'] == ['Bob', 'Carol']
    assert [pair[0] for pair in state['players']] == [1, 2]


def test_last_disconnect_removes_room(make_sio_client, lobby_manager, client):
    alice = make_sio_client()
    code, _ = create_game(alice)
    assert client.get(f'/api/rooms/{code}').status_code == 200

    alice.disconnect()

    assert lobby_manager.get_room(code) is None
    assert client.get(f'/api/rooms/{code}').status_code == 404


def test_creating_again_releases_the_old_seat(make_sio_client, lobby_manager):
    alice = make_sio_client()
    create_game(alice)
    second, _ = create_game(alice, name='Alice Again')

    assert lobby_manager.get_stats()['active_rooms'] == 1
    assert lobby_manager.get_room(second).player_names == ['Alice Again']


def test_joining_own_room_twice_is_refused(make_sio_client):
    alice = make_sio_client()
    code, _ = create_game(alice)

    alice.emit('joinGame', {'name': 'Other', 'roomCode': code})

    assert events(alice.get_received(), 'joinGameFailure') == [{'errorMessage': 'Already in this game'}]
