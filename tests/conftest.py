import os
import sys
import random
import pytest

# Ensure the project root (containing the game, lobby and handlers packages) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from app import create_app
from config.settings import load_settings
from game import ContentLibrary, ContentPool, Deck, Room
from lobby import LobbyManager, ConnectionManager


QUESTIONS = tuple(f"Question {i} is %s." for i in range(8))
ANSWERS = tuple(f"Answer {i}" for i in range(60))


def count_answer_cards(room):
    """Answer cards across every location they can be in."""
    in_hands = sum(len(p.cards_in_hand) for p in room.players.values())
    return (len(room.answer_deck.draw_pile) + len(room.answer_deck.discard_pile)
            + in_hands + len(room.answer_cards_in_center))


def count_question_cards(room):
    current = 1 if room.current_question is not None else 0
    return len(room.question_deck.draw_pile) + len(room.question_deck.discard_pile) + current


def judges(room):
    return [p for p in room.players.values() if p.is_judge]


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture()
def content():
    pool = ContentPool(questions=QUESTIONS, answers=ANSWERS)
    return ContentLibrary({'family': pool, 'full': pool})


@pytest.fixture()
def room(rng):
    room = Room(
        'WXYZ',
        Deck('question', list(QUESTIONS), rng),
        Deck('answer', list(ANSWERS), rng),
        rng=rng
    )
    room.start()
    return room


@pytest.fixture()
def connection_manager():
    return ConnectionManager()


@pytest.fixture()
def lobby_manager(content, connection_manager, rng):
    return LobbyManager(content, connection_manager, rng=rng)


@pytest.fixture()
def flask_app(lobby_manager):
    settings = load_settings(testing=True, async_mode='threading', cors_origins=['*'])
    application, socketio = create_app(settings, lobby_manager=lobby_manager)
    application.extensions['test_socketio'] = socketio
    yield application


@pytest.fixture()
def socketio(flask_app):
    return flask_app.extensions['test_socketio']


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio_client(flask_app, socketio):
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        test_client.get_received()  # flush the 'connected' greeting
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass
