"""
Game constants for Blank Slate.

This module contains all constant values used throughout the game,
including room limits, content file names, and user-facing messages.
"""

# Room constants
MAX_PLAYERS_PER_ROOM = 20
ROOM_CODE_LENGTH = 4
ROOM_CODE_ALPHABET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'

# Authoritative hand size, whatever the client declares
CARDS_PER_PLAYER = 10

MAX_NAME_LENGTH = 30

# Content files per variant: (questions, answers)
CONTENT_FILES = {
    'family': ('clean-questions.txt', 'clean-answers.txt'),
    'full': ('questions.txt', 'answers.txt'),
}

# Accepted spellings of each variant on the wire
VARIANT_ALIASES = {
    'family': 'family',
    'clean': 'family',
    'pg': 'family',
    'full': 'full',
    'm': 'full',
    'mature': 'full',
}

# Join/create error messages, surfaced verbatim to the client
ERROR_MESSAGES = {
    'INVALID_ROOM': 'Invalid room code',
    'DUPLICATE_NAME': "Player with name '{name}' is already in game. Choose different name",
    'ROOM_FULL': 'Too many players in this room',
    'ROUND_IN_PROGRESS': 'Round is in progress - try joining later',
    'INVALID_NAME': f'Name must be 1-{MAX_NAME_LENGTH} characters',
    'CONTENT_EXHAUSTED': 'Ran out of cards - this room has been closed',
}

# Socket.IO event names
EVENTS = {
    'CREATE_GAME': 'createGame',
    'CREATE_GAME_SUCCESS': 'createGameSuccess',
    'CREATE_GAME_FAILURE': 'createGameFailure',
    'JOIN_GAME': 'joinGame',
    'JOIN_GAME_FAILURE': 'joinGameFailure',
    'MOVE': 'move',
    'ROOM_CLOSED': 'roomClosed',
}
