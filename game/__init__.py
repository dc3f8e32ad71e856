"""
Game Module for Blank Slate.

Contains all game-specific logic: decks, players, the room state
machine and move dispatch. Rooms live in the lobby registry but game
rules are kept separate from lobby management.
"""

from .deck import Card, Deck, ContentLibrary, ContentPool
from .errors import (
    GameError, InvalidRoom, DuplicateName, RoomFull, RoundInProgress,
    InvalidName, IllegalMove, ContentExhausted
)
from .models import Player, PlayerRole, PlayerState, GameStatus
from .moves import MoveKind, PlayAnswerCard, ChooseWinnerCard, DrawNewQuestion, MoveDispatcher, parse_move
from .room import Room

__all__ = [
    # Cards
    'Card',
    'Deck',
    'ContentLibrary',
    'ContentPool',

    # Data models
    'Player',
    'PlayerRole',
    'PlayerState',
    'GameStatus',
    'Room',

    # Moves
    'MoveKind',
    'PlayAnswerCard',
    'ChooseWinnerCard',
    'DrawNewQuestion',
    'MoveDispatcher',
    'parse_move',

    # Errors
    'GameError',
    'InvalidRoom',
    'DuplicateName',
    'RoomFull',
    'RoundInProgress',
    'InvalidName',
    'IllegalMove',
    'ContentExhausted'
]
