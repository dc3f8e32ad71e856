"""
Move parsing and dispatch.

Inbound ``move`` events are parsed into one dataclass per move kind,
each carrying only the fields it needs. The dispatcher applies a parsed
move to exactly one Room.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from .deck import Card
from .errors import IllegalMove
from .models import Player
from .room import Room

logger = logging.getLogger(__name__)


class MoveKind(Enum):
    """Moves a client may send."""
    PLAY_ANSWER_CARD = "PLAY_ANSWER_CARD"
    CHOOSE_WINNER_CARD = "CHOOSE_WINNER_CARD"
    DRAW_NEW_QUESTION = "DRAW_NEW_QUESTION"


@dataclass(frozen=True)
class PlayAnswerCard:
    player_id: int
    card: Card
    kind = MoveKind.PLAY_ANSWER_CARD


@dataclass(frozen=True)
class ChooseWinnerCard:
    player_id: int
    card: Card
    kind = MoveKind.CHOOSE_WINNER_CARD


@dataclass(frozen=True)
class DrawNewQuestion:
    player_id: int
    kind = MoveKind.DRAW_NEW_QUESTION


Move = Union[PlayAnswerCard, ChooseWinnerCard, DrawNewQuestion]


def _first(data: Dict[str, Any], *keys) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def parse_player_id(value) -> Optional[int]:
    """Player ids arrive as ints or numeric strings; bools are not ids."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip('-').isdigit():
        return int(value.strip())
    return None


def parse_move(data: Dict[str, Any], player_id: Optional[int] = None) -> Move:
    """
    Parse a raw ``move`` payload.

    Args:
        data: Event payload (``moveKind``/``move``, ``card``/``answer``, ``playerId``)
        player_id: Acting player when already known; overrides the payload

    Raises:
        IllegalMove: when the kind is unknown or a needed field is missing
    """
    if not isinstance(data, dict):
        raise IllegalMove("Move payload must be an object")

    raw_kind = _first(data, 'moveKind', 'move')
    try:
        kind = MoveKind(raw_kind)
    except ValueError:
        raise IllegalMove(f"Unknown move kind {raw_kind!r}") from None

    if player_id is None:
        player_id = parse_player_id(data.get('playerId'))
    if player_id is None:
        raise IllegalMove("Move is missing a player id")

    if kind == MoveKind.DRAW_NEW_QUESTION:
        return DrawNewQuestion(player_id=player_id)

    card = _first(data, 'card', 'answer')
    if not isinstance(card, str):
        raise IllegalMove(f"{kind.value} needs a card")
    if kind == MoveKind.PLAY_ANSWER_CARD:
        return PlayAnswerCard(player_id=player_id, card=card)
    return ChooseWinnerCard(player_id=player_id, card=card)


class MoveDispatcher:
    """Applies parsed moves to a room. The caller holds ``room.lock``."""

    def apply(self, room: Room, move: Move) -> Optional[Player]:
        """
        Validate and apply one move.

        Returns:
            The round winner for CHOOSE_WINNER_CARD, otherwise None

        Raises:
            IllegalMove: when the actor, role or round state forbids the move
            ContentExhausted: when a required draw finds both piles empty
        """
        if isinstance(move, PlayAnswerCard):
            room.play_answer_card(move.player_id, move.card)
            return None
        if isinstance(move, ChooseWinnerCard):
            return room.choose_winner_card(move.player_id, move.card)
        if isinstance(move, DrawNewQuestion):
            room.draw_new_question(move.player_id)
            return None
        raise TypeError(f"Unhandled move type {type(move).__name__}")
