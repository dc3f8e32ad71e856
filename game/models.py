"""
Data models for game management.

These represent the per-seat player record and the enumerations that
drive the round state machine.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
from enum import Enum

from .deck import Card


class PlayerRole(Enum):
    """Player role enumeration."""
    JUDGE = "JUDGE"
    NON_JUDGE = "NON_JUDGE"


class PlayerState(Enum):
    """Per-round progress of a non-judge player."""
    NOT_PLAYED_CARD = "NOT_PLAYED_CARD"
    PLAYED_CARD = "PLAYED_CARD"
    DREW_NEW_CARD = "DREW_NEW_CARD"


class GameStatus(Enum):
    """Round status enumeration."""
    WAITING_FOR_ANSWERS = "WAITING FOR ANSWERS"
    ALL_CARDS_PLAYED = "ALL CARDS PLAYED"
    ALL_CARDS_REVEALED = "ALL CARDS REVEALED"
    WINNER_CHOSEN = "WINNER_CHOSEN"


@dataclass
class Player:
    """Represents one seat in a room."""
    id: int
    name: str
    hand: List[Optional[Card]] = field(default_factory=list)
    role: PlayerRole = PlayerRole.NON_JUDGE
    state: PlayerState = PlayerState.NOT_PLAYED_CARD
    final_card: Optional[Card] = None
    score: int = 0
    winning_answers: List[Card] = field(default_factory=list)
    winning_questions: List[Card] = field(default_factory=list)

    @property
    def is_judge(self) -> bool:
        return self.role == PlayerRole.JUDGE

    @property
    def has_played(self) -> bool:
        return self.state == PlayerState.PLAYED_CARD

    @property
    def cards_in_hand(self) -> List[Card]:
        """Populated hand slots, in slot order."""
        return [card for card in self.hand if card is not None]

    def holds(self, card: Card) -> bool:
        return card in self.hand

    def remove_from_hand(self, card: Card) -> None:
        """Empty the first slot holding card; no-op when it is not held."""
        try:
            index = self.hand.index(card)
        except ValueError:
            return
        self.hand[index] = None

    def add_to_hand(self, card: Card) -> None:
        """Fill the first empty slot with card."""
        try:
            index = self.hand.index(None)
        except ValueError:
            raise ValueError(f"Hand of player {self.id} is already full") from None
        self.hand[index] = card

    def record_win(self, answer: Card, question: Optional[Card]) -> None:
        self.score += 1
        self.winning_answers.append(answer)
        self.winning_questions.append(question)

    def reset_for_round(self) -> None:
        self.state = PlayerState.NOT_PLAYED_CARD
        self.final_card = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'name': self.name,
            'cardsInHand': list(self.hand),
            'role': self.role.value,
            'state': self.state.value,
            'finalCard': self.final_card,
            'score': self.score,
            'winningAnswers': list(self.winning_answers),
            'winningQuestions': list(self.winning_questions)
        }
