"""
Card decks and the content library they are built from.

A Deck is a draw pile plus a discard pile of opaque text cards. The
discard pile is shuffled back into the draw pile lazily, only when a
draw finds the draw pile empty.
"""

import logging
import os
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from utils.constants import CONTENT_FILES
from utils.helpers import normalize_variant
from .errors import ContentExhausted

logger = logging.getLogger(__name__)

Card = str


class Deck:
    """Draw pile and discard pile for one card type."""

    def __init__(self, name: str, cards: List[Card], rng: Optional[random.Random] = None):
        self.name = name
        self.rng = rng or random.Random()
        # Treated as a stack: the top card is the last element
        self.draw_pile: List[Card] = list(cards)
        self.discard_pile: List[Card] = []

    def __len__(self) -> int:
        return len(self.draw_pile) + len(self.discard_pile)

    def draw(self) -> Card:
        """Pop the top card, reshuffling the discard pile in if needed."""
        if not self:
            raise ContentExhausted(f"No {self.name} cards left to draw")
        if not self.draw_pile:
            self.reshuffle()
        return self.draw_pile.pop()

    def discard(self, card: Card) -> None:
        self.discard_pile.append(card)

    def discard_all(self, cards) -> None:
        for card in cards:
            self.discard(card)

    def reshuffle(self) -> None:
        """Move the whole discard pile, shuffled, into the draw pile."""
        if not self.discard_pile:
            return
        pile = self.discard_pile
        self.discard_pile = []
        self.rng.shuffle(pile)
        self.draw_pile.extend(pile)
        logger.debug(f"Reshuffled {len(pile)} {self.name} cards into the draw pile")


@dataclass(frozen=True)
class ContentPool:
    """The full set of cards of one variant."""
    questions: Tuple[Card, ...]
    answers: Tuple[Card, ...]


class ContentLibrary:
    """
    Card content loaded once at process start.

    Rooms never share decks: each room gets its own shuffled copies of
    the pool selected by its variant.
    """

    def __init__(self, pools: Dict[str, ContentPool]):
        self.pools = dict(pools)

    @classmethod
    def from_directory(cls, content_dir: str) -> 'ContentLibrary':
        """Load every variant's question and answer files from a directory."""
        pools = {}
        for variant, (question_file, answer_file) in CONTENT_FILES.items():
            questions = read_card_file(os.path.join(content_dir, question_file))
            answers = read_card_file(os.path.join(content_dir, answer_file))
            pools[variant] = ContentPool(questions=tuple(questions), answers=tuple(answers))
            logger.info(
                f"Loaded {variant} content: {len(questions)} questions, {len(answers)} answers"
            )
        return cls(pools)

    def pool(self, variant) -> ContentPool:
        return self.pools[normalize_variant(variant)]

    def new_decks(self, variant, rng: Optional[random.Random] = None) -> Tuple[Deck, Deck]:
        """Build a fresh (question deck, answer deck) pair for a new room."""
        rng = rng or random.Random()
        pool = self.pool(variant)
        questions = list(pool.questions)
        answers = list(pool.answers)
        rng.shuffle(questions)
        rng.shuffle(answers)
        return Deck('question', questions, rng), Deck('answer', answers, rng)


def read_card_file(path: str) -> List[Card]:
    """One card per line; blank lines are skipped, duplicates are kept."""
    with open(path, encoding='utf-8') as fh:
        cards = [line.strip() for line in fh]
    cards = [card for card in cards if card]
    if not cards:
        logger.warning(f"Content file {path} has no cards")
    return cards
