"""
Game room state machine.

A Room owns one game's full state: both decks, the ordered players, the
current question, the answer cards in the center and the round status.
Its public methods are the only mutation entry points. They are not
thread-safe on their own; callers hold ``room.lock`` for the whole call
(the LobbyManager does this for every event it handles).

Round flow:
    WAITING_FOR_ANSWERS -> ALL_CARDS_REVEALED -> WINNER_CHOSEN -> next round
"""

import logging
import random
import threading
from typing import Dict, List, Optional, Any

from utils.constants import MAX_PLAYERS_PER_ROOM, CARDS_PER_PLAYER
from .deck import Card, Deck
from .errors import DuplicateName, RoomFull, RoundInProgress, IllegalMove
from .models import Player, PlayerRole, PlayerState, GameStatus

logger = logging.getLogger(__name__)


class Room:
    """One independent game session, keyed by its room code."""

    def __init__(self, code: str, question_deck: Deck, answer_deck: Deck,
                 variant: str = 'family',
                 max_players: int = MAX_PLAYERS_PER_ROOM,
                 cards_per_player: int = CARDS_PER_PLAYER,
                 rng: Optional[random.Random] = None):
        self.code = code
        self.variant = variant
        self.question_deck = question_deck
        self.answer_deck = answer_deck
        self.max_players = max_players
        self.cards_per_player = cards_per_player
        self.rng = rng or random.Random()

        # Insertion order is the judge rotation order
        self.players: Dict[int, Player] = {}
        self.judge = 0
        self.answer_cards_in_center: List[Card] = []
        self.current_question: Optional[Card] = None
        self.status = GameStatus.WAITING_FOR_ANSWERS
        self.winner_card: Optional[Card] = None
        self.round_num = 1
        self.version = 0

        self.lock = threading.Lock()
        self.closed = False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def player_names(self) -> List[str]:
        return [player.name for player in self.players.values()]

    @property
    def is_empty(self) -> bool:
        return not self.players

    def get_player(self, player_id) -> Optional[Player]:
        return self.players.get(player_id)

    def get_judge(self) -> Optional[Player]:
        return self.players.get(self.judge)

    def non_judges(self) -> List[Player]:
        return [p for p in self.players.values() if not p.is_judge]

    def everyone_played(self) -> bool:
        """True when there is at least one non-judge and all of them have played."""
        non_judges = self.non_judges()
        return bool(non_judges) and all(p.has_played for p in non_judges)

    def next_player_id(self, after_id: int) -> Optional[int]:
        """
        The player seated after ``after_id`` in insertion order, wrapping.

        Returns None when ``after_id`` is the only player.
        """
        ids = list(self.players)
        index = ids.index(after_id)
        for player_id in ids[index + 1:] + ids[:index]:
            return player_id
        return None

    def find_player_by_final_card(self, card: Card) -> Optional[Player]:
        """First player, in seat order, whose played card is ``card``."""
        for player in self.players.values():
            if player.final_card == card:
                return player
        return None

    # ------------------------------------------------------------------
    # Lifecycle and membership
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Draw the first question of a brand-new room."""
        self.current_question = self.question_deck.draw()
        logger.info(f"Room {self.code} opened with {self.variant} content")

    def add_player(self, name: str) -> Player:
        """
        Seat a new player and deal them a full hand.

        Raises:
            DuplicateName, RoomFull, RoundInProgress
        """
        if name in self.player_names:
            raise DuplicateName(name)
        if len(self.players) >= self.max_players:
            raise RoomFull()
        # Nobody joins while the played cards are being judged
        if len(self.players) >= 2 and self.everyone_played():
            raise RoundInProgress()

        player_id = max(self.players) + 1 if self.players else 0
        hand = [self.answer_deck.draw() for _ in range(self.cards_per_player)]
        player = Player(
            id=player_id,
            name=name,
            hand=hand,
            role=PlayerRole.JUDGE if player_id == self.judge else PlayerRole.NON_JUDGE
        )
        self.players[player_id] = player
        self._refresh_reveal()
        self.version += 1

        logger.info(f"Player {name} ({player_id}) joined room {self.code} as {player.role.value}")
        return player

    def remove_player(self, player_id: int) -> Optional[Player]:
        """
        Take a player out of the room, returning all of their cards to the
        answer discard pile and handing the judge role on if they held it.

        Returns the removed player, or None if the id is unknown.
        """
        player = self.players.get(player_id)
        if player is None:
            return None

        self.answer_deck.discard_all(player.cards_in_hand)
        player.hand = [None] * len(player.hand)
        if player.final_card is not None and player.final_card in self.answer_cards_in_center:
            self.answer_cards_in_center.remove(player.final_card)
            self.answer_deck.discard(player.final_card)

        if player.is_judge:
            successor_id = self.next_player_id(player_id)
            if successor_id is not None:
                self._promote_mid_round(self.players[successor_id])

        del self.players[player_id]
        if self.players:
            self._refresh_reveal()
        self.version += 1

        logger.info(f"Player {player.name} ({player_id}) left room {self.code}")
        return player

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------

    def play_answer_card(self, player_id: int, card: Card) -> None:
        """A non-judge puts one card from their hand into the center."""
        player = self._require_player(player_id)
        if player.is_judge:
            raise IllegalMove(f"Judge {player_id} cannot play an answer card")
        if player.state != PlayerState.NOT_PLAYED_CARD:
            raise IllegalMove(f"Player {player_id} already played this round")
        if self.status == GameStatus.WINNER_CHOSEN:
            raise IllegalMove("Winner already chosen this round")
        if not player.holds(card):
            raise IllegalMove(f"Player {player_id} does not hold {card!r}")

        # Draw first so an exhausted deck leaves the room untouched
        replacement = self.answer_deck.draw()
        player.final_card = card
        player.remove_from_hand(card)
        self.answer_cards_in_center.append(card)
        player.add_to_hand(replacement)
        player.state = PlayerState.PLAYED_CARD
        self._refresh_reveal()
        self.version += 1

    def choose_winner_card(self, player_id: int, card: Card) -> Player:
        """The judge picks the round's winning answer; returns the winner."""
        player = self._require_player(player_id)
        if not player.is_judge:
            raise IllegalMove(f"Player {player_id} is not the judge")
        if self.status == GameStatus.WINNER_CHOSEN:
            raise IllegalMove("Winner already chosen this round")
        if card not in self.answer_cards_in_center:
            raise IllegalMove(f"{card!r} is not in the center")
        # TODO: duplicate card text in one round credits the first seat; carry a played-by id with center cards
        winner = self.find_player_by_final_card(card)
        if winner is None:
            raise IllegalMove(f"Nobody played {card!r}")

        self.winner_card = card
        self.status = GameStatus.WINNER_CHOSEN
        winner.record_win(card, self.current_question)
        self.version += 1

        logger.info(f"Room {self.code} round {self.round_num}: {winner.name} won")
        return winner

    def draw_new_question(self, player_id: int) -> None:
        """
        Roll the room over to the next round and rotate the judge.

        Any seated player may ask once the winner is chosen; rotation
        always follows the current judge.
        """
        self._require_player(player_id)
        if self.status != GameStatus.WINNER_CHOSEN:
            raise IllegalMove("No winner chosen yet")

        self.answer_deck.discard_all(self.answer_cards_in_center)
        self.answer_cards_in_center = []
        if self.current_question is not None:
            self.question_deck.discard(self.current_question)
        self.current_question = self.question_deck.draw()
        self.winner_card = None
        self.status = GameStatus.WAITING_FOR_ANSWERS
        self.round_num += 1

        successor_id = self.next_player_id(self.judge)
        if successor_id is not None:
            self.get_judge().role = PlayerRole.NON_JUDGE
            self.judge = successor_id
            self.players[successor_id].role = PlayerRole.JUDGE
        for each in self.players.values():
            each.reset_for_round()
        self.version += 1

        logger.info(
            f"Room {self.code} started round {self.round_num}, judge is {self.players[self.judge].name}"
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_player(self, player_id) -> Player:
        player = self.players.get(player_id)
        if player is None:
            raise IllegalMove(f"Unknown player {player_id!r} in room {self.code}")
        return player

    def _promote_mid_round(self, successor: Player) -> None:
        old_judge = self.get_judge()
        if old_judge is not None:
            old_judge.role = PlayerRole.NON_JUDGE
        self.judge = successor.id
        successor.role = PlayerRole.JUDGE
        # A judge never judges their own card
        if self.status != GameStatus.WINNER_CHOSEN and successor.final_card is not None:
            if successor.final_card in self.answer_cards_in_center:
                self.answer_cards_in_center.remove(successor.final_card)
                self.answer_deck.discard(successor.final_card)
            successor.reset_for_round()
        logger.info(f"Room {self.code}: {successor.name} promoted to judge")

    def _refresh_reveal(self) -> None:
        if self.status == GameStatus.WINNER_CHOSEN:
            return
        if self.everyone_played():
            if self.status != GameStatus.ALL_CARDS_REVEALED:
                # Hide who played what
                self.rng.shuffle(self.answer_cards_in_center)
                self.status = GameStatus.ALL_CARDS_REVEALED
        elif self.status == GameStatus.ALL_CARDS_REVEALED:
            self.status = GameStatus.WAITING_FOR_ANSWERS

    def to_dict(self) -> Dict[str, Any]:
        """
        Build a broadcast snapshot.

        Every list is copied so the snapshot shares nothing with live
        state. Players go out as ordered [id, player] pairs to keep the
        judge rotation order across the wire. Piles are sent as counts.
        """
        return {
            'roomCode': self.code,
            'gameId': self.code,
            'variant': self.variant,
            'version': self.version,
            'gameStatus': self.status.value,
            'judge': self.judge,
            'roundNum': self.round_num,
            'currentQuestion': self.current_question,
            'answerCards': list(self.answer_cards_in_center),
            'winnerCard': self.winner_card,
            'numCardsPerPlayer': self.cards_per_player,
            'maxPlayers': self.max_players,
            'playerNames': self.player_names,
            'players': [[player_id, player.to_dict()] for player_id, player in self.players.items()],
            'questionsRemaining': len(self.question_deck.draw_pile),
            'questionsDiscarded': len(self.question_deck.discard_pile),
            'answersRemaining': len(self.answer_deck.draw_pile),
            'answersDiscarded': len(self.answer_deck.discard_pile)
        }
