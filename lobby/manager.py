"""
Main lobby management system.

Holds the process-wide registry of live rooms, creates and destroys
rooms, and runs every join, move and leave as one atomic unit against a
single room while holding that room's lock.
"""

import logging
import random
import threading
from typing import Optional, Dict, Tuple, Any

from game.deck import ContentLibrary
from game.errors import GameError, JOIN_ERRORS, InvalidRoom, InvalidName, IllegalMove, ContentExhausted
from game.moves import MoveDispatcher, parse_move, parse_player_id
from game.room import Room
from utils.constants import MAX_PLAYERS_PER_ROOM, CARDS_PER_PLAYER, ERROR_MESSAGES
from utils.helpers import generate_room_code, normalize_room_code, normalize_variant, validate_player_name
from .connection_manager import ConnectionManager

logger = logging.getLogger(__name__)

Result = Tuple[bool, str, Optional[Dict[str, Any]]]

class LobbyManager:
    """Lobby registry and the single mutation path into rooms."""

    def __init__(self, content: ContentLibrary, connection_manager: ConnectionManager,
                 rng: Optional[random.Random] = None,
                 max_players: int = MAX_PLAYERS_PER_ROOM,
                 cards_per_player: int = CARDS_PER_PLAYER):
        self.content = content
        self.connection_manager = connection_manager
        self.rng = rng or random.Random()
        self.max_players = max_players
        self.cards_per_player = cards_per_player
        self.dispatcher = MoveDispatcher()
        self.active_rooms: Dict[str, Room] = {}  # room_code -> Room
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def get_room(self, room_code) -> Optional[Room]:
        with self._lock:
            return self.active_rooms.get(normalize_room_code(room_code))

    def get_snapshot(self, room_code) -> Optional[Dict[str, Any]]:
        """Current state of a room, or None if it does not exist."""
        room = self.get_room(room_code)
        if not room:
            return None
        with room.lock:
            if room.closed:
                return None
            return room.to_dict()

    def get_stats(self) -> Dict[str, int]:
        with self._lock:
            rooms = list(self.active_rooms.values())
        return {
            'active_rooms': len(rooms),
            'active_players': sum(len(room.players) for room in rooms),
            'connections': self.connection_manager.count()
        }

    def _destroy_room(self, room: Room) -> None:
        """Remove a room from the registry. Caller holds room.lock."""
        room.closed = True
        with self._lock:
            if self.active_rooms.get(room.code) is room:
                del self.active_rooms[room.code]
        logger.info(f"Room {room.code} destroyed")

    # ------------------------------------------------------------------
    # Create / join / leave
    # ------------------------------------------------------------------

    def create_game(self, name, variant, socket_id: str) -> Result:
        """
        Create a room and seat its creator as player 0, the first judge.

        Returns:
            tuple: (success, message, {'room_code', 'player_id', 'state'})
        """
        is_valid, error_msg = validate_player_name(name)
        if not is_valid:
            logger.warning(f"Create game rejected: {error_msg}")
            return False, error_msg, None
        name = name.strip()
        variant = normalize_variant(variant)

        try:
            question_deck, answer_deck = self.content.new_decks(variant, self.rng)
            with self._lock:
                code = generate_room_code(lambda c: c in self.active_rooms, self.rng)
                room = Room(code, question_deck, answer_deck, variant=variant,
                            max_players=self.max_players,
                            cards_per_player=self.cards_per_player,
                            rng=self.rng)
                with room.lock:
                    room.start()
                    player = room.add_player(name)
                    self.active_rooms[code] = room
                    self.connection_manager.register(socket_id, player.id, code)
                    state = room.to_dict()
        except ContentExhausted as e:
            logger.error(f"Cannot create {variant} room: {e.message}")
            return False, ERROR_MESSAGES['CONTENT_EXHAUSTED'], None

        logger.info(f"Created room {code} for {name}")
        return True, "Game created", {'room_code': code, 'player_id': player.id, 'state': state}

    def join_game(self, name, room_code, socket_id: str) -> Result:
        """
        Seat a player in an existing room.

        Returns:
            tuple: (success, message, {'room_code', 'player_id', 'state'})
        """
        room_code = normalize_room_code(room_code)
        try:
            room = self.get_room(room_code)
            if not room:
                raise InvalidRoom()
            is_valid, error_msg = validate_player_name(name)
            if not is_valid:
                raise InvalidName(error_msg)
            name = name.strip()
            with room.lock:
                # Destroyed between lookup and lock
                if room.closed:
                    raise InvalidRoom()
                try:
                    player = room.add_player(name)
                except ContentExhausted as e:
                    self._close_room(room, e)
                    return False, ERROR_MESSAGES['CONTENT_EXHAUSTED'], {'room_code': room_code, 'room_closed': True}
                # Seat and session change together under the room lock
                self.connection_manager.register(socket_id, player.id, room_code)
                state = room.to_dict()
        except JOIN_ERRORS as e:
            logger.warning(f"Join of {name!r} to room {room_code} failed: {e.message}")
            return False, e.message, None

        return True, f"{name} joined", {'room_code': room_code, 'player_id': player.id, 'state': state}

    def disconnect_player(self, socket_id: str) -> Result:
        """
        Remove the player bound to a connection from their room.

        Returns:
            tuple: (success, message, {'room_code', 'state'}); state is
            None when the room was destroyed because it became empty
        """
        session = self.connection_manager.unregister(socket_id)
        if not session:
            return False, "Connection has no seat", None

        room = self.get_room(session.room_code)
        if not room:
            return False, "Room already closed", None

        with room.lock:
            if room.closed:
                return False, "Room already closed", None
            player = room.remove_player(session.player_id)
            if player is None:
                return False, "Player not in room", None
            if room.is_empty:
                self._destroy_room(room)
                state = None
            else:
                state = room.to_dict()

        return True, f"{player.name} left the game", {'room_code': room.code, 'state': state}

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------

    def apply_move(self, room_code, data: Dict[str, Any], socket_id: str) -> Result:
        """
        Validate and apply a move sent by a connection.

        The actor is the player bound to the connection; a payload
        playerId that disagrees with that binding makes the move illegal.

        Returns:
            tuple: (success, message, {'room_code', 'state'} or
            {'room_code', 'room_closed'})
        """
        room_code = normalize_room_code(room_code)
        try:
            session = self.connection_manager.get_session(socket_id)
            if not session or session.room_code != room_code:
                raise IllegalMove(f"Connection {socket_id} is not seated in room {room_code}")
            claimed = data.get('playerId') if isinstance(data, dict) else None
            if claimed is not None and parse_player_id(claimed) != session.player_id:
                raise IllegalMove(f"Connection {socket_id} cannot move for player {claimed!r}")
            move = parse_move(data, player_id=session.player_id)

            room = self.get_room(room_code)
            if not room:
                raise IllegalMove(f"Room {room_code} does not exist")
            with room.lock:
                if room.closed:
                    raise IllegalMove(f"Room {room_code} is closed")
                try:
                    self.dispatcher.apply(room, move)
                except ContentExhausted as e:
                    self._close_room(room, e)
                    return False, ERROR_MESSAGES['CONTENT_EXHAUSTED'], {'room_code': room_code, 'room_closed': True}
                state = room.to_dict()
        except IllegalMove as e:
            logger.debug(f"Dropped move in room {room_code}: {e.message}")
            return False, e.message, None

        return True, f"{move.kind.value} applied", {'room_code': room_code, 'state': state}

    def _close_room(self, room: Room, error: GameError) -> None:
        """Content ran out: the room cannot continue. Caller holds room.lock."""
        logger.error(f"Closing room {room.code}: {error.message}")
        self._destroy_room(room)
        self.connection_manager.drop_room(room.code)
