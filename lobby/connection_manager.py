"""
Connection Manager for Blank Slate rooms.

Maps each live Socket.IO connection to the seat it holds, so that a
disconnect can be resolved to the right room and player.
Contains no game logic - purely connection and session tracking.
"""

import logging
import threading
from typing import Dict, Optional, List
from dataclasses import dataclass
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

@dataclass
class PlayerSession:
    """Information about the seat a connection holds."""
    socket_id: str
    player_id: int
    room_code: str
    connection_time: datetime

class ConnectionManager:
    """
    Session directory: connection handle -> (player id, room code).

    Entries are created on a successful create/join and removed on
    disconnect. All access goes through the methods below, which share
    one lock.
    """

    def __init__(self):
        self.sessions: Dict[str, PlayerSession] = {}  # socket_id -> PlayerSession
        self._lock = threading.Lock()
        logger.debug("Connection manager initialized")

    def register(self, socket_id: str, player_id: int, room_code: str) -> PlayerSession:
        """
        Bind a connection to a seat, replacing any previous binding.

        Args:
            socket_id: Unique socket connection ID
            player_id: Seat id within the room
            room_code: Code of the room

        Returns:
            The new session
        """
        session = PlayerSession(
            socket_id=socket_id,
            player_id=player_id,
            room_code=room_code,
            connection_time=datetime.now(timezone.utc)
        )
        with self._lock:
            self.sessions[socket_id] = session
        logger.info(f"Registered connection {socket_id} as player {player_id} in room {room_code}")
        return session

    def unregister(self, socket_id: str) -> Optional[PlayerSession]:
        """Remove and return a connection's session, if it has one."""
        with self._lock:
            session = self.sessions.pop(socket_id, None)
        if session:
            logger.info(f"Unregistered connection {socket_id} (player {session.player_id}, room {session.room_code})")
        return session

    def get_session(self, socket_id: str) -> Optional[PlayerSession]:
        with self._lock:
            return self.sessions.get(socket_id)

    def drop_room(self, room_code: str) -> List[str]:
        """
        Forget every connection seated in a room.

        Returns:
            Socket ids that were dropped
        """
        with self._lock:
            dropped = [sid for sid, s in self.sessions.items() if s.room_code == room_code]
            for sid in dropped:
                del self.sessions[sid]
        if dropped:
            logger.info(f"Dropped {len(dropped)} sessions for room {room_code}")
        return dropped

    def count(self) -> int:
        with self._lock:
            return len(self.sessions)
