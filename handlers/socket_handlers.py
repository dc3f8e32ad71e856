"""
Socket.IO Event Handlers for Blank Slate.

Pure routing layer that delegates to the lobby manager.
Contains no game logic - only event routing, room channel membership
and response formatting.
"""

import logging
from flask import request
from flask_socketio import emit, join_room, leave_room, close_room

from utils.constants import EVENTS, ERROR_MESSAGES
from utils.helpers import normalize_room_code

logger = logging.getLogger(__name__)

def register_socket_handlers(socketio, lobby_manager, connection_manager):
    """
    Register all Socket.IO event handlers.

    Args:
        socketio: SocketIO instance
        lobby_manager: Lobby registry and room mutation path
        connection_manager: Session directory (connection -> seat)
    """

    def broadcast_state(room_code, state):
        """Push a room snapshot to every connection on that room's channel."""
        if state is None:
            return
        socketio.emit(room_code, {'state': state}, to=room_code)

    def announce_room_closed(room_code):
        socketio.emit(EVENTS['ROOM_CLOSED'], {
            'roomCode': room_code,
            'reason': ERROR_MESSAGES['CONTENT_EXHAUSTED']
        }, to=room_code)
        close_room(room_code)

    def release_seat(socket_id):
        """A connection holds one seat at a time; give up the old one first."""
        if not connection_manager.get_session(socket_id):
            return
        success, message, result = lobby_manager.disconnect_player(socket_id)
        if success and result:
            leave_room(result['room_code'])
            broadcast_state(result['room_code'], result['state'])
            logger.info(message)

    @socketio.on('connect')
    def handle_connect():
        """Handle client connection."""
        logger.info(f"Client connected: {request.sid}")
        emit('connected', {'message': 'Connected to server successfully'})

    @socketio.on('disconnect')
    def handle_disconnect(reason=None):
        """Handle client disconnection by leaving the player's room."""
        logger.info(f"Client disconnected: {request.sid}")

        try:
            success, message, result = lobby_manager.disconnect_player(request.sid)
            if success and result:
                logger.info(message)
                broadcast_state(result['room_code'], result['state'])

        except Exception as e:
            logger.error(f"Error handling disconnect: {e}")

    @socketio.on(EVENTS['CREATE_GAME'])
    def handle_create_game(data):
        """Handle game creation request."""
        try:
            data = data if isinstance(data, dict) else {}
            release_seat(request.sid)

            success, message, result = lobby_manager.create_game(
                name=data.get('name'),
                variant=data.get('variant', data.get('version')),
                socket_id=request.sid
            )

            if success:
                room_code = result['room_code']
                join_room(room_code)
                emit(EVENTS['CREATE_GAME_SUCCESS'], {
                    'roomCode': room_code,
                    'playerId': result['player_id']
                })
                broadcast_state(room_code, result['state'])
            else:
                emit(EVENTS['CREATE_GAME_FAILURE'], {'errorMessage': message})

        except Exception as e:
            logger.error(f"Error creating game: {e}")
            emit(EVENTS['CREATE_GAME_FAILURE'], {'errorMessage': 'Failed to create game'})

    @socketio.on(EVENTS['JOIN_GAME'])
    def handle_join_game(data):
        """Handle a player joining an existing room."""
        try:
            data = data if isinstance(data, dict) else {}
            room_code = data.get('roomCode', data.get('room'))
            name = data.get('name')
            logger.info(f"Player {name!r} trying to join room {room_code!r}")

            session = connection_manager.get_session(request.sid)
            if session and session.room_code == normalize_room_code(room_code):
                emit(EVENTS['JOIN_GAME_FAILURE'], {'errorMessage': 'Already in this game'})
                return
            release_seat(request.sid)

            success, message, result = lobby_manager.join_game(
                name=name,
                room_code=room_code,
                socket_id=request.sid
            )

            if success:
                room_code = result['room_code']
                join_room(room_code)
                # Addressed to the joining connection only
                emit(room_code, {'joinGameSuccess': True, 'playerId': result['player_id']})
                broadcast_state(room_code, result['state'])
            else:
                emit(EVENTS['JOIN_GAME_FAILURE'], {'errorMessage': message})
                if result and result.get('room_closed'):
                    announce_room_closed(result['room_code'])

        except Exception as e:
            logger.error(f"Error joining game: {e}")
            emit(EVENTS['JOIN_GAME_FAILURE'], {'errorMessage': 'Failed to join game'})

    @socketio.on(EVENTS['MOVE'])
    def handle_move(data):
        """Handle a game move. Rejected moves get no reply and no broadcast."""
        try:
            data = data if isinstance(data, dict) else {}
            room_code = data.get('roomCode', data.get('gameRoom'))

            success, message, result = lobby_manager.apply_move(room_code, data, request.sid)

            if success:
                broadcast_state(result['room_code'], result['state'])
            elif result and result.get('room_closed'):
                announce_room_closed(result['room_code'])

        except Exception as e:
            logger.error(f"Error handling move: {e}")

    logger.info("Socket.IO handlers registered successfully")
