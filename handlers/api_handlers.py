"""
API Route Handlers for Blank Slate.

Read-only HTTP surface: health, live stats, and room snapshots.
Contains no game logic - only request/response handling.
"""

import logging
from flask import jsonify

logger = logging.getLogger(__name__)

def register_api_handlers(app, lobby_manager):
    """
    Register all API route handlers.

    Args:
        app: Flask application instance
        lobby_manager: Lobby registry
    """

    @app.route('/api/health')
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'message': 'Blank Slate game server is running'
        })

    @app.route('/api/stats')
    def get_stats():
        """Live room and player counts."""
        return jsonify(lobby_manager.get_stats())

    @app.route('/api/rooms/<string:room_code>')
    def get_room_state(room_code):
        """Current snapshot of one room."""
        state = lobby_manager.get_snapshot(room_code)
        if state is None:
            return jsonify({'error': 'Room not found'}), 404
        return jsonify({'state': state})

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Internal server error: {error}")
        return jsonify({'error': 'Internal server error'}), 500
