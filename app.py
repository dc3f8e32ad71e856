"""
Blank Slate - A Fill-in-the-Blank Party Game Backend

Flask-SocketIO server that runs the authoritative game rooms.
App.py is purely server setup and handler registration; all game rules
live in the game/ and lobby/ modules.
"""

import logging
from typing import Optional
from flask import Flask
from flask_socketio import SocketIO
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from config.settings import Settings, load_settings
from game import ContentLibrary
from lobby import LobbyManager, ConnectionManager
from handlers import register_socket_handlers, register_api_handlers

logger = logging.getLogger(__name__)

def configure_logging(level: str = 'INFO') -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

def create_app(settings: Optional[Settings] = None,
               content: Optional[ContentLibrary] = None,
               lobby_manager: Optional[LobbyManager] = None):
    """
    Application factory that creates and configures the Flask app.

    Args:
        settings: Runtime configuration (read from the environment when omitted)
        content: Preloaded card content (read from settings.content_dir when omitted)
        lobby_manager: Prebuilt lobby registry, mainly for tests

    Returns:
        tuple: (app, socketio)
    """
    settings = settings or load_settings()

    # Flask configuration
    app = Flask(__name__)
    app.config['SECRET_KEY'] = settings.secret_key
    app.config['TESTING'] = settings.testing

    # CORS configuration for the browser frontend
    CORS(app, origins=settings.cors_origins)

    # ProxyFix for deployment behind reverse proxy
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)

    # SocketIO configuration
    socketio = SocketIO(
        app,
        cors_allowed_origins=settings.cors_origins,
        async_mode=settings.async_mode,
        ping_timeout=60,
        ping_interval=25
    )

    # Process-wide registries, created once and injected into the handlers
    if lobby_manager is None:
        content = content or ContentLibrary.from_directory(settings.content_dir)
        lobby_manager = LobbyManager(content, ConnectionManager())

    register_socket_handlers(socketio, lobby_manager, lobby_manager.connection_manager)
    register_api_handlers(app, lobby_manager)

    app.extensions['lobby_manager'] = lobby_manager

    logger.info("Blank Slate server initialized successfully")
    return app, socketio

def main():
    settings = load_settings()
    configure_logging(settings.log_level)
    app, socketio = create_app(settings)

    logger.info(f"Starting Blank Slate game server on {settings.host}:{settings.port}")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"CORS origins: {settings.cors_origins}")

    run_options = {}
    if socketio.async_mode == 'threading':
        # Werkzeug dev server; deploy with eventlet or gevent installed instead
        run_options['allow_unsafe_werkzeug'] = True
    socketio.run(app, host=settings.host, port=settings.port, debug=settings.debug, **run_options)

if __name__ == '__main__':
    main()
