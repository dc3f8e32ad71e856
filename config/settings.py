import os
from dataclasses import dataclass, field
from typing import List, Optional
from dotenv import load_dotenv

# Render Configuration
IS_RENDER = os.environ.get("RENDER", "") == "true"

# Only load the .env file if we're not on Render (i.e., we are in a local environment)
if not IS_RENDER:
    load_dotenv()

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Flask Configuration
SECRET_KEY = os.getenv('SECRET_KEY', 'a_very_secret_key_that_should_be_changed')
CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

# Card content (four line-delimited files, see utils.constants.CONTENT_FILES)
CONTENT_DIR = os.getenv('CONTENT_DIR', os.path.join(PROJECT_ROOT, 'data'))

# Server Configuration
HOST = os.getenv('HOST', '0.0.0.0')
PORT = int(os.getenv('PORT', 5000))
DEBUG = not IS_RENDER and (
    os.getenv('DEBUG', '').lower() == 'true' or os.getenv('FLASK_ENV', 'production') == 'development'
)
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

# None lets Flask-SocketIO pick the best installed server (eventlet, gevent or threading)
SOCKETIO_ASYNC_MODE = os.getenv('SOCKETIO_ASYNC_MODE') or None


@dataclass
class Settings:
    """Runtime configuration handed to the application factory."""
    secret_key: str = SECRET_KEY
    cors_origins: List[str] = field(default_factory=lambda: CORS_ORIGINS.split(','))
    content_dir: str = CONTENT_DIR
    host: str = HOST
    port: int = PORT
    debug: bool = DEBUG
    log_level: str = LOG_LEVEL
    async_mode: Optional[str] = SOCKETIO_ASYNC_MODE
    testing: bool = False


def load_settings(**overrides) -> Settings:
    """Build settings from the environment, with keyword overrides for tests."""
    return Settings(**overrides)
