"""
Utilities module for Blank Slate.

This module contains constants and helper functions
used throughout the application.
"""

from .constants import (
    MAX_PLAYERS_PER_ROOM, CARDS_PER_PLAYER, ROOM_CODE_LENGTH,
    CONTENT_FILES, ERROR_MESSAGES, EVENTS
)
from .helpers import (
    generate_room_code, normalize_room_code, normalize_variant,
    validate_player_name
)

__all__ = [
    'MAX_PLAYERS_PER_ROOM',
    'CARDS_PER_PLAYER',
    'ROOM_CODE_LENGTH',
    'CONTENT_FILES',
    'ERROR_MESSAGES',
    'EVENTS',
    'generate_room_code',
    'normalize_room_code',
    'normalize_variant',
    'validate_player_name'
]
