"""
Lobby Module for Blank Slate.

Contains the process-wide room registry and connection tracking.
Handles room creation, joining, leaving and the move entry point.
"""

from .manager import LobbyManager
from .connection_manager import ConnectionManager, PlayerSession

__all__ = [
    'LobbyManager',
    'ConnectionManager',
    'PlayerSession'
]
