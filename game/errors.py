"""
Game error taxonomy.

Join-time errors carry the user-facing message shown to the requesting
client. IllegalMove is dropped silently by the lobby layer.
ContentExhausted is fatal for the room that raised it.
"""

from utils.constants import ERROR_MESSAGES


class GameError(Exception):
    """Base exception for game-related errors."""
    code = "GAME_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"[{self.code}] {message}")


class InvalidRoom(GameError):
    code = "INVALID_ROOM"

    def __init__(self, message: str = ERROR_MESSAGES['INVALID_ROOM']):
        super().__init__(message)


class DuplicateName(GameError):
    code = "DUPLICATE_NAME"

    def __init__(self, name: str):
        self.name = name
        super().__init__(ERROR_MESSAGES['DUPLICATE_NAME'].format(name=name))


class RoomFull(GameError):
    code = "ROOM_FULL"

    def __init__(self, message: str = ERROR_MESSAGES['ROOM_FULL']):
        super().__init__(message)


class RoundInProgress(GameError):
    code = "ROUND_IN_PROGRESS"

    def __init__(self, message: str = ERROR_MESSAGES['ROUND_IN_PROGRESS']):
        super().__init__(message)


class InvalidName(GameError):
    code = "INVALID_NAME"

    def __init__(self, message: str = ERROR_MESSAGES['INVALID_NAME']):
        super().__init__(message)


class IllegalMove(GameError):
    code = "ILLEGAL_MOVE"


class ContentExhausted(GameError):
    code = "CONTENT_EXHAUSTED"


# Errors a joining client is told about
JOIN_ERRORS = (InvalidRoom, DuplicateName, RoomFull, RoundInProgress, InvalidName)
