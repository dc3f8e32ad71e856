"""
Helper utilities for Blank Slate.

This module contains utility functions used throughout the application
for validation, generation, and input normalization.
"""

import random
from typing import Callable, Optional, Tuple
from .constants import (
    ROOM_CODE_ALPHABET, ROOM_CODE_LENGTH, MAX_NAME_LENGTH,
    VARIANT_ALIASES, ERROR_MESSAGES
)

def generate_room_code(is_taken: Callable[[str], bool],
                       rng: Optional[random.Random] = None,
                       length: int = ROOM_CODE_LENGTH) -> str:
    """
    Generate a random room code that is not currently in use.

    Args:
        is_taken: Predicate telling whether a code belongs to a live room
        rng: Random source (module-level random when omitted)
        length: Number of letters in the code

    Returns:
        A fresh uppercase code
    """
    rng = rng or random
    while True:
        code = ''.join(rng.choice(ROOM_CODE_ALPHABET) for _ in range(length))
        if not is_taken(code):
            return code

def normalize_room_code(code) -> str:
    """Room codes are typed by people; match them case-insensitively."""
    if not isinstance(code, str):
        return ''
    return code.strip().upper()

def normalize_variant(variant) -> str:
    """Map a wire variant ('PG', 'family', 'M', ...) to a content pool key."""
    if isinstance(variant, str):
        return VARIANT_ALIASES.get(variant.strip().lower(), 'family')
    return 'family'

def validate_player_name(name) -> Tuple[bool, Optional[str]]:
    """
    Validate a display name.

    Returns:
        tuple: (is_valid, error_message)
    """
    if not isinstance(name, str):
        return False, ERROR_MESSAGES['INVALID_NAME']
    name = name.strip()
    if not name or len(name) > MAX_NAME_LENGTH:
        return False, ERROR_MESSAGES['INVALID_NAME']
    return True, None
