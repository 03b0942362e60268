# Area: Room
"""
colorpass._room.room_ids — Room code helpers
============================================

Room codes are 6 characters from [A-Z0-9]. Players type them in by
hand, so input is normalised to uppercase before lookup.
"""

import re
import secrets
import string

ROOM_ID_LENGTH = 6
ROOM_ID_ALPHABET = string.ascii_uppercase + string.digits
ROOM_ID_PATTERN = re.compile(rf"^[A-Z0-9]{{{ROOM_ID_LENGTH}}}$")


def generate_room_id() -> str:
    """Generate a random room code. Uniqueness is checked by the caller."""
    return "".join(secrets.choice(ROOM_ID_ALPHABET) for _ in range(ROOM_ID_LENGTH))


def normalize_room_id(room_id: str) -> str:
    return room_id.strip().upper()


def is_valid_room_id(room_id: str) -> bool:
    return bool(ROOM_ID_PATTERN.match(room_id))
