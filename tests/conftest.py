# Area: Test Fixtures
"""Shared fixtures: temporary room databases and seeded coordinators."""

import logging
import random
import sqlite3
from typing import Dict, List

import pytest

from colorpass._room.coordinator import GameCoordinator
from colorpass._room.enums import Color
from colorpass._room.store import RoomStore


@pytest.fixture
def db_path(tmp_path):
    """Path to a fresh database file inside the test's temp dir."""
    return str(tmp_path / "rooms.db")


@pytest.fixture
def store(db_path):
    return RoomStore(db_path)


@pytest.fixture
def coordinator(store):
    """Coordinator with a seeded RNG so deals are reproducible."""
    return GameCoordinator(store, rng=random.Random(1234))


@pytest.fixture(autouse=True)
def reset_colorpass_logging():
    """Drop handlers installed by setup_logging so tests don't leak streams."""
    yield
    pkg_logger = logging.getLogger("colorpass")
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()
    pkg_logger.propagate = True
    pkg_logger.setLevel(logging.NOTSET)


def rig_hands(db_path: str, room_id: str, hands: Dict[int, List[Color]],
              current_player_index: int) -> Dict[int, List[str]]:
    """
    Replace the dealt cards of a started room with known hands.

    Returns:
        card ids per player, in hand order
    """
    conn = sqlite3.connect(db_path)
    try:
        conn.execute("DELETE FROM cards WHERE room_id = ?", (room_id,))
        ids: Dict[int, List[str]] = {}
        position = 0
        for player_id, colors in hands.items():
            ids[player_id] = []
            for color in colors:
                card_id = f"p{player_id}c{position}"
                conn.execute(
                    "INSERT INTO cards (room_id, card_id, player_id, color, symbol, position)"
                    " VALUES (?, ?, ?, ?, ?, ?)",
                    (room_id, card_id, player_id, color.value, color.symbol, position),
                )
                ids[player_id].append(card_id)
                position += 1
        conn.execute(
            "UPDATE rooms SET current_player_index = ? WHERE room_id = ?",
            (current_player_index, room_id),
        )
        conn.commit()
    finally:
        conn.close()
    return ids
