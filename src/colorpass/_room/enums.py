# Area: Room
"""
colorpass._room.enums — Card colors and room lifecycle enums
============================================================

Defines the four card colors and the states/events of the room
lifecycle state machine, plus the game constants shared by the rules.
"""

from enum import Enum


class Color(Enum):
    """Card colors, in the fixed order used for dealing and win scans."""
    RED = "red"
    GREEN = "green"
    ORANGE = "orange"
    BLUE = "blue"

    @property
    def symbol(self) -> str:
        return COLOR_SYMBOLS[self]


COLOR_SYMBOLS = {
    Color.RED: "♥",
    Color.GREEN: "♣",
    Color.ORANGE: "◆",
    Color.BLUE: "♠",
}

COLORS = [Color.RED, Color.GREEN, Color.ORANGE, Color.BLUE]

CARDS_PER_COLOR = 4
CARDS_PER_PLAYER = 4
MIN_PLAYERS = 2
MAX_PLAYERS = 4
WINNING_COUNT = 4


class RoomPhase(Enum):
    """
    States of a room.

    State transitions:
    LOBBY -> PLAYING (on START)
    PLAYING -> ENDED (on WIN)
    """
    LOBBY = "LOBBY"
    PLAYING = "PLAYING"
    ENDED = "ENDED"


class RoomEvent(Enum):
    """
    Events that move a room forward.

    - START: host started the game, cards were dealt
    - WIN: a player holds WINNING_COUNT cards of one color
    """
    START = "START"
    WIN = "WIN"
