"""
colorpass.types — TypedDict schemas for state views
===================================================

This module documents the exact structure of the dictionaries returned
by ``GameCoordinator.get_state`` and ``GameCoordinator.check_winner``
and carried in action router envelopes.

All types are exported from the main package:

    from colorpass import StateView, PlayerView, CardView, ...
"""

from typing import TypedDict, List, Optional


class CardView(TypedDict):
    """One visible card."""
    card_id: str            # opaque token, e.g. "3f9a0c1b2d4e"
    color: str              # "red" | "green" | "orange" | "blue"
    symbol: str             # "♥" | "♣" | "◆" | "♠"


class PlayerView(TypedDict):
    """One seated player as seen by the viewer.

    Fields
    ------
    player_id : int
        Dense seat index, 0 is the host.
    hand_count : int
        Number of cards held. Always visible.
    hand : Optional[List[CardView]]
        Full hand, only for the viewer's own entry. None for opponents.
    seat : int
        Clockwise distance from the viewer (0 = viewer). Equals
        player_id when there is no viewer.
    """
    player_id: int
    name: str
    is_host: bool
    hand_count: int
    hand: Optional[List[CardView]]
    is_current_turn: bool
    seat: int


class RoomSummary(TypedDict):
    """Lifecycle flags and turn pointer."""
    room_id: str
    phase: str              # "LOBBY" | "PLAYING" | "ENDED"
    game_started: bool
    game_ended: bool
    player_count: int
    current_turn_index: int
    current_player_id: Optional[int]    # None until the game starts


class WinnerView(TypedDict):
    """Frozen winner of a finished game, with the winning cards."""
    player_id: int
    name: str
    color: str
    winning_cards: List[CardView]


class StateView(TypedDict):
    """Everything a polling client needs to redraw the table."""
    room: RoomSummary
    players: List[PlayerView]
    viewer_player_id: Optional[int]
    winner: Optional[WinnerView]
