# Area: Room
"""
colorpass._room.snapshot — State view builder
=============================================

Builds serializable per-viewer views of a room. This is where hidden
information is enforced: a viewer sees their own cards, and only the
hand size of everybody else.
"""

from typing import List, Optional

from .models import Card, Player, Room, Winner
from ..types import CardView, PlayerView, RoomSummary, StateView, WinnerView


def build_state_view(room: Room, viewer_player_id: Optional[int] = None) -> StateView:
    """Build the view of ``room`` for one viewer (or nobody in particular)."""
    if viewer_player_id is not None and room.player(viewer_player_id) is None:
        viewer_player_id = None
    return {
        "room": build_room_summary(room),
        "players": [_player_view(room, p, viewer_player_id) for p in room.players],
        "viewer_player_id": viewer_player_id,
        "winner": build_winner_view(room),
    }


def build_room_summary(room: Room) -> RoomSummary:
    return {
        "room_id": room.room_id,
        "phase": room.phase.value,
        "game_started": room.game_started,
        "game_ended": room.game_ended,
        "player_count": room.player_count(),
        "current_turn_index": room.current_turn_index,
        "current_player_id": room.current_player().player_id if room.game_started else None,
    }


def build_winner_view(room: Room) -> Optional[WinnerView]:
    """Winner plus the cards of the winning color, or None."""
    winner: Optional[Winner] = room.winner
    if winner is None:
        return None
    player = room.player(winner.player_id)
    cards = player.cards_by_color()[winner.color] if player else []
    return {
        "player_id": winner.player_id,
        "name": winner.name,
        "color": winner.color.value,
        "winning_cards": _cards(cards),
    }


def _player_view(room: Room, player: Player, viewer_player_id: Optional[int]) -> PlayerView:
    is_viewer = viewer_player_id is not None and player.player_id == viewer_player_id
    return {
        "player_id": player.player_id,
        "name": player.name,
        "is_host": player.is_host,
        "hand_count": len(player.hand),
        "hand": _cards(player.hand) if is_viewer else None,
        "is_current_turn": room.game_started and not room.game_ended
                           and room.current_turn_index == player.player_id,
        "seat": _seat(room, player, viewer_player_id),
    }


def _seat(room: Room, player: Player, viewer_player_id: Optional[int]) -> int:
    """Clockwise distance from the viewer around the table."""
    if viewer_player_id is None:
        return player.player_id
    return (player.player_id - viewer_player_id) % room.player_count()


def _cards(cards: List[Card]) -> List[CardView]:
    return [
        {"card_id": c.card_id, "color": c.color.value, "symbol": c.symbol}
        for c in cards
    ]
