# Area: Room
"""
Room engine — rules, storage and coordination for one game room.

This package handles:
- Card, Player and Room value objects and the game rules
- The LOBBY -> PLAYING -> ENDED lifecycle
- SQLite storage with room-scoped transactions
- The coordinator that validates and applies client actions
- Per-viewer state views that hide opponents' cards
"""

from .enums import Color, RoomPhase, RoomEvent
from .models import Card, Player, Room, Winner
from .state_machine import RoomStateMachine
from .store import RoomStore, RoomSession
from .coordinator import GameCoordinator
from .action_router import ActionRouter
from .results import (
    CreateRoomResult,
    JoinRoomResult,
    StartGameResult,
    PlayCardResult,
    DeleteRoomResult,
)

__all__ = [
    "Color",
    "RoomPhase",
    "RoomEvent",
    "Card",
    "Player",
    "Room",
    "Winner",
    "RoomStateMachine",
    "RoomStore",
    "RoomSession",
    "GameCoordinator",
    "ActionRouter",
    "CreateRoomResult",
    "JoinRoomResult",
    "StartGameResult",
    "PlayCardResult",
    "DeleteRoomResult",
]
