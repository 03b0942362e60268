"""
colorpass — ColorPass multiplayer card game
===========================================

Two to four players each hold four cards and take turns passing one
card clockwise. The first player holding four cards of one color wins.

Quick Start:
    from colorpass import RoomStore, GameCoordinator
    coordinator = GameCoordinator(RoomStore("colorpass.db"))
    room = coordinator.create_room("Alice")
    coordinator.join_room(room.room_id, "Bob")
    coordinator.start_game(room.room_id, room.player_id)
    state = coordinator.get_state(room.room_id, viewer_player_id=0)

Transports:
    ActionRouter  - named actions in, {"ok": ...} envelopes out
    GameClient    - polling client with an in-flight play guard
    colorpass     - command-line interface (python -m colorpass)
"""

from ._room import (
    ActionRouter,
    Card,
    Color,
    CreateRoomResult,
    DeleteRoomResult,
    GameCoordinator,
    JoinRoomResult,
    PlayCardResult,
    Player,
    Room,
    RoomPhase,
    RoomStore,
    StartGameResult,
    Winner,
)
from .client import GameClient
from .demo_player import DemoPlayer, run_demo
from .errors import (
    ColorPassError,
    ValidationError,
    StateConflictError,
    NotYourTurnError,
    AlreadyStartedError,
    RoomFullError,
    NotEnoughPlayersError,
    GameEndedError,
    GameNotStartedError,
    NotHostError,
    PlayInFlightError,
    NotFoundError,
    RoomNotFoundError,
    PlayerNotFoundError,
    CardNotFoundError,
    PersistenceError,
    CorruptRoomStateError,
)
from .types import CardView, PlayerView, RoomSummary, StateView, WinnerView
from ._shared import setup_logging

__version__ = "1.0.0"

__all__ = [
    # Engine
    "GameCoordinator",
    "RoomStore",
    "ActionRouter",
    "Room",
    "Player",
    "Card",
    "Winner",
    "Color",
    "RoomPhase",
    # Results
    "CreateRoomResult",
    "JoinRoomResult",
    "StartGameResult",
    "PlayCardResult",
    "DeleteRoomResult",
    # Client side
    "GameClient",
    "DemoPlayer",
    "run_demo",
    # Views
    "CardView",
    "PlayerView",
    "RoomSummary",
    "StateView",
    "WinnerView",
    # Errors
    "ColorPassError",
    "ValidationError",
    "StateConflictError",
    "NotYourTurnError",
    "AlreadyStartedError",
    "RoomFullError",
    "NotEnoughPlayersError",
    "GameEndedError",
    "GameNotStartedError",
    "NotHostError",
    "PlayInFlightError",
    "NotFoundError",
    "RoomNotFoundError",
    "PlayerNotFoundError",
    "CardNotFoundError",
    "PersistenceError",
    "CorruptRoomStateError",
    # Logging
    "setup_logging",
]
