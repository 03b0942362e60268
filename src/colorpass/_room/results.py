# Area: Room
"""
colorpass._room.results — Action result dataclasses
===================================================

The success variant of every coordinator action. Failures are raised
as ``colorpass.errors.ColorPassError`` subclasses.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class CreateRoomResult:
    """
    A new room and the host's seat.

    Attributes:
        room_id: Code other players use to join
        player_id: Always 0, the host
    """

    room_id: str
    player_id: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class JoinRoomResult:
    room_id: str
    player_id: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class StartGameResult:
    """
    Acknowledgement of a started game.

    Attributes:
        room_id: Room that started
        starting_player_id: Player who takes the first turn
        player_count: Players dealt in
    """

    room_id: str
    starting_player_id: int
    player_count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PlayCardResult:
    """
    Acknowledgement of one completed turn.

    Attributes:
        room_id: Room the turn was played in
        from_player_id: Player who passed the card
        to_player_id: Player clockwise who received it
        card_id: The card passed
        current_turn_index: Whose turn it is now
        winner: Winner view if this turn ended the game, else None
    """

    room_id: str
    from_player_id: int
    to_player_id: int
    card_id: str
    current_turn_index: int
    winner: Optional[Dict[str, Any]] = None

    @property
    def game_ended(self) -> bool:
        return self.winner is not None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["game_ended"] = self.game_ended
        return data


@dataclass(frozen=True)
class DeleteRoomResult:
    """
    Acknowledgement of a teardown.

    Attributes:
        room_id: Room that was torn down
        deleted: False when the room was already gone
    """

    room_id: str
    deleted: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
