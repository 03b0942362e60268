# Area: Shared
"""
colorpass.errors — Custom exception classes
===========================================

Defines the exception hierarchy for every action the coordinator accepts.
Each exception carries a stable ``code``, a ``category`` and a ``details``
dict so callers (router, CLI, polling client) can tell failures apart
without parsing messages.

Categories
----------
validation      Bad or missing input, rejected before touching state.
state_conflict  The action is not legal in the room's current state.
not_found       The room, player or card does not exist.
persistence     The durable store failed; nothing was committed.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import json


class ColorPassError(Exception):
    """Base exception for all colorpass errors."""

    code = "COLORPASS_ERROR"
    category = "internal"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "category": self.category,
            "message": self.message,
            "details": self.details,
        }

    def format_error_log(self) -> str:
        return format_error_block(
            error_type=self.code,
            category=self.category,
            message=self.message,
            details=self.details,
        )


# ── Validation ───────────────────────────────────────────────

class ValidationError(ColorPassError):
    """Raised when action input is missing or malformed."""

    code = "VALIDATION_ERROR"
    category = "validation"

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.errors = errors or []
        super().__init__(message, {"errors": self.errors})


# ── State conflicts ──────────────────────────────────────────

class StateConflictError(ColorPassError):
    """Raised when an action is not legal in the room's current state."""

    code = "STATE_CONFLICT"
    category = "state_conflict"


class NotYourTurnError(StateConflictError):
    code = "NOT_YOUR_TURN"

    def __init__(self, room_id: str, player_id: int, current_player_id: int):
        super().__init__(
            f"Player {player_id} cannot play in room {room_id}: "
            f"it is player {current_player_id}'s turn",
            {"room_id": room_id, "player_id": player_id,
             "current_player_id": current_player_id},
        )


class AlreadyStartedError(StateConflictError):
    code = "ALREADY_STARTED"

    def __init__(self, room_id: str):
        super().__init__(f"Room {room_id} has already started", {"room_id": room_id})


class RoomFullError(StateConflictError):
    code = "ROOM_FULL"

    def __init__(self, room_id: str, max_players: int):
        super().__init__(
            f"Room {room_id} is full ({max_players} players)",
            {"room_id": room_id, "max_players": max_players},
        )


class NotEnoughPlayersError(StateConflictError):
    code = "NOT_ENOUGH_PLAYERS"

    def __init__(self, room_id: str, player_count: int, min_players: int):
        super().__init__(
            f"Room {room_id} needs at least {min_players} players, has {player_count}",
            {"room_id": room_id, "player_count": player_count,
             "min_players": min_players},
        )


class GameEndedError(StateConflictError):
    code = "GAME_ENDED"

    def __init__(self, room_id: str):
        super().__init__(f"Game in room {room_id} has ended", {"room_id": room_id})


class GameNotStartedError(StateConflictError):
    code = "GAME_NOT_STARTED"

    def __init__(self, room_id: str):
        super().__init__(f"Game in room {room_id} has not started", {"room_id": room_id})


class NotHostError(StateConflictError):
    code = "NOT_HOST"

    def __init__(self, room_id: str, player_id: int):
        super().__init__(
            f"Player {player_id} is not the host of room {room_id}",
            {"room_id": room_id, "player_id": player_id},
        )


class PlayInFlightError(StateConflictError):
    """Raised by the client guard when a play is already in progress."""

    code = "PLAY_IN_FLIGHT"

    def __init__(self, room_id: str, reason: str):
        super().__init__(
            f"Play rejected for room {room_id}: {reason}",
            {"room_id": room_id, "reason": reason},
        )


# ── Not found ────────────────────────────────────────────────

class NotFoundError(ColorPassError):
    """Raised when a room, player or card does not exist."""

    code = "NOT_FOUND"
    category = "not_found"


class RoomNotFoundError(NotFoundError):
    code = "ROOM_NOT_FOUND"

    def __init__(self, room_id: str):
        super().__init__(f"Room {room_id} not found", {"room_id": room_id})


class PlayerNotFoundError(NotFoundError):
    code = "PLAYER_NOT_FOUND"

    def __init__(self, room_id: str, player_id: int):
        super().__init__(
            f"Player {player_id} not found in room {room_id}",
            {"room_id": room_id, "player_id": player_id},
        )


class CardNotFoundError(NotFoundError):
    code = "CARD_NOT_FOUND"

    def __init__(self, room_id: str, player_id: int, card_id: str):
        super().__init__(
            f"Card {card_id} is not in player {player_id}'s hand",
            {"room_id": room_id, "player_id": player_id, "card_id": card_id},
        )


# ── Persistence ──────────────────────────────────────────────

class PersistenceError(ColorPassError):
    """Raised when the durable store fails. The failed unit is rolled back."""

    code = "PERSISTENCE_ERROR"
    category = "persistence"


class CorruptRoomStateError(PersistenceError):
    """Raised when persisted records rehydrate into an invalid room."""

    code = "CORRUPT_ROOM_STATE"

    def __init__(self, room_id: str, violations: List[str]):
        self.violations = violations
        super().__init__(
            f"Room {room_id} failed invariant checks: {violations}",
            {"room_id": room_id, "violations": violations},
        )


def format_error_block(
    error_type: str,
    category: str,
    message: str,
    details: Optional[Dict[str, Any]],
) -> str:
    """Format a structured error block for terminal output."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " ACTION REJECTED",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Category:     {category}",
        f" Message:      {message}",
    ]

    if details:
        lines.append("")
        lines.append(" ── DETAILS " + "─" * 52)
        lines.append(_indent_json(details))

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str, ensure_ascii=False)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
