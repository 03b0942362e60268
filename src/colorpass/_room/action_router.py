# Area: Room
"""
colorpass._room.action_router — Action Router
=============================================

Routes named client actions to coordinator handlers and wraps every
outcome in an explicit success or failure envelope. This is the seam
a transport (HTTP, RPC, CLI) plugs into.

Request:   {"action": "playCard", "payload": {...}}
Success:   {"ok": True,  "action": "playCard", "result": {...}}
Failure:   {"ok": False, "action": "playCard", "error": {code, category, message, details}}
"""

import logging
from typing import Any, Callable, Dict, Optional

from .coordinator import GameCoordinator
from ..errors import ColorPassError, ValidationError

logger = logging.getLogger("colorpass.room.router")

ActionHandler = Callable[[Dict[str, Any]], Any]


class ActionRouter:
    """
    Routes client actions to handlers.

    Maintains a registry of handlers for each action name and
    dispatches incoming requests to the appropriate handler.

    Usage:
        router = ActionRouter(coordinator)
        response = router.route({"action": "createRoom",
                                 "payload": {"playerName": "Alice"}})
    """

    def __init__(self, coordinator: Optional[GameCoordinator] = None):
        """Initialize router, registering the coordinator's actions if given."""
        self._handlers: Dict[str, ActionHandler] = {}
        if coordinator is not None:
            self.register_coordinator(coordinator)

    def register_handler(self, action: str, handler: ActionHandler) -> None:
        """
        Register a handler for an action name.

        Args:
            action: The action name
            handler: Callable taking the payload dict
        """
        self._handlers[action] = handler
        logger.debug(f"Registered handler for {action}")

    def actions(self) -> list:
        return sorted(self._handlers)

    def register_coordinator(self, coordinator: GameCoordinator) -> None:
        """Register the standard action surface backed by ``coordinator``."""
        c = coordinator
        reg = self.register_handler
        reg("createRoom", lambda p: c.create_room(_arg(p, "playerName")).to_dict())
        reg("joinRoom", lambda p: c.join_room(
            _arg(p, "roomId"), _arg(p, "playerName")).to_dict())
        reg("startGame", lambda p: c.start_game(
            _arg(p, "roomId"), _arg(p, "callerPlayerId")).to_dict())
        reg("getState", lambda p: c.get_state(
            _arg(p, "roomId"), p.get("viewerPlayerId")))
        reg("checkWinner", lambda p: {"winner": c.check_winner(_arg(p, "roomId"))})
        reg("playCard", lambda p: c.play_card(
            _arg(p, "roomId"), _arg(p, "callerPlayerId"), _arg(p, "cardId")).to_dict())
        reg("deleteRoom", lambda p: c.delete_room(_arg(p, "roomId")).to_dict())

    def route(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """
        Route a request to its handler.

        Args:
            request: Dict with 'action' and optional 'payload'

        Returns:
            Success or failure envelope. Never raises for a
            ColorPassError; anything else propagates.
        """
        action = request.get("action", "")
        payload = request.get("payload") or {}
        handler = self._handlers.get(action)

        try:
            if handler is None:
                raise ValidationError(f"Unknown action: {action!r}",
                                      [f"action must be one of {self.actions()}"])
            if not isinstance(payload, dict):
                raise ValidationError("Payload must be an object", ["payload: expected object"])
            logger.info(f"Routing {action}")
            result = handler(payload)
        except ColorPassError as e:
            if e.category == "persistence":
                logger.error(f"{action} failed: {e.message}")
            else:
                logger.info(f"{action} rejected: {e.code}")
            return {"ok": False, "action": action, "error": e.to_dict()}
        return {"ok": True, "action": action, "result": result}


def _arg(payload: Dict[str, Any], key: str) -> Any:
    """Fetch a required payload key."""
    if key not in payload or payload[key] is None:
        raise ValidationError(f"Missing required field: {key}", [f"{key}: field required"])
    return payload[key]
