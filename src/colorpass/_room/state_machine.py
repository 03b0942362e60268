# Area: Room
"""
colorpass._room.state_machine — Room lifecycle state machine
============================================================

Tracks a room's lifecycle: LOBBY -> PLAYING -> ENDED. Transitions are
strictly forward; there is no pause, reset or way back.
"""

import logging
from typing import Optional

from .enums import RoomEvent, RoomPhase

logger = logging.getLogger("colorpass.room.state_machine")


# Valid state transitions: {current_state: {event: next_state}}
TRANSITIONS = {
    RoomPhase.LOBBY: {
        RoomEvent.START: RoomPhase.PLAYING,
    },
    RoomPhase.PLAYING: {
        RoomEvent.WIN: RoomPhase.ENDED,
    },
    RoomPhase.ENDED: {},
}


class RoomStateMachine:
    """
    State machine for one room's lifecycle.

    Rooms are rehydrated from storage on every request, so the machine
    is built from the room's current phase rather than kept alive.

    Attributes:
        current_state: The current phase of the room
    """

    def __init__(self, initial_state: RoomPhase = RoomPhase.LOBBY,
                 room_id: Optional[str] = None):
        self.current_state = initial_state
        self.room_id = room_id

    def can_transition(self, event: RoomEvent) -> bool:
        """
        Check if a transition is valid from current state.

        Args:
            event: The event to check

        Returns:
            True if the transition is valid, False otherwise
        """
        valid_transitions = TRANSITIONS.get(self.current_state, {})
        return event in valid_transitions

    def transition(self, event: RoomEvent) -> RoomPhase:
        """
        Execute a state transition.

        Args:
            event: The event triggering the transition

        Returns:
            The new state after transition

        Raises:
            ValueError: If the transition is not valid
        """
        if not self.can_transition(event):
            raise ValueError(
                f"Invalid transition: {event.value} from {self.current_state.value}"
            )

        next_state = TRANSITIONS[self.current_state][event]
        logger.info(
            "[%s] Phase: %s → %s", self.room_id, self.current_state.value, next_state.value
        )
        self.current_state = next_state
        return next_state

    def is_terminal(self) -> bool:
        """True once no further event is accepted."""
        return not TRANSITIONS.get(self.current_state)
