"""
colorpass.client — Polling game client
======================================

A client-side view of one seat at one table. The client polls the
coordinator for state on a fixed interval and reports what changed:
game start, turn changes, the winner. Plays go through an in-flight
guard and a debounce window so one client never sends two
overlapping plays; the coordinator would reject the duplicate anyway
(NotYourTurn or CardNotFound), the guard just avoids the round trip.

Usage
-----
    client = GameClient(coordinator, room_id="ABC123", player_id=1,
                        on_turn_change=lambda prev, cur: print(cur))
    client.run()            # blocks until the game ends or stop()
"""

from __future__ import annotations
import logging
import threading
import time
from typing import Callable, List, Optional

from ._room.coordinator import GameCoordinator
from ._room.results import PlayCardResult
from .errors import PlayInFlightError
from .types import CardView, StateView, WinnerView

logger = logging.getLogger("colorpass.client")

DEFAULT_POLL_INTERVAL_SECONDS = 0.8
DEFAULT_PLAY_DEBOUNCE_MS = 500


class GameClient:
    """Polls one room on behalf of one player."""

    def __init__(
        self,
        coordinator: GameCoordinator,
        room_id: str,
        player_id: int,
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        play_debounce_ms: int = DEFAULT_PLAY_DEBOUNCE_MS,
        on_state: Optional[Callable[[StateView], None]] = None,
        on_game_started: Optional[Callable[[StateView], None]] = None,
        on_turn_change: Optional[Callable[[Optional[int], int], None]] = None,
        on_winner: Optional[Callable[[WinnerView], None]] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.coordinator = coordinator
        self.room_id = room_id
        self.player_id = player_id
        self.poll_interval_seconds = poll_interval_seconds
        self.play_debounce_ms = play_debounce_ms
        self.on_state = on_state
        self.on_game_started = on_game_started
        self.on_turn_change = on_turn_change
        self.on_winner = on_winner
        self._clock = clock
        self._sleep = sleep

        self.last_state: Optional[StateView] = None
        self._lock = threading.Lock()
        self._in_flight = False
        self._last_play_at: Optional[float] = None
        self._running = False

    # ── Polling ──────────────────────────────────────────────

    def refresh(self) -> StateView:
        """
        Fetch state now and fire callbacks for whatever changed.

        While the game is running, the winner check runs on every refresh
        so a winning hand dealt at start is recorded before anyone plays.
        """
        state = self.coordinator.get_state(self.room_id, self.player_id)
        room = state["room"]
        if room["game_started"] and not room["game_ended"]:
            if self.coordinator.check_winner(self.room_id) is not None:
                state = self.coordinator.get_state(self.room_id, self.player_id)
        previous, self.last_state = self.last_state, state
        self._notify(previous, state)
        return state

    def poll_once(self) -> Optional[StateView]:
        """One polling tick. Skipped (None) while a play is in flight."""
        if self._in_flight:
            logger.debug("Poll skipped, play in flight")
            return None
        return self.refresh()

    def run(self, max_polls: Optional[int] = None) -> Optional[StateView]:
        """
        Poll until the game ends, ``stop()`` is called, or ``max_polls``
        ticks have run.

        Returns:
            The last state seen
        """
        self._running = True
        polls = 0
        try:
            while self._running:
                state = self.poll_once()
                polls += 1
                if state is not None and state["room"]["game_ended"]:
                    break
                if max_polls is not None and polls >= max_polls:
                    break
                self._sleep(self.poll_interval_seconds)
        finally:
            self._running = False
        return self.last_state

    def stop(self) -> None:
        self._running = False

    def _notify(self, previous: Optional[StateView], state: StateView) -> None:
        if self.on_state:
            self.on_state(state)

        room = state["room"]
        was_started = previous is not None and previous["room"]["game_started"]
        if room["game_started"] and not was_started:
            logger.info(f"[{self.room_id}] Game started")
            if self.on_game_started:
                self.on_game_started(state)

        if room["game_started"] and not room["game_ended"]:
            prev_turn = previous["room"]["current_player_id"] if previous else None
            if room["current_player_id"] != prev_turn:
                if self.on_turn_change:
                    self.on_turn_change(prev_turn, room["current_player_id"])

        had_winner = previous is not None and previous["winner"] is not None
        if state["winner"] is not None and not had_winner:
            logger.info(f"[{self.room_id}] Winner: {state['winner']['name']}")
            if self.on_winner:
                self.on_winner(state["winner"])

    # ── Playing ──────────────────────────────────────────────

    def is_my_turn(self) -> bool:
        if self.last_state is None:
            return False
        room = self.last_state["room"]
        return (room["game_started"] and not room["game_ended"]
                and room["current_player_id"] == self.player_id)

    def my_hand(self) -> List[CardView]:
        if self.last_state is None:
            return []
        for player in self.last_state["players"]:
            if player["player_id"] == self.player_id:
                return player["hand"] or []
        return []

    def play_card(self, card_id: str) -> PlayCardResult:
        """
        Play a card through the in-flight guard, then refresh state.

        Raises:
            PlayInFlightError: A play is already in flight, or the last
                one was less than ``play_debounce_ms`` ago
            ColorPassError: Whatever the coordinator rejects the play with
        """
        with self._lock:
            if self._in_flight:
                raise PlayInFlightError(self.room_id, "a play is already in flight")
            now = self._clock()
            if (self._last_play_at is not None
                    and (now - self._last_play_at) * 1000 < self.play_debounce_ms):
                raise PlayInFlightError(self.room_id, "played again too quickly")
            self._in_flight = True
            self._last_play_at = now

        try:
            result = self.coordinator.play_card(self.room_id, self.player_id, card_id)
        finally:
            with self._lock:
                self._in_flight = False

        self.refresh()
        return result
