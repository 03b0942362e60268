# Area: Room
"""
colorpass._room.models — Card, Player and Room
==============================================

In-memory value objects rehydrated from storage on every action.
The Room owns the game rules: seating, dealing, passing a card
clockwise, advancing the turn and detecting the winner. It holds the
full truth about every hand; hiding opponents' cards is the job of
the view builder, not of the Room.
"""

from __future__ import annotations
import logging
import random
import uuid
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .enums import (
    CARDS_PER_COLOR,
    CARDS_PER_PLAYER,
    COLORS,
    MAX_PLAYERS,
    MIN_PLAYERS,
    WINNING_COUNT,
    Color,
    RoomEvent,
    RoomPhase,
)
from .state_machine import RoomStateMachine
from ..errors import AlreadyStartedError

logger = logging.getLogger("colorpass.room.models")

_rng = random.Random()


def generate_card_id() -> str:
    """Generate an opaque card token."""
    return uuid.uuid4().hex[:12]


@dataclass(frozen=True)
class Card:
    """A single colored card. Never mutated, only moved between hands."""
    card_id: str
    color: Color

    @property
    def symbol(self) -> str:
        return self.color.symbol

    @classmethod
    def new(cls, color: Color) -> "Card":
        return cls(card_id=generate_card_id(), color=color)


@dataclass
class Player:
    """A seated player and the ordered cards in their hand."""
    player_id: int
    name: str
    is_host: bool = False
    hand: List[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        self.hand.append(card)

    def get_card(self, card_id: str) -> Optional[Card]:
        for card in self.hand:
            if card.card_id == card_id:
                return card
        return None

    def remove_card(self, card_id: str) -> Optional[Card]:
        card = self.get_card(card_id)
        if card is not None:
            self.hand.remove(card)
        return card

    def color_counts(self) -> Dict[Color, int]:
        counts = Counter(card.color for card in self.hand)
        return {color: counts.get(color, 0) for color in COLORS}

    def cards_by_color(self) -> Dict[Color, List[Card]]:
        """Group the hand by color, keeping hand order inside each group."""
        return {color: [c for c in self.hand if c.color == color] for color in COLORS}

    def winning_color(self) -> Optional[Color]:
        """First color (in COLORS order) held WINNING_COUNT times or more."""
        counts = self.color_counts()
        for color in COLORS:
            if counts[color] >= WINNING_COUNT:
                return color
        return None


@dataclass(frozen=True)
class Winner:
    """Frozen result recorded when the game ends."""
    player_id: int
    name: str
    color: Color


@dataclass
class Room:
    """
    One game session with up to MAX_PLAYERS players.

    Players are kept ordered by player_id, and player ids are dense,
    so a player's id is also its seat index and turn index.
    """
    room_id: str
    players: List[Player] = field(default_factory=list)
    current_turn_index: int = 0
    game_started: bool = False
    game_ended: bool = False
    winner: Optional[Winner] = None

    @classmethod
    def create(cls, room_id: str, host_name: str) -> "Room":
        """Create a room holding only its host (player 0)."""
        host = Player(player_id=0, name=host_name, is_host=True)
        return cls(room_id=room_id, players=[host])

    # ── Lookups ──────────────────────────────────────────────

    @property
    def phase(self) -> RoomPhase:
        if self.game_ended:
            return RoomPhase.ENDED
        if self.game_started:
            return RoomPhase.PLAYING
        return RoomPhase.LOBBY

    @property
    def host(self) -> Player:
        return next(p for p in self.players if p.is_host)

    def player_count(self) -> int:
        return len(self.players)

    def is_full(self) -> bool:
        return len(self.players) >= MAX_PLAYERS

    def can_start(self) -> bool:
        return len(self.players) >= MIN_PLAYERS

    def player(self, player_id: int) -> Optional[Player]:
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def current_player(self) -> Player:
        return self.players[self.current_turn_index]

    def next_player_index(self) -> int:
        """Index of the player clockwise from the current one."""
        return (self.current_turn_index + 1) % len(self.players)

    def next_player(self) -> Player:
        return self.players[self.next_player_index()]

    def total_cards(self) -> int:
        return sum(len(p.hand) for p in self.players)

    # ── Lobby ────────────────────────────────────────────────

    def add_player(self, name: str) -> Optional[Player]:
        """
        Seat a new player with the next dense player id.

        Returns:
            The new Player, or None (room unchanged) if the room is
            full or the game has already started.
        """
        if self.game_started or self.is_full():
            return None
        player = Player(player_id=len(self.players), name=name)
        self.players.append(player)
        return player

    # ── Game start ───────────────────────────────────────────

    def deal_cards(self, rng: Optional[random.Random] = None) -> List[Card]:
        """
        Build and shuffle the deck, then deal CARDS_PER_PLAYER cards to
        each player in player_id order.

        The deck holds CARDS_PER_COLOR cards of every color. With fewer
        than MAX_PLAYERS seated, the cards left over are not dealt.

        Returns:
            The undealt cards (empty for a full room).

        Raises:
            AlreadyStartedError: If the game started or cards were dealt
        """
        if self.game_started or any(p.hand for p in self.players):
            raise AlreadyStartedError(self.room_id)
        rng = rng or _rng

        deck = [Card.new(color) for color in COLORS for _ in range(CARDS_PER_COLOR)]

        # Fisher-Yates
        for i in range(len(deck) - 1, 0, -1):
            j = rng.randint(0, i)
            deck[i], deck[j] = deck[j], deck[i]

        deck_index = 0
        for player in self.players:
            for _ in range(CARDS_PER_PLAYER):
                player.add_card(deck[deck_index])
                deck_index += 1
        return deck[deck_index:]

    def select_random_start_player(self, rng: Optional[random.Random] = None) -> int:
        rng = rng or _rng
        self.current_turn_index = rng.randrange(len(self.players))
        return self.current_turn_index

    def start(self, rng: Optional[random.Random] = None) -> None:
        """Deal, choose the starting player and move LOBBY -> PLAYING."""
        machine = RoomStateMachine(self.phase, self.room_id)
        if not machine.can_transition(RoomEvent.START):
            raise AlreadyStartedError(self.room_id)
        self.deal_cards(rng)
        self.select_random_start_player(rng)
        machine.transition(RoomEvent.START)
        self.game_started = True

    # ── Turns ────────────────────────────────────────────────

    def pass_card(self, from_player_id: int, card_id: str,
                  to_player_id: int) -> Optional[Card]:
        """
        Move one card between hands. All card movement goes through here.

        Returns:
            The moved Card, or None (no mutation) if either player id is
            unknown or the card is not in the source hand.
        """
        from_player = self.player(from_player_id)
        to_player = self.player(to_player_id)
        if from_player is None or to_player is None:
            return None

        card = from_player.remove_card(card_id)
        if card is None:
            return None
        to_player.add_card(card)
        return card

    def move_to_next_player(self) -> int:
        self.current_turn_index = self.next_player_index()
        return self.current_turn_index

    def check_winner(self) -> Optional[Winner]:
        """
        Scan players in id order for WINNING_COUNT cards of one color.

        The first match ends the game. Once a winner is recorded it is
        returned unchanged by every later call.
        """
        if self.winner is not None:
            return self.winner
        if not self.game_started:
            return None

        for player in self.players:
            color = player.winning_color()
            if color is not None:
                RoomStateMachine(self.phase, self.room_id).transition(RoomEvent.WIN)
                self.winner = Winner(player.player_id, player.name, color)
                self.game_ended = True
                return self.winner
        return None

    # ── Integrity ────────────────────────────────────────────

    def check_invariants(self) -> List[str]:
        """Return a description of every broken invariant (empty if sound)."""
        violations = []
        count = len(self.players)
        if not 1 <= count <= MAX_PLAYERS:
            violations.append(f"player count {count} outside 1..{MAX_PLAYERS}")
        if [p.player_id for p in self.players] != list(range(count)):
            violations.append("player ids are not dense and ordered")
        if sum(1 for p in self.players if p.is_host) != 1:
            violations.append("room must have exactly one host")
        if self.game_ended != (self.winner is not None):
            violations.append("game_ended and winner disagree")
        if self.game_ended and not self.game_started:
            violations.append("game ended without starting")

        if self.game_started:
            if not 0 <= self.current_turn_index < max(count, 1):
                violations.append(f"turn index {self.current_turn_index} out of range")
            expected = CARDS_PER_PLAYER * count
            if self.total_cards() != expected:
                violations.append(f"{self.total_cards()} cards in play, expected {expected}")
            ids = [c.card_id for p in self.players for c in p.hand]
            if len(ids) != len(set(ids)):
                violations.append("a card appears in more than one place")
        elif self.total_cards():
            violations.append("cards dealt before the game started")
        return violations
