"""
colorpass.demo_player — Automated player for demo games
=======================================================

A simple greedy strategy: collect the color you hold most of, pass
away a card of the color you hold least of. Used by ``colorpass demo``
to play a whole game unattended.
"""

from __future__ import annotations
import logging
import random
from typing import Any, Dict, List, Optional, Sequence

from ._room.coordinator import GameCoordinator
from ._room.enums import COLORS
from .types import CardView

logger = logging.getLogger("colorpass.demo")

DEFAULT_PLAYER_NAMES = ["Alice", "Bob", "Carol", "Dave"]
DEFAULT_MAX_TURNS = 200


class DemoPlayer:
    """Greedy card chooser."""

    def choose_card(self, hand: Sequence[CardView]) -> str:
        """
        Pick the card to pass.

        Args:
            hand: The player's own cards

        Returns:
            card_id of a card of the least-held color that is not the
            color being collected

        Raises:
            ValueError: If the hand is empty
        """
        if not hand:
            raise ValueError("Cannot choose from an empty hand")

        order = [c.value for c in COLORS]
        counts = {color: 0 for color in order}
        for card in hand:
            counts[card["color"]] += 1

        target = max(order, key=lambda color: (counts[color], -order.index(color)))
        candidates = [card for card in hand if card["color"] != target]
        if not candidates:
            return hand[0]["card_id"]
        least = min(candidates, key=lambda card: (counts[card["color"]],
                                                  order.index(card["color"])))
        return least["card_id"]


def run_demo(
    coordinator: GameCoordinator,
    player_names: Optional[List[str]] = None,
    max_turns: int = DEFAULT_MAX_TURNS,
    player: Optional[DemoPlayer] = None,
    delete_after: bool = False,
) -> Dict[str, Any]:
    """
    Play one complete game with every seat driven by ``DemoPlayer``.

    Returns:
        Summary with room_id, turns played and the winner (or None if
        ``max_turns`` ran out first)
    """
    names = player_names or DEFAULT_PLAYER_NAMES[:3]
    player = player or DemoPlayer()

    created = coordinator.create_room(names[0])
    room_id = created.room_id
    for name in names[1:]:
        coordinator.join_room(room_id, name)
    coordinator.start_game(room_id, created.player_id)

    turns = 0
    winner = None
    while turns < max_turns:
        current = coordinator.get_state(room_id)["room"]["current_player_id"]
        state = coordinator.get_state(room_id, current)
        hand = next(p["hand"] for p in state["players"] if p["player_id"] == current)
        result = coordinator.play_card(room_id, current, player.choose_card(hand))
        turns += 1
        if result.winner is not None:
            winner = result.winner
            break

    if winner is None:
        logger.warning(f"[{room_id}] Demo stopped after {turns} turns without a winner")
    summary = {"room_id": room_id, "players": names, "turns": turns, "winner": winner}
    if delete_after:
        coordinator.delete_room(room_id)
    return summary


def shuffled_names(count: int, rng: Optional[random.Random] = None) -> List[str]:
    """Pick ``count`` default names in random seat order."""
    rng = rng or random.Random()
    names = DEFAULT_PLAYER_NAMES[:count]
    rng.shuffle(names)
    return names
