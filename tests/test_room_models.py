# Area: Room Tests
"""Tests for Card, Player and Room game rules."""

import random
from collections import Counter

import pytest

from colorpass._room.enums import COLORS, Color, RoomPhase
from colorpass._room.models import Card, Player, Room, Winner
from colorpass.errors import AlreadyStartedError


def make_room(names=("Alice", "Bob", "Carol"), room_id="ROOM01"):
    room = Room.create(room_id, names[0])
    for name in names[1:]:
        room.add_player(name)
    return room


def give(player: Player, *colors: Color) -> None:
    player.hand = [Card.new(color) for color in colors]


class TestRoomLobby:
    """Tests for seating players."""

    def test_create_seats_host_as_player_zero(self):
        room = Room.create("ROOM01", "Alice")
        assert room.player_count() == 1
        assert room.host.player_id == 0
        assert room.host.name == "Alice"
        assert room.phase == RoomPhase.LOBBY

    def test_add_player_assigns_dense_ids(self):
        room = make_room(("Alice", "Bob", "Carol", "Dave"))
        assert [p.player_id for p in room.players] == [0, 1, 2, 3]
        assert [p.is_host for p in room.players] == [True, False, False, False]

    def test_add_player_to_full_room_returns_none(self):
        room = make_room(("Alice", "Bob", "Carol", "Dave"))
        assert room.is_full()
        assert room.add_player("Eve") is None
        assert room.player_count() == 4

    def test_add_player_after_start_returns_none(self):
        room = make_room(("Alice", "Bob"))
        room.start(random.Random(1))
        assert room.add_player("Carol") is None
        assert room.player_count() == 2

    def test_can_start_needs_two_players(self):
        room = Room.create("ROOM01", "Alice")
        assert not room.can_start()
        room.add_player("Bob")
        assert room.can_start()


class TestDealing:
    """Tests for deck construction and dealing."""

    def test_full_room_receives_whole_deck(self):
        room = make_room(("Alice", "Bob", "Carol", "Dave"))
        undealt = room.deal_cards(random.Random(7))

        assert undealt == []
        cards = [c for p in room.players for c in p.hand]
        assert len(cards) == 16
        assert len({c.card_id for c in cards}) == 16
        assert Counter(c.color for c in cards) == {color: 4 for color in COLORS}

    def test_three_players_leave_four_cards_undealt(self):
        room = make_room()
        undealt = room.deal_cards(random.Random(7))

        assert [len(p.hand) for p in room.players] == [4, 4, 4]
        assert len(undealt) == 4
        everything = [c for p in room.players for c in p.hand] + undealt
        assert Counter(c.color for c in everything) == {color: 4 for color in COLORS}

    def test_same_seed_gives_same_deal(self):
        first = make_room()
        second = make_room()
        first.deal_cards(random.Random(99))
        second.deal_cards(random.Random(99))

        for a, b in zip(first.players, second.players):
            assert [c.color for c in a.hand] == [c.color for c in b.hand]

    def test_deal_twice_raises(self):
        room = make_room()
        room.deal_cards(random.Random(1))
        with pytest.raises(AlreadyStartedError):
            room.deal_cards(random.Random(1))

    def test_start_picks_a_seated_player(self):
        room = make_room()
        room.start(random.Random(5))
        assert room.game_started
        assert room.phase == RoomPhase.PLAYING
        assert 0 <= room.current_turn_index < 3

    def test_start_twice_raises(self):
        room = make_room()
        room.start(random.Random(5))
        with pytest.raises(AlreadyStartedError):
            room.start(random.Random(5))


class TestPassCard:
    """Tests for moving cards between hands."""

    def test_pass_moves_card_to_end_of_receiver_hand(self):
        room = make_room(("Alice", "Bob"))
        room.start(random.Random(3))
        alice, bob = room.players
        card = alice.hand[1]

        moved = room.pass_card(0, card.card_id, 1)

        assert moved == card
        assert card not in alice.hand
        assert bob.hand[-1] == card
        assert len(alice.hand) == 3
        assert len(bob.hand) == 5
        assert room.total_cards() == 8

    def test_pass_unknown_card_changes_nothing(self):
        room = make_room(("Alice", "Bob"))
        room.start(random.Random(3))
        before = [list(p.hand) for p in room.players]

        assert room.pass_card(0, "no-such-card", 1) is None
        assert [list(p.hand) for p in room.players] == before

    def test_pass_card_from_other_hand_changes_nothing(self):
        room = make_room(("Alice", "Bob"))
        room.start(random.Random(3))
        bobs_card = room.players[1].hand[0]

        assert room.pass_card(0, bobs_card.card_id, 1) is None
        assert bobs_card in room.players[1].hand

    def test_pass_to_unknown_player_changes_nothing(self):
        room = make_room(("Alice", "Bob"))
        room.start(random.Random(3))
        card = room.players[0].hand[0]

        assert room.pass_card(0, card.card_id, 7) is None
        assert card in room.players[0].hand

    def test_turn_moves_clockwise_and_wraps(self):
        room = make_room()
        room.current_turn_index = 1
        assert room.next_player().player_id == 2
        assert room.move_to_next_player() == 2
        assert room.move_to_next_player() == 0


class TestWinner:
    """Tests for win detection."""

    def test_no_winner_before_start(self):
        room = make_room(("Alice", "Bob"))
        give(room.players[0], *[Color.RED] * 4)
        assert room.check_winner() is None
        assert not room.game_ended

    def test_four_of_a_color_wins(self):
        room = make_room(("Alice", "Bob"))
        room.game_started = True
        give(room.players[0], Color.RED, Color.RED, Color.GREEN, Color.BLUE)
        give(room.players[1], Color.ORANGE, Color.ORANGE, Color.ORANGE, Color.ORANGE)

        winner = room.check_winner()

        assert winner == Winner(player_id=1, name="Bob", color=Color.ORANGE)
        assert room.game_ended
        assert room.phase == RoomPhase.ENDED

    def test_scan_order_is_player_id(self):
        room = make_room(("Alice", "Bob"))
        room.game_started = True
        give(room.players[0], *[Color.BLUE] * 4)
        give(room.players[1], *[Color.RED] * 4)

        assert room.check_winner().player_id == 0

    def test_winner_is_frozen_once_recorded(self):
        room = make_room(("Alice", "Bob"))
        room.game_started = True
        give(room.players[0], *[Color.GREEN] * 4)
        give(room.players[1], Color.RED, Color.RED, Color.BLUE, Color.BLUE)
        first = room.check_winner()

        give(room.players[0], Color.RED, Color.RED, Color.BLUE, Color.BLUE)
        give(room.players[1], *[Color.GREEN] * 4)

        assert room.check_winner() is first

    def test_three_of_a_color_is_not_enough(self):
        room = make_room(("Alice", "Bob"))
        room.game_started = True
        give(room.players[0], Color.RED, Color.RED, Color.RED, Color.GREEN)
        give(room.players[1], Color.RED, Color.GREEN, Color.GREEN, Color.GREEN)
        assert room.check_winner() is None

    def test_winning_color_with_five_cards(self):
        player = Player(0, "Alice")
        give(player, Color.BLUE, Color.RED, Color.BLUE, Color.BLUE, Color.BLUE)
        assert player.winning_color() == Color.BLUE
        assert player.color_counts()[Color.BLUE] == 4


class TestInvariants:
    """Tests for Room.check_invariants."""

    def test_fresh_and_started_rooms_are_sound(self):
        room = make_room()
        assert room.check_invariants() == []
        room.start(random.Random(2))
        assert room.check_invariants() == []

    def test_duplicate_card_is_reported(self):
        room = make_room(("Alice", "Bob"))
        room.start(random.Random(2))
        dup = room.players[0].hand[0]
        room.players[1].hand[0] = dup

        assert any("more than one place" in v for v in room.check_invariants())

    def test_missing_card_is_reported(self):
        room = make_room(("Alice", "Bob"))
        room.start(random.Random(2))
        room.players[0].hand.pop()

        assert any("cards in play" in v for v in room.check_invariants())

    def test_ended_without_winner_is_reported(self):
        room = make_room(("Alice", "Bob"))
        room.start(random.Random(2))
        room.game_ended = True

        assert "game_ended and winner disagree" in room.check_invariants()

    def test_cards_in_lobby_are_reported(self):
        room = make_room(("Alice", "Bob"))
        give(room.players[0], Color.RED)

        assert "cards dealt before the game started" in room.check_invariants()
