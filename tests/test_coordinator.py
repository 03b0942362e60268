# Area: Room Tests
"""Tests for GameCoordinator actions."""

import random

import pytest

from conftest import rig_hands
from colorpass._room.coordinator import GameCoordinator
from colorpass._room.enums import Color
from colorpass.errors import (
    AlreadyStartedError,
    CardNotFoundError,
    GameEndedError,
    GameNotStartedError,
    NotEnoughPlayersError,
    NotHostError,
    NotYourTurnError,
    PersistenceError,
    PlayerNotFoundError,
    RoomFullError,
    RoomNotFoundError,
    ValidationError,
)

R, G, O, B = Color.RED, Color.GREEN, Color.ORANGE, Color.BLUE


def open_room(coordinator, *names):
    created = coordinator.create_room(names[0])
    for name in names[1:]:
        coordinator.join_room(created.room_id, name)
    return created.room_id


def started_room(coordinator, *names):
    room_id = open_room(coordinator, *names)
    coordinator.start_game(room_id, 0)
    return room_id


def hands(coordinator, room_id):
    """Every player's card ids, read through each player's own view."""
    result = {}
    summary = coordinator.get_state(room_id)
    for player in summary["players"]:
        view = coordinator.get_state(room_id, player["player_id"])
        own = view["players"][player["player_id"]]["hand"]
        result[player["player_id"]] = [c["card_id"] for c in own]
    return result


class TestLobby:
    """Tests for create_room and join_room."""

    def test_create_room_returns_host_seat(self, coordinator):
        created = coordinator.create_room("Alice")

        assert created.player_id == 0
        assert len(created.room_id) == 6
        state = coordinator.get_state(created.room_id)
        assert state["room"]["phase"] == "LOBBY"
        assert state["players"][0]["name"] == "Alice"
        assert state["players"][0]["is_host"] is True

    def test_join_assigns_next_id(self, coordinator):
        room_id = open_room(coordinator, "Alice")
        assert coordinator.join_room(room_id, "Bob").player_id == 1
        assert coordinator.join_room(room_id, "Carol").player_id == 2

    def test_join_accepts_lowercase_room_id(self, coordinator):
        room_id = open_room(coordinator, "Alice")
        joined = coordinator.join_room(room_id.lower(), "Bob")
        assert joined.room_id == room_id

    def test_join_missing_room(self, coordinator):
        with pytest.raises(RoomNotFoundError):
            coordinator.join_room("ZZZZZZ", "Bob")

    def test_fifth_player_rejected(self, coordinator):
        room_id = open_room(coordinator, "Alice", "Bob", "Carol", "Dave")
        with pytest.raises(RoomFullError):
            coordinator.join_room(room_id, "Eve")
        assert coordinator.get_state(room_id)["room"]["player_count"] == 4

    def test_join_after_start_rejected(self, coordinator):
        room_id = started_room(coordinator, "Alice", "Bob")
        with pytest.raises(AlreadyStartedError):
            coordinator.join_room(room_id, "Carol")

    def test_full_and_started_room_reports_full(self, coordinator):
        room_id = started_room(coordinator, "Alice", "Bob", "Carol", "Dave")
        with pytest.raises(RoomFullError):
            coordinator.join_room(room_id, "Eve")

    def test_blank_name_rejected(self, coordinator):
        with pytest.raises(ValidationError):
            coordinator.create_room("   ")


class TestRoomIdAllocation:
    """Tests for room code uniqueness."""

    def test_taken_code_is_regenerated(self, store):
        codes = iter(["AAAAAA", "AAAAAA", "BBBBBB"])
        coordinator = GameCoordinator(store, room_id_factory=lambda: next(codes))

        assert coordinator.create_room("Alice").room_id == "AAAAAA"
        assert coordinator.create_room("Bob").room_id == "BBBBBB"

    def test_exhausted_attempts_raise(self, store):
        coordinator = GameCoordinator(store, room_id_factory=lambda: "AAAAAA",
                                      room_id_attempts=3)
        coordinator.create_room("Alice")
        with pytest.raises(PersistenceError):
            coordinator.create_room("Bob")


class TestStartGame:
    """Tests for start_game."""

    def test_start_deals_four_cards_each(self, coordinator):
        room_id = open_room(coordinator, "Alice", "Bob", "Carol")
        result = coordinator.start_game(room_id, 0)

        assert result.player_count == 3
        assert 0 <= result.starting_player_id < 3
        state = coordinator.get_state(room_id)
        assert state["room"]["phase"] == "PLAYING"
        assert state["room"]["current_player_id"] == result.starting_player_id
        assert [p["hand_count"] for p in state["players"]] == [4, 4, 4]

    def test_only_host_can_start(self, coordinator):
        room_id = open_room(coordinator, "Alice", "Bob")
        with pytest.raises(NotHostError):
            coordinator.start_game(room_id, 1)

    def test_unknown_caller(self, coordinator):
        room_id = open_room(coordinator, "Alice", "Bob")
        with pytest.raises(PlayerNotFoundError):
            coordinator.start_game(room_id, 5)

    def test_needs_two_players(self, coordinator):
        room_id = open_room(coordinator, "Alice")
        with pytest.raises(NotEnoughPlayersError) as exc_info:
            coordinator.start_game(room_id, 0)
        assert exc_info.value.details["player_count"] == 1
        assert coordinator.get_state(room_id)["room"]["game_started"] is False

    def test_start_twice_rejected(self, coordinator):
        room_id = started_room(coordinator, "Alice", "Bob")
        before = hands(coordinator, room_id)
        with pytest.raises(AlreadyStartedError):
            coordinator.start_game(room_id, 0)
        assert hands(coordinator, room_id) == before


class TestPlayCard:
    """Tests for play_card turn gating and card movement."""

    def test_play_before_start(self, coordinator):
        room_id = open_room(coordinator, "Alice", "Bob")
        with pytest.raises(GameNotStartedError):
            coordinator.play_card(room_id, 0, "anything")

    def test_out_of_turn_play_changes_nothing(self, coordinator):
        room_id = started_room(coordinator, "Alice", "Bob", "Carol")
        state = coordinator.get_state(room_id)
        current = state["room"]["current_player_id"]
        other = (current + 1) % 3
        before = hands(coordinator, room_id)

        with pytest.raises(NotYourTurnError) as exc_info:
            coordinator.play_card(room_id, other, before[other][0])

        assert exc_info.value.details["current_player_id"] == current
        assert hands(coordinator, room_id) == before
        assert coordinator.get_state(room_id)["room"] == state["room"]

    def test_card_not_in_hand_changes_nothing(self, coordinator):
        room_id = started_room(coordinator, "Alice", "Bob")
        current = coordinator.get_state(room_id)["room"]["current_player_id"]
        before = hands(coordinator, room_id)
        someone_elses = before[1 - current][0]

        with pytest.raises(CardNotFoundError):
            coordinator.play_card(room_id, current, someone_elses)
        assert hands(coordinator, room_id) == before

    def test_unknown_caller(self, coordinator):
        room_id = started_room(coordinator, "Alice", "Bob")
        with pytest.raises(PlayerNotFoundError):
            coordinator.play_card(room_id, 3, "anything")

    def test_play_passes_clockwise_and_advances_turn(self, db_path, coordinator):
        room_id = started_room(coordinator, "Alice", "Bob", "Carol")
        ids = rig_hands(db_path, room_id, {
            0: [R, R, G, G],
            1: [O, O, B, B],
            2: [R, G, O, B],
        }, current_player_index=2)

        result = coordinator.play_card(room_id, 2, ids[2][0])

        assert result.from_player_id == 2
        assert result.to_player_id == 0
        assert result.current_turn_index == 0
        assert result.winner is None
        after = hands(coordinator, room_id)
        assert after[0][-1] == ids[2][0]
        assert len(after[0]) == 5
        assert len(after[2]) == 3

    def test_turns_advance_one_seat_at_a_time(self, coordinator):
        room_id = started_room(coordinator, "Alice", "Bob", "Carol", "Dave")
        for _ in range(12):
            state = coordinator.get_state(room_id)
            if state["room"]["game_ended"]:
                break
            current = state["room"]["current_player_id"]
            card = hands(coordinator, room_id)[current][0]
            result = coordinator.play_card(room_id, current, card)
            if result.winner is None:
                assert result.current_turn_index == (current + 1) % 4
            assert sum(len(h) for h in hands(coordinator, room_id).values()) == 16


class TestAliceBobCarol:
    """End-to-end three-player game with known hands."""

    @pytest.fixture
    def game(self, db_path, coordinator):
        created = coordinator.create_room("Alice")
        assert created.player_id == 0
        assert coordinator.join_room(created.room_id, "Bob").player_id == 1
        assert coordinator.join_room(created.room_id, "Carol").player_id == 2
        coordinator.start_game(created.room_id, 0)

        dealt = hands(coordinator, created.room_id)
        assert sum(len(h) for h in dealt.values()) == 12

        ids = rig_hands(db_path, created.room_id, {
            0: [R, R, R, G],
            1: [G, B, B, O],
            2: [R, G, O, B],
        }, current_player_index=2)
        return created.room_id, ids

    def test_passing_fourth_red_wins(self, coordinator, game):
        room_id, ids = game
        red = ids[2][0]

        result = coordinator.play_card(room_id, 2, red)

        assert result.game_ended
        assert result.winner["player_id"] == 0
        assert result.winner["name"] == "Alice"
        assert result.winner["color"] == "red"
        assert len(result.winner["winning_cards"]) == 4

        state = coordinator.get_state(room_id)
        assert state["room"]["phase"] == "ENDED"
        assert state["winner"]["player_id"] == 0
        assert [p["hand_count"] for p in state["players"]] == [5, 4, 3]

    def test_no_play_after_game_end(self, coordinator, game):
        room_id, ids = game
        coordinator.play_card(room_id, 2, ids[2][0])
        before = hands(coordinator, room_id)

        with pytest.raises(GameEndedError):
            coordinator.play_card(room_id, 0, ids[0][0])
        assert hands(coordinator, room_id) == before

    def test_check_winner_is_idempotent(self, coordinator, game):
        room_id, ids = game
        assert coordinator.check_winner(room_id) is None

        coordinator.play_card(room_id, 2, ids[2][0])
        first = coordinator.check_winner(room_id)
        second = coordinator.check_winner(room_id)

        assert first == second
        assert first["player_id"] == 0

    def test_check_winner_records_dealt_win(self, db_path, coordinator, game):
        room_id, _ = game
        rig_hands(db_path, room_id, {
            0: [R, G, O, B],
            1: [B, B, B, B],
            2: [R, G, O, G],
        }, current_player_index=0)

        winner = coordinator.check_winner(room_id)

        assert winner["player_id"] == 1
        assert winner["color"] == "blue"
        assert coordinator.get_state(room_id)["room"]["game_ended"] is True


class TestQueries:
    """Tests for get_state, check_winner and delete_room."""

    def test_viewer_sees_only_own_hand(self, coordinator):
        room_id = started_room(coordinator, "Alice", "Bob", "Carol")
        state = coordinator.get_state(room_id, 1)

        assert state["viewer_player_id"] == 1
        for player in state["players"]:
            assert player["hand_count"] == 4
            if player["player_id"] == 1:
                assert len(player["hand"]) == 4
            else:
                assert player["hand"] is None

    def test_no_viewer_sees_no_hands(self, coordinator):
        room_id = started_room(coordinator, "Alice", "Bob")
        state = coordinator.get_state(room_id)
        assert all(p["hand"] is None for p in state["players"])

    def test_unknown_viewer(self, coordinator):
        room_id = open_room(coordinator, "Alice")
        with pytest.raises(PlayerNotFoundError):
            coordinator.get_state(room_id, 3)

    def test_state_of_missing_room(self, coordinator):
        with pytest.raises(RoomNotFoundError):
            coordinator.get_state("ZZZZZZ")

    def test_check_winner_in_lobby(self, coordinator):
        room_id = open_room(coordinator, "Alice")
        assert coordinator.check_winner(room_id) is None

    def test_delete_is_idempotent(self, coordinator):
        room_id = started_room(coordinator, "Alice", "Bob")

        assert coordinator.delete_room(room_id).deleted is True
        assert coordinator.delete_room(room_id).deleted is False
        with pytest.raises(RoomNotFoundError):
            coordinator.get_state(room_id)

    def test_state_survives_new_coordinator(self, store, coordinator):
        room_id = started_room(coordinator, "Alice", "Bob")
        before = coordinator.get_state(room_id, 0)

        fresh = GameCoordinator(store, rng=random.Random(0))
        assert fresh.get_state(room_id, 0) == before
