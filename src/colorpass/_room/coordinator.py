# Area: Room
"""Coordinator — validates client actions and applies them to rooms."""
import logging
import random
from typing import Callable, Optional

from .inputs import (
    CreateRoomInput,
    GetStateInput,
    JoinRoomInput,
    PlayCardInput,
    RoomRefInput,
    StartGameInput,
    parse_input,
)
from .enums import MAX_PLAYERS, MIN_PLAYERS
from .models import Room
from .results import (
    CreateRoomResult,
    DeleteRoomResult,
    JoinRoomResult,
    PlayCardResult,
    StartGameResult,
)
from .room_ids import generate_room_id, normalize_room_id
from .snapshot import build_state_view, build_winner_view
from .store import RoomSession, RoomStore
from ..errors import (
    AlreadyStartedError,
    CardNotFoundError,
    ColorPassError,
    GameEndedError,
    GameNotStartedError,
    NotEnoughPlayersError,
    NotHostError,
    NotYourTurnError,
    PersistenceError,
    PlayerNotFoundError,
    RoomFullError,
    RoomNotFoundError,
)
from ..types import StateView, WinnerView

logger = logging.getLogger("colorpass.room.coordinator")

DEFAULT_ROOM_ID_ATTEMPTS = 20


class GameCoordinator:
    """
    Entry point for every room action.

    Each action is one unit of work against the store: load the room,
    check the request against the rules, mutate, persist, commit. No
    room state is kept on the coordinator between calls, so any number
    of coordinators may share one database.
    """

    def __init__(
        self,
        store: RoomStore,
        rng: Optional[random.Random] = None,
        room_id_factory: Callable[[], str] = generate_room_id,
        room_id_attempts: int = DEFAULT_ROOM_ID_ATTEMPTS,
    ):
        self.store = store
        self.rng = rng or random.Random()
        self.room_id_factory = room_id_factory
        self.room_id_attempts = room_id_attempts

    # ── Lobby ────────────────────────────────────────────────

    def create_room(self, player_name: str) -> CreateRoomResult:
        data = parse_input(CreateRoomInput, {"player_name": player_name})
        with self.store.transaction() as session:
            room_id = self._allocate_room_id(session)
            room = Room.create(room_id, data.player_name)
            session.insert_room(room)
        logger.info("Room %s created by %s", room_id, data.player_name)
        return CreateRoomResult(room_id=room_id, player_id=0)

    def _allocate_room_id(self, session: RoomSession) -> str:
        for _ in range(self.room_id_attempts):
            candidate = normalize_room_id(self.room_id_factory())
            if not session.room_exists(candidate):
                return candidate
            logger.debug("Room id %s already taken, regenerating", candidate)
        raise PersistenceError(
            f"Could not allocate a free room id after {self.room_id_attempts} attempts",
            {"attempts": self.room_id_attempts},
        )

    def join_room(self, room_id: str, player_name: str) -> JoinRoomResult:
        data = parse_input(JoinRoomInput, {"room_id": room_id, "player_name": player_name})
        with self.store.transaction() as session:
            room = self._load(session, data.room_id)
            if room.is_full():
                raise self._reject(RoomFullError(room.room_id, MAX_PLAYERS))
            if room.game_started:
                raise self._reject(AlreadyStartedError(room.room_id))
            player = room.add_player(data.player_name)
            session.insert_player(room.room_id, player)
        logger.info("[%s] %s joined as player %d", room.room_id, player.name, player.player_id)
        return JoinRoomResult(room_id=room.room_id, player_id=player.player_id)

    def start_game(self, room_id: str, caller_player_id: int) -> StartGameResult:
        data = parse_input(StartGameInput, {"room_id": room_id,
                                            "caller_player_id": caller_player_id})
        with self.store.transaction() as session:
            room = self._load(session, data.room_id)
            caller = room.player(data.caller_player_id)
            if caller is None:
                raise self._reject(PlayerNotFoundError(room.room_id, data.caller_player_id))
            if not caller.is_host:
                raise self._reject(NotHostError(room.room_id, caller.player_id))
            if room.game_started:
                raise self._reject(AlreadyStartedError(room.room_id))
            if not room.can_start():
                raise self._reject(
                    NotEnoughPlayersError(room.room_id, room.player_count(), MIN_PLAYERS)
                )
            room.start(self.rng)
            session.save_deal(room)
        logger.info(
            "[%s] Game started with %d players, player %d goes first",
            room.room_id, room.player_count(), room.current_turn_index,
        )
        return StartGameResult(
            room_id=room.room_id,
            starting_player_id=room.current_turn_index,
            player_count=room.player_count(),
        )

    # ── Play ─────────────────────────────────────────────────

    def play_card(self, room_id: str, caller_player_id: int, card_id: str) -> PlayCardResult:
        """
        Pass ``card_id`` from the caller to the next player clockwise.

        The pass, the turn advance and the winner check commit together
        or not at all.
        """
        data = parse_input(PlayCardInput, {"room_id": room_id,
                                           "caller_player_id": caller_player_id,
                                           "card_id": card_id})
        with self.store.transaction() as session:
            room = self._load(session, data.room_id)
            if room.game_ended:
                raise self._reject(GameEndedError(room.room_id))
            if not room.game_started:
                raise self._reject(GameNotStartedError(room.room_id))
            if room.player(data.caller_player_id) is None:
                raise self._reject(PlayerNotFoundError(room.room_id, data.caller_player_id))
            current = room.current_player()
            if current.player_id != data.caller_player_id:
                raise self._reject(
                    NotYourTurnError(room.room_id, data.caller_player_id, current.player_id)
                )

            receiver = room.next_player()
            card = room.pass_card(current.player_id, data.card_id, receiver.player_id)
            if card is None:
                raise self._reject(
                    CardNotFoundError(room.room_id, current.player_id, data.card_id)
                )
            room.move_to_next_player()
            winner = room.check_winner()

            session.save_pass(room.room_id, card, current.player_id, receiver.player_id)
            session.save_turn(room)
            if winner is not None:
                session.save_winner(room)

        logger.info(
            "[%s] Player %d passed %s to player %d",
            room.room_id, current.player_id, card.card_id, receiver.player_id,
        )
        if winner is not None:
            logger.info("[%s] Player %d (%s) wins with %s",
                        room.room_id, winner.player_id, winner.name, winner.color.value)
        return PlayCardResult(
            room_id=room.room_id,
            from_player_id=current.player_id,
            to_player_id=receiver.player_id,
            card_id=card.card_id,
            current_turn_index=room.current_turn_index,
            winner=build_winner_view(room) if winner is not None else None,
        )

    # ── Queries ──────────────────────────────────────────────

    def get_state(self, room_id: str, viewer_player_id: Optional[int] = None) -> StateView:
        """Read-only view of the room for ``viewer_player_id``."""
        data = parse_input(GetStateInput, {"room_id": room_id,
                                           "viewer_player_id": viewer_player_id})
        with self.store.snapshot() as session:
            room = self._load(session, data.room_id)
        if data.viewer_player_id is not None and room.player(data.viewer_player_id) is None:
            raise self._reject(PlayerNotFoundError(room.room_id, data.viewer_player_id))
        return build_state_view(room, data.viewer_player_id)

    def check_winner(self, room_id: str) -> Optional[WinnerView]:
        """
        Idempotent winner check.

        Returns the recorded winner if there is one. Otherwise runs the
        win scan on a started game and records any winner it finds.
        """
        data = parse_input(RoomRefInput, {"room_id": room_id})
        with self.store.snapshot() as session:
            room = self._load(session, data.room_id)
        if room.winner is not None or not room.game_started:
            return build_winner_view(room)
        if room.check_winner() is None:
            return None

        with self.store.transaction() as session:
            room = self._load(session, data.room_id)
            if room.winner is None and room.check_winner() is not None:
                session.save_winner(room)
                logger.info("[%s] Winner recorded by check: player %d",
                            room.room_id, room.winner.player_id)
        return build_winner_view(room)

    # ── Teardown ─────────────────────────────────────────────

    def delete_room(self, room_id: str) -> DeleteRoomResult:
        data = parse_input(RoomRefInput, {"room_id": room_id})
        with self.store.transaction() as session:
            deleted = session.delete_room(data.room_id)
        if deleted:
            logger.info("[%s] Room deleted", data.room_id)
        else:
            logger.debug("[%s] Delete requested for missing room", data.room_id)
        return DeleteRoomResult(room_id=data.room_id, deleted=deleted)

    # ── Helpers ──────────────────────────────────────────────

    def _load(self, session: RoomSession, room_id: str) -> Room:
        room = session.load_room(room_id)
        if room is None:
            raise self._reject(RoomNotFoundError(room_id))
        return room

    @staticmethod
    def _reject(error: ColorPassError) -> ColorPassError:
        logger.warning("Rejected: %s", error.message)
        return error
