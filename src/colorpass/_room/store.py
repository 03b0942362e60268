# Area: Room
"""
colorpass._room.store — Room store and units of work
====================================================

The persistence boundary. Rooms are stored as three kinds of record
(rooms, players, cards) and rehydrated into ``Room`` objects for the
duration of one action; nothing is cached between actions.

Writes go through ``RoomStore.transaction()``, which takes SQLite's
write lock up front (BEGIN IMMEDIATE) so two composite actions can
never interleave, and rolls everything back if any step fails.
Reads go through ``RoomStore.snapshot()``, a deferred read
transaction that sees one committed state and, under WAL, never
blocks a writer.
"""

import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterator, Optional

from .database import DEFAULT_DB_PATH, DEFAULT_TIMEOUT_SECONDS, get_connection, init_database
from .enums import Color
from .models import Card, Player, Room, Winner
from .repo_cards import CardRepository
from .repo_players import PlayerRepository
from .repo_rooms import RoomRepository
from ..errors import ColorPassError, CorruptRoomStateError, PersistenceError

logger = logging.getLogger("colorpass.room.store")


class RoomSession:
    """
    Repositories bound to the connection of one open transaction.

    Handed out by ``RoomStore``; not meant to outlive the ``with`` block.
    """

    def __init__(self, conn: sqlite3.Connection, db_path: str):
        self.conn = conn
        self.rooms = RoomRepository(db_path, conn=conn)
        self.players = PlayerRepository(db_path, conn=conn)
        self.cards = CardRepository(db_path, conn=conn)

    # ── Reads ────────────────────────────────────────────────

    def room_exists(self, room_id: str) -> bool:
        return self.rooms.exists(room_id)

    def load_room(self, room_id: str) -> Optional[Room]:
        """
        Rehydrate a room from its records.

        Returns:
            The Room, or None if no such room is stored

        Raises:
            CorruptRoomStateError: If the records break a room invariant
        """
        row = self.rooms.get_room(room_id)
        if row is None:
            return None

        players = [
            Player(
                player_id=p["player_id"],
                name=p["name"],
                is_host=bool(p["is_host"]),
            )
            for p in self.players.get_players(room_id)
        ]
        by_id = {p.player_id: p for p in players}
        for c in self.cards.get_cards(room_id):
            holder = by_id.get(c["player_id"])
            if holder is None:
                raise CorruptRoomStateError(
                    room_id, [f"card {c['card_id']} held by unknown player {c['player_id']}"]
                )
            holder.add_card(Card(card_id=c["card_id"], color=Color(c["color"])))

        room = Room(
            room_id=row["room_id"],
            players=players,
            current_turn_index=row["current_player_index"],
            game_started=bool(row["game_started"]),
            game_ended=bool(row["game_ended"]),
            winner=self._load_winner(row, by_id),
        )

        violations = room.check_invariants()
        if violations:
            raise CorruptRoomStateError(room_id, violations)
        return room

    @staticmethod
    def _load_winner(row: dict, by_id: dict) -> Optional[Winner]:
        winner_id = row["winner_id"]
        if winner_id is None:
            return None
        player = by_id.get(winner_id)
        if player is None:
            return None
        color = Color(row["winner_color"]) if row["winner_color"] else player.winning_color()
        if color is None:
            return None
        return Winner(player_id=winner_id, name=player.name, color=color)

    # ── Writes ───────────────────────────────────────────────

    def insert_room(self, room: Room) -> None:
        """Save a new room together with its seated players."""
        self.rooms.insert_room(room.room_id)
        for player in room.players:
            self.insert_player(room.room_id, player)

    def insert_player(self, room_id: str, player: Player) -> None:
        self.players.insert_player(room_id, player.player_id, player.name, player.is_host)

    def save_deal(self, room: Room) -> None:
        """Persist every dealt hand and the chosen first player."""
        rows = []
        position = 0
        for player in room.players:
            for card in player.hand:
                rows.append((player.player_id, card.card_id, card.color.value,
                             card.symbol, position))
                position += 1
        self.cards.insert_cards(room.room_id, rows)
        self.rooms.mark_started(room.room_id, room.current_turn_index)

    def save_pass(self, room_id: str, card: Card, from_player_id: int,
                  to_player_id: int) -> None:
        """
        Persist one card moving to the end of the receiver's hand.

        Raises:
            PersistenceError: If the stored holder does not match
        """
        position = self.cards.next_position(room_id)
        changed = self.cards.move_card(room_id, card.card_id, from_player_id,
                                       to_player_id, position)
        if changed != 1:
            raise PersistenceError(
                f"Card {card.card_id} was not held by player {from_player_id} in storage",
                {"room_id": room_id, "card_id": card.card_id},
            )

    def save_turn(self, room: Room) -> None:
        self.rooms.update_turn(room.room_id, room.current_turn_index)

    def save_winner(self, room: Room) -> None:
        if room.winner is None:
            return
        self.rooms.mark_ended(room.room_id, room.winner.player_id, room.winner.color.value)

    def delete_room(self, room_id: str) -> bool:
        """
        Delete a room and everything in it.

        Returns:
            True if a room was deleted, False if it did not exist
        """
        existed = self.rooms.exists(room_id)
        self.cards.delete_cards(room_id)
        self.players.delete_players(room_id)
        self.rooms.delete_room(room_id)
        return existed


class RoomStore:
    """
    SQLite-backed room storage.

    Usage:
        store = RoomStore("colorpass.db")
        with store.transaction() as session:
            room = session.load_room("ABC123")
            ...
    """

    def __init__(
        self,
        db_path: str = DEFAULT_DB_PATH,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        initialize: bool = True,
    ):
        """
        Args:
            db_path: Path to the SQLite database file
            timeout: Seconds a writer waits for the lock before failing
            initialize: Create tables if they do not exist
        """
        self.db_path = db_path
        self.timeout = timeout
        if initialize:
            try:
                init_database(db_path)
            except sqlite3.Error as e:
                raise PersistenceError(f"Could not initialize database: {e}",
                                       {"db_path": db_path}) from e

    @contextmanager
    def transaction(self) -> Iterator[RoomSession]:
        """Open a write unit of work holding the database write lock."""
        with self._unit("BEGIN IMMEDIATE") as session:
            yield session

    @contextmanager
    def snapshot(self) -> Iterator[RoomSession]:
        """Open a read unit of work over one committed state."""
        with self._unit("BEGIN DEFERRED") as session:
            yield session

    @contextmanager
    def _unit(self, begin: str) -> Iterator[RoomSession]:
        try:
            conn = get_connection(self.db_path, self.timeout)
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not open database: {e}",
                                   {"db_path": self.db_path}) from e
        try:
            try:
                conn.execute(begin)
                yield RoomSession(conn, self.db_path)
                conn.execute("COMMIT")
            except ColorPassError:
                self._rollback(conn)
                raise
            except sqlite3.Error as e:
                self._rollback(conn)
                logger.error("Storage failure, rolled back: %s", e, exc_info=True)
                raise PersistenceError(f"Storage failure: {e}",
                                       {"db_path": self.db_path}) from e
            except BaseException:
                self._rollback(conn)
                raise
        finally:
            conn.close()

    @staticmethod
    def _rollback(conn: sqlite3.Connection) -> None:
        if conn.in_transaction:
            conn.execute("ROLLBACK")
