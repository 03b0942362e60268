# Area: Room
"""
colorpass._room.repo_rooms — Rooms Repository
=============================================

Repository for the rooms table: lifecycle flags, turn pointer and
the frozen winner.
"""

from typing import Any, Dict, List, Optional
from .database import BaseRepository


class RoomRepository(BaseRepository):
    """
    Repository for rooms table.

    Handles inserting, retrieving, updating and deleting room records.
    """

    def insert_room(self, room_id: str) -> None:
        """
        Insert a new room in the lobby state.

        Args:
            room_id: Unique room code

        Raises:
            sqlite3.IntegrityError: If the room code is already taken
        """
        query = "INSERT INTO rooms (room_id) VALUES (?)"
        self._execute(query, (room_id,))

    def get_room(self, room_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a room by ID.

        Args:
            room_id: Room code to look up

        Returns:
            Room record dict or None if not found
        """
        query = "SELECT * FROM rooms WHERE room_id = ?"
        return self._execute_one(query, (room_id,))

    def exists(self, room_id: str) -> bool:
        query = "SELECT 1 AS found FROM rooms WHERE room_id = ?"
        return self._execute_one(query, (room_id,)) is not None

    def mark_started(self, room_id: str, current_player_index: int) -> None:
        """Mark room as started with the chosen first player."""
        query = """
            UPDATE rooms
            SET game_started = 1, current_player_index = ?
            WHERE room_id = ?
        """
        self._execute(query, (current_player_index, room_id))

    def update_turn(self, room_id: str, current_player_index: int) -> None:
        query = "UPDATE rooms SET current_player_index = ? WHERE room_id = ?"
        self._execute(query, (current_player_index, room_id))

    def mark_ended(self, room_id: str, winner_id: int, winner_color: str) -> None:
        """Record the winner. Only a room without a winner is updated."""
        query = """
            UPDATE rooms
            SET game_ended = 1, winner_id = ?, winner_color = ?
            WHERE room_id = ? AND winner_id IS NULL
        """
        self._execute(query, (winner_id, winner_color, room_id))

    def delete_room(self, room_id: str) -> None:
        query = "DELETE FROM rooms WHERE room_id = ?"
        self._execute(query, (room_id,))

    def get_all_room_ids(self) -> List[str]:
        """
        Get every active room code.

        Returns:
            Room codes, oldest first
        """
        query = "SELECT room_id FROM rooms ORDER BY created_at, room_id"
        rows = self._execute(query, fetch=True) or []
        return [row["room_id"] for row in rows]
