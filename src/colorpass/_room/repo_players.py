# Area: Room
"""
colorpass._room.repo_players — Players Repository
=================================================

Repository for the players table. Players are only ever added; they
are removed together with their room.
"""

from typing import Any, Dict, List
from .database import BaseRepository


class PlayerRepository(BaseRepository):
    """Repository for players table."""

    def insert_player(
        self, room_id: str, player_id: int, name: str, is_host: bool = False
    ) -> None:
        """
        Save a newly seated player.

        Args:
            room_id: Room the player joined
            player_id: Dense seat index within the room
            name: Display name
            is_host: True only for player 0
        """
        query = """
            INSERT INTO players (room_id, player_id, name, is_host)
            VALUES (?, ?, ?, ?)
        """
        self._execute(query, (room_id, player_id, name, int(is_host)))

    def get_players(self, room_id: str) -> List[Dict[str, Any]]:
        """
        Get all players of a room.

        Returns:
            Player records ordered by player_id
        """
        query = "SELECT * FROM players WHERE room_id = ? ORDER BY player_id"
        return self._execute(query, (room_id,), fetch=True) or []

    def count_players(self, room_id: str) -> int:
        query = "SELECT COUNT(*) AS n FROM players WHERE room_id = ?"
        row = self._execute_one(query, (room_id,))
        return row["n"] if row else 0

    def delete_players(self, room_id: str) -> None:
        query = "DELETE FROM players WHERE room_id = ?"
        self._execute(query, (room_id,))
