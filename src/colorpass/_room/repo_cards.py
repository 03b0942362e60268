# Area: Room
"""
colorpass._room.repo_cards — Cards Repository
=============================================

Repository for the cards table. Each row records the card's current
holder and its position in that holder's hand.
"""

from typing import Any, Dict, List, Sequence, Tuple
from .database import BaseRepository


class CardRepository(BaseRepository):
    """Repository for cards table."""

    def insert_cards(
        self, room_id: str, cards: Sequence[Tuple[int, str, str, str, int]]
    ) -> None:
        """
        Save dealt cards.

        Args:
            room_id: Room the cards belong to
            cards: (player_id, card_id, color, symbol, position) tuples
        """
        query = """
            INSERT INTO cards (room_id, player_id, card_id, color, symbol, position)
            VALUES (?, ?, ?, ?, ?, ?)
        """
        self._execute_many(query, [(room_id, *card) for card in cards])

    def get_cards(self, room_id: str) -> List[Dict[str, Any]]:
        """
        Get all cards of a room.

        Returns:
            Card records ordered by holder, then hand position
        """
        query = """
            SELECT * FROM cards WHERE room_id = ?
            ORDER BY player_id, position
        """
        return self._execute(query, (room_id,), fetch=True) or []

    def next_position(self, room_id: str) -> int:
        """Position that sorts after every card currently in the room."""
        query = "SELECT COALESCE(MAX(position), -1) + 1 AS pos FROM cards WHERE room_id = ?"
        row = self._execute_one(query, (room_id,))
        return row["pos"] if row else 0

    def move_card(
        self, room_id: str, card_id: str, from_player_id: int,
        to_player_id: int, position: int
    ) -> int:
        """
        Move a card to the end of another player's hand.

        Returns:
            Number of rows changed (0 if the source did not hold the card)
        """
        conn = self._get_conn()
        try:
            cursor = conn.execute(
                """
                UPDATE cards SET player_id = ?, position = ?
                WHERE room_id = ? AND card_id = ? AND player_id = ?
                """,
                (to_player_id, position, room_id, card_id, from_player_id),
            )
            return cursor.rowcount
        finally:
            self._release(conn)

    def delete_cards(self, room_id: str) -> None:
        query = "DELETE FROM cards WHERE room_id = ?"
        self._execute(query, (room_id,))
