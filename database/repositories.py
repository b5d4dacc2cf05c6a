"""Database access layer helpers."""

from __future__ import annotations

from typing import List, Optional, Tuple

from core.constants import ResultKind
from database.base_repository import BaseRepository
from database.models import DrawResult, Participant

RESULT_COLUMNS = "scope, draw_date, kind, winner_id, winner_name, winner_points, created_at"


class ParticipantRepository(BaseRepository):
    """Repository for participant operations."""

    @staticmethod
    async def register(scope: str, user_id: int, name: str) -> Tuple[Participant, bool]:
        """Insert a participant unless one already exists in the scope.

        Returns:
            Tuple of (stored participant, whether it was created now)
        """
        inserted = await BaseRepository.execute(
            """
            INSERT INTO participants (scope, user_id, name, points)
            VALUES (?, ?, ?, 0)
            ON CONFLICT(scope, user_id) DO NOTHING
            """,
            (scope, user_id, name),
        )
        participant = await ParticipantRepository.get(scope, user_id)
        return participant, inserted == 1

    @staticmethod
    async def get(scope: str, user_id: int) -> Optional[Participant]:
        row = await BaseRepository.fetch_one(
            "SELECT user_id, name, points FROM participants WHERE scope=? AND user_id=?",
            (scope, user_id),
        )
        return Participant.from_row(row) if row else None

    @staticmethod
    async def list_ranked(scope: str) -> List[Participant]:
        """Participants by points descending; ties keep registration order."""
        rows = await BaseRepository.fetch_all(
            "SELECT user_id, name, points FROM participants WHERE scope=? ORDER BY points DESC, id ASC",
            (scope,),
        )
        return [Participant.from_row(row) for row in rows]


class ResultRepository(BaseRepository):
    """Repository for draw results."""

    @staticmethod
    async def get(scope: str, draw_date: str, kind: ResultKind = ResultKind.DAILY) -> Optional[DrawResult]:
        row = await BaseRepository.fetch_one(
            f"SELECT {RESULT_COLUMNS} FROM results WHERE scope=? AND draw_date=? AND kind=?",
            (scope, draw_date, kind.value),
        )
        return DrawResult.from_row(row) if row else None
