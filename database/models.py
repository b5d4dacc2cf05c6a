"""Records stored in the participants and results tables."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Sequence

from core.constants import ResultKind


@dataclass(frozen=True, slots=True)
class Participant:
    id: int
    name: str
    points: int = 0

    def with_points(self, points: int) -> "Participant":
        return replace(self, points=points)

    @classmethod
    def from_row(cls, row: Sequence) -> "Participant":
        """Build from a ``(user_id, name, points)`` row."""
        return cls(id=int(row[0]), name=row[1], points=int(row[2]))


@dataclass(frozen=True, slots=True)
class DrawResult:
    scope: str
    date: str
    winner: Participant
    kind: ResultKind = ResultKind.DAILY
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Sequence) -> "DrawResult":
        """Build from a ``(scope, draw_date, kind, winner_id, winner_name, winner_points, created_at)`` row."""
        return cls(
            scope=row[0],
            date=row[1],
            kind=ResultKind(row[2]),
            winner=Participant(id=int(row[3]), name=row[4], points=int(row[5])),
            created_at=row[6],
        )
