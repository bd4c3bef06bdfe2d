from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import HoleScore, RoundHistory

FULL_ROUND_HOLES = 18


class RoundTotals(BaseModel):
    total_score: int = Field(serialization_alias="totalScore")
    total_par: int = Field(serialization_alias="totalPar")
    score_to_par: int = Field(serialization_alias="scoreToPar")
    holes_played: int = Field(serialization_alias="holesPlayed")
    thru: str

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def to_par_label(self) -> str:
        return format_to_par(self.score_to_par)


class LeaderboardEntry(BaseModel):
    position: int
    player: str
    course_name: str = Field(serialization_alias="courseName")
    totals: RoundTotals

    model_config = ConfigDict(frozen=True, populate_by_name=True)


def format_to_par(value: int) -> str:
    if value == 0:
        return "E"
    prefix = "+" if value > 0 else ""
    return f"{prefix}{value}"


def round_totals(
    history: RoundHistory, holes_in_course: int = FULL_ROUND_HOLES
) -> RoundTotals:
    scorecard = history.scorecard
    total_score = sum(score.total for score in scorecard)
    total_par = sum(score.par for score in scorecard)
    holes_played = len(scorecard)
    thru = "F" if holes_played >= holes_in_course else str(holes_played)
    return RoundTotals(
        total_score=total_score,
        total_par=total_par,
        score_to_par=total_score - total_par,
        holes_played=holes_played,
        thru=thru,
    )


def merge_hole_score(
    history: Optional[RoundHistory],
    score: HoleScore,
    *,
    course_name: str,
    player: str,
    tournament_id: str | None = None,
) -> RoundHistory:
    """Replace-by-hole upsert of ``score``; returns a new history.

    Without an existing history a skeleton one is created for ``player``.
    """
    if history is None:
        history = RoundHistory(
            id=str(uuid.uuid4()),
            date=datetime.now(timezone.utc).isoformat(),
            course_name=course_name,
            player=player,
            tournament_id=tournament_id,
        )
    scorecard = sorted(
        [s for s in history.scorecard if s.hole_number != score.hole_number] + [score],
        key=lambda s: s.hole_number,
    )
    return history.model_copy(update={"scorecard": tuple(scorecard)})


def build_leaderboard(
    histories: Iterable[RoundHistory], holes_in_course: int = FULL_ROUND_HOLES
) -> List[LeaderboardEntry]:
    rows = [
        (history, round_totals(history, holes_in_course))
        for history in histories
        if history.scorecard
    ]
    # Lower to par first; more holes played breaks ties.
    rows.sort(key=lambda row: (row[1].score_to_par, -row[1].holes_played))

    entries: List[LeaderboardEntry] = []
    position = 0
    previous: tuple[int, int] | None = None
    for index, (history, totals) in enumerate(rows, start=1):
        rank_key = (totals.score_to_par, totals.holes_played)
        if rank_key != previous:
            position = index
            previous = rank_key
        entries.append(
            LeaderboardEntry(
                position=position,
                player=history.player or "Guest",
                course_name=history.course_name,
                totals=totals,
            )
        )
    return entries


__all__ = [
    "FULL_ROUND_HOLES",
    "LeaderboardEntry",
    "RoundTotals",
    "build_leaderboard",
    "format_to_par",
    "merge_hole_score",
    "round_totals",
]
