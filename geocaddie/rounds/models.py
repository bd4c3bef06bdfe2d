from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)

from geocaddie.caddie.dispersion import PlannedInfo
from geocaddie.geo import GeoPoint


class ShotRecord(BaseModel):
    hole_number: int = Field(
        ge=1,
        validation_alias=AliasChoices("hole_number", "holeNumber"),
        serialization_alias="holeNumber",
    )
    shot_number: int = Field(
        ge=1,
        validation_alias=AliasChoices("shot_number", "shotNumber"),
        serialization_alias="shotNumber",
    )
    start: GeoPoint = Field(
        validation_alias=AliasChoices("start", "from"), serialization_alias="from"
    )
    end: GeoPoint = Field(
        validation_alias=AliasChoices("end", "to"), serialization_alias="to"
    )
    club_used: str = Field(
        validation_alias=AliasChoices("club_used", "clubUsed"),
        serialization_alias="clubUsed",
    )
    distance: float = Field(ge=0)
    planned_info: Optional[PlannedInfo] = Field(
        default=None,
        validation_alias=AliasChoices("planned_info", "plannedInfo"),
        serialization_alias="plannedInfo",
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def key(self) -> Tuple[int, int]:
        return (self.hole_number, self.shot_number)


class HoleScore(BaseModel):
    hole_number: int = Field(
        ge=1,
        validation_alias=AliasChoices("hole_number", "holeNumber"),
        serialization_alias="holeNumber",
    )
    par: int = Field(ge=1)
    strokes_taken: int = Field(
        ge=0,
        validation_alias=AliasChoices("strokes_taken", "strokesTaken", "shotsTaken"),
        serialization_alias="strokesTaken",
    )
    putts: int = Field(default=0, ge=0)
    penalties: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="after")
    def _at_least_one_stroke(self) -> "HoleScore":
        if self.total < 1:
            raise ValueError("a hole takes at least one stroke")
        return self

    @property
    def total(self) -> int:
        return self.strokes_taken + self.putts + self.penalties

    @property
    def to_par(self) -> int:
        return self.total - self.par


class RoundHistory(BaseModel):
    """Terminal, persistable artifact of one round."""

    id: str
    date: str
    course_name: str = Field(
        validation_alias=AliasChoices("course_name", "courseName"),
        serialization_alias="courseName",
    )
    scorecard: Tuple[HoleScore, ...] = ()
    shots: Tuple[ShotRecord, ...] = ()
    player: Optional[str] = None
    tournament_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("tournament_id", "tournamentId"),
        serialization_alias="tournamentId",
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "RoundHistory":
        return RoundHistory.model_validate(dict(data))

    def score_for(self, hole_number: int) -> HoleScore | None:
        for score in self.scorecard:
            if score.hole_number == hole_number:
                return score
        return None


class LeaderboardUpdate(BaseModel):
    """One hole score as pushed to a live leaderboard."""

    tournament_id: Optional[str] = Field(default=None, serialization_alias="tournamentId")
    player: str
    hole_number: int = Field(serialization_alias="holeNumber")
    score: HoleScore
    course_name: str = Field(serialization_alias="courseName")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def key(self) -> Tuple[Optional[str], str, int]:
        return (self.tournament_id, self.player, self.hole_number)


@dataclass
class GameState:
    """Transient in-memory state owned by a live round session."""

    current_hole_index: int
    current_shot_number: int
    current_ball_position: GeoPoint
    course_id: str
    tee_id: str | None = None
    scorecard: List[HoleScore] = field(default_factory=list)
    shots: List[ShotRecord] = field(default_factory=list)
    is_round_active: bool = True


__all__ = [
    "ShotRecord",
    "HoleScore",
    "RoundHistory",
    "LeaderboardUpdate",
    "GameState",
]
