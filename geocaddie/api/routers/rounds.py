from __future__ import annotations

import logging
from typing import Callable, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from geocaddie.api.security import require_api_key
from geocaddie.bag import ClubProfile, generate_bag_from_handicap
from geocaddie.caddie import PlannedInfo, ShotPreview, Wind
from geocaddie.courses import CourseRegistry, get_course_registry
from geocaddie.errors import (
    CourseNotFound,
    InvalidStateError,
    OutOfRangeError,
    PreconditionError,
    RoundSessionNotFound,
)
from geocaddie.geo import GeoPoint
from geocaddie.rounds import (
    HoleScore,
    LeaderboardEntry,
    RoundHistory,
    RoundSession,
    RoundSessionService,
    ShotRecord,
    build_leaderboard,
    get_round_session_service,
)

router = APIRouter(
    prefix="/api/rounds", tags=["rounds"], dependencies=[Depends(require_api_key)]
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StartRoundRequest(BaseModel):
    course_id: str = Field(validation_alias=AliasChoices("course_id", "courseId"))
    tee_id: str | None = Field(
        default=None, validation_alias=AliasChoices("tee_id", "teeId")
    )
    player: str | None = None
    tournament_id: str | None = Field(
        default=None, validation_alias=AliasChoices("tournament_id", "tournamentId")
    )
    start_hole: int = Field(
        default=1, ge=1, validation_alias=AliasChoices("start_hole", "startHole")
    )
    handicap: float | None = None
    bag: list[ClubProfile] | None = None

    model_config = ConfigDict(populate_by_name=True)


class RecordShotRequest(BaseModel):
    landing: GeoPoint
    club: str
    planned_info: PlannedInfo | None = Field(
        default=None, validation_alias=AliasChoices("planned_info", "plannedInfo")
    )

    model_config = ConfigDict(populate_by_name=True)


class HoleScoreRequest(BaseModel):
    strokes_taken: int = Field(
        ge=0, validation_alias=AliasChoices("strokes_taken", "strokesTaken")
    )
    putts: int = Field(default=0, ge=0)
    penalties: int = Field(default=0, ge=0)
    par: int | None = Field(default=None, ge=1)
    player: str | None = None

    model_config = ConfigDict(populate_by_name=True)


class PreviewRequest(BaseModel):
    club: str
    target_bearing: float | None = Field(
        default=None, validation_alias=AliasChoices("target_bearing", "targetBearing")
    )
    wind: Wind | None = None

    model_config = ConfigDict(populate_by_name=True)


class PositionRequest(BaseModel):
    position: GeoPoint
    start_tracking: bool = Field(
        default=False, validation_alias=AliasChoices("start_tracking", "startTracking")
    )

    model_config = ConfigDict(populate_by_name=True)


class PositionOut(BaseModel):
    observed_position: GeoPoint | None = Field(serialization_alias="observedPosition")
    tracked_distance: float | None = Field(serialization_alias="trackedDistance")


class RoundSessionOut(BaseModel):
    id: str
    phase: str
    course_id: str = Field(serialization_alias="courseId")
    player: str
    tournament_id: str | None = Field(default=None, serialization_alias="tournamentId")
    hole_number: int | None = Field(default=None, serialization_alias="holeNumber")
    shot_number: int | None = Field(default=None, serialization_alias="shotNumber")
    ball_position: GeoPoint | None = Field(
        default=None, serialization_alias="ballPosition"
    )
    scorecard: list[HoleScore] = Field(default_factory=list)
    shots: list[ShotRecord] = Field(default_factory=list)


def _session_out(session: RoundSession) -> RoundSessionOut:
    state = session.state
    if state is not None:
        return RoundSessionOut(
            id=session.id,
            phase=session.phase.value,
            course_id=session.course.id,
            player=session.player,
            tournament_id=session.tournament_id,
            hole_number=session.course.holes[state.current_hole_index].number,
            shot_number=state.current_shot_number,
            ball_position=state.current_ball_position,
            scorecard=list(state.scorecard),
            shots=list(state.shots),
        )
    history = session.history
    return RoundSessionOut(
        id=session.id,
        phase=session.phase.value,
        course_id=session.course.id,
        player=session.player,
        tournament_id=session.tournament_id,
        scorecard=list(history.scorecard) if history else [],
        shots=list(history.shots) if history else [],
    )


def _apply(
    service: RoundSessionService,
    session_id: str,
    operation: Callable[[RoundSession], T],
) -> T:
    try:
        return service.apply(session_id, operation)
    except RoundSessionNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="round not found"
        )
    except (InvalidStateError, PreconditionError) as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except OutOfRangeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.post("/start", response_model=RoundSessionOut)
def start_round(
    payload: StartRoundRequest,
    service: RoundSessionService = Depends(get_round_session_service),
    registry: CourseRegistry = Depends(get_course_registry),
) -> RoundSessionOut:
    try:
        course = registry.get(payload.course_id)
    except CourseNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="course not found"
        )

    try:
        if payload.bag:
            bag = list(payload.bag)
        elif payload.handicap is not None:
            bag = generate_bag_from_handicap(payload.handicap)
        else:
            bag = None
        session = service.create(
            course,
            bag,
            tee_id=payload.tee_id,
            player=payload.player,
            tournament_id=payload.tournament_id,
            start_hole_index=payload.start_hole - 1,
        )
    except OutOfRangeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    logger.info(
        "round session created",
        extra={"round_session": session.id, "course_id": course.id},
    )
    return _session_out(session)


@router.get("/leaderboard", response_model=list[LeaderboardEntry])
def get_leaderboard(
    tournament_id: str | None = Query(default=None, alias="tournamentId"),
    service: RoundSessionService = Depends(get_round_session_service),
) -> list[LeaderboardEntry]:
    """Live standings from hole-by-hole scores, finished rounds included."""
    return build_leaderboard(service.live_scorecards(tournament_id))


@router.get("/{session_id}", response_model=RoundSessionOut)
def get_round(
    session_id: str,
    service: RoundSessionService = Depends(get_round_session_service),
) -> RoundSessionOut:
    return _apply(service, session_id, _session_out)


@router.post("/{session_id}/shots", response_model=ShotRecord)
def record_shot(
    session_id: str,
    payload: RecordShotRequest,
    service: RoundSessionService = Depends(get_round_session_service),
) -> ShotRecord:
    return _apply(
        service,
        session_id,
        lambda session: session.record_shot(
            payload.landing, payload.club, payload.planned_info
        ),
    )


@router.delete("/{session_id}/shots/{hole_number}/{shot_number}", response_model=ShotRecord)
def delete_shot(
    session_id: str,
    hole_number: int,
    shot_number: int,
    service: RoundSessionService = Depends(get_round_session_service),
) -> ShotRecord:
    return _apply(
        service,
        session_id,
        lambda session: session.delete_shot(hole_number, shot_number),
    )


@router.get("/{session_id}/score/suggested", response_model=HoleScore)
def suggested_score(
    session_id: str,
    service: RoundSessionService = Depends(get_round_session_service),
) -> HoleScore:
    return _apply(service, session_id, lambda session: session.suggested_hole_score())


@router.post("/{session_id}/score", response_model=HoleScore)
def record_hole_score(
    session_id: str,
    payload: HoleScoreRequest,
    service: RoundSessionService = Depends(get_round_session_service),
) -> HoleScore:
    return _apply(
        service,
        session_id,
        lambda session: session.record_hole_score(
            payload.strokes_taken,
            payload.putts,
            payload.penalties,
            par=payload.par,
            player=payload.player,
        ),
    )


@router.post("/{session_id}/advance", response_model=RoundSessionOut)
def advance_hole(
    session_id: str,
    service: RoundSessionService = Depends(get_round_session_service),
) -> RoundSessionOut:
    def _advance(session: RoundSession) -> RoundSessionOut:
        session.advance_hole()
        return _session_out(session)

    return _apply(service, session_id, _advance)


@router.post("/{session_id}/preview", response_model=ShotPreview)
def preview_shot(
    session_id: str,
    payload: PreviewRequest,
    service: RoundSessionService = Depends(get_round_session_service),
) -> ShotPreview:
    return _apply(
        service,
        session_id,
        lambda session: session.preview(
            payload.club, payload.target_bearing, payload.wind
        ),
    )


@router.post("/{session_id}/position", response_model=PositionOut)
def observe_position(
    session_id: str,
    payload: PositionRequest,
    service: RoundSessionService = Depends(get_round_session_service),
) -> PositionOut:
    def _observe(session: RoundSession) -> PositionOut:
        session.observe_position(payload.position)
        if payload.start_tracking:
            session.start_tracking()
        return PositionOut(
            observed_position=session.observed_position,
            tracked_distance=session.tracked_distance(),
        )

    return _apply(service, session_id, _observe)


@router.post("/{session_id}/finish", response_model=RoundHistory)
def finish_round(
    session_id: str,
    service: RoundSessionService = Depends(get_round_session_service),
) -> RoundHistory:
    return _apply(service, session_id, lambda session: session.finish())


@router.post("/{session_id}/abandon", response_model=RoundSessionOut)
def abandon_round(
    session_id: str,
    service: RoundSessionService = Depends(get_round_session_service),
) -> RoundSessionOut:
    def _abandon(session: RoundSession) -> RoundSessionOut:
        session.abandon()
        return _session_out(session)

    return _apply(service, session_id, _abandon)


__all__ = ["router"]
