"""Per-hole, per-shot state machine for a live round.

A session moves NOT_STARTED -> IN_PROGRESS -> FINISHED, or IN_PROGRESS ->
ABANDONED. Every mutating call runs to completion before the next one; the
live-location stream writes to ``observed_position`` only and never feeds the
shot ledger.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, List, Sequence

from geocaddie.bag import DEFAULT_BAG, ClubProfile, find_club
from geocaddie.caddie.dispersion import PlannedInfo
from geocaddie.caddie.preview import ShotPreview, Wind, compute_shot_preview
from geocaddie.courses import Course, Hole
from geocaddie.errors import InvalidStateError, OutOfRangeError, PreconditionError
from geocaddie.geo import GeoPoint, distance
from geocaddie.metrics.engine_metrics import (
    record_hole_score,
    record_round_transition,
    record_shot_deleted,
    record_shot_recorded,
)

from .models import GameState, HoleScore, LeaderboardUpdate, RoundHistory, ShotRecord

logger = logging.getLogger(__name__)

DEFAULT_PLAYER = "Guest"
ASSUMED_PUTTS = 2

HoleScoreListener = Callable[[LeaderboardUpdate], None]


class RoundPhase(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"
    ABANDONED = "abandoned"


class RoundSession:
    def __init__(
        self,
        course: Course,
        bag: Sequence[ClubProfile] | None = None,
        *,
        tee_id: str | None = None,
        player: str | None = None,
        tournament_id: str | None = None,
        on_hole_score: HoleScoreListener | None = None,
        session_id: str | None = None,
    ) -> None:
        self.id = session_id or str(uuid.uuid4())
        self.course = course
        self.bag: tuple[ClubProfile, ...] = tuple(bag) if bag else DEFAULT_BAG
        self.tee_id = tee_id
        self.player = player or DEFAULT_PLAYER
        self.tournament_id = tournament_id
        self.observed_position: GeoPoint | None = None

        self._phase = RoundPhase.NOT_STARTED
        self._state: GameState | None = None
        self._history: RoundHistory | None = None
        self._group_scores: Dict[str, Dict[int, HoleScore]] = {}
        self._group_histories: List[RoundHistory] = []
        self._tracking_start: GeoPoint | None = None
        self._listener = on_hole_score

    # Introspection
    @property
    def phase(self) -> RoundPhase:
        return self._phase

    @property
    def state(self) -> GameState | None:
        return self._state

    @property
    def history(self) -> RoundHistory | None:
        return self._history

    def hole_shots(self, hole_number: int | None = None) -> List[ShotRecord]:
        state = self._require_active("list shots")
        number = hole_number or self.course.holes[state.current_hole_index].number
        return [shot for shot in state.shots if shot.hole_number == number]

    def _require_active(self, action: str) -> GameState:
        if self._phase is not RoundPhase.IN_PROGRESS or self._state is None:
            raise InvalidStateError(
                f"cannot {action}: round is {self._phase.value}"
            )
        return self._state

    def _log_extra(self, **fields: object) -> dict:
        payload: dict = {
            "round_session": self.id,
            "course_id": self.course.id,
            "player": self.player,
        }
        payload.update(fields)
        return payload

    # Lifecycle
    def start(self, start_hole_index: int = 0) -> GameState:
        if self._phase is not RoundPhase.NOT_STARTED:
            raise InvalidStateError(f"cannot start: round is {self._phase.value}")
        if not 0 <= start_hole_index < self.course.hole_count:
            raise OutOfRangeError(
                f"start hole index {start_hole_index} outside 0..{self.course.hole_count - 1}"
            )

        hole = self.course.holes[start_hole_index]
        self._state = GameState(
            current_hole_index=start_hole_index,
            current_shot_number=1,
            current_ball_position=hole.active_tee(self.tee_id).location,
            course_id=self.course.id,
            tee_id=self.tee_id,
        )
        self._phase = RoundPhase.IN_PROGRESS
        record_round_transition("started")
        logger.info("round started", extra=self._log_extra(hole=hole.number))
        return self._state

    def finish(self) -> RoundHistory:
        state = self._require_active("finish the round")
        if not state.scorecard:
            raise PreconditionError("finish requires at least one hole score")

        date = datetime.now(timezone.utc).isoformat()
        self._history = RoundHistory(
            id=str(uuid.uuid4()),
            date=date,
            course_name=self.course.name,
            scorecard=tuple(state.scorecard),
            shots=tuple(state.shots),
            player=self.player,
            tournament_id=self.tournament_id,
        )
        self._group_histories = [
            RoundHistory(
                id=str(uuid.uuid4()),
                date=date,
                course_name=self.course.name,
                scorecard=tuple(scores[n] for n in sorted(scores)),
                shots=(),
                player=name,
                tournament_id=self.tournament_id,
            )
            for name, scores in self._group_scores.items()
            if scores
        ]
        state.is_round_active = False
        self._state = None
        self._phase = RoundPhase.FINISHED
        record_round_transition("finished")
        logger.info(
            "round finished",
            extra=self._log_extra(
                holes_scored=len(self._history.scorecard),
                shots=len(self._history.shots),
            ),
        )
        return self._history

    def abandon(self) -> None:
        state = self._require_active("abandon the round")
        state.is_round_active = False
        self._state = None
        self._group_scores.clear()
        self._phase = RoundPhase.ABANDONED
        record_round_transition("abandoned")
        logger.info("round abandoned", extra=self._log_extra())

    def group_histories(self) -> List[RoundHistory]:
        if self._phase is not RoundPhase.FINISHED:
            raise InvalidStateError("group histories exist once the round is finished")
        return list(self._group_histories)

    # Shots
    def _club_name(self, club: ClubProfile | str) -> str:
        if isinstance(club, ClubProfile):
            return club.name
        known = find_club(self.bag, club)
        return known.name if known else club

    def record_shot(
        self,
        landing: GeoPoint,
        club: ClubProfile | str,
        planned_info: PlannedInfo | None = None,
    ) -> ShotRecord:
        state = self._require_active("record a shot")
        hole = self.course.holes[state.current_hole_index]
        shot = ShotRecord(
            hole_number=hole.number,
            shot_number=state.current_shot_number,
            start=state.current_ball_position,
            end=landing,
            club_used=self._club_name(club),
            distance=distance(state.current_ball_position, landing),
            planned_info=planned_info,
        )
        state.shots.append(shot)
        state.current_ball_position = landing
        state.current_shot_number += 1
        record_shot_recorded()
        logger.info(
            "shot recorded",
            extra=self._log_extra(
                hole=shot.hole_number,
                shot=shot.shot_number,
                club=shot.club_used,
                distance_m=round(shot.distance, 1),
            ),
        )
        return shot

    def delete_shot(self, hole_number: int, shot_number: int) -> ShotRecord:
        """Remove a shot by identity; later shots keep their numbers."""
        state = self._require_active("delete a shot")
        for index, shot in enumerate(state.shots):
            if shot.key == (hole_number, shot_number):
                break
        else:
            raise OutOfRangeError(f"no shot {shot_number} on hole {hole_number}")

        current_hole = self.course.holes[state.current_hole_index].number
        on_hole = [s.shot_number for s in state.shots if s.hole_number == current_hole]

        removed = state.shots.pop(index)
        if removed.hole_number == current_hole and removed.shot_number == max(on_hole):
            state.current_ball_position = removed.start
        record_shot_deleted()
        logger.info(
            "shot deleted",
            extra=self._log_extra(hole=hole_number, shot=shot_number),
        )
        return removed

    def move_ball(self, point: GeoPoint) -> None:
        """Manual ball drop; the ledger is untouched."""
        state = self._require_active("move the ball")
        state.current_ball_position = point

    # Live location
    def observe_position(self, point: GeoPoint) -> None:
        self.observed_position = point

    def start_tracking(self) -> GeoPoint:
        if self.observed_position is None:
            raise PreconditionError("no observed position to track from")
        self._tracking_start = self.observed_position
        return self._tracking_start

    def tracked_distance(self) -> float | None:
        if self._tracking_start is None or self.observed_position is None:
            return None
        return distance(self._tracking_start, self.observed_position)

    def stop_tracking(self) -> float | None:
        walked = self.tracked_distance()
        self._tracking_start = None
        return walked

    # Scoring
    def record_hole_score(
        self,
        strokes_taken: int,
        putts: int = 0,
        penalties: int = 0,
        par: int | None = None,
        player: str | None = None,
    ) -> HoleScore:
        """Upsert the current hole's score for ``player`` (the session owner by default).

        The typed score is authoritative and need not match the tracked shots.
        """
        state = self._require_active("record a hole score")
        hole = self.course.holes[state.current_hole_index]
        try:
            score = HoleScore(
                hole_number=hole.number,
                par=par if par is not None else hole.par_for(self.tee_id),
                strokes_taken=strokes_taken,
                putts=putts,
                penalties=penalties,
            )
        except ValueError as exc:
            raise OutOfRangeError(str(exc)) from exc

        name = player or self.player
        if name == self.player:
            state.scorecard = sorted(
                [s for s in state.scorecard if s.hole_number != hole.number] + [score],
                key=lambda s: s.hole_number,
            )
        else:
            self._group_scores.setdefault(name, {})[hole.number] = score

        record_hole_score()
        logger.info(
            "hole scored",
            extra=self._log_extra(hole=hole.number, scored_player=name, total=score.total),
        )
        self._publish(
            LeaderboardUpdate(
                tournament_id=self.tournament_id,
                player=name,
                hole_number=hole.number,
                score=score,
                course_name=self.course.name,
            )
        )
        return score

    def _publish(self, update: LeaderboardUpdate) -> None:
        if self._listener is None:
            return
        try:
            self._listener(update)
        except Exception:
            # A failing leaderboard sink must not lose the local score.
            logger.exception(
                "leaderboard listener failed",
                extra=self._log_extra(hole=update.hole_number),
            )

    def suggested_hole_score(self) -> HoleScore:
        """Default entry for the score sheet: tracked shots plus two putts, at least par."""
        state = self._require_active("suggest a hole score")
        hole = self.course.holes[state.current_hole_index]
        par = hole.par_for(self.tee_id)
        tracked = len(self.hole_shots(hole.number))
        total = max(par, tracked + ASSUMED_PUTTS)
        return HoleScore(
            hole_number=hole.number,
            par=par,
            strokes_taken=total - ASSUMED_PUTTS,
            putts=ASSUMED_PUTTS,
            penalties=0,
        )

    def group_scores(self, player: str) -> List[HoleScore]:
        scores = self._group_scores.get(player, {})
        return [scores[n] for n in sorted(scores)]

    # Navigation
    def advance_hole(self) -> Hole:
        state = self._require_active("advance the hole")
        next_index = state.current_hole_index + 1
        if next_index >= self.course.hole_count:
            raise OutOfRangeError("no hole after the last one; the round is complete")
        hole = self.course.holes[next_index]
        state.current_hole_index = next_index
        state.current_shot_number = 1
        state.current_ball_position = hole.active_tee(self.tee_id).location
        logger.info("hole advanced", extra=self._log_extra(hole=hole.number))
        return hole

    # Queries
    def preview(
        self,
        club: ClubProfile | str,
        target_bearing: float | None = None,
        wind: Wind | None = None,
    ) -> ShotPreview:
        state = self._require_active("preview a shot")
        if isinstance(club, str):
            profile = find_club(self.bag, club)
            if profile is None:
                raise OutOfRangeError(f"club {club!r} is not in the bag")
            club = profile
        return compute_shot_preview(
            state, club, target_bearing, course=self.course, bag=self.bag, wind=wind
        )

    def distance_to_green(self) -> float:
        state = self._require_active("measure to the green")
        hole = self.course.holes[state.current_hole_index]
        return distance(state.current_ball_position, hole.green_center)


__all__ = ["RoundPhase", "RoundSession", "HoleScoreListener"]
