from __future__ import annotations

import logging
import threading
import uuid
from functools import lru_cache, partial
from typing import Callable, Dict, List, Sequence, Set, Tuple, TypeVar

from geocaddie.bag import ClubProfile
from geocaddie.courses import Course
from geocaddie.errors import RoundSessionNotFound

from .models import LeaderboardUpdate, RoundHistory
from .scoring import merge_hole_score
from .state import RoundPhase, RoundSession

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Tournament cards are shared by every round a player enters in that
# tournament; casual cards belong to the session that produced them.
LiveKey = Tuple[str, str, str]


class RoundSessionService:
    """In-memory registry of live round sessions.

    One lock per service: each event on any session runs to completion before
    the next one starts. Sessions leave the registry once they are finished or
    abandoned; finished rounds live on as archived histories.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: Dict[str, RoundSession] = {}
        self._histories: List[RoundHistory] = []
        self._live_scores: Dict[LiveKey, RoundHistory] = {}
        self._live_keys: Dict[str, Set[LiveKey]] = {}

    def create(
        self,
        course: Course,
        bag: Sequence[ClubProfile] | None = None,
        *,
        tee_id: str | None = None,
        player: str | None = None,
        tournament_id: str | None = None,
        start_hole_index: int = 0,
    ) -> RoundSession:
        session_id = str(uuid.uuid4())
        session = RoundSession(
            course,
            bag,
            tee_id=tee_id,
            player=player,
            tournament_id=tournament_id,
            on_hole_score=partial(self._on_hole_score, session_id),
            session_id=session_id,
        )
        with self._lock:
            session.start(start_hole_index)
            self._sessions[session.id] = session
        return session

    def get(self, session_id: str) -> RoundSession:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise RoundSessionNotFound(session_id)
        return session

    def apply(self, session_id: str, operation: Callable[[RoundSession], T]) -> T:
        """Run ``operation`` against a session while holding the service lock."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise RoundSessionNotFound(session_id)
            result = operation(session)
            if session.phase is RoundPhase.FINISHED:
                self._archive(session)
                self._close(session)
            elif session.phase is RoundPhase.ABANDONED:
                self._retract(session)
                self._close(session)
            return result

    def active_count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def histories(self) -> List[RoundHistory]:
        with self._lock:
            return list(self._histories)

    def live_scorecards(self, tournament_id: str | None = None) -> List[RoundHistory]:
        """Per-player scorecards built from hole-by-hole leaderboard updates."""
        with self._lock:
            return [
                history
                for history in self._live_scores.values()
                if tournament_id is None or history.tournament_id == tournament_id
            ]

    def _archive(self, session: RoundSession) -> None:
        history = session.history
        if history is None:
            return
        self._histories.append(history)
        self._histories.extend(session.group_histories())
        logger.info(
            "round archived",
            extra={"round_session": session.id, "history_id": history.id},
        )

    def _retract(self, session: RoundSession) -> None:
        keys = self._live_keys.get(session.id, set())
        for key in keys:
            self._live_scores.pop(key, None)
        if keys:
            logger.info(
                "live scores retracted",
                extra={"round_session": session.id, "cards": len(keys)},
            )

    def _close(self, session: RoundSession) -> None:
        self._sessions.pop(session.id, None)
        self._live_keys.pop(session.id, None)
        logger.info(
            "round session closed",
            extra={"round_session": session.id, "phase": session.phase.value},
        )

    # Called from within RoundSession.record_hole_score, so the lock is already held.
    def _on_hole_score(self, session_id: str, update: LeaderboardUpdate) -> None:
        if update.tournament_id is not None:
            key: LiveKey = ("tournament", update.tournament_id, update.player)
        else:
            key = ("session", session_id, update.player)
        self._live_keys.setdefault(session_id, set()).add(key)
        self._live_scores[key] = merge_hole_score(
            self._live_scores.get(key),
            update.score,
            course_name=update.course_name,
            player=update.player,
            tournament_id=update.tournament_id,
        )


@lru_cache(maxsize=1)
def get_round_session_service() -> RoundSessionService:
    return RoundSessionService()


__all__ = ["RoundSessionService", "get_round_session_service"]
