"""Round lifecycle: shot ledger, scorecard, replay and leaderboards."""

from .models import GameState, HoleScore, LeaderboardUpdate, RoundHistory, ShotRecord
from .replay import RoundReplay
from .scoring import (
    LeaderboardEntry,
    RoundTotals,
    build_leaderboard,
    format_to_par,
    merge_hole_score,
    round_totals,
)
from .service import RoundSessionService, get_round_session_service
from .state import RoundPhase, RoundSession

__all__ = [
    "GameState",
    "HoleScore",
    "LeaderboardEntry",
    "LeaderboardUpdate",
    "RoundHistory",
    "RoundPhase",
    "RoundReplay",
    "RoundSession",
    "RoundSessionService",
    "RoundTotals",
    "ShotRecord",
    "build_leaderboard",
    "format_to_par",
    "get_round_session_service",
    "merge_hole_score",
    "round_totals",
]
