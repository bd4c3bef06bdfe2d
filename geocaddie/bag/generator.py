"""Derive a full bag from a single skill scalar."""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Sequence

from geocaddie.errors import OutOfRangeError
from geocaddie.geo.geodesy import round_half_up

from .defaults import BASELINE_TABLE
from .models import ClubProfile

logger = logging.getLogger(__name__)

MAX_HANDICAP = 54.0
SATURATION_HANDICAP = 30.0
DISTANCE_LOSS_PER_STROKE = 0.008
SCATTER_GAIN_PER_STROKE = 0.08


def scaling_factors(handicap: float) -> tuple[float, float]:
    """Return (distance_factor, scatter_factor) for a handicap."""
    if not math.isfinite(handicap):
        raise OutOfRangeError(f"handicap must be finite, got {handicap!r}")
    clamped = min(MAX_HANDICAP, max(0.0, float(handicap)))
    effective = min(SATURATION_HANDICAP, clamped)
    return (
        1.0 - effective * DISTANCE_LOSS_PER_STROKE,
        1.0 + effective * SCATTER_GAIN_PER_STROKE,
    )


def generate_bag_from_handicap(handicap: float) -> List[ClubProfile]:
    """Build the 14-club bag of a player with ``handicap``.

    Carries shrink and dispersion widens linearly with handicap, saturating at
    30. The raw handicap is not stored here; callers keep it for display.
    """
    distance_factor, scatter_factor = scaling_factors(handicap)

    clubs: List[ClubProfile] = []
    for name, carry, lateral_ratio, depth_ratio in BASELINE_TABLE:
        scaled_carry = round_half_up(carry * distance_factor)
        clubs.append(
            ClubProfile(
                name=name,
                carry_distance=scaled_carry,
                lateral_error_std_dev=round_half_up(
                    scaled_carry * lateral_ratio * scatter_factor
                ),
                depth_error_std_dev=round_half_up(
                    scaled_carry * depth_ratio * scatter_factor
                ),
            )
        )
    logger.debug(
        "generated bag",
        extra={"handicap": handicap, "distance_factor": distance_factor},
    )
    return clubs


def longest_club(bag: Iterable[ClubProfile]) -> ClubProfile | None:
    """Longest-carrying club, ignoring the putter."""
    candidates = [club for club in bag if not club.is_putter]
    if not candidates:
        return None
    return max(candidates, key=lambda club: club.carry_distance)


def find_club(bag: Sequence[ClubProfile], name: str) -> ClubProfile | None:
    wanted = name.strip().lower()
    for club in bag:
        if club.name.lower() == wanted:
            return club
    return None


__all__ = [
    "MAX_HANDICAP",
    "SATURATION_HANDICAP",
    "scaling_factors",
    "generate_bag_from_handicap",
    "longest_club",
    "find_club",
]
