"""Layup search and the banded strategy table."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from geocaddie.bag import ClubProfile, longest_club
from geocaddie.config import get_settings
from geocaddie.errors import NoFeasibleStrategyError
from geocaddie.geo import format_distance
from geocaddie.metrics.engine_metrics import record_infeasible_layup

logger = logging.getLogger(__name__)

TAP_IN_MAX_M = 5.0
SHORT_GAME_MAX_M = 20.0
IDEAL_LAYUP_MIN_M = 80.0
IDEAL_LAYUP_MAX_M = 110.0
SAFE_DRIVE_MIN_M = 220.0


class StrategyBand(str, Enum):
    TAP_IN = "tap_in"
    SHORT_GAME = "short_game"
    IDEAL_LAYUP = "ideal_layup"
    LAYUP_REQUIRED = "layup_required"
    SAFE_DRIVE = "safe_drive"
    APPROACH = "approach"


class StrategyAdvice(BaseModel):
    band: StrategyBand
    headline: str
    detail: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class LayupPlan(BaseModel):
    first_club: ClubProfile = Field(serialization_alias="firstClub")
    second_club: ClubProfile = Field(serialization_alias="secondClub")
    combined_lateral_error: float = Field(serialization_alias="combinedLateralError")
    combined_carry: float = Field(serialization_alias="combinedCarry")

    model_config = ConfigDict(frozen=True)


def layup_strategy(
    distance_to_green: float,
    bag: Sequence[ClubProfile],
    shot_number: int,
    *,
    tolerance_m: float | None = None,
) -> LayupPlan | None:
    """Two-club plan that reaches the green with the least combined lateral error.

    The putter is never part of a plan, the driver never plays the second shot
    and is only allowed first on the opening shot of a hole. Returns ``None``
    when no pair gets within ``tolerance_m`` of the green.
    """
    tolerance = get_settings().layup_tolerance_m if tolerance_m is None else tolerance_m
    first_options = [
        club
        for club in bag
        if not club.is_putter and (shot_number <= 1 or not club.is_driver)
    ]
    second_options = [club for club in bag if not club.is_putter and not club.is_driver]

    best: LayupPlan | None = None
    for first in first_options:
        for second in second_options:
            carry = first.carry_distance + second.carry_distance
            if carry < distance_to_green - tolerance:
                continue
            error = first.lateral_error_std_dev + second.lateral_error_std_dev
            if best is None or error < best.combined_lateral_error:
                best = LayupPlan(
                    first_club=first,
                    second_club=second,
                    combined_lateral_error=error,
                    combined_carry=carry,
                )
    return best


def require_layup(
    distance_to_green: float,
    bag: Sequence[ClubProfile],
    shot_number: int,
    *,
    tolerance_m: float | None = None,
) -> LayupPlan:
    plan = layup_strategy(
        distance_to_green, bag, shot_number, tolerance_m=tolerance_m
    )
    if plan is None:
        record_infeasible_layup()
        logger.info(
            "no layup pair reaches target",
            extra={"distance_to_green": distance_to_green, "shot_number": shot_number},
        )
        raise NoFeasibleStrategyError(
            f"no club pair reaches {distance_to_green:.0f} m"
        )
    return plan


def _closest_club(distance_m: float, bag: Sequence[ClubProfile]) -> ClubProfile | None:
    candidates = [club for club in bag if not club.is_putter]
    if not candidates:
        return None
    return min(candidates, key=lambda club: abs(club.carry_distance - distance_m))


def strategy_recommendation(
    distance_to_green: float,
    bag: Sequence[ClubProfile],
    shot_number: int = 1,
    *,
    use_yards: bool = False,
) -> StrategyAdvice:
    """Banded advice for the remaining distance; the first matching band wins."""
    remaining = format_distance(distance_to_green, use_yards)

    if distance_to_green < TAP_IN_MAX_M:
        return StrategyAdvice(
            band=StrategyBand.TAP_IN, headline="Tap-In Range", detail="Excellent Shot!"
        )
    if distance_to_green < SHORT_GAME_MAX_M:
        return StrategyAdvice(
            band=StrategyBand.SHORT_GAME,
            headline="Short Game",
            detail="Up & Down probability high",
        )
    if IDEAL_LAYUP_MIN_M <= distance_to_green <= IDEAL_LAYUP_MAX_M:
        wedge = _closest_club(distance_to_green, bag)
        club_txt = f"full {wedge.name}" if wedge else "full wedge"
        return StrategyAdvice(
            band=StrategyBand.IDEAL_LAYUP,
            headline="Perfect Layup",
            detail=f"Leaves {club_txt} ({remaining})",
        )

    longest = longest_club(bag)
    if (
        shot_number > 1
        and longest is not None
        and distance_to_green > longest.carry_distance
    ):
        return StrategyAdvice(
            band=StrategyBand.LAYUP_REQUIRED,
            headline="Layup Required",
            detail="Check recommended combo",
        )
    if shot_number == 1 and distance_to_green > SAFE_DRIVE_MIN_M:
        return StrategyAdvice(
            band=StrategyBand.SAFE_DRIVE,
            headline="Safe Drive",
            detail="Focus on fairway hit",
        )
    return StrategyAdvice(
        band=StrategyBand.APPROACH,
        headline="Approach",
        detail=f"Leaves {remaining} to pin",
    )


__all__ = [
    "StrategyBand",
    "StrategyAdvice",
    "LayupPlan",
    "layup_strategy",
    "require_layup",
    "strategy_recommendation",
]
