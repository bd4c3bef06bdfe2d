"""API surface for layup and strategy advice."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from geocaddie.api.security import require_api_key
from geocaddie.bag import DEFAULT_BAG, ClubProfile, generate_bag_from_handicap
from geocaddie.caddie import (
    LayupPlan,
    Measurement,
    StrategyAdvice,
    measure,
    require_layup,
    strategy_recommendation,
)
from geocaddie.config import get_settings
from geocaddie.errors import NoFeasibleStrategyError, OutOfRangeError
from geocaddie.geo import GeoPoint, format_distance

router = APIRouter(
    prefix="/api/caddie", tags=["caddie"], dependencies=[Depends(require_api_key)]
)

logger = logging.getLogger(__name__)


class StrategyIn(BaseModel):
    distance_m: float = Field(
        ge=0, validation_alias=AliasChoices("distance_m", "distanceM")
    )
    shot_number: int = Field(
        default=1, ge=1, validation_alias=AliasChoices("shot_number", "shotNumber")
    )
    handicap: float | None = None
    bag: list[ClubProfile] | None = None
    use_yards: bool | None = Field(
        default=None, validation_alias=AliasChoices("use_yards", "useYards")
    )

    model_config = ConfigDict(populate_by_name=True)


class StrategyOut(BaseModel):
    distance: str
    advice: StrategyAdvice
    layup: LayupPlan | None = None


class MeasureIn(BaseModel):
    ball: GeoPoint
    target: GeoPoint
    green_center: GeoPoint = Field(
        validation_alias=AliasChoices("green_center", "greenCenter")
    )

    model_config = ConfigDict(populate_by_name=True)


@router.post("/strategy", response_model=StrategyOut)
def post_strategy(body: StrategyIn) -> StrategyOut:
    if body.bag:
        bag = list(body.bag)
    elif body.handicap is not None:
        try:
            bag = generate_bag_from_handicap(body.handicap)
        except OutOfRangeError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            )
    else:
        bag = list(DEFAULT_BAG)

    use_yards = get_settings().use_yards if body.use_yards is None else body.use_yards
    advice = strategy_recommendation(
        body.distance_m, bag, body.shot_number, use_yards=use_yards
    )
    try:
        layup = require_layup(body.distance_m, bag, body.shot_number)
    except NoFeasibleStrategyError as exc:
        logger.warning("layup unavailable: %s", exc)
        layup = None

    return StrategyOut(
        distance=format_distance(body.distance_m, use_yards),
        advice=advice,
        layup=layup,
    )


@router.post("/measure", response_model=Measurement)
def post_measure(body: MeasureIn) -> Measurement:
    """Ball to target, then target to green center."""
    return measure(body.ball, body.target, body.green_center)


__all__ = ["router", "post_strategy", "post_measure"]
