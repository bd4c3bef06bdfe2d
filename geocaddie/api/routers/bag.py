from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict

from geocaddie.api.security import require_api_key
from geocaddie.bag import ClubProfile, generate_bag_from_handicap
from geocaddie.errors import OutOfRangeError

router = APIRouter(
    prefix="/api/bag", tags=["bag"], dependencies=[Depends(require_api_key)]
)


class GenerateBagIn(BaseModel):
    handicap: float

    model_config = ConfigDict(populate_by_name=True)


class GeneratedBagOut(BaseModel):
    handicap: float
    clubs: list[ClubProfile]


@router.post("/generate", response_model=GeneratedBagOut)
def generate_bag(payload: GenerateBagIn) -> GeneratedBagOut:
    try:
        clubs = generate_bag_from_handicap(payload.handicap)
    except OutOfRangeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return GeneratedBagOut(handicap=payload.handicap, clubs=clubs)


__all__ = ["router", "generate_bag"]
