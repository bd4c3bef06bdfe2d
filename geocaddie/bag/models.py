from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ClubProfile(BaseModel):
    """One bag entry; carry and errors are in meters."""

    name: str = Field(min_length=1)
    carry_distance: float = Field(
        gt=0,
        validation_alias=AliasChoices("carry_distance", "carryDistance", "carry"),
        serialization_alias="carryDistance",
    )
    lateral_error_std_dev: float = Field(
        ge=0,
        validation_alias=AliasChoices(
            "lateral_error_std_dev", "lateralErrorStdDev", "sideError"
        ),
        serialization_alias="lateralErrorStdDev",
    )
    depth_error_std_dev: float = Field(
        ge=0,
        validation_alias=AliasChoices(
            "depth_error_std_dev", "depthErrorStdDev", "depthError"
        ),
        serialization_alias="depthErrorStdDev",
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def is_driver(self) -> bool:
        return "driver" in self.name.lower()

    @property
    def is_putter(self) -> bool:
        return "putter" in self.name.lower()


__all__ = ["ClubProfile"]
