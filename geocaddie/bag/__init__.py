from .defaults import BASELINE_TABLE, CLUB_ORDER, DEFAULT_BAG, build_default_bag
from .generator import (
    find_club,
    generate_bag_from_handicap,
    longest_club,
    scaling_factors,
)
from .models import ClubProfile

__all__ = [
    "BASELINE_TABLE",
    "CLUB_ORDER",
    "DEFAULT_BAG",
    "ClubProfile",
    "build_default_bag",
    "find_club",
    "generate_bag_from_handicap",
    "longest_club",
    "scaling_factors",
]
