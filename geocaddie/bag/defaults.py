from __future__ import annotations

from typing import List

from .models import ClubProfile

# Zero-handicap baseline: (club, carry_m, lateral error / carry, depth error / carry)
BASELINE_TABLE: tuple[tuple[str, float, float, float], ...] = (
    ("Driver", 250.0, 0.06, 0.04),
    ("3 Wood", 230.0, 0.06, 0.04),
    ("3 Hybrid", 210.0, 0.07, 0.05),
    ("4 Iron", 195.0, 0.07, 0.05),
    ("5 Iron", 185.0, 0.08, 0.06),
    ("6 Iron", 175.0, 0.08, 0.06),
    ("7 Iron", 165.0, 0.09, 0.07),
    ("8 Iron", 155.0, 0.09, 0.07),
    ("9 Iron", 145.0, 0.10, 0.08),
    ("PW", 130.0, 0.10, 0.08),
    ("AW", 115.0, 0.11, 0.09),
    ("SW", 100.0, 0.12, 0.10),
    ("LW", 85.0, 0.13, 0.11),
    ("Putter", 30.0, 0.03, 0.03),
)

CLUB_ORDER: tuple[str, ...] = tuple(row[0] for row in BASELINE_TABLE)

# Factory bag handed to players who never configured one.
_DEFAULT_BAG_TABLE: tuple[tuple[str, float, float, float], ...] = (
    ("Driver", 230.0, 45.0, 25.0),
    ("3 Wood", 210.0, 35.0, 20.0),
    ("3 Hybrid", 190.0, 28.0, 18.0),
    ("4 Iron", 180.0, 24.0, 16.0),
    ("5 Iron", 170.0, 22.0, 15.0),
    ("6 Iron", 160.0, 20.0, 14.0),
    ("7 Iron", 150.0, 18.0, 12.0),
    ("8 Iron", 140.0, 15.0, 10.0),
    ("9 Iron", 130.0, 12.0, 8.0),
    ("PW", 115.0, 10.0, 7.0),
    ("SW", 95.0, 8.0, 5.0),
    ("LW", 80.0, 6.0, 4.0),
    ("Putter", 30.0, 1.0, 1.0),
)


def build_default_bag() -> List[ClubProfile]:
    return [
        ClubProfile(
            name=name,
            carry_distance=carry,
            lateral_error_std_dev=lateral,
            depth_error_std_dev=depth,
        )
        for name, carry, lateral, depth in _DEFAULT_BAG_TABLE
    ]


DEFAULT_BAG: tuple[ClubProfile, ...] = tuple(build_default_bag())


__all__ = ["BASELINE_TABLE", "CLUB_ORDER", "DEFAULT_BAG", "build_default_bag"]
