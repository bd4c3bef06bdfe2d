"""Read-only reconstruction of a finished round for hole-by-hole review."""

from __future__ import annotations

from typing import List, Optional

from geocaddie.courses import Course
from geocaddie.geo import GeoPoint, arc_points, ellipse_points
from geocaddie.geo.shapes import DEFAULT_ARC_SEGMENTS, DEFAULT_ELLIPSE_SEGMENTS

from .models import RoundHistory, ShotRecord


class RoundReplay:
    """Views over a :class:`RoundHistory`; the history itself is never modified."""

    def __init__(self, history: RoundHistory, course: Course | None = None) -> None:
        self._history = history
        self._course = course

    @property
    def history(self) -> RoundHistory:
        return self._history

    def holes(self) -> List[int]:
        """Hole numbers that have a score or at least one shot, ascending."""
        numbers = {score.hole_number for score in self._history.scorecard}
        numbers.update(shot.hole_number for shot in self._history.shots)
        return sorted(numbers)

    def shots_for_hole(self, hole_number: int) -> List[ShotRecord]:
        return sorted(
            (s for s in self._history.shots if s.hole_number == hole_number),
            key=lambda s: s.shot_number,
        )

    def flight_path(
        self, shot: ShotRecord, segments: int = DEFAULT_ARC_SEGMENTS
    ) -> List[GeoPoint]:
        return arc_points(shot.start, shot.end, segments)

    def planned_ellipse(
        self, shot: ShotRecord, segments: int = DEFAULT_ELLIPSE_SEGMENTS
    ) -> Optional[List[GeoPoint]]:
        if shot.planned_info is None:
            return None
        planned = shot.planned_info
        return ellipse_points(
            planned.target,
            planned.dispersion.lateral,
            planned.dispersion.depth,
            planned.dispersion.rotation,
            segments,
        )

    def fit_points(self, hole_number: int) -> List[GeoPoint]:
        """Every point worth keeping in view for the hole: tee, shots, green."""
        points: List[GeoPoint] = []
        hole = self._course.hole(hole_number) if self._course else None
        if hole is not None:
            points.append(hole.active_tee().location)
        for shot in self.shots_for_hole(hole_number):
            points.extend((shot.start, shot.end))
            if shot.planned_info is not None:
                points.append(shot.planned_info.target)
        if hole is not None:
            points.append(hole.green_center)
        return points

    def ball_position(self, hole_number: int, after_shot: int = 0) -> Optional[GeoPoint]:
        """Where the ball lay after ``after_shot`` shots on the hole.

        ``after_shot=0`` is the ball before the first recorded shot. Gaps left
        by deleted shots resolve to the last shot numbered at or below
        ``after_shot``.
        """
        shots = self.shots_for_hole(hole_number)
        played = [s for s in shots if s.shot_number <= after_shot]
        if played:
            return played[-1].end
        if shots:
            return shots[0].start
        hole = self._course.hole(hole_number) if self._course else None
        return hole.active_tee().location if hole is not None else None


__all__ = ["RoundReplay"]
