"""Exception hierarchy shared by the engine and its HTTP surface."""

from __future__ import annotations


class GeoCaddieError(Exception):
    """Base class for recoverable engine errors."""


class InvalidStateError(GeoCaddieError):
    """Operation attempted in the wrong round lifecycle phase."""


class PreconditionError(GeoCaddieError):
    """Operation is valid for the phase but its inputs are not ready yet."""


class OutOfRangeError(GeoCaddieError, ValueError):
    """Hole index, shot identity or numeric input outside the valid domain."""


class NoFeasibleStrategyError(GeoCaddieError):
    """No club pair reaches the target; let the player choose manually."""


class CourseNotFound(GeoCaddieError, LookupError):
    pass


class RoundSessionNotFound(GeoCaddieError, LookupError):
    pass


__all__ = [
    "GeoCaddieError",
    "InvalidStateError",
    "PreconditionError",
    "OutOfRangeError",
    "NoFeasibleStrategyError",
    "CourseNotFound",
    "RoundSessionNotFound",
]
