"""Geodesic shot tracking and strategy engine for on-course golf companions."""

__version__ = "0.1.0"
