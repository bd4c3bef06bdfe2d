from .geodesy import (
    EARTH_RADIUS_M,
    WindAdjustedShot,
    bearing,
    centroid,
    destination,
    distance,
    format_distance,
    meters_to_yards,
    path_length,
    wind_adjusted_shot,
    wind_components,
)
from .models import GeoPoint
from .shapes import (
    GreenEdges,
    arc_points,
    dynamic_green_edges,
    ellipse_points,
    smooth_closed_path,
)

__all__ = [
    "EARTH_RADIUS_M",
    "GeoPoint",
    "GreenEdges",
    "WindAdjustedShot",
    "arc_points",
    "bearing",
    "centroid",
    "destination",
    "distance",
    "dynamic_green_edges",
    "ellipse_points",
    "format_distance",
    "meters_to_yards",
    "path_length",
    "smooth_closed_path",
    "wind_adjusted_shot",
    "wind_components",
]
