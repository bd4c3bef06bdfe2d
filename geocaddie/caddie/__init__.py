"""Dispersion modelling and club strategy."""

from .dispersion import (
    DispersionEllipse,
    PlannedDispersion,
    PlannedInfo,
    dispersion_ellipse_for,
    predicted_landing,
)
from .preview import (
    GreenDistances,
    Measurement,
    ShotPreview,
    Wind,
    compute_shot_preview,
    green_distances,
    measure,
)
from .strategy import (
    LayupPlan,
    StrategyAdvice,
    StrategyBand,
    layup_strategy,
    require_layup,
    strategy_recommendation,
)

__all__ = [
    "DispersionEllipse",
    "GreenDistances",
    "LayupPlan",
    "Measurement",
    "PlannedDispersion",
    "PlannedInfo",
    "ShotPreview",
    "StrategyAdvice",
    "StrategyBand",
    "Wind",
    "compute_shot_preview",
    "dispersion_ellipse_for",
    "green_distances",
    "layup_strategy",
    "measure",
    "predicted_landing",
    "require_layup",
    "strategy_recommendation",
]
