from __future__ import annotations

from prometheus_client import Counter, Histogram

from .registry import REGISTRY

ROUNDS_TOTAL = Counter(
    "geocaddie_rounds_total",
    "Round lifecycle transitions by outcome",
    labelnames=("outcome",),
    registry=REGISTRY,
)

SHOTS_RECORDED_TOTAL = Counter(
    "geocaddie_shots_recorded_total",
    "Shots appended to a live round ledger",
    registry=REGISTRY,
)

SHOTS_DELETED_TOTAL = Counter(
    "geocaddie_shots_deleted_total",
    "Shots removed from a live round ledger",
    registry=REGISTRY,
)

HOLE_SCORES_TOTAL = Counter(
    "geocaddie_hole_scores_total",
    "Hole scores recorded, including group players",
    registry=REGISTRY,
)

LAYUP_INFEASIBLE_TOTAL = Counter(
    "geocaddie_layup_infeasible_total",
    "Layup searches where no club pair reached the green",
    registry=REGISTRY,
)

PREVIEW_LATENCY_MS = Histogram(
    "geocaddie_shot_preview_latency_ms",
    "Time to compute a shot preview in milliseconds",
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 25.0),
    registry=REGISTRY,
)


def record_round_transition(outcome: str) -> None:
    ROUNDS_TOTAL.labels(outcome=outcome).inc()


def record_shot_recorded() -> None:
    SHOTS_RECORDED_TOTAL.inc()


def record_shot_deleted() -> None:
    SHOTS_DELETED_TOTAL.inc()


def record_hole_score() -> None:
    HOLE_SCORES_TOTAL.inc()


def record_infeasible_layup() -> None:
    LAYUP_INFEASIBLE_TOTAL.inc()


def observe_preview_latency(duration_ms: float) -> None:
    PREVIEW_LATENCY_MS.observe(max(0.0, duration_ms))


__all__ = [
    "ROUNDS_TOTAL",
    "SHOTS_RECORDED_TOTAL",
    "SHOTS_DELETED_TOTAL",
    "HOLE_SCORES_TOTAL",
    "LAYUP_INFEASIBLE_TOTAL",
    "PREVIEW_LATENCY_MS",
    "record_round_transition",
    "record_shot_recorded",
    "record_shot_deleted",
    "record_hole_score",
    "record_infeasible_layup",
    "observe_preview_latency",
]
