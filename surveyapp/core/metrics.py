"""Prometheus metrics for the results cache and aggregation path.

Labels stay low-cardinality: tiers and operation names only, never keys.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

CACHE_REQUESTS_TOTAL = Counter(
    "survey_cache_requests_total",
    "Cache lookups by tier and outcome (hit/miss).",
    labelnames=("tier", "outcome"),
)

CACHE_DEGRADED_TOTAL = Counter(
    "survey_cache_degraded_total",
    "Distributed cache operations that failed and were absorbed.",
    labelnames=("operation",),
)

STATISTIC_COMPUTE_SECONDS = Histogram(
    "survey_statistic_compute_seconds",
    "Time spent computing a statistic from the data source on a cache miss.",
    labelnames=("statistic",),
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

RESULTS_DURATION_SECONDS = Histogram(
    "survey_results_duration_seconds",
    "End-to-end duration of a results request.",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

RESULTS_FAILURES_TOTAL = Counter(
    "survey_results_failures_total",
    "Results requests that failed because a statistic could not be computed.",
)


def record_cache_lookup(tier: str, hit: bool) -> None:
    CACHE_REQUESTS_TOTAL.labels(tier=tier, outcome="hit" if hit else "miss").inc()


def record_degraded(operation: str) -> None:
    CACHE_DEGRADED_TOTAL.labels(operation=operation).inc()


__all__ = [
    "CACHE_DEGRADED_TOTAL",
    "CACHE_REQUESTS_TOTAL",
    "RESULTS_DURATION_SECONDS",
    "RESULTS_FAILURES_TOTAL",
    "STATISTIC_COMPUTE_SECONDS",
    "record_cache_lookup",
    "record_degraded",
]
