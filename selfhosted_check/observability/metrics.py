"""Prometheus metrics for selfhosted-check."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# Per-object readiness observations
checks_total = Counter(
    "selfhosted_check_checks_total",
    "Total readiness observations",
    ["kind", "outcome"],
)

# Failed list/get/log calls against the API server
cluster_query_errors_total = Counter(
    "selfhosted_check_cluster_query_errors_total",
    "Total failed cluster queries",
    ["operation"],
)

analyze_duration_seconds = Histogram(
    "selfhosted_check_analyze_duration_seconds",
    "Duration of one full analyze() run in seconds",
    buckets=(0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0),
)
