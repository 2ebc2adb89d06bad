"""Prometheus metrics for analysis lookups, DSCR distribution, and external service health"""

from typing import Optional
from prometheus_client import Counter, Histogram

from cashflow_gateway.domain.dscr import dscr_band

# Analysis metrics
analysis_created_counter = Counter(
    "cashflow_analysis_created_total",
    "Cash flow analyses stored",
)

analysis_lookup_counter = Counter(
    "cashflow_analysis_lookup_total",
    "Analysis lookups by outcome",
    ["outcome"],  # found | not_found
)

dscr_band_counter = Counter(
    "cashflow_dscr_band",
    "Computed DSCR values by band",
    ["band"],  # none, below_1.0, 1.0-1.25, 1.25+
)

# Renderer metrics
render_latency_histogram = Histogram(
    "render_latency_seconds",
    "PDF renderer response time",
    buckets=[0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0],
)

render_failure_counter = Counter(
    "render_failures_total",
    "Failed PDF render attempts",
)

# Chat metrics
chat_failure_counter = Counter(
    "chat_failures_total",
    "Failed language model calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_dscr(dscr: Optional[float]) -> str:
    """Record DSCR distribution; returns the band for logging"""
    band = dscr_band(dscr)
    dscr_band_counter.labels(band=band).inc()
    return band


def record_lookup(found: bool) -> None:
    analysis_lookup_counter.labels(outcome="found" if found else "not_found").inc()
