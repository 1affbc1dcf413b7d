from __future__ import annotations

from typing import TYPE_CHECKING, cast

from fastapi import APIRouter
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.responses import Response

if TYPE_CHECKING:
    from plan_summarizer.plans.summary.schemas import SummaryOutcome

metrics_router = APIRouter(tags=["metrics"])

# Route labels are route templates or "unmatched" so cardinality stays bounded.
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    labelnames=("method", "route", "status_code"),
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    labelnames=("method", "route"),
    # Summaries wait on an LLM, so the upper buckets reach the 30s upstream timeout.
    buckets=(0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0),
)

plan_summaries_total = Counter(
    "plan_summaries_total",
    "Plan summarization attempts by outcome",
    labelnames=("status",),
)

plan_summary_plan_count = Histogram(
    "plan_summary_plan_count",
    "Number of plan outputs combined into one summary request",
    buckets=(1, 2, 5, 10, 25, 50),
)


def observe_request(*, method: str, route: str, status_code: int, duration_seconds: float) -> None:
    http_requests_total.labels(method=method, route=route, status_code=str(status_code)).inc()
    http_request_duration_seconds.labels(method=method, route=route).observe(duration_seconds)


def record_plan_summary(outcome: SummaryOutcome, *, plan_count: int) -> None:
    plan_summaries_total.labels(status=outcome.status).inc()
    if plan_count:
        plan_summary_plan_count.observe(plan_count)


@metrics_router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    # Default registry; the service runs as a single process.
    payload = generate_latest()
    return Response(content=cast(bytes, payload), media_type=CONTENT_TYPE_LATEST)
