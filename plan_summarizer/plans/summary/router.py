from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from plan_summarizer.core.metrics import record_plan_summary
from plan_summarizer.core.middleware.request_observability import REQUEST_ID_HEADER
from plan_summarizer.plans.summary.deps import get_plan_summarizer
from plan_summarizer.plans.summary.schemas import PlanSummaryIn, PlanSummaryOut
from plan_summarizer.plans.summary.service import PlanSummarizer
from plan_summarizer.plans.summary.service import logger as summary_logger

router = APIRouter(prefix="/plans", tags=["plans"])
logger = logging.getLogger("plan_summarizer.plans.summary.router")


@router.post(
    "/summary",
    response_model=PlanSummaryOut,
    summary="Summarize Terraform plans",
    description=(
        "Combine the given plan outputs and ask the configured LLM for a short summary.\n\n"
        "Summarization is best-effort: upstream failures are reported in `status` with a 200 "
        "response rather than as an HTTP error, so callers can always fall back to the raw plans."
    ),
)
def summarize_plans_route(
    payload: PlanSummaryIn,
    request: Request,
    summarizer: PlanSummarizer = Depends(get_plan_summarizer),
) -> PlanSummaryOut:
    # Plain `def`: the summarizer blocks on HTTP, so Starlette runs this in its threadpool.
    request_id = getattr(request.state, "request_id", None)
    if request_id is None:
        request_id = request.headers.get(REQUEST_ID_HEADER)
    log = logging.LoggerAdapter(summary_logger, {"request_id": request_id})

    outcome = summarizer.summarize(payload.plan_outputs, log)
    record_plan_summary(outcome, plan_count=len(payload.plan_outputs))

    # IMPORTANT: metadata only; plan text and summaries stay out of the logs.
    logger.info(
        "Plan summary finished",
        extra={
            "request_id": request_id,
            "plan_count": len(payload.plan_outputs),
            "summary_status": outcome.status,
        },
    )
    return PlanSummaryOut(status=outcome.status, summary=outcome.text, reason=outcome.reason)
