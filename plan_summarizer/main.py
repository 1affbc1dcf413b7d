from __future__ import annotations

from fastapi import FastAPI

from plan_summarizer.api.schemas import HealthOut
from plan_summarizer.core.logging import setup_logging
from plan_summarizer.core.metrics import metrics_router
from plan_summarizer.core.middleware.request_observability import RequestObservabilityMiddleware
from plan_summarizer.core.settings import get_settings
from plan_summarizer.plans.summary.router import router as plan_summary_router

setup_logging(get_settings().log_level)


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Terraform Plan Summarizer API",
        description=(
            "Summarizes Terraform plan output with an LLM served through OpenRouter.\n\n"
            "Design principles:\n"
            "- Summaries are best-effort; a missing API key or an upstream failure never turns "
            "into an HTTP error.\n"
            "- Plan text is forwarded upstream but never logged."
        ),
        docs_url="/docs",
        redoc_url=None,
        debug=settings.is_development,
        openapi_tags=[
            {
                "name": "health",
                "description": "Basic uptime check for load balancers and monitoring.",
            },
            {
                "name": "plans",
                "description": "Summarize one or more Terraform plan outputs.",
            },
            {
                "name": "metrics",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    app.add_middleware(RequestObservabilityMiddleware)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running.\n\n"
            "Does not call OpenRouter, so it is safe for frequent uptime checks."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(plan_summary_router)
    return app


app = create_app()
