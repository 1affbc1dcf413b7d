"""Per-request correlation id, access log and HTTP metrics.

Only metadata is recorded. Request bodies carry whole Terraform plans, which
can include secrets, so bodies, query strings and headers never reach the logs.
"""

from __future__ import annotations

import logging
import re
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from plan_summarizer.core.metrics import observe_request

logger = logging.getLogger("plan_summarizer.http")

REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,127}$")


def request_id_for(request: Request) -> str:
    """Propagate the caller's X-Request-ID (e.g. a CI job id) when it is safe, else mint one."""

    candidate = request.headers.get(REQUEST_ID_HEADER)
    if candidate and _REQUEST_ID_PATTERN.fullmatch(candidate):
        return candidate
    return uuid.uuid4().hex


def route_template(request: Request) -> str:
    route = getattr(request.scope.get("route"), "path", None)
    return route if isinstance(route, str) and route else "unmatched"


class RequestObservabilityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request_id_for(request)
        request.state.request_id = request_id
        started = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception:  # noqa: BLE001 - logged with stack trace, then re-raised
            logger.exception(
                "Unhandled exception while processing request",
                extra=self._fields(request, request_id, status_code, started),
            )
            raise
        finally:
            observe_request(
                method=request.method,
                route=route_template(request),
                status_code=status_code,
                duration_seconds=time.perf_counter() - started,
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "Request completed", extra=self._fields(request, request_id, status_code, started)
        )
        return response

    @staticmethod
    def _fields(request: Request, request_id: str, status_code: int, started: float) -> dict:
        return {
            "request_id": request_id,
            "http_method": request.method,
            "route": route_template(request),
            "status_code": status_code,
            "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
        }
