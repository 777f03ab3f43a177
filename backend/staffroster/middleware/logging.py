"""
StaffRoster Backend: Access Log Middleware
============================================

What:  One access log line per employee API call.
How:   Times the downstream call, then logs the matched route template
       (e.g. /funcionario/{employee_id}) with the employee id as a separate
       field, so log lines group by operation rather than by raw URL.

Example:
    PUT /funcionario/{employee_id} employee=3f1c... -> 404 in 2.1ms [a1b2c3d4]

Request bodies are never logged (employee salaries are personal data).
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from staffroster.middleware.request_id import request_id_var

logger = logging.getLogger("staffroster.access")

# Health checks and docs are not employee operations
QUIET_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})


def _route_template(request: Request) -> str:
    """Path template of the matched route; the raw path when nothing matched."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log keyed by route template and employee id."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        template = _route_template(request)
        employee_id: Optional[str] = request.scope.get("path_params", {}).get("employee_id")

        logger.log(
            _level_for(response.status_code),
            "%s %s employee=%s -> %d in %.1fms [%s]",
            request.method,
            template,
            employee_id or "-",
            response.status_code,
            elapsed_ms,
            request_id_var.get(""),
            extra={
                "route": template,
                "employee_id": employee_id,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response
