from __future__ import annotations

from time import perf_counter
from uuid import uuid4

from opentelemetry import trace
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from medmap.observability import TRACE_HEADER, ServiceMetrics, route_template, set_trace_id


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """One span and one metric sample per request, tagged with a trace id."""

    def __init__(self, app, metrics: ServiceMetrics) -> None:
        super().__init__(app)
        self._metrics = metrics
        self._tracer = trace.get_tracer(__name__)

    async def dispatch(self, request: Request, call_next) -> Response:
        trace_id = request.headers.get(TRACE_HEADER) or uuid4().hex
        set_trace_id(trace_id)
        started = perf_counter()
        status_code = 500
        with self._tracer.start_as_current_span(f"{request.method} facility-api") as span:
            span.set_attribute("medmap.trace_id", trace_id)
            try:
                response = await call_next(request)
                status_code = response.status_code
            finally:
                # The router fills scope["route"] only once a route matched.
                route = route_template(request.scope)
                span.set_attribute("http.route", route)
                span.set_attribute("http.status_code", status_code)
                self._metrics.observe_request(request.method, route, status_code, perf_counter() - started)

        response.headers[TRACE_HEADER] = trace_id
        return response
