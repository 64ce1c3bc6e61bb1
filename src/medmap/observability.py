"""Tracing, request metrics and access-log hygiene for the facility API."""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Protocol

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest

TRACE_HEADER = "x-trace-id"
PROBE_PATHS = ("/healthz", "/readyz")
UNMATCHED_ROUTE = "<unmatched>"

_trace_id: ContextVar[str] = ContextVar("medmap_trace_id", default="")
_tracing_ready = False
_probe_filter_ready = False


def set_trace_id(trace_id: str) -> None:
    _trace_id.set(trace_id)


def get_trace_id() -> str:
    return _trace_id.get()


def route_template(scope: dict[str, Any]) -> str:
    """Path template of the route that served the request.

    Raw paths would give every facility id its own metric series, so
    requests that matched no route share a single label.
    """
    route = scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


class ProbeAccessFilter(logging.Filter):
    """Keep successful health probes out of the uvicorn access log."""

    def __init__(self, paths: tuple[str, ...] = PROBE_PATHS) -> None:
        super().__init__()
        self._paths = frozenset(path.rstrip("/") or "/" for path in paths)

    def filter(self, record: logging.LogRecord) -> bool:
        # uvicorn.access args: (client, method, path, http_version, status)
        args = record.args
        if not isinstance(args, tuple) or len(args) != 5:
            return True
        path, status = args[2], args[4]
        if status != 200 or not isinstance(path, str):
            return True
        return (path.partition("?")[0].rstrip("/") or "/") not in self._paths


def configure_observability(service_name: str) -> None:
    """Install the tracer provider and probe filter once per process."""
    global _tracing_ready, _probe_filter_ready
    if not _tracing_ready:
        trace.set_tracer_provider(TracerProvider(resource=Resource.create({"service.name": service_name})))
        _tracing_ready = True
    if not _probe_filter_ready:
        logging.getLogger("uvicorn.access").addFilter(ProbeAccessFilter())
        _probe_filter_ready = True


class DataState(Protocol):
    @property
    def load_error(self) -> str | None: ...

    def all(self) -> Any: ...


class ServiceMetrics:
    """Prometheus series for request traffic and the loaded facility data."""

    def __init__(self) -> None:
        self.registry = CollectorRegistry()
        self._requests = Counter(
            "medmap_http_requests_total",
            "HTTP requests by method, route template and status",
            labelnames=("method", "route", "status_code"),
            registry=self.registry,
        )
        self._latency = Histogram(
            "medmap_http_request_duration_seconds",
            "HTTP request latency by route template",
            labelnames=("method", "route"),
            buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 1.0),
            registry=self.registry,
        )
        self._facilities = Gauge(
            "medmap_facilities_loaded",
            "Facilities in the current in-memory snapshot",
            registry=self.registry,
        )
        self._data_ready = Gauge(
            "medmap_facility_data_ready",
            "1 when the served snapshot came from a successful load, otherwise 0",
            registry=self.registry,
        )
        self._reloads = Counter(
            "medmap_facility_reloads_total",
            "Facility data reload attempts by outcome",
            labelnames=("outcome",),
            registry=self.registry,
        )

    def observe_request(self, method: str, route: str, status_code: int, seconds: float) -> None:
        self._requests.labels(method, route, str(status_code)).inc()
        self._latency.labels(method, route).observe(seconds)

    def observe_reload(self, outcome: str) -> None:
        self._reloads.labels(outcome).inc()

    def render(self, data: DataState) -> str:
        self._facilities.set(len(data.all()))
        self._data_ready.set(0 if data.load_error else 1)
        return generate_latest(self.registry).decode("utf-8")
