from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from medmap.config import ServiceSettings, load_settings
from medmap.errors import ApiError
from medmap.middleware import ObservabilityMiddleware
from medmap.observability import ServiceMetrics, configure_observability, get_trace_id
from medmap.repository import FacilityQualityGate, FacilityRepository
from medmap.response import error_response, success_response
from medmap.routers.facilities import router as facilities_router
from medmap.routers.internal import router as internal_router
from medmap.routers.stats import router as stats_router
from medmap.service import FacilityService


def build_repository(settings: ServiceSettings) -> FacilityRepository:
    quality_gate = FacilityQualityGate(
        max_reject_ratio=settings.FACILITY_MAX_REJECT_RATIO,
        reject_sample_size=settings.FACILITY_REJECT_SAMPLE_SIZE,
    )
    return FacilityRepository.from_source(settings.FACILITY_DATA_FILE, quality_gate=quality_gate)


def create_app(
    settings: ServiceSettings | None = None,
    repository: FacilityRepository | None = None,
) -> FastAPI:
    settings = settings or load_settings()
    app = FastAPI(title="MedMap Facility API", version="0.1.0")
    configure_observability(settings.SERVICE_NAME)
    repository = repository if repository is not None else build_repository(settings)
    app.state.settings = settings
    app.state.repository = repository
    app.state.facility_service = FacilityService(repository)
    app.state.metrics = ServiceMetrics()
    app.add_middleware(ObservabilityMiddleware, metrics=app.state.metrics)
    app.include_router(facilities_router)
    app.include_router(stats_router)
    app.include_router(internal_router)

    @app.get("/healthz")
    async def healthz() -> dict:
        return success_response({"status": "ok"}, meta={})

    @app.get("/readyz")
    async def readyz() -> dict:
        load_error = app.state.repository.load_error
        return success_response(
            {
                "status": "ready" if load_error is None else "degraded",
                "facility_count": len(app.state.repository.all()),
            },
            meta={"load_error": load_error} if load_error else {},
        )

    @app.get("/metrics")
    async def metrics() -> Response:
        payload = app.state.metrics.render(app.state.repository)
        return Response(content=payload, media_type="text/plain; version=0.0.4")

    @app.exception_handler(ApiError)
    async def handle_api_error(_: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=error_response(exc, get_trace_id()))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        message = "; ".join(err["msg"] for err in exc.errors())
        return JSONResponse(
            status_code=422,
            content=error_response(ApiError("VALIDATION_ERROR", message, 422), get_trace_id()),
        )

    return app
