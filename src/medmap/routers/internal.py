from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from medmap.dependencies import get_facility_service
from medmap.errors import ApiError, DataUnavailable
from medmap.response import success_response
from medmap.routers import run_query
from medmap.service import FacilityService

router = APIRouter(prefix="/internal/facilities", tags=["internal"])


# Plain def: the file is read and parsed in the threadpool, off the event loop.
@router.post("/reload")
def reload_facilities(request: Request, service: FacilityService = Depends(get_facility_service)) -> dict:
    metrics = request.app.state.metrics

    def _reload() -> int:
        try:
            return service.reload()
        except DataUnavailable as exc:
            raise ApiError("DATA_UNAVAILABLE", str(exc), 503) from exc

    try:
        count = run_query(_reload)
    except ApiError:
        metrics.observe_reload("failed")
        raise
    metrics.observe_reload("ok")
    return success_response({"facility_count": count}, meta={})
