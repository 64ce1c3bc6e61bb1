from __future__ import annotations

from fastapi import APIRouter, Depends

from medmap.criteria import FilterCriteria
from medmap.dependencies import get_facility_service, get_filter_criteria
from medmap.response import success_response
from medmap.routers import run_query
from medmap.service import FacilityService

router = APIRouter(prefix="/v1/stats", tags=["stats"])


@router.get("/summary")
async def stats_summary(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    service: FacilityService = Depends(get_facility_service),
) -> dict:
    stats = run_query(lambda: service.summary(criteria))
    return success_response(stats.to_payload(), meta={"filters": criteria.to_params()})


@router.get("/charts")
async def stats_charts(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    service: FacilityService = Depends(get_facility_service),
) -> dict:
    series = run_query(lambda: service.charts(criteria))
    return success_response(series, meta={"filters": criteria.to_params()})
