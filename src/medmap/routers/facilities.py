from __future__ import annotations

from fastapi import APIRouter, Depends

from medmap.criteria import FilterCriteria
from medmap.dependencies import get_facility_service, get_filter_criteria
from medmap.errors import ApiError, NotFound
from medmap.response import success_response
from medmap.routers import run_query
from medmap.service import FacilityService

router = APIRouter(prefix="/v1/facilities", tags=["facilities"])


def _parse_facility_id(raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise ApiError.not_found() from exc


@router.get("")
async def list_facilities(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    service: FacilityService = Depends(get_facility_service),
) -> dict:
    items = run_query(lambda: service.list_facilities(criteria))
    return success_response(items.to_payload(), meta={"count": len(items), "filters": criteria.to_params()})


@router.get("/search")
async def search_facilities(
    q: str | None = None,
    service: FacilityService = Depends(get_facility_service),
) -> dict:
    items = run_query(lambda: service.search(q))
    return success_response(
        [item.to_payload() for item in items],
        meta={"count": len(items), "query": (q or "").strip()},
    )


@router.get("/geojson")
async def facilities_geojson(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    service: FacilityService = Depends(get_facility_service),
) -> dict:
    feature_collection, extent = run_query(lambda: service.geojson(criteria))
    return success_response(
        feature_collection,
        meta={"count": len(feature_collection["features"]), "bounds": extent, "filters": criteria.to_params()},
    )


@router.get("/{facility_id}")
async def get_facility_detail(
    facility_id: str,
    service: FacilityService = Depends(get_facility_service),
) -> dict:
    parsed_id = _parse_facility_id(facility_id)
    try:
        item = run_query(lambda: service.get_facility(parsed_id))
    except NotFound as exc:
        raise ApiError.not_found() from exc
    return success_response(item.to_payload(), meta={})
