from __future__ import annotations

from fastapi import Query, Request

from medmap.criteria import FilterCriteria, parse_criteria
from medmap.service import FacilityService


def get_facility_service(request: Request) -> FacilityService:
    return request.app.state.facility_service


def get_filter_criteria(
    facility_type: str | None = Query(default=None, alias="type"),
    ownership: str | None = None,
    lga: str | None = None,
    emergency: str | None = None,
    twentyfour: str | None = None,
    min_rating: str | None = Query(default=None, alias="minRating"),
) -> FilterCriteria:
    raw = {
        "type": facility_type,
        "ownership": ownership,
        "lga": lga,
        "emergency": emergency,
        "twentyfour": twentyfour,
        "minRating": min_rating,
    }
    return parse_criteria({key: value for key, value in raw.items() if value is not None})
