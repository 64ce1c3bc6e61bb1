from __future__ import annotations

from medmap.collection import FacilityCollection
from medmap.criteria import FilterCriteria, is_any
from medmap.models import Facility


def matches(facility: Facility, criteria: FilterCriteria) -> bool:
    if not is_any(criteria.type) and facility.type != criteria.type:
        return False
    if not is_any(criteria.ownership) and facility.ownership != criteria.ownership:
        return False
    if not is_any(criteria.lga) and facility.lga != criteria.lga:
        return False
    if criteria.emergency_only and not facility.emergency:
        return False
    if criteria.twenty_four_only and not facility.twenty_four_seven:
        return False
    if criteria.min_rating is not None and facility.rating < criteria.min_rating:
        return False
    return True


def filter_facilities(collection: FacilityCollection, criteria: FilterCriteria) -> FacilityCollection:
    if criteria.is_empty():
        return collection
    return FacilityCollection(item for item in collection if matches(item, criteria))
