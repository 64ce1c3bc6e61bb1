from __future__ import annotations

from medmap.collection import FacilityCollection
from medmap.models import Facility

MIN_QUERY_LENGTH = 2
MAX_RESULTS = 10


def _searchable_fields(facility: Facility) -> tuple[str, ...]:
    return (facility.name, facility.lga, facility.type, facility.address)


def search_facilities(
    collection: FacilityCollection,
    query: str | None,
) -> list[Facility]:
    """Case-insensitive substring search over name, lga, type and address.

    Results keep the collection's order and are not ranked. Queries shorter
    than two characters after trimming return nothing.
    """
    term = (query or "").strip().lower()
    if len(term) < MIN_QUERY_LENGTH:
        return []
    results: list[Facility] = []
    for facility in collection:
        if any(term in value.lower() for value in _searchable_fields(facility)):
            results.append(facility)
            if len(results) >= MAX_RESULTS:
                break
    return results
