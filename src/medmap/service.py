from __future__ import annotations

from typing import Any, Protocol

from medmap.charts import chart_series
from medmap.collection import FacilityCollection
from medmap.criteria import FilterCriteria
from medmap.filters import filter_facilities
from medmap.geojson import bounds, to_feature_collection
from medmap.models import Facility
from medmap.search import search_facilities
from medmap.stats import FacilityStats, summarize


class FacilityRepositoryLike(Protocol):
    def all(self) -> FacilityCollection: ...

    def by_id(self, facility_id: int) -> Facility: ...

    def reload(self) -> FacilityCollection: ...


class FacilityService:
    def __init__(self, repository: FacilityRepositoryLike) -> None:
        self._repository = repository

    def list_facilities(self, criteria: FilterCriteria | None = None) -> FacilityCollection:
        collection = self._repository.all()
        if criteria is None:
            return collection
        return filter_facilities(collection, criteria)

    def get_facility(self, facility_id: int) -> Facility:
        return self._repository.by_id(facility_id)

    def search(self, query: str | None) -> list[Facility]:
        return search_facilities(self._repository.all(), query)

    def summary(self, criteria: FilterCriteria | None = None) -> FacilityStats:
        return summarize(self.list_facilities(criteria))

    def charts(self, criteria: FilterCriteria | None = None) -> dict[str, Any]:
        return chart_series(self.list_facilities(criteria))

    def geojson(self, criteria: FilterCriteria | None = None) -> tuple[dict[str, Any], list[list[float]] | None]:
        collection = self.list_facilities(criteria)
        return to_feature_collection(collection), bounds(collection)

    def reload(self) -> int:
        return len(self._repository.reload())
