"""Facility map and analytics API over a static healthcare facility dataset."""

from medmap.collection import FacilityCollection
from medmap.criteria import FilterCriteria, parse_criteria
from medmap.errors import DataUnavailable, InvalidQuery, MedMapError, NotFound
from medmap.filters import filter_facilities
from medmap.models import Facility
from medmap.repository import FacilityRepository, load_facilities
from medmap.search import search_facilities
from medmap.stats import FacilityStats, summarize

__all__ = [
    "DataUnavailable",
    "Facility",
    "FacilityCollection",
    "FacilityRepository",
    "FacilityStats",
    "FilterCriteria",
    "InvalidQuery",
    "MedMapError",
    "NotFound",
    "filter_facilities",
    "load_facilities",
    "parse_criteria",
    "search_facilities",
    "summarize",
]
