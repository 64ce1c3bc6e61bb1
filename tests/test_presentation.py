from __future__ import annotations

import pytest

from medmap.charts import chart_series, rating_distribution, top_lgas
from medmap.collection import FacilityCollection
from medmap.geojson import FALLBACK_COORDINATES, bounds, to_feature_collection
from medmap.models import Facility


def test_feature_collection_has_one_point_per_facility(mixed) -> None:
    geojson = to_feature_collection(mixed)

    assert geojson["type"] == "FeatureCollection"
    assert len(geojson["features"]) == len(mixed)
    first = geojson["features"][0]
    assert first["geometry"]["type"] == "Point"
    assert first["properties"]["id"] == 1
    assert first["properties"]["twentyFourSeven"] is True
    assert first["properties"]["phone"] == "+2348012345678"
    assert first["properties"]["height"] == 10


def test_facility_without_coordinates_uses_fallback_point() -> None:
    facility = Facility.model_validate({"id": 1, "name": "Nowhere Clinic", "type": "Clinic"})
    feature = to_feature_collection([facility])["features"][0]

    assert feature["geometry"]["coordinates"] == list(FALLBACK_COORDINATES)
    assert bounds([facility]) is None


def test_bounds_cover_all_coordinates(scenario) -> None:
    (min_lng, min_lat), (max_lng, max_lat) = bounds(scenario)

    assert min_lng == pytest.approx(7.01)
    assert max_lng == pytest.approx(7.03)
    assert min_lat == pytest.approx(4.81)
    assert max_lat == pytest.approx(4.83)


def test_rating_distribution_uses_whole_stars(mixed) -> None:
    series = rating_distribution(mixed)

    assert series["labels"] == ["1 Star", "2 Stars", "3 Stars", "4 Stars", "5 Stars"]
    assert series["values"] == [0, 0, 1, 3, 0]


def test_top_lgas_ranks_by_count() -> None:
    series = top_lgas({"Tai": 1, "Bonny": 4, "Eleme": 2}, size=2)
    assert series == {"labels": ["Bonny", "Eleme"], "values": [4, 2]}


def test_chart_series_over_filtered_subset(mixed) -> None:
    charts = chart_series(FacilityCollection(item for item in mixed if item.lga == "Bonny"))

    assert charts["staff"]["values"] == [2, 4, 6]
    assert charts["capacityByType"] == {"labels": ["General Hospital", "Teaching Hospital"], "values": [160, 600]}
    assert charts["emergency"]["values"] == [2, 0]
    assert charts["twentyFourSeven"]["values"] == [1, 1]
    assert charts["topLgas"] == {"labels": ["Bonny"], "values": [2]}


def test_chart_series_on_empty_collection() -> None:
    charts = chart_series(FacilityCollection())

    assert charts["staff"]["values"] == [0, 0, 0]
    assert charts["capacityByType"] == {"labels": [], "values": []}
    assert charts["ratings"]["values"] == [0, 0, 0, 0, 0]
