from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from medmap.app import create_app
from medmap.config import ServiceSettings
from medmap.dependencies import get_facility_service
from medmap.repository import FacilityRepository


class FailingService:
    def list_facilities(self, _criteria=None):
        raise RuntimeError("snapshot unreadable")

    def summary(self, _criteria=None):
        raise RuntimeError("snapshot unreadable")

    def reload(self):
        raise RuntimeError("disk detached")


@pytest.fixture
def client(mixed) -> TestClient:
    return TestClient(create_app(settings=ServiceSettings(), repository=FacilityRepository(mixed)))


def test_health_endpoint_response_shape(client) -> None:
    response = client.get("/healthz")
    body = response.json()

    assert response.status_code == 200
    assert body["success"] is True
    assert body["data"]["status"] == "ok"
    assert response.headers["x-trace-id"]


def test_ready_endpoint_reports_facility_count(client) -> None:
    body = client.get("/readyz").json()
    assert body["data"] == {"status": "ready", "facility_count": 5}


def test_ready_endpoint_reports_degraded_when_data_missing(tmp_path) -> None:
    settings = ServiceSettings(FACILITY_DATA_FILE=str(tmp_path / "missing.json"))
    client = TestClient(create_app(settings=settings))

    body = client.get("/readyz").json()

    assert body["data"] == {"status": "degraded", "facility_count": 0}
    assert "missing.json" in body["meta"]["load_error"]
    assert client.get("/v1/facilities").json()["data"] == []


def test_list_facilities_applies_filters(client) -> None:
    response = client.get("/v1/facilities?lga=Bonny&emergency=true&ownership=all")
    body = response.json()

    assert response.status_code == 200
    assert [item["id"] for item in body["data"]] == [2, 4]
    assert body["meta"] == {"count": 2, "filters": {"lga": "Bonny", "emergency": "true"}}
    assert body["data"][0]["operatingHours"]["twentyFourSeven"] is False


def test_list_facilities_ignores_bad_filter_values(client) -> None:
    response = client.get("/v1/facilities?minRating=abc&twentyfour=perhaps&unknown=1")

    assert response.status_code == 200
    assert response.json()["meta"]["count"] == 5


def test_min_rating_filter(client) -> None:
    body = client.get("/v1/facilities?minRating=4.5").json()
    assert [item["id"] for item in body["data"]] == [2, 4]


def test_facility_detail_and_not_found(client) -> None:
    found = client.get("/v1/facilities/3")
    missing = client.get("/v1/facilities/99")
    not_a_number = client.get("/v1/facilities/abc")

    assert found.status_code == 200
    assert found.json()["data"]["name"] == "Okrika Family Clinic"
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "NOT_FOUND"
    assert not_a_number.status_code == 404


def test_search_endpoint(client) -> None:
    body = client.get("/v1/facilities/search?q=bonny").json()
    assert [item["id"] for item in body["data"]] == [2, 4]
    assert body["meta"] == {"count": 2, "query": "bonny"}

    assert client.get("/v1/facilities/search?q=b").json()["data"] == []
    assert client.get("/v1/facilities/search").json()["data"] == []


def test_geojson_endpoint(client) -> None:
    body = client.get("/v1/facilities/geojson?twentyfour=true").json()

    assert body["data"]["type"] == "FeatureCollection"
    assert [feature["properties"]["id"] for feature in body["data"]["features"]] == [1, 4]
    assert body["meta"]["count"] == 2
    assert len(body["meta"]["bounds"]) == 2


def test_stats_summary_over_full_and_filtered_collection(client) -> None:
    full = client.get("/v1/stats/summary").json()["data"]
    bonny = client.get("/v1/stats/summary?lga=Bonny").json()["data"]

    assert full["total"] == 5
    assert full["averageRating"] == 4.2
    assert full["byLGA"]["Bonny"] == 2
    assert bonny["total"] == 2
    assert bonny["totalCapacity"] == 380
    assert bonny["averageRating"] == 4.8


def test_stats_charts_endpoint(client) -> None:
    body = client.get("/v1/stats/charts?ownership=Private").json()

    assert body["success"] is True
    assert body["data"]["facilityTypes"]["labels"] == ["General Hospital", "Private Clinic"]


def test_unreadable_collection_surfaces_internal_error(mixed) -> None:
    app = create_app(settings=ServiceSettings(), repository=FacilityRepository(mixed))
    app.dependency_overrides[get_facility_service] = lambda: FailingService()
    client = TestClient(app)

    listed = client.get("/v1/facilities")
    stats = client.get("/v1/stats/summary")

    assert listed.status_code == 500
    assert listed.json()["error"]["code"] == "INTERNAL_ERROR"
    assert stats.status_code == 500


def test_reload_endpoint(write_data, payload_factory) -> None:
    path = write_data([payload_factory(1, "Alpha")])
    client = TestClient(create_app(settings=ServiceSettings(FACILITY_DATA_FILE=str(path))))
    assert client.get("/readyz").json()["data"]["facility_count"] == 1

    write_data([payload_factory(1, "Alpha"), payload_factory(2, "Beta")])
    reloaded = client.post("/internal/facilities/reload")

    assert reloaded.status_code == 200
    assert reloaded.json()["data"] == {"facility_count": 2}
    assert client.get("/v1/facilities/2").status_code == 200

    write_data("[")
    failed = client.post("/internal/facilities/reload")
    assert failed.status_code == 503
    assert failed.json()["error"]["code"] == "DATA_UNAVAILABLE"
    assert client.get("/readyz").json()["data"]["facility_count"] == 2


def test_metrics_endpoint_counts_requests(client) -> None:
    client.get("/v1/facilities")
    payload = client.get("/metrics").text

    assert "medmap_http_requests_total" in payload
    assert 'route="/v1/facilities"' in payload
    assert "medmap_facilities_loaded 5.0" in payload


def test_metrics_label_requests_by_route_template(client) -> None:
    client.get("/v1/facilities/2")
    client.get("/v1/facilities/not-an-id")
    client.get("/no/such/page")
    payload = client.get("/metrics").text

    detail_series = [
        line
        for line in payload.splitlines()
        if line.startswith("medmap_http_requests_total{") and "/v1/facilities/" in line
    ]
    assert len(detail_series) == 2
    assert all('route="/v1/facilities/{facility_id}"' in line for line in detail_series)
    assert "not-an-id" not in payload
    assert "/no/such/page" not in payload
    assert 'route="<unmatched>"' in payload


def test_error_envelope_carries_trace_id(client) -> None:
    response = client.get("/v1/facilities/99", headers={"x-trace-id": "trace-404"})

    assert response.headers["x-trace-id"] == "trace-404"
    assert response.json()["error"] == {"code": "NOT_FOUND", "message": "Facility not found", "traceId": "trace-404"}


def test_reload_unexpected_failure_uses_error_envelope(mixed) -> None:
    app = create_app(settings=ServiceSettings(), repository=FacilityRepository(mixed))
    app.dependency_overrides[get_facility_service] = lambda: FailingService()
    client = TestClient(app)

    response = client.post("/internal/facilities/reload")

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "INTERNAL_ERROR"
    assert 'medmap_facility_reloads_total{outcome="failed"} 1.0' in client.get("/metrics").text
