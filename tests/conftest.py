from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from medmap.collection import FacilityCollection
from medmap.models import Facility


def facility_payload(
    facility_id: int,
    name: str,
    *,
    facility_type: str = "Primary Health Center",
    ownership: str = "Public",
    lga: str = "Port Harcourt",
    rating: float = 4.0,
    emergency: bool = False,
    twenty_four_seven: bool = False,
    beds: int = 10,
    address: str | None = None,
    staff: tuple[int, int, int] = (1, 2, 3),
) -> dict[str, Any]:
    doctors, nurses, others = staff
    return {
        "id": facility_id,
        "name": name,
        "type": facility_type,
        "ownership": ownership,
        "lga": lga,
        "location": {
            "coordinates": [7.0 + facility_id / 100, 4.8 + facility_id / 100],
            "address": address if address is not None else f"{facility_id} Aba Road, {lga}, Rivers State",
            "lga": lga,
            "state": "Rivers State",
        },
        "contact": {"phone": "+2348012345678", "email": None, "website": None},
        "operatingHours": {"twentyFourSeven": twenty_four_seven, "weekdays": "8:00 - 18:00", "weekends": "Closed"},
        "services": {"available": ["General Consultation"], "emergency": emergency},
        "staff": {"doctors": doctors, "nurses": nurses, "others": others, "total": doctors + nurses + others},
        "capacity": {"beds": beds, "dailyCapacity": beds * 2, "score": 10},
        "rating": rating,
        "lastUpdated": "2026-01-01T00:00:00+00:00",
    }


@pytest.fixture
def make_facility() -> Callable[..., Facility]:
    def _make(facility_id: int, name: str, **kwargs: Any) -> Facility:
        return Facility.model_validate(facility_payload(facility_id, name, **kwargs))

    return _make


@pytest.fixture
def scenario(make_facility) -> FacilityCollection:
    return FacilityCollection(
        [
            make_facility(1, "Alpha Care", facility_type="Clinic", rating=4.5, emergency=True),
            make_facility(2, "Bonny Hospital", facility_type="Hospital", rating=3.0, emergency=False),
            make_facility(3, "Creek Clinic", facility_type="Clinic", rating=5.0, emergency=True),
        ]
    )


@pytest.fixture
def mixed(make_facility) -> FacilityCollection:
    return FacilityCollection(
        [
            make_facility(1, "Eleme Health Post", lga="Eleme", ownership="Public", rating=3.4, twenty_four_seven=True),
            make_facility(
                2,
                "Bonny General Hospital",
                facility_type="General Hospital",
                lga="Bonny",
                ownership="Private",
                rating=4.6,
                emergency=True,
                beds=80,
            ),
            make_facility(3, "Okrika Family Clinic", facility_type="Private Clinic", lga="Okrika", ownership="Private"),
            make_facility(
                4,
                "Bonny Teaching Hospital",
                facility_type="Teaching Hospital",
                lga="Bonny",
                rating=4.9,
                emergency=True,
                twenty_four_seven=True,
                beds=300,
            ),
            make_facility(5, "Tai Community Clinic", lga="Tai", rating=0),
        ]
    )


@pytest.fixture
def write_data(tmp_path) -> Callable[[Any], Path]:
    def _write(payload: Any, name: str = "facilities.json") -> Path:
        path = tmp_path / name
        text = payload if isinstance(payload, str) else json.dumps(payload)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def payload_factory() -> Callable[..., dict[str, Any]]:
    return facility_payload
