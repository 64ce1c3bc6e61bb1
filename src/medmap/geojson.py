from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from medmap.models import Facility

FALLBACK_COORDINATES = (7.0, 5.0)


def to_feature(facility: Facility) -> dict[str, Any]:
    coordinates = facility.location.coordinates or FALLBACK_COORDINATES
    return {
        "type": "Feature",
        "properties": {
            "id": facility.id,
            "name": facility.name,
            "type": facility.type,
            "ownership": facility.ownership,
            "lga": facility.lga,
            "rating": facility.rating,
            "color": facility.color,
            "height": facility.height if facility.height is not None else facility.capacity.score,
            "phone": facility.contact.phone or "",
            "emergency": facility.emergency,
            "twentyFourSeven": facility.twenty_four_seven,
            "beds": facility.capacity.beds,
        },
        "geometry": {"type": "Point", "coordinates": list(coordinates)},
    }


def to_feature_collection(facilities: Iterable[Facility]) -> dict[str, Any]:
    return {"type": "FeatureCollection", "features": [to_feature(item) for item in facilities]}


def bounds(facilities: Iterable[Facility]) -> list[list[float]] | None:
    """South-west and north-east corners over facilities that have coordinates."""
    points = [item.location.coordinates for item in facilities if item.location.coordinates is not None]
    if not points:
        return None
    lngs = [lng for lng, _ in points]
    lats = [lat for _, lat in points]
    return [[min(lngs), min(lats)], [max(lngs), max(lats)]]
