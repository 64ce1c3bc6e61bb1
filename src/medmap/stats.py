from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from medmap.models import Facility


def round_one_decimal(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class FacilityStats:
    total: int = 0
    by_type: dict[str, int] = field(default_factory=dict)
    by_ownership: dict[str, int] = field(default_factory=dict)
    by_lga: dict[str, int] = field(default_factory=dict)
    emergency_services: int = 0
    twenty_four_seven: int = 0
    average_rating: float = 0
    total_capacity: int = 0
    total_staff: int = 0

    def to_payload(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "byType": dict(self.by_type),
            "byOwnership": dict(self.by_ownership),
            "byLGA": dict(self.by_lga),
            "emergencyServices": self.emergency_services,
            "twentyFourSeven": self.twenty_four_seven,
            "averageRating": self.average_rating,
            "totalCapacity": self.total_capacity,
            "totalStaff": self.total_staff,
        }


def summarize(facilities: Iterable[Facility]) -> FacilityStats:
    """Single pass over any collection, full or filtered.

    The average covers rated facilities only (rating > 0) and is 0 when
    none are rated.
    """
    total = 0
    by_type: dict[str, int] = {}
    by_ownership: dict[str, int] = {}
    by_lga: dict[str, int] = {}
    emergency = 0
    twenty_four_seven = 0
    rating_sum = 0.0
    rating_count = 0
    beds = 0
    staff = 0

    for facility in facilities:
        total += 1
        by_type[facility.type] = by_type.get(facility.type, 0) + 1
        by_ownership[facility.ownership] = by_ownership.get(facility.ownership, 0) + 1
        by_lga[facility.lga] = by_lga.get(facility.lga, 0) + 1
        if facility.emergency:
            emergency += 1
        if facility.twenty_four_seven:
            twenty_four_seven += 1
        if facility.rating > 0:
            rating_sum += facility.rating
            rating_count += 1
        beds += facility.capacity.beds
        staff += facility.staff.total

    average = round_one_decimal(rating_sum / rating_count) if rating_count else 0
    return FacilityStats(
        total=total,
        by_type=by_type,
        by_ownership=by_ownership,
        by_lga=by_lga,
        emergency_services=emergency,
        twenty_four_seven=twenty_four_seven,
        average_rating=average,
        total_capacity=beds,
        total_staff=staff,
    )
