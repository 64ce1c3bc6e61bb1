from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any

from medmap.models import Facility
from medmap.stats import summarize

TOP_LGA_COUNT = 10
RATING_STARS = (1, 2, 3, 4, 5)


def _series(labels: list[str], values: list[int]) -> dict[str, Any]:
    return {"labels": labels, "values": values}


def staff_mix(facilities: Iterable[Facility]) -> dict[str, Any]:
    doctors = nurses = others = 0
    for facility in facilities:
        doctors += facility.staff.doctors
        nurses += facility.staff.nurses
        others += facility.staff.others
    return _series(["Doctors", "Nurses", "Other Staff"], [doctors, nurses, others])


def average_daily_capacity_by_type(facilities: Iterable[Facility]) -> dict[str, Any]:
    totals: dict[str, list[int]] = {}
    for facility in facilities:
        bucket = totals.setdefault(facility.type, [0, 0])
        bucket[0] += facility.capacity.daily_capacity
        bucket[1] += 1
    labels = list(totals)
    # Math.round semantics: halves go up.
    return _series(labels, [math.floor(total / count + 0.5) for total, count in totals.values()])


def rating_distribution(facilities: Iterable[Facility]) -> dict[str, Any]:
    counts = dict.fromkeys(RATING_STARS, 0)
    for facility in facilities:
        stars = math.floor(facility.rating)
        if stars in counts:
            counts[stars] += 1
    labels = ["1 Star"] + [f"{stars} Stars" for stars in RATING_STARS[1:]]
    return _series(labels, list(counts.values()))


def top_lgas(by_lga: dict[str, int], size: int = TOP_LGA_COUNT) -> dict[str, Any]:
    ranked = sorted(by_lga.items(), key=lambda item: item[1], reverse=True)[:size]
    return _series([name for name, _ in ranked], [count for _, count in ranked])


def chart_series(facilities: Iterable[Facility]) -> dict[str, Any]:
    """Data behind the dashboard charts for one (possibly filtered) collection."""
    items = list(facilities)
    stats = summarize(items)
    return {
        "facilityTypes": _series(list(stats.by_type), list(stats.by_type.values())),
        "ownership": _series(list(stats.by_ownership), list(stats.by_ownership.values())),
        "staff": staff_mix(items),
        "capacityByType": average_daily_capacity_by_type(items),
        "ratings": rating_distribution(items),
        "topLgas": top_lgas(stats.by_lga),
        "emergency": _series(
            ["With Emergency", "Without Emergency"],
            [stats.emergency_services, stats.total - stats.emergency_services],
        ),
        "twentyFourSeven": _series(
            ["24/7", "Limited Hours"],
            [stats.twenty_four_seven, stats.total - stats.twenty_four_seven],
        ),
    }
