"""Fabricate a sample facility dataset for the dashboard.

Run with ``python -m medmap.seed``. Output path, random seed and volume come
from SEED_OUTPUT_FILE, SEED_RANDOM_SEED and SEED_SCALE.
"""

from __future__ import annotations

import calendar
import json
import logging
import os
import random
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from medmap.models import Facility, clamp_score

logger = logging.getLogger(__name__)

# (min_lng, max_lng), (min_lat, max_lat)
RIVERS_STATE_LNG = (6.35, 7.65)
RIVERS_STATE_LAT = (4.30, 5.80)

LGAS = (
    "Abua/Odual", "Ahoada East", "Ahoada West", "Akuku-Toru", "Andoni",
    "Asari-Toru", "Bonny", "Degema", "Eleme", "Emuoha", "Etche",
    "Gokana", "Ikwerre", "Khana", "Obio/Akpor", "Ogba/Egbema/Ndoni",
    "Ogu/Bolo", "Okrika", "Omuma", "Opobo/Nkoro", "Oyigbo",
    "Port Harcourt", "Tai",
)

STREETS = (
    "Aba Road", "Port Harcourt Road", "East-West Road", "Trans-Amadi Road",
    "Ikwerre Road", "Stadium Road", "Aggrey Road", "Forces Avenue",
    "GRA Phase", "Old Aba Road", "Circular Road", "Creek Road",
    "Yakubu Gowon Street", "Liberation Stadium Road", "Rumuola Road",
)

PHONE_PREFIXES = ("70", "80", "81", "90", "91")


@dataclass(frozen=True)
class FacilityTypeProfile:
    name: str
    count: int
    color: str
    ownership: tuple[str, ...]
    names: tuple[str, ...]
    beds: tuple[int, int]
    capacity_multiplier: float
    doctors: tuple[int, int]
    nurses: tuple[int, int]
    others: tuple[int, int]
    services: tuple[str, ...]
    optional_services: tuple[tuple[str, float], ...] = ()
    emergency_capable: bool = False
    always_emergency: bool = False


FACILITY_TYPES = (
    FacilityTypeProfile(
        name="Primary Health Center",
        count=180,
        color="#22c55e",
        ownership=("Public", "Private"),
        names=(
            "Community Health Center", "Primary Care Clinic", "Health Post", "Basic Health Unit",
            "Ward Health Center", "Rural Health Clinic", "Primary Health Facility", "Community Clinic",
        ),
        beds=(2, 11),
        capacity_multiplier=2.0,
        doctors=(1, 3),
        nurses=(2, 7),
        others=(1, 4),
        services=("Immunization", "Maternal Care", "Child Health"),
        optional_services=(("Laboratory Services", 0.3),),
    ),
    FacilityTypeProfile(
        name="General Hospital",
        count=85,
        color="#3b82f6",
        ownership=("Public", "Private"),
        names=(
            "General Hospital", "District Hospital", "Regional Hospital", "Medical Center",
            "Hospital", "Healthcare Complex", "Medical Facility",
        ),
        beds=(30, 109),
        capacity_multiplier=1.1,
        doctors=(5, 19),
        nurses=(10, 34),
        others=(5, 16),
        services=("Laboratory Services", "X-Ray", "Pharmacy", "Surgery", "Maternity"),
        emergency_capable=True,
    ),
    FacilityTypeProfile(
        name="Private Clinic",
        count=60,
        color="#f59e0b",
        ownership=("Private",),
        names=(
            "Medical Clinic", "Healthcare Clinic", "Family Clinic", "Medical Practice",
            "Health Clinic", "Private Medical Center", "Wellness Center",
        ),
        beds=(5, 24),
        capacity_multiplier=1.5,
        doctors=(2, 6),
        nurses=(3, 10),
        others=(2, 6),
        services=("Laboratory Services", "Pharmacy"),
        optional_services=(("Specialist Consultation", 0.6),),
    ),
    FacilityTypeProfile(
        name="Specialist Hospital",
        count=18,
        color="#e11d48",
        ownership=("Public", "Private"),
        names=(
            "Specialist Hospital", "Medical Specialist Center", "Specialist Medical Facility",
            "Advanced Medical Center", "Tertiary Hospital", "Referral Hospital",
        ),
        beds=(50, 149),
        capacity_multiplier=1.1,
        doctors=(10, 29),
        nurses=(15, 44),
        others=(8, 22),
        services=("Specialist Consultation", "Surgery", "Laboratory Services", "Radiology"),
        emergency_capable=True,
    ),
    FacilityTypeProfile(
        name="Teaching Hospital",
        count=5,
        color="#8b5cf6",
        ownership=("Public",),
        names=(
            "University Teaching Hospital", "Teaching Hospital", "Medical College Hospital",
            "Academic Medical Center", "Training Hospital",
        ),
        beds=(200, 499),
        capacity_multiplier=1.2,
        doctors=(30, 79),
        nurses=(60, 159),
        others=(20, 59),
        services=(
            "All Medical Services", "Emergency Services", "Surgery", "ICU",
            "Laboratory Services", "Radiology", "Pharmacy",
        ),
        always_emergency=True,
    ),
    FacilityTypeProfile(
        name="Diagnostic Center",
        count=5,
        color="#06b6d4",
        ownership=("Private",),
        names=(
            "Diagnostic Center", "Medical Diagnostics", "Imaging Center", "Lab & Diagnostic Services",
            "Medical Testing Center", "Diagnostic Services",
        ),
        beds=(1, 5),
        capacity_multiplier=3.0,
        doctors=(2, 5),
        nurses=(2, 7),
        others=(3, 10),
        services=("Laboratory Services", "X-Ray", "Ultrasound", "CT Scan"),
        optional_services=(("MRI", 0.3),),
    ),
)

BASE_SERVICES = ("General Consultation", "Health Check-up")
TWENTY_FOUR_SEVEN_RATE = 0.15
EMERGENCY_RATE = 0.4


def _slug(value: str) -> str:
    return re.sub(r"[^a-z]", "", value.lower())


def _operating_hours(rng: random.Random) -> dict[str, Any]:
    if rng.random() < TWENTY_FOUR_SEVEN_RATE:
        return {"twentyFourSeven": True, "weekdays": "24 hours", "weekends": "24 hours"}
    open_hour = rng.randint(6, 8)
    close_hour = rng.randint(18, 21)
    weekends = f"{open_hour + 1}:00 - {close_hour - 1}:00" if rng.random() > 0.3 else "Closed"
    return {"twentyFourSeven": False, "weekdays": f"{open_hour}:00 - {close_hour}:00", "weekends": weekends}


def _services(profile: FacilityTypeProfile, rng: random.Random) -> dict[str, Any]:
    emergency = profile.always_emergency or rng.random() < EMERGENCY_RATE
    available = [*BASE_SERVICES, *profile.services]
    for service, rate in profile.optional_services:
        if rng.random() < rate:
            available.append(service)
    if profile.emergency_capable and emergency:
        available.append("Emergency Services")
    return {"available": available, "emergency": emergency}


def _analytics(rng: random.Random, now: datetime) -> dict[str, Any]:
    monthly = []
    for offset in range(11, -1, -1):
        month = (now.month - 1 - offset) % 12 + 1
        monthly.append(
            {
                "month": calendar.month_abbr[month],
                "patients": rng.randint(200, 999),
                "emergencies": rng.randint(10, 59),
            }
        )
    return {
        "monthlyPatients": monthly,
        "averageWaitTime": rng.randint(15, 74),
        "patientSatisfaction": round(rng.uniform(3.0, 5.0), 1),
    }


def _facility(
    facility_id: int,
    sequence: int,
    profile: FacilityTypeProfile,
    rng: random.Random,
    now: datetime,
) -> Facility:
    lga = rng.choice(LGAS)
    name = f"{lga} {rng.choice(profile.names)} {sequence}"
    beds = rng.randint(*profile.beds)
    host = re.sub(r"\s+", "", name.lower())
    website = f"https://www.{host}.com" if rng.random() > 0.7 else None
    payload = {
        "id": facility_id,
        "name": name,
        "type": profile.name,
        "ownership": rng.choice(profile.ownership),
        "lga": lga,
        "location": {
            "coordinates": [rng.uniform(*RIVERS_STATE_LNG), rng.uniform(*RIVERS_STATE_LAT)],
            "address": f"{rng.randint(1, 200)} {rng.choice(STREETS)}, {lga}, Rivers State",
            "lga": lga,
            "state": "Rivers State",
        },
        "contact": {
            "phone": f"+234{rng.choice(PHONE_PREFIXES)}{rng.randint(10_000_000, 99_999_999)}",
            "email": f"{_slug(name)[:8]}@{_slug(lga)}.{rng.choice(('gmail.com', 'yahoo.com'))}",
            "website": website,
        },
        "operatingHours": _operating_hours(rng),
        "services": _services(profile, rng),
        "staff": {
            "doctors": rng.randint(*profile.doctors),
            "nurses": rng.randint(*profile.nurses),
            "others": rng.randint(*profile.others),
        },
        "capacity": {
            "beds": beds,
            "dailyCapacity": int(beds * profile.capacity_multiplier),
            "score": clamp_score(beds),
        },
        "rating": round(rng.uniform(3.0, 5.0), 1),
        "lastUpdated": now.isoformat(),
        "analytics": _analytics(rng, now),
        "color": profile.color,
        "height": clamp_score(beds),
    }
    return Facility.model_validate(payload)


def generate_facilities(
    seed: int | None = None,
    scale: float = 1.0,
    now: datetime | None = None,
) -> list[Facility]:
    if scale <= 0:
        raise ValueError("scale must be > 0")
    rng = random.Random(seed)
    now = now or datetime.now(timezone.utc)
    facilities: list[Facility] = []
    for profile in FACILITY_TYPES:
        count = max(1, round(profile.count * scale))
        for sequence in range(1, count + 1):
            facilities.append(_facility(len(facilities) + 1, sequence, profile, rng, now))
    return facilities


def write_facilities(facilities: list[Facility], output: str | Path) -> Path:
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps([item.to_payload() for item in facilities], indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    return path


def _parse_optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _parse_positive_float(name: str, default: str) -> float:
    value = float(os.getenv(name, default))
    if value <= 0:
        raise RuntimeError(f"{name} must be > 0")
    return value


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    output = os.getenv("SEED_OUTPUT_FILE", "data/facilities.json")
    seed = _parse_optional_int("SEED_RANDOM_SEED")
    scale = _parse_positive_float("SEED_SCALE", "1.0")
    facilities = generate_facilities(seed=seed, scale=scale)
    path = write_facilities(facilities, output)
    logger.info(
        "facility_seed_written",
        extra={"component": "seed", "output": str(path), "facility_count": len(facilities)},
    )


if __name__ == "__main__":
    main()
