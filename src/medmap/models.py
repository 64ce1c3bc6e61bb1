from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator
from pydantic.alias_generators import to_camel

MIN_SCORE = 8
MAX_SCORE = 60


def clamp_score(beds: int) -> int:
    return min(max(beds, MIN_SCORE), MAX_SCORE)


class _Record(BaseModel):
    """Immutable record read with camelCase keys, the data file's wire shape."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


def _has_key(data: dict[str, Any], name: str) -> bool:
    return name in data or to_camel(name) in data


def _bed_count(value: Any) -> int | None:
    """Coerce a raw beds value, or None when field validation should reject it."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


class Location(_Record):
    coordinates: tuple[float, float] | None = None
    address: str = ""
    lga: str = ""
    state: str = ""

    @field_validator("coordinates")
    @classmethod
    def _check_coordinates(cls, value: tuple[float, float] | None) -> tuple[float, float] | None:
        if value is None:
            return None
        lng, lat = value
        if not (-180 <= lng <= 180):
            raise ValueError("longitude must be between -180 and 180")
        if not (-90 <= lat <= 90):
            raise ValueError("latitude must be between -90 and 90")
        return value


class Contact(_Record):
    phone: str | None = None
    email: str | None = None
    website: str | None = None


class OperatingHours(_Record):
    twenty_four_seven: bool = False
    weekdays: str = ""
    weekends: str = ""


class Services(_Record):
    available: tuple[str, ...] = ()
    emergency: bool = False


class Staff(_Record):
    doctors: int = Field(default=0, ge=0)
    nurses: int = Field(default=0, ge=0)
    others: int = Field(default=0, ge=0)

    # A stored "total" is ignored; it is always the sum of the subcounts.
    @computed_field
    @property
    def total(self) -> int:
        return self.doctors + self.nurses + self.others


class Capacity(_Record):
    beds: int = Field(default=0, ge=0)
    daily_capacity: int = Field(default=0, ge=0)
    score: int = MIN_SCORE

    @model_validator(mode="before")
    @classmethod
    def _fill_derived(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        beds = _bed_count(data.get("beds", 0))
        if beds is None:
            return data
        data = dict(data)
        if not _has_key(data, "daily_capacity"):
            data["dailyCapacity"] = beds
        if not _has_key(data, "score"):
            data["score"] = clamp_score(beds)
        return data

    @field_validator("score")
    @classmethod
    def _clamp(cls, value: int) -> int:
        return min(max(value, MIN_SCORE), MAX_SCORE)

    @model_validator(mode="after")
    def _check_daily_capacity(self) -> Capacity:
        if self.daily_capacity < self.beds:
            raise ValueError("dailyCapacity must be >= beds")
        return self


class Facility(_Record):
    id: int = Field(gt=0)
    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    ownership: str = ""
    lga: str = ""
    location: Location = Field(default_factory=Location)
    contact: Contact = Field(default_factory=Contact)
    operating_hours: OperatingHours = Field(default_factory=OperatingHours)
    services: Services = Field(default_factory=Services)
    staff: Staff = Field(default_factory=Staff)
    capacity: Capacity = Field(default_factory=Capacity)
    rating: float = 0.0
    last_updated: str = ""
    color: str | None = None
    height: int | None = None
    analytics: dict[str, Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def _lga_from_location(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("lga"):
            return data
        location = data.get("location")
        if isinstance(location, dict) and location.get("lga"):
            return {**data, "lga": location["lga"]}
        if isinstance(location, Location) and location.lga:
            return {**data, "lga": location.lga}
        return data

    @field_validator("rating", mode="before")
    @classmethod
    def _unrated_when_missing(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("rating")
    @classmethod
    def _check_rating(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("rating must be finite")
        if value != 0 and not (1.0 <= value <= 5.0):
            raise ValueError("rating must be between 1 and 5, or 0 when unrated")
        return value

    @property
    def address(self) -> str:
        return self.location.address

    @property
    def emergency(self) -> bool:
        return self.services.emergency

    @property
    def twenty_four_seven(self) -> bool:
        return self.operating_hours.twenty_four_seven

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
