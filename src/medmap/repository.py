from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from medmap.collection import EMPTY_COLLECTION, FacilityCollection
from medmap.errors import DataUnavailable, NotFound
from medmap.models import Facility

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RejectedRecord:
    position: int
    reason: str


@dataclass(frozen=True)
class QualityResult:
    collection: FacilityCollection
    rejected_count: int
    reject_ratio: float
    rejected_samples: list[RejectedRecord]


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first['msg']}" if location else first["msg"]


class FacilityQualityGate:
    def __init__(self, max_reject_ratio: float = 0.2, reject_sample_size: int = 5) -> None:
        if max_reject_ratio < 0 or max_reject_ratio > 1:
            raise ValueError("max_reject_ratio must be between 0 and 1")
        if reject_sample_size < 0:
            raise ValueError("reject_sample_size must be >= 0")
        self._max_reject_ratio = max_reject_ratio
        self._reject_sample_size = reject_sample_size

    def filter_or_raise(self, payloads: list[Any]) -> QualityResult:
        if not payloads:
            return QualityResult(collection=EMPTY_COLLECTION, rejected_count=0, reject_ratio=0.0, rejected_samples=[])

        accepted: list[Facility] = []
        rejected_samples: list[RejectedRecord] = []
        for position, payload in enumerate(payloads):
            try:
                accepted.append(Facility.model_validate(payload))
            except ValidationError as exc:
                if len(rejected_samples) < self._reject_sample_size:
                    rejected_samples.append(RejectedRecord(position=position, reason=_describe(exc)))
        rejected = len(payloads) - len(accepted)
        reject_ratio = rejected / len(payloads)
        if reject_ratio > self._max_reject_ratio:
            sample_summary = ", ".join(f"#{s.position}:{s.reason}" for s in rejected_samples)
            raise DataUnavailable(
                f"quality threshold exceeded: rejected={rejected}, total={len(payloads)}, samples={sample_summary}"
            )
        try:
            collection = FacilityCollection(accepted)
        except ValueError as exc:
            raise DataUnavailable(str(exc)) from exc
        return QualityResult(
            collection=collection,
            rejected_count=rejected,
            reject_ratio=reject_ratio,
            rejected_samples=rejected_samples,
        )


def load_facilities(source: str | Path, quality_gate: FacilityQualityGate | None = None) -> FacilityCollection:
    """Parse the whole data file into a collection.

    Raises DataUnavailable when the file is missing, unreadable, not a JSON
    array, holds duplicate ids, or rejects more records than the quality
    gate allows. Any other failure while validating is reported as
    DataUnavailable too. Individually invalid records below the threshold
    are dropped and logged.
    """
    path = Path(source)
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DataUnavailable(f"cannot read facility data {path}: {exc}") from exc
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise DataUnavailable(f"facility data {path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise DataUnavailable(f"facility data {path} must be a JSON array")

    try:
        result = (quality_gate or FacilityQualityGate()).filter_or_raise(payload)
    except DataUnavailable:
        raise
    except Exception as exc:
        raise DataUnavailable(f"facility data {path} could not be validated: {exc!r}") from exc
    if result.rejected_count:
        logger.warning(
            "facility_records_rejected",
            extra={
                "component": "repository",
                "rejected_count": result.rejected_count,
                "reject_ratio": result.reject_ratio,
                "samples": ", ".join(f"#{s.position}:{s.reason}" for s in result.rejected_samples),
            },
        )
    logger.info(
        "facility_data_loaded",
        extra={"component": "repository", "source": str(path), "facility_count": len(result.collection)},
    )
    return result.collection


class FacilityRepository:
    def __init__(
        self,
        collection: FacilityCollection | None = None,
        *,
        source: str | Path | None = None,
        quality_gate: FacilityQualityGate | None = None,
        load_error: str | None = None,
    ) -> None:
        self._collection = collection if collection is not None else EMPTY_COLLECTION
        self._source = Path(source) if source is not None else None
        self._quality_gate = quality_gate
        self._load_error = load_error

    @classmethod
    def from_source(
        cls,
        source: str | Path,
        quality_gate: FacilityQualityGate | None = None,
    ) -> FacilityRepository:
        try:
            collection = load_facilities(source, quality_gate)
        except DataUnavailable as exc:
            logger.error(
                "facility_data_unavailable",
                extra={"component": "repository", "source": str(source), "error": str(exc)},
            )
            return cls(EMPTY_COLLECTION, source=source, quality_gate=quality_gate, load_error=str(exc))
        return cls(collection, source=source, quality_gate=quality_gate)

    @property
    def source(self) -> Path | None:
        return self._source

    @property
    def load_error(self) -> str | None:
        return self._load_error

    def all(self) -> FacilityCollection:
        return self._collection

    def by_id(self, facility_id: int) -> Facility:
        item = self._collection.get(facility_id)
        if item is None:
            raise NotFound(facility_id)
        return item

    def reload(self) -> FacilityCollection:
        # On failure the current snapshot stays in place.
        if self._source is None:
            raise DataUnavailable("repository has no data source to reload")
        collection = load_facilities(self._source, self._quality_gate)
        self._collection = collection
        self._load_error = None
        logger.info(
            "facility_data_reloaded",
            extra={"component": "repository", "source": str(self._source), "facility_count": len(collection)},
        )
        return collection
