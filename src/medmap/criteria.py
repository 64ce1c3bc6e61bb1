from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass

from medmap.errors import InvalidQuery

logger = logging.getLogger(__name__)

ANY_VALUES = frozenset({"", "all", "any"})
TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
FALSE_VALUES = frozenset({"false", "0", "no", "off", ""})
MIN_RATING_RANGE = (0.0, 5.0)


def is_any(value: str | None) -> bool:
    return value is None or value.strip().lower() in ANY_VALUES


@dataclass(frozen=True)
class FilterCriteria:
    """Optional facility predicates, combined with logical AND.

    Category fields left as None (or "any"/"all") do not constrain the
    result, and neither do the two flags when False.
    """

    type: str | None = None
    ownership: str | None = None
    lga: str | None = None
    min_rating: float | None = None
    emergency_only: bool = False
    twenty_four_only: bool = False

    def is_empty(self) -> bool:
        return (
            is_any(self.type)
            and is_any(self.ownership)
            and is_any(self.lga)
            and self.min_rating is None
            and not self.emergency_only
            and not self.twenty_four_only
        )

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        for key, value in (("type", self.type), ("ownership", self.ownership), ("lga", self.lga)):
            if value is not None and not is_any(value):
                params[key] = value
        if self.emergency_only:
            params["emergency"] = "true"
        if self.twenty_four_only:
            params["twentyfour"] = "true"
        if self.min_rating is not None:
            params["minRating"] = repr(self.min_rating)
        return params


def _ignored(param: str, value: str, strict: bool) -> None:
    if strict:
        raise InvalidQuery(f"invalid value for {param}: {value!r}")
    logger.debug("filter_param_ignored", extra={"component": "criteria", "param": param, "value": value})


def _category(params: Mapping[str, str], key: str) -> str | None:
    value = params.get(key)
    if value is None or is_any(value):
        return None
    return value.strip()


def _flag(params: Mapping[str, str], key: str, strict: bool) -> bool:
    value = (params.get(key) or "").strip().lower()
    if value in TRUE_VALUES:
        return True
    if value not in FALSE_VALUES:
        _ignored(key, value, strict)
    return False


def _min_rating(params: Mapping[str, str], strict: bool) -> float | None:
    raw = _category(params, "minRating")
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        _ignored("minRating", raw, strict)
        return None
    low, high = MIN_RATING_RANGE
    if not math.isfinite(value) or not (low <= value <= high):
        _ignored("minRating", raw, strict)
        return None
    return value


def parse_criteria(params: Mapping[str, str], *, strict: bool = False) -> FilterCriteria:
    """Translate loosely-typed query parameters into FilterCriteria.

    By default parsing is permissive: unknown keys, "all"/"any" values,
    unrecognised flags and unparsable or out-of-range ratings are dropped.
    With strict=True the last two raise InvalidQuery instead.
    """
    return FilterCriteria(
        type=_category(params, "type"),
        ownership=_category(params, "ownership"),
        lga=_category(params, "lga"),
        min_rating=_min_rating(params, strict),
        emergency_only=_flag(params, "emergency", strict),
        twenty_four_only=_flag(params, "twentyfour", strict),
    )
