from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from medmap.errors import ApiError, NotFound
from medmap.observability import get_trace_id

T = TypeVar("T")
logger = logging.getLogger(__name__)


def run_query(operation: Callable[[], T]) -> T:
    """Run a service call, turning unexpected failures into INTERNAL_ERROR."""
    try:
        return operation()
    except (ApiError, NotFound):
        raise
    except Exception as exc:
        logger.exception("api_unhandled_error", extra={"component": "api", "trace_id": get_trace_id()})
        raise ApiError.internal() from exc
