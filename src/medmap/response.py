from __future__ import annotations

from typing import Any

from medmap.errors import ApiError


def success_response(data: Any, meta: dict[str, Any] | None = None) -> dict[str, Any]:
    return {"success": True, "data": data, "meta": meta or {}}


def error_response(error: ApiError, trace_id: str = "") -> dict[str, Any]:
    body: dict[str, Any] = {"code": error.code, "message": error.message}
    if trace_id:
        body["traceId"] = trace_id
    return {"success": False, "error": body}
