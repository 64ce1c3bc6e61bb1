from __future__ import annotations


class MedMapError(Exception):
    """Base facility service exception."""


class DataUnavailable(MedMapError):
    """Raised when the facility data source is missing or malformed."""


class NotFound(MedMapError):
    """Raised when a facility id is not present in the collection."""

    def __init__(self, facility_id: int) -> None:
        super().__init__(f"facility {facility_id} not found")
        self.facility_id = facility_id


class InvalidQuery(MedMapError):
    """Raised when query parameters cannot be interpreted."""


class ApiError(MedMapError):
    """Failure rendered to HTTP clients as an error envelope."""

    def __init__(self, code: str, message: str, status_code: int = 500) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code

    @classmethod
    def not_found(cls) -> ApiError:
        return cls("NOT_FOUND", "Facility not found", 404)

    @classmethod
    def internal(cls) -> ApiError:
        return cls("INTERNAL_ERROR", "Internal server error", 500)
