from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    SERVICE_NAME: str = "medmap"
    FACILITY_DATA_FILE: str = "data/facilities.json"
    FACILITY_MAX_REJECT_RATIO: float = Field(default=0.2, ge=0, le=1)
    FACILITY_REJECT_SAMPLE_SIZE: int = Field(default=5, ge=0)


def load_settings(service_name: str = "medmap") -> ServiceSettings:
    return ServiceSettings(SERVICE_NAME=service_name)
