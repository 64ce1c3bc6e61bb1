from __future__ import annotations

import pytest
from pydantic import ValidationError

from medmap.config import load_settings


def test_load_settings_reads_env(monkeypatch) -> None:
    monkeypatch.setenv("FACILITY_DATA_FILE", "/srv/medmap/facilities.json")
    monkeypatch.setenv("FACILITY_MAX_REJECT_RATIO", "0.5")
    settings = load_settings("medmap-api")

    assert settings.SERVICE_NAME == "medmap-api"
    assert settings.FACILITY_DATA_FILE == "/srv/medmap/facilities.json"
    assert settings.FACILITY_MAX_REJECT_RATIO == 0.5
    assert settings.FACILITY_REJECT_SAMPLE_SIZE == 5


def test_load_settings_rejects_invalid_ratio(monkeypatch) -> None:
    monkeypatch.setenv("FACILITY_MAX_REJECT_RATIO", "2")
    with pytest.raises(ValidationError):
        load_settings()
