from __future__ import annotations

import pytest

# Settings are read from the environment; keep the developer's shell out of
# the test run.
_ENV_KEYS = (
    "INCIDENT_DATA_DIR",
    "INCIDENT_STORE_FILE",
    "INCIDENT_CAPACITY",
    "INCIDENT_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_incident_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
