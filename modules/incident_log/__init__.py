"""Incident log module: flat-file incident store with area/type filters."""

from __future__ import annotations

from .exceptions import (
    CapacityExceeded,
    IncidentLogError,
    IncidentValidationError,
    MalformedRecord,
    PersistenceWriteError,
)
from .models import Incident
from .services import DEFAULT_CAPACITY, IncidentStore
from .validators import is_valid_time, validate_text, validate_time

__all__ = [
    "CapacityExceeded",
    "DEFAULT_CAPACITY",
    "Incident",
    "IncidentLogError",
    "IncidentStore",
    "IncidentValidationError",
    "MalformedRecord",
    "PersistenceWriteError",
    "is_valid_time",
    "validate_text",
    "validate_time",
]
