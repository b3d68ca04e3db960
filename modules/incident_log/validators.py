"""Input validation helpers for the incident log module.

The presentation layer calls :func:`validate_text` and :func:`validate_time`
on raw keystrokes and re-prompts until they succeed. The store runs the same
checks through :class:`IncidentCreate` before anything is recorded.
"""
from __future__ import annotations

import re
from typing import List

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import IncidentValidationError

MAX_FIELD_LENGTH = 49
FIELD_DELIMITER = "|"

_FORBIDDEN_CHARS = (FIELD_DELIMITER, "\r", "\n")
_TIME_RE = re.compile(r"(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2})")


def validate_text(raw: str, label: str = "Input", max_length: int = MAX_FIELD_LENGTH) -> str:
    """Return ``raw`` trimmed, or raise :class:`IncidentValidationError`."""
    if raw is None:
        raise IncidentValidationError(f"{label} cannot be empty.")
    value = str(raw).strip()
    if not value:
        raise IncidentValidationError(f"{label} cannot be empty.")
    if len(value) > max_length:
        raise IncidentValidationError(f"{label} too long (max {max_length} characters).")
    for char in _FORBIDDEN_CHARS:
        if char in value:
            shown = "|" if char == FIELD_DELIMITER else "line breaks"
            raise IncidentValidationError(f"{label} may not contain {shown}.")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise IncidentValidationError(f"{label} contains characters that cannot be stored.") from None
    return value


def is_valid_time(raw: str) -> bool:
    """Return ``True`` when ``raw`` is a 24-hour ``HH:MM`` clock time."""
    if not isinstance(raw, str):
        return False
    match = _TIME_RE.fullmatch(raw)
    if match is None:
        return False
    hour = int(match.group("hour"))
    minute = int(match.group("minute"))
    return 0 <= hour <= 23 and 0 <= minute <= 59


def validate_time(raw: str) -> str:
    value = (raw or "").strip()
    if not value:
        raise IncidentValidationError("Time cannot be empty.")
    if not is_valid_time(value):
        raise IncidentValidationError(
            "Invalid time format. Please use HH:MM (24-hour clock). Example: 14:30"
        )
    return value


class IncidentCreate(BaseModel):
    """Validated field bundle for a new incident."""

    model_config = ConfigDict(frozen=True)

    area: str
    incident_type: str
    time: str

    @field_validator("area")
    @classmethod
    def valid_area(cls, value: str) -> str:
        return validate_text(value, label="Area")

    @field_validator("incident_type")
    @classmethod
    def valid_type(cls, value: str) -> str:
        return validate_text(value, label="Incident type")

    @field_validator("time")
    @classmethod
    def valid_time(cls, value: str) -> str:
        return validate_time(value)


def validate_incident(area: str, incident_type: str, time: str) -> IncidentCreate:
    """Validate all three user-supplied fields at once."""
    try:
        return IncidentCreate(area=area, incident_type=incident_type, time=time)
    except ValidationError as exc:
        errors: List[str] = []
        for err in exc.errors():
            cause = (err.get("ctx") or {}).get("error")
            if isinstance(cause, IncidentValidationError):
                errors.append(str(cause))
            else:
                field = ".".join(str(part) for part in err.get("loc", ()))
                errors.append(f"{field}: {err.get('msg')}")
        raise IncidentValidationError("; ".join(errors)) from exc


__all__ = [
    "MAX_FIELD_LENGTH",
    "FIELD_DELIMITER",
    "IncidentCreate",
    "is_valid_time",
    "validate_incident",
    "validate_text",
    "validate_time",
]
