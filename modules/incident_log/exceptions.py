"""Custom exceptions for the incident log module."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .models import Incident


class IncidentLogError(RuntimeError):
    """Base exception for incident log operations."""


class IncidentValidationError(IncidentLogError, ValueError):
    """Raised when a field value does not satisfy its input contract."""


class CapacityExceeded(IncidentLogError):
    """Raised when the store already holds the maximum number of incidents."""

    def __init__(self, capacity: int) -> None:
        super().__init__(f"Maximum number of incidents reached ({capacity})")
        self.capacity = capacity


class PersistenceWriteError(IncidentLogError):
    """Raised when an incident was recorded in memory but not written to disk."""

    def __init__(self, incident: "Incident", cause: Optional[BaseException] = None) -> None:
        super().__init__(f"Could not write incident {incident.id} to the store file")
        self.incident = incident
        self.cause = cause


class MalformedRecord(IncidentLogError):
    """Raised by the line parser when a stored line cannot be read back."""

    def __init__(self, line: str, reason: str) -> None:
        super().__init__(reason)
        self.line = line
        self.reason = reason


__all__ = [
    "IncidentLogError",
    "IncidentValidationError",
    "CapacityExceeded",
    "PersistenceWriteError",
    "MalformedRecord",
]
