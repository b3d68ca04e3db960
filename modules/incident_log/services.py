"""Service layer for the incident log: the in-memory store and its queries."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from utils.app_settings import DEFAULT_CAPACITY

from . import repository
from .exceptions import CapacityExceeded, PersistenceWriteError
from .models import Incident
from .validators import MAX_FIELD_LENGTH, validate_incident

logger = logging.getLogger(__name__)


def _fold(value: str) -> str:
    return value[:MAX_FIELD_LENGTH].lower()


def contains_ci(haystack: str, needle: str) -> bool:
    """Case-insensitive substring test over the bounded field length."""
    return _fold(needle) in _fold(haystack)


class IncidentStore:
    """Owns the working set of incidents and mirrors new ones to the store file."""

    def __init__(self, path: Path | str, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.path = Path(path)
        self.capacity = capacity
        self.skipped = 0
        self._incidents: List[Incident] = []

    @property
    def count(self) -> int:
        return len(self._incidents)

    @property
    def is_full(self) -> bool:
        return self.count >= self.capacity

    # -- Persistence --------------------------------------------------------
    def load(self) -> Tuple[List[Incident], int]:
        """Replace the working set with the contents of the store file."""
        outcome = repository.load_incidents(self.path, self.capacity)
        self._incidents = list(outcome.incidents)
        self.skipped = outcome.skipped
        if outcome.skipped:
            logger.warning("%d malformed line(s) skipped while loading %s", outcome.skipped, self.path)
        logger.info("Loaded %d incident(s) from %s", self.count, self.path)
        return list(self._incidents), self.count

    def next_id(self) -> int:
        return max((incident.id for incident in self._incidents), default=0) + 1

    def append(self, area: str, incident_type: str, time: str) -> Incident:
        """Record a new incident and append it to the store file.

        Raises :class:`CapacityExceeded` or ``IncidentValidationError`` without
        touching any state. When the file write fails the incident stays in
        memory and :class:`PersistenceWriteError` is raised carrying it.
        """
        if self.is_full:
            raise CapacityExceeded(self.capacity)
        fields = validate_incident(area, incident_type, time)
        incident = Incident(
            id=self.next_id(),
            area=fields.area,
            incident_type=fields.incident_type,
            time=fields.time,
        )
        self._incidents.append(incident)
        try:
            repository.append_incident(self.path, incident)
        except OSError as exc:
            logger.warning("Unable to write incident %d to %s: %s", incident.id, self.path, exc)
            raise PersistenceWriteError(incident, exc) from exc
        logger.info("Recorded incident %d", incident.id)
        return incident

    # -- Queries ------------------------------------------------------------
    def list_all(self) -> List[Incident]:
        return list(self._incidents)

    def _filter(self, needle: Optional[str], attr: Callable[[Incident], str]) -> List[Incident]:
        needle = needle or ""
        return [incident for incident in self._incidents if contains_ci(attr(incident), needle)]

    def filter_by_area(self, needle: Optional[str]) -> List[Incident]:
        return self._filter(needle, lambda incident: incident.area)

    def filter_by_type(self, needle: Optional[str]) -> List[Incident]:
        return self._filter(needle, lambda incident: incident.incident_type)


__all__ = ["DEFAULT_CAPACITY", "IncidentStore", "contains_ci"]
