"""Flat-file persistence helpers for the incident log module.

The store is a UTF-8 text file holding one incident per line, with the fields
joined by ``|`` in the fixed order ``id|area|type|time``. There is no header
and no escaping; the validators keep ``|`` and line breaks out of field values.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Set

from .exceptions import IncidentValidationError, MalformedRecord
from .models import Incident
from .validators import FIELD_DELIMITER, validate_incident

logger = logging.getLogger(__name__)

FIELD_COUNT = 4
_ID_RE = re.compile(r"[0-9]+")


@dataclass(slots=True)
class LoadOutcome:
    incidents: List[Incident] = field(default_factory=list)
    skipped: int = 0
    truncated: bool = False


def format_line(incident: Incident) -> str:
    """Serialise ``incident`` as a single newline-terminated store line."""
    return FIELD_DELIMITER.join(
        [str(incident.id), incident.area, incident.incident_type, incident.time]
    ) + "\n"


def parse_line(line: str) -> Incident:
    """Parse one store line, raising :class:`MalformedRecord` on any defect."""
    text = line.rstrip("\r\n")
    parts = text.split(FIELD_DELIMITER)
    if len(parts) != FIELD_COUNT:
        raise MalformedRecord(line, f"expected {FIELD_COUNT} fields, found {len(parts)}")
    raw_id, area, incident_type, time = parts
    if _ID_RE.fullmatch(raw_id) is None:
        raise MalformedRecord(line, f"unparseable id {raw_id!r}")
    incident_id = int(raw_id)
    if incident_id < 1:
        raise MalformedRecord(line, f"id must be positive, got {incident_id}")
    try:
        fields = validate_incident(area, incident_type, time)
    except IncidentValidationError as exc:
        raise MalformedRecord(line, str(exc)) from exc
    return Incident(
        id=incident_id,
        area=fields.area,
        incident_type=fields.incident_type,
        time=fields.time,
    )


def load_incidents(path: Path, capacity: int) -> LoadOutcome:
    """Read every well-formed incident from ``path`` in file order.

    A missing file yields an empty outcome. Malformed lines and lines that
    repeat an id already seen are logged and skipped. Reading stops once
    ``capacity`` incidents have been collected.
    """
    outcome = LoadOutcome()
    seen: Set[int] = set()
    try:
        fh = open(path, "r", encoding="utf-8", errors="replace")
    except FileNotFoundError:
        logger.debug("No incident store at %s; starting empty", path)
        return outcome
    with fh:
        for lineno, line in enumerate(fh, start=1):
            if not line.strip():
                continue
            if len(outcome.incidents) >= capacity:
                logger.warning(
                    "Capacity of %d reached at line %d of %s; remaining lines not loaded",
                    capacity,
                    lineno,
                    path,
                )
                outcome.truncated = True
                break
            try:
                incident = parse_line(line)
            except MalformedRecord as exc:
                logger.warning("Skipping malformed line %d in %s: %s", lineno, path, exc.reason)
                outcome.skipped += 1
                continue
            if incident.id in seen:
                logger.warning("Skipping line %d in %s: duplicate id %d", lineno, path, incident.id)
                outcome.skipped += 1
                continue
            seen.add(incident.id)
            outcome.incidents.append(incident)
    logger.debug(
        "Loaded %d incident(s) from %s (%d skipped)",
        len(outcome.incidents),
        path,
        outcome.skipped,
    )
    return outcome


def append_incident(path: Path, incident: Incident) -> None:
    """Append ``incident`` to the end of the store file, creating it if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8", newline="\n") as fh:
        fh.write(format_line(incident))


__all__ = [
    "LoadOutcome",
    "append_incident",
    "format_line",
    "load_incidents",
    "parse_line",
]
