"""Datamodel definitions for the incident log module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True, slots=True, eq=False)
class Incident:
    id: int
    area: str
    incident_type: str
    time: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Incident):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "area": self.area,
            "type": self.incident_type,
            "time": self.time,
        }
