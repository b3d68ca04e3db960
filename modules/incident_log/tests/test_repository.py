from __future__ import annotations

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[3]))

import pytest

from modules.incident_log import repository
from modules.incident_log.exceptions import MalformedRecord
from modules.incident_log.models import Incident


def test_format_line_matches_store_layout():
    incident = Incident(id=1, area="Main St", incident_type="pothole", time="08:15")
    assert repository.format_line(incident) == "1|Main St|pothole|08:15\n"


def test_parse_line_reads_fields():
    incident = repository.parse_line("7|Oak Ave|broken light|23:05\n")
    assert incident.id == 7
    assert incident.area == "Oak Ave"
    assert incident.incident_type == "broken light"
    assert incident.time == "23:05"


@pytest.mark.parametrize(
    "line",
    [
        "1|Main St|pothole",
        "1|Main St|pothole|08:15|extra",
        "x|Main St|pothole|08:15",
        "0|Main St|pothole|08:15",
        "-3|Main St|pothole|08:15",
        "2||pothole|08:15",
        "2|Main St|pothole|24:00",
        "1_0|Main St|pothole|08:15",
        "+3|Main St|pothole|08:15",
        " 7|Main St|pothole|08:15",
        "\u0661|Main St|pothole|08:15",
    ],
)
def test_parse_line_rejects_malformed(line):
    with pytest.raises(MalformedRecord):
        repository.parse_line(line)


def test_missing_file_loads_empty(tmp_path):
    outcome = repository.load_incidents(tmp_path / "incidents.txt", capacity=100)
    assert outcome.incidents == []
    assert outcome.skipped == 0


def test_malformed_line_is_skipped_and_logged(tmp_path, caplog):
    path = tmp_path / "incidents.txt"
    path.write_text("1|Main St|pothole|08:15\n2|Oak Ave|08:30\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="modules.incident_log.repository"):
        outcome = repository.load_incidents(path, capacity=100)
    assert [i.id for i in outcome.incidents] == [1]
    assert outcome.skipped == 1
    assert "line 2" in caplog.text


def test_blank_lines_are_ignored(tmp_path):
    path = tmp_path / "incidents.txt"
    path.write_text("\n1|Main St|pothole|08:15\n\n", encoding="utf-8")
    outcome = repository.load_incidents(path, capacity=100)
    assert len(outcome.incidents) == 1
    assert outcome.skipped == 0


def test_duplicate_ids_keep_first(tmp_path):
    path = tmp_path / "incidents.txt"
    path.write_text("3|Main St|pothole|08:15\n3|Oak Ave|flood|09:00\n", encoding="utf-8")
    outcome = repository.load_incidents(path, capacity=100)
    assert [i.area for i in outcome.incidents] == ["Main St"]
    assert outcome.skipped == 1


def test_load_stops_at_capacity(tmp_path):
    path = tmp_path / "incidents.txt"
    path.write_text(
        "".join(f"{n}|Area {n}|type|10:00\n" for n in range(1, 6)),
        encoding="utf-8",
    )
    outcome = repository.load_incidents(path, capacity=3)
    assert [i.id for i in outcome.incidents] == [1, 2, 3]
    assert outcome.truncated is True


def test_append_creates_parent_directory(tmp_path):
    path = tmp_path / "nested" / "incidents.txt"
    repository.append_incident(path, Incident(id=1, area="Main St", incident_type="pothole", time="08:15"))
    repository.append_incident(path, Incident(id=2, area="Oak Ave", incident_type="flood", time="09:00"))
    assert path.read_text(encoding="utf-8") == "1|Main St|pothole|08:15\n2|Oak Ave|flood|09:00\n"
