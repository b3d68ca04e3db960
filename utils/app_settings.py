"""Application settings for the incident log.

Values come from, in increasing priority: built-in defaults, the
``[incident_log]`` section of ``app.ini`` inside the data directory, and the
``INCIDENT_*`` environment variables. The data directory itself is taken from
``INCIDENT_DATA_DIR`` and defaults to ``data``.
"""

from __future__ import annotations

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = "data"
DEFAULT_STORE_FILE = "incidents.txt"
DEFAULT_CAPACITY = 100
DEFAULT_LOG_LEVEL = "WARNING"
INI_SECTION = "incident_log"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True, slots=True)
class AppSettings:
    data_dir: Path
    store_file: str = DEFAULT_STORE_FILE
    capacity: int = DEFAULT_CAPACITY
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def store_path(self) -> Path:
        return self.data_dir / self.store_file


def _read_ini(ini_path: Path) -> dict[str, str]:
    """Read the ``[incident_log]`` section of ``ini_path`` if present."""
    if not ini_path.exists():
        return {}
    cp = configparser.ConfigParser()
    try:
        cp.read(ini_path, encoding="utf-8")
    except configparser.Error as exc:
        logger.warning("Unable to parse %s; using defaults: %s", ini_path, exc)
        return {}
    if not cp.has_section(INI_SECTION):
        return {}
    return {key: value.strip() for key, value in cp.items(INI_SECTION)}


def _coerce_capacity(value: Optional[str], fallback: int) -> int:
    if value is None or value == "":
        return fallback
    try:
        num = int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid capacity %r; using %d", value, fallback)
        return fallback
    if num < 1:
        logger.warning("Capacity must be positive, got %d; using %d", num, fallback)
        return fallback
    return num


def _coerce_log_level(value: Optional[str], fallback: str) -> str:
    if not value:
        return fallback
    level = value.strip().upper()
    if level not in _LOG_LEVELS:
        logger.warning("Unknown log level %r; using %s", value, fallback)
        return fallback
    return level


def load_settings(
    data_dir: Path | str | None = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AppSettings:
    """Resolve the effective settings for this process."""
    env = os.environ if environ is None else environ
    base = Path(data_dir) if data_dir is not None else Path(env.get("INCIDENT_DATA_DIR", DEFAULT_DATA_DIR))
    ini = _read_ini(base / "app.ini")

    store_file = env.get("INCIDENT_STORE_FILE") or ini.get("store_file") or DEFAULT_STORE_FILE
    capacity = _coerce_capacity(ini.get("capacity"), DEFAULT_CAPACITY)
    capacity = _coerce_capacity(env.get("INCIDENT_CAPACITY"), capacity)
    log_level = _coerce_log_level(ini.get("log_level"), DEFAULT_LOG_LEVEL)
    log_level = _coerce_log_level(env.get("INCIDENT_LOG_LEVEL"), log_level)

    return AppSettings(
        data_dir=base,
        store_file=store_file,
        capacity=capacity,
        log_level=log_level,
    )


__all__ = ["AppSettings", "load_settings"]
