#!/usr/bin/env python3
"""Terminal entry point for the incident reporting system.

Usage:
  python main.py [--data-dir DIR] [--capacity N] [--log-level LEVEL]
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from modules.incident_log.console import IncidentConsole
from modules.incident_log.services import IncidentStore
from utils.app_settings import load_settings

logger = logging.getLogger(__name__)


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {raw!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Report and browse local incidents")
    ap.add_argument("--data-dir", help="Directory holding incidents.txt and app.ini")
    ap.add_argument("--capacity", type=_positive_int, help="Maximum number of incidents to hold")
    ap.add_argument(
        "--log-level",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity",
    )
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(args.data_dir)
    capacity = args.capacity or settings.capacity

    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    store = IncidentStore(settings.store_path, capacity=capacity)
    store.load()
    logger.debug("Using store %s (capacity %d)", store.path, store.capacity)

    interactive = sys.stdout.isatty()
    console = IncidentConsole(store, color=interactive, clear_screen=interactive)
    return console.run()


if __name__ == "__main__":
    sys.exit(main())
