"""Terminal menus for reporting and browsing incidents.

Only presentation lives here; every read and write goes through
:class:`~modules.incident_log.services.IncidentStore`.
"""
from __future__ import annotations

import logging
import sys
from typing import Callable, Iterable, Optional, TextIO

from .exceptions import CapacityExceeded, IncidentValidationError, PersistenceWriteError
from .models import Incident
from .services import IncidentStore
from .validators import validate_text, validate_time

logger = logging.getLogger(__name__)

RED = "\x1b[31m"
GREEN = "\x1b[32m"
YELLOW = "\x1b[33m"
BLUE = "\x1b[34m"
CYAN = "\x1b[36m"
RESET = "\x1b[0m"

_CLEAR = "\x1b[2J\x1b[H"
_BANNER = "=" * 46
_RULE = "-" * 81


def _plural(count: int) -> str:
    return "" if count == 1 else "s"


class IncidentConsole:
    def __init__(
        self,
        store: IncidentStore,
        *,
        input_fn: Optional[Callable[[str], str]] = None,
        output: Optional[TextIO] = None,
        color: bool = True,
        clear_screen: bool = True,
    ) -> None:
        self.store = store
        self._input = input_fn or input
        self._out = output or sys.stdout
        self._color = color
        self._clear_screen = clear_screen

    # -- Output helpers -----------------------------------------------------
    def _print(self, text: str = "") -> None:
        self._out.write(text + "\n")

    def _paint(self, color: str, text: str) -> str:
        return f"{color}{text}{RESET}" if self._color else text

    def _error(self, text: str) -> None:
        self._print(self._paint(RED, text))

    def _clear(self) -> None:
        if self._clear_screen:
            self._out.write(_CLEAR)

    def _header(self, title: str) -> None:
        self._clear()
        self._print(self._paint(CYAN, _BANNER))
        self._print(self._paint(YELLOW, f"           {title}           "))
        self._print(self._paint(CYAN, _BANNER))
        self._print()

    def _pause(self, prompt: str = "Press Enter to continue...") -> None:
        self._input(prompt)

    # -- Input helpers ------------------------------------------------------
    def _ask_choice(self) -> Optional[int]:
        raw = self._input("Enter your choice: ")
        try:
            return int(raw.strip())
        except ValueError:
            self._print("Invalid input. Please enter a number.")
            self._pause()
            return None

    def _ask_valid(self, prompt: str, validator: Callable[[str], str]) -> str:
        while True:
            raw = self._input(prompt)
            try:
                return validator(raw)
            except IncidentValidationError as exc:
                self._error(f"{exc} Please try again.")

    # -- Rendering ----------------------------------------------------------
    def render(self, incidents: Iterable[Incident]) -> None:
        self._print(f"{'ID':<5} | {'Area':<30} | {'Incident Type':<30} | {'Time Occurred':<20}")
        self._print(_RULE)
        for incident in incidents:
            row = incident.as_dict()
            area = self._paint(GREEN, f"{row['area']:<30}")
            kind = self._paint(RED, f"{row['type']:<30}")
            time = self._paint(BLUE, f"{row['time']:<20}")
            self._print(f"{row['id']:<5} | {area} | {kind} | {time}")

    # -- Actions ------------------------------------------------------------
    def report_incident(self) -> Optional[Incident]:
        if self.store.is_full:
            self._error("Error: Maximum number of incidents reached.")
            return None
        area = self._ask_valid(
            "Enter the area where the incident occurred (e.g., Street name): ",
            lambda raw: validate_text(raw, label="Area"),
        )
        incident_type = self._ask_valid(
            "Enter the type of incident (e.g., pothole, non-functional streetlight): ",
            lambda raw: validate_text(raw, label="Incident type"),
        )
        time = self._ask_valid(
            "Enter the time when the incident occurred (HH:MM format, 24-hour clock): ",
            validate_time,
        )
        try:
            incident = self.store.append(area, incident_type, time)
        except CapacityExceeded:
            self._error("Error: Maximum number of incidents reached.")
            return None
        except PersistenceWriteError as exc:
            self._error("Error: Could not open file for writing.")
            self._print(self._paint(YELLOW, f"Incident kept for this session only with ID: {exc.incident.id}"))
            return exc.incident
        self._print()
        self._print(self._paint(GREEN, f"Incident reported successfully with ID: {incident.id}"))
        return incident

    def show_all(self) -> None:
        incidents = self.store.list_all()
        if not incidents:
            self._print("No incidents have been reported yet.")
            return
        self.render(incidents)

    def _show_filtered(self, prompt: str, label: str, search: Callable[[str], list], empty: str) -> None:
        if self.store.count == 0:
            self._print("No incidents have been reported yet.")
            return
        needle = self._ask_valid(prompt, validate_text)
        self._print()
        self._print(f"{label}: {needle}")
        matches = search(needle)
        self.render(matches)
        if not matches:
            self._print(empty)

    def filter_by_area(self) -> None:
        self._show_filtered(
            "Enter area to filter by: ",
            "Incidents in area containing",
            self.store.filter_by_area,
            "No incidents found in this area.",
        )

    def filter_by_type(self) -> None:
        self._show_filtered(
            "Enter incident type to filter by: ",
            "Incidents of type containing",
            self.store.filter_by_type,
            "No incidents found of this type.",
        )

    # -- Menus --------------------------------------------------------------
    def _view_menu(self) -> None:
        while True:
            self._header("VIEW INCIDENTS")
            count = self.store.count
            self._print(f"1. View all incidents {self._paint(GREEN, f'({count} incident{_plural(count)})')}")
            self._print("2. Filter incidents by area")
            self._print("3. Filter incidents by incident type")
            self._print("4. Back to main menu")
            self._print()
            choice = self._ask_choice()
            if choice is None:
                continue
            if choice == 1:
                self._header("ALL INCIDENTS")
                self.show_all()
            elif choice == 2:
                self._header("FILTER BY AREA")
                self.filter_by_area()
            elif choice == 3:
                self._header("FILTER BY INCIDENT TYPE")
                self.filter_by_type()
            elif choice == 4:
                return
            else:
                self._print("Invalid choice. Please try again.")
                self._pause()
                continue
            self._print()
            self._pause("Press Enter to return to view menu...")

    def run(self) -> int:
        """Drive the main menu until the user exits or input ends."""
        try:
            while True:
                self._header("INCIDENT REPORTING SYSTEM")
                count = self.store.count
                self._print("1. Report a new incident")
                self._print(
                    "2. View incidents "
                    + self._paint(GREEN, f"({count} incident{_plural(count)} reported so far)")
                )
                self._print("3. Exit")
                self._print()
                choice = self._ask_choice()
                if choice is None:
                    continue
                if choice == 1:
                    self._header("REPORT NEW INCIDENT")
                    self.report_incident()
                    self._print()
                    self._pause()
                elif choice == 2:
                    self._view_menu()
                elif choice == 3:
                    break
                else:
                    self._print("Invalid choice. Please try again.")
                    self._pause()
        except (EOFError, KeyboardInterrupt):
            logger.debug("Input closed; leaving console")
            self._print()
        self._clear()
        self._print("Thank you for using the Incident Reporting System!")
        return 0


__all__ = ["IncidentConsole"]
