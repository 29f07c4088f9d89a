# flightroute/flightplan/data_models.py
"""
Flight plan entries. The route keeps one entry per leg in the same order
(parallel list); procedure entries are marked no_save.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..geo import Pos
from .constants import FlightplanEntryType, USER_WAYPOINT_PATTERN

_USER_WAYPOINT_RE = re.compile(USER_WAYPOINT_PATTERN)


@dataclass
class FlightplanEntry:
    ident: str
    entry_type: FlightplanEntryType = FlightplanEntryType.UNKNOWN
    position: Optional[Pos] = None
    region: str = ""
    name: str = ""
    magvar: Optional[float] = None
    airway: str = ""
    no_save: bool = False

    def is_airport(self) -> bool:
        return self.entry_type == FlightplanEntryType.AIRPORT


@dataclass
class Flightplan:
    """
    Ordered flight plan entries with cruising altitude and the airports.
    properties holds free-form string values, among them the names of
    attached procedures.
    """
    entries: List[FlightplanEntry] = field(default_factory=list)
    cruising_altitude_ft: float = 0.0
    departure_ident: str = ""
    destination_ident: str = ""
    properties: Dict[str, str] = field(default_factory=dict)

    def __len__(self):
        return len(self.entries)

    def __getitem__(self, index) -> FlightplanEntry:
        return self.entries[index]

    def __iter__(self):
        return iter(self.entries)

    def is_empty(self) -> bool:
        return not self.entries

    def insert(self, index: int, entry: FlightplanEntry):
        self.entries.insert(index, entry)

    def remove(self, index: int) -> FlightplanEntry:
        return self.entries.pop(index)

    def next_user_waypoint_number(self) -> int:
        """Number for the next user waypoint ident, one above the highest WP<n> in use."""
        highest = 0
        for entry in self.entries:
            if entry.entry_type != FlightplanEntryType.USER:
                continue
            match = _USER_WAYPOINT_RE.match(entry.ident)
            if match:
                highest = max(highest, int(match.group(1)))
        return highest + 1
