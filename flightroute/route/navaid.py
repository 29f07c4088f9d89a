# flightroute/route/navaid.py
"""
Navaid references of plain route legs. Each kind of navigation object gets
its own type so code that needs to know the kind matches on the type.
"""
from dataclasses import dataclass
from typing import Optional, Union

from ..geo import Pos
from ..flightplan import FlightplanEntry, FlightplanEntryType


@dataclass(frozen=True)
class VorRef:
    ident: str
    position: Pos
    region: str = ""
    name: str = ""
    magvar: Optional[float] = None


@dataclass(frozen=True)
class NdbRef:
    ident: str
    position: Pos
    region: str = ""
    name: str = ""
    magvar: Optional[float] = None


@dataclass(frozen=True)
class WaypointRef:
    ident: str
    position: Pos
    region: str = ""
    magvar: Optional[float] = None


@dataclass(frozen=True)
class AirportRef:
    ident: str
    position: Pos
    name: str = ""
    magvar: Optional[float] = None


@dataclass(frozen=True)
class UserpointRef:
    ident: str
    position: Pos
    magvar: Optional[float] = None


@dataclass(frozen=True)
class UnresolvedRef:
    """Entry that could not be found in the navigation database."""
    ident: str
    position: Pos
    magvar: Optional[float] = None


NavaidRef = Union[VorRef, NdbRef, WaypointRef, AirportRef, UserpointRef, UnresolvedRef]


def navaid_from_entry(entry: FlightplanEntry) -> NavaidRef:
    pos = entry.position if entry.position is not None else Pos(float('nan'), float('nan'))
    kind = entry.entry_type

    if kind == FlightplanEntryType.VOR:
        return VorRef(entry.ident, pos, entry.region, entry.name, entry.magvar)
    if kind == FlightplanEntryType.NDB:
        return NdbRef(entry.ident, pos, entry.region, entry.name, entry.magvar)
    if kind == FlightplanEntryType.WAYPOINT:
        return WaypointRef(entry.ident, pos, entry.region, entry.magvar)
    if kind == FlightplanEntryType.AIRPORT:
        return AirportRef(entry.ident, pos, entry.name, entry.magvar)
    if kind == FlightplanEntryType.USER:
        # User points have no declination of their own
        return UserpointRef(entry.ident, pos)
    return UnresolvedRef(entry.ident, pos)
