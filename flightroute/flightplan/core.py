# flightroute/flightplan/core.py
"""
Building flight plan entries for procedure legs and keeping procedure names
in the flight plan properties.
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from ..procedure import ProcedureLeg, ProcedureLegs, ProcedureTypes
from .constants import FlightplanEntryType, PropertyKeys
from .data_models import FlightplanEntry
from .exceptions import EntryBuildError

logger = logging.getLogger(__name__)


class FlightplanEntryBuilder(ABC):
    """Creates the flight plan entry that goes in parallel with a procedure leg."""

    @abstractmethod
    def build_entry(self, procedure_leg: ProcedureLeg) -> FlightplanEntry:
        pass


class ProcedureEntryBuilder(FlightplanEntryBuilder):
    """
    Default builder. Legs ending at a named fix become waypoint entries, legs
    without a fix (altitude or manual terminations) become user entries named
    after the leg type. All entries are marked no_save.
    """

    def build_entry(self, procedure_leg: ProcedureLeg) -> FlightplanEntry:
        pos = procedure_leg.position
        if pos is None:
            raise EntryBuildError(f"Procedure leg {procedure_leg.leg_type.value} has no position")

        if procedure_leg.fix_ident:
            return FlightplanEntry(ident=procedure_leg.fix_ident,
                                   entry_type=FlightplanEntryType.WAYPOINT,
                                   position=pos,
                                   region=procedure_leg.fix_region,
                                   magvar=procedure_leg.magvar,
                                   no_save=True)

        return FlightplanEntry(ident=procedure_leg.leg_type.value,
                               entry_type=FlightplanEntryType.USER,
                               position=pos,
                               magvar=procedure_leg.magvar,
                               no_save=True)


def clear_procedure_properties(properties: Dict[str, str], types: ProcedureTypes):
    """Removes the names of the procedures selected by the types mask."""
    keys = []
    if types & ProcedureTypes.SID:
        keys.extend(PropertyKeys.DEPARTURE_KEYS)
    if types & ProcedureTypes.STAR:
        keys.extend(PropertyKeys.STAR_KEYS)
    if types & ProcedureTypes.APPROACH:
        keys.extend(PropertyKeys.APPROACH_KEYS)
    if types & ProcedureTypes.TRANSITION:
        keys.extend(PropertyKeys.TRANSITION_KEYS)

    for key in keys:
        properties.pop(key, None)


def extract_procedure_properties(properties: Dict[str, str],
                                 arrival: Optional[ProcedureLegs],
                                 star: Optional[ProcedureLegs],
                                 departure: Optional[ProcedureLegs]):
    """Stores the names of all non-empty procedure sets in properties."""
    if departure is not None and not departure.is_empty():
        properties[PropertyKeys.SID] = departure.ident
        if departure.runway:
            properties[PropertyKeys.SID_RUNWAY] = departure.runway
        if departure.has_transition():
            properties[PropertyKeys.SID_TRANSITION] = departure.transition_ident

    if star is not None and not star.is_empty():
        properties[PropertyKeys.STAR] = star.ident
        if star.has_transition():
            properties[PropertyKeys.STAR_TRANSITION] = star.transition_ident

    if arrival is not None and not arrival.is_empty():
        properties[PropertyKeys.APPROACH] = arrival.ident
        if arrival.runway:
            properties[PropertyKeys.APPROACH_RUNWAY] = arrival.runway
        if arrival.has_transition():
            properties[PropertyKeys.TRANSITION] = arrival.transition_ident

    logger.debug(f"Procedure properties: {properties}")
