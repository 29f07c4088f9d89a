# flightroute/flightplan/constants.py
"""
Flight plan entry types and the property keys used to keep attached
procedure names with a flight plan.
"""
from enum import Enum


class FlightplanEntryType(Enum):
    AIRPORT = "AIRPORT"
    VOR = "VOR"
    NDB = "NDB"
    WAYPOINT = "WAYPOINT"
    USER = "USER"
    UNKNOWN = "UNKNOWN"


class PropertyKeys:
    """Keys of flight plan properties that name attached procedures."""
    SID = "sid"
    SID_RUNWAY = "sidrunway"
    SID_TRANSITION = "sidtransition"
    STAR = "star"
    STAR_TRANSITION = "startransition"
    APPROACH = "approach"
    APPROACH_RUNWAY = "approachrunway"
    TRANSITION = "transition"

    DEPARTURE_KEYS = (SID, SID_RUNWAY, SID_TRANSITION)
    STAR_KEYS = (STAR, STAR_TRANSITION)
    APPROACH_KEYS = (APPROACH, APPROACH_RUNWAY)
    TRANSITION_KEYS = (TRANSITION,)


# User waypoint idents created by the planner look like WP1, WP2, ...
USER_WAYPOINT_PATTERN = r"^WP([0-9]+)$"
