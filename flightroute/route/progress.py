# flightroute/route/progress.py
"""
Flight plan progress for the user aircraft: distances and times to the
destination, top of descent and next waypoint, cross track and vertical path
deviation. Values only, presentation is left to the caller.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..geo import Pos, normalize_course
from .constants import RouteConstants
from .core import Route
from .leg import RouteLeg
from ..procedure import procedure_leg_type_text

logger = logging.getLogger(__name__)

_TURN_TEXTS = {"L": "Turn left", "R": "Turn right", "B": "Turn left or right"}


@dataclass
class AircraftSample:
    position: Pos
    course: float
    ground_speed_kts: float = 0.0


@dataclass
class FlightProgress:
    has_active_leg: bool = False

    dist_to_dest_nm: Optional[float] = None
    # Destination is the end of the missed approach while flying it
    to_end_of_missed: bool = False
    time_to_dest_hours: Optional[float] = None

    tod_from_dest_nm: Optional[float] = None
    to_tod_nm: Optional[float] = None
    time_to_tod_hours: Optional[float] = None

    next_ident: str = ""
    next_section: str = ""
    next_leg_type: str = ""
    instructions: List[str] = field(default_factory=list)
    restrictions: List[str] = field(default_factory=list)
    related_navaid: str = ""

    next_distance_nm: Optional[float] = None
    next_course_mag: Optional[float] = None
    time_to_next_hours: Optional[float] = None
    leg_course_mag: Optional[float] = None

    cross_track_nm: Optional[float] = None
    cross_track_side: str = ""
    vertical_deviation_ft: Optional[float] = None
    vertical_side: str = ""


def _hours(distance_nm: float, aircraft: AircraftSample, min_speed_kts: float) -> Optional[float]:
    if aircraft.ground_speed_kts > min_speed_kts:
        return distance_nm / aircraft.ground_speed_kts
    return None


def _section(leg: RouteLeg) -> str:
    proc = leg.procedure_leg
    if proc is None:
        return ""
    if proc.is_approach():
        return "Approach"
    if proc.is_transition():
        return "Transition"
    if proc.is_missed():
        return "Missed Approach"
    return ""


def _next_waypoint(progress: FlightProgress, leg: RouteLeg):
    progress.next_ident = leg.ident
    progress.next_section = _section(leg)

    proc = leg.procedure_leg
    if proc is None:
        return

    progress.next_leg_type = procedure_leg_type_text(proc.leg_type)
    if proc.flyover:
        progress.instructions.append("Fly over")
    if proc.turn_direction in _TURN_TEXTS:
        progress.instructions.append(_TURN_TEXTS[proc.turn_direction])

    if proc.rec_fix_ident:
        if proc.rho > 0.0:
            progress.related_navaid = f"{proc.rec_fix_ident}, {proc.rho:.1f} nm, {proc.theta:.0f}°M"
        else:
            progress.related_navaid = proc.rec_fix_ident

    if proc.alt_restriction.is_valid():
        progress.restrictions.append(proc.alt_restriction.text())
    if proc.speed_restriction.is_valid():
        progress.restrictions.append(proc.speed_restriction.text())


def compute_progress(route: Route, aircraft: AircraftSample) -> Optional[FlightProgress]:
    """
    Progress of the aircraft along the route. The route's active leg must
    already be updated with the aircraft position. Returns None for an
    invalid aircraft position.
    """
    if aircraft.position is None or not aircraft.position.is_valid():
        return None

    progress = FlightProgress()
    if route.is_empty():
        return progress

    corrected_index, corrected = route.active_leg_index_corrected()
    distances = route.route_distances()
    if corrected_index is None or distances is None:
        return progress

    min_speed = route.config.min_ground_speed_kts
    progress.has_active_leg = True
    progress.dist_to_dest_nm = distances.dist_to_dest
    progress.to_end_of_missed = route.is_active_missed()
    progress.time_to_dest_hours = _hours(distances.dist_to_dest, aircraft, min_speed)

    to_tod = None
    if len(route) > 1:
        progress.tod_from_dest_nm = route.top_of_descent_from_destination()
        to_tod = route.top_of_descent_from_start() - distances.dist_from_start
        if to_tod > 0.0:
            progress.to_tod_nm = to_tod
            progress.time_to_tod_hours = _hours(to_tod, aircraft, min_speed)

    # Ident and procedure data from the corrected leg, course and distance from the active one
    corrected_leg = route[corrected_index]
    leg = route[route.active_leg_index] if corrected else corrected_leg
    _next_waypoint(progress, corrected_leg)

    progress.next_distance_nm = distances.next_leg_distance
    progress.time_to_next_hours = _hours(distances.next_leg_distance, aircraft, min_speed)
    if (leg.is_route() or not leg.is_circular()) and leg.position.is_valid():
        course = aircraft.position.course_to(leg.position)
        progress.next_course_mag = normalize_course(course - (leg.magvar or 0.0))

    if len(route) > 1:
        if leg.is_route() or not leg.is_circular():
            progress.leg_course_mag = leg.course_to_mag

        if not leg.is_hold() and distances.cross_track is not None:
            progress.cross_track_nm = abs(distances.cross_track)
            if distances.cross_track >= RouteConstants.CROSS_TRACK_SIDE_LIMIT_NM:
                progress.cross_track_side = "right"
            elif distances.cross_track <= -RouteConstants.CROSS_TRACK_SIDE_LIMIT_NM:
                progress.cross_track_side = "left"

    if to_tod is not None and to_tod <= 0.0:
        vertical_alt = route.descent_vertical_altitude(distances.dist_to_dest)
        if vertical_alt is not None:
            diff = aircraft.position.alt_ft - vertical_alt
            progress.vertical_deviation_ft = diff
            if diff >= RouteConstants.VERTICAL_DEVIATION_LIMIT_FT:
                progress.vertical_side = "above"
            elif diff <= -RouteConstants.VERTICAL_DEVIATION_LIMIT_FT:
                progress.vertical_side = "below"

    logger.debug(f"Progress: {progress.dist_to_dest_nm:.1f} nm to destination, next {progress.next_ident}.")
    return progress
