# examples/E010_route_tracking.py
"""
[SIMULATION]
Route tracking along a short flight plan from Frankfurt to Stuttgart with a
STAR and an RNAV approach attached.

The aircraft is moved along the route in fixed steps. Each step updates the
active leg and prints the flight plan progress.
"""
import logging
import sys
import os

# --- [SETUP] Ensure the core module is in the Python path ---
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from flightroute.geo import Pos, PosCourse, Line
from flightroute.magvar import ConstantMagneticModel
from flightroute.procedure import (
    ProcedureLeg, ProcedureLegs, ProcedureLegType, ProcedureTypes, AltRestriction, RestrictionDescriptor
)
from flightroute.flightplan import Flightplan, FlightplanEntry, FlightplanEntryType
from flightroute.route import Route, AircraftSample, compute_progress

STEP_NM = 5.0
GROUND_SPEED_KTS = 140.0


def _track_leg(ident, leg_type, category, start, end, **kwargs):
    return ProcedureLeg(leg_type, category, fix_ident=ident, fix_pos=end, line=Line(start, end),
                        calculated_distance=start.distance_nm_to(end), calculated_course=start.course_to(end),
                        **kwargs)


def build_route() -> Route:
    flightplan = Flightplan(entries=[
        FlightplanEntry("EDDF", FlightplanEntryType.AIRPORT, Pos(50.0333, 8.5706, 364.0), name="Frankfurt"),
        FlightplanEntry("TABUM", FlightplanEntryType.WAYPOINT, Pos(49.6014, 8.8931), region="ED"),
        FlightplanEntry("LBU", FlightplanEntryType.VOR, Pos(48.9106, 9.3381), region="ED", magvar=3.0),
        FlightplanEntry("EDDS", FlightplanEntryType.AIRPORT, Pos(48.6899, 9.2219, 1276.0), name="Stuttgart"),
    ], cruising_altitude_ft=11000.0, departure_ident="EDDF", destination_ident="EDDS")

    route = Route.from_flightplan(flightplan, magnetic_model=ConstantMagneticModel(3.5))

    lbu = Pos(48.9106, 9.3381)
    star_fix = Pos(48.80, 9.05)
    iaf, faf, runway = Pos(48.75, 8.95), Pos(48.72, 9.07), Pos(48.69, 9.20)

    star = ProcedureLegs(ProcedureTypes.STAR, "LBU1A", procedure_legs=[
        _track_leg("SI100", ProcedureLegType.TRACK_TO_FIX, ProcedureTypes.STAR, lbu, star_fix,
                   alt_restriction=AltRestriction(RestrictionDescriptor.AT_OR_ABOVE, 5000.0)),
    ])
    arrival = ProcedureLegs(ProcedureTypes.ARRIVAL, "RNAV07", runway="07", procedure_legs=[
        ProcedureLeg(ProcedureLegType.INITIAL_FIX, ProcedureTypes.APPROACH, fix_ident="SI700", fix_pos=iaf),
        _track_leg("SI710", ProcedureLegType.TRACK_TO_FIX, ProcedureTypes.APPROACH, iaf, faf,
                   alt_restriction=AltRestriction(RestrictionDescriptor.AT, 4000.0)),
        _track_leg("RW07", ProcedureLegType.TRACK_TO_FIX, ProcedureTypes.APPROACH, faf, runway, flyover=True),
    ])
    route.update_procedure_legs(star=star, arrival=arrival)
    return route


def run_simulation():
    """Flies the route and logs the progress at every step."""
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - [E010_SIM] - %(message)s')

    route = build_route()
    logging.info(f"Route: {' '.join(leg.ident for leg in route)}")
    logging.info(f"Total distance {route.total_distance_nm:.1f} nm, "
                 f"top of descent {route.top_of_descent_from_destination():.1f} nm before destination.")

    distance = 0.0
    prev = route.position_at_distance(0.0)
    while distance <= route.total_distance_nm:
        pos = route.position_at_distance(distance)
        course = prev.course_to(pos) if not prev.almost_equal(pos) else 0.0
        route.update_active_leg_and_pos(PosCourse(pos, course))

        progress = compute_progress(route, AircraftSample(pos, course, GROUND_SPEED_KTS))
        if progress is not None and progress.has_active_leg:
            course_text = f"{progress.next_course_mag:.0f}°M" if progress.next_course_mag is not None else "-"
            logging.info(f"{distance:6.1f} nm | next {progress.next_ident:<6} {progress.next_distance_nm:5.1f} nm "
                         f"{course_text:>5} | to destination {progress.dist_to_dest_nm:5.1f} nm "
                         f"{' '.join(progress.instructions + progress.restrictions)}")

        prev = pos
        distance += STEP_NM

    logging.info(f"Passed last leg: {route.is_passed_last_leg()}")


if __name__ == "__main__":
    run_simulation()
