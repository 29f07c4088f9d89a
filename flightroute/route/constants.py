# flightroute/route/constants.py
from enum import Enum


class RouteConstants:
    # Active leg switching
    HOLD_EXIT_DISTANCE_NM: float = 0.5
    HOLD_EXIT_INTO_NEXT_NM: float = 0.75
    HOLD_ACTIVATION_DISTANCE_NM: float = 0.5
    HOLD_COURSE_LIMIT_DEG: float = 25.0
    PROCEDURE_TURN_COURSE_LIMIT_DEG: float = 45.0
    PROCEDURE_TURN_MARGIN_M: float = 100.0
    LEG_COURSE_LIMIT_DEG: float = 90.0
    LEG_MARGIN_M: float = 10.0

    # Active leg seeding only accepts segments closer than this
    NEAREST_SEED_RADIUS_NM: float = 100.0

    # Descent rule in nm per 1000 ft altitude to lose
    TOD_RULE_NM_PER_1000FT: float = 3.0

    # No time estimates below this ground speed
    MIN_GROUND_SPEED_KTS: float = 30.0

    # Vertical path deviation below this is shown as on path
    VERTICAL_DEVIATION_LIMIT_FT: float = 100.0
    # Cross track below this has no side
    CROSS_TRACK_SIDE_LIMIT_NM: float = 0.1


class LegVariant(Enum):
    ROUTE = "ROUTE"
    DEPARTURE = "DEPARTURE"
    STAR = "STAR"
    ARRIVAL = "ARRIVAL"
    TRANSITION = "TRANSITION"
    MISSED = "MISSED"
