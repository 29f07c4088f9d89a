# flightroute/geo/constants.py

class GeoConstants:
    EARTH_RADIUS_NM: float = 3440.065
    METERS_PER_NM: float = 1852.0
    EARTH_RADIUS_M: float = EARTH_RADIUS_NM * METERS_PER_NM

    # Positions closer than this (degrees) are treated as the same point
    POS_EPSILON_DEG: float = 1e-6

    # Far outside any distance on earth, also used by callers as "no value"
    INVALID_DISTANCE_VALUE: float = 3.4e38


INVALID_DISTANCE_VALUE = GeoConstants.INVALID_DISTANCE_VALUE
