# flightroute/geo/calculations.py
"""
Great-circle calculations on plain latitude/longitude values in degrees.

These are low-level, high-frequency helpers used by the position and line
types in this package. All distances are on a spherical earth.
"""
import math
from typing import Tuple

from .constants import GeoConstants


def nm_to_meter(nm: float) -> float:
    return nm * GeoConstants.METERS_PER_NM


def meter_to_nm(meter: float) -> float:
    return meter / GeoConstants.METERS_PER_NM


def angular_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine central angle between two points in radians."""
    lat1_rad, lon1_rad = math.radians(lat1), math.radians(lon1)
    lat2_rad, lon2_rad = math.radians(lat2), math.radians(lon2)
    dlon = lon2_rad - lon1_rad; dlat = lat2_rad - lat1_rad
    a = math.sin(dlat / 2)**2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2)**2
    return 2 * math.atan2(math.sqrt(a), math.sqrt(max(0.0, 1 - a)))


def distance_meter(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    return GeoConstants.EARTH_RADIUS_M * angular_distance(lat1, lon1, lat2, lon2)


def distance_nm(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    return GeoConstants.EARTH_RADIUS_NM * angular_distance(lat1, lon1, lat2, lon2)


def normalize_course(course: float) -> float:
    """Normalizes a course to the range [0, 360)."""
    course = math.fmod(course, 360.0)
    if course < 0:
        course += 360.0
    # fmod of a tiny negative value can round up to exactly 360
    return 0.0 if course >= 360.0 else course


def course_difference(course1: float, course2: float) -> float:
    """Absolute difference between two courses in the range [0, 180]."""
    diff = normalize_course(course1 - course2)
    if diff > 180.0:
        diff = 360.0 - diff
    return diff


def calculate_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Initial great-circle course from point 1 to point 2 in degrees true."""
    lat1_rad, lon1_rad = math.radians(lat1), math.radians(lon1)
    lat2_rad, lon2_rad = math.radians(lat2), math.radians(lon2)
    dlon = lon2_rad - lon1_rad
    y = math.sin(dlon) * math.cos(lat2_rad)
    x = math.cos(lat1_rad) * math.sin(lat2_rad) - math.sin(lat1_rad) * math.cos(lat2_rad) * math.cos(dlon)
    return normalize_course(math.degrees(math.atan2(y, x)))


def interpolate(lat1: float, lon1: float, lat2: float, lon2: float, fraction: float) -> Tuple[float, float]:
    """
    Intermediate point on the great circle between point 1 and point 2.

    Args:
        fraction: 0.0 returns point 1, 1.0 returns point 2.

    Returns:
        A (latitude, longitude) tuple in degrees.
    """
    dist = angular_distance(lat1, lon1, lat2, lon2)
    if dist < 1e-12:
        return lat1, lon1

    lat1_rad, lon1_rad = math.radians(lat1), math.radians(lon1)
    lat2_rad, lon2_rad = math.radians(lat2), math.radians(lon2)

    a = math.sin((1.0 - fraction) * dist) / math.sin(dist)
    b = math.sin(fraction * dist) / math.sin(dist)
    x = a * math.cos(lat1_rad) * math.cos(lon1_rad) + b * math.cos(lat2_rad) * math.cos(lon2_rad)
    y = a * math.cos(lat1_rad) * math.sin(lon1_rad) + b * math.cos(lat2_rad) * math.sin(lon2_rad)
    z = a * math.sin(lat1_rad) + b * math.sin(lat2_rad)

    lat_rad = math.atan2(z, math.sqrt(x**2 + y**2))
    lon_rad = math.atan2(y, x)
    return math.degrees(lat_rad), math.degrees(lon_rad)


def destination_point(lat: float, lon: float, bearing_deg: float, distance_nm: float) -> Tuple[float, float]:
    lat_rad = math.radians(lat); lon_rad = math.radians(lon); bearing_rad = math.radians(bearing_deg)
    angular = distance_nm / GeoConstants.EARTH_RADIUS_NM
    dest_lat_rad = math.asin(math.sin(lat_rad) * math.cos(angular) +
                             math.cos(lat_rad) * math.sin(angular) * math.cos(bearing_rad))
    dest_lon_rad = lon_rad + math.atan2(math.sin(bearing_rad) * math.sin(angular) * math.cos(lat_rad),
                                        math.cos(angular) - math.sin(lat_rad) * math.sin(dest_lat_rad))
    dest_lon = (math.degrees(dest_lon_rad) + 540.0) % 360.0 - 180.0
    return math.degrees(dest_lat_rad), dest_lon


def cross_and_along_track(lat: float, lon: float,
                          lat1: float, lon1: float,
                          lat2: float, lon2: float) -> Tuple[float, float]:
    """
    Cross-track and along-track angular distances of a point against the
    great circle through point 1 and point 2.

    Returns:
        (cross_track_rad, along_track_rad). Cross track is positive right of
        the track, along track is negative when the point lies behind point 1.
    """
    dist13 = angular_distance(lat1, lon1, lat, lon)
    delta = math.radians(calculate_bearing(lat1, lon1, lat, lon) - calculate_bearing(lat1, lon1, lat2, lon2))

    cross_track = math.asin(max(-1.0, min(1.0, math.sin(dist13) * math.sin(delta))))
    along_track = math.atan2(math.sin(dist13) * math.cos(delta), math.cos(dist13))
    return cross_track, along_track
