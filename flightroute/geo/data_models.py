# flightroute/geo/data_models.py
"""
Core geometry value types: positions, position samples, line distance
classification results and bounding rectangles.
"""
import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional

import numpy as np

from .constants import GeoConstants
from . import calculations as calc


@dataclass(frozen=True)
class Pos:
    """A geographic position. Latitude/longitude in degrees, altitude in feet."""
    lat: float
    lon: float
    alt_ft: float = 0.0

    def is_valid(self) -> bool:
        return (math.isfinite(self.lat) and math.isfinite(self.lon) and
                -90.0 <= self.lat <= 90.0 and -180.0 <= self.lon <= 180.0)

    def almost_equal(self, other: Optional["Pos"], epsilon: float = GeoConstants.POS_EPSILON_DEG) -> bool:
        if other is None:
            return False
        return abs(self.lat - other.lat) < epsilon and abs(self.lon - other.lon) < epsilon

    def distance_meter_to(self, other: "Pos") -> float:
        return calc.distance_meter(self.lat, self.lon, other.lat, other.lon)

    def distance_nm_to(self, other: "Pos") -> float:
        return calc.distance_nm(self.lat, self.lon, other.lat, other.lon)

    def course_to(self, other: "Pos") -> float:
        """Initial great-circle course to the other position in degrees true."""
        return calc.calculate_bearing(self.lat, self.lon, other.lat, other.lon)

    def interpolate(self, other: "Pos", fraction: float) -> "Pos":
        lat, lon = calc.interpolate(self.lat, self.lon, other.lat, other.lon, fraction)
        alt = self.alt_ft + (other.alt_ft - self.alt_ft) * fraction
        return Pos(lat=lat, lon=lon, alt_ft=alt)

    def endpoint(self, course: float, distance_nm: float) -> "Pos":
        lat, lon = calc.destination_point(self.lat, self.lon, course, distance_nm)
        return Pos(lat=lat, lon=lon, alt_ft=self.alt_ft)


@dataclass(frozen=True)
class PosCourse:
    """One position and course sample of a moving aircraft."""
    pos: Optional[Pos]
    course: Optional[float]

    def is_valid(self) -> bool:
        return (self.pos is not None and self.pos.is_valid() and
                self.course is not None and math.isfinite(self.course))


class LineDistanceStatus(Enum):
    INVALID = auto()
    BEFORE_START = auto()
    ALONG_TRACK = auto()
    AFTER_END = auto()


@dataclass
class LineDistance:
    """
    Result of classifying a position against a line or polyline.

    All values are in meters. distance is the signed cross-track distance
    (positive right of track) when ALONG_TRACK, otherwise the signed distance
    to the closest end point.
    """
    status: LineDistanceStatus = LineDistanceStatus.INVALID
    distance: float = GeoConstants.INVALID_DISTANCE_VALUE
    distance_from1: float = GeoConstants.INVALID_DISTANCE_VALUE
    distance_from2: float = GeoConstants.INVALID_DISTANCE_VALUE

    @property
    def is_valid(self) -> bool:
        return self.status != LineDistanceStatus.INVALID

    @property
    def is_along_track(self) -> bool:
        return self.status == LineDistanceStatus.ALONG_TRACK


@dataclass(frozen=True)
class Rect:
    """Bounding rectangle in degrees. west > east when crossing the anti-meridian."""
    west: float
    north: float
    east: float
    south: float

    def crosses_antimeridian(self) -> bool:
        return self.west > self.east

    def contains(self, pos: Pos) -> bool:
        if not (self.south <= pos.lat <= self.north):
            return False
        if self.crosses_antimeridian():
            return pos.lon >= self.west or pos.lon <= self.east
        return self.west <= pos.lon <= self.east

    @staticmethod
    def from_positions(positions: Iterable[Pos]) -> Optional["Rect"]:
        """
        Smallest rectangle containing all positions.

        The longitude extent is found by removing the largest gap between
        sorted longitudes, so a route crossing the anti-meridian gets a
        wrapped rectangle instead of one spanning the whole globe.
        """
        valid = [p for p in positions if p.is_valid()]
        if not valid:
            return None

        lats = np.array([p.lat for p in valid])
        lons = np.unique(np.array([p.lon for p in valid]))

        if len(lons) == 1:
            return Rect(west=float(lons[0]), north=float(lats.max()), east=float(lons[0]), south=float(lats.min()))

        gaps = np.diff(lons)
        wrap_gap = lons[0] + 360.0 - lons[-1]
        largest = int(np.argmax(gaps))

        if gaps[largest] > wrap_gap:
            west, east = lons[largest + 1], lons[largest]
        else:
            west, east = lons[0], lons[-1]
        return Rect(west=float(west), north=float(lats.max()), east=float(east), south=float(lats.min()))
