# flightroute/geo/lines.py
"""
Great-circle lines and polylines with point classification.

A position is classified against a line as BEFORE_START, ALONG_TRACK or
AFTER_END. The route tracking code relies on these results to find the
active leg and to compute cross-track distances.
"""
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .constants import GeoConstants
from .data_models import Pos, LineDistance, LineDistanceStatus
from .calculations import cross_and_along_track

# Closer than this to a line end (meters) counts as being on the line
_ON_POINT_METER = 0.1


def _classify(pos: Pos, pos1: Pos, pos2: Pos) -> Tuple[LineDistance, float]:
    """Returns the line distance and the along-track offset in meters."""
    if pos is None or pos1 is None or pos2 is None or \
            not (pos.is_valid() and pos1.is_valid() and pos2.is_valid()):
        return LineDistance(), 0.0

    from1 = pos.distance_meter_to(pos1)
    from2 = pos.distance_meter_to(pos2)

    if pos1.almost_equal(pos2):
        # Degenerated line: only the distance to the point is known
        return LineDistance(LineDistanceStatus.ALONG_TRACK, from1, from1, from2), 0.0

    length = pos1.distance_meter_to(pos2)
    if from1 < _ON_POINT_METER:
        return LineDistance(LineDistanceStatus.ALONG_TRACK, 0.0, from1, from2), 0.0
    if from2 < _ON_POINT_METER:
        return LineDistance(LineDistanceStatus.ALONG_TRACK, 0.0, from1, from2), length

    cross_rad, along_rad = cross_and_along_track(pos.lat, pos.lon, pos1.lat, pos1.lon, pos2.lat, pos2.lon)
    along = along_rad * GeoConstants.EARTH_RADIUS_M

    if along < 0.0:
        return LineDistance(LineDistanceStatus.BEFORE_START, math.copysign(from1, cross_rad), from1, from2), 0.0
    if along > length:
        return LineDistance(LineDistanceStatus.AFTER_END, math.copysign(from2, cross_rad), from1, from2), length
    return LineDistance(LineDistanceStatus.ALONG_TRACK, cross_rad * GeoConstants.EARTH_RADIUS_M, from1, from2), along


def distance_to_line(pos: Pos, pos1: Pos, pos2: Pos) -> LineDistance:
    """
    Classifies pos against the great-circle segment pos1 -> pos2.

    distance_from1 and distance_from2 are the direct distances to the
    segment end points. A segment with identical end points degenerates to a
    point check and always reports ALONG_TRACK.
    """
    return _classify(pos, pos1, pos2)[0]


class Line:
    """A great-circle segment from pos1 to pos2."""

    def __init__(self, pos1: Pos, pos2: Pos):
        self.pos1 = pos1
        self.pos2 = pos2

    def __eq__(self, other):
        return isinstance(other, Line) and self.pos1 == other.pos1 and self.pos2 == other.pos2

    def __repr__(self):
        return f"Line({self.pos1!r}, {self.pos2!r})"

    def is_valid(self) -> bool:
        return self.pos1 is not None and self.pos2 is not None and self.pos1.is_valid() and self.pos2.is_valid()

    def is_point(self) -> bool:
        return self.is_valid() and self.pos1.almost_equal(self.pos2)

    def length_meter(self) -> float:
        return self.pos1.distance_meter_to(self.pos2)

    def course(self) -> float:
        return self.pos1.course_to(self.pos2)

    def interpolate(self, fraction: float) -> Pos:
        return self.pos1.interpolate(self.pos2, fraction)

    def distance_to(self, pos: Pos) -> LineDistance:
        return distance_to_line(pos, self.pos1, self.pos2)


class LineString:
    """
    An ordered polyline of positions, e.g. the resolved geometry of an arc or
    hold procedure leg.
    """

    def __init__(self, points: Optional[Sequence[Pos]] = None):
        self._points: List[Pos] = list(points or [])
        self._cumulative = self._cumulative_lengths()

    def __len__(self):
        return len(self._points)

    def __getitem__(self, index):
        return self._points[index]

    def __iter__(self):
        return iter(self._points)

    def __eq__(self, other):
        return isinstance(other, LineString) and self._points == other._points

    def __repr__(self):
        return f"LineString({self._points!r})"

    def is_empty(self) -> bool:
        return not self._points

    def first(self) -> Pos:
        return self._points[0]

    def last(self) -> Pos:
        return self._points[-1]

    def _cumulative_lengths(self) -> np.ndarray:
        if len(self._points) < 2:
            return np.zeros(len(self._points))
        seg = np.array([self._points[i].distance_meter_to(self._points[i + 1])
                        for i in range(len(self._points) - 1)])
        return np.concatenate(([0.0], np.cumsum(seg)))

    def length_meter(self) -> float:
        return float(self._cumulative[-1]) if len(self._cumulative) else 0.0

    def interpolate(self, fraction: float) -> Optional[Pos]:
        """Position at the given fraction of the polyline's arc length."""
        if not self._points:
            return None
        if len(self._points) == 1:
            return self._points[0]

        fraction = min(1.0, max(0.0, fraction))
        target = fraction * self.length_meter()
        index = int(np.searchsorted(self._cumulative, target, side='right')) - 1
        index = min(max(index, 0), len(self._points) - 2)

        seg_length = self._cumulative[index + 1] - self._cumulative[index]
        seg_fraction = (target - self._cumulative[index]) / seg_length if seg_length > 0 else 0.0
        return self._points[index].interpolate(self._points[index + 1], float(seg_fraction))

    def distance_to(self, pos: Pos) -> LineDistance:
        """
        Classifies pos against the whole polyline.

        The closest segment wins. Positions before the start of an inner
        segment or after the end of an inner segment are along the polyline.
        distance_from1 and distance_from2 are measured along the polyline from
        its start and to its end.
        """
        if not self._points:
            return LineDistance()
        if len(self._points) == 1:
            return distance_to_line(pos, self._points[0], self._points[0])

        best: Optional[LineDistance] = None
        best_index = -1
        best_along = 0.0
        for i in range(len(self._points) - 1):
            result, along = _classify(pos, self._points[i], self._points[i + 1])
            if result.is_valid and (best is None or abs(result.distance) < abs(best.distance)):
                best, best_index, best_along = result, i, along

        if best is None:
            return LineDistance()

        last_segment = len(self._points) - 2
        status = best.status
        if (status == LineDistanceStatus.BEFORE_START and best_index > 0) or \
                (status == LineDistanceStatus.AFTER_END and best_index < last_segment):
            status = LineDistanceStatus.ALONG_TRACK

        from1 = float(self._cumulative[best_index]) + best_along
        return LineDistance(status, best.distance, from1, self.length_meter() - from1)
