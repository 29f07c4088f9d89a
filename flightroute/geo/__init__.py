# flightroute/geo/__init__.py
"""
Geometry primitives for route tracking: positions, great-circle lines and
polylines, line distance classification and bounding rectangles.
"""
from .constants import GeoConstants, INVALID_DISTANCE_VALUE
from .data_models import Pos, PosCourse, LineDistance, LineDistanceStatus, Rect
from .lines import Line, LineString, distance_to_line
from .calculations import (
    nm_to_meter,
    meter_to_nm,
    normalize_course,
    course_difference,
    calculate_bearing,
    distance_nm,
)

__all__ = [
    'GeoConstants',
    'INVALID_DISTANCE_VALUE',
    'Pos',
    'PosCourse',
    'LineDistance',
    'LineDistanceStatus',
    'Rect',
    'Line',
    'LineString',
    'distance_to_line',
    'nm_to_meter',
    'meter_to_nm',
    'normalize_course',
    'course_difference',
    'calculate_bearing',
    'distance_nm',
]
