# flightroute/route/__init__.py
"""
route - Route legs, active leg tracking, procedure splicing and distance
queries
"""

from .constants import RouteConstants, LegVariant
from .config import RouteConfig
from .exceptions import RouteError, InvalidLegIndexError
from .navaid import (
    NavaidRef, VorRef, NdbRef, WaypointRef, AirportRef, UserpointRef, UnresolvedRef, navaid_from_entry
)
from .leg import RouteLeg
from .data_models import RouteDistances, NearestObject, NearestResult
from .core import Route
from .progress import AircraftSample, FlightProgress, compute_progress

__all__ = [
    'RouteConstants',
    'LegVariant',
    'RouteConfig',
    'RouteError',
    'InvalidLegIndexError',
    'NavaidRef',
    'VorRef',
    'NdbRef',
    'WaypointRef',
    'AirportRef',
    'UserpointRef',
    'UnresolvedRef',
    'navaid_from_entry',
    'RouteLeg',
    'RouteDistances',
    'NearestObject',
    'NearestResult',
    'Route',
    'AircraftSample',
    'FlightProgress',
    'compute_progress',
]
