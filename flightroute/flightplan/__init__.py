# flightroute/flightplan/__init__.py
"""
flightplan - Flight plan entries kept in parallel with the route legs
"""

from .constants import FlightplanEntryType, PropertyKeys
from .data_models import FlightplanEntry, Flightplan
from .core import (
    FlightplanEntryBuilder,
    ProcedureEntryBuilder,
    clear_procedure_properties,
    extract_procedure_properties,
)
from .exceptions import FlightplanError, EntryBuildError

__all__ = [
    'FlightplanEntryType',
    'PropertyKeys',
    'FlightplanEntry',
    'Flightplan',
    'FlightplanEntryBuilder',
    'ProcedureEntryBuilder',
    'clear_procedure_properties',
    'extract_procedure_properties',
    'FlightplanError',
    'EntryBuildError',
]
