# flightroute/procedure/__init__.py
"""
procedure - Resolved procedure legs (SID, STAR, approach, transition) consumed
by the route
"""

from .constants import ProcedureLegType, ProcedureTypes, procedure_leg_type_text
from .exceptions import ProcedureError
from .data_models import (
    ProcedureLeg, ProcedureLegs, AltRestriction, SpeedRestriction, RestrictionDescriptor
)

__all__ = [
    'ProcedureLegType',
    'ProcedureTypes',
    'procedure_leg_type_text',
    'ProcedureLeg',
    'ProcedureLegs',
    'AltRestriction',
    'SpeedRestriction',
    'RestrictionDescriptor',
    'ProcedureError',
]
