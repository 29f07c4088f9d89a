# flightroute/procedure/data_models.py
"""
Procedure legs as delivered by the procedure provider. All geometry (lines,
hold helper lines, polylines and distances) is already resolved; the route
only consumes it.
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from ..geo import Pos, Line, LineString
from .constants import (
    ProcedureLegType, ProcedureTypes, HOLD_LEG_TYPES, CIRCULAR_LEG_TYPES, POINT_LEG_TYPES
)
from .exceptions import ProcedureError

SET_CATEGORIES = (ProcedureTypes.DEPARTURE, ProcedureTypes.STAR, ProcedureTypes.ARRIVAL)


class RestrictionDescriptor(Enum):
    NONE = auto()
    AT = auto()
    AT_OR_ABOVE = auto()
    AT_OR_BELOW = auto()
    BETWEEN = auto()


@dataclass(frozen=True)
class AltRestriction:
    """Altitude restriction in feet. alt2 is the lower limit for BETWEEN."""
    descriptor: RestrictionDescriptor = RestrictionDescriptor.NONE
    alt1: float = 0.0
    alt2: float = 0.0

    def is_valid(self) -> bool:
        return self.descriptor != RestrictionDescriptor.NONE

    def text(self) -> str:
        if self.descriptor == RestrictionDescriptor.AT:
            return f"At {self.alt1:,.0f} ft"
        if self.descriptor == RestrictionDescriptor.AT_OR_ABOVE:
            return f"At or above {self.alt1:,.0f} ft"
        if self.descriptor == RestrictionDescriptor.AT_OR_BELOW:
            return f"At or below {self.alt1:,.0f} ft"
        if self.descriptor == RestrictionDescriptor.BETWEEN:
            return f"At or above {self.alt2:,.0f} ft and at or below {self.alt1:,.0f} ft"
        return ""


@dataclass(frozen=True)
class SpeedRestriction:
    """Speed restriction in knots."""
    descriptor: RestrictionDescriptor = RestrictionDescriptor.NONE
    speed: float = 0.0

    def is_valid(self) -> bool:
        return self.descriptor != RestrictionDescriptor.NONE

    def text(self) -> str:
        if self.descriptor == RestrictionDescriptor.AT:
            return f"At {self.speed:.0f} kts"
        if self.descriptor == RestrictionDescriptor.AT_OR_ABOVE:
            return f"Min {self.speed:.0f} kts"
        if self.descriptor == RestrictionDescriptor.AT_OR_BELOW:
            return f"Max {self.speed:.0f} kts"
        return ""


@dataclass
class ProcedureLeg:
    """
    A single resolved procedure leg.

    line runs from the leg's start to its end fix. hold_line is only set
    for holds whose exit does not coincide with the start of the following
    leg. turn_direction is "L", "R", "B" (either) or empty.
    calculated_distance is in nautical miles, calculated_course in degrees true.
    """
    leg_type: ProcedureLegType
    category: ProcedureTypes
    fix_ident: str = ""
    fix_region: str = ""
    fix_pos: Optional[Pos] = None
    line: Optional[Line] = None
    hold_line: Optional[Line] = None
    turn_direction: str = ""
    geometry: LineString = field(default_factory=LineString)
    calculated_distance: float = 0.0
    calculated_course: Optional[float] = None
    magvar: Optional[float] = None
    flyover: bool = False
    alt_restriction: AltRestriction = field(default_factory=AltRestriction)
    speed_restriction: SpeedRestriction = field(default_factory=SpeedRestriction)
    rec_fix_ident: str = ""
    rho: float = 0.0
    theta: float = 0.0

    @property
    def position(self) -> Optional[Pos]:
        """End position of the leg, the fix if there is one."""
        if self.fix_pos is not None and self.fix_pos.is_valid():
            return self.fix_pos
        if self.line is not None:
            return self.line.pos2
        if not self.geometry.is_empty():
            return self.geometry.last()
        return None

    def is_hold(self) -> bool:
        return self.leg_type in HOLD_LEG_TYPES

    def is_procedure_turn(self) -> bool:
        return self.leg_type == ProcedureLegType.PROCEDURE_TURN

    def is_circular(self) -> bool:
        return self.leg_type in CIRCULAR_LEG_TYPES

    def is_initial_fix(self) -> bool:
        return self.leg_type == ProcedureLegType.INITIAL_FIX

    def is_point(self) -> bool:
        """Initial fixes and legs collapsed to a single point."""
        return self.leg_type in POINT_LEG_TYPES or (self.line is not None and self.line.is_point())

    def is_missed(self) -> bool:
        return bool(self.category & ProcedureTypes.MISSED)

    def is_approach(self) -> bool:
        return bool(self.category & ProcedureTypes.APPROACH)

    def is_transition(self) -> bool:
        return bool(self.category & ProcedureTypes.TRANSITION)

    def is_sid(self) -> bool:
        return bool(self.category & ProcedureTypes.SID)

    def is_star(self) -> bool:
        return bool(self.category & ProcedureTypes.STAR)


@dataclass
class ProcedureLegs:
    """
    Ordered legs of one attached procedure: a departure (SID), a STAR or an
    arrival (approach with optional transition and missed approach).

    Transition legs are flown before the procedure for STAR and arrival and
    after the procedure for departures.
    """
    category: ProcedureTypes
    ident: str = ""
    transition_ident: str = ""
    runway: str = ""
    procedure_legs: List[ProcedureLeg] = field(default_factory=list)
    transition_legs: List[ProcedureLeg] = field(default_factory=list)

    def __post_init__(self):
        if self.category not in SET_CATEGORIES:
            raise ProcedureError(f"Invalid procedure set category {self.category!r}")

    @property
    def legs(self) -> List[ProcedureLeg]:
        if self.category & ProcedureTypes.SID:
            return self.procedure_legs + self.transition_legs
        return self.transition_legs + self.procedure_legs

    def __len__(self):
        return len(self.procedure_legs) + len(self.transition_legs)

    def __getitem__(self, index) -> ProcedureLeg:
        return self.legs[index]

    def __iter__(self):
        return iter(self.legs)

    def is_empty(self) -> bool:
        return len(self) == 0

    def has_transition(self) -> bool:
        return bool(self.transition_legs)

    def has_missed(self) -> bool:
        return any(leg.is_missed() for leg in self.procedure_legs)

    def clear_transition(self):
        self.transition_legs = []
        self.transition_ident = ""
