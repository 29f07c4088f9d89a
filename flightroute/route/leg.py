# flightroute/route/leg.py
"""
A single leg of a route: a plain route point from the flight plan or one leg
of an attached procedure.

A leg knows its own identity and keeps the derived values distance, course
and magnetic variation. These are only changed by the update methods below,
which the route calls in sequence order.
"""
from dataclasses import dataclass
from typing import List, Optional

from ..geo import Pos, normalize_course
from ..magvar import MagneticModel
from ..procedure import ProcedureLeg, ProcedureTypes
from ..flightplan import FlightplanEntry
from .constants import LegVariant
from .navaid import NavaidRef, UnresolvedRef, navaid_from_entry

# Procedure categories used to select legs by variant
VARIANT_TYPES = {
    LegVariant.ROUTE: ProcedureTypes.NONE,
    LegVariant.DEPARTURE: ProcedureTypes.SID,
    LegVariant.STAR: ProcedureTypes.STAR,
    LegVariant.ARRIVAL: ProcedureTypes.APPROACH,
    LegVariant.TRANSITION: ProcedureTypes.TRANSITION,
    LegVariant.MISSED: ProcedureTypes.MISSED,
}

# Legs of one block were inserted from the same procedure set
_BLOCKS = {
    LegVariant.DEPARTURE: "departure",
    LegVariant.STAR: "star",
    LegVariant.ARRIVAL: "arrival",
    LegVariant.TRANSITION: "arrival",
    LegVariant.MISSED: "arrival",
}


def variant_for(procedure_leg: ProcedureLeg, set_category: ProcedureTypes) -> LegVariant:
    """Departure and STAR sets tag all their legs alike, arrivals per leg category."""
    if set_category & ProcedureTypes.SID:
        return LegVariant.DEPARTURE
    if set_category & ProcedureTypes.STAR:
        return LegVariant.STAR
    if procedure_leg.is_missed():
        return LegVariant.MISSED
    if procedure_leg.is_transition():
        return LegVariant.TRANSITION
    return LegVariant.ARRIVAL


@dataclass
class RouteLeg:
    ident: str
    position: Pos
    variant: LegVariant = LegVariant.ROUTE
    navaid: Optional[NavaidRef] = None
    procedure_leg: Optional[ProcedureLeg] = None
    # Index of the parallel entry in the owning flight plan
    entry_index: int = 0

    distance_to: float = 0.0
    course_to: Optional[float] = None
    magvar: Optional[float] = None
    magvar_resolved: bool = False

    @classmethod
    def from_entry(cls, entry: FlightplanEntry, entry_index: int) -> "RouteLeg":
        navaid = navaid_from_entry(entry)
        return cls(ident=entry.ident, position=navaid.position, variant=LegVariant.ROUTE,
                   navaid=navaid, entry_index=entry_index)

    @classmethod
    def from_procedure_leg(cls, procedure_leg: ProcedureLeg, variant: LegVariant, entry_index: int,
                           prev_leg: Optional["RouteLeg"] = None) -> "RouteLeg":
        assert variant != LegVariant.ROUTE, "Procedure legs need a procedure variant"
        position = procedure_leg.position
        assert position is not None, f"Procedure leg {procedure_leg.leg_type.value} has no position"

        leg = cls(ident=procedure_leg.fix_ident or procedure_leg.leg_type.value,
                  position=position, variant=variant, procedure_leg=procedure_leg,
                  entry_index=entry_index)
        leg.update_distance_and_course(entry_index, prev_leg)
        return leg

    def __post_init__(self):
        if self.variant == LegVariant.ROUTE:
            assert self.procedure_leg is None, "Route points cannot carry a procedure leg"
            if self.navaid is None:
                self.navaid = UnresolvedRef(self.ident, self.position)
        else:
            assert self.procedure_leg is not None, "Procedure legs need a procedure leg"

    # Classification ------------------------------------------------------------
    def is_route(self) -> bool:
        return self.variant == LegVariant.ROUTE

    def is_procedure(self) -> bool:
        return self.variant != LegVariant.ROUTE

    def is_missed(self) -> bool:
        return self.variant == LegVariant.MISSED

    def is_hold(self) -> bool:
        return self.procedure_leg is not None and self.procedure_leg.is_hold()

    def is_procedure_turn(self) -> bool:
        return self.procedure_leg is not None and self.procedure_leg.is_procedure_turn()

    def is_initial_fix(self) -> bool:
        return self.procedure_leg is not None and self.procedure_leg.is_initial_fix()

    def is_circular(self) -> bool:
        return self.procedure_leg is not None and self.procedure_leg.is_circular()

    def is_point(self) -> bool:
        return self.procedure_leg is not None and self.procedure_leg.is_point()

    def matches(self, types: ProcedureTypes) -> bool:
        return bool(types & VARIANT_TYPES[self.variant])

    def block(self) -> Optional[str]:
        return _BLOCKS.get(self.variant)

    @property
    def course_to_mag(self) -> Optional[float]:
        if self.course_to is None:
            return None
        if self.magvar is None:
            return self.course_to
        return normalize_course(self.course_to - self.magvar)

    # Derived values ------------------------------------------------------------
    def update_distance_and_course(self, index: int, prev_leg: Optional["RouteLeg"]):
        """
        Distance in nm and true course from the previous leg. The first leg
        has no course. Procedure legs take the provider's calculated values,
        apart from points that start a new block: these are connected to the
        previous leg by a great circle.
        """
        if index == 0 or prev_leg is None:
            self.distance_to = 0.0
            self.course_to = None
            return

        proc = self.procedure_leg
        if proc is not None and not (proc.is_point() and prev_leg.block() != self.block()):
            self.distance_to = proc.calculated_distance
            self.course_to = proc.calculated_course
            return

        if self.position.is_valid() and prev_leg.position.is_valid():
            self.distance_to = prev_leg.position.distance_nm_to(self.position)
            self.course_to = normalize_course(prev_leg.position.course_to(self.position))
        else:
            self.distance_to = 0.0
            self.course_to = None

    def update_magvar(self, model: Optional[MagneticModel]):
        """Own variation from the navaid, the procedure leg or the model."""
        value = self.navaid.magvar if self.navaid is not None else None
        if value is None and self.procedure_leg is not None:
            value = self.procedure_leg.magvar
        if value is None and model is not None and self.position.is_valid():
            value = model.magnetic_variation(self.position)

        self.magvar = value
        self.magvar_resolved = value is not None

    def update_invalid_magvar(self, index: int, legs: List["RouteLeg"]):
        """Takes the variation of the closest leg in sequence that resolved its own."""
        if self.magvar_resolved:
            return

        for offset in range(1, len(legs)):
            for neighbor in (index - offset, index + offset):
                if 0 <= neighbor < len(legs) and legs[neighbor].magvar_resolved:
                    self.magvar = legs[neighbor].magvar
                    return
        self.magvar = None
