# flightroute/procedure/constants.py
"""
Procedure leg types (ARINC 424 path terminators) and procedure categories.
"""
from enum import Enum, IntFlag


class ProcedureLegType(Enum):
    ARC_TO_FIX = "AF"
    COURSE_TO_ALTITUDE = "CA"
    COURSE_TO_DME_DISTANCE = "CD"
    COURSE_TO_FIX = "CF"
    COURSE_TO_INTERCEPT = "CI"
    COURSE_TO_RADIAL_TERMINATION = "CR"
    DIRECT_TO_FIX = "DF"
    FIX_TO_ALTITUDE = "FA"
    TRACK_FROM_FIX_FROM_DISTANCE = "FC"
    TRACK_FROM_FIX_TO_DME_DISTANCE = "FD"
    FROM_FIX_TO_MANUAL_TERMINATION = "FM"
    HOLD_TO_ALTITUDE = "HA"
    HOLD_TO_FIX = "HF"
    HOLD_TO_MANUAL_TERMINATION = "HM"
    INITIAL_FIX = "IF"
    PROCEDURE_TURN = "PI"
    CONSTANT_RADIUS_ARC = "RF"
    TRACK_TO_FIX = "TF"
    HEADING_TO_ALTITUDE_TERMINATION = "VA"
    HEADING_TO_DME_DISTANCE_TERMINATION = "VD"
    HEADING_TO_INTERCEPT = "VI"
    HEADING_TO_MANUAL_TERMINATION = "VM"
    HEADING_TO_RADIAL_TERMINATION = "VR"

    # Not ARINC, first point of a procedure without an initial fix
    START_OF_PROCEDURE = "SP"


HOLD_LEG_TYPES = frozenset({
    ProcedureLegType.HOLD_TO_ALTITUDE,
    ProcedureLegType.HOLD_TO_FIX,
    ProcedureLegType.HOLD_TO_MANUAL_TERMINATION,
})

CIRCULAR_LEG_TYPES = frozenset({
    ProcedureLegType.ARC_TO_FIX,
    ProcedureLegType.CONSTANT_RADIUS_ARC,
})

POINT_LEG_TYPES = frozenset({
    ProcedureLegType.INITIAL_FIX,
    ProcedureLegType.START_OF_PROCEDURE,
})

LEG_TYPE_NAMES = {
    ProcedureLegType.ARC_TO_FIX: "Arc to fix",
    ProcedureLegType.COURSE_TO_ALTITUDE: "Course to altitude",
    ProcedureLegType.COURSE_TO_DME_DISTANCE: "Course to DME distance",
    ProcedureLegType.COURSE_TO_FIX: "Course to fix",
    ProcedureLegType.COURSE_TO_INTERCEPT: "Course to intercept",
    ProcedureLegType.COURSE_TO_RADIAL_TERMINATION: "Course to radial termination",
    ProcedureLegType.DIRECT_TO_FIX: "Direct to fix",
    ProcedureLegType.FIX_TO_ALTITUDE: "Fix to altitude",
    ProcedureLegType.TRACK_FROM_FIX_FROM_DISTANCE: "Track from fix from distance",
    ProcedureLegType.TRACK_FROM_FIX_TO_DME_DISTANCE: "Track from fix to DME distance",
    ProcedureLegType.FROM_FIX_TO_MANUAL_TERMINATION: "From fix to manual termination",
    ProcedureLegType.HOLD_TO_ALTITUDE: "Hold to altitude",
    ProcedureLegType.HOLD_TO_FIX: "Hold to fix",
    ProcedureLegType.HOLD_TO_MANUAL_TERMINATION: "Hold to manual termination",
    ProcedureLegType.INITIAL_FIX: "Initial fix",
    ProcedureLegType.PROCEDURE_TURN: "Procedure turn",
    ProcedureLegType.CONSTANT_RADIUS_ARC: "Constant radius arc",
    ProcedureLegType.TRACK_TO_FIX: "Track to fix",
    ProcedureLegType.HEADING_TO_ALTITUDE_TERMINATION: "Heading to altitude termination",
    ProcedureLegType.HEADING_TO_DME_DISTANCE_TERMINATION: "Heading to DME distance termination",
    ProcedureLegType.HEADING_TO_INTERCEPT: "Heading to intercept",
    ProcedureLegType.HEADING_TO_MANUAL_TERMINATION: "Heading to manual termination",
    ProcedureLegType.HEADING_TO_RADIAL_TERMINATION: "Heading to radial termination",
    ProcedureLegType.START_OF_PROCEDURE: "Start of procedure",
}


class ProcedureTypes(IntFlag):
    """
    Procedure categories. Used as the category of a single leg, as the
    category of a leg set and as mask for erasing legs or filtering display.
    """
    NONE = 0
    APPROACH = 1
    MISSED = 2
    TRANSITION = 4
    SID = 8
    STAR = 16

    ARRIVAL = APPROACH | MISSED | TRANSITION
    DEPARTURE = SID
    ALL = APPROACH | MISSED | TRANSITION | SID | STAR


def procedure_leg_type_text(leg_type: ProcedureLegType) -> str:
    return LEG_TYPE_NAMES.get(leg_type, leg_type.value)
