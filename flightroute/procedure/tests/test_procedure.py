# flightroute/procedure/tests/test_procedure.py

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent.parent))

from flightroute.geo import Pos, Line, LineString
from flightroute.procedure import (
    ProcedureLeg, ProcedureLegs, ProcedureLegType, ProcedureTypes, ProcedureError,
    AltRestriction, SpeedRestriction, RestrictionDescriptor, procedure_leg_type_text
)


def make_leg(leg_type, category, ident, lon, prev_lon=None):
    pos = Pos(0.0, lon)
    line = Line(Pos(0.0, prev_lon), pos) if prev_lon is not None else Line(pos, pos)
    return ProcedureLeg(leg_type=leg_type, category=category, fix_ident=ident, fix_pos=pos, line=line)


class TestProcedureLeg(unittest.TestCase):

    def test_position_prefers_fix(self):
        leg = make_leg(ProcedureLegType.TRACK_TO_FIX, ProcedureTypes.APPROACH, "FAF", 1.0, 0.5)
        self.assertEqual(leg.position, Pos(0.0, 1.0))

    def test_position_falls_back_to_line_and_geometry(self):
        leg = ProcedureLeg(ProcedureLegType.COURSE_TO_ALTITUDE, ProcedureTypes.SID,
                           line=Line(Pos(0.0, 0.0), Pos(0.0, 0.2)))
        self.assertEqual(leg.position, Pos(0.0, 0.2))

        arc = ProcedureLeg(ProcedureLegType.CONSTANT_RADIUS_ARC, ProcedureTypes.APPROACH,
                           geometry=LineString([Pos(0.0, 0.0), Pos(0.1, 0.1), Pos(0.0, 0.2)]))
        self.assertEqual(arc.position, Pos(0.0, 0.2))
        self.assertTrue(arc.is_circular())

        self.assertIsNone(ProcedureLeg(ProcedureLegType.HEADING_TO_MANUAL_TERMINATION,
                                       ProcedureTypes.MISSED).position)

    def test_predicates(self):
        hold = make_leg(ProcedureLegType.HOLD_TO_FIX, ProcedureTypes.MISSED, "HLD", 2.0, 1.0)
        self.assertTrue(hold.is_hold())
        self.assertTrue(hold.is_missed())
        self.assertFalse(hold.is_approach())
        self.assertFalse(hold.is_point())

        initial = make_leg(ProcedureLegType.INITIAL_FIX, ProcedureTypes.TRANSITION, "IAF", 0.0)
        self.assertTrue(initial.is_initial_fix())
        self.assertTrue(initial.is_point())
        self.assertTrue(initial.is_transition())

        turn = make_leg(ProcedureLegType.PROCEDURE_TURN, ProcedureTypes.APPROACH, "", 1.0, 0.9)
        self.assertTrue(turn.is_procedure_turn())
        self.assertTrue(turn.is_approach())

    def test_collapsed_leg_is_point(self):
        leg = make_leg(ProcedureLegType.TRACK_TO_FIX, ProcedureTypes.STAR, "X", 1.0, 1.0)
        self.assertTrue(leg.is_point())
        self.assertTrue(leg.is_star())
        self.assertFalse(leg.is_sid())

    def test_type_text(self):
        self.assertEqual(procedure_leg_type_text(ProcedureLegType.TRACK_TO_FIX), "Track to fix")
        self.assertEqual(procedure_leg_type_text(ProcedureLegType.HOLD_TO_MANUAL_TERMINATION),
                         "Hold to manual termination")


class TestProcedureLegs(unittest.TestCase):

    def setUp(self):
        self.proc = [make_leg(ProcedureLegType.INITIAL_FIX, ProcedureTypes.APPROACH, "IF", 1.0),
                     make_leg(ProcedureLegType.TRACK_TO_FIX, ProcedureTypes.APPROACH, "FAF", 1.5, 1.0)]
        self.trans = [make_leg(ProcedureLegType.INITIAL_FIX, ProcedureTypes.TRANSITION, "IAF", 0.5)]

    def test_arrival_transition_first(self):
        legs = ProcedureLegs(ProcedureTypes.ARRIVAL, "I28", "IAF", procedure_legs=self.proc,
                             transition_legs=self.trans)
        self.assertEqual([leg.fix_ident for leg in legs], ["IAF", "IF", "FAF"])
        self.assertEqual(len(legs), 3)
        self.assertEqual(legs[0].fix_ident, "IAF")
        self.assertTrue(legs.has_transition())
        self.assertFalse(legs.has_missed())

    def test_departure_procedure_first(self):
        sid = [make_leg(ProcedureLegType.TRACK_TO_FIX, ProcedureTypes.SID, "D1", 0.1, 0.0)]
        trans = [make_leg(ProcedureLegType.TRACK_TO_FIX, ProcedureTypes.SID, "T1", 0.3, 0.1)]
        legs = ProcedureLegs(ProcedureTypes.DEPARTURE, "SID1", "T1", procedure_legs=sid, transition_legs=trans)
        self.assertEqual([leg.fix_ident for leg in legs], ["D1", "T1"])

    def test_clear_transition(self):
        legs = ProcedureLegs(ProcedureTypes.ARRIVAL, "I28", "IAF", procedure_legs=self.proc,
                             transition_legs=self.trans)
        legs.clear_transition()
        self.assertFalse(legs.has_transition())
        self.assertEqual(legs.transition_ident, "")
        self.assertEqual(len(legs), 2)

    def test_empty(self):
        self.assertTrue(ProcedureLegs(ProcedureTypes.STAR).is_empty())

    def test_invalid_category(self):
        with self.assertRaises(ProcedureError):
            ProcedureLegs(ProcedureTypes.MISSED)


class TestRestrictions(unittest.TestCase):

    def test_altitude_text(self):
        self.assertEqual(AltRestriction(RestrictionDescriptor.AT_OR_ABOVE, 3000.0).text(),
                         "At or above 3,000 ft")
        self.assertEqual(AltRestriction(RestrictionDescriptor.BETWEEN, 5000.0, 3000.0).text(),
                         "At or above 3,000 ft and at or below 5,000 ft")
        self.assertFalse(AltRestriction().is_valid())
        self.assertEqual(AltRestriction().text(), "")

    def test_speed_text(self):
        self.assertEqual(SpeedRestriction(RestrictionDescriptor.AT_OR_BELOW, 210.0).text(), "Max 210 kts")
        self.assertEqual(SpeedRestriction(RestrictionDescriptor.AT, 180.0).text(), "At 180 kts")


if __name__ == '__main__':
    unittest.main()
