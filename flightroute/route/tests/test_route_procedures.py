# flightroute/route/tests/test_route_procedures.py

import sys
import copy
import math
import unittest
from pathlib import Path
from unittest.mock import MagicMock

# Add project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent.parent))

from flightroute.geo import Pos, PosCourse, Line
from flightroute.geo.constants import GeoConstants
from flightroute.procedure import ProcedureLeg, ProcedureLegs, ProcedureLegType, ProcedureTypes
from flightroute.flightplan import Flightplan, FlightplanEntry, FlightplanEntryType, PropertyKeys
from flightroute.route import Route, LegVariant, InvalidLegIndexError

DEG_NM = GeoConstants.EARTH_RADIUS_NM * math.pi / 180.0


def tf_leg(ident, prev_lon, lon, category, lat=0.0, prev_lat=0.0):
    prev, pos = Pos(prev_lat, prev_lon), Pos(lat, lon)
    return ProcedureLeg(ProcedureLegType.TRACK_TO_FIX, category, fix_ident=ident, fix_pos=pos,
                        line=Line(prev, pos), calculated_distance=prev.distance_nm_to(pos),
                        calculated_course=prev.course_to(pos))


def if_leg(ident, lon, category):
    pos = Pos(0.0, lon)
    return ProcedureLeg(ProcedureLegType.INITIAL_FIX, category, fix_ident=ident, fix_pos=pos, line=Line(pos, pos))


def make_flightplan():
    return Flightplan(entries=[
        FlightplanEntry("P0", FlightplanEntryType.AIRPORT, Pos(0.0, 0.0)),
        FlightplanEntry("P1", FlightplanEntryType.WAYPOINT, Pos(0.0, 1.0)),
        FlightplanEntry("P2", FlightplanEntryType.WAYPOINT, Pos(0.0, 2.0)),
        FlightplanEntry("P3", FlightplanEntryType.AIRPORT, Pos(0.0, 3.0)),
    ], cruising_altitude_ft=9000.0)


def make_procedures():
    departure = ProcedureLegs(ProcedureTypes.DEPARTURE, "SID1", runway="09", procedure_legs=[
        tf_leg("D1", 0.0, 0.2, ProcedureTypes.SID),
        tf_leg("D2", 0.2, 0.4, ProcedureTypes.SID),
    ])
    star = ProcedureLegs(ProcedureTypes.STAR, "STAR1", procedure_legs=[
        tf_leg("S1", 2.0, 2.3, ProcedureTypes.STAR),
        tf_leg("S2", 2.3, 2.5, ProcedureTypes.STAR),
    ])
    arrival = ProcedureLegs(ProcedureTypes.ARRIVAL, "I09", "T1", runway="09",
                            transition_legs=[
                                if_leg("T1", 2.6, ProcedureTypes.TRANSITION),
                                tf_leg("T2", 2.6, 2.7, ProcedureTypes.TRANSITION),
                            ],
                            procedure_legs=[
                                if_leg("IF", 2.7, ProcedureTypes.APPROACH),
                                tf_leg("FAF", 2.7, 2.8, ProcedureTypes.APPROACH),
                                tf_leg("RW09", 2.8, 2.9, ProcedureTypes.APPROACH),
                                tf_leg("M1", 2.9, 3.0, ProcedureTypes.MISSED, lat=0.1),
                            ])
    return departure, star, arrival


ALL_IDENTS = ["P0", "D1", "D2", "P1", "P2", "S1", "S2", "T1", "T2", "IF", "FAF", "RW09", "M1", "P3"]


class TestSplicing(unittest.TestCase):
    def setUp(self):
        self.builder = MagicMock()
        self.builder.build_entry.side_effect = lambda leg: FlightplanEntry(
            leg.fix_ident, FlightplanEntryType.WAYPOINT, leg.position, no_save=True)
        self.route = Route.from_flightplan(make_flightplan(), entry_builder=self.builder)
        self.route.update_procedure_legs(*make_procedures())

    def assert_in_sync(self, route):
        self.assertEqual(len(route), len(route.flightplan))
        for i, leg in enumerate(route):
            self.assertEqual(leg.entry_index, i)
            self.assertEqual(leg.ident, route.flightplan[i].ident)

    def test_legs_order_and_offsets(self):
        self.assertEqual([leg.ident for leg in self.route], ALL_IDENTS)
        self.assertEqual(self.route.departure_legs_offset, 1)
        self.assertEqual(self.route.star_legs_offset, 5)
        self.assertEqual(self.route.arrival_legs_offset, 7)
        self.assertEqual(self.builder.build_entry.call_count, 10)
        self.assert_in_sync(self.route)

    def test_variants(self):
        variants = [leg.variant for leg in self.route]
        self.assertEqual(variants, [
            LegVariant.ROUTE, LegVariant.DEPARTURE, LegVariant.DEPARTURE, LegVariant.ROUTE, LegVariant.ROUTE,
            LegVariant.STAR, LegVariant.STAR, LegVariant.TRANSITION, LegVariant.TRANSITION,
            LegVariant.ARRIVAL, LegVariant.ARRIVAL, LegVariant.ARRIVAL, LegVariant.MISSED, LegVariant.ROUTE,
        ])
        for leg in self.route:
            self.assertEqual(leg.procedure_leg is None, leg.is_route())

    def test_total_distance(self):
        legs = list(self.route)[:-1]
        expected = sum(leg.distance_to for leg in legs if not leg.is_missed())
        self.assertAlmostEqual(self.route.total_distance_nm, expected, delta=1e-3)
        self.assertAlmostEqual(self.route.total_distance_nm, 2.9 * DEG_NM, delta=1e-3)
        # Destination after the arrival is not connected
        self.assertEqual(self.route.last().distance_to, 0.0)
        self.assertIsNone(self.route.last().course_to)

    def test_procedure_distances(self):
        by_ident = {leg.ident: leg for leg in self.route}
        # First point of the arrival block connects to the STAR
        self.assertAlmostEqual(by_ident["T1"].distance_to, 0.1 * DEG_NM, places=4)
        # Approach initial fix continues the transition
        self.assertEqual(by_ident["IF"].distance_to, 0.0)
        self.assertAlmostEqual(by_ident["FAF"].distance_to, 0.1 * DEG_NM, places=4)
        self.assertAlmostEqual(by_ident["FAF"].course_to, 90.0, places=4)

    def test_properties(self):
        properties = self.route.flightplan.properties
        self.assertEqual(properties[PropertyKeys.SID], "SID1")
        self.assertEqual(properties[PropertyKeys.STAR], "STAR1")
        self.assertEqual(properties[PropertyKeys.APPROACH], "I09")
        self.assertEqual(properties[PropertyKeys.TRANSITION], "T1")

    def test_has_procedures(self):
        self.assertTrue(self.route.has_departure_procedure())
        self.assertTrue(self.route.has_star_procedure())
        self.assertTrue(self.route.has_arrival_procedure())
        self.assertTrue(self.route.has_transition_procedure())

    def test_splice_is_repeatable(self):
        self.route.update_procedure_legs(*make_procedures())
        self.assertEqual([leg.ident for leg in self.route], ALL_IDENTS)
        self.assert_in_sync(self.route)

    def test_clear_star(self):
        self.route.clear_star()
        self.assertEqual([leg.ident for leg in self.route],
                         ["P0", "D1", "D2", "P1", "P2", "T1", "T2", "IF", "FAF", "RW09", "M1", "P3"])
        self.assertIsNone(self.route.star_legs_offset)
        self.assertEqual(self.route.departure_legs_offset, 1)
        self.assertEqual(self.route.arrival_legs_offset, 7)
        self.assertEqual(self.route[self.route.departure_legs_offset].ident, "D1")
        self.assertFalse(any(leg.variant == LegVariant.STAR for leg in self.route))
        self.assertNotIn(PropertyKeys.STAR, self.route.flightplan.properties)
        self.assertIn(PropertyKeys.APPROACH, self.route.flightplan.properties)
        self.assert_in_sync(self.route)

        # No-op when already cleared
        self.route.clear_star()
        self.assertEqual(len(self.route), 12)

    def test_clear_departure(self):
        self.route.clear_departure()
        self.assertEqual(len(self.route), 12)
        self.assertIsNone(self.route.departure_legs_offset)
        self.assertEqual(self.route.star_legs_offset, 5)
        self.assertEqual(self.route.arrival_legs_offset, 7)
        self.assertFalse(any(leg.variant == LegVariant.DEPARTURE for leg in self.route))
        self.assert_in_sync(self.route)

        # A new splice places the blocks again
        self.route.update_procedure_legs(star=self.route.star_legs, arrival=self.route.arrival_legs)
        self.assertEqual(self.route[self.route.star_legs_offset].ident, "S1")
        self.assertEqual(self.route[self.route.arrival_legs_offset].ident, "T1")

    def test_clear_transition(self):
        self.route.clear_transition()
        self.assertEqual(len(self.route), 12)
        self.assertFalse(self.route.has_transition_procedure())
        self.assertTrue(self.route.has_arrival_procedure())
        self.assertEqual(self.route.arrival_legs_offset, 7)
        self.assertEqual(self.route[self.route.arrival_legs_offset].ident, "IF")
        self.assertNotIn(PropertyKeys.TRANSITION, self.route.flightplan.properties)
        # STAR legs stay
        self.assertTrue(any(leg.variant == LegVariant.STAR for leg in self.route))

    def test_clear_transition_keeps_callers_set(self):
        departure, star, arrival = make_procedures()
        route = Route.from_flightplan(make_flightplan())
        route.update_procedure_legs(departure, star, arrival)
        route.clear_transition()

        self.assertTrue(arrival.has_transition())
        self.assertEqual(arrival.transition_ident, "T1")
        self.assertFalse(route.arrival_legs.has_transition())
        self.assertEqual(route.arrival_legs.transition_ident, "")
        self.assertEqual(route.arrival_legs.ident, "I09")
        self.assertEqual(len(route.arrival_legs), 4)

    def test_clear_arrival(self):
        self.route.clear_arrival()
        self.assertEqual([leg.ident for leg in self.route], ["P0", "D1", "D2", "P1", "P2", "S1", "S2", "P3"])
        self.assertIsNone(self.route.arrival_legs_offset)
        self.assertFalse(self.route.has_transition_procedure())

    def test_clear_all_restores_route(self):
        self.route.clear_all_procedures()
        self.assertEqual(len(self.route), 4)
        self.assertEqual(len(self.route.flightplan), 4)
        self.assertTrue(all(leg.is_route() for leg in self.route))
        self.assertEqual(self.route.flightplan.properties, {})
        self.assertAlmostEqual(self.route.total_distance_nm, 3.0 * DEG_NM, delta=1e-3)

    def test_update_with_empty_sets_restores_route(self):
        self.route.update_procedure_legs()
        self.assertEqual([leg.ident for leg in self.route], ["P0", "P1", "P2", "P3"])
        self.assertIsNone(self.route.departure_legs_offset)


class TestSplicedPositions(unittest.TestCase):
    # All fixes lie on the equator, so the distance from start in degrees
    # equals the longitude
    def setUp(self):
        self.route = Route.from_flightplan(make_flightplan())
        self.route.update_procedure_legs(*make_procedures())

    def assert_lon_at(self, dist_deg, lon):
        pos = self.route.position_at_distance(dist_deg * DEG_NM)
        self.assertAlmostEqual(pos.lat, 0.0, places=6)
        self.assertAlmostEqual(pos.lon, lon, places=6)

    def test_departure_legs(self):
        self.assert_lon_at(0.1, 0.1)
        self.assert_lon_at(0.3, 0.3)

    def test_route_leg_after_departure(self):
        for dist_deg in (0.5, 0.7, 0.9):
            self.assert_lon_at(dist_deg, dist_deg)

    def test_star_legs(self):
        self.assert_lon_at(1.5, 1.5)
        self.assert_lon_at(2.15, 2.15)
        self.assert_lon_at(2.4, 2.4)

    def test_gap_between_star_and_transition(self):
        self.assertAlmostEqual(self.route[7].distance_to, 0.1 * DEG_NM, places=6)
        self.assert_lon_at(2.55, 2.55)

    def test_arrival_legs(self):
        self.assert_lon_at(2.65, 2.65)
        # The approach initial fix adds no distance
        self.assert_lon_at(2.75, 2.75)
        self.assert_lon_at(2.85, 2.85)

    def test_end_is_runway(self):
        pos = self.route.position_at_distance(self.route.total_distance_nm)
        self.assertTrue(pos.almost_equal(Pos(0.0, 2.9)))

    def test_monotonic(self):
        total = self.route.total_distance_nm
        positions = [self.route.position_at_distance(total * k / 40.0) for k in range(41)]
        for pos1, pos2 in zip(positions, positions[1:]):
            self.assertAlmostEqual(pos2.lat, 0.0, places=6)
            self.assertLessEqual(pos1.lon, pos2.lon + 1e-9)

    def test_top_of_descent(self):
        self.assertAlmostEqual(self.route.top_of_descent_from_destination(), 27.0)
        pos = self.route.top_of_descent()
        self.assertAlmostEqual(pos.lat, 0.0, places=6)
        self.assertAlmostEqual(pos.lon, (2.9 * DEG_NM - 27.0) / DEG_NM, places=5)


class TestCopy(unittest.TestCase):
    def setUp(self):
        self.model = MagicMock()
        self.model.magnetic_variation.return_value = 3.0
        self.route = Route.from_flightplan(make_flightplan(), magnetic_model=self.model)
        self.route.update_procedure_legs(*make_procedures())
        self.route.update_active_leg_and_pos(PosCourse(Pos(0.0, 0.5), 90.0))

    def test_copy_is_independent(self):
        other = self.route.copy()
        other.clear_all_procedures()
        other.reset_active()
        self.assertEqual(len(self.route), len(ALL_IDENTS))
        self.assertEqual(len(self.route.flightplan), len(ALL_IDENTS))
        self.assertIsNotNone(self.route.active_leg_index)
        self.assertEqual(len(other), 4)

    def test_copy_shares_collaborators(self):
        other = copy.deepcopy(self.route)
        self.assertIs(other.magnetic_model, self.model)
        self.assertIs(other.config, self.route.config)
        self.assertIs(other.entry_builder, self.route.entry_builder)
        self.assertIsNot(other.flightplan, self.route.flightplan)
        self.assertIsNot(other[1], self.route[1])
        self.assertEqual([leg.entry_index for leg in other], list(range(len(ALL_IDENTS))))
        self.assertEqual(other.active_leg_index, self.route.active_leg_index)


class TestEnrouteEditing(unittest.TestCase):
    def setUp(self):
        self.route = Route.from_flightplan(make_flightplan())
        self.route.update_procedure_legs(*make_procedures())

    def test_insert_keeps_procedures(self):
        self.route.insert_entry(2, FlightplanEntry("NEW", FlightplanEntryType.WAYPOINT, Pos(0.0, 1.5)))
        self.assertEqual(len(self.route), len(ALL_IDENTS) + 1)
        self.assertEqual([leg.ident for leg in self.route if leg.is_route()], ["P0", "P1", "NEW", "P2", "P3"])
        self.assertEqual([e.ident for e in self.route.flightplan], [leg.ident for leg in self.route])
        self.assertEqual(self.route.star_legs_offset, 6)
        self.assertTrue(self.route.flightplan[1].no_save)
        self.assertFalse(self.route.flightplan[4].no_save)

    def test_remove(self):
        self.route.insert_entry(2, FlightplanEntry("NEW", FlightplanEntryType.WAYPOINT, Pos(0.0, 1.5)))
        removed = self.route.remove_entry(2)
        self.assertEqual(removed.ident, "NEW")
        self.assertEqual([leg.ident for leg in self.route], ALL_IDENTS)

    def test_invalid_index(self):
        entry = FlightplanEntry("NEW", FlightplanEntryType.WAYPOINT, Pos(0.0, 1.5))
        with self.assertRaises(InvalidLegIndexError):
            self.route.insert_entry(5, entry)
        with self.assertRaises(IndexError):
            self.route.remove_entry(4)
        with self.assertRaises(InvalidLegIndexError):
            self.route.remove_entry(-1)
        self.assertEqual(len(self.route), len(ALL_IDENTS))


if __name__ == '__main__':
    unittest.main()
