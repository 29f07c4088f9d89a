# flightroute/route/core.py
"""
The route: an ordered list of legs kept in lockstep with the entries of a
flight plan.

The route tracks the active leg from position samples, keeps distances and
courses up to date, splices departure, STAR and arrival procedures into the
enroute legs and answers distance and position queries.
"""
import copy
import logging
from typing import Iterator, List, Optional, Tuple

from ..geo import (
    Pos, PosCourse, LineDistance, LineDistanceStatus, Rect,
    distance_to_line, normalize_course, course_difference, nm_to_meter, meter_to_nm
)
from ..magvar import MagneticModel
from ..procedure import ProcedureLeg, ProcedureLegs, ProcedureTypes
from ..flightplan import (
    Flightplan, FlightplanEntry, FlightplanEntryBuilder, ProcedureEntryBuilder,
    clear_procedure_properties, extract_procedure_properties
)
from .config import RouteConfig
from .constants import RouteConstants
from .data_models import RouteDistances, NearestObject, NearestResult
from .exceptions import InvalidLegIndexError
from .leg import RouteLeg, variant_for
from .navaid import VorRef, NdbRef, WaypointRef, AirportRef, UserpointRef, UnresolvedRef

logger = logging.getLogger(__name__)


class Route:
    def __init__(self, config: Optional[RouteConfig] = None,
                 magnetic_model: Optional[MagneticModel] = None,
                 entry_builder: Optional[FlightplanEntryBuilder] = None):
        self.config = config or RouteConfig()
        self.magnetic_model = magnetic_model
        self.entry_builder = entry_builder or ProcedureEntryBuilder()

        self.flightplan = Flightplan()
        self._legs: List[RouteLeg] = []

        self.departure_legs: Optional[ProcedureLegs] = None
        self.star_legs: Optional[ProcedureLegs] = None
        self.arrival_legs: Optional[ProcedureLegs] = None
        # Block start indexes as of the last splice. Clearing one procedure
        # leaves the offsets of the others as they are.
        self.departure_legs_offset: Optional[int] = None
        self.star_legs_offset: Optional[int] = None
        self.arrival_legs_offset: Optional[int] = None

        # Procedure categories currently displayed. Missed approach legs are
        # only activated if shown.
        self.shown_types = ProcedureTypes.ALL

        self.total_distance_nm = 0.0
        self.bounding_rect: Optional[Rect] = None
        self.uses_true_course = True

        self.active_leg_index: Optional[int] = None
        self.active_leg_result = LineDistance()
        self.active_pos: Optional[PosCourse] = None

    @classmethod
    def from_flightplan(cls, flightplan: Flightplan, config: Optional[RouteConfig] = None,
                        magnetic_model: Optional[MagneticModel] = None,
                        entry_builder: Optional[FlightplanEntryBuilder] = None) -> "Route":
        """Builds one route point per flight plan entry."""
        route = cls(config, magnetic_model, entry_builder)
        route.flightplan = flightplan
        route._legs = [RouteLeg.from_entry(entry, i) for i, entry in enumerate(flightplan.entries)]
        route.update_all()
        logger.info(f"Route built with {len(route)} legs, {route.total_distance_nm:.1f} nm.")
        return route

    # Container access ---------------------------------------------------------
    def __len__(self):
        return len(self._legs)

    def __getitem__(self, index) -> RouteLeg:
        return self._legs[index]

    def __iter__(self) -> Iterator[RouteLeg]:
        return iter(self._legs)

    @property
    def legs(self) -> Tuple[RouteLeg, ...]:
        return tuple(self._legs)

    def is_empty(self) -> bool:
        return not self._legs

    def first(self) -> RouteLeg:
        return self._legs[0]

    def last(self) -> RouteLeg:
        return self._legs[-1]

    # Copy ---------------------------------------------------------------------
    def __deepcopy__(self, memo):
        # Collaborators are shared between copies
        for shared in (self.config, self.magnetic_model, self.entry_builder):
            memo[id(shared)] = shared

        result = self.__class__.__new__(self.__class__)
        memo[id(self)] = result
        for key, value in self.__dict__.items():
            setattr(result, key, copy.deepcopy(value, memo))
        return result

    def copy(self) -> "Route":
        return copy.deepcopy(self)

    # Flight plan checks -------------------------------------------------------
    def has_valid_departure(self) -> bool:
        return not self.flightplan.is_empty() and self.flightplan.entries[0].is_airport() and \
            not self.is_empty() and self.first().position.is_valid()

    def has_valid_destination(self) -> bool:
        return not self.flightplan.is_empty() and self.flightplan.entries[-1].is_airport() and \
            not self.is_empty() and self.last().position.is_valid()

    def has_entries(self) -> bool:
        return len(self.flightplan) > 2

    def can_calc_route(self) -> bool:
        return len(self.flightplan) >= 2

    def next_user_waypoint_number(self) -> int:
        return self.flightplan.next_user_waypoint_number()

    # Active leg ---------------------------------------------------------------
    @property
    def active_leg(self) -> Optional[RouteLeg]:
        if self.active_leg_index is None:
            return None
        return self._legs[self.active_leg_index]

    def reset_active(self):
        self.active_leg_index = None
        self.active_leg_result = LineDistance()
        self.active_pos = None

    def _segment_distance(self, pos: Pos, index: int) -> LineDistance:
        return distance_to_line(pos, self._legs[index - 1].position, self._legs[index].position)

    def update_active_leg_and_pos(self, pos_course: Optional[PosCourse] = None):
        """
        Updates the active leg from a new position and course sample. Without
        a sample the last one is used again.
        """
        if pos_course is None:
            pos_course = self.active_pos

        if self.is_empty() or pos_course is None or not pos_course.is_valid():
            self.reset_active()
            return

        num_legs = len(self._legs)
        if self.active_leg_index is None:
            index, _ = self.nearest_all_leg_index(pos_course.pos)
            if index is None and num_legs > 1:
                logger.warning(f"No route segment within {self.config.nearest_seed_radius_nm:.0f} nm "
                               f"of {pos_course.pos}.")
                self.reset_active()
                self.active_pos = pos_course
                return
            self.active_leg_index = index if index is not None else 0

        if self.active_leg_index >= num_legs:
            self.active_leg_index = num_legs - 1

        self.active_pos = pos_course
        pos = pos_course.pos

        if num_legs == 1:
            # Single point route checks the distance to the point
            self.active_leg_index = 0
            first = self._legs[0].position
            self.active_leg_result = distance_to_line(pos, first, first)
            return

        if self.active_leg_index == 0:
            self.active_leg_index = 1

        active = self.active_leg_index
        self.active_leg_result = self._segment_distance(pos, active)

        next_index = active + 1
        if next_index >= num_legs:
            return

        active_leg = self._legs[active]
        if active_leg.is_hold():
            # Initial fixes are points and cannot be flown
            while self._legs[next_index].is_initial_fix() and next_index < num_legs - 2:
                next_index += 1

        pos1 = self._legs[next_index - 1].position
        pos2 = self._legs[next_index].position
        course_diff = course_difference(pos_course.course, normalize_course(pos1.course_to(pos2)))
        next_result = distance_to_line(pos, pos1, pos2)

        next_leg = self._legs[next_index]
        switch = self._should_switch(active_leg, next_leg, next_result, course_diff, pos)

        if switch and next_leg.is_missed() and not (self.shown_types & ProcedureTypes.MISSED):
            logger.debug(f"Not switching to hidden missed approach leg {next_index}.")
            switch = False

        if switch:
            self.active_leg_index = next_index
            self.active_leg_result = self._segment_distance(pos, next_index)
            logger.debug(f"Active leg switched to {next_index} ({next_leg.ident}).")

    def _should_switch(self, active_leg: RouteLeg, next_leg: RouteLeg, next_result: LineDistance,
                       course_diff: float, pos: Pos) -> bool:
        if active_leg.is_hold():
            hold = active_leg.procedure_leg
            next_proc = next_leg.procedure_leg
            if next_proc is not None and next_proc.line is not None and \
                    next_proc.line.pos1.almost_equal(active_leg.position):
                # Hold exit is the start of the next leg
                return (next_result.is_along_track and
                        abs(next_result.distance) < nm_to_meter(RouteConstants.HOLD_EXIT_DISTANCE_NM) and
                        next_result.distance_from1 > nm_to_meter(RouteConstants.HOLD_EXIT_INTO_NEXT_NM) and
                        course_diff < RouteConstants.HOLD_COURSE_LIMIT_DEG)

            if hold.hold_line is None:
                return False
            hold_result = hold.hold_line.distance_to(pos)
            boundary = RouteConstants.HOLD_EXIT_DISTANCE_NM
            if hold.turn_direction != "R":
                boundary = -boundary
            return hold_result.is_along_track and hold_result.distance < nm_to_meter(boundary)

        if next_leg.is_hold():
            # Course does not matter when entering a hold
            return abs(next_result.distance) < nm_to_meter(RouteConstants.HOLD_ACTIVATION_DISTANCE_NM)

        if active_leg.is_procedure_turn():
            # Turn may happen before the end of the leg
            return (self._is_smaller(next_result, self.active_leg_result, RouteConstants.PROCEDURE_TURN_MARGIN_M)
                    and course_diff < RouteConstants.PROCEDURE_TURN_COURSE_LIMIT_DEG)

        return (self.active_leg_result.status == LineDistanceStatus.AFTER_END or
                (self._is_smaller(next_result, self.active_leg_result, RouteConstants.LEG_MARGIN_M) and
                 course_diff < RouteConstants.LEG_COURSE_LIMIT_DEG))

    @staticmethod
    def _is_smaller(dist1: LineDistance, dist2: LineDistance, margin: float) -> bool:
        """True if dist1 is closer to track than dist2 by more than margin meters."""
        return abs(dist1.distance) + margin < abs(dist2.distance)

    def set_active_leg(self, value: int):
        """Forces the active leg. Invalid indexes fall back to the first segment."""
        num_legs = len(self._legs)
        if num_legs == 0:
            self.reset_active()
            return

        if num_legs == 1:
            self.active_leg_index = 0
        else:
            self.active_leg_index = value if 0 < value < num_legs else 1

        if self.active_pos is not None and self.active_pos.is_valid():
            if num_legs == 1:
                first = self._legs[0].position
                self.active_leg_result = distance_to_line(self.active_pos.pos, first, first)
            else:
                self.active_leg_result = self._segment_distance(self.active_pos.pos, self.active_leg_index)
        else:
            self.active_leg_result = LineDistance()

    def active_leg_index_corrected(self) -> Tuple[Optional[int], bool]:
        """
        Returns the active leg index and a corrected flag. When flying from a
        route point towards the initial fix of a procedure the initial fix is
        the next waypoint to show.
        """
        if self.active_leg_index is None:
            return None, False

        next_index = self.active_leg_index + 1
        if next_index < len(self._legs) and self._legs[next_index].is_point() and \
                not self._legs[self.active_leg_index].is_procedure():
            return next_index, True
        return self.active_leg_index, False

    def is_active_missed(self) -> bool:
        leg = self.active_leg
        return leg is not None and leg.is_missed()

    def is_passed_last_leg(self) -> bool:
        """True after passing the end of the last leg or the start of the missed approach."""
        if self.active_leg_index is None:
            return False
        active = self.active_leg_index
        num_legs = len(self._legs)
        at_end = active >= num_legs - 1 or (active + 1 < num_legs and self._legs[active + 1].is_missed())
        return at_end and self.active_leg_result.status == LineDistanceStatus.AFTER_END

    # Nearest segment ----------------------------------------------------------
    def nearest_all_leg_index(self, pos: Pos) -> Tuple[Optional[int], float]:
        """
        Index of the leg ending the segment closest to pos and the cross track
        distance in meters to it. All segments are considered. Nothing is
        found beyond the seeding radius.
        """
        if pos is None or not pos.is_valid():
            return None, LineDistance().distance

        index = None
        cross_track = LineDistance().distance
        min_distance = cross_track
        for i in range(1, len(self._legs)):
            result = self._segment_distance(pos, i)
            if result.is_valid and abs(result.distance) < min_distance:
                min_distance = abs(result.distance)
                cross_track = result.distance
                index = i

        if index is not None and abs(cross_track) > nm_to_meter(self.config.nearest_seed_radius_nm):
            return None, LineDistance().distance
        return index, cross_track

    def nearest_leg_result(self, pos: Pos) -> Tuple[Optional[int], LineDistance]:
        """Closest segment ignoring segments starting at a procedure leg."""
        if pos is None or not pos.is_valid():
            return None, LineDistance()

        index = None
        min_result = LineDistance()
        for i in range(1, len(self._legs)):
            if self._legs[i - 1].is_procedure():
                continue
            result = self._segment_distance(pos, i)
            if result.is_valid and abs(result.distance) < abs(min_result.distance):
                min_result = result
                index = i
        return index, min_result

    def get_nearest(self, pos: Pos, max_distance_nm: float) -> NearestResult:
        """Route points within max_distance_nm of pos grouped by navaid kind."""
        nearest = NearestResult()
        if pos is None or not pos.is_valid():
            return nearest

        for i, leg in enumerate(self._legs):
            if leg.is_procedure() or not leg.position.is_valid():
                continue
            distance = pos.distance_nm_to(leg.position)
            if distance >= max_distance_nm:
                continue

            navaid = leg.navaid
            obj = NearestObject(i, leg.ident, leg.position, distance, navaid)
            if isinstance(navaid, VorRef):
                nearest.vors.append(obj)
            elif isinstance(navaid, NdbRef):
                nearest.ndbs.append(obj)
            elif isinstance(navaid, WaypointRef):
                nearest.waypoints.append(obj)
            elif isinstance(navaid, AirportRef):
                nearest.airports.append(obj)
            elif isinstance(navaid, UserpointRef):
                nearest.userpoints.append(obj)
            elif isinstance(navaid, UnresolvedRef):
                obj.ident = f"{leg.ident} (not found)"
                nearest.userpoints.append(obj)
            else:
                raise TypeError(f"Unknown navaid reference {navaid!r}")

        for objects in (nearest.vors, nearest.ndbs, nearest.waypoints, nearest.airports, nearest.userpoints):
            objects.sort(key=lambda o: o.distance_nm)
        return nearest

    # Distances ----------------------------------------------------------------
    def route_distances(self) -> Optional[RouteDistances]:
        """Distances for the active leg and position. None without an active leg."""
        if self.active_leg_index is None or self.active_pos is None or self.is_empty():
            return None

        index = min(self.active_leg_index, len(self._legs) - 1)
        active_leg = self._legs[index]
        pos = self.active_pos.pos

        geometry = None
        if active_leg.is_procedure() and len(active_leg.procedure_leg.geometry) > 2:
            geometry = active_leg.procedure_leg.geometry

        cross_track = None
        if geometry is not None:
            geometry_result = geometry.distance_to(pos)
            if geometry_result.is_along_track:
                cross_track = meter_to_nm(geometry_result.distance)
            dist_to_current = meter_to_nm(geometry_result.distance_from2)
        else:
            if self.active_leg_result.is_along_track:
                cross_track = meter_to_nm(self.active_leg_result.distance)
            dist_to_current = active_leg.position.distance_nm_to(pos)

        # Missed approach legs count only when flying the missed approach
        active_missed = active_leg.is_missed()

        from_start = 0.0
        for leg in self._legs[:index + 1]:
            if leg.is_missed() and not active_missed:
                break
            from_start += leg.distance_to

        to_dest = 0.0
        for leg in self._legs[index + 1:]:
            if not leg.is_missed() or active_missed:
                to_dest += leg.distance_to

        return RouteDistances(dist_from_start=abs(from_start - dist_to_current),
                              dist_to_dest=abs(to_dest + dist_to_current),
                              next_leg_distance=dist_to_current,
                              cross_track=cross_track)

    def _end_leg_index(self) -> int:
        """Last leg counted in the total distance."""
        index = len(self._legs) - 1
        if self._is_airport_after_arrival(index):
            index -= 1
        while index > 0 and self._legs[index].is_missed():
            index -= 1
        return index

    def _straight_position(self, index: int, base: float) -> Pos:
        """Position base nm into the straight segment ending at index."""
        length = self._legs[index].distance_to
        fraction = min(1.0, max(0.0, base / length)) if length > 0 else 1.0
        return self._legs[index - 1].position.interpolate(self._legs[index].position, fraction)

    def position_at_distance(self, dist_from_start_nm: float) -> Optional[Pos]:
        """Position along the route. None if outside of the route."""
        if self.is_empty() or dist_from_start_nm < 0.0 or dist_from_start_nm > self.total_distance_nm:
            return None

        # Leg whose distance covers the requested one. Zero length legs like
        # initial fixes inside a block never match.
        total = 0.0
        found = None
        for i in range(1, len(self._legs)):
            total += self._legs[i].distance_to
            if total > dist_from_start_nm:
                found = i
                break

        if found is None:
            # Exactly at the end
            return self._legs[self._end_leg_index()].position

        leg = self._legs[found]
        base = dist_from_start_nm - (total - leg.distance_to)

        # Route legs and gaps to the first point of a block are great circles
        proc = leg.procedure_leg
        if proc is None or leg.is_point() or proc.geometry.is_empty():
            return self._straight_position(found, base)
        return proc.geometry.interpolate(min(1.0, max(0.0, base / leg.distance_to)))

    # Top of descent -----------------------------------------------------------
    def top_of_descent_from_destination(self) -> float:
        if self.is_empty():
            return 0.0
        diff = self.flightplan.cruising_altitude_ft - self.last().position.alt_ft
        return max(0.0, diff / 1000.0 * self.config.tod_rule_nm_per_1000ft)

    def top_of_descent_from_start(self) -> float:
        if self.is_empty():
            return 0.0
        return self.total_distance_nm - self.top_of_descent_from_destination()

    def top_of_descent(self) -> Optional[Pos]:
        if self.is_empty():
            return None
        return self.position_at_distance(self.top_of_descent_from_start())

    def descent_vertical_altitude(self, dist_to_dest_nm: float) -> Optional[float]:
        """Altitude in ft on the descent path at the given distance to destination."""
        if self.is_empty() or self.config.tod_rule_nm_per_1000ft <= 0.0:
            return None
        if dist_to_dest_nm > self.top_of_descent_from_destination():
            return None
        return self.last().position.alt_ft + dist_to_dest_nm / self.config.tod_rule_nm_per_1000ft * 1000.0

    # Procedures ---------------------------------------------------------------
    def has_departure_procedure(self) -> bool:
        return self.departure_legs is not None and not self.departure_legs.is_empty()

    def has_star_procedure(self) -> bool:
        return self.star_legs is not None and not self.star_legs.is_empty()

    def has_arrival_procedure(self) -> bool:
        return self.arrival_legs is not None and not self.arrival_legs.is_empty()

    def has_transition_procedure(self) -> bool:
        return self.arrival_legs is not None and self.arrival_legs.has_transition()

    def update_procedure_legs(self, departure: Optional[ProcedureLegs] = None,
                              star: Optional[ProcedureLegs] = None,
                              arrival: Optional[ProcedureLegs] = None):
        """Replaces all procedures with the given sets and recomputes the route."""
        self.departure_legs = departure if departure is not None and not departure.is_empty() else None
        self.star_legs = star if star is not None and not star.is_empty() else None
        self.arrival_legs = arrival if arrival is not None and not arrival.is_empty() else None
        self._splice_procedure_legs()
        self.update_all()
        logger.info(f"Procedures spliced, route has {len(self)} legs.")

    def _splice_procedure_legs(self):
        assert len(self._legs) == len(self.flightplan), "Legs and flight plan entries out of sync"
        self._erase_procedure_legs(ProcedureTypes.ALL)

        self.departure_legs_offset = None
        self.star_legs_offset = None
        self.arrival_legs_offset = None

        if self.departure_legs is not None:
            assert self._legs, "Departure procedure needs a departure leg"
            self.departure_legs_offset = 1
            for i, proc_leg in enumerate(self.departure_legs):
                insert_index = 1 + i
                self._insert_procedure_leg(insert_index, proc_leg, self.departure_legs.category,
                                           self._legs[insert_index - 1])

        self.star_legs_offset = self._splice_before_destination(self.star_legs)
        self.arrival_legs_offset = self._splice_before_destination(self.arrival_legs)

        clear_procedure_properties(self.flightplan.properties, ProcedureTypes.ALL)
        extract_procedure_properties(self.flightplan.properties, self.arrival_legs,
                                     self.star_legs, self.departure_legs)

    def _splice_before_destination(self, procedure_legs: Optional[ProcedureLegs]) -> Optional[int]:
        """Inserts the legs in order before the last leg. Returns the block offset."""
        if procedure_legs is None:
            return None

        assert self._legs, "Arrival procedures need a destination leg"
        offset = len(self._legs) - 1
        for proc_leg in procedure_legs:
            prev_leg = self._legs[-2] if len(self._legs) >= 2 else None
            self._insert_procedure_leg(len(self._legs) - 1, proc_leg, procedure_legs.category, prev_leg)
        return offset

    def _insert_procedure_leg(self, index: int, proc_leg: ProcedureLeg, set_category: ProcedureTypes,
                              prev_leg: Optional[RouteLeg]):
        leg = RouteLeg.from_procedure_leg(proc_leg, variant_for(proc_leg, set_category), index, prev_leg)
        self._legs.insert(index, leg)
        self.flightplan.insert(index, self.entry_builder.build_entry(proc_leg))

    def _erase_procedure_legs(self, types: ProcedureTypes) -> List[int]:
        """Removes legs and entries of the given categories. Returns indexes in descending order."""
        indexes = [i for i in range(len(self._legs) - 1, -1, -1) if self._legs[i].matches(types)]
        for index in indexes:
            del self._legs[index]
            self.flightplan.remove(index)
        return indexes

    def clear_departure(self):
        if not self.has_departure_procedure():
            return
        self.departure_legs = None
        self.departure_legs_offset = None
        clear_procedure_properties(self.flightplan.properties, ProcedureTypes.DEPARTURE)
        removed = self._erase_procedure_legs(ProcedureTypes.DEPARTURE)
        self.update_all()
        logger.info(f"Departure procedure cleared, {len(removed)} legs removed.")

    def clear_star(self):
        if not self.has_star_procedure():
            return
        self.star_legs = None
        self.star_legs_offset = None
        clear_procedure_properties(self.flightplan.properties, ProcedureTypes.STAR)
        removed = self._erase_procedure_legs(ProcedureTypes.STAR)
        self.update_all()
        logger.info(f"STAR cleared, {len(removed)} legs removed.")

    def clear_arrival(self):
        """Clears approach, missed approach and transition."""
        if not self.has_arrival_procedure():
            return
        self.arrival_legs = None
        self.arrival_legs_offset = None
        clear_procedure_properties(self.flightplan.properties, ProcedureTypes.ARRIVAL)
        removed = self._erase_procedure_legs(ProcedureTypes.ARRIVAL)
        self.update_all()
        logger.info(f"Arrival procedure cleared, {len(removed)} legs removed.")

    def clear_transition(self):
        if not self.has_transition_procedure():
            return
        # Copy so the caller's procedure set keeps its transition
        self.arrival_legs = copy.copy(self.arrival_legs)
        self.arrival_legs.clear_transition()
        if self.arrival_legs.is_empty():
            self.arrival_legs = None
            self.arrival_legs_offset = None
        clear_procedure_properties(self.flightplan.properties, ProcedureTypes.TRANSITION)
        removed = self._erase_procedure_legs(ProcedureTypes.TRANSITION)
        self.update_all()
        logger.info(f"Transition cleared, {len(removed)} legs removed.")

    def clear_all_procedures(self):
        self.clear_arrival()
        self.clear_transition()
        self.clear_star()
        self.clear_departure()

    # Enroute editing ----------------------------------------------------------
    def _enroute_count(self) -> int:
        return sum(1 for leg in self._legs if leg.is_route())

    def insert_entry(self, index: int, entry: FlightplanEntry):
        """Inserts a flight plan entry at the given enroute index."""
        if not 0 <= index <= self._enroute_count():
            raise InvalidLegIndexError(f"Cannot insert at {index}, route has {self._enroute_count()} entries")

        self._erase_procedure_legs(ProcedureTypes.ALL)
        self._legs.insert(index, RouteLeg.from_entry(entry, index))
        self.flightplan.insert(index, entry)
        self._after_enroute_edit()

    def remove_entry(self, index: int) -> FlightplanEntry:
        """Removes the flight plan entry at the given enroute index."""
        if not 0 <= index < self._enroute_count():
            raise InvalidLegIndexError(f"Cannot remove {index}, route has {self._enroute_count()} entries")

        self._erase_procedure_legs(ProcedureTypes.ALL)
        del self._legs[index]
        entry = self.flightplan.remove(index)
        self._after_enroute_edit()
        return entry

    def _after_enroute_edit(self):
        if self._legs:
            self._splice_procedure_legs()
        self.update_all()
        # Legs moved, seed again from the last sample
        self.active_leg_index = None
        self.active_leg_result = LineDistance()

    # Recompute ----------------------------------------------------------------
    def update_all(self):
        self._update_indices()
        self._update_magvar()
        self._update_distances_and_course()
        self._update_bounding_rect()

    def _update_indices(self):
        for i, leg in enumerate(self._legs):
            leg.entry_index = i

    def _update_magvar(self):
        for leg in self._legs:
            leg.update_magvar(self.magnetic_model)
        for i, leg in enumerate(self._legs):
            leg.update_invalid_magvar(i, self._legs)

        # Without any known variation all courses are true
        self.uses_true_course = not any(leg.magvar_resolved for leg in self._legs)

    def _is_airport_after_arrival(self, index: int) -> bool:
        return (self.has_arrival_procedure() or self.has_star_procedure()) and \
            index == len(self._legs) - 1 and index < len(self.flightplan) and \
            self.flightplan.entries[index].is_airport()

    def _update_distances_and_course(self):
        self.total_distance_nm = 0.0
        prev_leg = None
        for i, leg in enumerate(self._legs):
            if self._is_airport_after_arrival(i):
                leg.distance_to = 0.0
                leg.course_to = None
                break

            leg.update_distance_and_course(i, prev_leg)
            if not leg.is_missed():
                self.total_distance_nm += leg.distance_to
            prev_leg = leg

    def _update_bounding_rect(self):
        self.bounding_rect = Rect.from_positions(leg.position for leg in self._legs)
