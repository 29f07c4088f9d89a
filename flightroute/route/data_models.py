# flightroute/route/data_models.py
from dataclasses import dataclass, field
from typing import List, Optional

from ..geo import Pos
from .navaid import NavaidRef


@dataclass
class RouteDistances:
    """Distances in nm for the current position on the active leg."""
    dist_from_start: float
    dist_to_dest: float
    next_leg_distance: float
    # Positive right of track, None when not along track
    cross_track: Optional[float] = None


@dataclass
class NearestObject:
    route_index: int
    ident: str
    position: Pos
    distance_nm: float
    navaid: NavaidRef


@dataclass
class NearestResult:
    """Route points near a position grouped by kind, each list sorted by distance."""
    vors: List[NearestObject] = field(default_factory=list)
    ndbs: List[NearestObject] = field(default_factory=list)
    waypoints: List[NearestObject] = field(default_factory=list)
    airports: List[NearestObject] = field(default_factory=list)
    userpoints: List[NearestObject] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.vors or self.ndbs or self.waypoints or self.airports or self.userpoints)
