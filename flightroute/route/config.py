# flightroute/route/config.py
from dataclasses import dataclass

from .constants import RouteConstants


@dataclass
class RouteConfig:
    """User adjustable route settings."""
    tod_rule_nm_per_1000ft: float = RouteConstants.TOD_RULE_NM_PER_1000FT
    nearest_seed_radius_nm: float = RouteConstants.NEAREST_SEED_RADIUS_NM
    min_ground_speed_kts: float = RouteConstants.MIN_GROUND_SPEED_KTS
