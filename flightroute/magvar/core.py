# flightroute/magvar/core.py
"""
Geomagnetic models resolving the magnetic variation (declination) at a
position. East variation is positive. A model returns None when it cannot
resolve a value so callers can fall back to neighbour values or true course.
"""
import logging
import math
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from ..geo import Pos
from .exceptions import MagneticModelError

logger = logging.getLogger(__name__)


class MagneticModel(ABC):
    """Interface of all magnetic variation sources."""

    @abstractmethod
    def magnetic_variation(self, pos: Pos) -> Optional[float]:
        """Returns the variation in degrees or None if unresolved."""


class ConstantMagneticModel(MagneticModel):
    """Returns the same variation everywhere."""

    def __init__(self, variation: float):
        self.variation = variation

    def magnetic_variation(self, pos: Pos) -> Optional[float]:
        if pos is None or not pos.is_valid():
            return None
        return self.variation


class GridMagneticModel(MagneticModel):
    """
    Declination grid sampled with bilinear interpolation.

    Args:
        grid: 2D array, rows are latitudes starting at lat_origin going north,
              columns are longitudes starting at lon_origin going east.
              NaN cells are unresolved.
        lat_step, lon_step: Grid spacing in degrees.
    """

    def __init__(self, grid, lat_step: float, lon_step: float,
                 lat_origin: float = -90.0, lon_origin: float = -180.0):
        self.grid = np.asarray(grid, dtype=float)
        if self.grid.ndim != 2 or self.grid.shape[0] < 2 or self.grid.shape[1] < 2:
            raise MagneticModelError(f"Declination grid must be 2D with at least 2x2 cells, got {self.grid.shape}")
        if lat_step <= 0 or lon_step <= 0:
            raise MagneticModelError(f"Invalid grid spacing {lat_step}/{lon_step}")

        self.lat_step = lat_step
        self.lon_step = lon_step
        self.lat_origin = lat_origin
        self.lon_origin = lon_origin
        logger.info(f"Magnetic grid loaded with {self.grid.shape[0]}x{self.grid.shape[1]} cells.")

    def magnetic_variation(self, pos: Pos) -> Optional[float]:
        if pos is None or not pos.is_valid():
            return None

        row = (pos.lat - self.lat_origin) / self.lat_step
        col = (pos.lon - self.lon_origin) / self.lon_step
        rows, cols = self.grid.shape
        if row < 0 or col < 0 or row > rows - 1 or col > cols - 1:
            return None

        r0, c0 = min(int(row), rows - 2), min(int(col), cols - 2)
        fr, fc = row - r0, col - c0
        cell = self.grid[r0:r0 + 2, c0:c0 + 2]
        if np.isnan(cell).any():
            return None

        top = cell[0, 0] * (1 - fc) + cell[0, 1] * fc
        bottom = cell[1, 0] * (1 - fc) + cell[1, 1] * fc
        value = float(top * (1 - fr) + bottom * fr)
        return value if math.isfinite(value) else None
