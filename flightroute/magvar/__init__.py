"""
magvar - Magnetic variation sources for route course calculation
"""

from .core import MagneticModel, ConstantMagneticModel, GridMagneticModel
from .exceptions import MagneticModelError

__all__ = ['MagneticModel', 'ConstantMagneticModel', 'GridMagneticModel', 'MagneticModelError']
