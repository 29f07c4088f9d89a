"""flightroute/magvar/exceptions.py"""

class MagneticModelError(Exception):
    """Raised when a magnetic model is set up with unusable data."""
    pass
