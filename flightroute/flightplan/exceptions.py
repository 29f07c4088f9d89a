"""flightroute/flightplan/exceptions.py"""

class FlightplanError(Exception):
    """Base exception for flight plan errors."""
    pass


class EntryBuildError(FlightplanError):
    """Raised when a flight plan entry cannot be built for a procedure leg."""
    pass
