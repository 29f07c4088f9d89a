"""flightroute/route/exceptions.py"""

class RouteError(Exception):
    """Base exception for route errors."""
    pass


class InvalidLegIndexError(RouteError, IndexError):
    """Raised when an edit refers to a leg index outside of the route."""
    pass
