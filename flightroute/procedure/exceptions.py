"""flightroute/procedure/exceptions.py"""

class ProcedureError(Exception):
    """Base exception for malformed procedure leg sets."""
    pass
