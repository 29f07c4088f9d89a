# flightroute/__init__.py
"""
flightroute - Flight route tracking: legs, active leg detection, procedure
splicing and distance accounting
"""

__version__ = "0.1.0"
