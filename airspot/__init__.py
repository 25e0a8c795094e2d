# airspot/__init__.py
"""Point air quality estimates, hourly trends and nearby hotspots."""
from . import calculator
from . import selector

__all__ = ["calculator", "selector"]
